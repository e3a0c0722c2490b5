"""Tests for XML root element associations."""

import pytest

from mimekit.mime import InvalidArgumentError, RootXmlAssociation

SVG_NS = "http://www.w3.org/2000/svg"


@pytest.mark.parametrize(("namespace", "local_name"), [(None, None), ("", ""), (None, ""), ("", None)])
def test_both_empty_is_rejected(namespace, local_name) -> None:
    with pytest.raises(InvalidArgumentError):
        RootXmlAssociation(None, namespace, local_name)


def test_local_name_only() -> None:
    association = RootXmlAssociation(None, "", "root")

    assert association.matches(None, "root")
    assert association.matches("", "root")
    assert not association.matches("anything", "root")
    assert not association.matches(None, "other")


def test_namespace_only() -> None:
    association = RootXmlAssociation(None, SVG_NS, None)

    assert association.matches(SVG_NS, None)
    assert association.matches(SVG_NS, "")
    assert not association.matches(SVG_NS, "svg")
    assert not association.matches(None, None)


def test_namespace_and_local_name() -> None:
    association = RootXmlAssociation(None, SVG_NS, "svg")

    assert association.matches(SVG_NS, "svg")
    assert not association.matches(SVG_NS, "SVG")
    assert not association.matches(None, "svg")
    assert not association.matches("urn:other", "svg")


def test_equality_ignores_owner() -> None:
    first = RootXmlAssociation(None, SVG_NS, "svg")
    second = RootXmlAssociation(object(), SVG_NS, "svg")  # type: ignore[arg-type]

    assert first == second
    assert hash(first) == hash(second)
