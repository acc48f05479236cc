import pytest

from ldexplorer.models import Edge, EdgeKey, Node
from ldexplorer.sink import DataSet, DuplicateIdentityError


def test_add_rejects_existing_identity():
    view = DataSet()
    original = Node(id="ex:A", label="A")

    assert view.add(original) == "ex:A"
    with pytest.raises(DuplicateIdentityError):
        view.add(Node(id="ex:A", label="copy"))

    assert view.get("ex:A") is original
    assert len(view) == 1


def test_remove_accepts_item_or_key():
    view = DataSet()
    edge = Edge(source="ex:A", predicate="ex:p", target="ex:B", label="p")
    other = Edge(source="ex:B", predicate="ex:p", target="ex:A", label="p")
    view.add(edge)
    view.add(other)

    assert view.remove(EdgeKey("ex:A", "ex:p", "ex:B")) is edge
    assert view.remove(other) is other
    assert view.remove(other) is None
    assert view.remove("ex:missing") is None
    assert len(view) == 0


def test_membership_and_enumeration_keep_insertion_order():
    view = DataSet()
    nodes = [Node(id=f"ex:{name}") for name in "CAB"]
    for node in nodes:
        view.add(node)

    assert view.get_ids() == ["ex:C", "ex:A", "ex:B"]
    assert list(view) == nodes
    assert "ex:A" in view
    assert nodes[2] in view
    assert Node(id="ex:Z") not in view
    assert "ex:Z" not in view


def test_iteration_is_safe_while_removing():
    view = DataSet()
    for name in "AB":
        view.add(Node(id=f"ex:{name}"))

    for node in view:
        view.remove(node)

    assert len(view) == 0


def test_custom_identity_function():
    view = DataSet(key=lambda item: item["id"])
    view.add({"id": 1, "label": "one"})

    with pytest.raises(DuplicateIdentityError):
        view.add({"id": 1, "label": "uno"})
    view.clear()
    assert view.get_ids() == []
