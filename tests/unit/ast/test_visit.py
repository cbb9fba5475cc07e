#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_visit.py
"""Tests for in-place tree rewriting with visit()."""

import pytest

from incmark.ast import (
    KEEP,
    REMOVE,
    Comment,
    Document,
    Element,
    Replace,
    Text,
    extract_nodes,
    is_element,
    iter_nodes,
    visit,
)
from incmark.exceptions import InvariantViolationError, TransformError, VisitorContractError


def el(tag, *children):
    """Build an element whose string children become Text nodes."""
    return Element(tag, {}, [Text(child) if isinstance(child, str) else child for child in children])


def tags(nodes):
    return [node.tag for node in nodes]


@pytest.mark.unit
class TestVisitTraversal:
    """Traversal order and matching."""

    def test_visits_all_nodes_in_preorder(self):
        doc = Document(nodes=[el("h1", "Hello"), el("p", "World")])
        visited = []

        visit(doc, lambda node: True, lambda node: visited.append(node))

        assert len(visited) == 4
        assert visited[0] == el("h1", "Hello")
        assert visited[1] == Text("Hello")
        assert visited[2] == el("p", "World")
        assert visited[3] == Text("World")

    def test_only_matching_nodes_are_transformed(self):
        doc = Document(nodes=[el("h1", "Title"), el("p", "Paragraph"), el("div", "Div")])
        visited = []

        visit(doc, lambda node: is_element(node, "p"), lambda node: visited.append(node.tag))

        assert visited == ["p"]

    def test_empty_tree(self):
        doc = Document()
        visited = []
        visit(doc, lambda node: True, lambda node: visited.append(node))
        assert visited == []
        assert doc.nodes == []

    def test_text_children_visited_in_order(self):
        doc = Document(nodes=[el("p", "Text 1", "Text 2")])
        visited = []

        visit(doc, lambda node: True, lambda node: visited.append(node))

        assert visited == [el("p", "Text 1", "Text 2"), Text("Text 1"), Text("Text 2")]

    def test_keep_sentinel_keeps_node(self):
        doc = Document(nodes=[el("p", "x")])
        visit(doc, lambda node: True, lambda node: KEEP)
        assert doc.nodes == [el("p", "x")]


@pytest.mark.unit
class TestVisitReplace:
    """Replacement outcomes."""

    def test_bare_node_replaces(self):
        doc = Document(nodes=[el("h1", "Hello"), el("p", "World")])

        visit(doc, lambda node: is_element(node, "h1"), lambda node: el("h2", "Modified"))

        assert doc.nodes == [el("h2", "Modified"), el("p", "World")]

    def test_replace_wrapper(self):
        doc = Document(nodes=[el("h1", "Hello")])
        visit(doc, lambda node: is_element(node, "h1"), lambda node: Replace(el("h2", "Hello")))
        assert doc.nodes == [el("h2", "Hello")]

    def test_replacing_text(self):
        doc = Document(nodes=[el("p", "Old text")])

        visit(doc, lambda node: node == Text("Old text"), lambda node: Text("New text"))

        assert doc.nodes[0].children[0] == Text("New text")

    def test_replacement_is_not_rematched_but_its_children_are(self):
        doc = Document(nodes=[el("div", "inner")])
        visited = []

        def transform(node):
            visited.append(node)
            if node == el("div", "inner"):
                return el("section", el("span", "nested"))
            return None

        visit(doc, lambda node: True, transform)

        # The replacement section is skipped, its span and text are visited
        assert visited == [el("div", "inner"), el("span", "nested"), Text("nested")]
        assert doc.nodes == [el("section", el("span", "nested"))]

    def test_replacement_with_document_is_rejected(self):
        doc = Document(nodes=[el("p", "x")])
        with pytest.raises(VisitorContractError):
            visit(doc, lambda node: True, lambda node: Document())


@pytest.mark.unit
class TestVisitRemove:
    """Removal outcomes and the removal-safety guarantee."""

    def test_false_removes(self):
        doc = Document(
            nodes=[el("h1", "Title"), el("p", "Keep this"), el("div", "Remove this"), el("span", "Keep this too")]
        )

        visit(doc, lambda node: is_element(node, "div"), lambda node: False)

        assert doc.nodes == [el("h1", "Title"), el("p", "Keep this"), el("span", "Keep this too")]

    def test_remaining_siblings_visited_after_removal(self):
        doc = Document(
            nodes=[el("h1", "Title"), el("p", "P 1"), el("div", "Remove me"), el("p", "P 2"), el("span", "Span")]
        )
        visited = []

        def transform(node):
            visited.append(node.tag)
            return REMOVE if node.tag == "div" else None

        visit(doc, lambda node: isinstance(node, Element), transform)

        assert visited == ["h1", "p", "div", "p", "span"]
        assert tags(doc.nodes) == ["h1", "p", "p", "span"]

    def test_nested_removal(self):
        doc = Document(nodes=[el("div", el("p", "Keep"), el("span", "Remove"), el("p", "Keep too"))])

        visit(doc, lambda node: is_element(node, "span"), lambda node: False)

        assert doc.nodes[0].children == [el("p", "Keep"), el("p", "Keep too")]

    def test_remaining_nested_siblings_visited_after_removal(self):
        doc = Document(
            nodes=[el("div", el("p", "Before"), el("span", "Remove"), el("p", "After"), el("strong", "Also after"))]
        )
        visited = []

        def transform(node):
            visited.append(node.tag)
            return False if node.tag == "span" else None

        visit(doc, lambda node: isinstance(node, Element), transform)

        assert visited == ["div", "p", "span", "p", "strong"]
        assert tags(doc.nodes[0].children) == ["p", "p", "strong"]

    def test_multiple_removals(self):
        doc = Document(
            nodes=[
                el("h1", "Title"),
                el("div", "Remove 1"),
                el("p", "Keep"),
                el("div", "Remove 2"),
                el("span", "Keep"),
                el("div", "Remove 3"),
            ]
        )

        visit(doc, lambda node: is_element(node, "div"), lambda node: False)

        assert tags(doc.nodes) == ["h1", "p", "span"]

    def test_consecutive_removals(self):
        doc = Document(nodes=[el("div", "1"), el("div", "2"), el("div", "3"), el("p", "keep")])
        visit(doc, lambda node: is_element(node, "div"), lambda node: REMOVE)
        assert tags(doc.nodes) == ["p"]

    def test_remove_everything(self):
        doc = Document(nodes=[el("p", "Remove"), el("span", "Remove"), el("div", "Remove")])
        visit(doc, lambda node: True, lambda node: False)
        assert doc.nodes == []

    def test_removed_node_children_not_visited(self):
        doc = Document(nodes=[el("div", "hidden"), el("p", "shown")])
        visited = []

        def transform(node):
            visited.append(node)
            return False if is_element(node, "div") else None

        visit(doc, lambda node: True, transform)

        assert Text("hidden") not in visited
        assert Text("shown") in visited

    def test_text_removal_while_visiting(self):
        doc = Document(nodes=[el("p", "Text 1", "Text 2", "Text 3")])
        visited = []

        def transform(node):
            visited.append(node)
            return False if node == Text("Text 2") else None

        visit(doc, lambda node: True, transform)

        assert len(visited) == 4
        # visited[0] is the live paragraph, already without "Text 2"
        assert visited[0] == el("p", "Text 1", "Text 3")
        assert visited[1:] == [Text("Text 1"), Text("Text 2"), Text("Text 3")]
        assert doc.nodes[0].children == [Text("Text 1"), Text("Text 3")]

    def test_removing_text(self):
        doc = Document(nodes=[el("p", "Keep", "Remove", "Keep too")])
        visit(doc, lambda node: node == Text("Remove"), lambda node: False)
        assert doc.nodes[0].children == [Text("Keep"), Text("Keep too")]

    def test_deep_nesting_with_removal(self):
        doc = Document(nodes=[el("div", el("section", el("p", "Before"), el("span", "Remove"), el("p", "After")))])
        visited = []

        def transform(node):
            visited.append(node.tag)
            return False if node.tag == "span" else None

        visit(doc, lambda node: isinstance(node, Element), transform)

        assert visited == ["div", "section", "p", "span", "p"]
        assert tags(doc.nodes[0].children[0].children) == ["p", "p"]

    def test_very_deep_tree(self):
        depth = 5000
        innermost = el("div", "leaf")
        innermost.children.append(Comment("drop"))
        root = innermost
        for _ in range(depth - 1):
            root = Element("div", {}, [root, Comment("drop")])
        doc = Document(nodes=[root])
        visited = []

        def transform(node):
            if isinstance(node, Comment):
                return REMOVE
            visited.append(node.tag)
            return None

        visit(doc, lambda node: not isinstance(node, Text), transform)

        remaining = list(iter_nodes(doc))
        assert len(visited) == depth
        assert not any(isinstance(node, Comment) for node in remaining)
        assert len(remaining) == depth + 1
        assert innermost.children == [Text("leaf")]

    def test_remove_and_replace_in_same_tree(self):
        doc = Document(nodes=[el("h1", "Title"), el("p", "Remove"), el("div", "Replace"), el("span", "Keep")])

        def transform(node):
            if node.tag == "p":
                return False
            if node.tag == "div":
                return el("section", "Replaced")
            return None

        visit(doc, lambda node: isinstance(node, Element), transform)

        assert doc.nodes == [el("h1", "Title"), el("section", "Replaced"), el("span", "Keep")]

    def test_comments_can_be_removed(self):
        doc = Document(nodes=[Comment("x"), el("p", "y"), Comment("z")])
        visit(doc, lambda node: isinstance(node, Comment), lambda node: REMOVE)
        assert doc.nodes == [el("p", "y")]


@pytest.mark.unit
class TestVisitContract:
    """Contract violations fail fast."""

    @pytest.mark.parametrize("outcome", [True, 0, "remove", ["p", {}], {"tag": "p"}])
    def test_unrecognized_outcome_raises(self, outcome):
        doc = Document(nodes=[el("p", "x")])
        with pytest.raises(VisitorContractError) as exc_info:
            visit(doc, lambda node: True, lambda node: outcome)
        assert exc_info.value.outcome == outcome

    def test_contract_error_is_transform_error(self):
        doc = Document(nodes=[el("p", "x")])
        with pytest.raises(TransformError):
            visit(doc, lambda node: True, lambda node: "bad")

    def test_leaf_with_children_raises(self):
        leaf = Text("x")
        leaf.children = [Text("y")]  # type: ignore[attr-defined]
        doc = Document(nodes=[leaf])
        with pytest.raises(InvariantViolationError):
            visit(doc, lambda node: False, lambda node: None)

    def test_non_node_in_tree_raises(self):
        doc = Document(nodes=[Element("p", {}, ["raw string"])])  # type: ignore[list-item]
        with pytest.raises(InvariantViolationError):
            visit(doc, lambda node: True, lambda node: None)


@pytest.mark.unit
class TestIterNodes:
    """Read-only traversal helpers."""

    def test_iter_nodes_preorder(self, sample_document):
        kinds = [type(node).__name__ for node in iter_nodes(sample_document)]
        assert kinds == ["Element", "Text", "Element", "Text", "Element", "Text", "Comment", "Element", "Element", "Text"]

    def test_iter_nodes_from_element_includes_root(self):
        root = el("p", "a")
        assert list(iter_nodes(root)) == [root, Text("a")]

    def test_extract_nodes(self, sample_document):
        paragraphs = extract_nodes(sample_document, lambda node: is_element(node, "p"))
        assert len(paragraphs) == 2
        assert paragraphs[0] is sample_document.nodes[1]
