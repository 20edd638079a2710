"""Tests for ForestBuilder."""

import pytest
from gtdtree.builder import ForestBuilder
from gtdtree.core import DEFAULT_TITLE, TaskTree


class TestForestBuilder:
    def test_empty_build(self):
        tree = ForestBuilder().build()

        assert tree == TaskTree()

    def test_add_root(self):
        tree = ForestBuilder().add_root("Root", node_id="root").build()

        assert tree.roots[0].id == "root"
        assert tree.roots[0].title == "Root"

    def test_generated_ids(self):
        tree = ForestBuilder().add_root("A").add_root("B").build()

        assert tree.roots[0].id != tree.roots[1].id

    def test_default_title(self):
        tree = ForestBuilder().add_root().build()
        assert tree.roots[0].title == DEFAULT_TITLE

    def test_add_node(self):
        tree = (
            ForestBuilder()
            .add_root("Root", node_id="root")
            .add_node("Child", node_id="child")
            .build()
        )

        assert len(tree.roots[0].children) == 1
        assert tree.roots[0].children[0].id == "child"

    def test_add_child(self):
        tree = (
            ForestBuilder()
            .add_root("Root")
            .add_child("Child 1")
            .add_child("Child 2")
            .build()
        )

        assert [c.title for c in tree.roots[0].children] == ["Child 1", "Child 2"]

    def test_add_node_moves_into_it(self):
        tree = (
            ForestBuilder()
            .add_root("Root")
            .add_node("Child", node_id="child")
            .add_child("Grandchild")
            .build()
        )

        assert tree.find("child").children[0].title == "Grandchild"

    def test_up(self):
        tree = (
            ForestBuilder()
            .add_root("Root")
            .add_node("Child")
            .up()
            .add_child("Sibling")
            .build()
        )

        assert len(tree.roots[0].children) == 2

    def test_up_at_root_stays_at_root(self):
        tree = (
            ForestBuilder()
            .add_root("Root")
            .up()
            .add_child("Child")
            .build()
        )

        assert len(tree.roots[0].children) == 1

    def test_root_returns_to_current_root(self):
        builder = (
            ForestBuilder()
            .add_root("Root", node_id="root")
            .add_node("A")
            .add_node("B")
            .root()
        )

        assert builder.current_id == "root"

    def test_add_root_after_nesting(self):
        tree = (
            ForestBuilder()
            .add_root("One")
            .add_node("Child")
            .add_root("Two")
            .add_child("Other")
            .build()
        )

        assert [r.title for r in tree.roots] == ["One", "Two"]
        assert tree.roots[1].children[0].title == "Other"

    def test_child_without_root_rejected(self):
        with pytest.raises(ValueError):
            ForestBuilder().add_child("Orphan")

    def test_duplicate_id_rejected(self):
        builder = ForestBuilder().add_root("A", node_id="same")

        with pytest.raises(ValueError):
            builder.add_child("B", node_id="same")

    def test_build_twice_gives_equal_trees(self):
        builder = ForestBuilder().add_root("A", node_id="a").add_child("B", node_id="b")
        assert builder.build() == builder.build()
