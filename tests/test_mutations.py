"""Tests for structure-sharing forest mutations."""

import pytest
from gtdtree.builder import ForestBuilder
from gtdtree.core import DEFAULT_TITLE, TaskNode, TaskTree, create_node
from gtdtree.mutations import (
    append_child,
    append_child_at,
    append_root,
    insert_sibling_after,
    rename_node,
)
from gtdtree.queries import find_at


def sample_tree():
    return (
        ForestBuilder()
        .add_root("Home", node_id="home")
            .add_node("Kitchen", node_id="kitchen")
                .add_child("Dishes", node_id="dishes")
            .up()
            .add_child("Garden", node_id="garden")
        .add_root("Work", node_id="work")
            .add_child("Email", node_id="email")
        .build()
    )


class TestAppendRoot:
    def test_empty_forest(self):
        node = create_node("A")
        tree = append_root(TaskTree(), node)

        assert tree.roots == (node,)

    def test_appends_at_end(self):
        tree = sample_tree()
        node = create_node("New")

        new_tree = append_root(tree, node)

        assert [r.id for r in new_tree.roots] == ["home", "work", node.id]
        assert new_tree.roots[0] is tree.roots[0]
        assert new_tree.roots[1] is tree.roots[1]

    def test_input_unchanged(self):
        tree = sample_tree()
        append_root(tree, create_node("New"))

        assert len(tree.roots) == 2


class TestAppendChild:
    def test_append_to_root(self):
        tree = sample_tree()

        new_tree = append_child(tree, "work", "Calls")

        work = new_tree.find("work")
        assert [c.title for c in work.children] == ["Email", "Calls"]

    def test_append_deep(self):
        tree = sample_tree()

        new_tree = append_child(tree, "dishes", "Rinse")

        assert find_at(new_tree, "home", "kitchen", "dishes").children[0].title == "Rinse"

    def test_default_title(self):
        new_tree = append_child(sample_tree(), "garden")
        assert new_tree.find("garden").children[0].title == DEFAULT_TITLE

    def test_preset_node(self):
        node = TaskNode(id="preset", title="Preset")

        new_tree = append_child(sample_tree(), "garden", node=node)

        assert new_tree.find("garden").children == (node,)

    def test_fresh_child_is_leaf_with_new_id(self):
        tree = sample_tree()

        new_tree = append_child(tree, "garden", "Weed")

        child = new_tree.find("garden").children[0]
        assert child.children == ()
        assert tree.find(child.id) is None

    def test_structural_sharing(self):
        tree = sample_tree()

        new_tree = append_child(tree, "dishes", "Rinse")

        home, work = tree.roots
        new_home, new_work = new_tree.roots
        # Untouched branches are shared by reference
        assert new_work is work
        assert new_home.children[1] is home.children[1]
        # Nodes on the path are rebuilt
        assert new_home is not home
        assert new_home.children[0] is not home.children[0]

    def test_input_unchanged(self):
        tree = sample_tree()
        before = TaskTree(tree.roots)

        append_child(tree, "dishes", "Rinse")

        assert tree == before
        assert tree.find("dishes").children == ()

    def test_missing_parent_is_noop(self):
        tree = sample_tree()

        new_tree = append_child(tree, "nonexistent", "x")

        assert new_tree == tree
        assert new_tree is tree


class TestAppendChildAt:
    def test_append_by_path(self):
        new_tree = append_child_at(sample_tree(), ("home", "kitchen"), "Oven")

        kitchen = find_at(new_tree, "home", "kitchen")
        assert [c.title for c in kitchen.children] == ["Dishes", "Oven"]

    def test_append_to_root_by_path(self):
        new_tree = append_child_at(sample_tree(), ["work"], "Calls")
        assert new_tree.find("work").children[-1].title == "Calls"

    def test_wrong_path_is_noop(self):
        tree = sample_tree()

        assert append_child_at(tree, ("work", "kitchen"), "x") is tree
        assert append_child_at(tree, ("home", "missing"), "x") is tree
        assert append_child_at(tree, (), "x") is tree

    def test_structural_sharing(self):
        tree = sample_tree()

        new_tree = append_child_at(tree, ("home", "garden"), "Weed")

        assert new_tree.roots[1] is tree.roots[1]
        assert new_tree.roots[0].children[0] is tree.roots[0].children[0]


class TestInsertSiblingAfter:
    def _abc_tree(self):
        return (
            ForestBuilder()
            .add_root("P", node_id="p")
                .add_child("A", node_id="a")
                .add_child("B", node_id="b")
                .add_child("C", node_id="c")
            .build()
        )

    def test_ordering_preserved(self):
        tree = self._abc_tree()
        node = TaskNode(id="new", title="New")

        new_tree = insert_sibling_after(tree, "p", "b", node=node)

        assert [c.id for c in new_tree.find("p").children] == ["a", "b", "new", "c"]

    def test_after_last(self):
        new_tree = insert_sibling_after(self._abc_tree(), "p", "c", "D")

        assert [c.title for c in new_tree.find("p").children] == ["A", "B", "C", "D"]

    def test_siblings_are_shared(self):
        tree = self._abc_tree()

        new_tree = insert_sibling_after(tree, "p", "a", "X")

        old = tree.find("p").children
        new = new_tree.find("p").children
        assert new[0] is old[0]
        assert new[2] is old[1]
        assert new[3] is old[2]

    def test_root_sequence(self):
        tree = sample_tree()

        new_tree = insert_sibling_after(tree, None, "home", "Errands")

        assert [r.title for r in new_tree.roots] == ["Home", "Errands", "Work"]
        assert new_tree.roots[0] is tree.roots[0]
        assert new_tree.roots[2] is tree.roots[1]

    def test_deep_parent(self):
        new_tree = insert_sibling_after(sample_tree(), "kitchen", "dishes", "Sweep")

        assert [c.title for c in new_tree.find("kitchen").children] == ["Dishes", "Sweep"]

    def test_missing_anchor_is_noop(self):
        tree = self._abc_tree()

        assert insert_sibling_after(tree, "p", "nonexistent") is tree

    def test_anchor_under_other_parent_is_noop(self):
        tree = sample_tree()

        assert insert_sibling_after(tree, "work", "dishes") is tree
        assert insert_sibling_after(tree, None, "kitchen") is tree

    def test_missing_parent_is_noop(self):
        tree = sample_tree()
        assert insert_sibling_after(tree, "nonexistent", "dishes") == tree


class TestRenameNode:
    def test_rename_root(self):
        new_tree = rename_node(sample_tree(), "work", "Office")
        assert new_tree.find("work").title == "Office"

    def test_rename_deep_keeps_ids_and_order(self):
        tree = sample_tree()

        new_tree = rename_node(tree, "dishes", "Dishes 2")

        assert new_tree.find("dishes").title == "Dishes 2"
        assert [n.id for n in new_tree.walk()] == [n.id for n in tree.walk()]
        assert [n.title for n in new_tree.walk() if n.id != "dishes"] == [
            n.title for n in tree.walk() if n.id != "dishes"
        ]

    def test_rename_keeps_children_shared(self):
        tree = sample_tree()

        new_tree = rename_node(tree, "kitchen", "Cooking")

        assert new_tree.find("kitchen").children is tree.find("kitchen").children
        assert new_tree.roots[1] is tree.roots[1]

    def test_rename_to_empty(self):
        new_tree = rename_node(sample_tree(), "garden", "")
        assert new_tree.find("garden").title == ""

    def test_missing_is_noop(self):
        tree = sample_tree()

        new_tree = rename_node(tree, "nonexistent", "x")

        assert new_tree == tree

    def test_old_tree_stays_valid(self):
        tree = sample_tree()

        rename_node(tree, "home", "House")

        assert tree.find("home").title == "Home"


class TestScenario:
    def test_build_from_empty(self):
        tree = TaskTree()
        a = create_node("A")

        tree = append_root(tree, a)
        assert len(tree.roots) == 1
        assert tree.roots[0].title == "A"
        assert tree.roots[0].children == ()

        tree = append_child(tree, a.id, "B")
        a_now = tree.find(a.id)
        assert [c.title for c in a_now.children] == ["B"]
        b = a_now.children[0]

        renamed = rename_node(tree, b.id, "B2")
        assert renamed.roots[0].id == a.id
        assert renamed.roots[0].children[0].id == b.id
        assert renamed.roots[0].children[0].title == "B2"
        assert len(renamed.roots[0].children) == 1


@pytest.mark.parametrize(
    "mutate",
    [
        lambda t: append_child(t, "nonexistent", "x"),
        lambda t: rename_node(t, "nonexistent", "x"),
        lambda t: insert_sibling_after(t, "home", "nonexistent"),
        lambda t: insert_sibling_after(t, None, "nonexistent"),
        lambda t: append_child_at(t, ("nonexistent",), "x"),
    ],
)
def test_missing_target_returns_equal_tree(mutate):
    tree = sample_tree()
    assert mutate(tree) == tree


class TestPresetIdClash:
    def test_append_child_rejects_existing_id(self):
        tree = sample_tree()

        with pytest.raises(ValueError, match="'home'"):
            append_child(tree, "garden", node=TaskNode(id="home", title="Dup"))

    def test_append_root_rejects_existing_id(self):
        with pytest.raises(ValueError):
            append_root(sample_tree(), TaskNode(id="work", title="Dup"))

    def test_append_child_at_rejects_existing_id(self):
        with pytest.raises(ValueError):
            append_child_at(sample_tree(), ("home", "kitchen"), node=TaskNode(id="email"))

    def test_insert_sibling_rejects_existing_id(self):
        with pytest.raises(ValueError):
            insert_sibling_after(sample_tree(), None, "home", node=TaskNode(id="dishes"))

    def test_clash_inside_preset_subtree(self):
        node = TaskNode(id="new", children=(TaskNode(id="kitchen"),))

        with pytest.raises(ValueError, match="'kitchen'"):
            append_child(sample_tree(), "work", node=node)

    def test_repeated_id_within_preset_subtree(self):
        node = TaskNode(id="new", children=(TaskNode(id="x"), TaskNode(id="x")))

        with pytest.raises(ValueError):
            append_root(sample_tree(), node)

    def test_fresh_preset_subtree_is_accepted(self):
        node = TaskNode(id="new", children=(TaskNode(id="x"),))

        new_tree = append_child(sample_tree(), "garden", node=node)

        assert new_tree.find("x") is node.children[0]
        assert [n.id for n in new_tree.walk()].count("x") == 1
