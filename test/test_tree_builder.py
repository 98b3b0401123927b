import pytest

from splitarchitect.config import BuildConfig
from splitarchitect.parser import parse_splits
from splitarchitect.reconstruction.exceptions import (
    EmptyInputError,
    InconsistentSplitError,
    LeafUniverseMismatchError,
)
from splitarchitect.reconstruction.tree_builder import (
    TreeBuilder,
    build_tree,
    reconstruct,
)
from splitarchitect.split_matrix import is_laminar


def local_labels(nodes):
    return [node.local_membership for node in nodes]


class TestScenarios:
    def test_scenario_a(self, scenario_a_records):
        result = reconstruct(scenario_a_records)
        branch_1, branch_2 = result

        assert result.is_complete
        assert str(result.root_split) == "ba/cde"
        assert branch_1.local_membership == ["a"]
        assert local_labels(branch_1.children) == [["b"]]
        assert branch_2.local_membership == ["c"]
        assert local_labels(branch_2.children) == [["e"], ["d"]]

        labels = sorted(
            node.label for node in result.nodes() if node.label is not None
        )
        assert labels == ["a", "b", "c", "d", "e"]
        assert set(result.leaf_universe) == set(labels)

    def test_single_split(self):
        result = reconstruct(["a/b"])
        root_a, root_b = result.roots

        assert root_a.local_membership == ["a"]
        assert root_b.local_membership == ["b"]
        assert not root_a.children and not root_b.children
        assert result.processed == []
        assert result.is_complete

    def test_original_case_2(self, original_case_2_records):
        root_a, root_b = reconstruct(original_case_2_records).roots

        assert root_a.local_membership == ["A"]
        (bd,) = root_a.children
        assert bd.local_membership == ["B"]
        assert local_labels(bd.children) == [["D"]]

        assert root_b.local_membership == ["C"]
        ef, g = root_b.children
        assert ef.local_membership == ["F"]
        assert local_labels(ef.children) == [["E"]]
        assert g.local_membership == ["G"]

    def test_path_of_three_vertices_is_consistent(self):
        # a/bc and b/ac are the two edges of the path b-c-a
        result = reconstruct(["a/bc", "b/ac"])
        root_a, root_b = result.roots

        assert result.is_complete
        assert root_a.local_membership == ["b"]
        assert root_b.local_membership == ["c"]
        assert local_labels(root_b.children) == [["a"]]


class TestOrdering:
    def test_order_splits_is_stable_ascending(self, scenario_a_records):
        splits = parse_splits(scenario_a_records)

        ordered = TreeBuilder.order_splits(splits)

        assert [split.source for split in ordered] == [
            "b/acde",
            "bace/d",
            "bacd/e",
            "ba/cde",
        ]

    def test_tied_splits_give_reproducible_sibling_order(self):
        records = ["a/bcdef", "b/acdef", "abc/def", "e/abcdf", "f/abcde"]

        first = reconstruct(records)
        second = reconstruct(records)

        # Ties are inserted in reverse input order
        assert local_labels(first.roots[0].children) == [["b"], ["a"]]
        assert local_labels(first.roots[1].children) == [["f"], ["e"]]
        assert local_labels(second.roots[0].children) == local_labels(
            first.roots[0].children
        )
        assert local_labels(second.roots[1].children) == local_labels(
            first.roots[1].children
        )

    def test_last_of_equally_balanced_splits_becomes_root(self):
        result = reconstruct(["abc/def", "ab/cdef", "abd/cef"])

        assert str(result.root_split) == "abd/cef"
        assert result.root_split.index == 2


class TestResultGuarantees:
    @pytest.mark.parametrize(
        "records_fixture", ["labeled_tree_records", "phylogenetic_tree_records"]
    )
    def test_complete_input(self, request, records_fixture):
        records = request.getfixturevalue(records_fixture)
        result = reconstruct(records, label_separator=",")
        nodes = result.nodes()
        universe = set(result.leaf_universe)

        assert result.is_complete
        assert len(result.processed) == len(records) - 1

        # at most one local label per node, one labeled node per leaf
        assert all(len(node.local_membership) <= 1 for node in nodes)
        assert sum(1 for node in nodes if len(node.local_membership) == 1) == len(
            universe
        )
        # unlabeled nodes are branch points
        for node in nodes:
            if not node.local_membership:
                assert len(node.children) >= 2

        # root branches partition the universe
        root_a, root_b = result.roots
        assert not root_a.subtree_labels() & root_b.subtree_labels()
        assert root_a.subtree_labels() | root_b.subtree_labels() == universe

        # full memberships form a laminar family
        assert is_laminar([node.full_membership for node in nodes])

        # local membership is always inside full membership
        for node in nodes:
            assert node.full_membership.contains_all(node.local_membership)

    def test_phylogenetic_tree_structure(self, phylogenetic_tree_records):
        root_a, root_b = reconstruct(phylogenetic_tree_records, label_separator=",").roots

        # root split is u2-u3: D,E | A,B,C
        assert set(root_a.full_membership) == {"A", "B", "C"}
        assert root_a.local_membership == []
        assert [set(child.full_membership) for child in root_a.children] == [
            {"A", "B"},
            {"C"},
        ]
        assert root_b.local_membership == []
        assert sorted(child.label for child in root_b.children) == ["D", "E"]


class TestErrors:
    def test_empty_input(self):
        with pytest.raises(EmptyInputError):
            build_tree([])
        with pytest.raises(ValueError):
            TreeBuilder().build([])

    def test_inconsistent_split_is_reported_and_skipped(self):
        splits = parse_splits(["ab/cd", "ac/bd"])

        result = build_tree(splits)
        root_a, root_b = result.roots

        assert not result.is_complete
        assert len(result.errors) == 1
        error = result.errors[0]
        assert isinstance(error, InconsistentSplitError)
        assert error.split is splits[0]
        assert error.candidate is splits[0].side_b
        assert result.skipped == [splits[0]]
        # tree left untouched by the failed split
        assert root_a.local_membership == ["a", "c"]
        assert root_b.local_membership == ["b", "d"]
        assert not root_a.children and not root_b.children

    def test_processing_continues_after_inconsistency(self):
        result = reconstruct(["ab/cd", "ac/bd", "a/bcd"])

        assert len(result.errors) == 1
        assert [split.source for split in result.processed] == ["a/bcd"]
        assert result.roots[0].local_membership == ["c"]

    def test_raise_policy_aborts(self):
        config = BuildConfig(on_inconsistency="raise")
        with pytest.raises(InconsistentSplitError) as excinfo:
            reconstruct(["ab/cd", "ac/bd"], config=config)
        assert excinfo.value.split.source == "ab/cd"

    def test_leaf_universe_mismatch_is_reported(self):
        result = reconstruct(["ab/cd", "a/bc"])

        assert not result.is_complete
        (error,) = result.errors
        assert isinstance(error, LeafUniverseMismatchError)
        assert error.split.source == "a/bc"
        assert sorted(error.expected.labels - error.actual.labels) == ["d"]
        assert str(result.root_split) == "ab/cd"
        assert result.roots[0].children == []

    def test_leaf_universe_reference_is_the_most_common_one(self):
        result = reconstruct(["a/bc", "ab/cd", "a/bcd", "d/abc"])
        root_a, root_b = result.roots

        (error,) = result.errors
        assert isinstance(error, LeafUniverseMismatchError)
        assert error.split.source == "a/bc"
        assert set(error.expected) == {"a", "b", "c", "d"}
        assert str(result.root_split) == "ab/cd"
        assert [split.source for split in result.processed] == ["d/abc", "a/bcd"]
        assert root_a.local_membership == ["b"]
        assert local_labels(root_a.children) == [["a"]]
        assert root_b.local_membership == ["c"]
        assert local_labels(root_b.children) == [["d"]]

    def test_leaf_universe_mismatch_raises_under_raise_policy(self):
        config = BuildConfig(on_inconsistency="raise")
        with pytest.raises(LeafUniverseMismatchError):
            reconstruct(["ab/cd", "a/bc"], config=config)

    def test_leaf_universe_check_can_be_disabled(self):
        config = BuildConfig(check_leaf_universe=False)
        result = reconstruct(["ab/cd", "a/bc"], config=config)

        assert result.is_complete
        assert local_labels(result.roots[0].children) == [["a"]]

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            BuildConfig(on_inconsistency="ignore")
