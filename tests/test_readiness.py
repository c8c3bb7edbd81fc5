"""Tests for the pure readiness evaluator.

Covers:
- a package with no relations is ready
- any outgoing relation blocks, even when the required package is itself ready
- transitive blockers are collected without duplicates (diamond shapes)
- cycles reachable from the package raise CyclicDependencyError with the path
- long chains do not hit the recursion limit
"""

import pytest

from pkgtrack.errors.exceptions import CyclicDependencyError
from pkgtrack.services.readiness import evaluate_readiness, find_cycle


def test_no_relations_is_ready():
    result = evaluate_readiness(1, {})
    assert result.ready is True
    assert result.blocked_by == []
    assert result.transitive_blockers == []


def test_unresolved_relation_blocks_even_if_required_is_ready():
    result = evaluate_readiness(1, {1: [2], 2: []})
    assert result.ready is False
    assert result.blocked_by == [2]


def test_required_package_with_own_blockers_is_not_ready():
    graph = {1: [2], 2: [3]}
    assert evaluate_readiness(2, graph).ready is False
    assert evaluate_readiness(3, graph).ready is True


def test_transitive_blockers_on_diamond():
    graph = {1: [2, 3], 2: [4], 3: [4], 4: []}
    result = evaluate_readiness(1, graph)
    assert result.blocked_by == [2, 3]
    assert result.transitive_blockers == [2, 3, 4]


def test_diamond_is_not_a_cycle():
    assert find_cycle(1, {1: [2, 3], 2: [4], 3: [4]}) is None


def test_two_node_cycle_raises_for_both_members():
    graph = {1: [2], 2: [1]}
    for package_id in (1, 2):
        with pytest.raises(CyclicDependencyError) as exc_info:
            evaluate_readiness(package_id, graph)
        assert exc_info.value.package_id == package_id
        assert exc_info.value.cycle[0] == exc_info.value.cycle[-1]
        assert set(exc_info.value.cycle) == {1, 2}


def test_cycle_downstream_is_reported():
    graph = {1: [2], 2: [3], 3: [4], 4: [2]}
    with pytest.raises(CyclicDependencyError) as exc_info:
        evaluate_readiness(1, graph)
    assert exc_info.value.cycle == [2, 3, 4, 2]
    assert exc_info.value.details == {"package_id": 1, "cycle": [2, 3, 4, 2]}


def test_unreachable_cycle_is_ignored():
    graph = {1: [], 5: [6], 6: [5]}
    assert evaluate_readiness(1, graph).ready is True


def test_long_chain_does_not_recurse():
    depth = 20_000
    graph = {i: [i + 1] for i in range(depth)}
    result = evaluate_readiness(0, graph)
    assert result.ready is False
    assert len(result.transitive_blockers) == depth
