"""Readiness evaluation over the package relation graph.

A package is ready when nothing blocks it. Every relation row that still
exists is unresolved and blocks its requester until it is resolved, whatever
the state of the required package. The traversal still walks everything
reachable from the package so that cycles are reported instead of being
silently answered, and so callers can show the full chain of blockers.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from pkgtrack.errors.exceptions import CyclicDependencyError

_VISITING = 1
_DONE = 2


@dataclass
class ReadinessResult:
    package_id: int
    ready: bool
    blocked_by: list[int] = field(default_factory=list)
    transitive_blockers: list[int] = field(default_factory=list)


def find_cycle(package_id: int, graph: Mapping[int, Sequence[int]]) -> list[int] | None:
    """Return the first cycle reachable from ``package_id`` as a closed path, or None.

    Iterative depth-first search with a visiting/done colouring, so deep chains
    never hit the recursion limit.
    """
    state: dict[int, int] = {package_id: _VISITING}
    path = [package_id]
    stack = [iter(graph.get(package_id, ()))]

    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            state[path.pop()] = _DONE
            continue
        seen = state.get(child)
        if seen == _VISITING:
            start = path.index(child)
            return path[start:] + [child]
        if seen == _DONE:
            continue
        state[child] = _VISITING
        path.append(child)
        stack.append(iter(graph.get(child, ())))

    return None


def evaluate_readiness(package_id: int, graph: Mapping[int, Sequence[int]]) -> ReadinessResult:
    """Compute readiness of ``package_id`` from a request -> [required] mapping.

    Raises:
        CyclicDependencyError: a cycle is reachable from the package.
    """
    cycle = find_cycle(package_id, graph)
    if cycle is not None:
        raise CyclicDependencyError(package_id, cycle)

    direct = sorted(set(graph.get(package_id, ())))

    reachable: set[int] = set()
    pending = list(direct)
    while pending:
        node = pending.pop()
        if node in reachable:
            continue
        reachable.add(node)
        pending.extend(graph.get(node, ()))

    return ReadinessResult(
        package_id=package_id,
        ready=not direct,
        blocked_by=direct,
        transitive_blockers=sorted(reachable),
    )
