"""Depth-first dependency resolution with cycle detection."""
import enum
import logging
from typing import Dict, Iterable, List, Optional


class CycleError(ValueError):
    """Raised when resolution reaches a node that is still being visited.

    ``cycle`` holds the path from the first entry of the repeated node
    through to its repetition, e.g. ``['a', 'b', 'a']``.
    """

    def __init__(self, cycle: List[str]):
        self.cycle = list(cycle)
        super().__init__(f"dependency cycle detected: {' -> '.join(self.cycle)}")


class VisitState(enum.Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


def resolve(graph, roots: Optional[Iterable[str]] = None) -> List[str]:
    """Return every node reachable from ``roots`` after all of its prerequisites.

    Args:
        graph: Anything exposing ``keys()`` and ``prerequisites_of(item)``.
        roots: Nodes to start from, visited in the given order. If None,
            all keys of the graph are used, sorted lexicographically.

    Returns:
        The resolved order as a new list.

    Raises:
        CycleError: If a cycle is reachable from the roots. No partial
            order is returned.
    """
    if roots is None:
        roots = sorted(graph.keys())
    else:
        roots = list(roots)
    logging.debug(f"Resolving {len(roots)} root(s)", extra={'roots': roots})

    state: Dict[str, VisitState] = {}
    order: List[str] = []
    for root in roots:
        _visit(graph, root, state, order)
    return order


def _visit(graph, root: str, state: Dict[str, VisitState], order: List[str]) -> None:
    if state.get(root, VisitState.UNVISITED) is VisitState.DONE:
        return

    # Each frame is (node, its prerequisites, index of the next one to visit).
    # The nodes of the frames on the stack form the current path.
    state[root] = VisitState.IN_PROGRESS
    stack = [(root, graph.prerequisites_of(root), 0)]
    path = [root]

    while stack:
        node, prereqs, index = stack[-1]
        if index < len(prereqs):
            stack[-1] = (node, prereqs, index + 1)
            child = prereqs[index]
            child_state = state.get(child, VisitState.UNVISITED)
            if child_state is VisitState.DONE:
                continue
            if child_state is VisitState.IN_PROGRESS:
                start = path.index(child)
                raise CycleError(path[start:] + [child])
            state[child] = VisitState.IN_PROGRESS
            stack.append((child, graph.prerequisites_of(child), 0))
            path.append(child)
        else:
            stack.pop()
            path.pop()
            state[node] = VisitState.DONE
            order.append(node)
            logging.debug(f"Resolved {node}", extra={'node': node})
