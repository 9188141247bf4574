from typing import Dict, Iterable, List, Mapping, Optional, Set

from depsort.core.resolver import resolve


class DependencyGraph:
    def __init__(self):
        # Node -> List of Prerequisites, in declaration order.
        # A prerequisite that is never a key is an implicit leaf.
        self.prerequisites: Dict[str, List[str]] = {}
        self._nodes: Set[str] = set()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> "DependencyGraph":
        graph = cls()
        for name, prereqs in mapping.items():
            graph.add_node(name, prereqs)
        return graph

    def add_node(self, name: str, prerequisites: Iterable[str] = ()):
        self.prerequisites.setdefault(name, [])
        self._nodes.add(name)
        for prereq in prerequisites:
            self.add_edge(name, prereq)

    def add_edge(self, item: str, prerequisite: str):
        prereqs = self.prerequisites.setdefault(item, [])
        if prerequisite not in prereqs:
            prereqs.append(prerequisite)
        self._nodes.add(item)
        self._nodes.add(prerequisite)

    def keys(self) -> Set[str]:
        return set(self.prerequisites)

    def nodes(self) -> Set[str]:
        return set(self._nodes)

    def prerequisites_of(self, item: str) -> List[str]:
        return list(self.prerequisites.get(item, ()))

    def get_execution_order(self, roots: Optional[Iterable[str]] = None) -> List[str]:
        return resolve(self, roots)

    def __contains__(self, item: object) -> bool:
        return item in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
