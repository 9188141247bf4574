"""Graph document loader for JSON and YAML files."""
import json
from pathlib import Path
from typing import Any, List, Mapping

import yaml

from depsort.core.dependency_graph import DependencyGraph


class GraphFormatError(ValueError):
    """Raised when a decoded graph document has the wrong shape."""


def load_graph(path: str) -> DependencyGraph:
    """Load a dependency graph from a JSON or YAML file.

    Files ending in ``.json`` are decoded as JSON, everything else as YAML.

    Args:
        path: Path to the graph document.

    Returns:
        DependencyGraph instance

    Raises:
        FileNotFoundError: If the path doesn't exist or is not a regular file
        GraphFormatError: If the document is not a mapping of lists
        UnicodeDecodeError: If the file is not UTF-8
        json.JSONDecodeError / yaml.YAMLError: If the file can't be decoded
    """
    graph_path = Path(path)
    if not graph_path.is_file():
        raise FileNotFoundError(f"Graph file not found: {path}")

    with open(graph_path, encoding='utf-8') as f:
        text = f.read()

    if graph_path.suffix.lower() == '.json':
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    return parse_graph(data)


def parse_graph(data: Any) -> DependencyGraph:
    """Build a graph from a decoded ``{item: [prerequisites]}`` document."""
    if data is None:
        return DependencyGraph()
    if not isinstance(data, Mapping):
        raise GraphFormatError(
            f"graph must be a mapping of item to prerequisites, got {type(data).__name__}"
        )

    graph = DependencyGraph()
    for name, prereqs in data.items():
        if not isinstance(name, str):
            raise GraphFormatError(f"item names must be strings, got {name!r}")
        graph.add_node(name, _prerequisite_list(name, prereqs))
    return graph


def _prerequisite_list(name: str, value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise GraphFormatError(f"prerequisites of {name!r} must be a list")
    for prereq in value:
        if not isinstance(prereq, str):
            raise GraphFormatError(
                f"prerequisites of {name!r} must be strings, got {prereq!r}"
            )
    return value
