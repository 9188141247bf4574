import json
from typing import Iterable, List, Tuple


def format_order(order: Iterable[str]) -> List[Tuple[int, str]]:
    """Pair each item with its 1-based position."""
    return [(i, name) for i, name in enumerate(order, start=1)]


def render_text(order: Iterable[str]) -> str:
    return '\n'.join(f"{i}\t{name}" for i, name in format_order(order))


def render_json(order: Iterable[str]) -> str:
    return json.dumps(
        [{'index': i, 'name': name} for i, name in format_order(order)],
        indent=2,
    )
