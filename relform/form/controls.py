"""Control tree describing the shape of the form.

Each node is a field, a group of controls or a list of controls, addressed
by its dotted path. The tree carries no values; touched/dirty flags are
kept by the form as sets of paths.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields, is_dataclass

from relform.form.model import FormState

__all__ = ["ControlNode", "FieldNode", "GroupNode", "ListNode", "build_tree", "iter_paths"]


@dataclass(frozen=True, slots=True)
class FieldNode:
    path: str


@dataclass(frozen=True, slots=True)
class GroupNode:
    path: str
    children: tuple[ControlNode, ...]


@dataclass(frozen=True, slots=True)
class ListNode:
    path: str
    items: tuple[ControlNode, ...]


ControlNode = FieldNode | GroupNode | ListNode


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def _node_for(path: str, value: object) -> ControlNode:
    if isinstance(value, tuple):
        return ListNode(
            path=path,
            items=tuple(_node_for(_join(path, str(i)), item) for i, item in enumerate(value)),
        )
    if is_dataclass(value) and not isinstance(value, type):
        return GroupNode(
            path=path,
            children=tuple(
                _node_for(_join(path, f.name), getattr(value, f.name)) for f in fields(value)
            ),
        )
    return FieldNode(path=path)


def build_tree(state: FormState) -> GroupNode:
    """Build the control tree for ``state``; the root group has path ``""``."""
    root = _node_for("", state)
    assert isinstance(root, GroupNode)
    return root


def iter_paths(node: ControlNode) -> Iterator[str]:
    """Yield the path of every control below ``node`` (root excluded), depth first."""
    match node:
        case FieldNode(path=path):
            yield path
        case GroupNode(path=path, children=children):
            if path:
                yield path
            for child in children:
                yield from iter_paths(child)
        case ListNode(path=path, items=items):
            yield path
            for item in items:
                yield from iter_paths(item)
