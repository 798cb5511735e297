"""Generic syntax tree consumed by the amendment engine.

Parser bindings convert whatever concrete tree they produce into this small
tagged-variant form, modelled on Julia's own ``Expr``:

- ``SyntaxNode(kind, args)``: ``kind`` is a short tag (``"function"``,
  ``"->"``, ``"="``, ``"call"``, ``"block"``, ``"error"``, ...), ``args`` holds
  child nodes, line markers and plain leaf values (strings).
- ``LineMarker(line)``: precedes each statement of a block; ``line`` is
  1-based and relative to the line on which parsing of the fragment started.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

# Kinds that always introduce a function body after their first argument
FUNCTION_KINDS = frozenset({"function", "->", "do"})

# Wrappers that may surround the call on the left of a short definition
SIGNATURE_WRAPPERS = frozenset({"where", "::"})

ERROR_KIND = "error"
INCOMPLETE_KIND = "incomplete"


@dataclass(slots=True)
class SyntaxNode:
    """Interior node of the generic tree."""

    kind: str
    args: list[Any] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class LineMarker:
    """Position marker placed before a statement."""

    line: int


def is_function_expression(node: Any) -> bool:
    """Check whether ``node`` defines a function or anonymous function.

    True for ``function ... end`` blocks, ``x -> ...`` lambdas, ``do`` blocks
    and short definitions ``f(x) = ...`` whose call may be wrapped in any
    number of ``where`` or ``::`` nodes. A ``where`` node counts when the
    expression it qualifies does.
    """
    if not isinstance(node, SyntaxNode):
        return False
    if node.kind == "where":
        return bool(node.args) and is_function_expression(node.args[0])
    if node.kind in FUNCTION_KINDS:
        return True
    if node.kind == "=" and node.args:
        lhs = node.args[0]
        while isinstance(lhs, SyntaxNode) and lhs.kind in SIGNATURE_WRAPPERS and lhs.args:
            lhs = lhs.args[0]
        return isinstance(lhs, SyntaxNode) and lhs.kind == "call"
    return False


def walk(node: Any) -> Iterator[Any]:
    """Yield ``node`` and everything below it in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, SyntaxNode):
            stack.extend(reversed(current.args))


def has_embedded_errors(node: Any) -> bool:
    """Check whether any node in the tree is an error node."""
    return any(isinstance(n, SyntaxNode) and n.kind == ERROR_KIND for n in walk(node))


def find_error_line(node: Any) -> int | None:
    """Relative line of the nearest marker preceding the first error node.

    Returns None when there is no error or no marker precedes it.
    """
    last_line: int | None = None
    for current in walk(node):
        if isinstance(current, LineMarker):
            last_line = current.line
        elif isinstance(current, SyntaxNode) and current.kind == ERROR_KIND:
            return last_line
    return None
