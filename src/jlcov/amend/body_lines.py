"""Collect the lines that lie inside function bodies."""

from typing import Any

from jlcov.amend.syntax import LineMarker, SyntaxNode, is_function_expression


def function_body_lines(node: Any) -> list[int]:
    """Relative line numbers of every statement inside a function body.

    Walks the whole tree; once inside a function expression (named function,
    lambda, ``do`` block or short definition) every line marker counts,
    including those of nested definitions. The first argument of a function
    expression is its signature and is skipped.
    """
    lines: list[int] = []
    stack: list[tuple[Any, bool]] = [(node, False)]
    while stack:
        current, in_function = stack.pop()
        if isinstance(current, LineMarker):
            if in_function:
                lines.append(current.line)
            continue
        if not isinstance(current, SyntaxNode):
            continue

        args = current.args
        if current.kind != "where" and is_function_expression(current):
            # Signature lines are never part of the body
            children = [(arg, True) for arg in args[1:]]
        else:
            children = [(arg, in_function) for arg in args]
        stack.extend(reversed(children))
    return lines
