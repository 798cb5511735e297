"""Statement parsers feeding the amendment engine.

The engine only needs one capability: parse the next top-level statement of
a source text starting at an offset, in a permissive mode where syntax
problems come back as ``"error"`` nodes instead of exceptions.

``TreeSitterJuliaParser`` provides it with tree-sitter and the Julia grammar.
The file is parsed once; each call hands out the next top-level node,
converted into the generic ``SyntaxNode`` tree with line markers before every
block statement.

Broken text at the end of the file is told apart by what it leaves open: a
block still waiting for its ``end`` comes back as an ``"incomplete"`` node, an
unclosed bracket or missing operand as a ``"premature end of input"`` error,
and stray closers as ``"invalid syntax"``.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from jlcov.amend.lineindex import LineIndex
from jlcov.amend.syntax import ERROR_KIND, INCOMPLETE_KIND, LineMarker, SyntaxNode
from jlcov.core.logging import get_logger

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

log = get_logger(__name__)

PREMATURE_EOF = "premature end of input"


class StatementParser(Protocol):
    """Parses one top-level statement at a time."""

    def parse_statement(self, text: str, pos: int, version: str) -> tuple[Any, int]:
        """Parse the statement starting at ``pos``.

        Args:
            text: Whole source text.
            pos: Offset (``str`` index) where parsing starts.
            version: Syntax version tag, e.g. ``"1.10"``.

        Returns:
            ``(node, new_pos)``. ``node`` is a ``SyntaxNode`` or ``None`` when
            only whitespace and comments remain; ``new_pos`` is the offset just
            past the consumed text. Line markers in ``node`` are relative to
            the line containing ``pos``.
        """
        ...


COMMENT_TYPES = frozenset({"line_comment", "block_comment", "comment"})

# Block constructs: named children on the opening row, up to the first `;` or
# newline, form the header; the remaining ones are statements
BLOCK_KINDS: dict[str, str] = {
    "function_definition": "function",
    "macro_definition": "macro",
    "do_clause": "do",
    "if_statement": "if",
    "elseif_clause": "elseif",
    "else_clause": "else",
    "for_statement": "for",
    "while_statement": "while",
    "let_statement": "let",
    "try_statement": "try",
    "catch_clause": "catch",
    "finally_clause": "finally",
    "compound_statement": "block",
    "quote_statement": "quote",
    "module_definition": "module",
    "struct_definition": "struct",
}

# Blocks whose header is a call signature: only the signature (and any
# parameter or where parts on the opening line) precedes the body
SIGNATURE_BLOCKS = frozenset({"function_definition", "macro_definition"})
SIGNATURE_PARTS = frozenset({"parameter_list", "type_parameter_list", "where_clause"})

# Tokens ending a header; anything after them on the same line is a statement
TERMINATOR_TOKENS = frozenset({";", "\n"})

# Clauses that do not start a statement of their own
UNMARKED_CLAUSES = frozenset({"else_clause", "catch_clause", "finally_clause"})

ASSIGNMENT_TYPES = frozenset({"assignment", "short_function_definition"})

# Keywords opening a block closed by `end`; inside brackets `for`, `if` and
# `begin` belong to comprehensions and indexing instead
BLOCK_KEYWORDS = frozenset(
    {
        "function",
        "macro",
        "do",
        "if",
        "for",
        "while",
        "let",
        "try",
        "begin",
        "quote",
        "module",
        "baremodule",
        "struct",
        "abstract",
        "primitive",
    }
)
OPENING_BRACKETS = frozenset({"(", "[", "{"})
CLOSING_BRACKETS = frozenset({")", "]", "}"})

EXPRESSION_KINDS: dict[str, str] = {
    "call_expression": "call",
    "where_expression": "where",
    "typed_expression": "::",
}


def _is_comment(node: Node) -> bool:
    return node.type in COMMENT_TYPES


def _syntax_children(node: Node) -> list[Node]:
    """Named children plus zero-width MISSING tokens, without comments."""
    return [
        child
        for child in node.children
        if (child.is_named or child.is_missing) and not _is_comment(child)
    ]


def _leaves(nodes: list[Node]) -> Iterator[Node]:
    """Tokens below ``nodes`` in document order."""
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        if node.child_count == 0:
            yield node
        else:
            stack.extend(reversed(node.children))


def _unclosed_state(nodes: list[Node]) -> str | None:
    """Classify broken trailing statements by what the end of text left open.

    Returns ``"block"`` when a block keyword still lacks its ``end``,
    ``"expression"`` when only brackets or other closing tokens are missing,
    and None when the text holds a stray closer or a gap before the last
    token, i.e. a real syntax error.
    """
    blocks = brackets = 0
    missing: list[Node] = []
    last_end = 0
    for token in _leaves(nodes):
        if token.is_missing:
            missing.append(token)
            continue
        last_end = token.end_byte
        kind = token.type
        if kind in OPENING_BRACKETS:
            brackets += 1
        elif kind in CLOSING_BRACKETS:
            brackets -= 1
        elif brackets == 0 and kind in BLOCK_KEYWORDS:
            blocks += 1
        elif brackets == 0 and kind == "end":
            blocks -= 1
        if blocks < 0 or brackets < 0:
            return None

    if any(token.start_byte < last_end for token in missing):
        return None
    if blocks > 0 or any(token.type == "end" for token in missing):
        return "block"
    if brackets > 0 or missing:
        return "expression"
    return None


@dataclass(slots=True)
class _ParsedText:
    text: str
    data: bytes
    tree: Tree
    index: LineIndex
    statements: list[Node]
    ends: list[int]  # str offset just past each statement

    def char_offset(self, byte_offset: int) -> int:
        if len(self.data) == len(self.text):
            return byte_offset
        return len(self.data[:byte_offset].decode("utf-8", errors="ignore"))


class _Converter:
    """Builds the generic tree for one fragment."""

    def __init__(self, base_row: int) -> None:
        self.base_row = base_row

    def line(self, node: Node) -> int:
        return node.start_point[0] - self.base_row + 1

    def convert(self, node: Node) -> SyntaxNode:
        if node.is_missing:
            return SyntaxNode(ERROR_KIND, [f"missing {node.type}"])
        if node.type == "ERROR":
            return SyntaxNode(ERROR_KIND, [self.convert(c) for c in _syntax_children(node)])
        if node.type in BLOCK_KINDS:
            return self._block(node)
        if node.type == "arrow_function_expression":
            return self._arrow(node)
        if node.type in ASSIGNMENT_TYPES:
            return self._assignment(node)

        kind = EXPRESSION_KINDS.get(node.type, node.type)
        children = _syntax_children(node)
        if not children:
            text = node.text.decode("utf-8", errors="replace") if node.text else ""
            return SyntaxNode(kind, [text])
        return SyntaxNode(kind, [self.convert(c) for c in children])

    def _statements(self, nodes: list[Node]) -> SyntaxNode:
        body: list[Any] = []
        for stmt in nodes:
            if stmt.type not in UNMARKED_CLAUSES:
                body.append(LineMarker(self.line(stmt)))
            body.append(self.convert(stmt))
        return SyntaxNode("block", body)

    def _block(self, node: Node) -> SyntaxNode:
        opening_row = node.start_point[0]
        has_signature = node.type in SIGNATURE_BLOCKS
        header: list[Node] = []
        statements: list[Node] = []
        terminated = False
        for child in node.children:
            if not (child.is_named or child.is_missing):
                if child.type in TERMINATOR_TOKENS:
                    terminated = True
                continue
            if _is_comment(child):
                continue
            in_header = not (statements or terminated) and child.start_point[0] == opening_row
            if in_header and header:
                # Signature blocks and do clauses take a single header node
                if has_signature:
                    in_header = child.type in SIGNATURE_PARTS
                elif node.type == "do_clause":
                    in_header = False
            if in_header:
                header.append(child)
            else:
                statements.append(child)
        return SyntaxNode(
            BLOCK_KINDS[node.type],
            [
                SyntaxNode("header", [self.convert(c) for c in header]),
                self._statements(statements),
            ],
        )

    def _arrow(self, node: Node) -> SyntaxNode:
        children = _syntax_children(node)
        if len(children) < 2:
            return SyntaxNode("->", [self.convert(c) for c in children])
        return SyntaxNode("->", [self.convert(children[0]), self._statements(children[1:])])

    def _assignment(self, node: Node) -> SyntaxNode:
        children = [c for c in _syntax_children(node) if c.type != "operator"]
        if len(children) < 2:
            return SyntaxNode("=", [self.convert(c) for c in children])
        return SyntaxNode("=", [self.convert(children[0]), self._statements(children[1:])])


@dataclass
class TreeSitterJuliaParser:
    """Julia statement parser backed by tree-sitter-julia.

    The grammar accepts the syntax of every Julia release, so the version tag
    is only logged. Results are cached for the most recently parsed text.
    """

    _parser: Any = field(default=None, repr=False)
    _parsed: _ParsedText | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        try:
            import tree_sitter
            import tree_sitter_julia
        except ImportError as e:
            raise ImportError(
                "tree-sitter-julia is required. Install with: pip install tree-sitter-julia"
            ) from e

        self._parser = tree_sitter.Parser(tree_sitter.Language(tree_sitter_julia.language()))

    def _parse(self, text: str, version: str) -> _ParsedText:
        if self._parsed is not None and self._parsed.text == text:
            return self._parsed

        log.debug("parsing_source", chars=len(text), syntax_version=version)
        data = text.encode("utf-8")
        tree = self._parser.parse(data)
        statements = _syntax_children(tree.root_node)
        parsed = _ParsedText(
            text=text,
            data=data,
            tree=tree,
            index=LineIndex(text),
            statements=statements,
            ends=[],
        )
        parsed.ends = [parsed.char_offset(stmt.end_byte) for stmt in statements]
        self._parsed = parsed
        return parsed

    def parse_statement(self, text: str, pos: int, version: str) -> tuple[Any, int]:
        parsed = self._parse(text, version)
        i = bisect_right(parsed.ends, pos)
        if i >= len(parsed.statements):
            return None, len(text)

        stmt = parsed.statements[i]
        new_pos = parsed.ends[i]
        base_row = parsed.index.line_at(pos) - 1

        if stmt.type == "ERROR" or stmt.is_missing:
            # Recovery may split the broken construct over several top-level
            # nodes, so the rest of the text is classified as a whole
            state = _unclosed_state(parsed.statements[i:])
        elif stmt.has_error and i == len(parsed.statements) - 1:
            state = _unclosed_state([stmt])
            if state is None:
                return _Converter(base_row).convert(stmt), new_pos
        else:
            return _Converter(base_row).convert(stmt), new_pos

        if state == "block":
            return SyntaxNode(INCOMPLETE_KIND, ["end"]), len(text)
        if state == "expression":
            return SyntaxNode(ERROR_KIND, [PREMATURE_EOF]), len(text)
        return SyntaxNode(ERROR_KIND, ["invalid syntax"]), new_pos
