# File: src/dscoverage/imports.py
"""Import edge extraction from TypeScript / JavaScript source.

Source text is parsed with tree-sitter and walked once. Three edge shapes are
recorded:

- static declarations: ``import x from "X"`` and ``import "X"``
- dynamic imports: ``import("X")``
- CommonJS requires: ``require("X")`` where the callee is the bare identifier

Only plain string literal specifiers produce edges. Template literals and
computed expressions are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from dscoverage.errors import ParseFailed
from dscoverage.result import Failure, Result, Success


TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())
TSX = Language(tree_sitter_typescript.language_tsx())

PLAIN_SUFFIXES = frozenset({".ts", ".mts", ".cts"})
SOURCE_SUFFIXES = frozenset({".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".mts", ".cts"})


class FileKind(Enum):
    """Grammar selection for a source file."""

    PLAIN = "plain"  # TypeScript without markup
    MARKUP = "markup"  # TSX / JSX, also used for plain JavaScript

    @classmethod
    def from_path(cls, path: str | PurePath) -> FileKind:
        suffix = PurePath(path).suffix.lower()
        return cls.PLAIN if suffix in PLAIN_SUFFIXES else cls.MARKUP

    @property
    def language(self) -> Language:
        return TYPESCRIPT if self is FileKind.PLAIN else TSX


@dataclass(frozen=True)
class ImportEdge:
    """One import occurrence inside a source file.

    Attributes:
        specifier: Module specifier text without quotes
        line: 1-based line of the import statement or call
        is_dynamic: True for ``import("X")``
        is_require: True for ``require("X")``
    """

    specifier: str
    line: int
    is_dynamic: bool = False
    is_require: bool = False


_SIMPLE_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v", "0": "\0"}


def _decode_escape(sequence: str) -> str:
    """Cooked value of one escape sequence such as ``\\n``, ``\\x41`` or ``\\u{1F600}``."""
    body = sequence[1:]
    if body.startswith("u{"):
        return chr(int(body[2:-1], 16))
    if body.startswith(("u", "x")) and len(body) > 1:
        return chr(int(body[1:], 16))
    if body.startswith(("\r", "\n", "\u2028", "\u2029")):
        return ""  # line continuation
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.isdigit():
        return chr(int(body, 8))  # legacy octal
    return body


def _string_literal(node: Node | None) -> str | None:
    """Return the cooked value of a plain string literal node, else None."""
    if node is None or node.type != "string":
        return None
    parts: list[str] = []
    for child in node.named_children:
        if child.text is None:
            continue
        text = child.text.decode("utf-8")
        parts.append(_decode_escape(text) if child.type == "escape_sequence" else text)
    return "".join(parts)


def _first_argument(call: Node) -> Node | None:
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return None
    return next((child for child in arguments.named_children if child.type != "comment"), None)


def _first_error_line(root: Node) -> int | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    return None


def _edge_from_node(node: Node) -> ImportEdge | None:
    line = node.start_point[0] + 1

    if node.type == "import_statement":
        specifier = _string_literal(node.child_by_field_name("source"))
        return ImportEdge(specifier=specifier, line=line) if specifier is not None else None

    if node.type == "call_expression":
        callee = node.child_by_field_name("function")
        if callee is None:
            return None
        if callee.type == "import":
            specifier = _string_literal(_first_argument(node))
            return ImportEdge(specifier=specifier, line=line, is_dynamic=True) if specifier is not None else None
        if callee.type == "identifier" and callee.text == b"require":
            specifier = _string_literal(_first_argument(node))
            return ImportEdge(specifier=specifier, line=line, is_require=True) if specifier is not None else None

    return None


def extract_imports(source_text: str, file_kind: FileKind) -> Result[tuple[ImportEdge, ...], ParseFailed]:
    """Parse source text and return its import edges in source order.

    Args:
        source_text: Full file content
        file_kind: Grammar to parse with

    Returns:
        Success(edges) or Failure(ParseFailed) when the source is malformed
    """
    parser = Parser(file_kind.language)
    tree = parser.parse(source_text.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        line = _first_error_line(root)
        where = f" near line {line}" if line is not None else ""
        return Failure(ParseFailed(message=f"syntax error{where}", line=line))

    edges: list[ImportEdge] = []
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        edge = _edge_from_node(node)
        if edge is not None:
            edges.append(edge)
        stack.extend(reversed(node.children))

    return Success(tuple(edges))


__all__ = [
    "FileKind",
    "ImportEdge",
    "SOURCE_SUFFIXES",
    "extract_imports",
]
