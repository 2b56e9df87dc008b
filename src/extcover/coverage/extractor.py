"""Function extent extraction from Go source via Tree-sitter.

Positions are reported in the Go coverage profile convention: 1-based line,
1-based byte column, end position just past the closing brace (what
``go/token`` returns for ``FuncDecl.End()``). Tree-sitter points are 0-based
(row, byte column) with an exclusive end, so both components shift by one.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

import tree_sitter
import tree_sitter_go

from extcover.core.errors import SourceParseError, SourceResolutionError
from extcover.core.logging import get_logger
from extcover.coverage.models import FunctionExtent, SourcePosition

log = get_logger("coverage.extractor")


def _position(point: Any) -> SourcePosition:
    return SourcePosition(point[0] + 1, point[1] + 1)


def _first_error(node: Any) -> Any | None:
    """Depth-first search for the first ERROR or MISSING node."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


@dataclass
class FuncVisitor:
    """Collects function extents from a parsed Go file.

    Dispatches on node kind: declarations become extents, the file node is
    descended into, everything else (comments, types, vars, imports) is
    ignored. Function literals live inside declarations and are never
    reached.
    """

    funcs: list[FunctionExtent] = field(default_factory=list)

    def visit(self, node: Any) -> None:
        handler: Callable[[FuncVisitor, Any], None] | None = self._handlers.get(node.type)
        if handler is not None:
            handler(self, node)

    def _visit_source_file(self, node: Any) -> None:
        for child in node.named_children:
            self.visit(child)

    def _visit_func_decl(self, node: Any) -> None:
        name_node = node.child_by_field_name("name")
        name = name_node.text.decode("utf-8") if name_node is not None else ""
        self.funcs.append(
            FunctionExtent(
                name=name,
                start=_position(node.start_point),
                end=_position(node.end_point),
            )
        )

    _handlers: ClassVar[dict[str, Callable[[FuncVisitor, Any], None]]] = {
        "source_file": _visit_source_file,
        "function_declaration": _visit_func_decl,
        "method_declaration": _visit_func_decl,
    }


@dataclass
class GoFuncParser:
    """Tree-sitter Go parser producing FunctionExtents.

    Not thread-safe: give each worker its own instance.

    Usage::

        parser = GoFuncParser()
        extents = parser.find_funcs(Path("handler.go"))
    """

    _parser: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser(tree_sitter.Language(tree_sitter_go.language()))

    def parse_source(self, content: bytes, *, path: str = "<source>") -> list[FunctionExtent]:
        """Extract function extents from Go source bytes.

        Raises:
            SourceParseError: If the source has any syntax error.
        """
        tree = self._parser.parse(content)
        root = tree.root_node
        if root.has_error:
            bad = _first_error(root) or root
            line, column = _position(bad.start_point)
            raise SourceParseError.syntax(path, line, column)

        visitor = FuncVisitor()
        visitor.visit(root)
        return visitor.funcs

    def find_funcs(self, path: Path) -> list[FunctionExtent]:
        """Parse a Go file and return its function extents in declaration order.

        Raises:
            SourceResolutionError: If the file cannot be read.
            SourceParseError: If the file is not valid Go.
        """
        try:
            content = path.read_bytes()
        except OSError as e:
            raise SourceResolutionError.unreadable(str(path), str(e)) from e

        funcs = self.parse_source(content, path=str(path))
        log.debug("funcs_extracted", path=str(path), count=len(funcs))
        return funcs


def find_funcs(path: Path) -> list[FunctionExtent]:
    """Convenience wrapper around GoFuncParser.find_funcs."""
    return GoFuncParser().find_funcs(path)
