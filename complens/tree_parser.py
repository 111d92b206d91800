"""
Tree-sitter front end for component sources.

Picks a grammar from the file extension, parses, and turns tree-sitter's
error recovery into explicit diagnostics: a tree containing ERROR or MISSING
nodes is reported as a parse failure and discarded.
"""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree

from .config import ComplensError

logger = logging.getLogger(__name__)

# Upper bound on diagnostics kept per file; broken files can produce hundreds
MAX_DIAGNOSTICS = 20

TYPED_EXTENSIONS = {".ts", ".tsx", ".mts", ".cts"}
MARKUP_EXTENSIONS = {".tsx", ".jsx"}


class ParseError(ComplensError):
    """Raised when the tree-sitter binding itself fails on a source."""

    def __init__(self, file_path: Path, language: str, error: Exception):
        self.file_path = file_path
        self.language = language
        self.original_error = error
        super().__init__(f"Failed to parse {file_path} as {language}: {error}")


@dataclass(frozen=True)
class Dialect:
    """Syntax features enabled for a file."""

    markup: bool
    typed: bool

    @classmethod
    def for_path(cls, file_path: str | Path) -> "Dialect":
        suffix = Path(file_path).suffix.lower()
        return cls(markup=suffix in MARKUP_EXTENSIONS, typed=suffix in TYPED_EXTENSIONS)

    @property
    def grammar(self) -> str:
        if self.typed:
            return "tsx" if self.markup else "typescript"
        # The javascript grammar accepts JSX unconditionally
        return "javascript"


@dataclass
class ParseOutcome:
    tree: Tree | None
    grammar: str
    diagnostics: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.tree is not None


_LANGUAGES: dict[str, Language] = {}
_LANGUAGES_LOCK = threading.Lock()


def _get_language(grammar: str) -> Language:
    with _LANGUAGES_LOCK:
        if grammar not in _LANGUAGES:
            if grammar == "tsx":
                _LANGUAGES[grammar] = Language(tree_sitter_typescript.language_tsx())
            elif grammar == "typescript":
                _LANGUAGES[grammar] = Language(tree_sitter_typescript.language_typescript())
            elif grammar == "javascript":
                _LANGUAGES[grammar] = Language(tree_sitter_javascript.language())
            else:
                raise ValueError(f"Unsupported grammar: {grammar}")
        return _LANGUAGES[grammar]


def _point(node: Any) -> str:
    row, column = node.start_point
    return f"line {row + 1}, column {column + 1}"


def collect_diagnostics(root: Any, limit: int = MAX_DIAGNOSTICS) -> list[str]:
    """Describe every ERROR and MISSING node below ``root``.

    Only subtrees flagged ``has_error`` are entered, so clean regions of a
    large file are skipped.
    """
    diagnostics: list[str] = []
    stack = [root]
    while stack and len(diagnostics) < limit:
        node = stack.pop()
        if node.is_missing:
            diagnostics.append(f"Missing '{node.type}' at {_point(node)}")
            continue
        if node.type == "ERROR":
            diagnostics.append(f"Syntax error at {_point(node)}")
            continue
        stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    if not diagnostics and root.has_error:
        diagnostics.append(f"Syntax error at {_point(root)}")
    return diagnostics


class TreeParser:
    """
    Parses source text into a tree-sitter tree.

    tree-sitter parsers are not safe to share between threads, so each thread
    gets its own parser per grammar. Language objects are shared.
    """

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger
        self._local = threading.local()

    def _get_parser(self, grammar: str) -> Parser:
        parsers: dict[str, Parser] | None = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._local.parsers = parsers
        if grammar not in parsers:
            parser = Parser()
            parser.language = _get_language(grammar)
            parsers[grammar] = parser
        return parsers[grammar]

    def _safe_parse(self, source: bytes, file_path: Path, grammar: str) -> Tree:
        try:
            return self._get_parser(grammar).parse(source)
        except Exception as e:
            raise ParseError(file_path, grammar, e) from e

    def parse(self, text: str, file_path: str | Path) -> ParseOutcome:
        """Parse ``text``; ``file_path`` only selects the dialect.

        Returns:
            ParseOutcome whose ``tree`` is None when the source is malformed
            or the parser failed. Never raises.
        """
        path = Path(file_path)
        grammar = Dialect.for_path(path).grammar

        try:
            tree = self._safe_parse(text.encode("utf-8"), path, grammar)
        except ParseError as e:
            self._log.error(str(e))
            return ParseOutcome(tree=None, grammar=grammar, diagnostics=[str(e)])

        if tree.root_node.has_error:
            diagnostics = collect_diagnostics(tree.root_node)
            self._log.error(f"Malformed source in {path} ({grammar}): {diagnostics[0]}")
            return ParseOutcome(tree=None, grammar=grammar, diagnostics=diagnostics)

        return ParseOutcome(tree=tree, grammar=grammar)
