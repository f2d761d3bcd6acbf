"""Lexical extraction of imported names from Python source.

The scanner works on the token stream produced by :mod:`tokenize` rather than on a
parsed tree: comments and string literals never look like imports, formatting does
not matter, and a file need not be importable to be scanned.
"""

import io
import tokenize
from typing import Iterator

__all__ = ["ImportScanner", "ImportedNames"]

_SKIPPED = {
    tokenize.COMMENT,
    tokenize.NL,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.ENCODING,
    tokenize.ENDMARKER,
}


class ImportedNames:
    """Restartable sequence of the fully-qualified names imported by a source text.

    Every iteration re-tokenizes the source, so the sequence can be walked any number
    of times.
    """

    def __init__(self, source: str, package: str = ""):
        self._source = source
        self._package = package

    def __iter__(self) -> Iterator[str]:
        for statement in _statements(self._source):
            if statement[0] == "import":
                yield from _plain_import(statement[1:])
            elif statement[0] == "from":
                yield from _from_import(statement[1:], self._package)


class ImportScanner:
    """Extracts import declarations from source text.

    Example:
        >>> names = ImportScanner().scan("from app.printing import Printer, Page", "app")
        >>> list(names)    # ["app.printing.Printer", "app.printing.Page"]
    """

    def scan(self, source: str, package: str = "") -> ImportedNames:
        """Return the names imported by ``source``.

        Args:
            source: The full text of a Python source file.
            package: The package the file belongs to, used to resolve relative imports.
                Relative imports are skipped when it is empty.
        """
        return ImportedNames(source, package)


def _statements(source: str) -> Iterator[list[str]]:
    """Yield the token strings of each simple statement that starts with import/from."""
    statement: list[str] = []
    depth = 0

    for token in tokenize.generate_tokens(io.StringIO(source).readline):
        if token.type in _SKIPPED:
            continue

        boundary = token.type == tokenize.NEWLINE or (
            token.type == tokenize.OP and depth == 0 and token.string in (";", ":")
        )
        if boundary:
            if statement and statement[0] in ("import", "from"):
                yield statement
            statement = []
            continue

        if token.type == tokenize.OP:
            if token.string in "([{":
                depth += 1
            elif token.string in ")]}":
                depth = max(depth - 1, 0)
            if token.string in "()":
                continue

        # Only a keyword in statement position opens an import; "yield from" and
        # "raise ... from" start with other tokens and are ignored.
        if not statement and token.type == tokenize.NAME and token.string not in ("import", "from"):
            statement = ["<other>"]
            continue
        statement.append(token.string)

    if statement and statement[0] in ("import", "from"):
        yield statement


def _split_names(tokens: list[str]) -> Iterator[str]:
    """Yield the dotted names in a comma-separated list, dropping ``as`` aliases."""
    current: list[str] = []
    aliased = False
    for token in tokens + [","]:
        if token == ",":
            if current:
                yield "".join(current)
            current, aliased = [], False
        elif token == "as":
            aliased = True
        elif not aliased:
            current.append(token)


def _plain_import(tokens: list[str]) -> Iterator[str]:
    yield from _split_names(tokens)


def _from_import(tokens: list[str], package: str) -> Iterator[str]:
    if "import" not in tokens:
        return
    split = tokens.index("import")
    source, names = tokens[:split], tokens[split + 1:]

    level = 0
    for token in source:
        if token.strip("."):
            break
        level += len(token)

    module = "".join(source).lstrip(".")
    if level:
        base = _resolve_relative(package, level)
        if base is None:
            return
        module = f"{base}.{module}" if module else base

    for name in _split_names(names):
        if name == "*":
            continue
        yield f"{module}.{name}" if module else name


def _resolve_relative(package: str, level: int):
    if not package:
        return None
    parts = package.split(".")
    if level > len(parts):
        return None
    return ".".join(parts[: len(parts) - (level - 1)])
