"""Pattern detectors that find type references in raw source text.

Imports are not the only way code reaches for other types: class paths are passed
around as strings, written as ``module:attribute`` entry points, or handed to
``importlib.import_module``. Each detector here looks for one such pattern. Detectors
are simple regular-expression scans and will report look-alike strings too.
"""

import re
from typing import Iterable, Iterator, Optional, Protocol

__all__ = [
    "PatternDetector",
    "ContentDetectorSet",
    "StringLiteralDetector",
    "EntryPointDetector",
    "ImportModuleCallDetector",
    "default_detector_set",
]


class PatternDetector(Protocol):
    def scan(self, text: str) -> list[str]:
        """Return the type names referenced in ``text``."""
        ...


class StringLiteralDetector:
    """Finds quoted dotted names whose last segment is a class name.

    Matches ``"app.printing.Printer"`` but not ``"app.printing"`` or ``"a.b.c"``.
    """

    pattern = re.compile(r"""(['"])((?:[A-Za-z_]\w*\.)+[A-Z]\w*)\1""")

    def scan(self, text: str) -> list[str]:
        return [match.group(2) for match in self.pattern.finditer(text)]


class EntryPointDetector:
    """Finds ``"package.module:ClassName"`` references and reports them as dotted names."""

    pattern = re.compile(r"""(['"])([A-Za-z_][\w.]*):([A-Z]\w*)\1""")

    def scan(self, text: str) -> list[str]:
        return [f"{match.group(2)}.{match.group(3)}" for match in self.pattern.finditer(text)]


class ImportModuleCallDetector:
    """Finds modules loaded by ``import_module("...")`` and ``__import__("...")`` calls."""

    pattern = re.compile(r"""\b(?:import_module|__import__)\(\s*(['"])([A-Za-z_][\w.]*)\1""")

    def scan(self, text: str) -> list[str]:
        return [match.group(2) for match in self.pattern.finditer(text)]


class ContentDetectorSet:
    """Ordered registry of pattern detectors.

    Detectors run in registration order and never see each other's results.
    """

    def __init__(self, detectors: Optional[Iterable[PatternDetector]] = None):
        self._detectors: list[PatternDetector] = list(detectors or [])

    def register(self, detector: PatternDetector):
        """Add a detector to the end of the scan order."""
        self._detectors.append(detector)

    def __iter__(self) -> Iterator[PatternDetector]:
        return iter(self._detectors)

    def __len__(self) -> int:
        return len(self._detectors)

    def scan(self, text: str) -> list[str]:
        """Run every detector over ``text`` and concatenate what they find."""
        return [name for detector in self._detectors for name in detector.scan(text)]


def default_detector_set() -> ContentDetectorSet:
    return ContentDetectorSet(
        [StringLiteralDetector(), EntryPointDetector(), ImportModuleCallDetector()]
    )
