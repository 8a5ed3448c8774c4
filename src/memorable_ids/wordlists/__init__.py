"""Curated word lists and the process-wide catalog built from them.

Each `WordList` member maps to a line-delimited text resource shipped inside
this package (`<value>.txt`). Lists are read once, on first use, and shared
read-only by every generator in the process.
"""

from __future__ import annotations

import re
import threading
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

import importlib_resources

from ..errors import ResourceLoadError


class WordList(str, Enum):
    ANIMALS = "animals"
    COLOURS = "colours"
    ADJECTIVES = "adjectives"
    FOODS = "foods"
    OBJECTS = "objects"
    NATURE = "nature"
    SHAPES = "shapes"
    MATERIALS = "materials"

    @property
    def resource_name(self) -> str:
        return f"{self.value}.txt"


_WORD_PATTERN = re.compile(r"^[A-Z][A-Za-z]*$")

_CATALOG: Optional[Mapping[WordList, Tuple[str, ...]]] = None
_CATALOG_LOCK = threading.Lock()


def parse_words(text: str) -> Tuple[str, ...]:
    """Split a resource body into words, trimming whitespace and skipping blank lines."""

    words = (line.strip() for line in text.split("\n"))
    return tuple(word for word in words if word)


def load_list(identifier: WordList, root: Any = None) -> Tuple[str, ...]:
    """Read one list straight from its resource, bypassing the catalog cache.

    `root` is any Traversable (a `pathlib.Path` works) and defaults to this package.
    """

    base = root if root is not None else importlib_resources.files(__name__)
    resource = base.joinpath(identifier.resource_name)
    if not resource.is_file():
        raise ResourceLoadError(identifier.resource_name)
    return parse_words(resource.read_text(encoding="utf-8"))


def catalog() -> Mapping[WordList, Tuple[str, ...]]:
    """Return the read-only mapping of every list, loading it on first call."""

    global _CATALOG
    if _CATALOG is None:
        with _CATALOG_LOCK:
            if _CATALOG is None:
                _CATALOG = MappingProxyType({identifier: load_list(identifier) for identifier in WordList})
    return _CATALOG


def find_invalid_words(words: Sequence[str]) -> List[str]:
    """Words breaking the catalog rules: letters only, capitalised, unique ignoring case."""

    invalid: List[str] = []
    seen: set[str] = set()
    for word in words:
        key = word.lower()
        if not _WORD_PATTERN.match(word) or key in seen:
            invalid.append(word)
        seen.add(key)
    return invalid


class WordListProvider(Protocol):
    def load(self, identifier: WordList) -> Sequence[str]:  # pragma: no cover - Protocol
        ...


class ResourceWordListProvider:
    """Serves the bundled lists from the shared catalog."""

    def load(self, identifier: WordList) -> Sequence[str]:
        return catalog()[identifier]


class StaticWordListProvider:
    """Serves caller-supplied vocabularies, e.g. a tiny list in tests."""

    def __init__(self, lists: Mapping[Any, Sequence[str]]) -> None:
        self._lists: Dict[Any, Tuple[str, ...]] = {key: tuple(words) for key, words in lists.items()}

    def load(self, identifier: WordList) -> Sequence[str]:
        if identifier not in self._lists:
            raise ResourceLoadError(getattr(identifier, "resource_name", str(identifier)))
        return self._lists[identifier]


__all__ = [
    "WordList",
    "WordListProvider",
    "ResourceWordListProvider",
    "StaticWordListProvider",
    "catalog",
    "find_invalid_words",
    "load_list",
    "parse_words",
]
