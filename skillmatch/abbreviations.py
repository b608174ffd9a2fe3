"""
Canonical skill abbreviations and synonyms.

Each group lists interchangeable spellings of one skill; the first entry is
the canonical form. The lookup table is built once at import time and is
read-only.
"""

from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple

SYNONYM_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("javascript", "js"),
    ("typescript", "ts"),
    ("python", "py"),
    ("csharp", "c#"),
    ("cplusplus", "c++"),
    ("css", "css3"),
    ("html", "html5"),
    ("nodejs", "node", "node.js"),
    ("reactjs", "react", "react.js"),
    ("vuejs", "vue", "vue.js"),
    ("angularjs", "angular"),
    ("machine learning", "ml"),
    ("artificial intelligence", "ai"),
    ("database", "db"),
    ("structured query language", "sql"),
    ("mongodb", "mongo"),
    ("postgresql", "postgres"),
    ("expressjs", "express", "express.js"),
)


def _build_table(groups: Iterable[Sequence[str]]) -> Mapping[str, FrozenSet[str]]:
    table = {}
    for group in groups:
        terms = frozenset(group)
        for term in terms:
            table[term] = table.get(term, frozenset()) | (terms - {term})
    return MappingProxyType(table)


def _build_canonical(groups: Iterable[Sequence[str]]) -> Mapping[str, str]:
    return MappingProxyType({term: group[0] for group in groups for term in group})


class AbbreviationMap:
    """Symmetric, immutable lookup of known skill synonyms."""

    def __init__(self, groups: Iterable[Sequence[str]] = SYNONYM_GROUPS):
        groups = tuple(tuple(term.strip().lower() for term in group) for group in groups)
        self._synonyms = _build_table(groups)
        self._canonical = _build_canonical(groups)

    def canonical(self, skill: str) -> Optional[str]:
        return self._canonical.get(skill)

    def synonyms(self, skill: str) -> FrozenSet[str]:
        return self._synonyms.get(skill, frozenset())

    def are_equivalent(self, a: str, b: str) -> bool:
        """True when `a` and `b` are different spellings of the same known skill."""
        if a == b:
            return False
        if self.canonical(a) == b or self.canonical(b) == a:
            return True
        return b in self.synonyms(a)

    def __contains__(self, skill: str) -> bool:
        return skill in self._canonical

    def __len__(self) -> int:
        return len(self._canonical)


DEFAULT_ABBREVIATIONS = AbbreviationMap()
