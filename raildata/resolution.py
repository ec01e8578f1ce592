"""
Entity resolution: turn a code and/or free-text name into a canonical entity.

Pure functions over a Catalog. No I/O, never raises.

Lookup order, stopping at the first hit:
1. exact code (case-insensitive);
2. exact name or alias, then exact abbreviation;
3. fuzzy match on the longest common subsequence (LCS) between the query
   name and every candidate string of every entity.

A fuzzy match is accepted only if the LCS is longer than 2 characters and
at least a quarter of the query's length.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar

from rapidfuzz.distance import LCSseq

from raildata.catalog import Catalog
from raildata.models import Line, Station

E = TypeVar("E", Station, Line)

MIN_FUZZY_MATCH = 3


@dataclass(frozen=True)
class SearchQuery:
    """What the caller knows about the entity: its code, its name, or both."""

    code: Optional[str] = None
    name: Optional[str] = None


def resolve(query: SearchQuery, catalog: Catalog[E]) -> Optional[E]:
    """Return the catalog entity matching the query, or None."""
    if query.code is not None:
        found = catalog.by_code(query.code)
        if found is not None:
            return found

    if query.name is None:
        return None

    found = catalog.by_name(query.name)
    if found is None:
        found = catalog.by_abbreviation(query.name)
    if found is not None:
        return found

    best, match_len = fuzzy_find(query.name, catalog)
    if match_len >= MIN_FUZZY_MATCH and match_len >= len(query.name) // 4:
        return best
    return None


def resolve_or_synthesize(query: SearchQuery, catalog: Catalog[E]) -> E:
    """Like resolve(), but build a placeholder entity from the query on a miss."""
    found = resolve(query, catalog)
    if found is not None:
        return found
    return catalog.synthesize(query.code, query.name)


def fuzzy_find(name: str, catalog: Catalog[E]) -> tuple[Optional[E], int]:
    """
    Find the entity with the longest LCS against `name`.

    Ties go to the shorter candidate string, then to the earlier entity in
    catalog order. Returns (entity, LCS length); (None, 0) if nothing shares
    a single character.
    """
    needle = name.lower()
    best: Optional[E] = None
    best_len = 0
    best_candidate_len = 0
    for entity in catalog:
        for candidate in catalog.candidates(entity):
            candidate = candidate.lower()
            match_len = lcs_length(needle, candidate)
            if match_len > best_len or (
                match_len == best_len and len(candidate) < best_candidate_len
            ):
                best = entity
                best_len = match_len
                best_candidate_len = len(candidate)
    return best, best_len


def lcs_length(a: str, b: str) -> int:
    """Length of the longest common subsequence of two strings."""
    return int(LCSseq.similarity(a, b))
