"""
Read-only lookup indices over the station and line reference tables.

A catalog is built once from a list of entities and an alias map and never
mutated afterwards, so it can be shared freely between concurrent callers.
All index keys are lowercased.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generic, Iterable, Iterator, Mapping, Optional, Sequence, TypeVar

from raildata import reference
from raildata.models import Line, Station

E = TypeVar("E", Station, Line)

UNKNOWN_CODE = "XX"


class Catalog(Generic[E]):
    """
    Indices by code, by name (name and aliases) and by abbreviation.

    Subclasses say which strings of an entity are names and which are
    abbreviations, and how to synthesize a placeholder entity.
    """

    def __init__(
        self,
        entities: Iterable[E],
        aliases: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        self._entities: tuple[E, ...] = tuple(entities)
        self._aliases: dict[str, tuple[str, ...]] = {
            code.lower(): tuple(names) for code, names in (aliases or {}).items()
        }
        self._by_code: dict[str, E] = {}
        self._by_name: dict[str, E] = {}
        self._by_abbreviation: dict[str, E] = {}

        for entity in self._entities:
            code = entity.code.lower()
            if code in self._by_code:
                raise ValueError(f"Duplicate code in catalog: {entity.code!r}")
            self._by_code[code] = entity
            for name in self.names(entity):
                _index(self._by_name, name, entity)
            for abbreviation in self.abbreviations(entity):
                _index(self._by_abbreviation, abbreviation, entity)

    def aliases(self, entity: E) -> tuple[str, ...]:
        return self._aliases.get(entity.code.lower(), ())

    def names(self, entity: E) -> list[str]:
        return [entity.name, *self.aliases(entity)]

    def abbreviations(self, entity: E) -> list[str]:
        raise NotImplementedError

    def candidates(self, entity: E) -> list[str]:
        """Every string a free-text name may be fuzzy-matched against."""
        return [s for s in (*self.names(entity), *self.abbreviations(entity)) if s]

    def synthesize(self, code: Optional[str], name: Optional[str]) -> E:
        raise NotImplementedError

    def by_code(self, code: str) -> Optional[E]:
        return self._by_code.get(code.lower())

    def by_name(self, name: str) -> Optional[E]:
        return self._by_name.get(name.lower())

    def by_abbreviation(self, abbreviation: str) -> Optional[E]:
        return self._by_abbreviation.get(abbreviation.lower())

    get = by_code

    def __iter__(self) -> Iterator[E]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.lower() in self._by_code


class StationCatalog(Catalog[Station]):
    def abbreviations(self, entity: Station) -> list[str]:
        return [entity.short_name]

    def synthesize(self, code: Optional[str], name: Optional[str]) -> Station:
        code = code if code is not None else UNKNOWN_CODE
        name = name if name is not None else f"Unknown {code}"
        return Station(code=code, name=name, short_name=name[:14], synthesized=True)


class LineCatalog(Catalog[Line]):
    def abbreviations(self, entity: Line) -> list[str]:
        return [entity.abbreviation, *entity.other_abbrs]

    def synthesize(self, code: Optional[str], name: Optional[str]) -> Line:
        code = code if code is not None else UNKNOWN_CODE
        name = name if name is not None else f"Unknown {code}"
        return Line(
            code=code,
            name=name,
            abbreviation=UNKNOWN_CODE + code,
            synthesized=True,
        )


def _index(table: dict[str, E], key: str, entity: E) -> None:
    if key:
        table[key.lower()] = entity


@lru_cache(maxsize=None)
def station_catalog() -> StationCatalog:
    """The catalog of known NJ Transit stations, built on first use."""
    return StationCatalog(reference.STATIONS, reference.STATION_ALIASES)


@lru_cache(maxsize=None)
def line_catalog() -> LineCatalog:
    """The catalog of known NJ Transit lines, built on first use."""
    return LineCatalog(reference.LINES, reference.LINE_ALIASES)
