"""
Facet indices for gamelist filtering.

Collects the distinct values seen for each filterable facet while games are
loaded, so a UI can offer every choice regardless of the current filter.
"""

import logging
from typing import Callable, Dict, List, Optional

from .game import Game, LANGUAGE_EN, REGION_WORLD

logger = logging.getLogger(__name__)


# Facet value meaning "no filter on this facet"
WILDCARD = 'All'

FACET_NAMES = (
    'system',
    'editor',
    'developer',
    'players',
    'rating',
    'topstaff',
    'rotation',
    'resolution',
    'date',
    'genre',
)

_FACET_GETTERS: Dict[str, Callable[[Game], str]] = {
    'system': lambda game: game.system.text,
    'editor': lambda game: game.editor.text,
    'developer': lambda game: game.developer.text,
    'players': lambda game: game.players,
    'rating': lambda game: game.rating,
    'topstaff': lambda game: game.topstaff,
    'rotation': lambda game: game.rotation,
    'resolution': lambda game: game.resolution,
    'date': lambda game: game.get_date(REGION_WORLD).text,
    'genre': lambda game: game.get_genre(LANGUAGE_EN).text,
}

# Multi-valued facets only index games that carry at least one entry
_COLLECTION_FACETS = {
    'date': lambda game: game.dates,
    'genre': lambda game: game.genres,
}


def facet_value(game: Game, facet: str) -> str:
    """
    Get the resolved value of a facet for a game.

    Args:
        game: Game record
        facet: One of FACET_NAMES

    Returns:
        Facet value ('' when unset)

    Raises:
        KeyError: If facet is unknown
    """
    return _FACET_GETTERS[facet](game)


class FacetIndex:
    """
    Sorted distinct values per facet, each prefixed with WILDCARD.

    Copies are independent: mutating one index never changes another.
    """

    def __init__(self, values: Optional[Dict[str, List[str]]] = None):
        values = values or {}
        self._values: Dict[str, List[str]] = {
            name: list(values.get(name, [WILDCARD])) for name in FACET_NAMES
        }

    def __getitem__(self, facet: str) -> List[str]:
        return self._values[facet]

    def __eq__(self, other) -> bool:
        if not isinstance(other, FacetIndex):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        counts = ', '.join(f"{name}={len(vals) - 1}" for name, vals in self._values.items())
        return f"FacetIndex({counts})"

    def copy(self) -> 'FacetIndex':
        return FacetIndex(self._values)

    def as_dict(self) -> Dict[str, List[str]]:
        return {name: list(vals) for name, vals in self._values.items()}

    @property
    def systems(self) -> List[str]:
        return self._values['system']

    @property
    def editors(self) -> List[str]:
        return self._values['editor']

    @property
    def developers(self) -> List[str]:
        return self._values['developer']

    @property
    def players(self) -> List[str]:
        return self._values['players']

    @property
    def ratings(self) -> List[str]:
        return self._values['rating']

    @property
    def topstaffs(self) -> List[str]:
        return self._values['topstaff']

    @property
    def rotations(self) -> List[str]:
        return self._values['rotation']

    @property
    def resolutions(self) -> List[str]:
        return self._values['resolution']

    @property
    def dates(self) -> List[str]:
        return self._values['date']

    @property
    def genres(self) -> List[str]:
        return self._values['genre']


class FacetIndexBuilder:
    """Accumulates distinct facet values, then finalizes a FacetIndex."""

    def __init__(self):
        # dicts keep first-seen order and give O(1) membership
        self._seen: Dict[str, Dict[str, None]] = {name: {} for name in FACET_NAMES}

    def observe(self, game: Game) -> None:
        """Record the facet values of a game."""
        for name in FACET_NAMES:
            collection = _COLLECTION_FACETS.get(name)
            if collection is not None and not collection(game):
                continue
            self._seen[name].setdefault(facet_value(game, name), None)

    def finalize(self) -> FacetIndex:
        """
        Build the facet index.

        Returns:
            FacetIndex with each facet sorted (ordinal) and WILDCARD first
        """
        values = {
            name: [WILDCARD] + sorted(value for value in seen if value != WILDCARD)
            for name, seen in self._seen.items()
        }
        logger.debug(
            "Facet index built: "
            + ', '.join(f"{name}={len(vals) - 1}" for name, vals in values.items())
        )
        return FacetIndex(values)
