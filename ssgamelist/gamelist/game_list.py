"""
Game list: loaded games, facet indices, filtering, export and clone repair.

GameList is the error boundary of the package: load, save and fix_clones
report failures through their return value and ``last_error`` instead of
raising.
"""

import copy
import logging
from pathlib import Path
from typing import List, Optional, Union

from .clone_fixer import CloneReconciler, ReconcileReport
from .errors import GameListError
from .facets import FacetIndex, WILDCARD, facet_value
from .game import Game, LANGUAGE_EN, NOT_A_CLONE, sort_games
from .parser import GameListParser
from .schema import Format
from .xml_writer import GameListWriter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class GameList:
    """
    Games loaded from a gamelist document.

    Games are kept sorted by display name. ``facets`` holds the distinct
    values of every filterable facet as seen at load time; filtered lists
    keep the facets of their source.
    """

    def __init__(
        self,
        xml_path: Optional[PathLike] = None,
        rom_path: Optional[PathLike] = None,
        rom_extension: str = 'zip',
    ):
        """
        Initialize game list, loading xml_path if given.

        Args:
            xml_path: Gamelist document (native or frontend schema)
            rom_path: ROM directory used to flag available games
            rom_extension: Extension of ROM archives
        """
        self.xml_path = Path(xml_path) if xml_path else None
        self.rom_path = Path(rom_path) if rom_path else None
        self.rom_extension = rom_extension
        self.games: List[Game] = []
        self.facets = FacetIndex()
        self.last_error: Optional[GameListError] = None
        self.clone_report: Optional[ReconcileReport] = None

        if self.xml_path is not None:
            self.load(self.xml_path, self.rom_path)

    def __len__(self) -> int:
        return len(self.games)

    def __iter__(self):
        return iter(self.games)

    def load(self, xml_path: PathLike, rom_path: Optional[PathLike] = None) -> bool:
        """
        Load games from a gamelist document, replacing current content.

        Args:
            xml_path: Gamelist document
            rom_path: Optional ROM directory for availability checks

        Returns:
            True on success. On failure the list is empty, the error is
            logged and kept in ``last_error``.
        """
        self.xml_path = Path(xml_path)
        self.rom_path = Path(rom_path) if rom_path else None
        self.games = []
        self.facets = FacetIndex()

        parser = GameListParser(rom_extension=self.rom_extension)
        try:
            self.games, self.facets = parser.parse(self.xml_path, self.rom_path)
        except GameListError as e:
            logger.error(f"Could not load gamelist: {e}")
            self.last_error = e
            return False

        self.last_error = None
        return True

    def filter(
        self,
        available: bool = False,
        include_clones: bool = True,
        system: str = WILDCARD,
        editor: str = WILDCARD,
        developer: str = WILDCARD,
        players: str = WILDCARD,
        rating: str = WILDCARD,
        topstaff: str = WILDCARD,
        rotation: str = WILDCARD,
        resolution: str = WILDCARD,
        date: str = WILDCARD,
        genre: str = WILDCARD,
    ) -> 'GameList':
        """
        Build a new list with the games matching every selection.

        Each facet is either WILDCARD ("All") or a value matched exactly
        against the game's resolved facet value.

        Args:
            available: Keep only games found in the ROM directory
            include_clones: Keep clones (clone_of != "0")
            system..genre: Facet selections

        Returns:
            Independent GameList (games are copies) in source order, with
            the source facet indices
        """
        selections = {
            'system': system,
            'editor': editor,
            'developer': developer,
            'players': players,
            'rating': rating,
            'topstaff': topstaff,
            'rotation': rotation,
            'resolution': resolution,
            'date': date,
            'genre': genre,
        }
        active = {name: value for name, value in selections.items() if value != WILDCARD}

        def matches(game: Game) -> bool:
            if available and not game.available:
                return False
            if not include_clones and game.clone_of != NOT_A_CLONE:
                return False
            return all(facet_value(game, name) == value for name, value in active.items())

        result = GameList(rom_extension=self.rom_extension)
        result.xml_path = self.xml_path
        result.rom_path = self.rom_path
        result.facets = self.facets.copy()
        result.games = [copy.deepcopy(game) for game in self.games if matches(game)]

        logger.debug(f"Filter kept {len(result.games)}/{len(self.games)} games")
        return result

    def find(self, rom_id: str) -> Game:
        """
        Find a game by rom id.

        Returns:
            The game, or an empty Game (``is_empty()``) if not found
        """
        for game in self.games:
            if game.rom_id == rom_id:
                return game
        return Game()

    def exist(self, rom_id: str) -> bool:
        return any(game.rom_id == rom_id for game in self.games)

    def remove(self, rom_id: str) -> bool:
        """
        Remove the first game with the given rom id.

        Returns:
            True if a game was removed
        """
        for index, game in enumerate(self.games):
            if game.rom_id == rom_id:
                del self.games[index]
                return True
        return False

    def available_count(self) -> int:
        return sum(1 for game in self.games if game.available)

    def save(
        self,
        output_path: PathLike,
        language: str = LANGUAGE_EN,
        fmt: Format = Format.NATIVE,
    ) -> bool:
        """
        Write the list sorted by name.

        Args:
            output_path: Destination file
            language: Language for synopses and genres
            fmt: Output schema

        Returns:
            True on success. On failure the error is logged and kept in
            ``last_error``; games are left untouched.
        """
        ordered = sort_games(self.games)
        writer = GameListWriter(fmt, language)
        try:
            writer.write(ordered, output_path)
        except GameListError as e:
            logger.error(f"Could not save gamelist: {e}")
            self.last_error = e
            return False

        self.games[:] = ordered
        return True

    def fix_clones(self, dat_path: PathLike) -> bool:
        """
        Repair clone_of links using a reference dat.

        Args:
            dat_path: Reference dat file (datafile > game[@name, @cloneof])

        Returns:
            True once the dat is loaded, whatever individual games yield
            (see ``clone_report``). False if the dat cannot be loaded.
        """
        reconciler = CloneReconciler(rom_extension=self.rom_extension)
        try:
            self.clone_report = reconciler.reconcile(self.games, dat_path)
        except GameListError as e:
            logger.error(f"Could not fix clones: {e}")
            self.last_error = e
            return False

        return True
