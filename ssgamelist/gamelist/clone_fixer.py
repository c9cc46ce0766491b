"""
Clone-of repair from a reference dat file.

ScreenScraper gamelists sometimes miss clone/parent links. FinalBurn-style
dat files (datafile > game[@name, @cloneof]) carry reliable clone data keyed
by ROM name, so clones are matched by ROM filename and re-linked to the
parent's rom id.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

from .errors import ReferenceLoadError
from .game import Game, LocalizedText, REGION_WORLD
from .parser import load_document

logger = logging.getLogger(__name__)

REFERENCE_ROOT_TAG = 'datafile'
REFERENCE_GAME_TAG = 'game'


@dataclass
class ReconcileReport:
    """Outcome of a clone reconciliation pass."""

    checked: int = 0  # Games believed to be parents
    not_in_reference: int = 0
    not_a_clone: int = 0
    parent_missing: int = 0
    fixed: List[Tuple[str, str]] = field(default_factory=list)  # (rom_id, parent rom_id)
    inconsistent: List[str] = field(default_factory=list)  # rom ids whose parent is themselves

    def summary(self) -> str:
        return (
            f"{len(self.fixed)} clones fixed, {len(self.inconsistent)} inconsistent, "
            f"{self.not_in_reference} not in dat, {self.not_a_clone} parents, "
            f"{self.parent_missing} with missing parent ({self.checked} checked)"
        )


def _rom_filename(name: str, rom_extension: str) -> str:
    """Append the ROM extension to a dat name unless already present."""
    if not name:
        return ''
    suffix = f".{rom_extension}"
    if name.lower().endswith(suffix.lower()):
        return name
    return f"{name}{suffix}"


def load_reference_games(dat_path: Union[str, Path], rom_extension: str = 'zip') -> List[Game]:
    """
    Load the reference dat as reduced Game records.

    Each record carries only a world name (the dat description), the ROM
    filename with extension as path, and the parent ROM name (no extension,
    empty for parents) as clone_of.

    Args:
        dat_path: Path to dat file
        rom_extension: Extension appended to dat ROM names

    Returns:
        Reduced Game records in document order

    Raises:
        ReferenceLoadError: If the dat is unreadable, malformed, not rooted
            at <datafile> or has no <game> element
    """
    root = load_document(dat_path, error_class=ReferenceLoadError)

    if root.tag != REFERENCE_ROOT_TAG:
        raise ReferenceLoadError(
            f"Wrong dat format in {dat_path}: '{REFERENCE_ROOT_TAG}' tag not found"
        )

    elements = root.findall(REFERENCE_GAME_TAG)
    if not elements:
        raise ReferenceLoadError(f"No '{REFERENCE_GAME_TAG}' node found in {dat_path}")

    games = []
    for elem in elements:
        description = elem.findtext('description') or ''
        name = elem.get('name', '')
        games.append(Game(
            names=[LocalizedText(REGION_WORLD, description)],
            path=_rom_filename(name, rom_extension),
            clone_of=elem.get('cloneof', ''),
        ))

    logger.debug(f"Loaded {len(games)} reference games from {dat_path}")
    return games


def _index_by_path(games: List[Game]) -> Dict[str, Game]:
    """Map path to game; the first game with a given path wins."""
    index: Dict[str, Game] = {}
    for game in games:
        index.setdefault(game.path, game)
    return index


class CloneReconciler:
    """
    Repairs clone_of links of a game list against a reference dat.

    Only games currently marked as parents (clone_of == "0") are checked.
    A game whose repaired parent would be itself is reported as inconsistent
    and left unchanged.
    """

    def __init__(self, rom_extension: str = 'zip'):
        self.rom_extension = rom_extension

    def reconcile(self, games: List[Game], dat_path: Union[str, Path]) -> ReconcileReport:
        """
        Fix clone_of of games in place.

        Args:
            games: Games to repair
            dat_path: Reference dat file

        Returns:
            ReconcileReport describing the pass

        Raises:
            ReferenceLoadError: If the reference dat cannot be loaded
        """
        reference = _index_by_path(load_reference_games(dat_path, self.rom_extension))
        local = _index_by_path(games)
        report = ReconcileReport()

        for game in games:
            if game.is_clone():
                continue
            report.checked += 1

            # Match on zip name, dat and ScreenScraper names may differ
            ref_game = reference.get(game.path)
            if ref_game is None:
                logger.debug(f"Not in dat: {game.path}")
                report.not_in_reference += 1
                continue

            if not ref_game.clone_of:
                report.not_a_clone += 1
                continue

            parent_path = _rom_filename(ref_game.clone_of, self.rom_extension)
            parent = local.get(parent_path)
            if parent is None:
                logger.debug(f"Parent {parent_path} of {game.path} not in gamelist")
                report.parent_missing += 1
                continue

            if parent.rom_id == game.rom_id:
                logger.error(
                    f"clone: {game.get_name().text} ({game.path}, id: {game.rom_id}) => "
                    f"parent: {parent.get_name().text} ({parent.path}, id: {parent.rom_id}): "
                    f"cloneof can't equal romid"
                )
                report.inconsistent.append(game.rom_id)
                continue

            game.clone_of = parent.rom_id
            report.fixed.append((game.rom_id, parent.rom_id))
            logger.info(
                f"fix: clone: {game.get_name().text} ({game.path}, id: {game.rom_id}) => "
                f"parent: {parent.get_name().text} ({parent.path}, id: {parent.rom_id})"
            )

        logger.info(f"Clone reconciliation: {report.summary()}")
        return report
