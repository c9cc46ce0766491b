"""
Gamelist XML parser.

Reads ScreenScraper (native) and EmulationStation (frontend) gamelist
documents into Game records and builds the facet index used for filtering.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from lxml import etree

from ssgamelist.media.media_paths import FRONTEND_MEDIA_SLOTS, format_from_path
from ssgamelist.scanner.rom_lister import ScannerError, list_directory
from .errors import ParseError, SchemaError
from .facets import FacetIndex, FacetIndexBuilder
from .game import (
    CompanyRef,
    Game,
    Genre,
    LANGUAGE_EN,
    LocalizedText,
    Media,
    NOT_A_CLONE,
    REGION_SS,
    REGION_WORLD,
    sort_games,
)
from .schema import Format, find_game_elements, find_games_container

logger = logging.getLogger(__name__)


def load_document(xml_path: Union[str, Path], error_class=ParseError) -> etree._Element:
    """
    Load an XML document and return its root element.

    Args:
        xml_path: Path to XML file
        error_class: Exception raised on failure

    Returns:
        Root element

    Raises:
        error_class: If the file is missing, unreadable or malformed
    """
    xml_path = Path(xml_path)
    if not xml_path.exists():
        raise error_class(f"File not found: {xml_path}")

    parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)
    try:
        tree = etree.parse(str(xml_path), parser)
    except etree.XMLSyntaxError as e:
        raise error_class(f"Malformed XML in {xml_path}: {e}") from e
    except OSError as e:
        raise error_class(f"Failed to read {xml_path}: {e}") from e

    return tree.getroot()


class GameListParser:
    """
    Parses gamelist documents in either supported schema.

    Availability is checked against the ROM directory listing (exact
    filename match on each game's path).
    """

    def __init__(self, rom_extension: str = 'zip'):
        """
        Initialize parser.

        Args:
            rom_extension: Extension of ROM archives in the ROM directory
        """
        self.rom_extension = rom_extension

    def parse(
        self,
        xml_path: Union[str, Path],
        rom_path: Optional[Union[str, Path]] = None,
    ) -> Tuple[List[Game], FacetIndex]:
        """
        Parse a gamelist document.

        Args:
            xml_path: Path to gamelist XML
            rom_path: Optional ROM directory for availability checks

        Returns:
            Tuple of (games sorted by name, facet index)

        Raises:
            ParseError: If the document cannot be loaded or is malformed
            SchemaError: If the root is neither <Data> nor <gameList>
        """
        root = load_document(xml_path)

        fmt = Format.from_root_tag(root.tag)
        if fmt is None:
            raise SchemaError(
                f"Wrong xml format in {xml_path}: 'Data' or 'gameList' tag not found "
                f"(root is '{root.tag}')"
            )

        container = find_games_container(root)
        elements = find_game_elements(container)

        files = set()
        if rom_path:
            try:
                files = set(list_directory(rom_path, self.rom_extension))
            except ScannerError as e:
                logger.warning(f"Availability check disabled: {e}")

        builder = FacetIndexBuilder()
        games = []
        for element in elements:
            game = self.parse_game(element)
            game.available = game.path in files
            builder.observe(game)
            games.append(game)

        logger.info(
            f"Loaded {len(games)} games from {xml_path} ({fmt.label} format"
            + (f", {sum(g.available for g in games)} available)" if rom_path else ")")
        )

        return sort_games(games), builder.finalize()

    def parse_game(self, element: etree._Element) -> Game:
        """
        Parse a single <jeu> or <game> element.

        Args:
            element: Game element

        Returns:
            Game record
        """
        if Format.from_game_tag(element.tag) is Format.FRONTEND:
            return self._parse_frontend_game(element)
        return self._parse_native_game(element)

    def _parse_native_game(self, elem: etree._Element) -> Game:
        game = Game(
            id=elem.get('id', ''),
            rom_id=elem.get('romid', ''),
            not_game=elem.get('notgame', ''),
            path=self._get_text(elem, 'path'),
            clone_of=self._get_text(elem, 'cloneof') or NOT_A_CLONE,
            system=self._get_company(elem, 'systeme'),
            developer=self._get_company(elem, 'developpeur'),
            editor=self._get_company(elem, 'editeur'),
            players=self._get_text(elem, 'joueurs'),
            topstaff=self._get_text(elem, 'topstaff'),
            rating=self._get_text(elem, 'note'),
            rotation=self._get_text(elem, 'rotation'),
            resolution=self._get_text(elem, 'resolution'),
            inputs=self._get_text(elem, 'controles'),
            colors=self._get_text(elem, 'couleurs'),
        )

        game.names = self._get_localized(elem, 'noms/nom', 'region')
        game.synopses = self._get_localized(elem, 'synopsis/synopsis', 'langue')
        game.dates = self._get_localized(elem, 'dates/date', 'region')
        game.countries = [r.text for r in elem.findall('regions/region') if r.text]

        for genre_elem in elem.findall('genres/genre'):
            game.genres.append(Genre(
                key=genre_elem.get('langue', ''),
                text=genre_elem.text or '',
                id=genre_elem.get('id', ''),
                main=genre_elem.get('principale', ''),
                parent_id=genre_elem.get('parentid', ''),
            ))

        for media_elem in elem.findall('medias/media'):
            game.medias.append(Media(
                parent=media_elem.get('parent', ''),
                type=media_elem.get('type', ''),
                region=media_elem.get('region', ''),
                crc=media_elem.get('crc', ''),
                md5=media_elem.get('md5', ''),
                sha1=media_elem.get('sha1', ''),
                format=media_elem.get('format', ''),
                support=media_elem.get('support', ''),
                url=media_elem.text or '',
            ))

        return game

    def _parse_frontend_game(self, elem: etree._Element) -> Game:
        game = Game(
            id=elem.get('id', ''),
            source=elem.get('source', ''),
            path=self._get_text(elem, 'path'),
            rating=self._get_text(elem, 'rating'),
            players=self._get_text(elem, 'players'),
            developer=CompanyRef(text=self._get_text(elem, 'developer')),
            editor=CompanyRef(text=self._get_text(elem, 'publisher')),
        )

        name = self._get_text(elem, 'name')
        if name:
            game.names.append(LocalizedText(REGION_WORLD, name))
        desc = self._get_text(elem, 'desc')
        if desc:
            game.synopses.append(LocalizedText(LANGUAGE_EN, desc))
        date = self._get_text(elem, 'releasedate')
        if date:
            game.dates.append(LocalizedText(REGION_WORLD, date))
        genre = self._get_text(elem, 'genre')
        if genre:
            game.genres.append(Genre(LANGUAGE_EN, genre))

        for slot, media_type in FRONTEND_MEDIA_SLOTS:
            url = self._get_text(elem, slot)
            if url:
                game.medias.append(Media(
                    type=media_type,
                    region=REGION_SS,
                    format=format_from_path(url),
                    url=url,
                ))

        return game

    def _get_text(self, element: etree._Element, tag: str) -> str:
        """Get text content of child element ('' if missing)."""
        child = element.find(tag)
        return child.text if child is not None and child.text else ''

    def _get_company(self, element: etree._Element, tag: str) -> CompanyRef:
        child = element.find(tag)
        if child is None:
            return CompanyRef()
        return CompanyRef(id=child.get('id', ''), text=child.text or '')

    def _get_localized(self, element: etree._Element, path: str, attribute: str) -> List[LocalizedText]:
        return [
            LocalizedText(child.get(attribute, ''), child.text or '')
            for child in element.findall(path)
        ]
