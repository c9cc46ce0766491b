"""
XML writer for gamelist documents.

Writes games in the native ScreenScraper schema or the EmulationStation
frontend schema.
"""

import logging
from pathlib import Path
from typing import List, Union

from lxml import etree

from ssgamelist.media.media_paths import (
    FRONTEND_MEDIA_SLOTS,
    NATIVE_MEDIA_TYPES,
    export_media_url,
)
from ssgamelist.scanner.rom_lister import make_dir
from .errors import WriteError
from .game import Game, LANGUAGE_EN, REGION_SS
from .schema import Format

logger = logging.getLogger(__name__)


class GameListWriter:
    """
    Writes gamelist documents.

    Features:
    - Native schema: every region/language entry, synopses and genres
      restricted to the export language, media restricted to miximage,
      3D box and video
    - Frontend schema: one resolved value per field and three media slots
    - Remote media URLs rewritten to local media/<type>/ paths
    - Pretty-printed UTF-8 output
    """

    def __init__(self, fmt: Format = Format.NATIVE, language: str = LANGUAGE_EN):
        """
        Initialize gamelist writer.

        Args:
            fmt: Output schema
            language: Language code for synopses and genres
        """
        self.format = fmt
        self.language = language

    def write(self, games: List[Game], output_path: Union[str, Path]) -> None:
        """
        Write games to a gamelist file in the given order.

        Args:
            games: Games to write
            output_path: Destination file

        Raises:
            WriteError: If the document cannot be serialized or written
        """
        output_path = Path(output_path)
        root = self.build_document(games)
        tree = etree.ElementTree(root)

        try:
            make_dir(output_path.parent)
            tree.write(
                str(output_path),
                encoding='utf-8',
                xml_declaration=True,
                pretty_print=True
            )
        except (OSError, etree.SerialisationError) as e:
            raise WriteError(f"Failed to write gamelist {output_path}: {e}") from e

        logger.info(f"Wrote {len(games)} games to {output_path} ({self.format.label} format)")

    def build_document(self, games: List[Game]) -> etree._Element:
        """
        Build the document root for a list of games.

        Raises:
            WriteError: If a value cannot be stored in XML
        """
        root = etree.Element(self.format.root_tag)
        container = root
        if self.format.wrapper_tag:
            container = etree.SubElement(root, self.format.wrapper_tag)

        for game in games:
            try:
                if self.format is Format.FRONTEND:
                    container.append(self._create_frontend_game(game))
                else:
                    container.append(self._create_native_game(game))
            except ValueError as e:
                # lxml rejects control characters and NULs
                raise WriteError(f"Cannot serialize game '{game.path}': {e}") from e

        return root

    def _create_frontend_game(self, game: Game) -> etree._Element:
        elem = etree.Element(Format.FRONTEND.game_tag)
        elem.set('id', game.id)
        elem.set('source', game.source)

        self._add_element(elem, 'path', game.path)
        self._add_element(elem, 'name', game.get_name().text)
        self._add_element(elem, 'desc', game.get_synopsis(self.language).text)
        self._add_element(elem, 'rating', game.rating)
        self._add_element(elem, 'releasedate', game.get_date().text)
        self._add_element(elem, 'developer', game.developer.text)
        self._add_element(elem, 'publisher', game.editor.text)
        self._add_element(elem, 'genre', game.get_genre(self.language).text)
        self._add_element(elem, 'players', game.players)

        for slot, media_type in FRONTEND_MEDIA_SLOTS:
            media = game.get_media(media_type, REGION_SS)
            if media.url:
                self._add_element(
                    elem, slot,
                    export_media_url(media.url, media_type, game.path, media.format)
                )

        return elem

    def _create_native_game(self, game: Game) -> etree._Element:
        elem = etree.Element(Format.NATIVE.game_tag)
        elem.set('id', game.id)
        elem.set('romid', game.rom_id)
        elem.set('notgame', game.not_game)

        self._add_element(elem, 'path', game.path)

        names = etree.SubElement(elem, 'noms')
        for name in game.names:
            child = self._add_element(names, 'nom', name.text)
            child.set('region', name.key)

        regions = etree.SubElement(elem, 'regions')
        for country in game.countries:
            self._add_element(regions, 'region', country)

        self._add_element(elem, 'cloneof', game.clone_of)

        system = etree.SubElement(elem, 'systeme')
        if game.system.id:
            system.set('id', game.system.id)
            system.text = game.system.text

        synopses = etree.SubElement(elem, 'synopsis')
        for synopsis in game.synopses:
            if synopsis.key != self.language:
                continue
            child = self._add_element(synopses, 'synopsis', synopsis.text)
            child.set('langue', synopsis.key)

        medias = etree.SubElement(elem, 'medias')
        for media in game.medias:
            if media.type not in NATIVE_MEDIA_TYPES:
                continue
            child = etree.SubElement(medias, 'media')
            child.set('parent', media.parent)
            child.set('type', media.type)
            child.set('region', media.region)
            child.set('crc', media.crc)
            child.set('md5', media.md5)
            child.set('sha1', media.sha1)
            child.set('format', media.format)
            child.set('support', media.support)
            if media.url:
                child.text = export_media_url(media.url, media.type, game.path, media.format)

        dates = etree.SubElement(elem, 'dates')
        for date in game.dates:
            child = self._add_element(dates, 'date', date.text)
            child.set('region', date.key)

        developer = self._add_element(elem, 'developpeur', game.developer.text)
        developer.set('id', game.developer.id)

        editor = self._add_element(elem, 'editeur', game.editor.text)
        editor.set('id', game.editor.id)

        genres = etree.SubElement(elem, 'genres')
        for genre in game.genres:
            if genre.key != self.language:
                continue
            child = self._add_element(genres, 'genre', genre.text)
            child.set('id', genre.id)
            child.set('principale', genre.main)
            child.set('parentid', genre.parent_id)
            child.set('langue', genre.key)

        self._add_element(elem, 'joueurs', game.players)
        self._add_element(elem, 'topstaff', game.topstaff)
        self._add_element(elem, 'note', game.rating)
        self._add_element(elem, 'rotation', game.rotation)
        self._add_element(elem, 'resolution', game.resolution)
        self._add_element(elem, 'controles', game.inputs)
        self._add_element(elem, 'couleurs', game.colors)

        return elem

    def _add_element(self, parent: etree._Element, tag: str, text: str) -> etree._Element:
        """
        Add a child element with text content.

        Args:
            parent: Parent element
            tag: Element tag name
            text: Text content (will be XML-escaped by lxml)

        Returns:
            The new element
        """
        elem = etree.SubElement(parent, tag)
        if text:
            elem.text = text
        return elem
