"""
Game record model.

Defines the game record parsed from a gamelist document together with its
localized sub-records (names, synopses, genres, dates, media).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

# ScreenScraper region codes
REGION_WORLD = 'wor'
REGION_SS = 'ss'

# ScreenScraper language codes
LANGUAGE_EN = 'en'

# Sentinel clone-of value for parent (non-clone) games
NOT_A_CLONE = '0'


@dataclass
class LocalizedText:
    """Text tagged by a region or language code."""
    key: str = ''  # Region ('wor', 'us', ...) or language ('en', 'fr', ...)
    text: str = ''


@dataclass
class Genre(LocalizedText):
    """Localized genre with ScreenScraper genre ids."""
    id: str = ''
    main: str = ''  # "1" for the main genre
    parent_id: str = ''


@dataclass
class Media:
    """Media reference (image, video) attached to a game."""
    parent: str = ''
    type: str = ''  # ScreenScraper media type (e.g., 'mixrbv2', 'video')
    region: str = ''
    crc: str = ''
    md5: str = ''
    sha1: str = ''
    format: str = ''  # File extension without dot (e.g., 'png')
    support: str = ''
    url: str = ''  # Remote URL or local relative path


@dataclass
class CompanyRef:
    """Id/text pair used for system, editor and developer."""
    id: str = ''
    text: str = ''


T = TypeVar('T', bound=LocalizedText)


def resolve(
    collection: Sequence[T],
    requested: str,
    fallback: str,
    default: T,
) -> T:
    """
    Pick the best localized entry from a collection.

    Order: entry tagged ``requested``, then entry tagged ``fallback``, then
    the first entry, then ``default``.

    Args:
        collection: Localized entries
        requested: Wanted region/language code
        fallback: Region/language code used when requested is missing
        default: Value returned for an empty collection

    Returns:
        Matching entry
    """
    for key in (requested, fallback):
        for item in collection:
            if item.key == key:
                return item
    if collection:
        return collection[0]
    return default


@dataclass
class Game:
    """
    A game record from a gamelist document.

    ``available`` is computed at load time from the ROM directory listing and
    is never written back to XML.
    """
    # Identity
    id: str = ''
    rom_id: str = ''
    source: str = ''
    path: str = ''  # ROM filename (e.g., "sonic.zip")
    clone_of: str = NOT_A_CLONE  # Parent rom_id, "0" for parents
    not_game: str = ''

    # Scalar facets
    system: CompanyRef = field(default_factory=CompanyRef)
    editor: CompanyRef = field(default_factory=CompanyRef)
    developer: CompanyRef = field(default_factory=CompanyRef)
    players: str = ''
    rating: str = ''
    topstaff: str = ''
    rotation: str = ''
    resolution: str = ''
    inputs: str = ''
    colors: str = ''

    # Localized collections
    names: List[LocalizedText] = field(default_factory=list)  # by region
    synopses: List[LocalizedText] = field(default_factory=list)  # by language
    genres: List[Genre] = field(default_factory=list)  # by language
    dates: List[LocalizedText] = field(default_factory=list)  # by region
    countries: List[str] = field(default_factory=list)
    medias: List[Media] = field(default_factory=list)

    available: bool = False

    def is_empty(self) -> bool:
        """True for the default record returned by failed lookups."""
        return not self.rom_id and not self.path and not self.names

    def is_clone(self) -> bool:
        return self.clone_of != NOT_A_CLONE

    def get_name(self, region: str = REGION_WORLD) -> LocalizedText:
        return resolve(self.names, region, REGION_WORLD, LocalizedText(region))

    def get_synopsis(self, language: str = LANGUAGE_EN) -> LocalizedText:
        return resolve(self.synopses, language, LANGUAGE_EN, LocalizedText(language))

    def get_genre(self, language: str = LANGUAGE_EN) -> Genre:
        return resolve(self.genres, language, LANGUAGE_EN, Genre(language))

    def get_date(self, region: str = REGION_WORLD) -> LocalizedText:
        return resolve(self.dates, region, REGION_WORLD, LocalizedText(region))

    def get_media(self, media_type: str, region: str = REGION_SS) -> Media:
        """
        Get media of a type, preferring the requested region.

        Falls back to the world region, then to any media of that type.

        Args:
            media_type: ScreenScraper media type (e.g., 'mixrbv2')
            region: Preferred region code

        Returns:
            Media entry, or an empty Media if the game has none of that type
        """
        candidates = [media for media in self.medias if media.type == media_type]
        for key in (region, REGION_WORLD):
            for media in candidates:
                if media.region == key:
                    return media
        if candidates:
            return candidates[0]
        return Media(type=media_type, region=region)


def display_name(game: Game) -> str:
    """Sort key: resolved world name."""
    return game.get_name().text


def sort_games(games: List[Game]) -> List[Game]:
    """Return games sorted by display name (ordinal, stable)."""
    return sorted(games, key=display_name)


def format_game(game: Game, language: Optional[str] = None) -> str:
    """
    Build a multi-line human readable summary of a game.

    Args:
        game: Game to describe
        language: Language for synopsis and genre (default: 'en')

    Returns:
        Summary text
    """
    language = language or LANGUAGE_EN
    lines = [
        f"name: {game.get_name().text}",
        f"id: {game.id} romid: {game.rom_id} source: {game.source}",
        f"path: {game.path} (available: {'yes' if game.available else 'no'})",
        f"cloneof: {game.clone_of}",
        f"system: {game.system.text} ({game.system.id})",
        f"developer: {game.developer.text}",
        f"editor: {game.editor.text}",
        f"players: {game.players} rating: {game.rating} topstaff: {game.topstaff}",
        f"rotation: {game.rotation} resolution: {game.resolution}",
        f"date: {game.get_date().text}",
        f"genre: {game.get_genre(language).text}",
        f"regions: {', '.join(game.countries)}",
    ]
    for media in game.medias:
        lines.append(f"media: {media.type} ({media.region}, {media.format}): {media.url}")
    synopsis = game.get_synopsis(language).text
    if synopsis:
        lines.append(f"synopsis: {synopsis}")
    return '\n'.join(lines)
