"""
Gamelist package for ssgamelist.

Handles parsing, filtering, writing and clone repair of gamelist files.
"""

from .game import Game, LocalizedText, Genre, Media, CompanyRef, resolve, format_game
from .schema import Format
from .errors import GameListError, ParseError, SchemaError, ReferenceLoadError, WriteError
from .facets import FacetIndex, FacetIndexBuilder, FACET_NAMES, WILDCARD
from .parser import GameListParser
from .xml_writer import GameListWriter
from .clone_fixer import CloneReconciler, ReconcileReport
from .game_list import GameList

__all__ = [
    'Game',
    'LocalizedText',
    'Genre',
    'Media',
    'CompanyRef',
    'resolve',
    'format_game',
    'Format',
    'GameListError',
    'ParseError',
    'SchemaError',
    'ReferenceLoadError',
    'WriteError',
    'FacetIndex',
    'FacetIndexBuilder',
    'FACET_NAMES',
    'WILDCARD',
    'GameListParser',
    'GameListWriter',
    'CloneReconciler',
    'ReconcileReport',
    'GameList',
]
