"""
Gamelist document schemas.

Two vocabularies are supported:
- NATIVE: ScreenScraper multi-locale schema (Data > jeux > jeu)
- FRONTEND: EmulationStation single-locale schema (gameList > game)
"""

from enum import Enum
from typing import Optional

from lxml import etree


class Format(Enum):
    """Gamelist schema with its root, wrapper and game tags."""

    NATIVE = ('native', 'Data', 'jeux', 'jeu')
    FRONTEND = ('frontend', 'gameList', None, 'game')

    def __init__(self, label: str, root_tag: str, wrapper_tag: Optional[str], game_tag: str):
        self.label = label
        self.root_tag = root_tag
        self.wrapper_tag = wrapper_tag
        self.game_tag = game_tag

    @classmethod
    def from_label(cls, label: str) -> 'Format':
        """
        Get format from its configuration label.

        Raises:
            ValueError: If label is not 'native' or 'frontend'
        """
        for fmt in cls:
            if fmt.label == label.lower():
                return fmt
        raise ValueError(f"Unknown gamelist format: {label}")

    @classmethod
    def from_root_tag(cls, tag: str) -> Optional['Format']:
        """Probe root tags in order (Data, then gameList). Case-sensitive."""
        for fmt in cls:
            if fmt.root_tag == tag:
                return fmt
        return None

    @classmethod
    def from_game_tag(cls, tag: str) -> Optional['Format']:
        for fmt in cls:
            if fmt.game_tag == tag:
                return fmt
        return None


def find_games_container(root: etree._Element) -> etree._Element:
    """Return the <jeux> wrapper if present, else the root itself."""
    wrapper = root.find(Format.NATIVE.wrapper_tag)
    return wrapper if wrapper is not None else root


def find_game_elements(container: etree._Element) -> list:
    """
    Return game elements of the container.

    Probes <jeu> first, then <game>; the first tag found decides.
    """
    for fmt in Format:
        elements = container.findall(fmt.game_tag)
        if elements:
            return elements
    return []
