"""
Media path rules for gamelist export.

Remote ScreenScraper media URLs are replaced on export by the local path the
media is expected to be downloaded to: media/<type>/<rom base name>.<format>
"""

import posixpath
from typing import Tuple

# ScreenScraper media types kept in native exports
MIXIMAGE = 'mixrbv2'
BOX_3D = 'box-3D'
VIDEO = 'video'

NATIVE_MEDIA_TYPES = (MIXIMAGE, BOX_3D, VIDEO)

# EmulationStation element name -> ScreenScraper media type
FRONTEND_MEDIA_SLOTS: Tuple[Tuple[str, str], ...] = (
    ('image', MIXIMAGE),
    ('thumbnail', BOX_3D),
    ('video', VIDEO),
)

REMOTE_PREFIX = 'http'

MEDIA_ROOT = 'media'


def is_remote_url(url: str) -> bool:
    return url.startswith(REMOTE_PREFIX)


def local_media_path(media_type: str, rom_path: str, media_format: str) -> str:
    """
    Build the local relative path for a media file.

    Args:
        media_type: ScreenScraper media type (e.g., 'mixrbv2')
        rom_path: ROM filename from the gamelist (e.g., 'sonic.zip')
        media_format: Media file extension without dot (e.g., 'png')

    Returns:
        Relative path, e.g. 'media/mixrbv2/sonic.png'

    Example:
        >>> local_media_path('mixrbv2', 'sonic.zip', 'png')
        'media/mixrbv2/sonic.png'
    """
    base = rom_path[2:] if rom_path.startswith('./') else rom_path
    base = posixpath.splitext(base)[0]
    extension = f".{media_format}" if media_format else ''
    return f"{MEDIA_ROOT}/{media_type}/{base}{extension}"


def export_media_url(url: str, media_type: str, rom_path: str, media_format: str) -> str:
    """Return the URL to write: remote URLs rewritten, local paths unchanged."""
    if is_remote_url(url):
        return local_media_path(media_type, rom_path, media_format)
    return url


def format_from_path(path: str) -> str:
    """Media format (extension without dot) from a media path or URL."""
    return posixpath.splitext(path)[1].lstrip('.')
