"""
Media path handling for ssgamelist.
"""

from .media_paths import (
    NATIVE_MEDIA_TYPES,
    FRONTEND_MEDIA_SLOTS,
    is_remote_url,
    local_media_path,
    export_media_url,
)

__all__ = [
    "NATIVE_MEDIA_TYPES",
    "FRONTEND_MEDIA_SLOTS",
    "is_remote_url",
    "local_media_path",
    "export_media_url",
]
