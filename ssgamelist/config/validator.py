"""Configuration validation."""

import logging
import re
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

VALID_FORMATS = ('native', 'frontend')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    # Validate paths section
    errors.extend(_validate_paths(config.get('paths', {})))

    # Validate scanner section
    errors.extend(_validate_scanner(config.get('scanner', {})))

    # Validate export section
    errors.extend(_validate_export(config.get('export', {})))

    # Validate logging section
    errors.extend(_validate_logging(config.get('logging', {})))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )

    logger.debug("Configuration validated")


def _validate_paths(section: Dict[str, Any]) -> List[str]:
    """Validate paths section."""
    errors = []

    if not isinstance(section, dict):
        return ["paths must be a dictionary"]

    for key in ('gamelist', 'roms', 'reference_dat'):
        value = section.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"paths.{key} must be a string")

    return errors


def _validate_scanner(section: Dict[str, Any]) -> List[str]:
    """Validate scanner section."""
    errors = []

    if not isinstance(section, dict):
        return ["scanner must be a dictionary"]

    extension = section.get('rom_extension', 'zip')
    if not isinstance(extension, str) or not extension:
        errors.append("scanner.rom_extension must be a non-empty string")
    elif extension.startswith('.'):
        errors.append("scanner.rom_extension must not start with a dot (use 'zip', not '.zip')")

    return errors


def _validate_export(section: Dict[str, Any]) -> List[str]:
    """Validate export section."""
    errors = []

    if not isinstance(section, dict):
        return ["export must be a dictionary"]

    fmt = section.get('format', 'native')
    if fmt not in VALID_FORMATS:
        errors.append(
            f"export.format must be one of: {', '.join(VALID_FORMATS)} (got '{fmt}')"
        )

    language = section.get('language', 'en')
    if not isinstance(language, str) or not re.fullmatch(r'[a-z]{2}', language):
        errors.append(f"export.language must be a 2-letter language code (got '{language}')")

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging section."""
    errors = []

    if not isinstance(section, dict):
        return ["logging must be a dictionary"]

    level = section.get('level', 'INFO')
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"logging.level must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if 'console' in section and not isinstance(section['console'], bool):
        errors.append("logging.console must be a boolean")

    log_file = section.get('file')
    if log_file is not None and not isinstance(log_file, str):
        errors.append("logging.file must be a string")

    return errors
