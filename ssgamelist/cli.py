"""Command-line interface for ssgamelist."""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from ssgamelist import __version__
from ssgamelist.config.loader import load_config, get_config_value, ConfigError
from ssgamelist.config.validator import validate_config, ValidationError
from ssgamelist.gamelist import FACET_NAMES, WILDCARD, Format, GameList, format_game

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='ssgamelist',
        description='ScreenScraper / EmulationStation gamelist manager',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show counts and facet values
  ssgamelist info gamelist.xml --roms /roms/fbneo

  # List available Capcom games, clones excluded
  ssgamelist filter gamelist.xml --roms /roms/fbneo --available --no-clones --editor Capcom

  # Convert to an EmulationStation gamelist
  ssgamelist export gamelist.xml /roms/fbneo/gamelist.xml --format frontend

  # Repair clone links from a FinalBurn Neo dat
  ssgamelist fix-clones gamelist.xml fbneo.dat --output gamelist-fixed.xml
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to ssgamelist.yaml (default: ./ssgamelist.yaml if present)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging. Overrides config.'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    info = subparsers.add_parser('info', help='Show gamelist counts and facet values')
    info.add_argument('gamelist', type=Path, help='Gamelist XML file')
    info.add_argument('--roms', type=Path, metavar='DIR', help='ROM directory for availability')

    filt = subparsers.add_parser('filter', help='Filter games by facet')
    filt.add_argument('gamelist', type=Path, help='Gamelist XML file')
    filt.add_argument('--roms', type=Path, metavar='DIR', help='ROM directory for availability')
    filt.add_argument('--available', action='store_true', help='Only games found in the ROM directory')
    filt.add_argument('--no-clones', action='store_true', help='Exclude clones')
    for facet in FACET_NAMES:
        filt.add_argument(
            f'--{facet}',
            default=WILDCARD,
            metavar='VALUE',
            help=f'Exact {facet} value (default: {WILDCARD})'
        )
    filt.add_argument('--output', type=Path, metavar='PATH', help='Save the filtered gamelist')
    _add_export_arguments(filt)

    show = subparsers.add_parser('show', help='Show one game')
    show.add_argument('gamelist', type=Path, help='Gamelist XML file')
    show.add_argument('rom_id', help='ROM id of the game')
    show.add_argument('--roms', type=Path, metavar='DIR', help='ROM directory for availability')
    show.add_argument('--language', metavar='CODE', help='Language for synopsis and genre')

    export = subparsers.add_parser('export', help='Write the gamelist in a given schema')
    export.add_argument('gamelist', type=Path, help='Gamelist XML file')
    export.add_argument('output', type=Path, help='Destination file')
    _add_export_arguments(export)

    fix = subparsers.add_parser('fix-clones', help='Repair clone links from a reference dat')
    fix.add_argument('gamelist', type=Path, help='Gamelist XML file')
    fix.add_argument('dat', type=Path, nargs='?', help='Reference dat (default: paths.reference_dat)')
    fix.add_argument('--output', type=Path, metavar='PATH', help='Destination (default: overwrite gamelist)')
    _add_export_arguments(fix)

    return parser


def _add_export_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--format',
        choices=['native', 'frontend'],
        help='Output schema. Overrides config.'
    )
    parser.add_argument(
        '--language',
        metavar='CODE',
        help='Output language code (e.g., en, fr). Overrides config.'
    )


def _setup_logging(config: dict, verbose: bool = False) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
        verbose: Force DEBUG level
    """
    logging_config = config.get('logging', {})

    # Get log level
    level_str = 'DEBUG' if verbose else str(logging_config.get('level', 'INFO')).upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        handlers.append(console_handler)

    # File handler (if configured)
    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except OSError as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)

    if not handlers:
        handlers.append(logging.NullHandler())

    # Configure root logger
    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for ssgamelist CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, 1 for failure, 2 for configuration errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load and validate configuration
    try:
        config = load_config(str(args.config) if args.config else None)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    _setup_logging(config, verbose=args.verbose)
    logger.debug(f"Running command: {args.command}")

    commands = {
        'info': cmd_info,
        'filter': cmd_filter,
        'show': cmd_show,
        'export': cmd_export,
        'fix-clones': cmd_fix_clones,
    }

    try:
        return commands[args.command](config, args, Console())
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 130


def _load(config: dict, args: argparse.Namespace) -> Optional[GameList]:
    """Load the gamelist named on the command line, None on failure."""
    roms = getattr(args, 'roms', None) or get_config_value(config, 'paths.roms')
    game_list = GameList(
        rom_extension=get_config_value(config, 'scanner.rom_extension', 'zip')
    )
    if not game_list.load(args.gamelist, roms):
        print(f"Error: {game_list.last_error}", file=sys.stderr)
        return None
    return game_list


def _export_options(config: dict, args: argparse.Namespace):
    """Resolve (format, language) from arguments, then config."""
    fmt = Format.from_label(args.format or get_config_value(config, 'export.format', 'native'))
    language = args.language or get_config_value(config, 'export.language', 'en')
    return fmt, language


def cmd_info(config: dict, args: argparse.Namespace, console: Console) -> int:
    game_list = _load(config, args)
    if game_list is None:
        return 1

    clones = sum(1 for game in game_list if game.is_clone())
    console.print(f"[bold]{args.gamelist}[/bold]")
    console.print(
        f"games: {len(game_list)}  available: {game_list.available_count()}  clones: {clones}"
    )

    table = Table(title="Facets", box=box.SIMPLE)
    table.add_column("Facet", style="cyan")
    table.add_column("Values")
    for facet in FACET_NAMES:
        values = game_list.facets[facet][1:]
        table.add_row(facet, ', '.join(value or '""' for value in values))
    console.print(table)
    return 0


def cmd_filter(config: dict, args: argparse.Namespace, console: Console) -> int:
    game_list = _load(config, args)
    if game_list is None:
        return 1

    selections = {facet: getattr(args, facet) for facet in FACET_NAMES}
    result = game_list.filter(
        available=args.available,
        include_clones=not args.no_clones,
        **selections
    )

    if args.output:
        fmt, language = _export_options(config, args)
        if not result.save(args.output, language, fmt):
            print(f"Error: {result.last_error}", file=sys.stderr)
            return 1
        console.print(f"Saved {len(result)} games to {args.output}")
        return 0

    table = Table(box=box.SIMPLE)
    table.add_column("ROM id", style="cyan")
    table.add_column("Name")
    table.add_column("Path")
    table.add_column("Clone of")
    for game in result:
        table.add_row(game.rom_id, game.get_name().text, game.path, game.clone_of)
    console.print(table)
    console.print(f"{len(result)}/{len(game_list)} games match")
    return 0


def cmd_show(config: dict, args: argparse.Namespace, console: Console) -> int:
    game_list = _load(config, args)
    if game_list is None:
        return 1

    game = game_list.find(args.rom_id)
    if game.is_empty():
        print(f"Error: no game with romid {args.rom_id}", file=sys.stderr)
        return 1

    language = args.language or get_config_value(config, 'export.language', 'en')
    console.print(format_game(game, language), markup=False, highlight=False)
    return 0


def cmd_export(config: dict, args: argparse.Namespace, console: Console) -> int:
    game_list = _load(config, args)
    if game_list is None:
        return 1

    fmt, language = _export_options(config, args)
    if not game_list.save(args.output, language, fmt):
        print(f"Error: {game_list.last_error}", file=sys.stderr)
        return 1

    console.print(f"Saved {len(game_list)} games to {args.output} ({fmt.label})")
    return 0


def cmd_fix_clones(config: dict, args: argparse.Namespace, console: Console) -> int:
    dat = args.dat or get_config_value(config, 'paths.reference_dat')
    if not dat:
        print("Error: no reference dat given (argument or paths.reference_dat)", file=sys.stderr)
        return 1

    game_list = _load(config, args)
    if game_list is None:
        return 1

    if not game_list.fix_clones(dat):
        print(f"Error: {game_list.last_error}", file=sys.stderr)
        return 1

    report = game_list.clone_report
    console.print(report.summary())
    if report.inconsistent:
        console.print(
            f"[yellow]Inconsistent parents (left unchanged): {', '.join(report.inconsistent)}[/yellow]"
        )

    output = args.output or args.gamelist
    fmt, language = _export_options(config, args)
    if not game_list.save(output, language, fmt):
        print(f"Error: {game_list.last_error}", file=sys.stderr)
        return 1

    console.print(f"Saved {len(game_list)} games to {output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
