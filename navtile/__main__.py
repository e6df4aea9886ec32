"""navtile-tool: reduce map tiles to the 8-colour device palette and pack them.

Usage: uv run navtile-tool <strategy> <out_dir> <image>... [options]

Strategies are auto-discovered from navtile/strategies/.
Each strategy module's docstring is its documentation.
Run `navtile-tool help <strategy>` for full module docs.

Every input image is written to <out_dir>/<path>.raw: 4 bits per pixel,
two pixels per byte, high nibble first, rows top to bottom. Relative inputs
keep their directories (14/8529/5975.png -> <out_dir>/14/8529/5975.raw);
absolute inputs keep only their file name. An input whose output name was
already written in the same run is reported as an error, never overwritten.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, navtile-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from navtile import registry
from navtile.core.diagnostics import CalibrationSink, ConsoleSink, DiagnosticSink, TeeSink
from navtile.core.encoder import DecodeError, census, classify_image, decode_image, pack_codes, render_preview
from navtile.core.env import Settings, load_env, load_settings
from navtile.core.palette import PaletteColour, code_for
from navtile.core.report import format_json, format_text
from navtile.core.types import EncodeReport, Strategy

logger = logging.getLogger('navtile')

err_console = Console(stderr=True, highlight=False)


def _load_strategy_module(name: str) -> object:
    """Load the raw module for a strategy (for docstring access)."""
    return importlib.import_module(f'navtile.strategies.{name}')


def _short_doc(name: str, strat: Strategy) -> str:
    doc = (_load_strategy_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else strat.help


def _add_encode_args(p: argparse.ArgumentParser) -> None:
    p.add_argument('out_dir', help='Directory for .raw (and preview) files')
    p.add_argument('images', nargs='+', help='Tile images (PNG, JPEG, ... detected from content)')
    p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
    p.add_argument('-d', '--diagnostics', action='store_true', help='Print a swatch line per pixel to stderr')
    p.add_argument(
        '-c',
        '--calibrate',
        action='store_true',
        help='Collect colours missing from the exact table and print paste-ready entries',
    )
    p.add_argument('-p', '--preview', action='store_true', help='Also write a .preview.png next to each .raw')


def _build_parser() -> argparse.ArgumentParser:
    strategies = registry.all_strategies()

    epilog = (
        'Examples:\n'
        '  navtile-tool perceptual ./tiles 8529.png 8530.png\n'
        '  navtile-tool exact ./tiles 8529.png --calibrate\n'
        '  navtile-tool encode ./tiles 8529.png --strategy exact --preview\n'
        '  navtile-tool perceptual ./tiles 8529.png --json\n'
        '  navtile-tool help exact\n'
        '  navtile-tool palette\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  NAVTILE_STRATEGY=perceptual   strategy for `encode`\n'
        '  NAVTILE_DIAGNOSTICS=0         per-pixel swatches\n'
        '  NAVTILE_PREVIEW=0             write preview PNGs\n'
        '  NAVTILE_LOG_LEVEL=INFO\n'
    )

    parser = argparse.ArgumentParser(
        prog='navtile-tool',
        description='Reduce map tiles to the 8-colour device palette and pack them 4 bits per pixel.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Errors only')
    sub = parser.add_subparsers(dest='command', help='Strategy or command to run')

    # One subcommand per strategy, help text from the module docstring
    for name, strat in sorted(strategies.items()):
        p = sub.add_parser(name, help=_short_doc(name, strat))
        _add_encode_args(p)

    enc = sub.add_parser('encode', help='Encode with the strategy from --strategy or NAVTILE_STRATEGY')
    _add_encode_args(enc)
    enc.add_argument('-s', '--strategy', default=None, help=f'One of: {", ".join(sorted(strategies))}')

    help_parser = sub.add_parser('help', help='Print full docs for a strategy')
    help_parser.add_argument('strategy_name', nargs='?', metavar='strategy', help='Strategy name')

    sub.add_parser('palette', help='Print the device palette and its codes')

    return parser


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format='%(message)s',
        datefmt='[%X]',
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def _print_help(name: str | None) -> int:
    """Print full module docstring for a strategy."""
    strategies = registry.all_strategies()

    if name is None:
        print('Available strategies:\n')
        for sname, strat in sorted(strategies.items()):
            print(f'  {sname:<12} {_short_doc(sname, strat)}')
        print('\nRun: navtile-tool help <strategy> for full docs.')
        return 0

    if name not in strategies:
        print(f'Unknown strategy: {name}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(strategies))}', file=sys.stderr)
        return 1

    doc = (_load_strategy_module(name).__doc__ or '').strip()
    print(doc if doc else f'(No module docs for {name!r})')
    return 0


def _print_palette() -> int:
    out = Console(highlight=False)
    for colour in PaletteColour:
        r, g, b = colour.rgb
        swatch = Text('    ', style=f'on rgb({r},{g},{b})')
        out.print(Text.assemble(f'{code_for(colour)}  ', swatch, f'  {colour.name.lower():<8} #{colour.hex}'))
    return 0


def _build_sink(diagnostics: bool, calibration: CalibrationSink | None) -> DiagnosticSink | None:
    sinks: list[DiagnosticSink] = []
    if diagnostics:
        sinks.append(ConsoleSink(err_console))
    if calibration is not None:
        sinks.append(calibration)
    if not sinks:
        return None
    if len(sinks) == 1:
        return sinks[0]
    return TeeSink(*sinks)


def _output_base(path: Path, out_dir: Path) -> Path:
    """Output path without suffix.

    Relative inputs keep their directories, so 14/8529/5975.png becomes
    out_dir/14/8529/5975. Absolute inputs and ones climbing out with '..'
    only keep their stem.
    """
    if path.is_absolute() or '..' in path.parts:
        return out_dir / path.stem
    return out_dir / path.with_suffix('')


def _encode_file(
    path: Path,
    out_dir: Path,
    strategy: Strategy,
    sink: DiagnosticSink | None,
    preview: bool,
    report: EncodeReport,
    claimed: dict[Path, Path],
) -> None:
    """Encode one tile file into out_dir, recording the outcome in report.

    claimed maps each output base already written in this run to its input,
    so a second input with the same output name is reported instead of
    overwriting the first.
    """
    base = _output_base(path, out_dir)
    if base in claimed:
        logger.error('%s: output %s.raw already written for %s', path, base, claimed[base])
        report.add_error(str(path), f'output name clashes with {claimed[base]}')
        return

    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.error('cannot read %s: %s', path, exc)
        report.add_error(str(path), f'cannot read: {exc.strerror or exc}')
        return

    try:
        image = decode_image(data)
    except DecodeError as exc:
        logger.error('%s: %s', path, exc)
        report.add_error(str(path), str(exc))
        return

    colours = classify_image(image, strategy, sink)
    packed = pack_codes(code_for(c) for c in colours)

    out_path = base.with_name(f'{base.name}.raw')
    preview_path = base.with_name(f'{base.name}.preview.png') if preview else None
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(packed)
        logger.info('wrote %s (%d bytes)', out_path, len(packed))
        if preview_path is not None:
            render_preview(colours, image.size).save(preview_path)
            logger.debug('wrote %s', preview_path)
    except OSError as exc:
        logger.error('cannot write output for %s: %s', path, exc)
        report.add_error(str(path), f'cannot write: {exc.strerror or exc}')
        return
    claimed[base] = path

    report.add_tile(
        str(path),
        image.size,
        str(out_path),
        len(packed),
        census(colours),
        preview_path=str(preview_path) if preview_path else None,
    )


def _run_encode(args: argparse.Namespace, settings: Settings, strategy_name: str) -> int:
    try:
        strategy = registry.get(strategy_name)
    except KeyError as exc:
        print(f'Error: {exc.args[0]}', file=sys.stderr)
        return 1

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    calibration = CalibrationSink() if args.calibrate else None
    sink = _build_sink(args.diagnostics or settings.diagnostics, calibration)
    preview = args.preview or settings.preview

    report = EncodeReport(strategy=strategy.name)
    logger.debug('strategy %s, %d image(s) -> %s', strategy.name, len(args.images), out_dir)
    claimed: dict[Path, Path] = {}
    for raw in args.images:
        _encode_file(Path(raw), out_dir, strategy, sink, preview, report, claimed)

    if calibration is not None:
        report.calibration = calibration.summary()
        report.calibration['entries'] = calibration.entries()

    print(format_json(report) if args.json else format_text(report))
    return 1 if report.error_count else 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        return 1

    level = 'DEBUG' if args.verbose else 'ERROR' if args.quiet else settings.log_level
    _setup_logging(level)
    if env_path:
        logger.debug('loaded %s', env_path)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'help':
        return _print_help(args.strategy_name)

    if args.command == 'palette':
        return _print_palette()

    if args.command == 'encode':
        return _run_encode(args, settings, args.strategy or settings.strategy)

    return _run_encode(args, settings, args.command)


if __name__ == '__main__':
    sys.exit(main())
