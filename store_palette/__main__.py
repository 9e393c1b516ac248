"""store-palette: accessible colour palettes for generated storefronts.

Usage: uv run store-palette <command> [options]

Commands are auto-discovered from store_palette/commands/.
Each command module's docstring is its documentation.
Run `store-palette help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, store-palette looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import sys

from store_palette import registry
from store_palette.core.env import load_env
from store_palette.core.hexcolor import ColorParseError
from store_palette.core.report import format_json, format_text
from store_palette.core.store import StoreFileError
from store_palette.core.types import Report


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'store_palette.commands.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        "  store-palette palette '#3366cc' '#114488' '#ffee00'\n"
        "  store-palette palette --file store.json --fallback '#808080' --json\n"
        "  store-palette contrast '#ffffff' '#767676'\n"
        "  store-palette text '#ffee00'\n"
        "  store-palette audit '#3366cc' '#114488' '#ffee00' --strict\n"
        "  store-palette swatch ./palette.png '#3366cc' '#114488' '#ffee00'\n"
        "  store-palette generate 'a cosy bookshop for rare maps'\n"
        '  store-palette stores list\n'
        '  store-palette help palette\n'
        '\n'
        'Provider env vars (set in .env or environment):\n'
        '  OPENAI_API_KEY  (+ OPENAI_API_URL, OPENAI_MODEL to override)\n'
        '  GROQ_API_KEY    + GROQ_API_URL=https://api.groq.com/openai/v1\n'
        '  Any OpenAI-compatible: NAME_API_KEY + NAME_API_URL\n'
        '  STORE_PALETTE_DB=path/to/stores.json\n'
    )
    parser = argparse.ArgumentParser(
        prog='store-palette',
        description='Accessible colour palettes for generated storefronts.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        cmd.configure(p)
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-s', '--strict', action='store_true', help='Exit 1 if any accessibility check fails')

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_help(name, cmd.help)}')
        print('\nRun: store-palette help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    print(doc or f'(No module docs for {topic!r})')


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else: OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'store-palette: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    report = Report(command=args.command)
    try:
        registry.get(args.command).execute(args, report)
    except (ColorParseError, StoreFileError) as e:
        print(f'store-palette: error: {e}', file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    # CI gate: after output so the failing checks are visible
    if args.strict and report.fail_count:
        sys.exit(1)


if __name__ == '__main__':
    main()
