"""colour-tool: RGB/HSL colour conversion and cross-representation equality.

Usage: uv run colour-tool <command> [args] [options]

Commands are auto-discovered from colour_checker/commands/.
Each command module's docstring is its documentation.
Run `colour-tool help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, colour-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import os
import sys

from colour_checker import registry
from colour_checker.core.env import load_env, load_settings
from colour_checker.core.report import format_json, format_text
from colour_checker.core.types import Report


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring and argument access)."""
    return importlib.import_module(f'colour_checker.commands.{name}')


def _short_help(mod: object, fallback: str) -> str:
    doc = (getattr(mod, '__doc__', None) or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        "  colour-tool convert '#96323c' 'rgb(128, 128, 128)'\n"
        "  colour-tool compare 'rgb(150, 50, 60)' 'hsl(354, 50%, 39%)' --strict\n"
        "  colour-tool census screenshot.png --expect '#f8fafc' --json\n"
        '  colour-tool help compare\n'
        '\n'
        'Env vars (set in .env or environment):\n'
        '  COLOUR_TOOL_OUTPUT=text|json\n'
        '  COLOUR_TOOL_SAMPLES=10000\n'
    )
    parser = argparse.ArgumentParser(
        prog='colour-tool',
        description='RGB/HSL colour conversion and cross-representation equality.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global --env-file option before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    # Auto-register each command as a subcommand using module docstring
    for name, cmd in sorted(commands.items()):
        mod = _load_command_module(name)
        p = sub.add_parser(name, help=_short_help(mod, cmd.help))
        add_arguments = getattr(mod, 'add_arguments', None)
        if add_arguments is not None:
            add_arguments(p)
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    # `help` subcommand prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_help(_load_command_module(name), cmd.help)}')
        print('\nRun: colour-tool help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'colour-tool: loaded {env_path}', file=sys.stderr)
    settings = load_settings()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(getattr(args, 'topic', None))
        return

    image = getattr(args, 'image', None)
    if image is not None and not os.path.isfile(image):
        print(f'Error: image not found: {image}', file=sys.stderr)
        sys.exit(1)
    if hasattr(args, 'samples') and args.samples is None:
        args.samples = settings.samples

    report = Report(command=args.command)
    try:
        registry.get(args.command).execute(report, args)
    except ValueError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        sys.exit(1)

    if args.json or settings.output == 'json':
        print(format_json(report))
    else:
        print(format_text(report))

    # CI gate must happen after output so report is visible even on failure
    if getattr(args, 'strict', False) and report.fail_count:
        sys.exit(1)


if __name__ == '__main__':
    main()
