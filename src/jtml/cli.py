"""
CLI entry point for jtml.

Usage:
    jtml html <file>...                Compile files to HTML (<name>.html)
    jtml format <file>...              Reformat files (<name>.formatted_jtml)
    jtml format --check <file>...      Report files that are not canonically formatted
    jtml parse <file>                  Parse a file and show AST summary
    jtml config                        Show effective configuration
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, List

from . import __version__
from .config import JtmlConfig, write_default_config
from .parser import JtmlError, read_source
from .parser.ast_serde import count_ast_nodes, deserialize_ast, serialize_ast

logger = logging.getLogger(__name__)


def _load_config(args) -> JtmlConfig:
    config = JtmlConfig(args.config)
    if getattr(args, 'ignore_comments', False):
        config.set('ignore_comments', True)
    if getattr(args, 'indent', None) is not None:
        config.set('indent', args.indent)
    return config


def compile_files(filenames: List[str], compile_source: Callable[[str], str], extension: str) -> int:
    """
    Compile each file and write the result next to it with `extension`.

    Errors are reported per file and never stop the batch.
    Returns the number of files that failed.
    """
    failures = 0
    for filename in filenames:
        path = Path(filename)
        if path.is_dir():
            logger.warning(f"{filename} is a directory, skipping")
            continue

        try:
            source = read_source(path)
        except OSError as e:
            logger.error(f"Error reading from {filename} ({e})")
            failures += 1
            continue

        try:
            result = compile_source(source)
        except JtmlError as e:
            logger.error(f"Error compiling '{filename}' ({e})")
            failures += 1
            continue

        output = path.with_suffix(f".{extension}")
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(result)
        except OSError as e:
            logger.error(f"Error creating file {output} ({e})")
            failures += 1
            continue

        logger.info(f"Wrote {output}")

    return failures


def cmd_html(args):
    """Compile jtml files to HTML."""
    from .tools.html import HtmlRenderer

    config = _load_config(args)
    renderer = HtmlRenderer(config.html_options())
    failures = compile_files(args.files, renderer.render_string, config.html_extension)
    return 1 if failures else 0


def cmd_format(args):
    """Reformat jtml files."""
    from .tools.format import JtmlFormatter, check_formatted

    try:
        config = _load_config(args)
        options = config.format_options()
    except ValueError as e:
        logger.error(str(e))
        return 1

    if not args.check:
        formatter = JtmlFormatter(options)
        failures = compile_files(args.files, formatter.format_string, config.formatted_extension)
        return 1 if failures else 0

    unformatted = 0
    for filename in args.files:
        path = Path(filename)
        if path.is_dir():
            logger.warning(f"{filename} is a directory, skipping")
            continue
        try:
            if check_formatted(path, options):
                print(f"✓ {filename} is formatted")
            else:
                print(f"✗ {filename} needs formatting")
                unformatted += 1
        except (OSError, JtmlError) as e:
            logger.error(f"Error compiling '{filename}' ({e})")
            unformatted += 1
    return 1 if unformatted else 0


def cmd_parse(args):
    """Parse a file and show AST summary."""
    from .parser import parse_source

    config = _load_config(args)
    try:
        ast = parse_source(read_source(args.file), config.self_terminating_tags)
    except (OSError, JtmlError) as e:
        logger.error(f"Parse error: {e}")
        return 1

    data = serialize_ast(ast)
    if args.json:
        print(data.decode('utf-8'))
        return 0

    print(f"Parsed: {args.file}")
    print(f"Top-level nodes: {len(ast.nodes)}")
    print(f"Total nodes: {count_ast_nodes(deserialize_ast(data)) - 1}")

    if args.list_nodes:
        for node in ast.nodes[:20]:
            print(f"  - {node!r}")
        if len(ast.nodes) > 20:
            print(f"  ... and {len(ast.nodes) - 20} more")

    return 0


def cmd_config(args):
    """Show effective configuration, or write a default config file."""
    if args.write:
        path = write_default_config(Path(args.write))
        print(f"Wrote default config to {path}")
        return 0

    try:
        data = _load_config(args).to_dict()
    except ValueError as e:
        logger.error(str(e))
        return 1
    print(json.dumps(data, indent=2))
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='jtml',
        description="Compile jtml to HTML and format jtml source",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    jtml html index.jtml about.jtml
    jtml format index.jtml --indent tab
    jtml format --check pages/*.jtml
    jtml parse index.jtml --json
"""
    )
    parser.add_argument('--version', action='version', version=f'jtml {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--config', type=Path, help='Path to a YAML config file')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # html
    html_p = subparsers.add_parser('html', help='Compile jtml files to HTML')
    html_p.add_argument('files', nargs='+', help='Files to compile')
    html_p.add_argument('--ignore-comments', action='store_true', help='Drop comments from output')
    html_p.set_defaults(func=cmd_html)

    # format
    format_p = subparsers.add_parser('format', help='Format jtml files')
    format_p.add_argument('files', nargs='+', help='Files to format')
    format_p.add_argument('--ignore-comments', action='store_true', help='Drop comments from output')
    format_p.add_argument('--indent', help="Indent per level: N spaces, 'spaces:N' or 'tab'")
    format_p.add_argument('-c', '--check', action='store_true',
                          help='Check if files are formatted (exit 1 if not)')
    format_p.set_defaults(func=cmd_format)

    # parse
    parse_p = subparsers.add_parser('parse', help='Parse a jtml file')
    parse_p.add_argument('file', help='File to parse')
    parse_p.add_argument('--json', action='store_true', help='Print the AST as JSON')
    parse_p.add_argument('-l', '--list', dest='list_nodes', action='store_true',
                         help='List the top-level nodes')
    parse_p.set_defaults(func=cmd_parse)

    # config
    config_p = subparsers.add_parser('config', help='Show or write configuration')
    config_p.add_argument('--write', metavar='PATH', help='Write a default config file to PATH')
    config_p.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
