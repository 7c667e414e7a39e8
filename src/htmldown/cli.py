"""Command-line interface for the htmldown converter.

Reads one HTML document from a file or standard input and writes its
Markdown rendering to standard output or a file.

Examples
--------
Convert a file:
    $ htmldown page.html

Read from stdin and write to a file:
    $ curl -s https://example.org | htmldown - -o example.md

Keep scripts and guess code block languages:
    $ htmldown page.html --script --guess-lang

Use environment variables for defaults:
    $ export HTMLDOWN_TRIM_SPACE=true
    $ htmldown page.html  # Will drop whitespace-only text
"""

import argparse
import io
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .cli_builder import DynamicCLIBuilder
from .exceptions import DependencyError, ParsingError, RenderingError, ValidationError
from .html2markdown import convert
from .logging_utils import configure_logging
from .utils.code import guess_language

logger = logging.getLogger(__name__)

ENV_PREFIX = "HTMLDOWN_"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

TRUTHY_VALUES = ("true", "1", "yes", "on")


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with HTMLDOWN_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'trim_space', 'html_parser')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set

    """
    env_key = f"{ENV_PREFIX}{key.upper().replace('-', '_')}"
    return os.environ.get(env_key)


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    CLI arguments still take precedence over environment variables.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        The argument parser to modify

    """
    for action in parser._actions:
        if not action.dest or action.dest in ("help", "version", "input"):
            continue

        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        env_name = f"{ENV_PREFIX}{action.dest.upper()}"
        if action.type is int:
            try:
                action.default = int(env_value)
            except ValueError:
                logger.warning(f"Invalid integer value for {env_name}: {env_value}")
        elif action.choices:
            if env_value in action.choices:
                action.default = env_value
            else:
                logger.warning(f"Invalid choice for {env_name}: {env_value}. Choices: {list(action.choices)}")
        elif isinstance(action, argparse._StoreTrueAction):
            action.default = env_value.lower() in TRUTHY_VALUES
        elif isinstance(action, argparse._StoreFalseAction):
            action.default = env_value.lower() not in TRUTHY_VALUES
        else:
            action.default = env_value


def _get_version() -> str:
    """Get the version of the htmldown package."""
    try:
        from importlib.metadata import version

        return version("htmldown")
    except Exception:
        return "unknown"


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="htmldown",
        description="Convert an HTML document to Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("input", nargs="?", default="-", help="HTML file to convert ('-' or omitted reads stdin)")
    parser.add_argument("--output", "-o", type=str, help="Write Markdown to this file instead of stdout")
    parser.add_argument("--version", action="version", version=f"htmldown {_get_version()}")

    DynamicCLIBuilder().add_options_arguments(parser, "Conversion options")

    parser.add_argument(
        "--guess-lang",
        action="store_true",
        help="Guess the language of code blocks with Pygments",
    )
    parser.add_argument(
        "--rich",
        action="store_true",
        help="Render the Markdown with rich terminal formatting",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Also write log messages to this file")

    apply_env_vars_to_parser(parser)

    return parser


def read_input(input_arg: str) -> bytes:
    """Read raw HTML bytes from a path, or from stdin for ``-``.

    Raises
    ------
    OSError
        If the file cannot be read

    """
    if input_arg == "-":
        return sys.stdin.buffer.read()
    return Path(input_arg).read_bytes()


def write_output(markdown: str, output: Optional[str], use_rich: bool) -> None:
    """Write the converted Markdown to a file, stdout, or a rich console."""
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(markdown, encoding="utf-8")
        logger.info(f"Converted -> {output_path}")
        return

    if use_rich:
        from rich.console import Console
        from rich.markdown import Markdown

        Console().print(Markdown(markdown))
        return

    sys.stdout.write(markdown)


def main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.log_level == "DEBUG")

    builder = DynamicCLIBuilder()
    try:
        options = builder.map_args_to_options(
            parsed_args, guess_lang=guess_language if parsed_args.guess_lang else None
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        source = read_input(parsed_args.input)
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        sink = io.StringIO()
        convert(sink, source, options)
        write_output(sink.getvalue(), parsed_args.output, parsed_args.rich)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Conversion failed", exc_info=True)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
