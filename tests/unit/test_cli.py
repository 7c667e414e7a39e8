"""Unit tests for the htmldown command-line interface.

These tests cover argument parsing, environment defaults, option mapping,
and exit codes.
"""

import argparse
import io
from dataclasses import fields

import pytest

from htmldown import cli
from htmldown.cli import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
    main,
)
from htmldown.cli_builder import DynamicCLIBuilder
from htmldown.exceptions import DependencyError, ParsingError, RenderingError, ValidationError
from htmldown.options import ConvertOptions


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI from replacing the root logger's handlers during tests."""
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<p>a_b <strong>bold</strong></p>", encoding="utf-8")
    return path


def set_stdin(monkeypatch, data: bytes):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))


@pytest.mark.unit
@pytest.mark.cli
class TestDynamicCLIBuilder:
    """Flags generated from ConvertOptions metadata."""

    def test_snake_to_kebab_conversion(self):
        builder = DynamicCLIBuilder()
        assert builder.snake_to_kebab("trim_space") == "trim-space"
        assert builder.snake_to_kebab("simple") == "simple"

    def test_cli_names(self):
        builder = DynamicCLIBuilder()
        by_name = {field.name: field for field in fields(ConvertOptions)}
        assert builder.infer_cli_name(by_name["trim_space"], by_name["trim_space"].metadata) == "--trim-space"
        assert builder.infer_cli_name(by_name["max_depth"], by_name["max_depth"].metadata) == "--max-depth"
        assert (
            builder.infer_cli_name(by_name["escape_special"], by_name["escape_special"].metadata)
            == "--no-escape-special"
        )

    def test_argument_kwargs(self):
        builder = DynamicCLIBuilder()
        by_name = {field.name: field for field in fields(ConvertOptions)}

        script = builder.get_argument_kwargs(by_name["script"], by_name["script"].metadata)
        assert script["action"] == "store_true"

        escape = builder.get_argument_kwargs(by_name["escape_special"], by_name["escape_special"].metadata)
        assert escape["action"] == "store_false"

        parser = builder.get_argument_kwargs(by_name["html_parser"], by_name["html_parser"].metadata)
        assert parser["choices"] == ["html5lib", "html.parser", "lxml"]

        depth = builder.get_argument_kwargs(by_name["max_depth"], by_name["max_depth"].metadata)
        assert depth["type"] is int

    def test_excluded_fields_have_no_flags(self):
        parser = argparse.ArgumentParser()
        DynamicCLIBuilder().add_options_arguments(parser)
        dests = {action.dest for action in parser._actions}
        assert "guess_lang" not in dests
        assert "custom_rules" not in dests
        assert {"script", "style", "trim_space", "escape_special", "html_parser", "indent_width"} <= dests

    def test_map_args_to_options(self):
        parsed = create_parser().parse_args(["--script", "--no-escape-special", "--indent-width", "2"])
        options = DynamicCLIBuilder().map_args_to_options(parsed)
        assert options == ConvertOptions(script=True, escape_special=False, indent_width=2)

    def test_map_args_overrides(self):
        parsed = create_parser().parse_args([])
        options = DynamicCLIBuilder().map_args_to_options(parsed, guess_lang=len)
        assert options.guess_lang is len


@pytest.mark.unit
@pytest.mark.cli
class TestEnvironmentDefaults:
    """HTMLDOWN_* environment variables."""

    def test_boolean_flag(self, monkeypatch):
        monkeypatch.setenv("HTMLDOWN_SCRIPT", "true")
        assert create_parser().parse_args([]).script is True

    def test_negative_flag(self, monkeypatch):
        monkeypatch.setenv("HTMLDOWN_ESCAPE_SPECIAL", "false")
        assert create_parser().parse_args([]).escape_special is False

    def test_integer(self, monkeypatch):
        monkeypatch.setenv("HTMLDOWN_INDENT_WIDTH", "2")
        assert create_parser().parse_args([]).indent_width == 2

    def test_invalid_integer_ignored(self, monkeypatch):
        monkeypatch.setenv("HTMLDOWN_MAX_DEPTH", "deep")
        assert create_parser().parse_args([]).max_depth == ConvertOptions().max_depth

    def test_choice(self, monkeypatch):
        monkeypatch.setenv("HTMLDOWN_HTML_PARSER", "html.parser")
        assert create_parser().parse_args([]).html_parser == "html.parser"

    def test_invalid_choice_ignored(self, monkeypatch):
        monkeypatch.setenv("HTMLDOWN_HTML_PARSER", "regex")
        assert create_parser().parse_args([]).html_parser == "html5lib"

    def test_cli_argument_wins(self, monkeypatch):
        monkeypatch.setenv("HTMLDOWN_INDENT_WIDTH", "2")
        assert create_parser().parse_args(["--indent-width", "8"]).indent_width == 8


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Exception to exit code mapping."""

    @pytest.mark.parametrize(
        "exception, code",
        [
            (DependencyError("x"), EXIT_DEPENDENCY_ERROR),
            (ImportError("x"), EXIT_DEPENDENCY_ERROR),
            (ValidationError("x"), EXIT_VALIDATION_ERROR),
            (ValueError("x"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("x"), EXIT_FILE_ERROR),
            (ParsingError("x"), EXIT_PARSING_ERROR),
            (RenderingError("x"), EXIT_RENDERING_ERROR),
            (RuntimeError("x"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, code):
        assert get_exit_code_for_exception(exception) == code


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """End-to-end runs of ``main``."""

    def test_convert_file_to_stdout(self, html_file, capsys):
        assert main([str(html_file)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "a\\_b **bold**\n\n\n"

    def test_convert_stdin(self, monkeypatch, capsys):
        set_stdin(monkeypatch, b"<em>x</em>")
        assert main([]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "_x_\n"

    def test_dash_reads_stdin(self, monkeypatch, capsys):
        set_stdin(monkeypatch, b"<h2>T</h2>")
        assert main(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "## T\n\n\n"

    def test_output_file(self, html_file, tmp_path, capsys):
        output = tmp_path / "out" / "page.md"
        assert main([str(html_file), "-o", str(output)]) == EXIT_SUCCESS
        assert output.read_text(encoding="utf-8") == "a\\_b **bold**\n\n\n"
        assert capsys.readouterr().out == ""

    def test_no_escape_special(self, html_file, capsys):
        assert main([str(html_file), "--no-escape-special"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "a_b **bold**\n\n\n"

    def test_script_flag(self, monkeypatch, capsys):
        set_stdin(monkeypatch, b"<p>a</p><script>alert(1)</script>")
        assert main(["--script"]) == EXIT_SUCCESS
        assert "<script>alert(1)</script>" in capsys.readouterr().out

    def test_guess_lang_flag(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "guess_language", lambda text: "python")
        set_stdin(monkeypatch, b"<pre>x</pre>")
        assert main(["--guess-lang"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "```python\nx\n```\n\n\n"

    def test_rich_output(self, html_file, capsys):
        assert main([str(html_file), "--rich"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "bold" in out
        assert "**" not in out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.html")]) == EXIT_FILE_ERROR
        assert "Error reading input" in capsys.readouterr().err

    def test_invalid_option_value(self, html_file, capsys):
        assert main([str(html_file), "--max-depth", "0"]) == EXIT_VALIDATION_ERROR
        assert "max_depth" in capsys.readouterr().err

    def test_rendering_error(self, monkeypatch, capsys):
        set_stdin(monkeypatch, b"<div><div><div><div>x</div></div></div></div>")
        assert main(["--max-depth", "3"]) == EXIT_RENDERING_ERROR
        assert capsys.readouterr().out == ""

    def test_parsing_error(self, monkeypatch, html_file):
        def crash(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("htmldown.html2markdown.BeautifulSoup", crash)
        assert main([str(html_file)]) == EXIT_PARSING_ERROR

    def test_invalid_parser_choice_exits(self, html_file):
        with pytest.raises(SystemExit) as exc_info:
            main([str(html_file), "--html-parser", "regex"])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("htmldown ")
