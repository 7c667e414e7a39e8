"""Unit tests for ConvertOptions."""

import dataclasses

import pytest

from htmldown.constants import DEFAULT_INDENT_WIDTH, DEFAULT_MAX_DEPTH
from htmldown.options import ConvertOptions


@pytest.mark.unit
class TestConvertOptions:
    """Defaults, immutability and validation."""

    def test_defaults(self):
        options = ConvertOptions()
        assert options.guess_lang is None
        assert options.script is False
        assert options.style is False
        assert options.trim_space is False
        assert options.custom_rules == ()
        assert options.escape_special is True
        assert options.html_parser == "html5lib"
        assert options.indent_width == DEFAULT_INDENT_WIDTH
        assert options.max_depth == DEFAULT_MAX_DEPTH

    def test_frozen(self):
        options = ConvertOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.script = True

    def test_create_updated_returns_copy(self):
        options = ConvertOptions(script=True)
        updated = options.create_updated(trim_space=True)
        assert updated is not options
        assert updated.trim_space is True
        assert updated.script is True
        assert options.trim_space is False

    def test_create_updated_validates(self):
        with pytest.raises(ValueError):
            ConvertOptions().create_updated(max_depth=0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"indent_width": -1},
            {"max_depth": 0},
            {"html_parser": "xml"},
            {"guess_lang": "python"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ConvertOptions(**kwargs)

    def test_cli_metadata(self):
        metadata = {field.name: field.metadata for field in dataclasses.fields(ConvertOptions)}
        assert metadata["guess_lang"]["exclude_from_cli"] is True
        assert metadata["custom_rules"]["exclude_from_cli"] is True
        assert metadata["escape_special"]["cli_name"] == "no-escape-special"
        assert "lxml" in metadata["html_parser"]["choices"]
