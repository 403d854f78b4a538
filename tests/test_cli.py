"""
Unit tests for CLI module (transglyph/cli.py).

Tests cover:
- Command parsing and help output
- translate command (numeric fast path, translation, load failure)
- shape command (font errors, glyph table)
- config command
"""

import argparse
from unittest.mock import patch

import pytest

from tests.fakes import GLYPH_OFFSET, FakeFontHost, FakeSession
from transglyph import cli
from transglyph.config import LoggingSettings
from transglyph.errors import ModelLoadError

# ============================================================================
# HELPERS
# ============================================================================


def _patch_session(session=None, *, error=None):
    """Replace model construction for every ShapingContext built by the CLI."""
    if error is not None:
        return patch(
            "transglyph.shaping.shaper.ModelSession.from_settings",
            side_effect=error,
        )
    return patch(
        "transglyph.shaping.shaper.ModelSession.from_settings",
        return_value=session,
    )


# ============================================================================
# PARSING
# ============================================================================


@pytest.mark.unit
def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage: transglyph" in capsys.readouterr().out


@pytest.mark.unit
def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        cli.main(["frobnicate"])


@pytest.mark.unit
def test_shape_requires_font():
    with pytest.raises(SystemExit):
        cli.main(["shape", "Hello."])


# ============================================================================
# TRANSLATE COMMAND
# ============================================================================


@pytest.mark.unit
def test_translate_numeric_needs_no_model(capsys):
    with _patch_session(error=ModelLoadError("no weights")) as load:
        assert cli.main(["translate", "42"]) == 0
    assert capsys.readouterr().out.strip() == "42"
    load.assert_not_called()


@pytest.mark.unit
def test_translate_prints_translation(capsys):
    session = FakeSession({"Hello.": "Hallo."})
    with (
        patch.object(cli.config.generation, "prompt_prefix", "translate English to German:"),
        _patch_session(session),
    ):
        assert cli.main(["translate", "Hello."]) == 0
    assert capsys.readouterr().out.strip() == "Hallo."


@pytest.mark.unit
def test_translate_clusters_listing(capsys):
    args = argparse.Namespace(text="12", clusters=True)
    assert cli.cmd_translate(args) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "12"
    assert lines[1].split() == ["0", "'1'"]
    assert lines[2].split() == ["1", "'2'"]


@pytest.mark.unit
def test_translate_load_failure_returns_1(capsys):
    with _patch_session(error=ModelLoadError("Failed to read models/config.json")):
        assert cli.main(["translate", "Hello."]) == 1
    assert "Error loading model" in capsys.readouterr().err


# ============================================================================
# SHAPE COMMAND
# ============================================================================


@pytest.mark.unit
def test_shape_prints_glyph_table(capsys):
    with patch("transglyph.shaping.host.HarfBuzzFontHost.from_path", return_value=FakeFontHost()):
        assert cli.main(["shape", "7", "--font", "font.ttf"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["glyph", "cluster", "advance"]
    assert lines[1].split() == [str(ord("7") + GLYPH_OFFSET), "0", "500"]


@pytest.mark.unit
def test_shape_font_error_returns_1(capsys):
    with patch(
        "transglyph.shaping.host.HarfBuzzFontHost.from_path",
        side_effect=OSError("no such file"),
    ):
        assert cli.main(["shape", "Hello.", "--font", "missing.ttf"]) == 1
    assert "Error opening font" in capsys.readouterr().err


@pytest.mark.unit
def test_shape_load_failure_returns_1(capsys):
    with (
        patch("transglyph.shaping.host.HarfBuzzFontHost.from_path", return_value=FakeFontHost()),
        _patch_session(error=ModelLoadError("no weights")),
    ):
        assert cli.main(["shape", "Hello.", "--font", "font.ttf"]) == 1
    assert "shaping failed" in capsys.readouterr().err


# ============================================================================
# CONFIG COMMAND / LOGGING
# ============================================================================


@pytest.mark.unit
def test_config_command_prints_summary(capsys):
    assert cli.main(["config"]) == 0
    assert "TRANSGLYPH CONFIGURATION" in capsys.readouterr().out


@pytest.mark.unit
def test_configure_logging_uses_level():
    with patch("transglyph.cli.logging.basicConfig") as basic:
        cli.configure_logging(LoggingSettings(level="DEBUG", format="simple"))
    kwargs = basic.call_args.kwargs
    assert kwargs["level"] == 10
    assert kwargs["format"] == "%(levelname)s %(message)s"
