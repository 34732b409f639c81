"""Tests for the command-line entry point."""

import logging

import pytest

from watermarker.__main__ import main, parse_arguments
from watermarker.render import FontResolver


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the handlers main() installs, they hold the captured streams."""
    yield
    app_logger = logging.getLogger("watermarker")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


def test_no_filenames(capsys):
    assert main([]) == 1

    captured = capsys.readouterr()
    assert captured.err.strip() == "error: no filenames specified"
    assert captured.out == ""


def test_filenames_are_positional():
    args = parse_arguments(["a.png", "b.HEIC"])
    assert args.filenames == ["a.png", "b.HEIC"]


def test_bad_config_exits_2(tmp_path, monkeypatch, capsys):
    home = tmp_path / "home"
    (home / ".watermarker").mkdir(parents=True)
    (home / ".watermarker" / "config.yaml").write_text("owner: [unclosed\n", encoding="utf-8")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)

    assert main(["photo.png"]) == 2
    assert "configuration" in capsys.readouterr().err


def test_missing_font_exits_2(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text(
        f"banner:\n  font_path: {tmp_path / 'missing.ttf'}\n", encoding="utf-8"
    )

    assert main(["photo.png"]) == 2
    assert "missing.ttf" in capsys.readouterr().err


def test_unreadable_file_exits_1(tmp_path, monkeypatch, capsys, loadable_font):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    assert main([str(tmp_path / "missing.png")]) == 1
    assert "error:" in capsys.readouterr().err


def failure_lines(err, name):
    return [line for line in err.splitlines() if name in line]


@pytest.fixture
def loadable_font(monkeypatch):
    monkeypatch.setattr(FontResolver, "resolve", lambda self: "default")
    monkeypatch.setattr(FontResolver, "font", lambda self, size: None)


def test_aborting_failure_is_reported_once(tmp_path, monkeypatch, capsys, loadable_font):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / "broken.png").write_bytes(b"not an image")

    assert main(["broken.png"]) == 1
    assert len(failure_lines(capsys.readouterr().err, "broken.png")) == 1


def test_skipped_failure_is_reported_once(tmp_path, monkeypatch, capsys, loadable_font):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text(
        "processing:\n  continue_on_error: true\n", encoding="utf-8"
    )
    (tmp_path / "broken.png").write_bytes(b"not an image")

    assert main(["broken.png"]) == 0

    err = capsys.readouterr().err
    assert len(failure_lines(err, "broken.png")) == 1
    # The summary goes through the configured application logger
    assert "WARNING - watermarker - 1 of 1 file(s) failed" in err
