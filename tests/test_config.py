"""Tests for configuration loading."""

import pytest

from watermarker.config import DEFAULT_CONFIG, ConfigError, ConfigManager


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty home and working directory."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(work)
    return home, work


def test_defaults_without_config_file(isolated):
    config = ConfigManager.load()

    assert config.config_path is None
    assert config.get("owner.full_name") == "Lasse Vågsæther Karlsen"
    assert config.get("output.quality") == 85
    assert config.get("processing.continue_on_error") is False


def test_home_config_is_found_and_merged(isolated):
    home, _ = isolated
    config_dir = home / ".watermarker"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(
        "owner:\n"
        "  full_name: Jane Doe\n"
        "replacements:\n"
        "  Canon EOS R5: Canon R5\n"
        "  EF 50mm f/1.8 II: Nifty Fifty\n",
        encoding="utf-8",
    )

    config = ConfigManager.load()

    assert config.config_path == config_dir / "config.yaml"
    assert config.get("owner.full_name") == "Jane Doe"
    # Unset keys come from the defaults
    assert config.get("owner.first_name") == "Lasse"
    assert config.section("replacements") == {
        "Canon EOS R5": "Canon R5",
        "EF 50mm f/1.8 II": "Nifty Fifty",
    }


def test_working_directory_config(isolated):
    _, work = isolated
    (work / "config.yaml").write_text("output:\n  quality: 92\n", encoding="utf-8")

    assert ConfigManager.load().get("output.quality") == 92


def test_explicit_path_must_exist(tmp_path):
    with pytest.raises(ConfigError):
        ConfigManager.load(config_path=str(tmp_path / "missing.yaml"))


def test_malformed_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("owner: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigManager.load(config_path=str(path))


def test_non_mapping_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigManager.load(config_path=str(path))


def test_empty_file_means_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert ConfigManager.load(config_path=str(path)).to_dict() == DEFAULT_CONFIG


def test_get_set_and_section():
    config = ConfigManager.from_dict({"banner": {"brightness": 0.7}})

    assert config.get("banner.brightness") == 0.7
    assert config.get("banner.missing", "fallback") == "fallback"
    assert config.section("nothing") == {}

    config.set("output.quality", 60)
    assert config.get("output.quality") == 60


def test_defaults_are_not_shared():
    first = ConfigManager.from_dict({})
    first.set("owner.full_name", "Changed")

    assert ConfigManager.from_dict({}).get("owner.full_name") == "Lasse Vågsæther Karlsen"
    assert DEFAULT_CONFIG["owner"]["full_name"] == "Lasse Vågsæther Karlsen"
