"""Unit tests for AddonHub configuration models and loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from addonhub.config import AddonHubConfig, ConfigLoadError, YAMLConfigLoader, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("ADDONHUB_CONFIG", "ADDONHUB_PUBLIC_URL", "ADDONHUB_INDEX__DEFAULT_PAGE_SIZE", "ADDONHUB_DATABASE_URL"):
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = AddonHubConfig()
    assert config.public_url == "http://localhost:3000/"
    assert config.index.addon_header == "supertux-addoninfo"
    assert config.index.dependency_header == "dependency"
    assert config.index.index_header == "supertux-addons"
    assert config.index.excluded_owners == ["supertux"]
    assert config.dependencies.max_depth == 8
    assert config.archive.format == "zip"


def test_public_url_gets_trailing_slash() -> None:
    assert AddonHubConfig(public_url="https://addons.example.org").public_url == "https://addons.example.org/"


def test_dependency_depth_is_bounded() -> None:
    with pytest.raises(ValueError):
        AddonHubConfig(dependencies={"max_depth": 65})


def test_resolve_path_uses_env_first(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADDONHUB_CONFIG", "/tmp/from-env.yaml")
    assert str(YAMLConfigLoader.resolve_path("/tmp/from-cli.yaml")).endswith("from-env.yaml")


def test_resolve_path_defaults_to_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    assert YAMLConfigLoader.resolve_path() == tmp_path / "addonhub.yaml"


def test_load_dict_missing_file_returns_empty(tmp_path: Path) -> None:
    assert YAMLConfigLoader.load_dict(tmp_path / "missing.yaml") == {}


def test_load_dict_non_mapping_root_raises(tmp_path: Path) -> None:
    target = tmp_path / "addonhub.yaml"
    target.write_text("- one\n- two\n", encoding="utf-8")
    with pytest.raises(ConfigLoadError, match="root must be mapping"):
        YAMLConfigLoader.load_dict(target)


def test_load_dict_yaml_error_has_location(tmp_path: Path) -> None:
    target = tmp_path / "addonhub.yaml"
    target.write_text("index:\n  excluded_owners: [\n", encoding="utf-8")
    with pytest.raises(ConfigLoadError, match="addonhub.yaml:"):
        YAMLConfigLoader.load_dict(target)


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    target = tmp_path / "addonhub.yaml"
    target.write_text(
        "public_url: https://addons.example.org\n"
        "index:\n"
        "  default_page_size: 25\n"
        "  excluded_owners: [supertux, mirrors]\n"
        "archive:\n"
        "  root: /srv/archives\n",
        encoding="utf-8",
    )

    config = load_config(target)

    assert config.public_url == "https://addons.example.org/"
    assert config.index.default_page_size == 25
    assert config.index.excluded_owners == ["supertux", "mirrors"]
    assert config.archive.root == Path("/srv/archives")


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "addonhub.yaml"
    target.write_text("index:\n  default_page_size: 25\n  max_page_size: 60\n", encoding="utf-8")
    monkeypatch.setenv("ADDONHUB_INDEX__DEFAULT_PAGE_SIZE", "10")

    config = load_config(target)

    assert config.index.default_page_size == 10
    assert config.index.max_page_size == 60


def test_load_config_invalid_values_raise(tmp_path: Path) -> None:
    target = tmp_path / "addonhub.yaml"
    target.write_text("index:\n  default_page_size: 0\n", encoding="utf-8")
    with pytest.raises(ConfigLoadError, match="Invalid configuration"):
        load_config(target)
