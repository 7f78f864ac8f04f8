"""Tests for settings loading and validation."""

from pathlib import Path

import pytest

from todokeeper.application.settings import (
    PersistenceType,
    Settings,
    load_settings,
)
from todokeeper.core.domain.errors import ConfigError


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    def test_builtin_defaults(self) -> None:
        settings = Settings()
        assert settings.persistence.type is PersistenceType.FILE
        assert settings.persistence.path == Path(".todokeeper/store.json")
        assert settings.persistence.tasks_key == "tasks"
        assert settings.persistence.filter_key == "filter"
        assert settings.logging.level == "WARNING"

    def test_no_file_found_uses_defaults(self, tmp_path) -> None:
        assert load_settings(search_dir=tmp_path) == Settings()

    def test_finds_default_file(self, tmp_path) -> None:
        write(tmp_path / "todokeeper.yaml", "persistence:\n  type: memory\n")
        assert load_settings(search_dir=tmp_path).persistence.type is PersistenceType.MEMORY

    def test_finds_configs_dir_file(self, tmp_path) -> None:
        write(tmp_path / "configs" / "todokeeper.yaml", "logging:\n  level: debug\n")
        assert load_settings(search_dir=tmp_path).logging.level == "DEBUG"


class TestExplicitPath:
    def test_full_profile(self, tmp_path) -> None:
        path = write(
            tmp_path / "profile.yaml",
            "persistence:\n"
            "  type: file\n"
            "  path: data/todos.json\n"
            "  tasks_key: app::todos\n"
            "  filter_key: app::filter\n"
            "logging:\n"
            "  level: INFO\n",
        )

        settings = load_settings(path)

        assert settings.persistence.path == Path("data/todos.json")
        assert settings.persistence.tasks_key == "app::todos"
        assert settings.persistence.filter_key == "app::filter"
        assert settings.logging.level == "INFO"

    def test_empty_file_uses_defaults(self, tmp_path) -> None:
        assert load_settings(write(tmp_path / "empty.yaml", "")) == Settings()

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(tmp_path / "nope.yaml")
        assert exc_info.value.code == "config_error"

    def test_invalid_yaml_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigError):
            load_settings(write(tmp_path / "bad.yaml", "persistence: [unclosed\n"))

    def test_non_mapping_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(write(tmp_path / "list.yaml", "- a\n- b\n"))
        assert exc_info.value.details["found"] == "list"

    @pytest.mark.parametrize(
        ("content", "loc"),
        [
            ("persistence:\n  type: sqlite\n", "persistence.type"),
            ("persistence:\n  tasks_key: ''\n", "persistence.tasks_key"),
            ("persistence:\n  tasks_key: same\n  filter_key: same\n", "persistence.filter_key"),
            ("logging:\n  level: LOUD\n", "logging.level"),
            ("unknown_section: 1\n", "unknown_section"),
        ],
    )
    def test_schema_violations_raise(self, tmp_path, content, loc) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(write(tmp_path / "invalid.yaml", content))
        assert loc in [error["loc"] for error in exc_info.value.details["errors"]]
