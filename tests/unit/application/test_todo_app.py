"""Tests for TodoApplication and the application factory."""

import pytest

from todokeeper.application.factory import build_application, create_kv_store
from todokeeper.application.settings import PersistenceSettings, PersistenceType, Settings
from todokeeper.application.todo_app import TodoApplication
from todokeeper.core.domain.enums import ErrorKind, FilterMode
from todokeeper.core.domain.models import IDLE, EditState
from todokeeper.infrastructure.persistence.file_kv import JsonFileKeyValueStore
from todokeeper.infrastructure.persistence.in_memory_kv import InMemoryKeyValueStore


@pytest.fixture
def memory_settings() -> Settings:
    return Settings(persistence=PersistenceSettings(type=PersistenceType.MEMORY))


@pytest.fixture
def todo_app(kv_store, memory_settings, id_factory) -> TodoApplication:
    return build_application(memory_settings, kv_store=kv_store, id_factory=id_factory)


class TestFactory:
    def test_memory_kv_store(self, memory_settings) -> None:
        assert isinstance(create_kv_store(memory_settings), InMemoryKeyValueStore)

    def test_file_kv_store(self, tmp_path) -> None:
        settings = Settings(persistence=PersistenceSettings(path=tmp_path / "s.json"))
        kv = create_kv_store(settings)
        assert isinstance(kv, JsonFileKeyValueStore)
        assert kv.path == tmp_path / "s.json"

    def test_hydrates_from_kv_store(self, memory_settings) -> None:
        kv = InMemoryKeyValueStore(
            {
                "tasks": '[{"id": "a", "text": "Walk dog", "completed": false}]',
                "filter": "active",
            }
        )

        todo_app = build_application(memory_settings, kv_store=kv)

        assert [task.text for task in todo_app.view().visible] == ["Walk dog"]
        assert todo_app.store.filter is FilterMode.ACTIVE
        assert todo_app.edit_state == IDLE

    def test_uses_configured_keys(self) -> None:
        settings = Settings(
            persistence=PersistenceSettings(
                type=PersistenceType.MEMORY, tasks_key="app::todos", filter_key="app::filter"
            )
        )
        kv = InMemoryKeyValueStore()

        build_application(settings, kv_store=kv).create("Buy milk")

        assert kv.keys() == ["app::filter", "app::todos"]

    def test_default_settings(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        todo_app = build_application()
        todo_app.create("Buy milk")
        assert (tmp_path / ".todokeeper" / "store.json").exists()


class TestEventSurface:
    def test_store_events(self, todo_app) -> None:
        a = todo_app.create("Buy milk").task_id
        b = todo_app.create("Walk dog").task_id

        assert todo_app.toggle(a).success
        assert todo_app.edit_text(b, "Walk the dog").success
        assert todo_app.set_filter("active").success

        view = todo_app.view()
        assert [task.text for task in view.visible] == ["Walk the dog"]
        assert view.remaining_count == 1

        assert todo_app.clear_completed().success
        assert todo_app.toggle_all().success
        assert todo_app.view().all_completed is True
        assert todo_app.delete(b).success
        assert todo_app.view().total_count == 0

    def test_rejections_are_values(self, todo_app) -> None:
        assert todo_app.create("  ").error is ErrorKind.EMPTY_TEXT
        assert todo_app.toggle("missing").error is ErrorKind.NOT_FOUND
        assert todo_app.delete("missing").error is ErrorKind.NOT_FOUND
        assert todo_app.commit_edit().error is ErrorKind.NOT_EDITING

    def test_edit_events(self, todo_app) -> None:
        task_id = todo_app.create("Buy milk").task_id

        todo_app.begin_edit(task_id)
        assert todo_app.edit_state == EditState(task_id=task_id, draft="Buy milk")
        todo_app.update_draft("Buy oat milk")
        assert todo_app.commit_edit().success

        assert todo_app.edit_state == IDLE
        assert todo_app.store.get(task_id).text == "Buy oat milk"

    def test_cancel_edit(self, todo_app) -> None:
        task_id = todo_app.create("Buy milk").task_id
        todo_app.begin_edit(task_id, "draft")
        assert todo_app.cancel_edit().success
        assert todo_app.store.get(task_id).text == "Buy milk"

    def test_delete_while_editing_resets_session(self, todo_app) -> None:
        task_id = todo_app.create("Buy milk").task_id
        todo_app.begin_edit(task_id)
        todo_app.delete(task_id)
        assert todo_app.edit_state == IDLE


class TestResolveTaskId:
    def test_unique_prefix(self, todo_app) -> None:
        todo_app.create("a")
        assert todo_app.resolve_task_id("task-1") == "task-1"

    def test_ambiguous_prefix(self, todo_app) -> None:
        todo_app.create("a")
        todo_app.create("b")
        assert todo_app.resolve_task_id("task-") is None

    def test_no_match(self, todo_app) -> None:
        assert todo_app.resolve_task_id("zzz") is None
