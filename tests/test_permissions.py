from pathlib import Path

import pytest

from promptline.permissions import PermissionLevel, PermissionManager


@pytest.fixture
def store(tmp_path):
    return tmp_path / "perm" / "permissions.yaml"


def test_permission_levels(store):
    manager = PermissionManager(store)
    manager.set_permission("test_tool", PermissionLevel.ASK)
    assert manager.check_permission("test_tool") == PermissionLevel.ASK

    manager.set_permission("test_tool", PermissionLevel.ALWAYS)
    assert manager.check_permission("test_tool") == PermissionLevel.ALWAYS


def test_permission_manager_creation(store):
    PermissionManager(store)
    assert store.parent.is_dir()


def test_permission_defaults(store):
    manager = PermissionManager(store)
    assert manager.check_permission("test_tool_unique") == PermissionLevel.ASK


def test_permission_persistence(store):
    manager = PermissionManager(store)
    manager.set_permission("test_tool_always", PermissionLevel.ALWAYS)
    assert manager.check_permission("test_tool_always") == PermissionLevel.ALWAYS

    manager2 = PermissionManager(store)
    assert manager2.check_permission("test_tool_always") == PermissionLevel.ALWAYS

    manager3 = PermissionManager(store)
    manager3.set_permission("test_tool_always", PermissionLevel.ASK)
    assert PermissionManager(store).check_permission("test_tool_always") == PermissionLevel.ASK


def test_session_only_permissions(store):
    manager = PermissionManager(store)
    manager.set_permission("test_tool_once", PermissionLevel.ONCE)
    assert manager.check_permission("test_tool_once") == PermissionLevel.ONCE

    manager2 = PermissionManager(store)
    assert manager2.check_permission("test_tool_once") == PermissionLevel.ASK


def test_permission_storage_location(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    manager = PermissionManager()
    assert manager.storage_path == Path(tmp_path) / ".promptline" / "permissions.yaml"
    assert (Path(tmp_path) / ".promptline").is_dir()


def test_never_persists(store):
    PermissionManager(store).set_permission("rm", PermissionLevel.NEVER)
    assert PermissionManager(store).check_permission("rm") == PermissionLevel.NEVER


def test_saved_file_uses_lowercase_names(store):
    PermissionManager(store).set_permission("shell", PermissionLevel.ALWAYS)
    assert store.read_text() == "shell: always\n"


def test_session_overrides_saved(store):
    manager = PermissionManager(store)
    manager.set_permission("tool", PermissionLevel.NEVER)
    manager.set_permission("tool", PermissionLevel.ONCE)
    assert manager.check_permission("tool") == PermissionLevel.ONCE


def test_ask_clears_session_permission(store):
    manager = PermissionManager(store)
    manager.set_permission("tool", PermissionLevel.ONCE)
    manager.set_permission("tool", PermissionLevel.ASK)
    assert manager.check_permission("tool") == PermissionLevel.ASK


def test_all_permissions_excludes_session_and_is_a_copy(store):
    manager = PermissionManager(store)
    manager.set_permission("a", PermissionLevel.ALWAYS)
    manager.set_permission("b", PermissionLevel.ONCE)
    perms = manager.all_permissions()
    assert perms == {"a": PermissionLevel.ALWAYS}
    perms["c"] = PermissionLevel.NEVER
    assert "c" not in manager.all_permissions()


def test_corrupt_file_loads_as_empty(store):
    store.parent.mkdir(parents=True)
    store.write_text("tool: sometimes\n")
    assert PermissionManager(store).all_permissions() == {}


def test_prompt_always(store, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt="": "2")
    manager = PermissionManager(store)
    assert manager.prompt_for_permission("web_get") is True
    assert manager.check_permission("web_get") == PermissionLevel.ALWAYS
    assert "Saved: web_get = Always" in capsys.readouterr().out


def test_prompt_never(store, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt="": "3")
    manager = PermissionManager(store)
    assert manager.prompt_for_permission("shell_execute") is False
    assert manager.check_permission("shell_execute") == PermissionLevel.NEVER
    assert "Blocked: shell_execute" in capsys.readouterr().out


def test_prompt_default_is_once_after_invalid_answer(store, monkeypatch):
    answers = iter(["9", ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    manager = PermissionManager(store)
    assert manager.prompt_for_permission("file_read") is True
    assert manager.check_permission("file_read") == PermissionLevel.ONCE
    assert PermissionManager(store).check_permission("file_read") == PermissionLevel.ASK