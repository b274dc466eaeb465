from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest

from file.renamer import (
    change_directory_name,
    change_file_content,
    change_file_name,
    change_project_name,
    process_directory,
)


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _snapshot(root: Path) -> Dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes() if path.is_file() else b"<dir>"
        for path in sorted(root.rglob("*"))
    }


def test_renames_file_and_rewrites_content(tmp_path: Path, capsys) -> None:
    _write(tmp_path / "old_name_config.ex", "OldName initializes OLD_NAME")

    change_project_name(tmp_path, "new_name", "old_name")

    renamed = tmp_path / "new_name_config.ex"
    assert not (tmp_path / "old_name_config.ex").exists()
    assert renamed.read_text(encoding="utf-8") == "NewName initializes NEW_NAME"
    assert "Project name changed from old_name to new_name" in capsys.readouterr().out


def test_case_fidelity_in_content(tmp_path: Path) -> None:
    target = _write(tmp_path / "notes.txt", "MYPROJECT myproject Myproject")

    change_project_name(tmp_path, "theapp", "myproject")

    assert target.read_text(encoding="utf-8") == "THEAPP theapp Theapp"


def test_snake_case_names_map_camel_case(tmp_path: Path) -> None:
    target = _write(tmp_path / "notes.txt", "MY_PROJECT my_project MyProject")

    change_project_name(tmp_path, "the_app", "my_project")

    assert target.read_text(encoding="utf-8") == "THE_APP the_app TheApp"


def test_directories_are_renamed_before_descending(tmp_path: Path) -> None:
    _write(tmp_path / "old_name" / "lib" / "old_name_web" / "old_name.ex", "defmodule OldNameWeb do")
    _write(tmp_path / "old_name" / "mix.exs", "app: :old_name")

    summary = change_project_name(tmp_path, "new_name", "old_name")

    assert (tmp_path / "new_name" / "mix.exs").read_text(encoding="utf-8") == "app: :new_name"
    module = tmp_path / "new_name" / "lib" / "new_name_web" / "new_name.ex"
    assert module.read_text(encoding="utf-8") == "defmodule NewNameWeb do"
    assert not (tmp_path / "old_name").exists()
    assert summary.renamed_directories == 2
    assert summary.renamed_files == 1
    assert summary.rewritten_files == 2


def test_root_directory_keeps_its_name(tmp_path: Path) -> None:
    root = tmp_path / "old_name"
    _write(root / "README.md", "old_name")

    change_project_name(root, "new_name", "old_name")

    assert root.is_dir()
    assert (root / "README.md").read_text(encoding="utf-8") == "new_name"


def test_ignore_list_applies_at_every_depth(tmp_path: Path) -> None:
    _write(tmp_path / "deps" / "old_name_dep" / "old_name.ex", "OldName")
    _write(tmp_path / "apps" / "deps" / "old_name.ex", "OLD_NAME")
    _write(tmp_path / "apps" / "old_name.ex", "old_name")
    before = _snapshot(tmp_path / "deps")

    change_project_name(tmp_path, "new_name", "old_name", ignore=["deps"])

    assert _snapshot(tmp_path / "deps") == before
    assert (tmp_path / "apps" / "deps" / "old_name.ex").read_text(encoding="utf-8") == "OLD_NAME"
    assert (tmp_path / "apps" / "new_name.ex").read_text(encoding="utf-8") == "new_name"


def test_hidden_entries_are_never_visited(tmp_path: Path) -> None:
    _write(tmp_path / ".git" / "old_name.txt", "old_name")
    _write(tmp_path / ".old_name.env", "OLD_NAME=1")

    change_project_name(tmp_path, "new_name", "old_name")

    assert (tmp_path / ".git" / "old_name.txt").read_text(encoding="utf-8") == "old_name"
    assert (tmp_path / ".old_name.env").read_text(encoding="utf-8") == "OLD_NAME=1"


def test_round_trip_restores_tree(tmp_path: Path) -> None:
    _write(tmp_path / "my_app" / "lib" / "my_app.ex", "defmodule MyApp do\n  @name :my_app\nend\n")
    _write(tmp_path / "config" / "MY_APP.env", "MY_APP_PORT=4000\r\n")
    _write(tmp_path / "README.md", "# MyApp\n\nRun my_app.\n")
    original = _snapshot(tmp_path)

    change_project_name(tmp_path, "your_tool", "my_app")
    assert _snapshot(tmp_path) != original
    change_project_name(tmp_path, "my_app", "your_tool")

    assert _snapshot(tmp_path) == original


def test_name_collision_aborts_run(tmp_path: Path) -> None:
    _write(tmp_path / "new_name.txt", "already here")
    _write(tmp_path / "old_name.txt", "old_name")

    with pytest.raises(FileExistsError):
        change_project_name(tmp_path, "new_name", "old_name")

    assert (tmp_path / "new_name.txt").read_text(encoding="utf-8") == "already here"


def test_binary_content_is_left_alone(tmp_path: Path) -> None:
    payload = b"\xff\xfeold_name\x00\x01"
    (tmp_path / "old_name.bin").write_bytes(payload)

    change_project_name(tmp_path, "new_name", "old_name")

    assert (tmp_path / "new_name.bin").read_bytes() == payload


def test_line_endings_are_preserved(tmp_path: Path) -> None:
    target = tmp_path / "script.bat"
    target.write_bytes(b"echo old_name\r\necho OLD_NAME\r\n")

    assert change_file_content(target, "old_name", "new_name") is True
    assert target.read_bytes() == b"echo new_name\r\necho NEW_NAME\r\n"


def test_change_file_content_reports_no_change(tmp_path: Path) -> None:
    target = _write(tmp_path / "other.txt", "nothing to see")
    assert change_file_content(target, "old_name", "new_name") is False


def test_change_helpers_return_effective_path(tmp_path: Path) -> None:
    directory = tmp_path / "old_name_dir"
    directory.mkdir()
    untouched = tmp_path / "misc"
    untouched.mkdir()
    file_path = _write(tmp_path / "OldName.ex")

    assert change_directory_name(directory, "old_name", "new_name") == tmp_path / "new_name_dir"
    assert change_directory_name(untouched, "old_name", "new_name") == untouched
    assert change_file_name(file_path, "old_name", "new_name") == tmp_path / "NewName.ex"


def test_dry_run_changes_nothing(tmp_path: Path, capsys) -> None:
    _write(tmp_path / "old_name" / "old_name.ex", "OldName")
    before = _snapshot(tmp_path)

    summary = change_project_name(tmp_path, "new_name", "old_name", dry_run=True)

    assert _snapshot(tmp_path) == before
    assert summary.renamed_directories == 1
    assert summary.renamed_files == 1
    assert summary.rewritten_files == 1
    assert "[DRY-RUN] Project name changed from old_name to new_name" in capsys.readouterr().out


def test_process_directory_accumulates_into_summary(tmp_path: Path) -> None:
    _write(tmp_path / "a" / "old_name.txt", "x")
    _write(tmp_path / "b" / "old_name.txt", "x")

    summary = process_directory(tmp_path, "old_name", "new_name")

    assert summary.renamed_files == 2
    assert summary.renamed_directories == 0


@pytest.mark.parametrize("new_name, old_name", [("", "old"), ("new", ""), ("a/b", "old")])
def test_invalid_names_are_rejected(tmp_path: Path, new_name: str, old_name: str) -> None:
    with pytest.raises(ValueError):
        change_project_name(tmp_path, new_name, old_name)
