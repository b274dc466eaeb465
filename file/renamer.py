"""
file.renamer

Rename a project in place: every non-hidden, non-ignored file and directory
name and every text file's content below the root has occurrences of the old
project name replaced by the new one, keeping the casing of each occurrence
(``OLD_NAME`` -> ``NEW_NAME``, ``old_name`` -> ``new_name``,
``OldName`` -> ``NewName``).

Commit your work before running: nothing is rolled back on failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Collection, Iterable, Optional

from common.base.file_io import read_text
from common.base.fs import is_hidden
from common.base.logging import get_logger
from common.base.ops import rename_path, replace_text

from .tree import DirectoryNode, read_children
from .utils import resolve_root

log = get_logger(__name__)

MISSING_ARGUMENTS_MESSAGE = "Missing arguments: NEW_NAME and OLD_NAME are required. Use -h for help."


@dataclass
class RenameSummary:
    renamed_directories: int = 0
    renamed_files: int = 0
    rewritten_files: int = 0


# ----------------------------------------------------------------------
# CASE HANDLING
# ----------------------------------------------------------------------

def camelize(name: str) -> str:
    """``old_name`` -> ``OldName``: capitalize each ``_`` segment and join them."""
    return "".join(segment[:1].upper() + segment[1:] for segment in name.split("_"))


def case_adapt(matched: str, old_name: str, new_name: str) -> str:
    """
    Replacement for one matched occurrence of ``old_name``.

    All-upper, all-lower and camel-case occurrences are mirrored onto
    ``new_name``; any other casing yields ``new_name`` unchanged.
    """
    if matched == old_name.upper():
        return new_name.upper()
    if matched == old_name.lower():
        return new_name.lower()
    if matched == camelize(old_name):
        return camelize(new_name)
    return new_name


@lru_cache(maxsize=32)
def name_pattern(old_name: str) -> "re.Pattern[str]":
    """Case-insensitive literal match of ``old_name`` plus its exact camel-case form."""
    if not old_name:
        raise ValueError("Old project name must not be empty")
    alternatives = [f"(?i:{re.escape(old_name)})"]
    camel = camelize(old_name)
    if camel.lower() != old_name.lower():
        alternatives.append(re.escape(camel))
    return re.compile("|".join(alternatives))


def substitute(text: str, old_name: str, new_name: str) -> str:
    return name_pattern(old_name).sub(lambda m: case_adapt(m.group(0), old_name, new_name), text)


def validate_names(new_name: str, old_name: str) -> None:
    for label, value in (("New", new_name), ("Old", old_name)):
        if not value or not value.strip():
            raise ValueError(f"{label} project name must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError(f"{label} project name must not contain path separators: {value}")


# ----------------------------------------------------------------------
# PER-ENTRY OPERATIONS
# ----------------------------------------------------------------------

def should_process(entry_name: str, ignore: Collection[str] = ()) -> bool:
    return not is_hidden(entry_name) and entry_name not in ignore


def _renamed(path: Path, old_name: str, new_name: str) -> Path:
    # Ancestors were renamed before their children were listed, so only the
    # final component can still carry the old name.
    return path.with_name(substitute(path.name, old_name, new_name))


def change_directory_name(dir_path: Path, old_name: str, new_name: str, dry_run: bool = False) -> Path:
    """
    Rename ``dir_path`` if its name contains the old project name.

    Returns the path the directory lives at afterwards, which is where the
    traversal must continue (the original path when nothing matched or in
    dry-run mode).
    """
    target = _renamed(dir_path, old_name, new_name)
    if target == dir_path:
        return dir_path

    current = rename_path(dir_path, target, dry_run=dry_run)
    if not dry_run:
        log.info(f"Renamed directory: {dir_path} -> {target}")
    return current


def change_file_content(file_path: Path, old_name: str, new_name: str, dry_run: bool = False) -> bool:
    """
    Replace old-name occurrences inside a text file.

    Line endings are kept as found. Returns True when the content changed.
    Files that are not UTF-8 text are left untouched.
    """
    try:
        content = read_text(file_path, newline="")
    except UnicodeDecodeError:
        log.warning(f"Skipping non-text file: {file_path}")
        return False
    if "\x00" in content:
        log.warning(f"Skipping non-text file: {file_path}")
        return False

    updated = substitute(content, old_name, new_name)
    if updated == content:
        return False

    replace_text(file_path, updated, dry_run=dry_run)
    if not dry_run:
        log.info(f"Updated content: {file_path}")
    return True


def change_file_name(file_path: Path, old_name: str, new_name: str, dry_run: bool = False) -> Path:
    """Rename ``file_path`` if its name contains the old project name."""
    target = _renamed(file_path, old_name, new_name)
    if target == file_path:
        return file_path

    current = rename_path(file_path, target, dry_run=dry_run)
    if not dry_run:
        log.info(f"Renamed file: {file_path} -> {target}")
    return current


# ----------------------------------------------------------------------
# TRAVERSAL
# ----------------------------------------------------------------------

def process_directory(
    directory: Path,
    old_name: str,
    new_name: str,
    ignore: Collection[str] = (),
    *,
    dry_run: bool = False,
    summary: Optional[RenameSummary] = None,
) -> RenameSummary:
    """
    Depth-first rename below ``directory``.

    Directories are renamed before the traversal descends into their new
    location. Files have their content rewritten at the current path before
    they are renamed.
    """
    summary = summary if summary is not None else RenameSummary()
    ignored = frozenset(ignore)

    for node in read_children(directory, accept=lambda name: should_process(name, ignored)):
        if isinstance(node, DirectoryNode):
            if substitute(node.name, old_name, new_name) != node.name:
                summary.renamed_directories += 1
            current = change_directory_name(node.path, old_name, new_name, dry_run=dry_run)
            process_directory(current, old_name, new_name, ignored, dry_run=dry_run, summary=summary)
        else:
            if change_file_content(node.path, old_name, new_name, dry_run=dry_run):
                summary.rewritten_files += 1
            if substitute(node.name, old_name, new_name) != node.name:
                summary.renamed_files += 1
            change_file_name(node.path, old_name, new_name, dry_run=dry_run)

    return summary


def change_project_name(
    root: Path | str,
    new_name: str,
    old_name: str,
    ignore: Iterable[str] = (),
    *,
    dry_run: bool = False,
) -> RenameSummary:
    """
    Rename the project below ``root`` from ``old_name`` to ``new_name``.

    The root directory itself keeps its name.

    Raises:
        ValueError: If either name is empty or contains a path separator.
        FileNotFoundError / NotADirectoryError: If ``root`` is not a directory.
        OSError: Any filesystem error met during the run; earlier changes stay.
    """
    validate_names(new_name, old_name)
    root_path = resolve_root(root)
    prefix = "[DRY-RUN] " if dry_run else ""

    summary = process_directory(root_path, old_name, new_name, frozenset(ignore), dry_run=dry_run)
    log.info(
        f"{prefix}Directories renamed: {summary.renamed_directories}, "
        f"files renamed: {summary.renamed_files}, files rewritten: {summary.rewritten_files}"
    )

    print(f"{prefix}Project name changed from {old_name} to {new_name}")
    if not dry_run:
        print(f"Reverse command: project-rename {old_name} {new_name}")
    return summary


# ----------------------------------------------------------------------
# CLI
# ----------------------------------------------------------------------

def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="project-rename",
        description=(
            "Replace OLD_NAME with NEW_NAME in every file name, directory name and "
            "file content below the root, keeping upper, lower and camel case."
        ),
        epilog="Commit your work first (git add . && git commit); changes are not rolled back on failure.",
    )
    parser.add_argument("new_name", nargs="?", metavar="NEW_NAME", help="New project name.")
    parser.add_argument("old_name", nargs="?", metavar="OLD_NAME", help="Current project name.")
    parser.add_argument(
        "--ignore",
        "-i",
        help="Comma-separated folder names to skip at every depth (e.g. deps,_build).",
    )
    parser.add_argument("--root", help="Project directory (defaults to the current directory).")
    parser.add_argument("--config", "-c", help="Path to a YAML configuration file.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: INFO).",
    )
    parser.add_argument("--dry-run", action="store_true", help="Log the changes without applying them.")
    return parser


def cli(argv: Optional[Iterable[str]] = None) -> int:
    """Command-line entry point for the project renamer."""

    from common.shared.loader import load_task_config, split_names

    from .utils import configure_logging, pick_root

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if not args.new_name or not args.old_name:
        print(MISSING_ARGUMENTS_MESSAGE)
        return 1

    try:
        validate_names(args.new_name, args.old_name)
        config = load_task_config("project_rename", args.config) if args.config else {}
    except (OSError, ValueError) as exc:
        print(f"❌ {exc}")
        return 1

    configure_logging(args.log_level, config)
    root_path = pick_root(args.root, config)
    ignore = split_names(args.ignore) if args.ignore is not None else list(config.get("ignore") or [])

    try:
        change_project_name(
            root_path,
            args.new_name,
            args.old_name,
            ignore,
            dry_run=args.dry_run or bool(config.get("dry_run", False)),
        )
    except KeyboardInterrupt:
        log.warning("⚠️ Operation cancelled by user.")
        return 130
    except OSError as exc:
        log.error(f"❌ {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(cli())
