"""
file.indexer

Walk a directory tree (hidden entries skipped) and write a markdown index of
every file to ``<root>/index.md``. Directories become headings whose level
follows their nesting depth; each file becomes a link titled with the first
heading of the file when it is markdown, or with its filename otherwise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from common.base.file_io import read_text, write_text
from common.base.fs import to_posix
from common.base.logging import get_logger
from common.shared.utils import Progress

from .tree import DirectoryNode, FileNode, read_children, read_tree
from .utils import resolve_root

log = get_logger(__name__)

INDEX_FILENAME = "index.md"
DOCUMENT_HEADING = "# All File"
TOP_LEVEL_DEPTH = 2
MARKDOWN_SUFFIX = ".md"
UNKNOWN_ARGUMENTS_MESSAGE = "Unknown arguments. Use -h for help."

_TITLE_RE = re.compile(r"^#\s*(.+)$", re.MULTILINE)


@dataclass(frozen=True)
class DirectoryEntry:
    """One directory block of the index."""

    relative_path: str
    files: Tuple[str, ...]
    depth: int


# ----------------------------------------------------------------------
# TRAVERSAL
# ----------------------------------------------------------------------

def list_files(path: Path | str) -> List[str]:
    """Names of the non-hidden, non-directory children of ``path``."""
    return [node.name for node in read_children(Path(path)) if isinstance(node, FileNode)]


def _flatten(node: DirectoryNode, depth: int, base: Path) -> List[DirectoryEntry]:
    entries: List[DirectoryEntry] = []
    for child in node.directories:
        entries.append(
            DirectoryEntry(
                relative_path=to_posix(child.path.relative_to(base)),
                files=tuple(file_node.name for file_node in child.files),
                depth=depth,
            )
        )
        entries.extend(_flatten(child, depth + 1, base))
    return entries


def list_entries(
    path: Path | str,
    depth: int = TOP_LEVEL_DEPTH,
    relative_to: Optional[Path | str] = None,
) -> List[DirectoryEntry]:
    """
    Collect one entry per non-hidden directory below ``path``.

    Each directory's entry is immediately followed by the entries of its own
    subdirectories (pre-order). Relative paths are taken against
    ``relative_to`` (defaults to ``path``).
    """
    directory = Path(path)
    base = Path(relative_to) if relative_to is not None else directory
    return _flatten(read_tree(directory), depth, base)


# ----------------------------------------------------------------------
# RENDERING
# ----------------------------------------------------------------------

def extract_title(file_path: Path | str) -> str:
    """
    Display title for a file.

    Markdown files use their first ``#`` heading; when the file cannot be read
    or has no heading the filename without ``.md`` is used. Other files use
    their filename.
    """
    path = Path(file_path)
    if not path.name.endswith(MARKDOWN_SUFFIX):
        return path.name

    fallback = path.name[: -len(MARKDOWN_SUFFIX)]
    try:
        content = read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        log.debug(f"Title extraction failed for {path}: {exc}")
        return fallback

    match = _TITLE_RE.search(content)
    if match is None:
        return fallback
    return match.group(1).strip()


def _link(root: Path, relative_dir: str, filename: str) -> str:
    target = f"{relative_dir}/{filename}"
    return f"[{extract_title(root / target)}]({target})"


def render_entry(root: Path, entry: DirectoryEntry) -> str:
    heading = f"{'#' * entry.depth} {entry.relative_path}"
    links = [_link(root, entry.relative_path, filename) for filename in entry.files]
    return "\n\n".join([heading, *links])


def generate_content(root: Path | str, include_progress: bool = False) -> str:
    """
    Render the full index document for ``root``.

    Only subdirectories produce blocks; files sitting directly in ``root``
    (the index file among them) are not listed.
    """
    root_path = resolve_root(root)
    entries = _flatten(read_tree(root_path), TOP_LEVEL_DEPTH, root_path)
    iterable: Iterable[DirectoryEntry] = (
        Progress(entries, desc="Indexing", total=len(entries)) if include_progress else entries
    )
    blocks = [render_entry(root_path, entry) for entry in iterable]

    log.debug(f"Indexed {len(entries)} directories under {root_path}")
    return f"{DOCUMENT_HEADING}\n\n" + "\n\n".join(blocks)


def rollback_hint(index_path: Path) -> str:
    return f"git reset HEAD^ && git checkout -- {index_path}"


def write_index(
    root: Path | str,
    *,
    index_name: str = INDEX_FILENAME,
    dry_run: bool = False,
    include_progress: bool = False,
) -> Path:
    """
    Write the index document to ``<root>/<index_name>`` (overwriting it).

    Prints the written path and a git rollback hint. With ``dry_run`` the
    document is printed instead and nothing is written.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
        NotADirectoryError: If ``root`` is not a directory.
        OSError: If the index file cannot be written.
    """
    root_path = resolve_root(root)
    content = generate_content(root_path, include_progress=include_progress)
    index_path = root_path / index_name

    if dry_run:
        log.info(f"[DRY-RUN] Would write {index_path}")
        print(content)
        return index_path

    write_text(index_path, content)
    log.info(f"📄 Index written to: {index_path}")

    print(f"File list has been written to {index_path}")
    print(f"Rollback command: {rollback_hint(index_path)}")
    return index_path


# ----------------------------------------------------------------------
# CLI
# ----------------------------------------------------------------------

def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="file-index",
        description=(
            "List every file below FOLDER_PATH (ignoring .git and other hidden "
            "files or folders) and write the result to an index.md file in that folder."
        ),
        epilog="Commit first (git add . && git commit) so the printed rollback command can undo the write.",
    )
    parser.add_argument(
        "folder_path",
        nargs="*",
        metavar="FOLDER_PATH",
        help="Folder to index (defaults to the first configured root, else the current directory).",
    )
    parser.add_argument("--config", "-c", help="Path to a YAML configuration file.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: INFO).",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the index instead of writing it.")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar while indexing.")
    return parser


def cli(argv: Optional[Iterable[str]] = None) -> int:
    """Command-line entry point for the directory indexer."""

    from common.shared.loader import load_task_config

    from .utils import configure_logging, pick_root

    parser = build_parser()
    try:
        args, unknown = parser.parse_known_args(list(argv) if argv is not None else None)
    except SystemExit as exc:
        # -h / --help exits 0; anything argparse itself rejects is a bad argument.
        if not exc.code:
            raise
        print(UNKNOWN_ARGUMENTS_MESSAGE)
        return 1
    if unknown or len(args.folder_path) > 1:
        print(UNKNOWN_ARGUMENTS_MESSAGE)
        return 1

    try:
        config = load_task_config("file_index", args.config) if args.config else {}
    except (OSError, ValueError) as exc:
        print(f"❌ {exc}")
        return 1

    configure_logging(args.log_level, config)
    root_path = pick_root(args.folder_path[0] if args.folder_path else None, config)

    try:
        write_index(
            root_path,
            index_name=config.get("index_name") or INDEX_FILENAME,
            dry_run=args.dry_run or bool(config.get("dry_run", False)),
            include_progress=args.progress or bool(config.get("progress", False)),
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
