"""
file.tree

Filesystem node model shared by the indexer and the renamer. Each directory is
listed exactly once; the listing yields tagged nodes so callers never re-query
the file type of a child.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from common.base.fs import is_hidden


@dataclass(frozen=True)
class FileNode:
    """A regular (non-directory) entry."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class DirectoryNode:
    """A directory entry with its non-hidden children, when read."""

    path: Path
    children: Tuple["Node", ...] = field(default=())

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def files(self) -> List[FileNode]:
        return [child for child in self.children if isinstance(child, FileNode)]

    @property
    def directories(self) -> List["DirectoryNode"]:
        return [child for child in self.children if isinstance(child, DirectoryNode)]


Node = Union[DirectoryNode, FileNode]


def read_children(
    directory: Path,
    *,
    accept: Optional[Callable[[str], bool]] = None,
) -> List[Node]:
    """
    List the immediate children of ``directory`` as tagged nodes.

    Hidden entries are always dropped; ``accept`` can reject further names.
    Children come back sorted by name so repeated runs visit the same order.
    Child directories are returned without their own children.

    Raises:
        FileNotFoundError / NotADirectoryError / PermissionError from the listing.
    """
    nodes: List[Node] = []
    with os.scandir(directory) as entries:
        for entry in sorted(entries, key=lambda e: e.name):
            if is_hidden(entry.name):
                continue
            if accept is not None and not accept(entry.name):
                continue
            path = Path(directory) / entry.name
            if entry.is_dir():
                nodes.append(DirectoryNode(path))
            else:
                nodes.append(FileNode(path))
    return nodes


def read_tree(directory: Path) -> DirectoryNode:
    """Read ``directory`` and every non-hidden descendant into a node tree."""
    children: List[Node] = []
    for child in read_children(directory):
        if isinstance(child, DirectoryNode):
            children.append(read_tree(child.path))
        else:
            children.append(child)
    return DirectoryNode(Path(directory), tuple(children))
