from __future__ import annotations

from pathlib import Path

from file.tree import DirectoryNode, FileNode, read_children, read_tree


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_read_children_returns_tagged_sorted_nodes(tmp_path: Path) -> None:
    _touch(tmp_path / "b.txt")
    _touch(tmp_path / "a.md")
    (tmp_path / "lib").mkdir()
    _touch(tmp_path / ".env")
    (tmp_path / ".git").mkdir()

    children = read_children(tmp_path)

    assert [child.name for child in children] == ["a.md", "b.txt", "lib"]
    assert isinstance(children[0], FileNode)
    assert isinstance(children[2], DirectoryNode)
    assert children[2].children == ()


def test_read_children_applies_accept_filter(tmp_path: Path) -> None:
    (tmp_path / "deps").mkdir()
    (tmp_path / "src").mkdir()

    children = read_children(tmp_path, accept=lambda name: name != "deps")

    assert [child.name for child in children] == ["src"]


def test_read_tree_nests_directories(tmp_path: Path) -> None:
    _touch(tmp_path / "docs" / "guide.md")
    _touch(tmp_path / "docs" / "api" / "ref.md")
    _touch(tmp_path / "docs" / ".draft.md")

    tree = read_tree(tmp_path)

    assert [node.name for node in tree.directories] == ["docs"]
    docs = tree.directories[0]
    assert [node.name for node in docs.files] == ["guide.md"]
    assert [node.name for node in docs.directories] == ["api"]
    assert [node.name for node in docs.directories[0].files] == ["ref.md"]
