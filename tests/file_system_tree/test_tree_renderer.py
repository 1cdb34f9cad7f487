import pytest

from dir2md.file_system_tree.file_system_node import FileSystemNode
from dir2md.file_system_tree.tree_renderer import render_tree, stream_tree_lines


@pytest.fixture
def sample_tree():
    root = FileSystemNode("root", is_dir=True)
    a = FileSystemNode("a", parent=root, is_dir=True)
    FileSystemNode("x.txt", parent=a)
    FileSystemNode("y.txt", parent=a)
    FileSystemNode("b.txt", parent=root)
    return root


def test_render_nested_tree(sample_tree):
    assert render_tree(sample_tree) == [
        "└── root",
        "    ├── a",
        "    │   ├── x.txt",
        "    │   └── y.txt",
        "    └── b.txt",
    ]


def test_render_last_directory_uses_space_indent():
    root = FileSystemNode("root", is_dir=True)
    FileSystemNode("a.txt", parent=root)
    sub = FileSystemNode("sub", parent=root, is_dir=True)
    inner = FileSystemNode("inner", parent=sub, is_dir=True)
    FileSystemNode("deep.go", parent=inner)

    assert render_tree(root) == [
        "└── root",
        "    ├── a.txt",
        "    └── sub",
        "        └── inner",
        "            └── deep.go",
    ]


def test_render_empty_directory_is_one_line():
    assert render_tree(FileSystemNode("empty", is_dir=True)) == ["└── empty"]


def test_render_single_file():
    assert render_tree(FileSystemNode("main.go")) == ["└── main.go"]


def test_render_is_idempotent(sample_tree):
    assert render_tree(sample_tree) == render_tree(sample_tree)


def test_render_does_not_mutate_tree(sample_tree):
    before = [node.name for node in sample_tree.descendants]
    render_tree(sample_tree)
    assert [node.name for node in sample_tree.descendants] == before


def test_stream_tree_lines_with_prefix():
    node = FileSystemNode("dir", is_dir=True)
    FileSystemNode("f", parent=node)
    assert list(stream_tree_lines(node, prefix="│   ", is_last=False)) == [
        "│   ├── dir",
        "│   │   └── f",
    ]
