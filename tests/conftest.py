# -*- coding: utf-8 -*-

import pytest

import fstash


STATIC_CONTENT = b"some static content"
TEMPLATE_CONTENT = b"Author of {{ .AppName }} is {{ .Author }}."

SAMPLE_FILES = (
    "file1.txt",
    "file2.txt",
    "dir1/file1.txt",
    "dir1/file2.txt",
    "dir2/file1.txt",
    "dir2/file2.txt",
    "dir2/dir3/file1.txt",
    "dir2/dir3/file2.txt",
)

SAMPLE_MANIFEST = {
    ".": ["file1.txt", "file2.txt"],
    "dir1": ["file1.txt", "file2.txt"],
    "dir2": ["file1.txt", "file2.txt"],
    "dir2/dir3": ["file1.txt", "file2.txt"],
}


def sorted_manifest(manifest):
    return dict((key, sorted(files)) for key, files in manifest.items())


def make_tree(root, files):
    for relpath, content in files.items():
        root.join(relpath).write_binary(content, ensure=True)
    return root


@pytest.fixture
def sample_tree(tmpdir):
    return make_tree(tmpdir.mkdir("tree"),
                     dict((path, b"a" * 100) for path in SAMPLE_FILES))


@pytest.fixture
def template_tree(tmpdir):
    return make_tree(tmpdir.mkdir("templates"), {
        "file1.txt": STATIC_CONTENT,
        "file2.txt": TEMPLATE_CONTENT,
        "dir1/file3.txt": STATIC_CONTENT,
        "dir1/file4.txt": TEMPLATE_CONTENT,
    })


@pytest.fixture
def home(tmpdir):
    return tmpdir.join("home")


@pytest.fixture
def stash(home):
    return fstash.FStash(str(home))


@pytest.fixture
def destination(tmpdir):
    return tmpdir.join("destination")
