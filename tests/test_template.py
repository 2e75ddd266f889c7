# -*- coding: utf-8 -*-

import pytest

from fstash.exceptions import TemplateError
from fstash.template import TemplateRenderer, template_key

from .conftest import STATIC_CONTENT, TEMPLATE_CONTENT


@pytest.fixture
def renderer():
    return TemplateRenderer({
        "file2": {"AppName": "fstash", "Author": "dc0d"},
        "file4": {"AppName": "Web", "Author": "Web Developer"},
        "README": {"Title": "Hello"},
    })


@pytest.mark.parametrize("filename,expected", [
    ("file2.txt", "file2"),
    ("dir1/file4.txt", "file4"),
    ("archive.tar.gz", "archive.tar"),
    ("README", "README"),
    ("dir/README", "README"),
])
def test_template_key(filename, expected):
    assert template_key(filename) == expected


def test_render_dotted_placeholders(renderer):
    assert renderer("file2.txt", TEMPLATE_CONTENT) == b"Author of fstash is dc0d."
    assert renderer("dir1/file4.txt", TEMPLATE_CONTENT) == b"Author of Web is Web Developer."


def test_render_plain_placeholders(renderer):
    assert renderer("README", b"# {{ Title }}\n") == b"# Hello\n"


def test_render_whitespace_control(renderer):
    assert renderer("README", b"[ {{- .Title -}} ]") == b"[Hello]"


def test_no_template_data_returns_content_unchanged(renderer):
    content = b"Author of {{ .Missing }} \xff\xfe"

    assert renderer("file1.txt", content) is content
    assert renderer("dir1/file3.txt", STATIC_CONTENT) is STATIC_CONTENT


def test_render_missing_variable(renderer):
    with pytest.raises(TemplateError):
        renderer("file2.txt", b"{{ .AppName }} by {{ .Nobody }}")


def test_render_syntax_error(renderer):
    with pytest.raises(TemplateError):
        renderer("file2.txt", b"{{ .AppName ")


def test_render_invalid_text(renderer):
    with pytest.raises(TemplateError):
        renderer("file2.txt", b"\xff\xfe{{ .AppName }}")


def test_render_keeps_trailing_newline(renderer):
    assert renderer("file2.txt", b"{{ .Author }}\n") == b"dc0d\n"


def test_lookup(renderer):
    assert renderer.lookup("some/dir/file2.md") == {"AppName": "fstash", "Author": "dc0d"}
    assert renderer.lookup("file3.txt") is None


@pytest.mark.parametrize("content,expected", [
    (b"echo {{ .Author }} has ${#items[@]} items\n",
     b"echo dc0d has ${#items[@]} items\n"),
    (b"{% raw %}{{ .AppName }}{% endraw %}", b"{% raw %}fstash{% endraw %}"),
    (b"{# not a comment #} {{ .Author }}", b"{# not a comment #} dc0d"),
    (b"{%- if x %}{{ .Author }}", b"{%- if x %}dc0d"),
])
def test_render_only_placeholders_are_live(renderer, content, expected):
    assert renderer("file2.sh", content) == expected
