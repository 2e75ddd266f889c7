# -*- coding: utf-8 -*-


"""
common utils for fstash
"""


import re
from contextlib import contextmanager
from typing import Iterator, List, Union

from fs import errors
from fs.base import FS
from fs.osfs import OSFS

from .exceptions import NotFound

FSLike = Union[FS, str]

FNV64_OFFSET = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
FNV64_MASK = 0xFFFFFFFFFFFFFFFF

KEY_SIZE = 4

NAME_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")


def fnv1a64(data: bytes) -> bytes:
    """Return the 64-bit FNV-1a digest of `data` as 8 big-endian bytes."""
    value = FNV64_OFFSET
    for byte in data:
        value ^= byte
        value = (value * FNV64_PRIME) & FNV64_MASK
    return value.to_bytes(8, "big")


def compute_key(name: str) -> bytes:
    """Derive the 4 byte location key of a stash name.

    The 8 byte FNV-1a digest is folded in half: byte ``i`` is XOR-ed with byte
    ``i + 4`` and the upper half is dropped.
    """
    digest = fnv1a64(name.encode("utf8"))
    return bytes(digest[i] ^ digest[i + KEY_SIZE] for i in range(KEY_SIZE))


def key_to_segments(key: bytes) -> List[str]:
    """Render each key byte as two uppercase hex digits."""
    return ["{0:02X}".format(byte) for byte in key]


def shard(name: str) -> List[str]:
    # Four hex segments bound the fan-out per directory, the name itself
    # keeps colliding keys apart.
    return key_to_segments(compute_key(name)) + [name]


def normalize_name(name: str) -> str:
    return name.lower().strip()


def validate_name(name: str) -> bool:
    """Return whether `name` only holds ASCII letters, digits, ``-`` and ``_``."""
    return NAME_PATTERN.fullmatch(name) is not None


def is_path_segment(name: str) -> bool:
    """Return whether `name` can only resolve to a single directory entry."""
    return bool(name) and name not in (".", "..") and not any(
        sep in name for sep in ("/", "\\", "\0"))


def load_fs(root: FSLike, create: bool = False) -> FS:
    """Return a filesystem for `root`.

    Args:
        root: Opened filesystem or path to a directory.
        create: Create the directory if it is missing.

    Raises:
        NotFound: If `root` is a path to a missing directory and `create` is
            false.
    """
    if isinstance(root, FS):
        return root

    try:
        # Paths are taken literally, never parsed as FS URLs.
        return OSFS(str(root), create=create, expand_vars=False)
    except errors.CreateFailed as error:
        raise NotFound("directory does not exist: {0}".format(root)) from error


@contextmanager
def opened_fs(root: FSLike, create: bool = False) -> Iterator[FS]:
    """Context manager around :func:`load_fs`. Filesystems opened here are
    closed on exit, filesystems passed in are left open for their owner.
    """
    filesystem = load_fs(root, create=create)
    try:
        yield filesystem
    finally:
        if filesystem is not root:
            filesystem.close()
