# -*- coding: utf-8 -*-
"""Scan directory trees into manifests and replicate them between
filesystems.

A manifest maps a directory, relative to the scanned root, to the names of
the regular files directly inside it. The root itself is keyed as ``.``.
Directories that hold no files have no key, so they are not recreated by
:func:`replicate`.
"""

import logging
import os
from typing import Callable, Dict, List, Optional

import fs as pyfs
from fs import errors
from fs.base import FS
from fs.enums import ResourceType
from fs.permissions import Permissions

from .exceptions import NotFound, StashIOError

logger = logging.getLogger(__name__)

Manifest = Dict[str, List[str]]
Transform = Callable[[str, bytes], bytes]

ROOT_KEY = "."


def manifest_key(relpath: str) -> str:
    """Return the manifest key of a directory path relative to the scan root."""
    return relpath.strip("/") or ROOT_KEY


def scan(src_fs: FS, path: str = "/") -> Manifest:
    """Walk `path` recursively and return its manifest.

    Symlinks and other entries that are neither regular files nor directories
    are skipped and symlinked directories are not followed.

    Raises:
        NotFound: If `path` is not an existing directory.
        StashIOError: If a directory can't be read.
    """
    if not src_fs.isdir(path):
        raise NotFound("directory does not exist: {0}".format(path))

    manifest = {}  # type: Manifest
    try:
        _scan_dir(src_fs, pyfs.path.abspath(path), "", manifest)
    except errors.FSError as error:
        raise StashIOError("failed to scan {0}: {1}".format(path, error)) from error

    return manifest


def _scan_dir(src_fs, dir_path, relpath, manifest):
    for info in src_fs.scandir(dir_path, namespaces=["details", "link"]):
        child_relpath = pyfs.path.join(relpath, info.name)

        if info.get("link", "target") is not None:
            logger.warning("Skipping symlink %s", child_relpath)
        elif info.is_dir:
            _scan_dir(src_fs, pyfs.path.join(dir_path, info.name), child_relpath,
                      manifest)
        elif info.type == ResourceType.file:
            manifest.setdefault(manifest_key(relpath), []).append(info.name)
        else:
            logger.warning("Skipping %s entry %s", info.type.name, child_relpath)


def replicate(manifest: Manifest,
              src_fs: FS,
              dst_fs: FS,
              src_path: str = "/",
              dst_path: str = "/",
              transform: Optional[Transform] = None,
              dmode: int = 0o777,
              fmode: Optional[int] = 0o777) -> int:
    """Copy every file listed in `manifest` from `src_path` on `src_fs` to
    `dst_path` on `dst_fs`, creating directories as needed.

    Args:
        manifest: Manifest of the tree under `src_path`.
        src_fs: Filesystem to read from.
        dst_fs: Filesystem to write to.
        src_path: Directory the manifest is relative to on `src_fs`.
        dst_path: Directory the tree is recreated under on `dst_fs`.
        transform: Optional ``(relpath, data) -> data`` callable applied to
            each file's content before it is written.
        dmode: Mode for created directories, subject to the umask.
        fmode: Mode set on every written file when `dst_fs` has system
            paths, ``None`` keeps the filesystem default.

    Returns:
        Number of files written.

    Raises:
        StashIOError: On any read or write failure. Files written before the
            failure are left in place.
    """
    perms = Permissions.create(dmode)
    count = 0

    for dir_key, files in manifest.items():
        src_dir = pyfs.path.join(src_path, dir_key)
        dst_dir = pyfs.path.join(dst_path, dir_key)

        try:
            if not dst_fs.isdir(dst_dir):
                dst_fs.makedirs(dst_dir, permissions=perms, recreate=True)
        except errors.FSError as error:
            raise StashIOError("failed to create directory {0}: {1}".format(
                dst_dir, error)) from error

        for name in files:
            relpath = pyfs.path.join("" if dir_key == ROOT_KEY else dir_key, name)

            try:
                data = src_fs.readbytes(pyfs.path.join(src_dir, name))
            except errors.FSError as error:
                raise StashIOError("failed to read {0}: {1}".format(
                    relpath, error)) from error

            if transform is not None:
                data = transform(relpath, data)

            dst_file = pyfs.path.join(dst_dir, name)
            try:
                dst_fs.writebytes(dst_file, data)
                _set_mode(dst_fs, dst_file, fmode)
            except (errors.FSError, OSError) as error:
                raise StashIOError("failed to write {0}: {1}".format(
                    relpath, error)) from error

            logger.debug("Copied %s", relpath)
            count += 1

    return count


def _set_mode(dst_fs, path, fmode):
    if fmode is None or not dst_fs.hassyspath(path):
        return
    os.chmod(dst_fs.getsyspath(path), fmode)


def list_depth(src_fs: FS, depth: int, path: str = "/") -> List[str]:
    """Return base names of directories exactly `depth` levels below `path`,
    in walk order.
    """
    if depth <= 0:
        return []

    base_depth = len(pyfs.path.iteratepath(path))
    names = []

    try:
        for dir_path in src_fs.walk.dirs(path, max_depth=depth):
            if len(pyfs.path.iteratepath(dir_path)) - base_depth == depth:
                names.append(pyfs.path.basename(dir_path))
    except errors.FSError as error:
        raise StashIOError("failed to list {0}: {1}".format(path, error)) from error

    return names
