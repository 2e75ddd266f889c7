"""Module for FStash class."""

import logging
from collections import namedtuple
from contextlib import closing
from typing import Iterable, List, Optional

import fs as pyfs
from fs import errors, tools

from . import tree
from . import utils as u
from .exceptions import InvalidName, NotFound, StashIOError
from .template import TemplateData, TemplateRenderer

logger = logging.getLogger(__name__)

SHARD_DEPTH = 4
LIST_DEPTH = SHARD_DEPTH + 1


class StashAddress(namedtuple("StashAddress", ["name", "key", "relpath", "abspath"])):
    """Location of a stash in the storage root.

    Attributes:
        name (str): Normalized stash name.
        key (str): Hex string of the 4 byte location key.
        relpath (str): Path of the stash relative to the storage root.
        abspath (str): System path of the stash, ``None`` for filesystems
            without one.
    """


class FStash(object):
    """Named directory tree stashes, sharded by a hash of the stash name.

    A stash named ``stash-name`` is stored under ``DB/B2/27/53/stash-name``
    in the storage root.

    Attributes:
        root: Storage root, a directory path or an opened filesystem. Paths
            are created if missing.
        dmode (int, optional): Directory mode permission to set for created
            directories, subject to the umask. Defaults to ``0o777``.
        fmode (int, optional): File mode permission to set on written files
            when the target has system paths. Defaults to ``0o777``, ``None``
            keeps the filesystem default.
    """

    def __init__(self,
                 root: u.FSLike,
                 dmode: int = 0o777,
                 fmode: Optional[int] = 0o777):
        self.fs = u.load_fs(root, create=True)
        self.dmode = dmode
        self.fmode = fmode

    def create(self, name: str, source: u.FSLike) -> StashAddress:
        """Stash the files under `source` as `name`. An existing stash with the
        same name is overwritten file by file; files it holds that are not in
        `source` are kept.

        Args:
            name: Stash name, lower cased and trimmed before use.
            source: Directory path or filesystem to stash.

        Returns:
            Address of the stash.

        Raises:
            InvalidName: If `name` has characters other than ASCII letters,
                digits, ``-`` and ``_``.
            NotFound: If `source` does not exist.
            StashIOError: On any filesystem failure.
        """
        name = u.normalize_name(name)
        if not u.validate_name(name):
            raise InvalidName(name)

        address = self._address(name)

        with u.opened_fs(source) as src_fs:
            manifest = tree.scan(src_fs)
            count = tree.replicate(manifest, src_fs, self.fs,
                                   dst_path=address.relpath,
                                   dmode=self.dmode,
                                   fmode=self.fmode)

        logger.info("Created stash %s with %d files at %s", name, count,
                    address.relpath)
        return address

    def expand(self,
               name: str,
               destination: u.FSLike,
               data: Optional[TemplateData] = None) -> StashAddress:
        """Restore stash `name` into `destination`, rendering files that have
        an entry in `data` as templates.

        Args:
            name: Stash name, lower cased and trimmed before use.
            destination: Directory path or filesystem to restore into. Paths
                are created if missing.
            data: Mapping from file base name without extension to the
                variables used to render that file.

        Returns:
            Address of the stash.

        Raises:
            NotFound: If there is no stash named `name`.
            TemplateError: If a template file fails to render.
            StashIOError: On any filesystem failure.
        """
        address = self._require(name)
        transform = TemplateRenderer(data) if data else None

        manifest = tree.scan(self.fs, address.relpath)
        with u.opened_fs(destination, create=True) as dst_fs:
            count = tree.replicate(manifest, self.fs, dst_fs,
                                   src_path=address.relpath,
                                   transform=transform,
                                   dmode=self.dmode,
                                   fmode=self.fmode)

        logger.info("Expanded stash %s with %d files", address.name, count)
        return address

    def pop(self, name: str, destination: u.FSLike) -> StashAddress:
        """Restore stash `name` into `destination` as exact byte copies."""
        return self.expand(name, destination)

    def delete(self, name: str) -> None:
        """Delete stash `name` and any shard directories left empty. No
        exception is raised if the stash doesn't exist.
        """
        address = self.get(name)
        if address is None:
            return

        try:
            self.fs.removetree(address.relpath)
        except errors.FSError as error:
            raise StashIOError("failed to delete stash {0}: {1}".format(
                address.name, error)) from error

        self._remove_empty(pyfs.path.dirname(address.relpath))
        logger.info("Deleted stash %s", address.name)

    def list(self, depth: int = LIST_DEPTH) -> List[str]:
        """Return names of the directories `depth` levels below the storage
        root, in walk order. With the default depth these are the stash names.
        """
        return tree.list_depth(self.fs, depth)

    def get(self, name: str) -> Optional[StashAddress]:
        """Return :class:`StashAddress` of stash `name` or ``None`` if it
        doesn't exist.
        """
        name = u.normalize_name(name)
        # Look-ups only need the name to stay inside its shard directory.
        if not u.is_path_segment(name):
            return None

        address = self._address(name)
        if not self.fs.isdir(address.relpath):
            return None
        return address

    def manifest(self, name: str) -> tree.Manifest:
        """Return the manifest of stash `name`.

        Raises:
            NotFound: If there is no stash named `name`.
        """
        address = self._require(name)
        return tree.scan(self.fs, address.relpath)

    def exists(self, name: str) -> bool:
        """Check whether stash `name` exists."""
        return self.get(name) is not None

    def close(self) -> None:
        self.fs.close()

    def __contains__(self, name: str) -> bool:
        return self.exists(name)

    def __iter__(self) -> Iterable[str]:
        """Iterate over stash names."""
        return iter(self.list())

    def __len__(self) -> int:
        return len(self.list())

    def _require(self, name: str) -> StashAddress:
        address = self.get(name)
        if address is None:
            raise NotFound("stash does not exist: {0}".format(u.normalize_name(name)))
        return address

    def _address(self, name: str) -> StashAddress:
        """Build the address of a normalized stash name."""
        parts = u.shard(name)
        relpath = pyfs.path.join(*parts)
        abspath = None
        if self.fs.hassyspath("/"):
            abspath = self.fs.getsyspath(relpath)
        return StashAddress(name, "".join(parts[:SHARD_DEPTH]), relpath, abspath)

    def _remove_empty(self, path: str) -> None:
        """Successively remove all empty folders starting with `path` and
        proceeding "up" through the directory tree until reaching the root.
        """
        try:
            tools.remove_empty(self.fs, path)
        except errors.ResourceNotFound:
            # Guard against paths that don't exist in the FS.
            return None
        except errors.FSError as error:
            raise StashIOError("failed to prune {0}: {1}".format(path, error)) from error


def open_stash(root: u.FSLike, dmode: int = 0o777, fmode: Optional[int] = 0o777):
    """Return a context manager that closes the :class:`FStash` on exit."""
    return closing(FStash(root, dmode=dmode, fmode=fmode))
