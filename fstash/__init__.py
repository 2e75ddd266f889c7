# -*- coding: utf-8 -*-
"""fstash keeps named snapshots of directory trees. What does that mean?
Simply, that fstash copies the files of a directory into a storage area under
a name, and later copies them back into any directory, optionally rendering
some of them as templates.

Typical use cases for this kind of system are ones where:

- The same project skeleton or config set is laid down again and again.
- A few files in that skeleton need per-use values filled in.
- A plain copy of files is enough (no history, no permissions).
"""

import logging

from .__meta__ import (
    __title__,
    __summary__,
    __url__,
    __version__,
    __author__,
    __email__,
    __license__,
)

from .exceptions import FStashError, InvalidName, NotFound, StashIOError, TemplateError
from .fstash import FStash, StashAddress, open_stash
from .template import TemplateRenderer
from .tree import list_depth, replicate, scan
from .utils import compute_key, key_to_segments, normalize_name, validate_name


logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "FStash",
    "StashAddress",
    "open_stash",
    "FStashError",
    "InvalidName",
    "NotFound",
    "StashIOError",
    "TemplateError",
    "TemplateRenderer",
    "scan",
    "replicate",
    "list_depth",
    "compute_key",
    "key_to_segments",
    "normalize_name",
    "validate_name",
)
