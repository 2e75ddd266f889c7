# -*- coding: utf-8 -*-
"""Errors raised by fstash operations.

Every operation raises the first error it meets and stops. Nothing is retried
and nothing already written is rolled back.
"""


class FStashError(Exception):
    """Base class for all fstash errors."""


class InvalidName(FStashError, ValueError):
    """Stash name contains characters other than ASCII letters, digits, ``-``
    and ``_`` after normalization.
    """

    def __init__(self, name):
        super(InvalidName, self).__init__("invalid stash name: {0!r}".format(name))
        self.name = name


class NotFound(FStashError, LookupError):
    """Referenced stash or source directory does not exist."""


class StashIOError(FStashError, IOError):
    """Filesystem read, write or create failure. The original error is kept as
    ``__cause__``.
    """


class TemplateError(FStashError):
    """A template file could not be rendered."""
