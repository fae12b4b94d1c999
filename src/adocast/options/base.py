#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/options/base.py
"""Shared machinery for the adocast option groups.

Every option group is a frozen dataclass. A field's metadata holds its
``help`` text and, for settings exposed on the command line, its
``cli_name`` and ``choices``; the CLI and the config loader read them from
here instead of repeating them.
"""

from __future__ import annotations

import sys
from dataclasses import Field, dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes support for frozen dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        The copy goes through ``__post_init__`` again, so replaced values are
        validated like constructor arguments.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            The updated copy

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseOptions(CloneFrozenMixin):
    """Base class of ``ReaderOptions`` and ``ConverterOptions``."""

    @classmethod
    def option_fields(cls) -> dict[str, Field]:
        """Map each setting name to its dataclass field, in declaration order."""
        return {f.name: f for f in fields(cls)}

    @classmethod
    def field_names(cls) -> set[str]:
        """Return the names of all settings."""
        return set(cls.option_fields())

    def __post_init__(self) -> None:
        """Check field values; subclasses raise ``ValueError`` for bad ones."""
