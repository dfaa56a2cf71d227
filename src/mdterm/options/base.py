#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for parser and renderer options.

This module defines the foundation classes for the options used by the
markdown parser and the terminal renderer.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdterm.constants import DEFAULT_MAX_ASSET_SIZE_BYTES


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    fail_on_resource_errors : bool, default=False
        Whether to raise RenderingError when resource loading fails (e.g., images).
        If False (default), warnings are logged and the textual fallback is used.
    max_asset_size_bytes : int
        Maximum allowed size in bytes for any single asset (images)

    """

    fail_on_resource_errors: bool = field(
        default=False,
        metadata={
            "help": "Raise RenderingError on resource failures (images) instead of logging warnings",
            "importance": "advanced",
        },
    )
    max_asset_size_bytes: int = field(
        default=DEFAULT_MAX_ASSET_SIZE_BYTES,
        metadata={
            "help": "Maximum allowed size in bytes for any single asset (images)",
            "type": int,
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for base renderer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_asset_size_bytes <= 0:
            raise ValueError(f"max_asset_size_bytes must be positive, got {self.max_asset_size_bytes}")


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Notes
    -----
    Subclasses should define format-specific parsing options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Hook for subclass validation."""
