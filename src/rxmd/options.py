#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parser options.

``RxmdOptions`` is a frozen dataclass; use ``create_updated`` to derive a
modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, get_args

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from rxmd.constants import DEFAULT_DISPLAY_MODE, DisplayMode
from rxmd.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

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
class RxmdOptions(CloneFrozenMixin):
    """Options controlling a ``MarkdownParser``.

    Parameters
    ----------
    display_mode : {"plain", "terminal"}, default "plain"
        How ``help()`` renders: Markdown text, or ANSI-decorated terminal output
    disabled_transforms : tuple[str, ...], default ()
        Built-in transforms removed right after construction. Unknown names
        are ignored, matching ``unregister``

    """

    display_mode: DisplayMode = field(
        default=DEFAULT_DISPLAY_MODE,
        metadata={"help": "Help rendering: 'plain' Markdown or 'terminal' colors"},
    )
    disabled_transforms: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Built-in transforms to remove from the pipeline"},
    )

    def __post_init__(self) -> None:
        """Validate and normalize option values.

        Raises
        ------
        ValidationError
            If ``display_mode`` is not a known mode, or
            ``disabled_transforms`` contains non-string entries

        """
        if self.display_mode not in get_args(DisplayMode):
            raise ValidationError(
                f"display_mode must be one of {get_args(DisplayMode)}, got {self.display_mode!r}",
                parameter_name="display_mode",
                parameter_value=self.display_mode,
            )

        disabled = self.disabled_transforms
        names = (disabled,) if isinstance(disabled, str) else tuple(disabled)
        if not all(isinstance(name, str) for name in names):
            raise ValidationError(
                "disabled_transforms must contain transform names",
                parameter_name="disabled_transforms",
                parameter_value=disabled,
            )
        object.__setattr__(self, "disabled_transforms", names)


__all__ = [
    "CloneFrozenMixin",
    "RxmdOptions",
]
