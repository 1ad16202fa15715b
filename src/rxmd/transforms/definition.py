#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/transforms/definition.py
"""Transform definitions.

A transform pairs a pattern with a render function. ``TransformDefinition``
holds that pair together with its documentation fields; it is the unit
stored in a ``TransformRegistry``.

Examples
--------
Define a transform for ``==highlighted==`` text:

    >>> from rxmd.transforms import TransformDefinition
    >>> highlight = TransformDefinition(
    ...     name="highlight",
    ...     description="Highlighted text wrapped in double equals signs",
    ...     usage="==marked text==",
    ...     pattern=r"==(?<text>[^=]+)==",
    ...     render=lambda captures: f"<mark>{captures['text']}</mark>",
    ... )

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Callable, Optional, Union

from rxmd.constants import DEFAULT_FLAGS
from rxmd.exceptions import PatternError, ValidationError
from rxmd.transforms.captures import NamedCaptures, PositionalCaptures
from rxmd.transforms.patterns import normalize_flags

RenderFunction = Callable[[Union[NamedCaptures, PositionalCaptures]], str]

MISSING_FIELDS_MESSAGE = "Feature must have name, pattern, and replacement"


@dataclass(frozen=True)
class TransformDefinition:
    """A named pattern/render pair.

    Parameters
    ----------
    name : str
        Unique key of the transform in its registry
    pattern : str
        Regular expression matched against the running buffer
    render : callable
        Function from capture bag to replacement string
    description : str, default ""
        One-line description (documentation only)
    usage : str, default ""
        Example input (documentation only)
    flags : str, default "g"
        Matching options, normalized to canonical flag letters
    tags : tuple[str, ...], default ()
        Free-form labels shown in help output (documentation only)

    Notes
    -----
    Definitions are immutable; ``create_updated`` returns a modified copy.
    Presence of ``name``, ``pattern`` and ``render`` is checked by
    :meth:`validate`, which the registry calls before admitting a
    definition.

    """

    name: str
    pattern: str
    render: Optional[RenderFunction]
    description: str = ""
    usage: str = ""
    flags: str = DEFAULT_FLAGS
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Normalize flags and tags."""
        try:
            flags = normalize_flags(self.flags)
        except PatternError as e:
            owner = f" for transform '{self.name}'" if self.name else ""
            raise PatternError(
                f"{e.message}{owner}: /{self.pattern}/",
                pattern=self.pattern,
                transform_name=self.name or None,
                original_error=e,
            ) from e
        object.__setattr__(self, "flags", flags)
        tags = (self.tags,) if isinstance(self.tags, str) else tuple(self.tags)
        object.__setattr__(self, "tags", tags)

    def validate(self) -> None:
        """Check the required fields.

        Raises
        ------
        ValidationError
            If ``name``, ``pattern`` or ``render`` is missing, or ``render``
            is not callable

        """
        if not self.name or not self.pattern or not self.render:
            missing = [key for key in ("name", "pattern", "render") if not getattr(self, key)]
            raise ValidationError(
                MISSING_FIELDS_MESSAGE,
                parameter_name=missing[0],
                parameter_value=getattr(self, missing[0]),
            )
        if not isinstance(self.name, str):
            raise ValidationError(
                f"Transform name must be a string, got {type(self.name).__name__}",
                parameter_name="name",
                parameter_value=self.name,
            )
        if not callable(self.render):
            raise ValidationError(
                f"Render function for transform '{self.name}' must be callable, got {type(self.render).__name__}",
                parameter_name="render",
                parameter_value=self.render,
            )

    def create_updated(self, **kwargs: Any) -> TransformDefinition:
        """Return a copy with the given fields replaced."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update(kwargs)
        return TransformDefinition(**values)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TransformDefinition:
        """Build a definition from a mapping of field values.

        Missing required fields become empty values so that :meth:`validate`
        reports them; unknown keys are rejected.

        Parameters
        ----------
        data : Mapping[str, Any]
            Field values keyed by field name

        Returns
        -------
        TransformDefinition
            The (not yet validated) definition

        Raises
        ------
        ValidationError
            If ``data`` contains keys that are not definition fields

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(
                f"Unknown transform field(s): {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=data[unknown[0]],
            )

        values = dict(data)
        values.setdefault("name", "")
        values.setdefault("pattern", "")
        values.setdefault("render", None)
        if values.get("flags") is None:
            values["flags"] = DEFAULT_FLAGS
        if values.get("tags") is None:
            values["tags"] = ()
        for key in ("description", "usage"):
            if values.get(key) is None:
                values[key] = ""
        return cls(**values)

    @property
    def signature(self) -> str:
        """Pattern and flags in ``/pattern/flags`` notation."""
        return f"/{self.pattern}/{self.flags}"


def coerce_definition(definition: TransformDefinition | Mapping[str, Any] | None, **overrides: Any) -> TransformDefinition:
    """Accept a definition, a mapping, or keyword fields and return a definition.

    Parameters
    ----------
    definition : TransformDefinition, Mapping, or None
        Base definition; ``None`` builds one from ``overrides`` alone
    **overrides
        Field values applied on top of ``definition``

    Returns
    -------
    TransformDefinition
        The (not yet validated) definition

    Raises
    ------
    ValidationError
        If the input is of an unsupported type or names unknown fields

    """
    if isinstance(definition, TransformDefinition):
        return definition.create_updated(**overrides) if overrides else definition
    if definition is None:
        return TransformDefinition.from_mapping(overrides)
    if isinstance(definition, Mapping):
        return TransformDefinition.from_mapping({**definition, **overrides})
    raise ValidationError(
        f"Expected TransformDefinition or mapping, got {type(definition).__name__}",
        parameter_name="definition",
        parameter_value=definition,
    )


__all__ = [
    "MISSING_FIELDS_MESSAGE",
    "RenderFunction",
    "TransformDefinition",
    "coerce_definition",
]
