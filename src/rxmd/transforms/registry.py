#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/transforms/registry.py
"""Transform registry.

This module implements the ordered, name-keyed collection of transform
definitions owned by one parser. The registry's iteration order is the
pipeline order: ``parse`` applies transforms exactly in the order
``list()`` reports.

Ordering rules:
- A new name is appended, or placed relative to an existing transform with
  ``before=`` / ``after=``.
- Re-registering an existing name replaces the definition in place; its
  pipeline position is unchanged unless ``before=`` / ``after=`` is given.
- ``unregister`` of an unknown name is a no-op.

Every registry is independent; there is no global instance.

Examples
--------
    >>> from rxmd.transforms import TransformDefinition, TransformRegistry
    >>> registry = TransformRegistry()
    >>> registry.register(TransformDefinition(
    ...     name="shout", pattern=r"!!(?<text>[^!]+)!!", render=lambda c: c["text"].upper()
    ... )).list()
    ['shout']

"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from typing import Any, Optional

from rxmd.exceptions import ValidationError
from rxmd.transforms.definition import TransformDefinition, coerce_definition
from rxmd.transforms.patterns import compile_pattern

logger = logging.getLogger(__name__)


class TransformRegistry:
    """Ordered registry of transform definitions.

    Mutations and snapshots are serialized by an internal lock, so a
    ``parse`` running in one thread always iterates a consistent copy of the
    order even if another thread registers or removes transforms meanwhile.

    Examples
    --------
    Insert a transform ahead of paragraph wrapping:

        >>> registry.register(definition, before="paragraphs")

    Look a transform up:

        >>> registry.lookup("bold")
        TransformDefinition(name='bold', ...)

    """

    def __init__(self) -> None:
        """Create an empty registry."""
        self._transforms: dict[str, TransformDefinition] = {}
        self._lock = threading.RLock()

    def register(
        self,
        definition: TransformDefinition | Mapping[str, Any] | None = None,
        *,
        before: Optional[str] = None,
        after: Optional[str] = None,
        **fields: Any,
    ) -> TransformRegistry:
        """Register or replace a transform.

        Parameters
        ----------
        definition : TransformDefinition or Mapping, optional
            The transform to register; keyword ``fields`` are applied on top
            of it (or used alone when it is omitted)
        before : str, optional
            Place the transform immediately before this registered transform
        after : str, optional
            Place the transform immediately after this registered transform
        **fields
            Definition fields (``name``, ``pattern``, ``render``, ...)

        Returns
        -------
        TransformRegistry
            This registry, for chaining

        Raises
        ------
        ValidationError
            If ``name``, ``pattern`` or ``render`` is missing, ``render`` is
            not callable, or the placement anchor is invalid
        PatternError
            If the pattern does not compile

        Notes
        -----
        A failed registration leaves the registry unchanged.

        """
        definition = coerce_definition(definition, **fields)
        definition.validate()
        compile_pattern(definition.pattern, definition.flags, transform_name=definition.name)

        if before is not None and after is not None:
            raise ValidationError(
                "Specify at most one of 'before' and 'after'",
                parameter_name="before",
                parameter_value=before,
            )

        anchor = before if before is not None else after
        with self._lock:
            if anchor is not None:
                if anchor == definition.name or anchor not in self._transforms:
                    raise ValidationError(
                        f"Cannot place transform '{definition.name}' relative to '{anchor}': "
                        "anchor is not another registered transform",
                        parameter_name="before" if before is not None else "after",
                        parameter_value=anchor,
                    )
                self._place(definition, anchor, after=after is not None)
            elif definition.name in self._transforms:
                logger.info(f"Transform '{definition.name}' already registered, replacing in place")
                self._transforms[definition.name] = definition
            else:
                self._transforms[definition.name] = definition

        logger.debug(f"Registered transform: {definition.name}")
        return self

    def _place(self, definition: TransformDefinition, anchor: str, after: bool) -> None:
        """Rebuild the order with ``definition`` next to ``anchor``. Caller holds the lock."""
        items = [(name, item) for name, item in self._transforms.items() if name != definition.name]
        ordered: dict[str, TransformDefinition] = {}
        for name, item in items:
            if name == anchor and not after:
                ordered[definition.name] = definition
            ordered[name] = item
            if name == anchor and after:
                ordered[definition.name] = definition
        self._transforms = ordered

    def unregister(self, name: str) -> TransformRegistry:
        """Remove a transform if it is registered.

        Parameters
        ----------
        name : str
            Transform name to remove

        Returns
        -------
        TransformRegistry
            This registry, for chaining

        """
        with self._lock:
            removed = self._transforms.pop(name, None)

        if removed is not None:
            logger.debug(f"Unregistered transform: {name}")
        return self

    def list(self) -> list[str]:
        """Return the registered names in pipeline order."""
        with self._lock:
            return list(self._transforms)

    def lookup(self, name: str) -> Optional[TransformDefinition]:
        """Return the definition registered under ``name``, or None if not found."""
        with self._lock:
            return self._transforms.get(name)

    def snapshot(self) -> tuple[TransformDefinition, ...]:
        """Return an immutable copy of the definitions in pipeline order."""
        with self._lock:
            return tuple(self._transforms.values())

    def clear(self) -> None:
        """Remove every transform."""
        with self._lock:
            self._transforms.clear()
        logger.debug("Cleared transform registry")

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._transforms

    def __iter__(self) -> Iterator[str]:
        return iter(self.list())

    def __len__(self) -> int:
        with self._lock:
            return len(self._transforms)

    def __repr__(self) -> str:
        return f"TransformRegistry({self.list()!r})"


__all__ = [
    "TransformRegistry",
]
