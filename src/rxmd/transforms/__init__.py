#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/transforms/__init__.py
"""Transform system: definitions, registry, pattern compiler and pipeline.

This package provides:

- ``TransformDefinition`` - a named pattern/render pair
- ``TransformRegistry`` - the ordered, name-keyed collection of definitions
- ``compile_pattern`` - pattern + flags to a compiled matcher
- ``extract_captures`` - one match to a capture bag for the render function
- ``run_pipeline`` - sequential whole-buffer scan-and-replace passes
- ``BUILTIN_TRANSFORMS`` - the default feature set, in pipeline order

Examples
--------
Build a pipeline from scratch:

    >>> from rxmd.transforms import TransformRegistry, run_pipeline
    >>> registry = TransformRegistry().register(
    ...     name="shout", pattern=r"!!(?<text>[^!]+)!!", render=lambda c: c["text"].upper()
    ... )
    >>> run_pipeline("say !!hi!!", registry.snapshot())
    'say HI'

"""

from rxmd.transforms.builtin import BUILTIN_TRANSFORMS, register_builtin_transforms
from rxmd.transforms.captures import Captures, NamedCaptures, PositionalCaptures, extract_captures
from rxmd.transforms.definition import RenderFunction, TransformDefinition
from rxmd.transforms.patterns import CompiledPattern, compile_pattern, normalize_flags
from rxmd.transforms.pipeline import apply_transform, run_pipeline
from rxmd.transforms.registry import TransformRegistry

__all__ = [
    "BUILTIN_TRANSFORMS",
    "Captures",
    "CompiledPattern",
    "NamedCaptures",
    "PositionalCaptures",
    "RenderFunction",
    "TransformDefinition",
    "TransformRegistry",
    "apply_transform",
    "compile_pattern",
    "extract_captures",
    "normalize_flags",
    "register_builtin_transforms",
    "run_pipeline",
]
