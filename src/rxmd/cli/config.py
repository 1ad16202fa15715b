#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the rxmd CLI.

Configuration may come from ``.rxmd.toml``, ``.rxmd.yaml``/``.rxmd.yml``,
``.rxmd.json``, or the ``[tool.rxmd]`` table of a ``pyproject.toml``.
Recognized keys:

``display_mode``
    ``"plain"`` or ``"terminal"``. On the command line, ``"terminal"`` makes
    ``rxmd list-transforms`` use rich output as if ``--rich`` were given.
``disable``
    List of transform names to remove from the pipeline
``transforms``
    List of tables describing extra transforms. ``render`` is an import
    path such as ``"mypackage.render:highlight"``; ``before``/``after``
    place the transform relative to an existing one.

Example ``.rxmd.toml``::

    disable = ["strikethrough"]

    [[transforms]]
    name = "highlight"
    pattern = "==(?<text>[^=]+)=="
    render = "mypackage.render:highlight"
    before = "paragraphs"

"""

import importlib
import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Optional

import yaml

from rxmd.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from rxmd.exceptions import ConfigurationError, RxmdError
from rxmd.options import RxmdOptions
from rxmd.parser import MarkdownParser

logger = logging.getLogger(__name__)

KNOWN_CONFIG_KEYS = frozenset({"display_mode", "disable", "transforms"})
TRANSFORM_PLACEMENT_KEYS = ("before", "after")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.rxmd]`` section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration from the ``[tool.rxmd]`` section, or empty dict if absent

    Raises
    ------
    ConfigurationError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by walking up from ``start_dir``.

    Each directory is checked for the dedicated config files first, then for
    a ``pyproject.toml`` that has a ``[tool.rxmd]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First config file found, or None

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigurationError:
                # An unrelated broken pyproject.toml does not stop the search
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches from ``start_dir`` (default: cwd) up to the filesystem root,
    then the user's home directory.

    Returns
    -------
    Path or None
        Path to the discovered config file, or None

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _load_mapping(config_path: Path, loader: Callable[[Any], Any], mode: str, kind: str) -> Dict[str, Any]:
    encoding = None if "b" in mode else "utf-8"
    try:
        with open(config_path, mode, encoding=encoding) as f:
            config = loader(f)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid {kind} in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {kind} config {config_path}: {e}", str(config_path), e) from e

    if config is None and kind == "YAML":
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"{kind} config file must contain a mapping at root level, got {type(config).__name__}",
            str(config_path),
        )
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML, or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigurationError
        If the file is missing, unreadable, malformed, or of unknown format

    Examples
    --------
    >>> config = load_config_file(".rxmd.toml")
    >>> config.get("disable")
    ['strikethrough']

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    if ext == ".toml":
        return _load_mapping(config_path, tomllib.load, "rb", "TOML")
    if ext in (".yaml", ".yml"):
        return _load_mapping(config_path, yaml.safe_load, "r", "YAML")
    if ext == ".json":
        return _load_mapping(config_path, json.load, "r", "JSON")
    raise ConfigurationError(
        f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path)
    )


def resolve_config(config_path: Optional[str] = None, no_config: bool = False) -> Dict[str, Any]:
    """Load the configuration the CLI commands run with.

    An explicit path wins over ``$RXMD_CONFIG``, which wins over discovery.

    Parameters
    ----------
    config_path : str, optional
        Value of ``--config``
    no_config : bool, default False
        Value of ``--no-config``; skips every source

    Returns
    -------
    dict
        Loaded configuration, or empty dict when no file applies

    """
    if no_config:
        return {}

    path: Optional[str | Path] = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        path = discover_config_file()
        if path is None:
            return {}

    logger.info(f"Loading configuration from {path}")
    return load_config_file(path)


def import_render_function(path: str) -> Callable[..., str]:
    """Import a render function from a ``"module:attribute"`` path.

    Parameters
    ----------
    path : str
        Import path; dotted attributes after the colon are followed

    Returns
    -------
    callable
        The imported render function

    Raises
    ------
    ConfigurationError
        If the path is malformed, the import fails, or the target is not callable

    """
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(f"Render path must look like 'module:function', got {path!r}")

    try:
        target: Any = importlib.import_module(module_name)
        for part in attribute.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot import render function {path!r}: {e}", original_error=e) from e

    if not callable(target):
        raise ConfigurationError(f"Render target {path!r} is not callable")
    return target


def options_from_config(config: Dict[str, Any], disable: Optional[list[str]] = None) -> RxmdOptions:
    """Build parser options from a configuration mapping.

    Parameters
    ----------
    config : dict
        Loaded configuration
    disable : list[str], optional
        Extra transform names to disable (e.g. from ``--disable``)

    Returns
    -------
    RxmdOptions
        The resulting options

    Raises
    ------
    ConfigurationError
        If the configuration has unknown keys or invalid values

    """
    unknown = sorted(set(config) - KNOWN_CONFIG_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration key(s): {', '.join(unknown)}")

    disabled = config.get("disable", [])
    if isinstance(disabled, str) or not isinstance(disabled, list):
        raise ConfigurationError("'disable' must be a list of transform names")

    try:
        return RxmdOptions(
            display_mode=config.get("display_mode", "plain"),
            disabled_transforms=tuple(disabled) + tuple(disable or ()),
        )
    except RxmdError as e:
        raise ConfigurationError(e.message, original_error=e) from e


def build_parser_from_config(config: Dict[str, Any], disable: Optional[list[str]] = None) -> MarkdownParser:
    """Create a ``MarkdownParser`` configured from a configuration mapping.

    Extra transforms are registered in the order they are listed.

    Raises
    ------
    ConfigurationError
        If the configuration is invalid
    PatternError
        If a configured transform pattern does not compile

    """
    parser = MarkdownParser(options_from_config(config, disable))

    transforms = config.get("transforms", [])
    if not isinstance(transforms, list):
        raise ConfigurationError("'transforms' must be a list of tables")

    for index, entry in enumerate(transforms):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"transforms[{index}] must be a table, got {type(entry).__name__}")
        fields = {key: value for key, value in entry.items() if key not in TRANSFORM_PLACEMENT_KEYS}
        if isinstance(fields.get("render"), str):
            fields["render"] = import_render_function(fields["render"])
        if isinstance(fields.get("tags"), list):
            fields["tags"] = tuple(fields["tags"])
        parser.register(fields, before=entry.get("before"), after=entry.get("after"))

    return parser


__all__ = [
    "build_parser_from_config",
    "discover_config_file",
    "find_config_in_parents",
    "import_render_function",
    "load_config_file",
    "options_from_config",
    "resolve_config",
]
