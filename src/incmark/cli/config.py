#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the incmark CLI.

A configuration file holds up to three sections, one per options class::

    # .incmark.toml
    [autoclose]
    fence_char = ":"
    close_tables = true

    [parser]
    parse_frontmatter = false

    [html]
    pretty = true

The same sections can live under ``[tool.incmark]`` in ``pyproject.toml``,
or in a YAML / JSON file with the same shape.
"""

import argparse
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from incmark.constants import CONFIG_FILENAMES
from incmark.exceptions import ValidationError
from incmark.options import AutoCloseOptions, HtmlRendererOptions, MarkdownParserOptions

CONFIG_SECTIONS = ("autoclose", "parser", "html")


@dataclass(frozen=True)
class CliOptions:
    """Options objects built from a configuration mapping."""

    autoclose: AutoCloseOptions = field(default_factory=AutoCloseOptions)
    parser: MarkdownParserOptions = field(default_factory=MarkdownParserOptions)
    html: HtmlRendererOptions = field(default_factory=HtmlRendererOptions)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.incmark]`` table of a pyproject.toml, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("incmark", {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.incmark] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file from ``start_dir`` upwards.

    In each directory the dedicated files are checked first (in
    ``CONFIG_FILENAMES`` order), then ``pyproject.toml`` if it has a
    ``[tool.incmark]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Where to start, defaults to the current working directory

    Returns
    -------
    Path or None
        The first configuration file found

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
            except argparse.ArgumentTypeError:
                pass

        if current.parent == current:
            return None
        current = current.parent


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from TOML, YAML, JSON or pyproject.toml.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        The configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, in an unknown format, or does not
        hold a mapping

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    ext = config_path.suffix.lower()
    try:
        if config_path.name.lower() == "pyproject.toml":
            config = _load_pyproject_section(config_path)
        elif ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")
    except argparse.ArgumentTypeError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}"
        )
    return config


def build_options(config: Dict[str, Any]) -> CliOptions:
    """Build the options objects from a configuration mapping.

    The parser's auto-closure settings start from the ``autoclose`` section
    with table closing switched on unless the section says otherwise.

    Raises
    ------
    argparse.ArgumentTypeError
        For unknown sections, non-table sections or invalid option values

    """
    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        raise argparse.ArgumentTypeError(
            f"Unknown config section(s): {', '.join(unknown)}. Valid sections are: {', '.join(CONFIG_SECTIONS)}"
        )

    sections: Dict[str, Dict[str, Any]] = {}
    for name in CONFIG_SECTIONS:
        section = config.get(name, {})
        if not isinstance(section, dict):
            raise argparse.ArgumentTypeError(f"Config section [{name}] must be a table, got {type(section).__name__}")
        sections[name] = section

    try:
        autoclose = AutoCloseOptions.from_dict(sections["autoclose"])
        parser_autoclose = AutoCloseOptions.from_dict({"close_tables": True, **sections["autoclose"]})
        parser = MarkdownParserOptions.from_dict({**sections["parser"], "autoclose": parser_autoclose})
        html = HtmlRendererOptions.from_dict(sections["html"])
    except ValidationError as e:
        raise argparse.ArgumentTypeError(f"Invalid configuration: {e}") from e

    return CliOptions(autoclose=autoclose, parser=parser, html=html)


__all__ = [
    "CONFIG_SECTIONS",
    "CliOptions",
    "build_options",
    "find_config_in_parents",
    "load_config_file",
]
