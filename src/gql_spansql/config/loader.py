"""Build converter configuration from a TOML file and CLI overrides.

Config file format (``gql-spansql.toml``)::

    [converter]
    loose = false
    created_column_name = "createdAt"
    updated_column_name = "updatedAt"
    table_case = "snake"        # snake | lowercamel | uppercamel | ""
    column_case = ""
"""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gql_spansql.config.models import ConverterConfig
from gql_spansql.errors import ConfigurationError
from gql_spansql.naming import Case, parse_case

DEFAULT_CONFIG_FILE = "gql-spansql.toml"

_OPTION_NAMES = (
    "loose",
    "created_column_name",
    "updated_column_name",
    "table_case",
    "column_case",
)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load converter options from the ``[converter]`` table of a TOML file.

    Args:
        config_path: Path to the config file. When None, ``gql-spansql.toml``
            in the working directory is used if present.

    Returns:
        Dict of option name to value (only the options set in the file).

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ConfigurationError: If the file is not valid TOML or has unknown keys
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILE
        if not config_path.exists():
            return {}
    elif not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    options = data.get("converter", {})
    unknown = sorted(set(options) - set(_OPTION_NAMES))
    if unknown:
        raise ConfigurationError(
            f"Unknown option(s) in {config_path}: {', '.join(unknown)}"
        )

    return options


def _parse_case_option(option: str, value: str) -> Case:
    case = parse_case(value)
    if case is Case.UNKNOWN:
        raise ConfigurationError(f"{option} {value} not found.")
    return case


def build_config(
    loose: bool = False,
    created_column_name: str = "",
    updated_column_name: str = "",
    table_case: str = "",
    column_case: str = "",
) -> ConverterConfig:
    """Validate raw option values and build a ``ConverterConfig``.

    Raises:
        ConfigurationError: If a case name is not one of snake, lowercamel,
            uppercamel or the empty string, or an option has the wrong type.
    """
    table = _parse_case_option("table case", table_case)
    column = _parse_case_option("column case", column_case)
    try:
        return ConverterConfig(
            loose=loose,
            created_column_name=created_column_name,
            updated_column_name=updated_column_name,
            table_case=table,
            column_case=column,
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(f"Invalid option value: {problems}") from e


def merge_options(
    file_options: dict[str, Any], overrides: dict[str, Any]
) -> ConverterConfig:
    """Apply CLI overrides (None = not given) on top of file options."""
    options = dict(file_options)
    for name, value in overrides.items():
        if value is not None:
            options[name] = value
    return build_config(**options)
