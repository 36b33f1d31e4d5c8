"""Converter configuration: options model, TOML loading, validation.

Usage:
    >>> from gql_spansql.config import build_config, load_config, ConverterConfig
"""

from gql_spansql.config.loader import build_config, load_config, merge_options
from gql_spansql.config.models import ConverterConfig

__all__ = ["build_config", "load_config", "merge_options", "ConverterConfig"]
