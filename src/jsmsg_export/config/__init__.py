"""
Configuration for jsmsg-export.
"""

from .manager import build_config, load_config, load_config_data, merge_cli_overrides
from .schema import ExportConfig

__all__ = [
    "ExportConfig",
    "build_config",
    "load_config",
    "load_config_data",
    "merge_cli_overrides",
]
