"""Configuration schema and loading system for chest designs.

This package provides JSON-based configuration loading and validation.

Public API:
    - ChestConfiguration: Root configuration model
    - ChestConfigSchema: Chest structure, materials and hardware
    - ColumnConfig / RowConfig: Column and drawer row models
    - MaterialThicknessConfig: Catalog or custom material thickness
    - StockConfigSchema: Stock sheets and cutting options
    - load_config / load_config_from_dict: Load a validated configuration
    - ConfigError: Exception for configuration errors
    - ErrorDetail: One problem behind a ConfigError
    - config_to_chest: Convert a configuration to a domain ChestConfig
    - config_to_stock_sheets: Stock sheet per thickness used by a chest
    - chest_to_config: Express a domain ChestConfig as a configuration

Example:
    >>> from pathlib import Path
    >>> from chests.application.config import load_config, config_to_chest
    >>>
    >>> config = load_config(Path("my-chest.json"))
    >>> chest = config_to_chest(config)
"""

from chests.application.config.adapter import (
    chest_to_config,
    config_to_chest,
    config_to_stock_sheets,
    thickness_from_config,
)
from chests.application.config.loader import (
    ConfigError,
    ErrorDetail,
    load_config,
    load_config_from_dict,
)
from chests.application.config.schema import (
    SUPPORTED_VERSIONS,
    ChestConfigSchema,
    ChestConfiguration,
    ColumnConfig,
    ConstraintsConfigSchema,
    DrawerMaterialOverrideConfig,
    HorizontalRailConfigSchema,
    MaterialsConfigSchema,
    MaterialThicknessConfig,
    RailThresholdsConfigSchema,
    RowConfig,
    SlideConfigSchema,
    StockConfigSchema,
    StockSheetConfigSchema,
    TolerancesConfigSchema,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "ChestConfigSchema",
    "ChestConfiguration",
    "ColumnConfig",
    "ConstraintsConfigSchema",
    "DrawerMaterialOverrideConfig",
    "HorizontalRailConfigSchema",
    "MaterialsConfigSchema",
    "MaterialThicknessConfig",
    "RailThresholdsConfigSchema",
    "RowConfig",
    "SlideConfigSchema",
    "StockConfigSchema",
    "StockSheetConfigSchema",
    "TolerancesConfigSchema",
    # Loader
    "ConfigError",
    "ErrorDetail",
    "load_config",
    "load_config_from_dict",
    # Adapter
    "chest_to_config",
    "config_to_chest",
    "config_to_stock_sheets",
    "thickness_from_config",
]
