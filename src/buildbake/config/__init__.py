# src/buildbake/config/__init__.py

from .config_loader import (
    find_config_files,
    load_config,
    load_config_file,
    load_configs,
    parse_config,
)
from .config_types import (
    APPEND_LIST_FIELDS,
    BOOL_FIELDS,
    FILE_KEYS,
    LIST_FIELDS,
    MAPPING_FIELDS,
    REPLACE_LIST_FIELDS,
    SCALAR_FIELDS,
    ConfigRecord,
    GroupRecord,
    MetaConfig,
    OverrideTable,
    SourceFormat,
    TargetRecord,
)
from .config_validate import ValidationSummary, collect_msg, validate_config


__all__ = [  # noqa: RUF022
    # config_loader
    "find_config_files",
    "load_config",
    "load_config_file",
    "load_configs",
    "parse_config",
    # config_types
    "APPEND_LIST_FIELDS",
    "BOOL_FIELDS",
    "ConfigRecord",
    "FILE_KEYS",
    "GroupRecord",
    "LIST_FIELDS",
    "MAPPING_FIELDS",
    "MetaConfig",
    "OverrideTable",
    "REPLACE_LIST_FIELDS",
    "SCALAR_FIELDS",
    "SourceFormat",
    "TargetRecord",
    # config_validate
    "collect_msg",
    "validate_config",
    "ValidationSummary",
]
