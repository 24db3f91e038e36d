# src/buildbake/__init__.py

"""Buildbake — Resolve multi-file build target definitions.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use or custom integrations.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()              → CLI entrypoint
    - read_targets()      → Resolve targets/groups across config files
    - parse_overrides()   → Turn --set strings into a per-target table
    - load_configs()      → Load docker-bake / compose files
"""

from .cli import main, to_file_format
from .config import (
    FILE_KEYS,
    ConfigRecord,
    GroupRecord,
    MetaConfig,
    OverrideTable,
    SourceFormat,
    TargetRecord,
    ValidationSummary,
    find_config_files,
    load_config,
    load_config_file,
    load_configs,
    parse_config,
    validate_config,
)
from .constants import (
    DEFAULT_CONTEXT,
    DEFAULT_DOCKERFILE,
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_FILENAMES,
    DEFAULT_GROUP,
    DEFAULT_LOG_LEVEL,
    DEFAULT_STRICT_CONFIG,
)
from .errors import (
    BakeError,
    InvalidBooleanValueError,
    InvalidGlobPatternError,
    InvalidOverrideKeyError,
    PatternNoMatchError,
    TargetNotFoundError,
    UnknownOverrideFieldError,
)
from .groups import resolve_group
from .logs import get_app_logger
from .merge import copy_target, empty_config, fold_configs, merge_configs, merge_targets
from .meta import (
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
    get_metadata,
)
from .normalize import normalize_target, remove_dupes
from .overrides import expand_targets, parse_bool, parse_overrides
from .resolve import read_targets
from .targets import default_target, resolve_target


__all__ = [  # noqa: RUF022
    # cli
    "main",
    "to_file_format",
    # config
    "ConfigRecord",
    "FILE_KEYS",
    "find_config_files",
    "GroupRecord",
    "load_config",
    "load_config_file",
    "load_configs",
    "MetaConfig",
    "OverrideTable",
    "parse_config",
    "SourceFormat",
    "TargetRecord",
    "validate_config",
    "ValidationSummary",
    # constants
    "DEFAULT_CONTEXT",
    "DEFAULT_DOCKERFILE",
    "DEFAULT_ENV_LOG_LEVEL",
    "DEFAULT_FILENAMES",
    "DEFAULT_GROUP",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_STRICT_CONFIG",
    # errors
    "BakeError",
    "InvalidBooleanValueError",
    "InvalidGlobPatternError",
    "InvalidOverrideKeyError",
    "PatternNoMatchError",
    "TargetNotFoundError",
    "UnknownOverrideFieldError",
    # groups
    "resolve_group",
    # logs
    "get_app_logger",
    # merge
    "copy_target",
    "empty_config",
    "fold_configs",
    "merge_configs",
    "merge_targets",
    # meta
    "get_metadata",
    "Metadata",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    # normalize
    "normalize_target",
    "remove_dupes",
    # overrides
    "expand_targets",
    "parse_bool",
    "parse_overrides",
    # resolve
    "read_targets",
    # targets
    "default_target",
    "resolve_target",
]
