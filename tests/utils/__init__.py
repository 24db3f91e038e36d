# tests/utils/__init__.py

from .constants import DEFAULT_TEST_LOG_LEVEL
from .records import make_config, make_summary, make_target, write_config_file


__all__ = [  # noqa: RUF022
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    # records
    "make_config",
    "make_summary",
    "make_target",
    "write_config_file",
]
