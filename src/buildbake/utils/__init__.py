# src/buildbake/utils/__init__.py

from .utils_files import load_hcl, load_jsonc, load_yaml
from .utils_matching import compile_glob, glob_match


__all__ = [  # noqa: RUF022
    # utils_files
    "load_hcl",
    "load_jsonc",
    "load_yaml",
    # utils_matching
    "compile_glob",
    "glob_match",
]
