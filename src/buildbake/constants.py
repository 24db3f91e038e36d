# src/buildbake/constants.py
"""Central constants used across the project."""


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_STRICT_CONFIG: bool = False

# --- resolution defaults ---
DEFAULT_GROUP: str = "default"
DEFAULT_CONTEXT: str = "."
DEFAULT_DOCKERFILE: str = "Dockerfile"

# Looked up in the working directory when no -f is given.
# Every file that exists is loaded, in this order.
DEFAULT_FILENAMES: list[str] = [
    "docker-compose.yml",
    "docker-compose.yaml",
    "docker-bake.json",
    "docker-bake.jsonc",
    "docker-bake.hcl",
    "docker-bake.override.json",
    "docker-bake.override.hcl",
]

# --- override parsing ---
# strconv.ParseBool-compatible spellings
TRUE_VALUES: frozenset[str] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES: frozenset[str] = frozenset({"0", "f", "F", "FALSE", "false", "False"})
