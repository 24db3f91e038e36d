# src/buildbake/config/config_types.py


from typing import Literal, TypedDict

from typing_extensions import NotRequired


# A key that is missing from a TargetRecord is "unset"; a key holding an
# empty value was explicitly cleared. Merging relies on that difference.
class TargetRecord(TypedDict, total=False):
    # the only field overrides never touch
    inherits: list[str]

    context: str
    dockerfile: str
    args: dict[str, str]
    labels: dict[str, str]
    tags: list[str]
    cache_from: list[str]
    cache_to: list[str]
    target: str  # build stage
    secrets: list[str]
    ssh: list[str]
    platforms: list[str]
    outputs: list[str]
    no_cache: bool
    pull: bool


class GroupRecord(TypedDict):
    targets: list[str]


SourceFormat = Literal["bake", "compose"]


class MetaConfig(TypedDict):
    origin: str  # file the record was parsed from
    format: SourceFormat


class ConfigRecord(TypedDict):
    group: dict[str, GroupRecord]
    target: dict[str, TargetRecord]

    # provenance, set by the file loader; dropped by merging
    __meta__: NotRequired[MetaConfig]


# Overrides are addressed per target name.
OverrideTable = dict[str, TargetRecord]


# --- field groups ------------------------------------------------------------

SCALAR_FIELDS: tuple[str, ...] = ("context", "dockerfile", "target")
MAPPING_FIELDS: tuple[str, ...] = ("args", "labels")
# list fields whose incoming value replaces the base wholesale
REPLACE_LIST_FIELDS: tuple[str, ...] = ("tags", "platforms", "outputs", "cache_to")
# list fields whose incoming value is appended to the base
APPEND_LIST_FIELDS: tuple[str, ...] = ("secrets", "ssh", "cache_from")
BOOL_FIELDS: tuple[str, ...] = ("no_cache", "pull")

# every list-valued field the normalizer dedupes
LIST_FIELDS: tuple[str, ...] = (
    "tags",
    "secrets",
    "ssh",
    "platforms",
    "cache_from",
    "cache_to",
    "outputs",
)

# record key -> key used in bake files and printed output
FILE_KEYS: dict[str, str] = {
    "inherits": "inherits",
    "context": "context",
    "dockerfile": "dockerfile",
    "args": "args",
    "labels": "labels",
    "tags": "tags",
    "cache_from": "cache-from",
    "cache_to": "cache-to",
    "target": "target",
    "secrets": "secret",
    "ssh": "ssh",
    "platforms": "platforms",
    "outputs": "output",
    "no_cache": "no-cache",
    "pull": "pull",
}
