# src/buildbake/utils/utils_files.py


import json
from pathlib import Path
from typing import Any, cast

import hcl2
import yaml
from lark.exceptions import LarkError

from buildbake.logs import get_app_logger


# plain values: unquoted strings, blocks without __is_block__ markers
HCL_OPTIONS = hcl2.SerializationOptions(
    with_comments=False,
    explicit_blocks=False,
    strip_string_quotes=True,
)


def _strip_jsonc_syntax(text: str) -> str:
    """Strip //, # and /* */ comments and trailing commas from JSONC.

    String contents are left untouched.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    # index in `out` of a comma that may still turn out to be trailing
    pending_comma: int | None = None
    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == "#" or text.startswith("//", i):
            end = text.find("\n", i)
            if end == -1:
                break
            i = end  # keep the newline so line numbers stay right
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                break
            # keep newlines inside the block for the same reason
            out.append("\n" * text.count("\n", i, end))
            i = end + 2
            continue

        if not ch.isspace():
            if ch in "}]" and pending_comma is not None:
                out[pending_comma] = ""
            pending_comma = len(out) if ch == "," else None
            if ch == '"':
                in_string = True

        out.append(ch)
        i += 1

    return "".join(out)


def load_jsonc(path: Path) -> dict[str, Any] | list[Any] | None:
    """Load JSONC (JSON with comments and trailing commas).

    Returns None for files that are empty or hold only comments.
    """
    logger = get_app_logger()
    logger.trace(f"[load_jsonc] Loading from {path}")

    if not path.exists():
        xmsg = f"JSONC file not found: {path}"
        raise FileNotFoundError(xmsg)
    if not path.is_file():
        xmsg = f"Expected a file: {path}"
        raise ValueError(xmsg)

    text = _strip_jsonc_syntax(path.read_text(encoding="utf-8")).strip()
    if not text:
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        xmsg = (
            f"Invalid JSONC syntax in {path}:"
            f" {e.msg} (line {e.lineno}, column {e.colno})"
        )
        raise ValueError(xmsg) from e

    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid JSONC root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004

    return cast("dict[str, Any] | list[Any]", data)


def load_yaml(path: Path) -> dict[str, Any] | list[Any] | None:
    """Load a YAML document with yaml.safe_load.

    Returns None for empty documents.
    """
    logger = get_app_logger()
    logger.trace(f"[load_yaml] Loading from {path}")

    if not path.exists():
        xmsg = f"YAML file not found: {path}"
        raise FileNotFoundError(xmsg)

    try:
        with path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" (line {mark.line + 1}, column {mark.column + 1})" if mark else ""
        problem = getattr(e, "problem", None) or str(e)
        xmsg = f"Invalid YAML syntax in {path}: {problem}{where}"
        raise ValueError(xmsg) from e

    if data is None:
        return None
    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid YAML root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004

    return cast("dict[str, Any] | list[Any]", data)


def _merge_nested_blocks(body: dict[str, Any]) -> dict[str, Any]:
    # `args { ... }` block syntax arrives as a list of mappings
    flat: dict[str, Any] = {}
    for key, value in body.items():
        is_blocks = isinstance(value, list) and all(isinstance(v, dict) for v in value)
        if value and is_blocks:
            merged: dict[str, Any] = {}
            for part in cast("list[dict[str, Any]]", value):
                merged.update(part)
            flat[key] = merged
        else:
            flat[key] = value
    return flat


def _hcl_blocks_to_mapping(data: dict[str, Any], path: Path) -> dict[str, Any]:
    """Turn labelled blocks into {kind: {name: body}}.

    Repeated blocks with the same name are merged, later attributes win.
    Top-level attributes are kept as they are.
    """
    result: dict[str, Any] = {}
    for kind, value in data.items():
        if not (isinstance(value, list) and all(isinstance(v, dict) for v in value)):
            result[kind] = value
            continue

        named: dict[str, dict[str, Any]] = {}
        for block in cast("list[dict[str, Any]]", value):
            for name, body in block.items():
                if not isinstance(body, dict):
                    xmsg = f"Invalid HCL in {path}: '{kind}' block needs a name label"
                    raise ValueError(xmsg)  # noqa: TRY004
                named.setdefault(name, {}).update(
                    _merge_nested_blocks(cast("dict[str, Any]", body))
                )
        result[kind] = named
    return result


def load_hcl(path: Path) -> dict[str, Any] | None:
    """Load an HCL bake file into the same shape as a bake JSON document.

    `target "app" {...}` and `group "default" {...}` blocks become
    {"target": {"app": {...}}, "group": {"default": {...}}}.
    Returns None for files that are empty or hold only comments.
    """
    logger = get_app_logger()
    logger.trace(f"[load_hcl] Loading from {path}")

    if not path.exists():
        xmsg = f"HCL file not found: {path}"
        raise FileNotFoundError(xmsg)

    text = path.read_text(encoding="utf-8")
    try:
        data = hcl2.loads(text, serialization_options=HCL_OPTIONS)
    except (LarkError, RuntimeError) as e:
        # lark messages carry the offending source after the first line
        lines = str(e).strip().splitlines()
        problem = lines[0] if lines else type(e).__name__
        xmsg = f"Invalid HCL syntax in {path}: {problem}"
        raise ValueError(xmsg) from e

    if not data:
        return None
    return _hcl_blocks_to_mapping(data, path)
