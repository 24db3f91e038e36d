# src/buildbake/cli.py

import argparse
import json
import platform
import sys
from difflib import get_close_matches
from pathlib import Path
from typing import Any

from apathetic_logging import LEVEL_ORDER, safeLog

from .config import FILE_KEYS, TargetRecord, find_config_files, load_configs
from .constants import DEFAULT_GROUP, DEFAULT_STRICT_CONFIG
from .logs import get_app_logger
from .meta import DESCRIPTION, PROGRAM_DISPLAY, PROGRAM_SCRIPT, get_metadata
from .resolve import read_targets


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # "unrecognized arguments: --sett ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(prog=PROGRAM_SCRIPT, description=DESCRIPTION)

    parser.add_argument(
        "targets",
        nargs="*",
        metavar="TARGET",
        help=f"Targets or groups to resolve (default: {DEFAULT_GROUP}).",
    )
    parser.add_argument(
        "-f",
        "--file",
        action="append",
        dest="files",
        metavar="FILE",
        help=(
            "Build definition file; repeat to merge several, later files win. "
            "Defaults to the docker-compose / docker-bake files in the "
            "working directory."
        ),
    )
    parser.add_argument(
        "--set",
        action="append",
        dest="overrides",
        default=[],
        metavar="OVERRIDE",
        help="Override a target value (e.g. 'app.args.VERSION=1.2', '*.platform=linux/arm64').",
    )
    parser.add_argument(
        "--print",
        action="store_true",
        dest="print_only",
        help="Print the resolved targets as JSON (always on; kept for compatibility).",
    )
    parser.add_argument(
        "--allow-unmatched",
        action="store_true",
        help="Warn about --set patterns that match no target instead of failing.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=DEFAULT_STRICT_CONFIG,
        help="Treat unknown keys in build files as errors.",
    )

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--no-color",
        dest="use_color",
        action="store_const",
        const=False,
        help="Disable ANSI color output.",
    )
    color.add_argument(
        "--color",
        dest="use_color",
        action="store_const",
        const=True,
        help="Force-enable ANSI color output (overrides auto-detect).",
    )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = get_app_logger()
    log_level = logger.determineLogLevel(args=args)
    logger.setLevel(log_level)
    use_color = getattr(args, "use_color", None)
    logger.enable_color = (
        use_color if use_color is not None else logger.determineColorEnabled()
    )
    logger.trace("[BOOT] log-level initialized: %s", logger.levelName)

    logger.debug(
        "Runtime: Python %s (%s)\n    %s",
        platform.python_version(),
        platform.python_implementation(),
        sys.version.replace("\n", " "),
    )


def to_file_format(targets: dict[str, TargetRecord]) -> dict[str, dict[str, Any]]:
    """Rename record keys to their bake-file spelling, targets sorted by name."""
    return {
        name: {FILE_KEYS.get(key, key): value for key, value in targets[name].items()}
        for name in sorted(targets)
    }


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = get_app_logger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        _initialize_logger(args)

        # --- Version flag ---
        if args.version:
            meta = get_metadata()
            logger.info("%s %s (%s)", PROGRAM_DISPLAY, meta.version, meta.commit)
            return 0

        # --- Load build definitions ---
        cwd = Path.cwd().resolve()
        paths = find_config_files(args.files, cwd, missing_level="debug")
        if not paths:
            xmsg = f"No build definition file found in {cwd} (use -f FILE)"
            raise FileNotFoundError(xmsg)
        configs = load_configs(paths, strict=args.strict_config)

        # --- Resolve and print ---
        names = args.targets or [DEFAULT_GROUP]
        logger.debug("Resolving %s", ", ".join(names))
        resolved = read_targets(
            configs,
            names,
            args.overrides,
            allow_unmatched=args.allow_unmatched,
        )
        sys.stdout.write(json.dumps(to_file_format(resolved), indent=2) + "\n")

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        try:
            logger.errorIfNotDebug(str(e))
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.criticalIfNotDebug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    else:
        return 0
