# src/buildbake/errors.py
"""Errors raised while resolving targets.

All of them are configuration mistakes surfaced verbatim to the operator,
so they subclass ValueError and are caught by the CLI's controlled-exit path.
"""


class BakeError(ValueError):
    """Base class for resolution errors."""


# --- Targets ---


class TargetNotFoundError(BakeError):
    """A requested or inherited name has no target definition."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"failed to find target {name}")


# --- Overrides ---


class PatternNoMatchError(BakeError):
    """An override pattern matched none of the known targets."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"could not find any target matching '{pattern}'")


class InvalidGlobPatternError(BakeError):
    """An override pattern is not a well-formed glob."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"could not match targets with '{pattern}': {reason}")


class InvalidOverrideKeyError(BakeError):
    "Malformed override string."

    def __init__(self, key: str, msg: str) -> None:
        self.key = key
        super().__init__(msg)


class UnknownOverrideFieldError(BakeError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"unknown key: {field}")


class InvalidBooleanValueError(BakeError):
    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"invalid value {value} for boolean key {field}")
