"""
Validation - Group spec checks and engine error types.

Validates that:
1. The spec has at least one group
2. Every group size is an integer (bools rejected)
3. Every group size is positive

Out-of-range token indices are reported with InvalidMoveError. In-band
illegal moves (wrong group, already removed, game over) are no-ops in the
reducer and never reach this module.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable


class MarienbadError(Exception):
    """Base class for engine errors."""


class GroupSpecError(MarienbadError, ValueError):
    """Raised when a group spec is malformed."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Group spec invalid with {len(errors)} error(s): {'; '.join(errors)}")


class InvalidMoveError(MarienbadError, IndexError):
    """Raised when a command references a group or token that does not exist."""

    def __init__(self, message: str, group: int | None = None, item: int | None = None):
        self.group = group
        self.item = item
        super().__init__(message)


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_group_spec(spec: Iterable[int]) -> ValidationResult:
    """
    Validate a group spec.

    Returns ValidationResult with errors and warnings. Never raises.
    """
    errors: list[str] = []
    warnings: list[str] = []

    try:
        sizes = list(spec)
    except TypeError:
        return ValidationResult(valid=False, errors=["group spec must be a sequence of integers"])

    if not sizes:
        errors.append("group spec must contain at least one group")

    for idx, size in enumerate(sizes):
        # bool is an int subclass; True/False are never a group size
        if isinstance(size, bool) or not isinstance(size, int):
            errors.append(f"group {idx}: size must be an integer, got {size!r}")
        elif size <= 0:
            errors.append(f"group {idx}: size must be positive, got {size}")

    if not errors and sum(sizes) <= 1:
        warnings.append("total token count is at most 1: the game starts already over")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def normalize_group_spec(spec: Iterable[int]) -> tuple[int, ...]:
    """Validate a spec and return it as an immutable tuple."""
    if isinstance(spec, (str, bytes)):
        raise GroupSpecError(["group spec must be a sequence of integers"])
    try:
        sizes = tuple(spec)
    except TypeError:
        raise GroupSpecError(["group spec must be a sequence of integers"]) from None
    result = validate_group_spec(sizes)
    if not result.valid:
        raise GroupSpecError(result.errors)
    return sizes
