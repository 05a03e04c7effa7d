"""Validation of user-supplied regular expressions."""

import re
from dataclasses import dataclass
from typing import Optional, Union

from ..models.entities import CustomRegex


@dataclass(frozen=True)
class ValidationError:
    """A rejected user rule. Returned to the caller, never raised."""

    message: str

    def __str__(self) -> str:
        return self.message


def validate_regex(pattern: str) -> Optional[str]:
    """Return None when *pattern* compiles, otherwise an error message."""
    if not pattern or not pattern.strip():
        return "Pattern cannot be empty"
    try:
        re.compile(pattern)
    except (re.error, RecursionError, OverflowError) as e:
        return f"Invalid regex: {e}"
    return None


def build_regex_rule(
    pattern: str,
    case_sensitive: bool = False,
    label: Optional[str] = None,
) -> Union[CustomRegex, ValidationError]:
    """Create a CustomRegex rule, or a ValidationError if the pattern is bad."""
    error = validate_regex(pattern)
    if error is not None:
        return ValidationError(error)
    return CustomRegex(
        pattern=pattern,
        case_sensitive=case_sensitive,
        label=label.strip() if label and label.strip() else None,
    )
