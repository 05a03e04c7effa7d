"""User-defined detection rules: custom dates and custom regular expressions."""

from .dates import (
    ParsedDate,
    build_date_rule,
    compile_date_patterns,
    generate_date_patterns,
    parse_date,
)
from .validation import ValidationError, build_regex_rule, validate_regex

__all__ = [
    "ParsedDate",
    "ValidationError",
    "build_date_rule",
    "build_regex_rule",
    "compile_date_patterns",
    "generate_date_patterns",
    "parse_date",
    "validate_regex",
]
