"""Pattern matching helpers shared by detectors.

All helpers thread the scan position through ``re.finditer``; compiled
patterns carry no per-call state and can be shared freely.
"""

import logging
import re
from typing import Iterable, List, Optional

from ..models.entities import (
    Category,
    CustomDate,
    CustomRegex,
    MatchSpan,
)

logger = logging.getLogger(__name__)


def find_matches(
    pattern: re.Pattern,
    text: str,
    category: Category,
    rule: str = "",
    is_custom: bool = False,
) -> List[MatchSpan]:
    """Return every non-empty, non-overlapping match of *pattern* in *text*."""
    return [
        MatchSpan(
            text=m.group(0),
            category=category,
            start=m.start(),
            end=m.end(),
            rule=rule,
            is_custom=is_custom,
        )
        for m in pattern.finditer(text)
        if m.end() > m.start()
    ]


def block_word_pattern(word: str) -> Optional[re.Pattern]:
    """Whole-word, case-insensitive literal pattern for a block word."""
    word = word.strip()
    if not word:
        return None
    return re.compile(rf"(?<!\w){re.escape(word)}(?!\w)", re.IGNORECASE)


def find_block_word_matches(
    words: Iterable[str], text: str, category: Category = Category.PII
) -> List[MatchSpan]:
    """Match block words case-insensitively; words differing only in case count once."""
    matches: List[MatchSpan] = []
    for word in sorted({w.strip().lower() for w in words}):
        pattern = block_word_pattern(word)
        if pattern is None:
            continue
        matches.extend(
            find_matches(pattern, text, category, rule="block_word", is_custom=True)
        )
    return matches


def find_custom_date_matches(
    dates: Iterable[CustomDate], text: str, category: Category = Category.PII
) -> List[MatchSpan]:
    """Union the matches of every date variant, dropping (offset, text) repeats."""
    seen = set()
    matches: List[MatchSpan] = []
    for date in dates:
        for pattern in date.compiled_patterns:
            for span in find_matches(
                pattern, text, category, rule="custom_date", is_custom=True
            ):
                key = (span.start, span.text)
                if key in seen:
                    continue
                seen.add(key)
                matches.append(span)
    return matches


def find_custom_regex_matches(
    rules: Iterable[CustomRegex], text: str, category: Category = Category.PII
) -> List[MatchSpan]:
    """Match user regex rules; a rule that fails to compile is skipped."""
    matches: List[MatchSpan] = []
    for rule in rules:
        flags = 0 if rule.case_sensitive else re.IGNORECASE
        try:
            pattern = re.compile(rule.pattern, flags)
        except (re.error, RecursionError, OverflowError) as e:
            logger.warning("Skipping custom regex rule %s: %s", rule.id, e)
            continue
        matches.extend(
            find_matches(
                pattern,
                text,
                category,
                rule=f"custom_regex:{rule.label or rule.id}",
                is_custom=True,
            )
        )
    return matches


def filter_allowlisted(
    matches: List[MatchSpan], allowlist: Iterable[str]
) -> List[MatchSpan]:
    allowed = {entry.lower() for entry in allowlist}
    if not allowed:
        return list(matches)
    return [m for m in matches if m.text.lower() not in allowed]
