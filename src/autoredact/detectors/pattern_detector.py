"""Regex-based detection of sensitive data in recognized text."""

import logging
from typing import Dict, List

from .base import BaseDetector
from .matching import (
    filter_allowlisted,
    find_block_word_matches,
    find_custom_date_matches,
    find_custom_regex_matches,
    find_matches,
)
from ..models.entities import (
    Breakdown,
    Category,
    DetectionConfig,
    DetectionResult,
    MatchSpan,
)
from ..patterns import BUILTIN_PATTERNS

logger = logging.getLogger(__name__)


class PatternDetector(BaseDetector):
    """Detect emails, network addresses, financial numbers, PII and secrets.

    Built-in categories are scanned first in precedence order (email, IP,
    finance, PII, secret), followed by custom rules (block words, dates,
    regex). Spans are not deduplicated across categories; the positional
    mapper resolves overlaps by taking the first span in this order.
    """

    def __init__(self, patterns=None):
        self.patterns = patterns or BUILTIN_PATTERNS

    def detect(self, text: str, config: DetectionConfig) -> DetectionResult:
        by_category: Dict[Category, List[MatchSpan]] = {}
        for category, rules in self.patterns.items():
            if not config.is_enabled(category):
                by_category[category] = []
                continue
            spans: List[MatchSpan] = []
            for rule, pattern in rules:
                found = find_matches(pattern, text, category, rule=rule)
                if rule == "ipv4":
                    found = [m for m in found if len(m.text.split(".")) == 4]
                spans.extend(found)
            by_category[category] = filter_allowlisted(spans, config.allowlist)

        custom = filter_allowlisted(self._custom_matches(text, config), config.allowlist)

        spans = [span for group in by_category.values() for span in group] + custom
        breakdown = Breakdown(
            emails=len(by_category.get(Category.EMAIL, [])),
            ips=len(by_category.get(Category.IP_ADDRESS, [])),
            credit_cards=len(by_category.get(Category.FINANCIAL_NUMBER, [])),
            secrets=len(by_category.get(Category.SECRET, [])),
            pii=len(by_category.get(Category.PII, [])) + len(custom),
        )
        logger.debug("Detected %d sensitive spans (%s)", len(spans), breakdown.to_dict())
        return DetectionResult(spans=tuple(spans), breakdown=breakdown)

    @staticmethod
    def _custom_matches(text: str, config: DetectionConfig) -> List[MatchSpan]:
        if not config.has_custom_rules:
            return []
        return (
            find_block_word_matches(config.block_words, text)
            + find_custom_date_matches(config.custom_dates, text)
            + find_custom_regex_matches(config.custom_regex, text)
        )
