"""Pydantic schemas for persisted detection settings."""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from .models.entities import CustomRegex, DetectionConfig
from .patterns import DEFAULT_ALLOWLIST
from .rules.dates import build_date_rule
from .rules.validation import ValidationError

logger = logging.getLogger(__name__)


class StoredRegexRule(BaseModel):
    id: str
    pattern: str
    case_sensitive: bool = False
    label: Optional[str] = None


class StoredDetectionSettings(BaseModel):
    """Serialized form of DetectionConfig.

    Custom dates are stored as the text the user entered and recompiled on
    load.
    """

    email: bool = True
    ip: bool = True
    credit_card: bool = True
    secret: bool = True
    pii: bool = True
    allowlist: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWLIST))
    block_words: List[str] = Field(default_factory=list)
    custom_dates: List[str] = Field(default_factory=list)
    custom_regex: List[StoredRegexRule] = Field(default_factory=list)

    def to_detection_config(self) -> DetectionConfig:
        dates = []
        for text in self.custom_dates:
            rule = build_date_rule(text)
            if isinstance(rule, ValidationError):
                logger.warning("Dropping stored date rule %r: %s", text, rule.message)
                continue
            dates.append(rule)

        return DetectionConfig(
            email=self.email,
            ip=self.ip,
            credit_card=self.credit_card,
            secret=self.secret,
            pii=self.pii,
            allowlist=frozenset(self.allowlist),
            block_words=frozenset(w.strip() for w in self.block_words if w.strip()),
            custom_dates=tuple(dates),
            custom_regex=tuple(
                CustomRegex(
                    id=r.id,
                    pattern=r.pattern,
                    case_sensitive=r.case_sensitive,
                    label=r.label,
                )
                for r in self.custom_regex
            ),
        )

    @classmethod
    def from_detection_config(cls, config: DetectionConfig) -> "StoredDetectionSettings":
        return cls(
            email=config.email,
            ip=config.ip,
            credit_card=config.credit_card,
            secret=config.secret,
            pii=config.pii,
            allowlist=sorted(config.allowlist),
            block_words=sorted(config.block_words),
            custom_dates=[d.original_input for d in config.custom_dates],
            custom_regex=[
                StoredRegexRule(
                    id=r.id,
                    pattern=r.pattern,
                    case_sensitive=r.case_sensitive,
                    label=r.label,
                )
                for r in config.custom_regex
            ],
        )
