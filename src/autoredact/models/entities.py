"""Data models for the sensitive-data redaction pipeline."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
import uuid


class Category(Enum):
    """Detection categories, listed in mapping precedence order."""

    EMAIL = "email"
    IP_ADDRESS = "ip"
    FINANCIAL_NUMBER = "credit_card"
    PII = "pii"
    SECRET = "secret"


class BatchStatus(Enum):
    """Lifecycle of a batch item. COMPLETE and ERROR are terminal."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class BoundingBox:
    """Bounding box in raster pixel space."""

    x0: float  # Left edge
    y0: float  # Top edge
    x1: float  # Right edge
    y1: float  # Bottom edge

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    def expanded(self, padding: float) -> "BoundingBox":
        """Return a copy grown by *padding* on every side."""
        return BoundingBox(
            x0=self.x0 - padding,
            y0=self.y0 - padding,
            x1=self.x1 + padding,
            y1=self.y1 + padding,
        )

    def to_dict(self) -> dict:
        return {"x0": self.x0, "y0": self.y0, "x1": self.x1, "y1": self.y1}


@dataclass(frozen=True)
class MatchSpan:
    """A match over the flat recognized text: ``text == flat[start:end]``."""

    text: str
    category: Category
    start: int
    end: int
    rule: str = ""  # Name of the pattern or custom rule that produced the span
    is_custom: bool = False

    def __post_init__(self):
        if not 0 <= self.start < self.end:
            raise ValueError(
                f"Invalid span offsets: start={self.start}, end={self.end}"
            )


# --- OCR word tree -------------------------------------------------------


@dataclass(frozen=True)
class OcrWord:
    """A recognized word with its pixel-space bounding box."""

    text: str
    bbox: BoundingBox


@dataclass(frozen=True)
class OcrLine:
    words: Tuple[OcrWord, ...] = ()


@dataclass(frozen=True)
class OcrParagraph:
    lines: Tuple[OcrLine, ...] = ()


@dataclass(frozen=True)
class OcrBlock:
    paragraphs: Tuple[OcrParagraph, ...] = ()


@dataclass(frozen=True)
class RecognitionResult:
    """Output of the recognition collaborator: flat text plus word tree."""

    text: str
    blocks: Tuple[OcrBlock, ...] = ()

    def iter_words(self):
        """Yield words in document order (block, paragraph, line, word)."""
        for block in self.blocks:
            for paragraph in block.paragraphs:
                for line in paragraph.lines:
                    yield from line.words

    @property
    def has_word_tree(self) -> bool:
        return any(True for _ in self.iter_words())


# --- Custom rules ----------------------------------------------------------


@dataclass(frozen=True)
class CustomDate:
    """A calendar date matched in all its common written forms."""

    original_input: str
    compiled_patterns: Tuple[re.Pattern, ...] = ()


@dataclass(frozen=True)
class CustomRegex:
    """A user-supplied regular expression."""

    pattern: str
    case_sensitive: bool = False
    label: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])


@dataclass(frozen=True)
class DetectionConfig:
    """Caller-owned detection settings. Never mutated by the pipeline."""

    email: bool = True
    ip: bool = True
    credit_card: bool = True
    secret: bool = True
    pii: bool = True
    allowlist: frozenset = frozenset()
    block_words: frozenset = frozenset()  # Plain words, matched whole-word ignoring case
    custom_dates: Tuple[CustomDate, ...] = ()
    custom_regex: Tuple[CustomRegex, ...] = ()

    def is_enabled(self, category: Category) -> bool:
        return {
            Category.EMAIL: self.email,
            Category.IP_ADDRESS: self.ip,
            Category.FINANCIAL_NUMBER: self.credit_card,
            Category.PII: self.pii,
            Category.SECRET: self.secret,
        }[category]

    @property
    def has_custom_rules(self) -> bool:
        return bool(self.block_words or self.custom_dates or self.custom_regex)


@dataclass(frozen=True)
class Breakdown:
    """Per-category counts of surviving spans for one detection pass.

    Custom-rule matches are folded into ``pii``.
    """

    emails: int = 0
    ips: int = 0
    credit_cards: int = 0
    secrets: int = 0
    pii: int = 0

    @property
    def total(self) -> int:
        return self.emails + self.ips + self.credit_cards + self.secrets + self.pii

    def to_dict(self) -> Dict[str, int]:
        return {
            "emails": self.emails,
            "ips": self.ips,
            "credit_cards": self.credit_cards,
            "secrets": self.secrets,
            "pii": self.pii,
        }


@dataclass(frozen=True)
class DetectionResult:
    """Spans in precedence order plus the per-category breakdown."""

    spans: Tuple[MatchSpan, ...]
    breakdown: Breakdown


@dataclass(frozen=True)
class DetectedItem:
    """A word-granular redaction target."""

    text: str
    category: Category
    bbox: BoundingBox


@dataclass
class ScanResult:
    """Result of running one raster through the full pipeline."""

    items: List[DetectedItem]
    breakdown: Breakdown
    raster: Any  # PIL.Image.Image at the caller's output resolution
    text: str = ""

    @property
    def detected_count(self) -> int:
        return self.breakdown.total


# --- Batch ---------------------------------------------------------------


@dataclass(frozen=True)
class ImageSource:
    """An image file submitted for redaction."""

    path: str

    @property
    def name(self) -> str:
        return self.path.replace("\\", "/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class PageSource:
    """One page (0-indexed) of a multi-page document."""

    path: str
    page_number: int

    @property
    def name(self) -> str:
        base = self.path.replace("\\", "/").rsplit("/", 1)[-1]
        if base.lower().endswith(".pdf"):
            base = base[:-4]
        return f"{base}_page{self.page_number + 1}.png"


SourceRef = Union[ImageSource, PageSource]


@dataclass
class BatchItem:
    """A unit of batch work. Only status, breakdown, output and error mutate."""

    source: SourceRef
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    status: BatchStatus = BatchStatus.PENDING
    breakdown: Breakdown = field(default_factory=Breakdown)
    output_raster: Any = None
    error: Optional[str] = None

    @property
    def name(self) -> str:
        return self.source.name

    def snapshot(self) -> "BatchItemSnapshot":
        return BatchItemSnapshot(
            id=self.id,
            name=self.name,
            status=self.status,
            breakdown=self.breakdown,
            error=self.error,
        )


@dataclass(frozen=True)
class BatchItemSnapshot:
    """Immutable view of a batch item emitted to observers."""

    id: str
    name: str
    status: BatchStatus
    breakdown: Breakdown
    error: Optional[str] = None


@dataclass(frozen=True)
class BatchProgress:
    """Point-in-time progress of a batch run."""

    current: int = 0
    total: int = 0
    is_processing: bool = False
