"""Exceptions raised by the redaction pipeline."""


class RedactionError(Exception):
    """Base class for pipeline failures."""


class SourceLoadError(RedactionError):
    """A source image or document page could not be decoded."""


class RecognitionError(RedactionError):
    """The text recognition engine failed."""


class ResourceLimitExceeded(RedactionError):
    """A document exceeds the configured size or page-count ceiling."""
