"""
Error Taxonomy

Row-level failures (FetchError, ExtractionError) are recovered where they
occur. Source-level failures (MissingRequiredFieldError, SourceReadError)
and NoSourcesError abort the whole build.
"""


class FeedError(Exception):
    """Base class for all feed build errors."""


class ConfigError(FeedError):
    """Configuration value is missing or malformed."""


class MissingRequiredFieldError(FeedError):
    """A required settings field is absent from the source."""

    def __init__(self, field: str, source_id: str = ""):
        self.field = field
        self.source_id = source_id
        where = f" (source {source_id})" if source_id else ""
        super().__init__(f'Missing required settings field "{field}"{where}')


class NoSourcesError(FeedError):
    """No tabular sources were configured or discovered."""

    def __init__(self, message: str = "No sources to build: explicit source list is empty and discovery found nothing"):
        super().__init__(message)


class SourceReadError(FeedError):
    """A tabular source could not be read."""

    def __init__(self, source_id: str, reason: str):
        self.source_id = source_id
        self.reason = reason
        super().__init__(f"Cannot read source {source_id}: {reason}")


class FetchError(FeedError):
    """A product page could not be fetched."""

    def __init__(self, url: str, reason: str, status: int | None = None):
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"Fetch failed for {url}: {reason}")


class ExtractionError(FeedError):
    """A single extraction step could not parse its input."""
