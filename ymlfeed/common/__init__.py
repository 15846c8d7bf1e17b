# Common utilities
from .config_loader import FeedConfig, load_config, load_feed_config
from .diagnostics import write_error_record
from .errors import (
    ConfigError,
    ExtractionError,
    FeedError,
    FetchError,
    MissingRequiredFieldError,
    NoSourcesError,
    SourceReadError,
)
from .fallback import first_non_empty
from .log_config import setup_logging
from .remote_text import CachedText, RemoteTextProvider
from .rows import TableRow, rows_to_records
