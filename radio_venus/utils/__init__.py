"""Utility modules for Radio Venus.

- **errors** -- exception hierarchy rooted at RadioVenusError; adapters
  convert these to ProviderResult values before they reach orchestration.
- **concurrency** -- batch fan-out for enrichment; request pacing for the
  sequential phases.
- **logging** -- structlog setup with console / JSON renderers.
- **text_normalizer** -- name dedup keys, fuzzy name matching, URL slugs.
"""

from radio_venus.utils.concurrency import (
    RequestThrottle,
    gather_in_batches,
    polite_pause,
)
from radio_venus.utils.errors import (
    ConfigurationError,
    InvalidDateError,
    LLMError,
    PipelineError,
    ProviderError,
    ProviderUnavailableError,
    RadioVenusError,
    RateLimitError,
    SnapshotError,
    TransportError,
)
from radio_venus.utils.logging import bind_run_context, configure_logging, get_logger
from radio_venus.utils.text_normalizer import name_key, names_match, normalize_tag

__all__ = [
    "ConfigurationError",
    "InvalidDateError",
    "LLMError",
    "PipelineError",
    "ProviderError",
    "ProviderUnavailableError",
    "RadioVenusError",
    "RateLimitError",
    "RequestThrottle",
    "SnapshotError",
    "TransportError",
    "bind_run_context",
    "configure_logging",
    "gather_in_batches",
    "get_logger",
    "name_key",
    "names_match",
    "normalize_tag",
    "polite_pause",
]
