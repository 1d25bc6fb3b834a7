"""Custom exception hierarchy for Radio Venus.

All application exceptions inherit from :class:`RadioVenusError`, which
carries an optional ``provider_name`` so log handlers can tell which
external source (e.g. "wikidata", "everynoise", "anthropic") caused the
failure.

The hierarchy is organized by where the failure is handled:

    RadioVenusError  (base -- catch-all for any curation error)
    +-- ProviderError            (adapter-internal parse / shape problems)
    +-- TransportError           (network or HTTP failure talking to a source)
    +-- RateLimitError           (source throttled us)
    +-- ProviderUnavailableError (source down, blocked, or not configured)
    +-- LLMError                 (aesthetic judge API failure)
    +-- InvalidDateError         (unparseable or implausible birth date)
    +-- SnapshotError            (canonical snapshot cannot be read or written)
    +-- PipelineError            (run orchestration failure, aborts the run)
    +-- ConfigurationError       (missing credentials / inputs)

Provider adapters never let these escape ``query``: they are converted to a
:class:`~radio_venus.models.resolution.ProviderResult` at the adapter
boundary.  Only ``SnapshotError`` and ``PipelineError`` are meant to stop a
run.
"""


class RadioVenusError(Exception):
    """Base exception for all Radio Venus errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets,
    e.g. ``[musicbrainz] Search failed``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Provider-level errors (converted to ProviderResult at the adapter boundary)
# ---------------------------------------------------------------------------

class ProviderError(RadioVenusError):
    """Raised inside an adapter when a response has an unexpected shape."""

    def __init__(
        self,
        message: str = "Provider returned a malformed response",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class TransportError(RadioVenusError):
    """Raised when a network request to an external source fails."""

    def __init__(
        self,
        message: str = "Transport failure",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(RadioVenusError):
    """Raised when a source answers with a rate-limit response (HTTP 429)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(RadioVenusError):
    """Raised when a source is unreachable or blocked by a bot challenge."""

    def __init__(
        self,
        message: str = "External source is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(RadioVenusError):
    """Raised when an LLM API call fails or returns an unparseable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------

class InvalidDateError(RadioVenusError):
    """Raised when a birth date cannot be parsed or falls outside the plausible range."""

    def __init__(
        self,
        message: str = "Invalid or implausible birth date",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class SnapshotError(RadioVenusError):
    """Raised when the canonical snapshot or a curated input file is unreadable."""

    def __init__(
        self,
        message: str = "Snapshot I/O failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Orchestration / configuration errors
# ---------------------------------------------------------------------------

class PipelineError(RadioVenusError):
    """Raised when run orchestration fails irrecoverably."""

    def __init__(
        self,
        message: str = "Pipeline run failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(RadioVenusError):
    """Raised when an optional step lacks the credentials or inputs it needs."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
