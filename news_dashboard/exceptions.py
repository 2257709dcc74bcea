class NewsDashboardError(Exception):
    """Base class for errors raised by the news dashboard core."""


class ConfigurationError(NewsDashboardError):
    """Raised when the setup is unusable (e.g. missing API credentials).

    These propagate to the caller instead of being soft-failed.
    """


class ProviderError(NewsDashboardError):
    """Raised when the text-generation API call fails."""


class RankingParseError(NewsDashboardError):
    """Raised when no id array can be recovered from a ranking reply."""


class MalformedEntryError(NewsDashboardError):
    """Raised when a feed entry lacks the fields needed for an Article."""
