"""Exception hierarchy for remote analysis calls."""


class CLVInsightsError(Exception):
    """Base class for all service errors."""


class TransportFailure(CLVInsightsError):
    """The remote call could not complete."""


class SchemaViolation(CLVInsightsError):
    """The remote response was not JSON or did not satisfy the declared schema."""


class IngestionError(CLVInsightsError):
    """At least one batch of a customer file failed; no records are returned."""


class CompletionError(CLVInsightsError):
    """A single partial customer could not be completed."""


class RecommendationError(CLVInsightsError):
    """Marketing recommendations could not be generated."""
