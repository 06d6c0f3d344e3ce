class RollingStatsError(Exception):
    """Base class for every error raised by the order-statistics engine."""


class ConfigurationError(RollingStatsError, ValueError):
    """Invalid constructor or configuration-file arguments."""


class EmptyStateError(RollingStatsError, LookupError):
    """A query was issued while no sample is tracked."""


class InvalidArgumentError(RollingStatsError, ValueError):
    """Out of range percentile or bracket index, or a NaN sample."""


class CounterExhaustedError(RollingStatsError, OverflowError):
    """The per-engine sequence id counter reached its upper bound."""
