"""Error taxonomy for the statistics library."""


class StatisticsError(ValueError):
    """Base class for invalid input to a statistics function."""


class InvalidInputCardinality(StatisticsError):
    """Raised when an input sequence does not have the required length."""


class DegenerateDenominator(StatisticsError):
    """Raised when a statistic would divide by zero."""


class OutOfRangeInput(StatisticsError):
    """Raised when a rate, probability or count is outside its valid range."""
