class EstimationError(RuntimeError):
    """Base class of all errors raised by the estimators."""

    pass


class ValidationError(EstimationError, ValueError):
    """Raised if a required input is missing or out of range."""

    pass


class ConfigurationError(EstimationError):
    """Raised if constants or configuration values are unusable, e.g., a zero range."""

    pass


class ColdStartError(EstimationError):
    """Raised if a predictor could not be initialized on first use."""

    pass
