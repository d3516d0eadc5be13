import numpy as np

from .errors import ConfigurationError


def clamp(value, lower: float = 0.0, upper: float = 1.0):
    """Clamp value (scalar or array) to [lower, upper]."""
    clamped = np.clip(value, lower, upper)
    if np.ndim(clamped) == 0:
        return float(clamped)
    return clamped


def _check_range(minimum: float, maximum: float) -> float:
    span = maximum - minimum
    if span == 0:
        raise ConfigurationError(f"Zero normalization range [{minimum}, {maximum}]")
    return span


def normalize(value, minimum: float = 0.0, maximum: float = 1.0):
    """Map value from [minimum, maximum] onto [0, 1].

    Values outside the practical range are clamped.

    Parameters
    ----------
    value : float or array-like
        Raw quantity
    minimum : float
        Lower end of the practical range
    maximum : float
        Upper end of the practical range

    Returns
    -------
    float or np.ndarray
        Normalized value in [0, 1]

    Raises
    ------
    ConfigurationError
        If minimum equals maximum
    """
    span = _check_range(minimum, maximum)
    return clamp((np.asarray(value, dtype=float) - minimum) / span, 0.0, 1.0)


def denormalize(value, minimum: float = 0.0, maximum: float = 1.0):
    """Inverse of normalize (without clamping)."""
    span = _check_range(minimum, maximum)
    denormalized = np.asarray(value, dtype=float) * span + minimum
    if np.ndim(denormalized) == 0:
        return float(denormalized)
    return denormalized
