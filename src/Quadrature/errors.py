"""Exception hierarchy for the quadrature study."""


class QuadratureError(Exception):
    """Base class for all errors raised by the Quadrature package."""


class InvalidRequestError(QuadratureError, ValueError):
    """Malformed or degenerate input, rejected before any round runs."""


class ComputationError(QuadratureError, RuntimeError):
    """Unrecoverable fault during a sampling round. Aborts the sweep."""
