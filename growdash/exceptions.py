"""Exceptions raised by GrowDash clients and services"""


class GrowDashError(Exception):
    """Base exception for GrowDash."""

    pass


class TransportError(GrowDashError):
    """Network or HTTP failure reaching a sensor relay or AI endpoint."""

    pass


class ValidationError(GrowDashError):
    """Well-formed response that fails the required-shape checks."""

    pass


class ParseError(GrowDashError):
    """Numeric or JSON parse failure."""

    pass


class AnalysisError(GrowDashError):
    """Photo analysis failed; no partial result is available."""

    pass
