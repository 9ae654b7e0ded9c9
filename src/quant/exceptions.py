"""Custom exceptions for the quant analytics engine.

Data-availability failures live here so every component raises the same
types. Numeric degenerate cases (flat series, zero variance) are not
errors and never raise.
"""


class QuantError(Exception):
    """Base exception for all analytics engine errors."""


class UnsupportedAssetError(QuantError):
    """Raised when no risk configuration exists for the requested asset."""

    def __init__(self, asset_id: str) -> None:
        super().__init__(f"Unsupported asset: {asset_id}")
        self.asset_id = asset_id


class InsufficientDataError(QuantError):
    """Raised when a series is shorter than an algorithm's stated minimum."""

    def __init__(self, required: int, actual: int, what: str = "data points") -> None:
        super().__init__(f"Insufficient {what}: need {required}, got {actual}")
        self.required = required
        self.actual = actual


class NoDataAvailableError(QuantError):
    """Raised when a series is empty after filtering or joining."""
