from __future__ import annotations


class BoardConfigurationError(ValueError):
    """Raised when a board cannot host the six distinct target cells."""
