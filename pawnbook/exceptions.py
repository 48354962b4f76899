"""Custom exception hierarchy for pawnbook."""


class PawnbookError(Exception):
    """Base exception for all pawnbook errors."""


class InvalidRecordError(PawnbookError):
    """Raised when a wire row cannot be turned into a record."""


class MissingInvestorError(InvalidRecordError):
    """Raised in strict mode when a funding record has no investor identity."""


class ConfigurationError(PawnbookError):
    """Raised when configuration is invalid or missing."""
