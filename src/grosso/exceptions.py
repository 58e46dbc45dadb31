"""Custom exceptions for the grosso package."""


class GrossoError(Exception):
    """Base exception for all grosso errors."""
    pass


class InvalidDataError(GrossoError):
    """Raised when input data is invalid, missing or unreadable."""
    pass


class MalformedTransactionError(InvalidDataError):
    """Raised when a line does not follow the SPMF sequence encoding.

    Attributes:
        line: The offending text line
        line_number: 1-based line number in its file (None when unknown)
    """

    def __init__(self, message: str, line: str = '', line_number: int = None):
        super().__init__(message)
        self.line = line
        self.line_number = line_number


class InvalidAlgorithmError(GrossoError):
    """Raised when an unknown algorithm is requested."""
    pass


class InvalidParameterError(GrossoError):
    """Raised when invalid parameters are provided."""
    pass


class PreconditionError(GrossoError):
    """Raised when a statistical bound cannot be computed soundly."""
    pass


class MiningError(GrossoError):
    """Raised when the external sequential pattern miner fails."""
    pass


class NotFittedError(GrossoError):
    """Raised when trying to get results before fitting."""
    pass
