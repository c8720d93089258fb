"""
Credit Report Analyzer - Extraction Errors

ParseError and ValidationError are fatal to an upload.
The per-item errors never leave the pipeline: the offending tradeline is
dropped, or the address falls back to the sentinel.
"""


class CreditReportError(Exception):
    """Base class for every extraction error."""


class ParseError(CreditReportError):
    """Input is not well-formed XML or cannot be read."""


class ValidationError(CreditReportError):
    """Required identity data is missing after every fallback."""


class PerAccountFormattingError(CreditReportError):
    """A single tradeline could not be translated or formatted."""

    def __init__(self, message: str, index: int = -1):
        super().__init__(message)
        self.index = index


class PerAddressFormattingError(CreditReportError):
    """A holder address block could not be turned into a display string."""
