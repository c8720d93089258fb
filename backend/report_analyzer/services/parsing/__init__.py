"""Credit Report Analyzer - Parsing Layer

This layer converts raw Experian XML into a CreditReport.
Nothing downstream of it reads the XML tree.
"""
from .errors import (
    CreditReportError,
    ParseError,
    ValidationError,
    PerAccountFormattingError,
    PerAddressFormattingError,
)
from .experian_parser import ExperianXMLParser, parse_experian_xml

__all__ = [
    "CreditReportError",
    "ParseError",
    "ValidationError",
    "PerAccountFormattingError",
    "PerAddressFormattingError",
    "ExperianXMLParser",
    "parse_experian_xml",
]
