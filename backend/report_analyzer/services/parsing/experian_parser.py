"""
Credit Report Analyzer - Experian XML Parser

Runs the four extraction stages over one INProfileResponse document and
returns a CreditReport:

    bytes -> parse_xml_tree -> normalize_repeatables   (stage 1)
          -> build_context -> locate_identity          (stage 2)
          -> translate_and_aggregate                   (stage 3)
          -> build_addresses -> assemble               (stage 4)

Stateless: one instance can be shared across requests.
"""
from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ...models.ssot import CreditReport
from .assembler import assemble, build_addresses
from .errors import ParseError
from .field_locator import build_context, locate_identity
from .translator import translate_and_aggregate
from .xml_tree import normalize_repeatables, parse_xml_tree

logger = logging.getLogger(__name__)


class ExperianXMLParser:
    """Parse Experian INProfileResponse XML into a CreditReport."""

    def parse(
        self,
        xml_data: Union[bytes, str],
        file_name: str,
        upload_date: Optional[datetime] = None,
    ) -> CreditReport:
        """Extract a CreditReport from raw XML. Raises ParseError or ValidationError."""
        logger.info(f"Parsing XML report: {file_name}")

        tree = normalize_repeatables(parse_xml_tree(xml_data))
        context = build_context(tree)

        identity = locate_identity(context)
        summary, accounts = translate_and_aggregate(context, context.accounts)
        addresses = build_addresses(context.accounts)

        report = assemble(identity, summary, accounts, addresses, file_name, upload_date)

        logger.info(
            f"Parsed {len(report.credit_accounts)} of {len(context.accounts)} accounts from {file_name}"
        )
        return report

    def parse_file(self, xml_path: Union[str, Path]) -> CreditReport:
        """Read a report from disk and parse it."""
        path = Path(xml_path)
        try:
            xml_data = path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read XML file: {e}")
            raise ParseError(f"Failed to read XML file: {e}") from e
        return self.parse(xml_data, path.name)


# =============================================================================
# FACTORY FUNCTION
# =============================================================================

def parse_experian_xml(
    xml_data: Union[bytes, str],
    file_name: str,
    upload_date: Optional[datetime] = None,
) -> CreditReport:
    """Factory function to parse one Experian XML document."""
    parser = ExperianXMLParser()
    return parser.parse(xml_data, file_name, upload_date)
