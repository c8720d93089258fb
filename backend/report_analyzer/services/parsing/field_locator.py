"""
Credit Report Analyzer - Field Locator (stage 2)

The same logical field can live in different sections depending on the report
variant: the Current_Application block is filled for fresh applicants, the
CAIS holder blocks are filled from bureau records, and either may be missing.

Each field is resolved through an ordered chain of lookups. The first
non-empty value wins; otherwise the field's default is used. The locator never
raises for a missing optional section.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ...models.ssot import BasicDetails
from .errors import ValidationError
from .xml_tree import TEXT_KEY, as_list

logger = logging.getLogger(__name__)

LEADING_INT = re.compile(r"\d+", re.ASCII)

ENVELOPE_TAG = "INProfileResponse"
NOT_AVAILABLE = "N/A"

PathStep = Union[str, int]


@dataclass(frozen=True)
class Lookup:
    """One candidate location: a context block plus a path inside it."""
    block: str
    path: Tuple[PathStep, ...]


@dataclass(frozen=True)
class ExtractionContext:
    """Read-only view of the sub-trees the pipeline reads from."""
    application: Any = None
    accounts: List[Any] = field(default_factory=list)
    holder: Any = None
    holder_phone: Any = None
    balance_summary: Any = None
    score: Any = None
    enquiry_summary: Any = None

    def block(self, name: str) -> Any:
        return getattr(self, name, None)


# =============================================================================
# LOOKUP TABLES
# =============================================================================

APPLICATION_PATH = ("Current_Application", "Current_Application_Details", "Current_Applicant_Details")
ACCOUNTS_PATH = ("CAIS_Account", "CAIS_Account_DETAILS")
BALANCE_SUMMARY_PATH = ("CAIS_Account", "CAIS_Summary", "Total_Outstanding_Balance")

FIELD_CHAINS: Mapping[str, Tuple[Lookup, ...]] = MappingProxyType({
    "first_name": (
        Lookup("application", ("First_Name",)),
        Lookup("holder", ("First_Name_Non_Normalized",)),
    ),
    "last_name": (
        Lookup("application", ("Last_Name",)),
        Lookup("holder", ("Surname_Non_Normalized",)),
    ),
    "mobile": (
        Lookup("application", ("MobilePhoneNumber",)),
        Lookup("holder_phone", ("Mobile_Telephone_Number",)),
        Lookup("holder_phone", ("Telephone_Number",)),
    ),
    "pan": (
        Lookup("holder", ("Income_TAX_PAN",)),
        Lookup("application", ("IncomeTaxPan",)),
    ),
    "credit_score": (
        Lookup("score", ("BureauScore",)),
    ),
})

FIELD_DEFAULTS: Mapping[str, str] = MappingProxyType({
    "first_name": "",
    "last_name": "",
    "mobile": NOT_AVAILABLE,
    "pan": NOT_AVAILABLE,
    "credit_score": "",
})


# =============================================================================
# RESOLVER
# =============================================================================

def _scalar(value: Any) -> Optional[str]:
    """Text of a leaf node, or None when the node is not a leaf."""
    if isinstance(value, dict):
        value = value.get(TEXT_KEY)
    if isinstance(value, str):
        return value.strip()
    return None


def lookup_path(node: Any, path: Sequence[PathStep]) -> Any:
    """
    Walk a path through the tree.

    A string step applied to a list steps into its first element, so a path
    works whether or not the bureau repeated a block.
    """
    for step in path:
        if node is None:
            return None
        if isinstance(step, int):
            items = as_list(node)
            node = items[step] if -len(items) <= step < len(items) else None
            continue
        if isinstance(node, list):
            node = node[0] if node else None
        if not isinstance(node, dict):
            return None
        node = node.get(step)
    return node


def text_at(node: Any, path: Sequence[PathStep]) -> str:
    """Trimmed text at path, or "" when absent."""
    return _scalar(lookup_path(node, path)) or ""


def resolve(context: ExtractionContext, chain: Sequence[Lookup], default: str = "") -> str:
    """Return the first non-empty value along the chain, else default."""
    for lookup in chain:
        value = _scalar(lookup_path(context.block(lookup.block), lookup.path))
        if value:
            return value
    return default


def resolve_field(context: ExtractionContext, name: str) -> str:
    return resolve(context, FIELD_CHAINS[name], FIELD_DEFAULTS[name])


def _parse_score(value: str) -> int:
    """Leading integer of the score text ("762.0" -> 762), else 0."""
    match = LEADING_INT.match(value or "")
    return int(match.group()) if match else 0


# =============================================================================
# CONTEXT + IDENTITY
# =============================================================================

def build_context(tree: Dict[str, Any]) -> ExtractionContext:
    """
    Locate the extraction blocks inside a normalized RawDocumentTree.

    Raises ValidationError when the document is not wrapped in the
    INProfileResponse envelope.
    """
    root = tree.get(ENVELOPE_TAG) if isinstance(tree, dict) else None
    if root is None:
        raise ValidationError(f"Invalid XML structure: {ENVELOPE_TAG} not found")
    if not isinstance(root, dict):
        # Envelope with no child elements
        root = {}

    accounts = as_list(lookup_path(root, ACCOUNTS_PATH))
    first_account = accounts[0] if accounts else None

    return ExtractionContext(
        application=lookup_path(root, APPLICATION_PATH),
        accounts=accounts,
        holder=lookup_path(first_account, ("CAIS_Holder_Details", 0)),
        holder_phone=lookup_path(first_account, ("CAIS_Holder_Phone_Details", 0)),
        balance_summary=lookup_path(root, BALANCE_SUMMARY_PATH),
        score=root.get("SCORE"),
        enquiry_summary=root.get("TotalCAPS_Summary"),
    )


def locate_identity(context: ExtractionContext) -> BasicDetails:
    """Resolve the identity block. An empty name is left for the assembler to reject."""
    first_name = resolve_field(context, "first_name")
    last_name = resolve_field(context, "last_name")
    name = f"{first_name} {last_name}".strip().upper()

    identity = BasicDetails(
        name=name,
        mobile=resolve_field(context, "mobile"),
        pan=resolve_field(context, "pan").upper(),
        credit_score=_parse_score(resolve_field(context, "credit_score")),
    )
    logger.debug(f"Located identity: name={'set' if name else 'missing'}, score={identity.credit_score}")
    return identity
