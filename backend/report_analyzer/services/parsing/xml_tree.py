"""
Credit Report Analyzer - Document Parser (stage 1)

Turns raw XML bytes into a generic tree of dicts, lists and strings:

- attributes and child elements share one namespace
- text is trimmed and internal whitespace collapsed
- repeated siblings become a list, a single occurrence stays a scalar/dict
- an element with both attributes/children and text keeps the text under "_"

normalize_repeatables() then wraps every tag that CAN repeat in a list so
later stages never branch on cardinality.
"""
from __future__ import annotations
import logging
import re
from typing import Any, Dict, FrozenSet, List, Union

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as SafeET

from .errors import ParseError

logger = logging.getLogger(__name__)

Node = Union[str, Dict[str, Any]]

TEXT_KEY = "_"

# Tags that the bureau may emit more than once under the same parent
REPEATABLE_TAGS: FrozenSet[str] = frozenset({
    "CAIS_Account_DETAILS",
    "CAIS_Holder_Details",
    "CAIS_Holder_Phone_Details",
    "CAIS_Holder_Address_Details",
    "CAIS_Account_History",
    "CAPS_Application_Details",
})

_WHITESPACE_RE = re.compile(r"\s+")


def _local_name(tag: str) -> str:
    """Strip a '{namespace}' prefix from a tag or attribute name."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _normalize_text(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _add_child(node: Dict[str, Any], name: str, value: Node) -> None:
    existing = node.get(name)
    if existing is None:
        node[name] = value
    elif isinstance(existing, list):
        existing.append(value)
    else:
        node[name] = [existing, value]


def _element_to_node(elem) -> Node:
    node: Dict[str, Any] = {}

    for name, value in elem.attrib.items():
        node[_local_name(name)] = _normalize_text(value)

    for child in elem:
        _add_child(node, _local_name(child.tag), _element_to_node(child))

    text = _normalize_text(elem.text or "")
    if not node:
        return text
    if text:
        node[TEXT_KEY] = text
    return node


def parse_xml_tree(xml_data: Union[bytes, str]) -> Dict[str, Any]:
    """
    Parse an XML document into a RawDocumentTree.

    Returns {root_tag: root_node}. Raises ParseError when the input is empty,
    not well-formed, or uses forbidden DTD/entity constructs.
    """
    if xml_data is None or not xml_data.strip():
        raise ParseError("Failed to read XML file: document is empty")

    try:
        root = SafeET.fromstring(xml_data)
    except SafeET.ParseError as e:
        logger.error(f"Malformed XML document: {e}")
        raise ParseError(f"Failed to read XML file: {e}") from e
    except DefusedXmlException as e:
        logger.error(f"Rejected unsafe XML document: {e!r}")
        raise ParseError(f"Failed to read XML file: {e!r}") from e

    return {_local_name(root.tag): _element_to_node(root)}


def as_list(value: Any) -> List[Any]:
    """Normalize an array-or-singleton value to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def normalize_repeatables(node: Any, repeatable: FrozenSet[str] = REPEATABLE_TAGS) -> Any:
    """Return a copy of the tree with every repeatable tag exposed as a list."""
    if isinstance(node, list):
        return [normalize_repeatables(item, repeatable) for item in node]
    if not isinstance(node, dict):
        return node

    normalized: Dict[str, Any] = {}
    for name, value in node.items():
        value = normalize_repeatables(value, repeatable)
        if name in repeatable:
            value = as_list(value)
        normalized[name] = value
    return normalized
