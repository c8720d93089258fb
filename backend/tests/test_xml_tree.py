"""
Document Parser Tests

Covers the generic tree shape produced from XML:
1. Attribute / child merging
2. Text trimming and whitespace collapsing
3. List-vs-singleton cardinality, before and after normalization
4. ParseError on malformed, empty and unsafe input
"""
import pytest

from report_analyzer.services.parsing.errors import ParseError
from report_analyzer.services.parsing.xml_tree import (
    REPEATABLE_TAGS,
    as_list,
    normalize_repeatables,
    parse_xml_tree,
)


class TestParseXmlTree:

    def test_root_tag_wraps_tree(self):
        tree = parse_xml_tree(b"<Root><A>1</A></Root>")
        assert tree == {"Root": {"A": "1"}}

    def test_attributes_merge_with_children(self):
        tree = parse_xml_tree(b'<Root code="11"><Name>X</Name></Root>')
        assert tree["Root"] == {"code": "11", "Name": "X"}

    def test_attribute_only_element_is_mapping(self):
        tree = parse_xml_tree(b'<Root><Holder First="JOHN" Last="DOE"/></Root>')
        assert tree["Root"]["Holder"] == {"First": "JOHN", "Last": "DOE"}

    def test_text_is_trimmed_and_collapsed(self):
        tree = parse_xml_tree(b"<Root><Bank>  HDFC \n   BANK  </Bank></Root>")
        assert tree["Root"]["Bank"] == "HDFC BANK"

    def test_empty_element_is_empty_string(self):
        tree = parse_xml_tree(b"<Root><Date_Closed></Date_Closed><Other/></Root>")
        assert tree["Root"]["Date_Closed"] == ""
        assert tree["Root"]["Other"] == ""

    def test_text_alongside_attributes_kept_under_underscore(self):
        tree = parse_xml_tree(b'<Root><Score type="bureau">762</Score></Root>')
        assert tree["Root"]["Score"] == {"type": "bureau", "_": "762"}

    def test_repeated_siblings_become_list_in_order(self):
        tree = parse_xml_tree(b"<Root><Acc>1</Acc><Acc>2</Acc><Acc>3</Acc></Root>")
        assert tree["Root"]["Acc"] == ["1", "2", "3"]

    def test_single_occurrence_is_not_a_list(self):
        tree = parse_xml_tree(b"<Root><Acc><No>1</No></Acc></Root>")
        assert tree["Root"]["Acc"] == {"No": "1"}

    def test_namespace_is_stripped(self):
        tree = parse_xml_tree(b'<ns:Root xmlns:ns="urn:x"><ns:A>1</ns:A></ns:Root>')
        assert tree == {"Root": {"A": "1"}}

    def test_accepts_str_input(self):
        tree = parse_xml_tree("<Root><A>é</A></Root>")
        assert tree["Root"]["A"] == "é"

    @pytest.mark.parametrize("payload", [
        b"<Root><A>1</Root>",
        b"not xml at all",
        b"<Root>",
    ])
    def test_malformed_input_raises_parse_error(self, payload):
        with pytest.raises(ParseError):
            parse_xml_tree(payload)

    @pytest.mark.parametrize("payload", [b"", b"   \n ", None])
    def test_empty_input_raises_parse_error(self, payload):
        with pytest.raises(ParseError):
            parse_xml_tree(payload)

    def test_entity_expansion_is_rejected(self):
        payload = (
            b'<?xml version="1.0"?>'
            b'<!DOCTYPE r [<!ENTITY a "aaaaaaaaaa"><!ENTITY b "&a;&a;&a;&a;">]>'
            b"<r>&b;</r>"
        )
        with pytest.raises(ParseError):
            parse_xml_tree(payload)


class TestNormalizeRepeatables:

    def test_singleton_repeatable_becomes_list(self):
        tree = parse_xml_tree(
            b"<R><CAIS_Account><CAIS_Account_DETAILS><A>1</A></CAIS_Account_DETAILS></CAIS_Account></R>"
        )
        normalized = normalize_repeatables(tree)
        assert normalized["R"]["CAIS_Account"]["CAIS_Account_DETAILS"] == [{"A": "1"}]

    def test_nested_repeatables_inside_lists_are_normalized(self):
        tree = parse_xml_tree(
            b"<R>"
            b"<CAIS_Account_DETAILS><CAIS_Holder_Details><N>A</N></CAIS_Holder_Details></CAIS_Account_DETAILS>"
            b"<CAIS_Account_DETAILS><CAIS_Holder_Details><N>B</N></CAIS_Holder_Details></CAIS_Account_DETAILS>"
            b"</R>"
        )
        accounts = normalize_repeatables(tree)["R"]["CAIS_Account_DETAILS"]
        assert [acc["CAIS_Holder_Details"] for acc in accounts] == [[{"N": "A"}], [{"N": "B"}]]

    def test_non_repeatable_tags_untouched(self):
        tree = {"R": {"SCORE": {"BureauScore": "700"}}}
        assert normalize_repeatables(tree) == tree

    def test_input_tree_not_mutated(self):
        tree = {"R": {"CAIS_Account_DETAILS": {"A": "1"}}}
        normalize_repeatables(tree)
        assert tree == {"R": {"CAIS_Account_DETAILS": {"A": "1"}}}

    def test_account_details_is_repeatable(self):
        assert "CAIS_Account_DETAILS" in REPEATABLE_TAGS


class TestAsList:

    def test_shapes(self):
        assert as_list(None) == []
        assert as_list("x") == ["x"]
        assert as_list({"a": "1"}) == [{"a": "1"}]
        assert as_list(["x", "y"]) == ["x", "y"]
