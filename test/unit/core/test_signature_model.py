"""Unit tests for signature extraction."""

import pytest

from testablegen.signature import EffectQualifiers, LabelKind, Parameter, extract
from testablegen.syntax import ParameterNode, parse_declaration


class TestParameter:
    def test_single_name_is_its_own_label(self):
        parameter = Parameter.from_node(ParameterNode("value", None, "Int"))
        assert parameter == Parameter("value", "value")
        assert parameter.label_kind is LabelKind.SAME

    def test_wildcard_label_is_positional(self):
        parameter = Parameter.from_node(ParameterNode("_", "value", "Int"))
        assert parameter.external_label is None
        assert parameter.internal_name == "value"
        assert parameter.label_kind is LabelKind.POSITIONAL

    def test_distinct_label(self):
        parameter = Parameter.from_node(ParameterNode("with", "value", "Int", trailing_comma=","))
        assert parameter == Parameter("with", "value", ",")
        assert parameter.label_kind is LabelKind.DISTINCT

    def test_repeated_name_counts_as_same(self):
        parameter = Parameter.from_node(ParameterNode("value", "value", "Int"))
        assert parameter.label_kind is LabelKind.SAME


class TestExtract:
    def test_extracts_every_clause(self):
        decl = parse_declaration(
            "private static func load<T: Decodable>(from url: URL, _ type: T.Type) async throws -> T where T: Sendable {}"
        )
        signature = extract(decl)

        assert signature.name == "load"
        assert signature.generic_parameters == "<T: Decodable>"
        assert signature.parameters == (Parameter("from", "url", ","), Parameter(None, "type"))
        assert signature.effect_qualifiers == EffectQualifiers(is_asynchronous=True, is_failable=True)
        assert signature.effect_text == "async throws"
        assert signature.return_clause == "-> T"
        assert signature.generic_where_clause == "where T: Sendable"
        assert signature.parameter_text == "from url: URL, _ type: T.Type"
        assert signature.retained_modifiers == ("static",)
        assert signature.returns_value

    def test_absent_clauses_are_empty(self):
        signature = extract(parse_declaration("private func myMethod() {\n}"))
        assert signature.generic_parameters == ""
        assert signature.parameters == ()
        assert signature.effect_qualifiers == EffectQualifiers(False, False)
        assert signature.effect_text == ""
        assert signature.return_clause == ""
        assert signature.generic_where_clause == ""
        assert signature.retained_modifiers == ()
        assert not signature.returns_value

    @pytest.mark.parametrize(
        "effects, expected",
        [
            ("", EffectQualifiers(False, False)),
            ("throws", EffectQualifiers(False, True)),
            ("async", EffectQualifiers(True, False)),
            ("async throws", EffectQualifiers(True, True)),
            ("rethrows", EffectQualifiers(False, True)),
            ("throws(ParseError)", EffectQualifiers(False, True)),
        ],
    )
    def test_effect_qualifiers(self, effects, expected):
        signature = extract(parse_declaration(f"private func f() {effects} {{}}"))
        assert signature.effect_qualifiers == expected
        assert signature.effect_text == effects

    def test_extraction_is_repeatable(self):
        decl = parse_declaration("private func myMethod(param1: Int, param2 value: Int, _ param3: Int) -> Int { 0 }")
        assert extract(decl) == extract(decl)
        # parsing the same text again gives a structurally equal signature too
        again = parse_declaration("private func myMethod(param1: Int, param2 value: Int, _ param3: Int) -> Int { 0 }")
        assert extract(again) == extract(decl)

    def test_signature_is_immutable(self):
        signature = extract(parse_declaration("private func f() {}"))
        with pytest.raises(AttributeError):
            signature.name = "g"

    def test_only_call_relevant_modifiers_are_retained(self):
        decl = parse_declaration("private final nonisolated mutating func f() {}")
        assert extract(decl).retained_modifiers == ("nonisolated", "mutating")


@pytest.mark.parametrize(
    "node, is_inout",
    [
        (ParameterNode("value", None, "inout Int"), True),
        (ParameterNode("_", "values", "inout [Int]"), True),
        (ParameterNode("into", "buffer", "inout Data"), True),
        (ParameterNode("value", None, "Int"), False),
        (ParameterNode("inoutCount", None, "Int"), False),
    ],
)
def test_inout_is_carried_from_the_type(node, is_inout):
    assert Parameter.from_node(node).is_inout is is_inout
