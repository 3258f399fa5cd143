"""Unit tests for the forwarding call builder."""

import pytest

from testablegen.forwarding import CALL_PREFIXES, ForwardingCall, build_call, call_prefix, forwarding_argument
from testablegen.signature import EffectQualifiers, FunctionSignature, Parameter, extract
from testablegen.syntax import parse_declaration


def call_for(source):
    return build_call(extract(parse_declaration(source)))


class TestArguments:
    def test_no_parameters(self):
        call = call_for('private func myMethod() -> String { "Hello" }')
        assert call.arguments == ()
        assert call.expression("myMethod") == "myMethod()"

    def test_positional_parameter(self):
        call = call_for("private func myMethod(_ value: Int) -> Int { value }")
        assert call.expression("myMethod") == "myMethod(value)"

    def test_distinct_label(self):
        call = call_for("private func myMethod(with value: Int) -> Int { value }")
        assert call.expression("myMethod") == "myMethod(with: value)"

    def test_single_name_label(self):
        call = call_for("private func myMethod(value: Int) -> Int { value }")
        assert call.expression("myMethod") == "myMethod(value: value)"

    def test_all_parameter_kinds(self):
        call = call_for("private func myMethod(param1: Int, param2 value: Int, _ param3: Int) -> Int { 0 }")
        assert call.argument_list == "param1: param1, param2: value, param3"

    def test_forwarding_argument(self):
        assert forwarding_argument(Parameter(None, "x")) == "x"
        assert forwarding_argument(Parameter("x", "x")) == "x: x"
        assert forwarding_argument(Parameter("at", "index")) == "at: index"

    def test_inout_arguments_are_passed_by_reference(self):
        call = call_for("private func swap(_ a: inout Int, with b: inout Int, count: inout Int, scale: Int) {}")
        assert call.argument_list == "&a, with: &b, count: &count, scale: scale"

    @pytest.mark.parametrize("count", [0, 1, 2, 5, 12])
    def test_order_and_count_follow_declaration(self, count):
        parameters = tuple(
            Parameter(None if i % 3 == 0 else f"label{i}", f"name{i}", "," if i < count - 1 else None)
            for i in range(count)
        )
        signature = FunctionSignature("f", "", parameters, EffectQualifiers())
        call = build_call(signature)

        assert len(call.arguments) == count
        for parameter, argument in zip(parameters, call.arguments):
            assert argument.endswith(parameter.internal_name)
            assert argument == forwarding_argument(parameter)

    def test_duplicate_looking_arguments_are_kept(self):
        parameters = (Parameter("x", "a", ","), Parameter("x", "b"))
        call = build_call(FunctionSignature("f", "", parameters, EffectQualifiers()))
        assert call.arguments == ("x: a", "x: b")


class TestPrefix:
    @pytest.mark.parametrize(
        "is_async, is_failable, prefix",
        [
            (False, False, ""),
            (False, True, "try "),
            (True, False, "await "),
            (True, True, "try await "),
        ],
    )
    def test_prefix_table(self, is_async, is_failable, prefix):
        effects = EffectQualifiers(is_asynchronous=is_async, is_failable=is_failable)
        assert call_prefix(effects) == prefix
        assert CALL_PREFIXES[(is_async, is_failable)] == prefix

    @pytest.mark.parametrize(
        "effects, expression",
        [
            ("", "myMethod()"),
            ("async", "await myMethod()"),
            ("throws", "try myMethod()"),
            ("async throws", "try await myMethod()"),
            ("rethrows", "try myMethod()"),
        ],
    )
    def test_prefix_from_declaration(self, effects, expression):
        call = call_for(f"private func myMethod() {effects} {{ }}")
        assert call.expression("myMethod") == expression

    def test_prefix_is_prepended_verbatim(self):
        call = ForwardingCall(("a: a",), "try await ")
        assert call.expression("f") == "try await f(a: a)"
