"""Unit tests for eligibility policies."""

import pytest

from testablegen import NotAFunction, NotPrivate
from testablegen.eligibility import AnyFunctionPolicy, PrivateOnlyPolicy
from testablegen.syntax import parse_declaration

NON_FUNCTIONS = [
    "struct Foo {}",
    "class Foo {}",
    "enum Foo { case a }",
    "private var value = 0",
    "let value = 0",
    "init() {}",
    "typealias Foo = Int",
]


@pytest.mark.parametrize("source", NON_FUNCTIONS)
@pytest.mark.parametrize("policy", [AnyFunctionPolicy(), PrivateOnlyPolicy()])
def test_non_functions_are_rejected(policy, source):
    with pytest.raises(NotAFunction) as excinfo:
        policy.validate(parse_declaration(source), "Testable")
    assert str(excinfo.value) == "@Testable can only be applied to a function."


@pytest.mark.parametrize("visibility", ["", "internal ", "public ", "open ", "package "])
def test_unrestricted_visibility(visibility):
    decl = parse_declaration(f"{visibility}func myMethod() -> Int {{ 0 }}")

    AnyFunctionPolicy().validate(decl, "Testable")

    with pytest.raises(NotPrivate) as excinfo:
        PrivateOnlyPolicy().validate(decl, "PrivateTestable")
    assert excinfo.value.description == "@PrivateTestable can only be applied to a private function."


@pytest.mark.parametrize("visibility", ["private", "fileprivate"])
def test_restricted_visibility(visibility):
    decl = parse_declaration(f"{visibility} static func myMethod() {{}}")
    AnyFunctionPolicy().validate(decl, "Testable")
    PrivateOnlyPolicy().validate(decl, "PrivateTestable")


def test_not_a_function_wins_over_not_private():
    with pytest.raises(NotAFunction):
        PrivateOnlyPolicy().validate(parse_declaration("public struct Foo {}"), "PrivateTestable")


def test_errors_carry_declaration_location():
    decl = parse_declaration("\n\n    @PrivateTestable internal func f() {}")
    with pytest.raises(NotPrivate) as excinfo:
        PrivateOnlyPolicy().validate(decl, "PrivateTestable")
    assert (excinfo.value.line, excinfo.value.column) == (3, 5)


def test_setter_only_restriction_is_not_private():
    decl = parse_declaration("private(set) public func myMethod() {}")
    with pytest.raises(NotPrivate):
        PrivateOnlyPolicy().validate(decl, "PrivateTestable")
