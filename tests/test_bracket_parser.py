import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import itertools

import numpy as np
import pytest

from expression_toolkit import (
    BracketParser, ParseMode, parse, parse_prefix, parse_postfix,
    Const, Variable, Add, Multiply, Negate, Mean, Gauss,
    ParseError, TokenError, OperationError, ArgumentsError, ArgumentsCountError, EndOfFileError
)

x, y, z = Variable('x'), Variable('y'), Variable('z')

GRID = list(itertools.product([-1.5, 0.0, 2.0], [-0.5, 1.0], [0.25, 3.0]))

PREFIX_CASES = [
    "(+ x 2)",
    "(* (+ x 1) (negate y))",
    "(- (/ x (+ y 10)) z)",
    "(mean x y z (* x y))",
    "(var x (negate y) 3.5)",
    "(gauss 2 (- y 1) 0.75 x)",
    "(abs (- x y))",
    "(iff x (mean) (var 1 2))",
    "(/ 1 -0)",
    "-4.5",
    "z",
]


def test_prefix_scenario():
    node = parse_prefix("(+ x 2)")
    assert node == Add(x, Const(2))
    assert node.evaluate(3, 0, 0) == 5
    assert node.prefix() == "(+ x 2)"
    assert node.postfix() == "(x 2 +)"


def test_postfix_scenario():
    node = parse_postfix("(x 2 +)")
    assert node.evaluate(3, 0, 0) == 5
    with pytest.raises(OperationError) as info:
        parse_prefix("(x 2 +)")
    assert info.value.token == 'x'
    assert info.value.position == 2


def test_nested_groups():
    expected = Multiply(Add(x, Const(1)), Negate(y))
    assert parse_prefix("(* (+ x 1) (negate y))") == expected
    assert parse_postfix("((x 1 +) (y negate) *)") == expected
    assert parse_prefix("( *(+ x 1)(negate   y) )") == expected
    assert parse_prefix("(gauss 1 0 1 x)") == Gauss(Const(1), Const(0), Const(1), x)


def test_variadic_groups():
    assert parse_prefix("(mean)") == Mean()
    assert parse_postfix("(mean)") == Mean()
    assert parse_prefix("(mean)").evaluate(4, 5, 6) == 0
    assert parse_postfix("(var)").evaluate(4, 5, 6) == 0
    assert parse_prefix("(mean x y z 2)").evaluate(1, 2, 3) == 2


def test_leaves_at_top_level():
    assert parse_prefix("x") is Variable('x')
    assert parse_postfix("  2.5 ") == Const(2.5)
    assert parse_prefix("1e3").evaluate(0, 0, 0) == 1000


@pytest.mark.parametrize("text", PREFIX_CASES)
def test_prefix_round_trip(text):
    tree = parse_prefix(text)
    again = parse_prefix(tree.prefix())
    assert again == tree
    for point in GRID:
        np.testing.assert_equal(again.evaluate(*point), tree.evaluate(*point))


@pytest.mark.parametrize("text", PREFIX_CASES)
def test_postfix_round_trip(text):
    tree = parse_postfix(parse_prefix(text).postfix())
    again = parse_postfix(tree.postfix())
    assert again == tree
    for point in GRID:
        np.testing.assert_equal(again.evaluate(*point), tree.evaluate(*point))


def test_stack_and_bracketed_postfix_agree():
    pairs = [
        ("x y * z -", "((x y *) z -)"),
        ("x 2 + y negate *", "((x 2 +) (y negate) *)"),
        ("1 0.5 y x gauss", "(1 0.5 y x gauss)"),
        ("x y / 3 +", "((x y /) 3 +)"),
    ]
    for tokens, bracketed in pairs:
        stack_tree = parse(tokens)
        bracket_tree = parse_postfix(bracketed)
        for point in GRID:
            np.testing.assert_equal(stack_tree.evaluate(*point), bracket_tree.evaluate(*point))


def test_arity_mismatch_prefix():
    with pytest.raises(ArgumentsCountError) as info:
        parse_prefix("(+ x)")
    assert info.value.expected == 2
    assert info.value.found == 1
    assert info.value.position == 3
    assert "expected 2, found 1" in str(info.value)

    with pytest.raises(ArgumentsCountError) as info:
        parse_prefix("(negate x y)")
    assert (info.value.expected, info.value.found) == (1, 2)
    assert info.value.position == 8


def test_arity_mismatch_postfix():
    with pytest.raises(ArgumentsCountError) as info:
        parse_postfix("(x (x y z +) *)")
    assert info.value.expected == 2
    assert info.value.found == 3
    assert info.value.position == 4


def test_unknown_operation():
    with pytest.raises(OperationError) as info:
        parse_prefix("(foo x y)")
    assert info.value.token == 'foo'
    assert info.value.position == 2
    assert "foo" in str(info.value)
    assert "pos 2" in str(info.value)

    with pytest.raises(OperationError) as info:
        parse_postfix("(x y foo)")
    assert info.value.token == 'foo'
    assert info.value.position == 6


def test_operation_slot_holds_group():
    with pytest.raises(OperationError) as info:
        parse_prefix("((+ x y) 2)")
    assert info.value.token == "(+ x y)"
    assert info.value.position == 2


def test_empty_group():
    with pytest.raises(OperationError) as info:
        parse_prefix("()")
    assert info.value.position == 2
    with pytest.raises(OperationError):
        parse_postfix("( )")


def test_operation_token_outside_designated_slot():
    with pytest.raises(ArgumentsError) as info:
        parse_prefix("(+ x -)")
    assert info.value.token == '-'
    assert info.value.position == 6
    assert "Unexpected operation token" in str(info.value)

    with pytest.raises(ArgumentsError) as info:
        parse_postfix("(+ x 2)")
    assert info.value.token == '+'
    assert info.value.position == 2

    with pytest.raises(ArgumentsError) as info:
        parse_postfix("(x 2 + 3)")
    assert info.value.position == 6


def test_invalid_argument_inside_group():
    with pytest.raises(ArgumentsError) as info:
        parse_prefix("(+ x q)")
    assert info.value.token == 'q'
    assert info.value.position == 6
    assert "Invalid argument" in str(info.value)

    with pytest.raises(ArgumentsError) as info:
        parse_postfix("(x foo 2 +)")
    assert info.value.token == 'foo'
    assert info.value.position == 4


def test_invalid_top_level_token():
    with pytest.raises(TokenError) as info:
        parse_prefix("foo")
    assert info.value.position == 1
    assert info.value.token == 'foo'

    with pytest.raises(TokenError) as info:
        parse_postfix("  )")
    assert info.value.position == 3

    with pytest.raises(TokenError):
        parse_prefix("+")


def test_end_of_input():
    with pytest.raises(EndOfFileError) as info:
        parse_prefix("")
    assert info.value.position == 1

    with pytest.raises(EndOfFileError) as info:
        parse_prefix("(+ x")
    assert info.value.position == 5
    assert info.value.token is None

    with pytest.raises(EndOfFileError):
        parse_postfix("((x y +) 2")


def test_trailing_input():
    with pytest.raises(EndOfFileError) as info:
        parse_prefix("(+ x 2) y")
    assert info.value.token == 'y'
    assert info.value.position == 9

    with pytest.raises(EndOfFileError):
        parse_postfix("(x 2 +))")


def test_all_errors_are_parse_errors():
    for text in ["(+ x)", "(foo x y)", "(+ x q)", "foo", "(+ x", ""]:
        with pytest.raises(ParseError):
            parse_prefix(text)
        with pytest.raises(ValueError):
            parse_prefix(text)


def test_parser_instances():
    parser = BracketParser(ParseMode.POSTFIX)
    assert parser.parse("(x y *)").evaluate(2, 3, 0) == 6
    assert BracketParser('prefix').mode is ParseMode.PREFIX
    with pytest.raises(ValueError):
        BracketParser('infix')


def test_moderately_deep_nesting():
    depth = 100
    text = "(negate " * depth + "x" + ")" * depth
    node = parse_prefix(text)
    assert node.size() == depth + 1
    assert node.evaluate(3, 0, 0) == 3
    assert node.prefix() == text


def test_excessive_nesting_hits_recursion_limit():
    depth = 5000
    with pytest.raises(RecursionError):
        parse_prefix("(negate " * depth + "x" + ")" * depth)
