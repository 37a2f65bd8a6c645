import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from expression_toolkit import (
    Expression, SymPyVerifier,
    Const, Variable, Add, Subtract, Multiply, Divide, Negate, Abs, Iff, Mean, Var, Gauss,
    parse_prefix
)
from expression_toolkit.expression_tree.core.derivatives import DIFF_RULES
from expression_toolkit.expression_tree.core.operators import OPERATOR_SPECS

x, y, z = Variable('x'), Variable('y'), Variable('z')

SAMPLE_POINTS = [
    (0.5, -1.25, 2.0),
    (1.7, 0.3, -0.8),
    (-2.2, 1.1, 0.9),
]


def assert_gradient_matches(node, point):
    """Symbolic partial derivatives must agree with forward differences."""
    expr = Expression(node)
    gradient = expr.numeric_gradient(point)
    for i, name in enumerate('xyz'):
        symbolic = expr.diff(name).evaluate(*point)
        np.testing.assert_allclose(symbolic, gradient[i], rtol=1e-4, atol=1e-5,
                                   err_msg=f"d/d{name} of {node.prefix()} at {point}")


@pytest.mark.parametrize("point", SAMPLE_POINTS)
def test_sum_and_difference_rules(point):
    assert_gradient_matches(Add(Multiply(x, x), y), point)
    assert_gradient_matches(Subtract(Multiply(x, y), Multiply(z, Const(3))), point)


@pytest.mark.parametrize("point", SAMPLE_POINTS)
def test_product_rule(point):
    assert_gradient_matches(Multiply(Add(x, y), Subtract(z, x)), point)
    assert_gradient_matches(Multiply(Multiply(x, y), z), point)


@pytest.mark.parametrize("point", SAMPLE_POINTS)
def test_quotient_and_negate_rules(point):
    assert_gradient_matches(Divide(Negate(x), Add(Multiply(y, y), Const(1))), point)


@pytest.mark.parametrize("point", SAMPLE_POINTS)
def test_mean_and_var_rules(point):
    assert_gradient_matches(Mean(x, Multiply(y, z), Const(4)), point)
    assert_gradient_matches(Var(x, y, Multiply(x, z)), point)
    assert_gradient_matches(Var(x), point)


@pytest.mark.parametrize("point", SAMPLE_POINTS)
def test_gauss_rule(point):
    assert_gradient_matches(Gauss(Const(2), Const(0.5), Const(1.5), x), point)
    assert_gradient_matches(Gauss(Multiply(x, x), y, Add(Multiply(z, z), Const(1)), x), point)


@pytest.mark.parametrize("point", SAMPLE_POINTS)
def test_abs_and_iff_rules(point):
    assert_gradient_matches(Abs(Subtract(x, Multiply(y, Const(3)))), point)
    assert_gradient_matches(Iff(Subtract(x, Const(10)), Multiply(y, y), Multiply(x, z)), point)


def test_empty_variadic_derivatives_are_zero():
    assert Mean().diff('x').evaluate(1, 2, 3) == 0
    assert Var().diff('x').evaluate(1, 2, 3) == 0


def test_derivative_shapes():
    assert Negate(x).diff('x').prefix() == "(negate 1)"
    assert Mean(x, y).diff('y').prefix() == "(mean 0 1)"
    gauss = Gauss(x, y, z, x).diff('x')
    assert gauss.prefix().startswith("(* (gauss 1 y z x) (+ 1 (* x")


def test_derivatives_agree_with_sympy():
    verifier = SymPyVerifier()
    nodes = [
        Multiply(Add(x, y), Subtract(z, x)),
        Divide(x, Add(y, Const(2))),
        Var(x, y, Multiply(x, z)),
        Gauss(Multiply(x, x), y, z, x),
    ]
    for node in nodes:
        for name in 'xyz':
            result = verifier.check_derivative(node, name)
            assert result['matches'], f"d/d{name} of {node.prefix()}: {result}"


def test_parsed_tree_derivative():
    node = parse_prefix("(+ (* x x) (negate (* 3 y)))")
    assert node.diff('x').evaluate(2, 5, 0) == 4
    assert node.diff('y').evaluate(2, 5, 0) == -3
    assert node.diff('z').evaluate(2, 5, 0) == 0


def test_numeric_gradient_rejects_bad_point():
    with pytest.raises(ValueError):
        Expression(x).numeric_gradient((1.0, 2.0))


def test_every_operation_has_a_rule():
    assert set(DIFF_RULES) == set(OPERATOR_SPECS)
