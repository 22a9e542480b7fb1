"""Tests for pydeduce.syntax: terms, sentences and their display texts."""

import pytest

from pydeduce.errors import TypeMismatch
from pydeduce.syntax import (
    FALSITY,
    PRIMITIVE_TERM,
    QUANTIFIER,
    TRUTH,
    BoundVariable,
    FreeVariable,
    Operator,
    Predicate,
    atomic,
    bound_variable_name,
    bound_variable_names,
    conj,
    connective,
    disj,
    for_all,
    free_variable_name,
    free_variable_names,
    iff,
    implies,
    neg,
    operator_term,
    predicate_sentence,
    primitive_term,
    quantifier,
    there_exists,
    to_term,
)


class TestConnectiveTexts:
    def test_atomic(self):
        a = atomic("A")
        assert a.short_text == "A"
        assert a.long_text == "A"
        assert str(a) == "A"

    def test_binary_connectives(self):
        a, b = atomic("A"), atomic("B")
        assert conj(a, b).short_text == "A AND B"
        assert conj(a, b).long_text == "(A AND B)"
        assert disj(a, b).short_text == "A OR B"
        assert implies(a, b).short_text == "A IMPLIES B"
        assert iff(a, b).short_text == "A IFF B"

    def test_nested_operands_are_parenthesized(self):
        a, b, c = atomic("A"), atomic("B"), atomic("C")
        assert implies(conj(a, b), c).short_text == "(A AND B) IMPLIES C"
        assert conj(a, implies(b, c)).long_text == "(A AND (B IMPLIES C))"

    def test_negation(self):
        a, b = atomic("A"), atomic("B")
        assert neg(a).short_text == "NOT A"
        assert neg(a).long_text == "(NOT A)"
        assert neg(conj(a, b)).short_text == "NOT (A AND B)"
        assert neg(neg(a)).short_text == "NOT (NOT A)"

    def test_constants(self):
        assert TRUTH.short_text == "TRUE"
        assert FALSITY.long_text == "FALSE"

    def test_arity_checked(self):
        with pytest.raises(ValueError):
            connective("AND", [atomic("A")])
        with pytest.raises(ValueError):
            connective("NOT", [])
        with pytest.raises(ValueError):
            connective("TRUE", [atomic("A")])
        with pytest.raises(ValueError):
            connective("XOR", [atomic("A"), atomic("B")])

    def test_empty_atom_name(self):
        with pytest.raises(ValueError):
            atomic("")

    def test_structural_equality(self):
        assert conj(atomic("A"), atomic("B")) == conj(atomic("A"), atomic("B"))
        assert conj(atomic("A"), atomic("B")) != conj(atomic("B"), atomic("A"))


class TestTerms:
    def test_variables(self, x, big_x):
        assert to_term(x).short_text == "x"
        assert to_term(big_x).type == "bound variable"
        assert to_term(x).variable == x

    def test_primitive_term(self):
        t = to_term("a")
        assert t.type == PRIMITIVE_TERM
        assert t == primitive_term("a")

    def test_to_term_rejects_other_objects(self):
        with pytest.raises(TypeMismatch):
            to_term(3)

    def test_operator_function_style(self, x):
        f = Operator("f", 2)
        assert operator_term(f, [x, "a"]).short_text == "f(x, a)"

    def test_operator_addition_style(self, x, y):
        plus = Operator("+", 2, addition_style=True)
        t = operator_term(plus, [x, y])
        assert t.short_text == "x + y"
        assert t.long_text == "(x + y)"
        nested = operator_term(plus, [t, "1"])
        assert nested.short_text == "(x + y) + 1"

    def test_nullary_operator(self):
        assert operator_term(Operator("zero", 0), []).short_text == "zero"

    def test_operator_validation(self, x):
        with pytest.raises(ValueError):
            Operator("+", 1, addition_style=True)
        with pytest.raises(ValueError):
            Operator("f", -1)
        with pytest.raises(ValueError):
            operator_term(Operator("f", 1), [x, x])


class TestPredicates:
    def test_function_style(self, p, x):
        assert predicate_sentence(p, [x]).short_text == "P(x)"

    def test_relation_style(self, x, y):
        eq = Predicate("=", 2, relation_style=True)
        s = predicate_sentence(eq, [x, y])
        assert s.short_text == "x = y"
        assert s.long_text == "(x = y)"
        assert conj(s, atomic("A")).short_text == "(x = y) AND A"

    def test_predicate_validation(self, p, x):
        with pytest.raises(ValueError):
            predicate_sentence(p, [x, x])
        with pytest.raises(ValueError):
            Predicate("<", 3, relation_style=True)


class TestQuantifiers:
    def test_for_all(self, p, big_x):
        s = for_all(big_x, predicate_sentence(p, [big_x]))
        assert s.type == QUANTIFIER
        assert s.short_text == "FOR ALL X: P(X)"
        assert s.long_text == "(FOR ALL X: P(X))"
        assert s.body == predicate_sentence(p, [big_x])

    def test_there_exists(self, p, big_x):
        s = there_exists(big_x, predicate_sentence(p, [big_x]))
        assert s.short_text == "THERE EXISTS X: P(X)"

    def test_body_uses_long_text(self, p, big_x):
        body = conj(predicate_sentence(p, [big_x]), atomic("A"))
        assert for_all(big_x, body).short_text == "FOR ALL X: (P(X) AND A)"

    def test_quantifier_needs_bound_variable(self, p, x):
        with pytest.raises(TypeMismatch):
            for_all(x, predicate_sentence(p, [x]))

    def test_unknown_quantifier(self, p, big_x):
        with pytest.raises(ValueError):
            quantifier("for most", big_x, predicate_sentence(p, [big_x]))

    def test_body_of_non_quantifier(self):
        with pytest.raises(AttributeError):
            atomic("A").body


class TestVariableNames:
    def test_free_variable_names_cycle(self):
        assert [free_variable_name(i) for i in range(7)] == ["x", "y", "z", "x'", "y'", "z'", "x''"]

    def test_bound_variable_names_cycle(self):
        assert [bound_variable_name(i) for i in range(4)] == ["X", "Y", "Z", "X'"]

    def test_collect_names(self, q, x, big_x, big_y):
        s = for_all(big_x, conj(predicate_sentence(q, [big_x, x]), for_all(big_y, predicate_sentence(q, [big_y, big_x]))))
        assert bound_variable_names(s) == ["X", "Y"]
        assert free_variable_names(s) == ["x"]

    def test_free_and_bound_namespaces_are_disjoint(self):
        assert FreeVariable("x") != BoundVariable("x")
