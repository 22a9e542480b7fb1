"""Tests for pydeduce.legality: scoping rules for contexts."""

from pydeduce.context import environment_context, formula_context, sentence_context, term_context
from pydeduce.environment import assuming_frame, letting_frame, setting_frame
from pydeduce.legality import is_legal, is_legal_sentence
from pydeduce.syntax import conj, for_all, predicate_sentence


class TestFreeVariables:
    def test_introduced_variable_is_legal(self, p, x):
        assert is_legal(sentence_context(predicate_sentence(p, [x]), [letting_frame(x)]))

    def test_unintroduced_variable_is_illegal(self, p, x):
        assert not is_legal(sentence_context(predicate_sentence(p, [x])))

    def test_formulas_may_mention_any_free_variable(self, p, x):
        assert is_legal(formula_context(predicate_sentence(p, [x])))

    def test_variable_introduced_twice(self, x):
        assert not is_legal(environment_context([letting_frame(x), letting_frame(x)]))

    def test_setting_frame_introduces_its_variable(self, p, x, rain):
        ctx = sentence_context(rain, [setting_frame(x, predicate_sentence(p, [x]))])
        assert is_legal(ctx)

    def test_assumption_before_introduction(self, p, x):
        env = [assuming_frame(predicate_sentence(p, [x])), letting_frame(x)]
        assert not is_legal(environment_context(env))

    def test_assumption_after_introduction(self, p, x):
        env = [letting_frame(x), assuming_frame(predicate_sentence(p, [x]))]
        assert is_legal(environment_context(env))


class TestBoundVariables:
    def test_quantified_variable_is_legal(self, p, big_x):
        assert is_legal(sentence_context(for_all(big_x, predicate_sentence(p, [big_x]))))

    def test_dangling_bound_variable(self, p, big_x):
        assert not is_legal(sentence_context(predicate_sentence(p, [big_x])))

    def test_formulas_tolerate_dangling_bound_variables(self, p, big_x):
        assert is_legal(formula_context(predicate_sentence(p, [big_x])))

    def test_rebinding_is_illegal(self, p, big_x):
        inner = for_all(big_x, predicate_sentence(p, [big_x]))
        assert not is_legal(sentence_context(for_all(big_x, inner)))
        assert not is_legal(formula_context(for_all(big_x, inner)))

    def test_sibling_quantifiers_may_share_a_name(self, p, big_x):
        s = for_all(big_x, predicate_sentence(p, [big_x]))
        assert is_legal(sentence_context(conj(s, s)))

    def test_nested_distinct_quantifiers(self, q, big_x, big_y):
        s = for_all(big_x, for_all(big_y, predicate_sentence(q, [big_x, big_y])))
        assert is_legal(sentence_context(s))


class TestMisc:
    def test_terms_are_always_legal(self, x, big_x):
        assert is_legal(term_context(x))
        assert is_legal(term_context(big_x))

    def test_is_legal_sentence_scope_argument(self, p, x):
        s = predicate_sentence(p, [x])
        assert is_legal_sentence(s, frozenset({"x"}), frozenset())
        assert not is_legal_sentence(s, frozenset(), frozenset())
        assert is_legal_sentence(s, None, frozenset())
