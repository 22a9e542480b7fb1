"""Substitution: instantiating templates and renaming variables.

``subs`` rebuilds a law's template context from the bindings the matcher
collected. ``free_to_bound`` and ``bound_to_term`` are the two leaf
rewrites used by the quantifier rules.

The leaf rewrites do not rename binders to dodge capture. Each one has a
freshness precondition, checked on entry, that makes capture impossible:

    free_to_bound(s, x, X)  X does not occur anywhere in s
    bound_to_term(s, X, t)  no bound variable of t is quantified in s,
                            and s does not requantify X

Callers establish the precondition first; a violation raises
``UnsupportedConstruct``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from pydeduce.context import (
    ENVIRONMENT,
    FORMULA,
    SENTENCE_IN_ENVIRONMENT,
    TERM_CONTEXT,
    Context,
    environment_context,
    formula_context,
    sentence_context,
    term_context,
)
from pydeduce.environment import (
    ASSUMING,
    LETTING,
    Assumption,
    Environment,
    assuming_frame,
    letting_frame,
    setting_frame,
)
from pydeduce.errors import UnsupportedConstruct
from pydeduce.syntax import (
    ATOMIC,
    BOUND_VARIABLE,
    CONNECTIVE,
    FREE_VARIABLE,
    OPERATOR_TERM,
    PREDICATE,
    PRIMITIVE,
    QUANTIFIER,
    BoundVariable,
    FreeVariable,
    Sentence,
    Term,
    bound_variable_names,
    connective,
    operator_term,
    predicate_sentence,
    quantifier,
    variable_term,
)

logger = logging.getLogger(__name__)

# Placeholder namespaces
SENTENCE_PLACEHOLDER = "sentence"
FREE_PLACEHOLDER = "free variable"
BOUND_PLACEHOLDER = "bound variable"


@dataclass
class Bindings:
    """Placeholder bindings collected during one match attempt.

    Attributes:
        env: The ambient environment prefix shared by the justifications.
        values: Bound values keyed by (namespace, placeholder name). A
            missing key means the placeholder is still unbound.
    """

    env: Environment = ()
    values: dict[tuple[str, str], object] = field(default_factory=dict)

    def get(self, namespace: str, name: str) -> object | None:
        return self.values.get((namespace, name))

    def bind(self, namespace: str, name: str, value: object) -> bool:
        """Bind a placeholder, or check it agrees with its earlier binding.

        Values are compared structurally, so ``P(x)`` with a free ``x``
        never agrees with ``P(x)`` over a primitive term ``x``. Atomic
        sentences agree when their names do. Returns False on disagreement.
        """
        key = (namespace, name)
        if key not in self.values:
            self.values[key] = value
            return True
        bound = self.values[key]
        if (
            namespace == SENTENCE_PLACEHOLDER
            and getattr(bound, "subtype", None) == ATOMIC
            and getattr(value, "subtype", None) == ATOMIC
        ):
            return bound.short_text == value.short_text  # type: ignore[attr-defined]
        return bound == value

    def resolve(self, namespace: str, name: str) -> object:
        """The value bound to a placeholder; unbound placeholders are unsupported."""
        key = (namespace, name)
        if key not in self.values:
            raise UnsupportedConstruct(
                f"Placeholder {name!r} ({namespace}) is not bound by any given"
            )
        return self.values[key]

    def as_dict(self) -> dict[str, str]:
        """Placeholder names mapped to the text of their values."""
        return {name: str(value) for (_, name), value in self.values.items()}


# ----------------------------------------------------------------------
# Template instantiation
# ----------------------------------------------------------------------


def subs_term(template: Term, bindings: Bindings) -> Term:
    if template.type == FREE_VARIABLE:
        return variable_term(bindings.resolve(FREE_PLACEHOLDER, template.variable.name))
    if template.type == BOUND_VARIABLE:
        return variable_term(bindings.resolve(BOUND_PLACEHOLDER, template.variable.name))
    if template.type == OPERATOR_TERM:
        raise UnsupportedConstruct(f"Operator templates are not supported: {template}")
    return template


def subs_sentence(template: Sentence, bindings: Bindings) -> Sentence:
    if template.type == PRIMITIVE:
        if template.subtype == ATOMIC:
            return bindings.resolve(SENTENCE_PLACEHOLDER, template.name)
        raise UnsupportedConstruct(f"Predicate templates are not supported: {template}")

    if template.type == QUANTIFIER:
        variable = bindings.resolve(BOUND_PLACEHOLDER, template.variable.name)
        return quantifier(template.subtype, variable, subs_sentence(template.body, bindings))

    return connective(template.subtype, [subs_sentence(arg, bindings) for arg in template.args])


def subs_assumption(template: Assumption, bindings: Bindings) -> Assumption:
    if template.type == ASSUMING:
        return assuming_frame(subs_sentence(template.sentence, bindings))
    variable = bindings.resolve(FREE_PLACEHOLDER, template.variable.name)
    if template.type == LETTING:
        return letting_frame(variable)
    return setting_frame(variable, subs_sentence(template.sentence, bindings))


def subs_environment(frames: Environment, bindings: Bindings) -> Environment:
    """The ambient prefix followed by the instantiated template frames."""
    return bindings.env + tuple(subs_assumption(a, bindings) for a in frames)


def subs(template: Context, bindings: Bindings) -> Context:
    """Instantiate a template context with previously matched bindings."""
    if template.type == FORMULA:
        result = formula_context(subs_sentence(template.sentence, bindings))
    elif template.type == ENVIRONMENT:
        result = environment_context(subs_environment(template.environment, bindings))
    elif template.type == SENTENCE_IN_ENVIRONMENT:
        result = sentence_context(
            subs_sentence(template.sentence, bindings),
            subs_environment(template.environment, bindings),
        )
    elif template.type == TERM_CONTEXT:
        result = term_context(subs_term(template.term, bindings))
    else:
        raise UnsupportedConstruct(f"Template type not recognised: {template.type!r}")
    logger.debug("Instantiated %s as %s", template.name(), result.name())
    return result


# ----------------------------------------------------------------------
# Leaf rewrites
# ----------------------------------------------------------------------


def _rewrite_leaves(node: Sentence | Term, leaf: Callable[[Term], Term]) -> Sentence | Term:
    """Rebuild *node* isomorphically, passing every variable term through *leaf*."""
    if isinstance(node, Term):
        if node.type in (FREE_VARIABLE, BOUND_VARIABLE):
            return leaf(node)
        if node.type == OPERATOR_TERM:
            return operator_term(node.operator, [_rewrite_leaves(a, leaf) for a in node.args])
        return node

    if node.type == PRIMITIVE:
        if node.subtype == PREDICATE:
            return predicate_sentence(node.predicate, [_rewrite_leaves(a, leaf) for a in node.args])
        return node
    if node.type == QUANTIFIER:
        return quantifier(node.subtype, node.variable, _rewrite_leaves(node.body, leaf))
    return connective(node.subtype, [_rewrite_leaves(a, leaf) for a in node.args])


def quantified_names(node: Sentence) -> list[str]:
    """Names of the bound variables some quantifier in *node* binds."""
    names: list[str] = []
    if node.type == QUANTIFIER:
        names.append(node.variable.name)
        names.extend(quantified_names(node.body))
    elif node.type == CONNECTIVE:
        for arg in node.args:
            names.extend(quantified_names(arg))
    return names


def free_to_bound(statement: Sentence, free: FreeVariable, bound: BoundVariable) -> Sentence:
    """Replace every occurrence of *free* in *statement* with *bound*.

    Precondition: *bound* does not occur in *statement*.
    """
    if bound.name in bound_variable_names(statement):
        raise UnsupportedConstruct(
            f"Cannot rename {free} to {bound}: {bound} already occurs in {statement}"
        )
    replacement = variable_term(bound)
    return _rewrite_leaves(
        statement, lambda t: replacement if t.variable == free else t
    )


def bound_to_term(statement: Sentence, bound: BoundVariable, term: Term) -> Sentence:
    """Replace every occurrence of *bound* in *statement* with *term*.

    Precondition: no bound variable of *term* is quantified in
    *statement*, and *statement* does not requantify *bound*.
    """
    quantified = quantified_names(statement)
    if bound.name in quantified:
        raise UnsupportedConstruct(f"{bound} is quantified again inside {statement}")
    captured = [n for n in bound_variable_names(term) if n in quantified]
    if captured:
        raise UnsupportedConstruct(
            f"Substituting {term} for {bound} would capture {', '.join(captured)}"
        )
    return _rewrite_leaves(statement, lambda t: term if t.variable == bound else t)
