"""Scope legality of contexts.

A context is legal when:

* no environment introduces the same free variable twice;
* every free variable is introduced by an enclosing frame before use
  (bare formulas may mention any free variable);
* every bound variable sits under a quantifier for it (bare formulas
  tolerate dangling bound variables);
* no quantifier rebinds a bound variable already bound on the same path.

The matcher runs ``is_legal`` on every candidate conclusion and silently
drops the ones that fail.
"""

from __future__ import annotations

import logging

from pydeduce.context import FORMULA, SENTENCE_IN_ENVIRONMENT, TERM_CONTEXT, Context
from pydeduce.environment import ASSUMING, LETTING, SETTING
from pydeduce.syntax import (
    BOUND_VARIABLE,
    FREE_VARIABLE,
    QUANTIFIER,
    Sentence,
    Term,
)

logger = logging.getLogger(__name__)


def is_legal_sentence(
    node: Sentence | Term,
    free_variables: frozenset[str] | None,
    bound_variables: frozenset[str],
    *,
    allow_unbound: bool = False,
) -> bool:
    """Check *node* against the variables in scope.

    Parameters:
        free_variables: Names of the free variables in scope, or None to
            permit every free variable.
        bound_variables: Names bound by enclosing quantifiers.
        allow_unbound: Tolerate bound variables no quantifier binds.
    """
    if isinstance(node, Term):
        if node.type == FREE_VARIABLE:
            return free_variables is None or node.variable.name in free_variables
        if node.type == BOUND_VARIABLE:
            return allow_unbound or node.variable.name in bound_variables
        return all(
            is_legal_sentence(arg, free_variables, bound_variables, allow_unbound=allow_unbound)
            for arg in node.args
        )

    if node.type == QUANTIFIER:
        name = node.variable.name
        if name in bound_variables:
            logger.debug("Illegal: %s rebinds %s", node, name)
            return False
        bound_variables = bound_variables | {name}

    return all(
        is_legal_sentence(arg, free_variables, bound_variables, allow_unbound=allow_unbound)
        for arg in node.args
    )


def is_legal(context: Context) -> bool:
    """Return True if *context* respects the scoping rules."""
    if context.type == TERM_CONTEXT:
        return True

    if context.type == FORMULA:
        return is_legal_sentence(context.sentence, None, frozenset(), allow_unbound=True)

    free_variables: set[str] = set()
    for assumption in context.environment:
        if assumption.type in (LETTING, SETTING):
            name = assumption.variable.name
            if name in free_variables:
                logger.debug("Illegal: %s introduces %s twice", context.name(), name)
                return False
            free_variables.add(name)
        if assumption.type in (ASSUMING, SETTING):
            if not is_legal_sentence(assumption.sentence, frozenset(free_variables), frozenset()):
                logger.debug("Illegal: frame %r out of scope", assumption.name)
                return False

    if context.type == SENTENCE_IN_ENVIRONMENT:
        if not is_legal_sentence(context.sentence, frozenset(free_variables), frozenset()):
            logger.debug("Illegal: %s out of scope", context.name())
            return False

    return True
