"""Contexts: the things a user can select and a law can conclude.

A Context is one of four things:

    formula                  a sentence with no environment: ``formula "A"``
    term context             a term: ``term "x"``
    environment              a scope: ``[assuming A]`` or ``[root environment]``
    sentence in environment  a sentence proven inside a scope: ``B [assuming A]``

Laws are written as Context templates, so the same type covers both the
concrete facts selected by a user and the patterns they are matched
against.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pydeduce.environment import (
    Assumption,
    Environment,
    assuming_frame,
    environment_text,
    letting_frame,
)
from pydeduce.errors import TypeMismatch
from pydeduce.syntax import BoundVariable, FreeVariable, Sentence, Term, atomic, to_term

# Context type constants
FORMULA = "formula"
TERM_CONTEXT = "term context"
ENVIRONMENT = "environment"
SENTENCE_IN_ENVIRONMENT = "sentence in environment"

# Types that carry an environment, and types that carry a sentence
ENVIRONMENT_TYPES = (ENVIRONMENT, SENTENCE_IN_ENVIRONMENT)
SENTENCE_TYPES = (FORMULA, SENTENCE_IN_ENVIRONMENT)


@dataclass(frozen=True, slots=True)
class Context:
    """Immutable tagged union over the four context kinds.

    Attributes:
        type: One of FORMULA, TERM_CONTEXT, ENVIRONMENT, SENTENCE_IN_ENVIRONMENT.
        sentence: The sentence (FORMULA and SENTENCE_IN_ENVIRONMENT).
        environment: The frames (ENVIRONMENT and SENTENCE_IN_ENVIRONMENT).
        term: The term (TERM_CONTEXT).
    """

    type: str
    sentence: Sentence | None = None
    environment: Environment = ()
    term: Term | None = None

    def name(self) -> str:
        """Canonical display name, also used to compare contexts."""
        if self.type == FORMULA:
            return f'formula "{self.sentence}"'
        if self.type == TERM_CONTEXT:
            return f'term "{self.term}"'
        if self.type == ENVIRONMENT:
            return f"[{environment_text(self.environment)}]"
        if not self.environment:
            return str(self.sentence)
        return f"{self.sentence} [{environment_text(self.environment)}]"

    def __str__(self) -> str:
        return self.name()


def formula_context(sentence: Sentence) -> Context:
    return Context(type=FORMULA, sentence=sentence)


def term_context(obj: object) -> Context:
    return Context(type=TERM_CONTEXT, term=to_term(obj))


def sentence_context(sentence: Sentence, environment: Sequence[Assumption] = ()) -> Context:
    return Context(type=SENTENCE_IN_ENVIRONMENT, sentence=sentence, environment=tuple(environment))


def environment_context(environment: Sequence[object]) -> Context:
    """An environment context; frames may be given as sentences or free variables."""
    return Context(type=ENVIRONMENT, environment=tuple(to_assumption(a) for a in environment))


def root_environment_context() -> Context:
    return environment_context(())


# ----------------------------------------------------------------------
# Coercions
# ----------------------------------------------------------------------


def to_assumption(obj: object) -> Assumption:
    """Coerce a sentence (assuming) or free variable (letting) to a frame."""
    if isinstance(obj, Assumption):
        return obj
    if isinstance(obj, Sentence):
        return assuming_frame(obj)
    if isinstance(obj, FreeVariable):
        return letting_frame(obj)
    raise TypeMismatch(f"Cannot convert {type(obj).__name__} to an assumption")


def to_context(obj: object) -> Context:
    """Coerce a sentence, term, variable, or law to a Context.

    A bare sentence becomes a sentence in the root environment, a free
    variable becomes the environment ``[letting x be arbitrary]``, and a
    law stands for its conclusion.
    """
    if isinstance(obj, Context):
        return obj
    if isinstance(obj, Sentence):
        return sentence_context(obj, ())
    if isinstance(obj, Term):
        return term_context(obj)
    if isinstance(obj, FreeVariable):
        return environment_context([letting_frame(obj)])
    if isinstance(obj, BoundVariable):
        return term_context(obj)

    from pydeduce.laws import Law

    if isinstance(obj, Law):
        return obj.conclusion
    raise TypeMismatch(f"Cannot convert {type(obj).__name__} to a context")


def to_sentence(obj: object) -> Sentence:
    """Coerce a name, context, frame, or law to the sentence it carries."""
    if isinstance(obj, Sentence):
        return obj
    if isinstance(obj, str):
        return atomic(obj)
    if isinstance(obj, (Context, Assumption)) and obj.sentence is not None:
        return obj.sentence

    from pydeduce.laws import Law

    if isinstance(obj, Law) and obj.conclusion.sentence is not None:
        return obj.conclusion.sentence
    raise TypeMismatch(f"Cannot convert {type(obj).__name__} to a sentence")


def assuming(context: object, assumption: object) -> Context:
    """Wrap a context in one more frame, placed outermost.

    ``assuming("A [assuming B]", C)`` gives ``A [assuming C, B]``.
    """
    ctx = to_context(context)
    if ctx.sentence is None:
        raise TypeMismatch(f"Cannot place {ctx.name()} under an assumption")
    return sentence_context(ctx.sentence, (to_assumption(assumption), *ctx.environment))


# ----------------------------------------------------------------------
# Deduction text
# ----------------------------------------------------------------------


def list_to_string(items: Sequence[object]) -> str:
    """Comma-join the context names of *items*."""
    return ", ".join(to_context(item).name() for item in items)


def deduction_string(prefix: str, items: Sequence[object], conclusion: Context) -> str:
    """Describe a deduction, e.g. ``From A, A IMPLIES B: deduce B.``"""
    verb = "form environment" if conclusion.type == ENVIRONMENT else "deduce"
    if not items:
        return f"{verb[0].upper()}{verb[1:]} {conclusion.name()}."
    return f"{prefix} {list_to_string(items)}: {verb} {conclusion.name()}."
