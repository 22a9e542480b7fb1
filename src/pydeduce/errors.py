"""Exceptions raised by the deduction engine.

Ordinary match failures are not exceptions: they are reported through
``MatchResult.matches``. The two classes below signal problems with the
law catalog or with the data handed to the engine.
"""

from __future__ import annotations


class UnsupportedConstruct(NotImplementedError):
    """A template uses a feature the matcher or substitution engine lacks.

    Raised for predicate or operator placeholders, for conclusion
    placeholders that no given binds, and when the freshness
    precondition of a quantifier rewrite does not hold.
    """


class TypeMismatch(TypeError):
    """An object cannot be coerced to a Context, Sentence, Term or Assumption."""
