"""pydeduce: rule matching for a natural-deduction proof trainer.

Propositional logic plus universal quantification, with proofs carried
out inside nested environments (assumptions and arbitrary variables).

Public API::

    from pydeduce import EngineState, Matcher, build_catalog, match_with_givens
    from pydeduce import ProofSession, define_exercise
    from pydeduce import atomic, implies, sentence_context, ...
"""

from pydeduce._version import __version__
from pydeduce.catalog import Catalog, build_catalog
from pydeduce.context import (
    Context,
    assuming,
    environment_context,
    formula_context,
    root_environment_context,
    sentence_context,
    term_context,
    to_context,
)
from pydeduce.environment import (
    Assumption,
    assuming_frame,
    environment_text,
    letting_frame,
    setting_frame,
)
from pydeduce.errors import TypeMismatch, UnsupportedConstruct
from pydeduce.laws import EngineState, Law, derive_ambient_clone, is_circular
from pydeduce.legality import is_legal
from pydeduce.matcher import Deduction, DeductionReport, Matcher, MatchResult, match_with_givens
from pydeduce.session import Exercise, ProofSession, define_exercise, require
from pydeduce.store import JsonFileStore, KeyValueStore, MemoryStore
from pydeduce.substitution import Bindings, bound_to_term, free_to_bound, subs
from pydeduce.syntax import (
    FALSITY,
    TRUTH,
    BoundVariable,
    FreeVariable,
    Operator,
    Predicate,
    Sentence,
    Term,
    atomic,
    conj,
    disj,
    for_all,
    iff,
    implies,
    neg,
    operator_term,
    predicate_sentence,
    there_exists,
)

__all__ = [
    "__version__",
    "Assumption",
    "Bindings",
    "BoundVariable",
    "Catalog",
    "Context",
    "Deduction",
    "DeductionReport",
    "EngineState",
    "Exercise",
    "FALSITY",
    "FreeVariable",
    "JsonFileStore",
    "KeyValueStore",
    "Law",
    "MatchResult",
    "Matcher",
    "MemoryStore",
    "Operator",
    "Predicate",
    "ProofSession",
    "Sentence",
    "TRUTH",
    "Term",
    "TypeMismatch",
    "UnsupportedConstruct",
    "assuming",
    "assuming_frame",
    "atomic",
    "bound_to_term",
    "build_catalog",
    "conj",
    "define_exercise",
    "derive_ambient_clone",
    "disj",
    "environment_context",
    "environment_text",
    "for_all",
    "formula_context",
    "free_to_bound",
    "iff",
    "implies",
    "is_circular",
    "is_legal",
    "letting_frame",
    "match_with_givens",
    "neg",
    "operator_term",
    "predicate_sentence",
    "require",
    "root_environment_context",
    "sentence_context",
    "setting_frame",
    "subs",
    "term_context",
    "there_exists",
    "to_context",
]
