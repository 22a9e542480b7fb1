"""The built-in catalog of natural-deduction laws.

Laws are stated with placeholder atoms ``A``, ``B``, ``C``, the free
variable ``x`` and the bound variable ``X``. A sentence given with no
environment stands for that sentence in whatever ambient environment the
justifications share, so ``Modus ponens`` fires at any depth.

None of the laws are unlocked here; exercises and sessions decide which
become available.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydeduce.context import (
    environment_context,
    formula_context,
    root_environment_context,
    sentence_context,
    term_context,
)
from pydeduce.environment import assuming_frame, letting_frame
from pydeduce.laws import (
    UNIVERSAL_INTRODUCTION,
    UNIVERSAL_INTRODUCTION_AUTO,
    UNIVERSAL_SPECIFICATION,
    EngineState,
    Law,
)
from pydeduce.syntax import (
    FALSITY,
    TRUTH,
    Predicate,
    conj,
    disj,
    for_all,
    iff,
    implies,
    neg,
    predicate_sentence,
)

logger = logging.getLogger(__name__)

MODUS_PONENS = "Modus ponens"
CONJUNCTION_INTRODUCTION = "Conjunction introduction"
CONJUNCTION_ELIMINATION_LEFT = "Conjunction elimination (left)"
CONJUNCTION_ELIMINATION_RIGHT = "Conjunction elimination (right)"
DISJUNCTION_INTRODUCTION_LEFT = "Disjunction introduction (left)"
DISJUNCTION_INTRODUCTION_RIGHT = "Disjunction introduction (right)"
CASE_ANALYSIS = "Case analysis"
BICONDITIONAL_INTRODUCTION = "Biconditional introduction"
BICONDITIONAL_ELIMINATION_LEFT = "Biconditional elimination (left)"
BICONDITIONAL_ELIMINATION_RIGHT = "Biconditional elimination (right)"
DOUBLE_NEGATION = "Double negation"
CONTRADICTION = "Contradiction"
EX_FALSO = "Ex falso"
PROOF_BY_CONTRADICTION = "Proof by contradiction"
DEDUCTION_THEOREM = "Deduction theorem"
ASSUMPTION = "Assumption"
PUSH_ASSUMPTION = "Push assumption"
LET_ARBITRARY = "Let arbitrary"
TRUTH_LAW = "Truth"
UNIVERSAL_INTRODUCTION_LAW = "Universal introduction"
UNIVERSAL_INTRODUCTION_AUTO_LAW = "Universal introduction (automatic)"
UNIVERSAL_SPECIFICATION_LAW = "Universal specification"


class Catalog:
    """Laws by name, in the order they were defined."""

    def __init__(self, laws: list[Law]) -> None:
        self._laws: dict[str, Law] = {}
        for law in laws:
            if law.name in self._laws:
                raise ValueError(f"Duplicate law name: {law.name!r}")
            self._laws[law.name] = law

    def __getitem__(self, name: str) -> Law:
        return self._laws[name]

    def __contains__(self, name: object) -> bool:
        return name in self._laws

    def __iter__(self) -> Iterator[Law]:
        return iter(self._laws.values())

    def __len__(self) -> int:
        return len(self._laws)

    @property
    def names(self) -> list[str]:
        return list(self._laws)


def build_catalog(state: EngineState) -> Catalog:
    """Define the standard laws in *state* and return them as a catalog."""
    a, b, c = state.atom("A"), state.atom("B"), state.atom("C")
    x = state.free_variable("x")
    big_x = state.bound_variable("X")
    p = Predicate("P", 1)
    define = state.define_law

    laws = [
        define(MODUS_PONENS, [a, implies(a, b)], b),
        define(CONJUNCTION_INTRODUCTION, [a, b], conj(a, b)),
        define(CONJUNCTION_ELIMINATION_LEFT, [conj(a, b)], a),
        define(CONJUNCTION_ELIMINATION_RIGHT, [conj(a, b)], b),
        define(DISJUNCTION_INTRODUCTION_LEFT, [a, formula_context(b)], disj(a, b)),
        define(DISJUNCTION_INTRODUCTION_RIGHT, [formula_context(a), b], disj(a, b)),
        define(
            CASE_ANALYSIS,
            [
                disj(a, b),
                sentence_context(c, [assuming_frame(a)]),
                sentence_context(c, [assuming_frame(b)]),
            ],
            c,
        ),
        define(BICONDITIONAL_INTRODUCTION, [implies(a, b), implies(b, a)], iff(a, b)),
        define(BICONDITIONAL_ELIMINATION_LEFT, [iff(a, b)], implies(a, b)),
        define(BICONDITIONAL_ELIMINATION_RIGHT, [iff(a, b)], implies(b, a)),
        define(DOUBLE_NEGATION, [neg(neg(a))], a),
        define(CONTRADICTION, [a, neg(a)], FALSITY),
        define(EX_FALSO, [FALSITY, formula_context(a)], a),
        define(
            PROOF_BY_CONTRADICTION,
            [sentence_context(FALSITY, [assuming_frame(a)])],
            neg(a),
        ),
        define(DEDUCTION_THEOREM, [sentence_context(b, [assuming_frame(a)])], implies(a, b)),
        define(ASSUMPTION, [formula_context(a)], sentence_context(a, [assuming_frame(a)])),
        define(PUSH_ASSUMPTION, [formula_context(a)], environment_context([assuming_frame(a)])),
        define(LET_ARBITRARY, [term_context(x)], environment_context([letting_frame(x)])),
        define(TRUTH_LAW, [], TRUTH),
        define(
            UNIVERSAL_INTRODUCTION_LAW,
            [sentence_context(predicate_sentence(p, [x]), [letting_frame(x)]), term_context(big_x)],
            for_all(big_x, predicate_sentence(p, [big_x])),
            special=UNIVERSAL_INTRODUCTION,
        ),
        define(
            UNIVERSAL_INTRODUCTION_AUTO_LAW,
            [
                sentence_context(predicate_sentence(p, [x]), [letting_frame(x)]),
                root_environment_context(),
            ],
            for_all(big_x, predicate_sentence(p, [big_x])),
            special=UNIVERSAL_INTRODUCTION_AUTO,
        ),
        define(
            UNIVERSAL_SPECIFICATION_LAW,
            [for_all(big_x, predicate_sentence(p, [big_x])), term_context(x)],
            predicate_sentence(p, [x]),
            special=UNIVERSAL_SPECIFICATION,
        ),
    ]
    logger.debug("Built catalog of %d laws", len(laws))
    return Catalog(laws)
