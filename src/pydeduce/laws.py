"""Laws and the engine state that owns them.

A law is an inference rule template: a list of given contexts and a
conclusion context, whose atomic sentences and variables act as
placeholders. Laws are numbered in creation order; the number doubles as
a clock for circularity checks, since a proof of an exercise may not
rely on laws stated at or after the exercise itself.

``EngineState`` gathers what would otherwise be process-wide globals:
the interning table for primitives, the law counter, the list of
unlocked laws, and the optional persistent store.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pydeduce.context import (
    ENVIRONMENT_TYPES,
    FORMULA,
    SENTENCE_TYPES,
    TERM_CONTEXT,
    Context,
    deduction_string,
    root_environment_context,
    to_context,
)
from pydeduce.environment import ASSUMING, LETTING, SETTING
from pydeduce.store import KeyValueStore
from pydeduce.syntax import (
    BOUND_VARIABLE,
    FREE_VARIABLE,
    OPERATOR_TERM,
    PREDICATE,
    PRIMITIVE,
    PRIMITIVE_TERM,
    QUANTIFIER,
    BoundVariable,
    FreeVariable,
    Sentence,
    Term,
    atomic,
)

logger = logging.getLogger(__name__)

# Laws matched by variable renaming instead of structural matching
UNIVERSAL_INTRODUCTION = "universal introduction"
UNIVERSAL_INTRODUCTION_AUTO = "universal introduction (automatic)"
UNIVERSAL_SPECIFICATION = "universal specification"

SPECIAL_LAWS = (UNIVERSAL_INTRODUCTION, UNIVERSAL_INTRODUCTION_AUTO, UNIVERSAL_SPECIFICATION)


@dataclass(eq=False)
class Law:
    """A named inference rule.

    Attributes:
        name: Display name, e.g. ``Modus ponens``.
        givens: Templates the justifications must match.
        conclusion: Template of the deduced context.
        index: Creation order, used to detect circularity.
        special: One of SPECIAL_LAWS, or None for structural matching.
        unlocked: Whether the law is available for deductions.
        clone: The same rule lifted into an arbitrary ambient environment,
            when the law needs one (see ``derive_ambient_clone``).
    """

    name: str
    givens: tuple[Context, ...]
    conclusion: Context
    index: int
    special: str | None = None
    unlocked: bool = False
    clone: Law | None = None

    @property
    def string(self) -> str:
        """The rule as a sentence, e.g. ``Given A, A IMPLIES B: deduce B.``"""
        return deduction_string("Given", self.givens, self.conclusion)

    @property
    def desc(self) -> str:
        return f"{self.name}: {self.string}"

    def __repr__(self) -> str:
        return f"Law({self.name!r}, index={self.index}, unlocked={self.unlocked})"


def all_formulas(givens: Sequence[Context]) -> bool:
    """True if no given carries an environment."""
    return all(g.type in (FORMULA, TERM_CONTEXT) for g in givens)


def is_circular(law: Law, exercise_law: Law | None) -> bool:
    """True if *law* was stated at or after *exercise_law*."""
    return exercise_law is not None and law.index >= exercise_law.index


class EngineState:
    """Mutable state of one engine session.

    Parameters:
        store: Optional key-value store remembering unlocked laws across
            sessions. Without one, nothing persists.
    """

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self.store = store
        self.unlocked: list[Law] = []
        self._primitives: dict[str, object] = {}
        self._law_count = 0

    # --- Interning table ---

    def intern(self, name: str, node: object) -> object:
        """Register *node* under *name* unless the name is taken; return the canonical node."""
        if name not in self._primitives:
            self._primitives[name] = node
        return self._primitives[name]

    def lookup(self, name: str) -> object:
        """The canonical node registered under *name*."""
        return self._primitives[name]

    def atom(self, name: str) -> Sentence:
        return self.intern(name, atomic(name))  # type: ignore[return-value]

    def free_variable(self, name: str) -> FreeVariable:
        return self.intern(name, FreeVariable(name))  # type: ignore[return-value]

    def bound_variable(self, name: str) -> BoundVariable:
        return self.intern(name, BoundVariable(name))  # type: ignore[return-value]

    @property
    def primitives(self) -> dict[str, object]:
        """The interning table (read-only view)."""
        return dict(self._primitives)

    # --- Laws ---

    def next_law_index(self) -> int:
        self._law_count += 1
        return self._law_count

    def define_law(
        self,
        name: str,
        givens: Sequence[object],
        conclusion: object,
        *,
        special: str | None = None,
    ) -> Law:
        """Create a law, derive its ambient clone, and restore its unlock state.

        Givens and conclusion may be contexts or anything ``to_context``
        accepts; a bare sentence stands for that sentence in the root
        environment.
        """
        if special is not None and special not in SPECIAL_LAWS:
            raise ValueError(f"Unknown special law kind: {special!r}")
        law = Law(
            name=name,
            givens=tuple(to_context(g) for g in givens),
            conclusion=to_context(conclusion),
            index=self.next_law_index(),
            special=special,
        )
        logger.debug("Defined law %d: %s", law.index, law.desc)

        law.clone = derive_ambient_clone(law, self)

        if self.store is not None:
            text = self.store.get(f"law {name}")
            if text is not None:
                self.unlock(law, text)
        return law

    def unlock(self, law: Law, text: str = "UNLOCKED") -> bool:
        """Make *law* (and its clone) available. Returns False if it already was."""
        if law.unlocked:
            return False
        law.unlocked = True
        self.unlocked.append(law)
        logger.info("%s %s", text, law.desc)
        if self.store is not None:
            self.store.set(f"law {law.name}", text)
        if law.clone is not None:
            self.unlock(law.clone, text)
        return True


def derive_ambient_clone(law: Law, state: EngineState) -> Law | None:
    """Lift a root-only rule so it can also fire inside nested scopes.

    A law whose givens are all formulas or terms, but whose conclusion
    lives in an environment, would only ever conclude into the root
    environment. Its clone takes one extra given, an environment, whose
    frames become the ambient scope of the conclusion.
    """
    if not all_formulas(law.givens) or law.conclusion.type not in ENVIRONMENT_TYPES:
        return None
    clone = Law(
        name=law.name,
        givens=law.givens + (root_environment_context(),),
        conclusion=law.conclusion,
        index=state.next_law_index(),
        special=law.special,
    )
    logger.debug("Derived ambient clone %d of %s", clone.index, law.name)
    return clone


# ----------------------------------------------------------------------
# Primitive listing
# ----------------------------------------------------------------------


class _Collector:
    def __init__(
        self,
        state: EngineState,
        *,
        sentences: bool,
        free_vars: bool,
        bound_vars: bool,
        prim_terms: bool,
    ) -> None:
        self.state = state
        self.sentences = sentences
        self.free_vars = free_vars
        self.bound_vars = bound_vars
        self.prim_terms = prim_terms
        self.names: list[str] = []

    def push(self, name: str, node: object) -> None:
        if name not in self.names:
            self.names.append(name)
            self.state.intern(name, node)

    def context(self, ctx: Context) -> None:
        if ctx.type in SENTENCE_TYPES:
            self.sentence(ctx.sentence)
        if ctx.type in ENVIRONMENT_TYPES:
            for assumption in ctx.environment:
                if assumption.type in (ASSUMING, SETTING):
                    self.sentence(assumption.sentence)
                if assumption.type in (LETTING, SETTING) and self.free_vars:
                    self.push(assumption.variable.name, assumption.variable)
        if ctx.type == TERM_CONTEXT:
            self.term(ctx.term)

    def sentence(self, s: Sentence) -> None:
        if s.type == PRIMITIVE:
            if self.sentences:
                self.push(s.short_text, s)
            if s.subtype == PREDICATE:
                for arg in s.args:
                    self.term(arg)
            return
        if s.type == QUANTIFIER:
            if self.bound_vars:
                self.push(s.variable.name, s.variable)
            self.sentence(s.body)
            return
        for arg in s.args:
            self.sentence(arg)

    def term(self, t: Term) -> None:
        if t.type == PRIMITIVE_TERM:
            if self.prim_terms:
                self.push(t.short_text, t)
        elif t.type == OPERATOR_TERM:
            for arg in t.args:
                self.term(arg)
        elif t.type == FREE_VARIABLE:
            if self.free_vars:
                self.push(t.variable.name, t.variable)
        elif t.type == BOUND_VARIABLE:
            if self.bound_vars:
                self.push(t.variable.name, t.variable)


def list_primitives(
    law: Law,
    state: EngineState,
    *,
    sentences: bool = True,
    free_vars: bool = True,
    bound_vars: bool = True,
    prim_terms: bool = True,
) -> list[str]:
    """Names of the primitives occurring in *law*, givens first, without repeats.

    Each primitive found is also registered in the interning table.
    """
    collector = _Collector(
        state,
        sentences=sentences,
        free_vars=free_vars,
        bound_vars=bound_vars,
        prim_terms=prim_terms,
    )
    for given in law.givens:
        collector.context(given)
    # Some conclusions introduce primitives of their own, e.g. automatic
    # universal introduction picks its bound variable itself.
    collector.context(law.conclusion)
    return collector.names
