"""Exercises and proof sessions.

An exercise asks for a proof of one law from its givens. A
``ProofSession`` holds the facts on the board for the active exercise:
the user selects facts, asks for the deductions they allow, and commits
one. Committing records a proof line, may solve the exercise, and may
unlock further laws and exercises.

Progress is written to the engine state's store, when there is one:

* solving an exercise unlocks its law (``law <name>`` = ``PROVED``) and
  marks it ``solved``;
* the shortest non-circular proof is kept under ``lines <name>`` and
  ``proof <name>``. Proofs that use a law stated at or after the exercise
  are circular and never replace a record.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from pydeduce.context import (
    ENVIRONMENT,
    ENVIRONMENT_TYPES,
    FORMULA,
    SENTENCE_IN_ENVIRONMENT,
    TERM_CONTEXT,
    Context,
    deduction_string,
    formula_context,
    term_context,
    to_sentence,
)
from pydeduce.environment import Environment, environment_text
from pydeduce.laws import EngineState, Law, is_circular, list_primitives
from pydeduce.matcher import Deduction, DeductionReport, Matcher
from pydeduce.syntax import (
    FALSITY,
    TRUTH,
    BoundVariable,
    FreeVariable,
    bound_variable_name,
    free_variable_name,
)

logger = logging.getLogger(__name__)

# Exercise status values
LOCKED = "locked"
AVAILABLE = "available"
SOLVED = "solved"
MATCHED = "matched"
BEATEN = "beaten"

TRUE_FALSE_KEY = "true false"


@dataclass(eq=False)
class Exercise:
    """A law the user is asked to prove.

    Attributes:
        name: Exercise name, e.g. ``Exercise 1.2``.
        law: The law proved; it is unlocked once the exercise is solved.
        best_length: Length of the shortest known non-circular proof
            (0 if unknown).
        notes: Text shown with the exercise.
        completion_msg: Text shown on first completion.
        new_laws: Laws unlocked when the exercise is set.
        new_exercises: Exercises made available when it is solved.
        reveal_true_false: Whether setting the exercise puts TRUE and FALSE
            among the formulas, for this and every later exercise.
        activated: Whether the exercise can be attempted.
        solved: Whether it has been solved.
        personal_best: Length of the shortest proof found so far.
    """

    name: str
    law: Law
    best_length: int = 0
    notes: str = ""
    completion_msg: str = ""
    new_laws: list[Law] = field(default_factory=list)
    new_exercises: list[Exercise] = field(default_factory=list)
    reveal_true_false: bool = False
    activated: bool = False
    solved: bool = False
    personal_best: int | None = None

    def unlocks(self, law: Law) -> None:
        """Make *law* available whenever this exercise is set."""
        self.new_laws.append(law)

    @property
    def status(self) -> str:
        if self.solved and self.personal_best is not None:
            if self.personal_best < self.best_length:
                return BEATEN
            if self.personal_best == self.best_length:
                return MATCHED
            return SOLVED
        if self.solved:
            return SOLVED
        return AVAILABLE if self.activated else LOCKED

    def __repr__(self) -> str:
        return f"Exercise({self.name!r}, status={self.status!r})"


def define_exercise(
    state: EngineState,
    name: str,
    givens: Sequence[object],
    conclusion: object,
    *,
    law_name: str | None = None,
    best_length: int = 0,
) -> Exercise:
    """Create an exercise and its law, restoring stored progress."""
    law = state.define_law(law_name or name, givens, conclusion)
    exercise = Exercise(name=name, law=law, best_length=best_length)
    if state.store is not None:
        status = state.store.get(name)
        if status in ("unlocked", "solved"):
            exercise.activated = True
        if status == "solved":
            exercise.solved = True
            lines = state.store.get(f"lines {name}")
            if lines is not None:
                exercise.personal_best = int(lines)
    return exercise


def activate_exercise(state: EngineState, exercise: Exercise) -> None:
    """Make *exercise* available, picking up any proof recorded earlier."""
    if exercise.activated:
        return
    exercise.activated = True
    logger.info("%s now available", exercise.name)
    if state.store is None:
        return
    if state.store.get(exercise.name) is None:
        state.store.set(exercise.name, "unlocked")
    lines = state.store.get(f"lines {exercise.name}")
    if lines is not None:
        exercise.personal_best = int(lines)
        exercise.solved = True


def require(state: EngineState, exercise: Exercise, prerequisite: Exercise) -> None:
    """Make *exercise* available once *prerequisite* is solved."""
    prerequisite.new_exercises.append(exercise)
    if prerequisite.solved:
        activate_exercise(state, exercise)


@dataclass
class _UndoPoint:
    facts: list[Context]
    environments: list[Environment]
    lines: int
    has_circularity: bool


class ProofSession:
    """The board of facts for one exercise at a time.

    Parameters:
        state: Engine state holding the laws and the store.
        exercises: All exercises, used to tell when every one is solved.

    Attributes:
        true_false_revealed: Whether TRUE and FALSE are offered as
            formulas. Restored from the store key ``true false``.
    """

    def __init__(self, state: EngineState, exercises: Sequence[Exercise] = ()) -> None:
        self.state = state
        self.matcher = Matcher(state)
        self.exercises: list[Exercise] = list(exercises)
        self.exercise: Exercise | None = None
        self.facts: list[Context] = []
        self.environments: list[Environment] = [()]
        self.proof: list[str] = []
        self.has_circularity = False
        self._undo: _UndoPoint | None = None
        store = state.store
        self.true_false_revealed = store is not None and store.get(TRUE_FALSE_KEY) == "unlocked"

    # --- Board ---

    def _add_environment(self, environment: Environment) -> None:
        known = {environment_text(e) for e in self.environments}
        for depth in range(1, len(environment) + 1):
            prefix = environment[:depth]
            if environment_text(prefix) not in known:
                self.environments.append(prefix)
                known.add(environment_text(prefix))

    def add_context(self, context: Context) -> None:
        """Put a context on the board (environments are created as needed)."""
        if context.type in ENVIRONMENT_TYPES:
            self._add_environment(context.environment)
        if context.type != ENVIRONMENT:
            self.facts.append(context)

    def add_formula(self, fact: object) -> Context:
        """Offer the sentence of *fact* as a formula.

        Raises ``TypeMismatch`` if *fact* carries no sentence.
        """
        context = formula_context(to_sentence(fact))
        self.add_context(context)
        return context

    @property
    def formulas(self) -> list[Context]:
        return [f for f in self.facts if f.type == FORMULA]

    @property
    def terms(self) -> list[Context]:
        return [f for f in self.facts if f.type == TERM_CONTEXT]

    def _term_names(self) -> set[str]:
        return {t.term.variable.name for t in self.terms if t.term.variable is not None}

    def new_free_variable(self) -> Context:
        """Add the first free variable name not yet among the terms."""
        used = self._term_names()
        i = 0
        while free_variable_name(i) in used:
            i += 1
        context = term_context(FreeVariable(free_variable_name(i)))
        self.add_context(context)
        return context

    def new_bound_variable(self) -> Context:
        """Add the first bound variable name not yet among the terms."""
        used = self._term_names()
        i = 0
        while bound_variable_name(i) in used:
            i += 1
        context = term_context(BoundVariable(bound_variable_name(i)))
        self.add_context(context)
        return context

    # --- Exercises ---

    def set_exercise(self, exercise: Exercise) -> None:
        """Clear the board and lay out the givens of *exercise*."""
        if not exercise.activated:
            raise ValueError(f"{exercise.name} is not available yet")

        self.exercise = exercise
        self.facts = []
        self.environments = [()]
        self.proof = []
        self.has_circularity = False
        self._undo = None

        for given in exercise.law.givens:
            if given.type == SENTENCE_IN_ENVIRONMENT:
                self.add_context(given)
                self.proof.append(f"{given.name()}. [given]")

        for law in exercise.new_laws:
            self.state.unlock(law)
        if exercise.reveal_true_false:
            if not self.true_false_revealed:
                logger.info("UNLOCKED TRUE and FALSE formulas")
            self.true_false_revealed = True
            if self.state.store is not None:
                self.state.store.set(TRUE_FALSE_KEY, "unlocked")
        if self.true_false_revealed:
            self.add_context(formula_context(TRUTH))
            self.add_context(formula_context(FALSITY))

        for name in list_primitives(
            exercise.law, self.state, free_vars=False, bound_vars=False, prim_terms=False
        ):
            self.add_context(formula_context(self.state.lookup(name)))
        for name in list_primitives(exercise.law, self.state, sentences=False):
            self.add_context(term_context(self.state.lookup(name)))
        logger.info("Set %s: %s", exercise.name, exercise.law.string)

    def completed_all_exercises(self) -> bool:
        return bool(self.exercises) and all(e.solved for e in self.exercises)

    # --- Deductions ---

    def candidates(self, selection: Sequence[object]) -> DeductionReport:
        """The deductions the unlocked laws allow from *selection*."""
        exercise_law = self.exercise.law if self.exercise else None
        return self.matcher.find_deductions(selection, exercise_law=exercise_law)

    def deduce(self, deduction: Deduction) -> bool:
        """Commit *deduction*. Returns True if it solves the active exercise."""
        self._undo = _UndoPoint(
            facts=list(self.facts),
            environments=list(self.environments),
            lines=len(self.proof),
            has_circularity=self.has_circularity,
        )
        conclusion = deduction.conclusion
        self.add_context(conclusion)

        # Formulas and terms are scaffolding: no proof line, no victory.
        if conclusion.type in (FORMULA, TERM_CONTEXT):
            return False

        name = deduction.law.name
        exercise = self.exercise
        if exercise is not None and is_circular(deduction.law, exercise.law):
            name += "*"
            self.has_circularity = True

        premises = [j for j in deduction.justification if j.type == SENTENCE_IN_ENVIRONMENT]
        self.proof.append(f"{deduction_string('From', premises, conclusion)} [{name}]")
        logger.info("Deduced %s by %s", conclusion.name(), deduction.law.name)

        if exercise is None or conclusion.name() != exercise.law.conclusion.name():
            return False

        self._undo = None
        self._solve(exercise)
        return True

    def _solve(self, exercise: Exercise) -> None:
        store = self.state.store
        first_time = not exercise.solved
        self.proof.append("QED!" if first_time else "QED! (again)")
        self.state.unlock(exercise.law, "PROVED")

        if first_time:
            exercise.solved = True
            if store is not None:
                store.set(exercise.name, "solved")
            for follow_up in exercise.new_exercises:
                activate_exercise(self.state, follow_up)
            if self.completed_all_exercises():
                logger.info("Completed all the exercises")

        length = len(self.proof)
        if self.has_circularity:
            logger.info(
                "%s was proved in %d lines, using laws stated after the exercise",
                exercise.name, length,
            )
            return

        logger.info("%s was proved in %d lines", exercise.name, length)
        if exercise.personal_best is None or length < exercise.personal_best:
            exercise.personal_best = length
        if store is not None:
            old = store.get(f"lines {exercise.name}")
            if old is None or int(old) > length:
                store.set(f"lines {exercise.name}", str(length))
                store.set(f"proof {exercise.name}", "\n".join(self.proof))
        if exercise.best_length and length < exercise.best_length:
            logger.info("New record for %s: %d lines", exercise.name, length)

    @property
    def can_undo(self) -> bool:
        return self._undo is not None

    def undo(self) -> bool:
        """Take back the last deduction, if nothing has happened since.

        Solving deductions cannot be undone. Returns False when there is
        nothing to undo.
        """
        if self._undo is None:
            return False
        point, self._undo = self._undo, None
        self.facts = point.facts
        self.environments = point.environments
        del self.proof[point.lines:]
        self.has_circularity = point.has_circularity
        logger.info("Undid the last deduction")
        return True

    def reset_progress(self) -> None:
        """Forget everything the store remembers."""
        if self.state.store is not None:
            self.state.store.clear()
        self.true_false_revealed = False
        logger.info("Progress reset")
