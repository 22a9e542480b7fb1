"""Matching justifications against laws.

``match_with_givens`` decides whether a list of justification contexts
instantiates a law, and if so builds the conclusion:

1. The number of justifications must equal the number of givens.
2. Every given that carries an environment splits the matching
   justification's environment into an outer prefix and an inner part
   as long as the template's own frames. All outer prefixes must agree;
   the common prefix is the ambient environment the conclusion inherits.
3. Inner frames are matched against the template frames, binding
   sentence and free variable placeholders.
4. Each justification's sentence or term is matched against its template.
5. The conclusion template is instantiated and checked for legality.

Universal introduction and universal specification rename variables
instead of matching structurally, and are handled separately.

``Matcher`` scans a whole catalog of laws for one selection, also trying
the reversed order when exactly two justifications are selected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import count

from pydeduce.context import (
    ENVIRONMENT,
    ENVIRONMENT_TYPES,
    SENTENCE_IN_ENVIRONMENT,
    SENTENCE_TYPES,
    TERM_CONTEXT,
    Context,
    sentence_context,
    to_context,
)
from pydeduce.environment import (
    ASSUMING,
    LETTING,
    SETTING,
    Assumption,
    Environment,
    environment_text,
)
from pydeduce.errors import TypeMismatch, UnsupportedConstruct
from pydeduce.laws import (
    UNIVERSAL_INTRODUCTION,
    UNIVERSAL_INTRODUCTION_AUTO,
    UNIVERSAL_SPECIFICATION,
    EngineState,
    Law,
    is_circular,
)
from pydeduce.legality import is_legal
from pydeduce.substitution import (
    BOUND_PLACEHOLDER,
    FREE_PLACEHOLDER,
    SENTENCE_PLACEHOLDER,
    Bindings,
    bound_to_term,
    free_to_bound,
    quantified_names,
    subs,
)
from pydeduce.syntax import (
    ATOMIC,
    BOUND_VARIABLE,
    FOR_ALL,
    FREE_VARIABLE,
    PRIMITIVE,
    PRIMITIVE_TERM,
    QUANTIFIER,
    BoundVariable,
    Sentence,
    Term,
    bound_variable_name,
    bound_variable_names,
    for_all,
)

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Outcome of matching one justification list against one law.

    Attributes:
        matches: Whether the law applies.
        conclusion: The deduced context (only when matches is True).
        bindings: The placeholder bindings and ambient environment found.
    """

    matches: bool
    conclusion: Context | None = None
    bindings: Bindings = field(default_factory=Bindings)


# ----------------------------------------------------------------------
# Structural matching
# ----------------------------------------------------------------------


def ambient_prefix(args: Sequence[Context], givens: Sequence[Context]) -> Environment | None:
    """The outer environment shared by all environment-carrying justifications.

    Returns None when a justification's environment is too shallow for
    its template, or when two prefixes disagree.
    """
    proposed: Environment | None = None
    for arg, given in zip(args, givens):
        if given.type not in ENVIRONMENT_TYPES:
            continue
        if arg.type not in ENVIRONMENT_TYPES:
            return None
        depth = len(arg.environment) - len(given.environment)
        if depth < 0:
            return None
        candidate = arg.environment[:depth]
        if proposed is None:
            proposed = candidate
        elif environment_text(proposed) != environment_text(candidate):
            return None
    return () if proposed is None else proposed


def match_term(term: Term, template: Term, bindings: Bindings) -> bool:
    if template.type in (FREE_VARIABLE, BOUND_VARIABLE):
        if term.type != template.type:
            return False
        namespace = FREE_PLACEHOLDER if template.type == FREE_VARIABLE else BOUND_PLACEHOLDER
        return bindings.bind(namespace, template.variable.name, term.variable)
    if template.type == PRIMITIVE_TERM:
        return term == template
    raise UnsupportedConstruct(f"Matching operator templates is not supported: {template}")


def match_sentence(sentence: Sentence, template: Sentence, bindings: Bindings) -> bool:
    if template.type == PRIMITIVE:
        if template.subtype == ATOMIC:
            return bindings.bind(SENTENCE_PLACEHOLDER, template.name, sentence)
        raise UnsupportedConstruct(f"Matching predicate templates is not supported: {template}")

    if sentence.type != template.type or sentence.subtype != template.subtype:
        return False

    if template.type == QUANTIFIER:
        if not bindings.bind(BOUND_PLACEHOLDER, template.variable.name, sentence.variable):
            return False
        return match_sentence(sentence.body, template.body, bindings)

    return all(
        match_sentence(arg, targ, bindings) for arg, targ in zip(sentence.args, template.args)
    )


def match_assumption(assumption: Assumption, template: Assumption, bindings: Bindings) -> bool:
    if assumption.type != template.type:
        return False
    if assumption.type in (ASSUMING, SETTING):
        if not match_sentence(assumption.sentence, template.sentence, bindings):
            return False
    if assumption.type in (LETTING, SETTING):
        return bindings.bind(FREE_PLACEHOLDER, template.variable.name, assumption.variable)
    return True


def match_with_given(context: Context, template: Context, bindings: Bindings) -> bool:
    """Match one justification against one given template.

    Frames are read past the ambient prefix already stored in *bindings*.
    """
    if context.type != template.type:
        return False

    if template.type in ENVIRONMENT_TYPES:
        offset = len(bindings.env)
        for i, frame in enumerate(template.environment):
            if not match_assumption(context.environment[offset + i], frame, bindings):
                return False

    if template.type in SENTENCE_TYPES:
        return match_sentence(context.sentence, template.sentence, bindings)
    if template.type == TERM_CONTEXT:
        return match_term(context.term, template.term, bindings)
    return True


# ----------------------------------------------------------------------
# Quantifier rules
# ----------------------------------------------------------------------


def _fresh_bound_variable(statement: Sentence) -> BoundVariable:
    used = bound_variable_names(statement)
    name = next(n for n in map(bound_variable_name, count()) if n not in used)
    return BoundVariable(name)


def match_universal_introduction(
    args: Sequence[Context], bindings: Bindings, special: str
) -> Context | None:
    """From ``P(x) [E, letting x be arbitrary]`` deduce ``FOR ALL X: P(X) [E]``.

    The letting frame must come right after the ambient prefix E, and is
    discharged. The explicit variant takes the bound variable from a
    term context; the automatic one picks the first name not in P.
    """
    statement_ctx = args[0]
    if statement_ctx.type != SENTENCE_IN_ENVIRONMENT:
        return None
    depth = len(bindings.env)
    if len(statement_ctx.environment) <= depth:
        return None
    frame = statement_ctx.environment[depth]
    if frame.type != LETTING:
        return None
    statement = statement_ctx.sentence

    if special == UNIVERSAL_INTRODUCTION:
        target = args[1]
        if target.type != TERM_CONTEXT or target.term.type != BOUND_VARIABLE:
            return None
        bound = target.term.variable
        if bound.name in bound_variable_names(statement):
            logger.debug("%s already occurs in %s", bound, statement)
            return None
    else:
        if args[1].type != ENVIRONMENT:
            return None
        bound = _fresh_bound_variable(statement)

    generalized = for_all(bound, free_to_bound(statement, frame.variable, bound))
    return sentence_context(generalized, bindings.env)


def match_universal_specification(args: Sequence[Context], bindings: Bindings) -> Context | None:
    """From ``FOR ALL X: P(X) [E]`` and a term t deduce ``P(t) [E]``.

    The quantified fact is not consumed, so it can be specified again.
    """
    fact = args[0]
    if fact.type != SENTENCE_IN_ENVIRONMENT:
        return None
    if fact.sentence.type != QUANTIFIER or fact.sentence.subtype != FOR_ALL:
        return None
    if args[1].type != TERM_CONTEXT:
        return None

    body = fact.sentence.body
    variable = fact.sentence.variable
    term = args[1].term
    quantified = quantified_names(body)
    if variable.name in quantified or set(bound_variable_names(term)) & set(quantified):
        logger.debug("Specifying %s with %s would capture a variable", fact.sentence, term)
        return None

    return sentence_context(bound_to_term(body, variable, term), bindings.env)


# ----------------------------------------------------------------------
# Entry points
# ----------------------------------------------------------------------


def match_with_givens(justification: Sequence[object], law: Law) -> MatchResult:
    """Try to instantiate *law* from *justification*.

    Failures to match, and matches whose conclusion breaks the scoping
    rules, both come back as ``matches=False``. Templates the engine
    cannot handle raise ``UnsupportedConstruct``.
    """
    args = [to_context(j) for j in justification]
    bindings = Bindings()
    failure = MatchResult(matches=False, bindings=bindings)

    if len(args) != len(law.givens):
        return failure

    env = ambient_prefix(args, law.givens)
    if env is None:
        return failure
    bindings.env = env

    if law.special in (UNIVERSAL_INTRODUCTION, UNIVERSAL_INTRODUCTION_AUTO):
        conclusion = match_universal_introduction(args, bindings, law.special)
    elif law.special == UNIVERSAL_SPECIFICATION:
        conclusion = match_universal_specification(args, bindings)
    else:
        for arg, given in zip(args, law.givens):
            if not match_with_given(arg, given, bindings):
                return failure
        conclusion = subs(law.conclusion, bindings)

    if conclusion is None:
        return failure
    if not is_legal(conclusion):
        logger.debug("%s: discarded illegal conclusion %s", law.name, conclusion.name())
        return failure
    return MatchResult(matches=True, conclusion=conclusion, bindings=bindings)


@dataclass
class Deduction:
    """A law that applies to a selection, with the conclusion it yields.

    Attributes:
        law: The law applied.
        conclusion: The deduced context.
        justification: The justifications, in the order that matched.
        bindings: Placeholder bindings of the match.
        circular: Whether the law comes at or after the active exercise.
    """

    law: Law
    conclusion: Context
    justification: tuple[Context, ...]
    bindings: Bindings
    circular: bool = False

    def __str__(self) -> str:
        star = "*" if self.circular else ""
        return f"{self.law.name}{star}: {self.conclusion.name()}"


@dataclass
class DeductionReport:
    """All deductions available from one selection.

    Attributes:
        justification: The selection as given.
        deductions: Successful matches, in catalog order.
        diagnostics: Messages for laws skipped because of errors.
    """

    justification: tuple[Context, ...]
    deductions: list[Deduction] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)

    @property
    def has_circularity(self) -> bool:
        return any(d.circular for d in self.deductions)


class Matcher:
    """Scans laws for the deductions a selection allows.

    Parameters:
        state: The engine state whose unlocked laws are scanned by default.
    """

    def __init__(self, state: EngineState) -> None:
        self.state = state
        self._reported: set[int] = set()

    def find_deductions(
        self,
        justification: Sequence[object],
        *,
        laws: Iterable[Law] | None = None,
        exercise_law: Law | None = None,
    ) -> DeductionReport:
        """Try every law on *justification* (and on its reverse, for pairs).

        A law that raises ``UnsupportedConstruct`` or ``TypeMismatch`` is
        skipped and the scan continues.
        """
        args = tuple(to_context(j) for j in justification)
        report = DeductionReport(justification=args)
        orders = [args]
        if len(args) == 2:
            orders.append((args[1], args[0]))

        candidates = list(self.state.unlocked if laws is None else laws)
        logger.debug(
            "Matching [%s] against %d laws",
            ", ".join(a.name() for a in args), len(candidates),
        )

        for law in candidates:
            for order in orders:
                try:
                    result = match_with_givens(order, law)
                except UnsupportedConstruct as e:
                    self._diagnose(report, law, str(e), logging.WARNING)
                    break
                except TypeMismatch as e:
                    self._diagnose(report, law, str(e), logging.ERROR)
                    break
                if result.matches:
                    assert result.conclusion is not None
                    report.deductions.append(Deduction(
                        law=law,
                        conclusion=result.conclusion,
                        justification=order,
                        bindings=result.bindings,
                        circular=is_circular(law, exercise_law),
                    ))

        logger.debug("Found %d deductions", len(report.deductions))
        return report

    def _diagnose(self, report: DeductionReport, law: Law, message: str, level: int) -> None:
        text = f"{law.name}: {message}"
        report.diagnostics.append(text)
        if law.index not in self._reported:
            self._reported.add(law.index)
            logger.log(level, "Skipping law %s", text)
