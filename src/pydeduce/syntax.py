"""Terms and sentences for the natural-deduction engine.

Formulas are never parsed from text: they are built programmatically with
the constructors below. Every node is an immutable dataclass that carries
two precomputed renderings:

    short_text  the node displayed on its own, e.g. ``A AND B``
    long_text   the node as it appears nested inside a binary connective
                or relation, parenthesized when compound, e.g. ``(A AND B)``

The renderings are part of the engine's contract: the matcher compares
atomic placeholders and ambient environments by their text, so the
composition rules here must stay fixed.

Free and bound variables live in disjoint namespaces. By convention free
variables are named ``x, y, z, x', ...`` and bound variables
``X, Y, Z, X', ...`` (see ``free_variable_name`` / ``bound_variable_name``).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from pydeduce.errors import TypeMismatch

# Term type constants
FREE_VARIABLE = "free variable"
BOUND_VARIABLE = "bound variable"
PRIMITIVE_TERM = "primitive"
OPERATOR_TERM = "operator evaluation"

# Sentence type constants
PRIMITIVE = "primitive"
CONNECTIVE = "connective"
QUANTIFIER = "quantifier"

# Sentence subtype constants
ATOMIC = "atomic"
PREDICATE = "predicate"
AND = "AND"
OR = "OR"
IMPLIES = "IMPLIES"
IFF = "IFF"
NOT = "NOT"
TRUE = "TRUE"
FALSE = "FALSE"
FOR_ALL = "for all"
THERE_EXISTS = "there exists"

BINARY_CONNECTIVES = (AND, OR, IMPLIES, IFF)
QUANTIFIERS = (FOR_ALL, THERE_EXISTS)

_QUANTIFIER_TEXT = {FOR_ALL: "FOR ALL", THERE_EXISTS: "THERE EXISTS"}


@dataclass(frozen=True, slots=True)
class FreeVariable:
    """A free variable, introduced into scope by a ``letting`` frame."""

    name: str

    @property
    def type(self) -> str:
        return FREE_VARIABLE

    @property
    def short_text(self) -> str:
        return self.name

    @property
    def long_text(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class BoundVariable:
    """A bound variable, meaningful only under a quantifier."""

    name: str

    @property
    def type(self) -> str:
        return BOUND_VARIABLE

    @property
    def short_text(self) -> str:
        return self.name

    @property
    def long_text(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Operator:
    """A function symbol.

    Attributes:
        name: Display name, e.g. ``f`` or ``+``.
        arity: Number of arguments.
        addition_style: Render a 2-ary operator between its arguments
            (``x + y``) rather than as ``f(x, y)``.
    """

    name: str
    arity: int
    addition_style: bool = False

    def __post_init__(self) -> None:
        if self.arity < 0:
            raise ValueError(f"Operator {self.name!r}: negative arity {self.arity}")
        if self.addition_style and self.arity != 2:
            raise ValueError(f"Operator {self.name!r}: addition style needs arity 2")


@dataclass(frozen=True, slots=True)
class Predicate:
    """A relation symbol.

    Attributes:
        name: Display name, e.g. ``P`` or ``=``.
        arity: Number of term arguments.
        relation_style: Render a 2-ary predicate between its arguments
            (``x = y``) rather than as ``P(x, y)``.
    """

    name: str
    arity: int
    relation_style: bool = False

    def __post_init__(self) -> None:
        if self.arity < 0:
            raise ValueError(f"Predicate {self.name!r}: negative arity {self.arity}")
        if self.relation_style and self.arity != 2:
            raise ValueError(f"Predicate {self.name!r}: relation style needs arity 2")


@dataclass(frozen=True, slots=True)
class Term:
    """Immutable AST node for a term.

    Attributes:
        type: One of FREE_VARIABLE, BOUND_VARIABLE, PRIMITIVE_TERM, OPERATOR_TERM.
        short_text: Standalone rendering.
        long_text: Rendering when nested.
        variable: The variable (only for the two variable types).
        name: The primitive name (only for PRIMITIVE_TERM).
        operator: The operator (only for OPERATOR_TERM).
        args: Operator arguments (only for OPERATOR_TERM).
    """

    type: str
    short_text: str
    long_text: str
    variable: FreeVariable | BoundVariable | None = None
    name: str | None = None
    operator: Operator | None = None
    args: tuple[Term, ...] = ()

    def __str__(self) -> str:
        return self.short_text


@dataclass(frozen=True, slots=True)
class Sentence:
    """Immutable AST node for a sentence.

    Attributes:
        type: One of PRIMITIVE, CONNECTIVE, QUANTIFIER.
        subtype: ATOMIC or PREDICATE for primitives; AND, OR, IMPLIES, IFF,
            NOT, TRUE, FALSE for connectives; FOR_ALL or THERE_EXISTS for
            quantifiers.
        short_text: Standalone rendering.
        long_text: Rendering when nested.
        name: The atom name (only for ATOMIC).
        predicate: The predicate (only for PREDICATE).
        args: Term arguments of a predicate, sentence operands of a
            connective, or the single body of a quantifier.
        variable: The bound variable of a quantifier.
    """

    type: str
    subtype: str
    short_text: str
    long_text: str
    name: str | None = None
    predicate: Predicate | None = None
    args: tuple = ()
    variable: BoundVariable | None = None

    @property
    def body(self) -> Sentence:
        """The body of a quantified sentence."""
        if self.type != QUANTIFIER:
            raise AttributeError(f"{self.short_text!r} is not a quantified sentence")
        return self.args[0]

    def __str__(self) -> str:
        return self.short_text


# ----------------------------------------------------------------------
# Variable names
# ----------------------------------------------------------------------


def _variable_name(letters: str, i: int) -> str:
    return letters[i % 3] + "'" * (i // 3)


def free_variable_name(i: int) -> str:
    """The i-th free variable name: x, y, z, x', y', z', x'', ..."""
    return _variable_name("xyz", i)


def bound_variable_name(i: int) -> str:
    """The i-th bound variable name: X, Y, Z, X', Y', Z', X'', ..."""
    return _variable_name("XYZ", i)


# ----------------------------------------------------------------------
# Terms
# ----------------------------------------------------------------------


def variable_term(variable: FreeVariable | BoundVariable) -> Term:
    """Wrap a free or bound variable as a term."""
    return Term(
        type=variable.type,
        short_text=variable.short_text,
        long_text=variable.long_text,
        variable=variable,
    )


def primitive_term(name: str) -> Term:
    if not name:
        raise ValueError("Primitive term needs a name")
    return Term(type=PRIMITIVE_TERM, short_text=name, long_text=name, name=name)


def to_term(obj: object) -> Term:
    """Coerce a string, variable or term to a Term."""
    if isinstance(obj, Term):
        return obj
    if isinstance(obj, str):
        return primitive_term(obj)
    if isinstance(obj, (FreeVariable, BoundVariable)):
        return variable_term(obj)
    raise TypeMismatch(f"Cannot convert {type(obj).__name__} to a term")


def operator_term(operator: Operator, args: Sequence[object]) -> Term:
    """Apply *operator* to *args* (terms, variables, or primitive names)."""
    if len(args) != operator.arity:
        raise ValueError(
            f"Operator {operator.name!r} takes {operator.arity} arguments, got {len(args)}"
        )
    terms = tuple(to_term(a) for a in args)

    if operator.addition_style:
        short = f"{terms[0].long_text} {operator.name} {terms[1].long_text}"
        long = f"({short})"
    elif operator.arity == 0:
        short = long = operator.name
    else:
        short = long = f"{operator.name}({', '.join(t.short_text for t in terms)})"

    return Term(
        type=OPERATOR_TERM, short_text=short, long_text=long,
        operator=operator, args=terms,
    )


# ----------------------------------------------------------------------
# Sentences
# ----------------------------------------------------------------------


def atomic(name: str) -> Sentence:
    """An atomic sentence (also used as a sentence placeholder in laws)."""
    if not name:
        raise ValueError("Atomic sentence needs a name")
    return Sentence(type=PRIMITIVE, subtype=ATOMIC, short_text=name, long_text=name, name=name)


def predicate_sentence(predicate: Predicate, args: Sequence[object]) -> Sentence:
    """Apply *predicate* to *args* (terms, variables, or primitive names)."""
    if len(args) != predicate.arity:
        raise ValueError(
            f"Predicate {predicate.name!r} takes {predicate.arity} arguments, got {len(args)}"
        )
    terms = tuple(to_term(a) for a in args)

    if predicate.relation_style:
        short = f"{terms[0].long_text} {predicate.name} {terms[1].long_text}"
        long = f"({short})"
    elif predicate.arity == 0:
        short = long = predicate.name
    else:
        short = long = f"{predicate.name}({', '.join(t.short_text for t in terms)})"

    return Sentence(
        type=PRIMITIVE, subtype=PREDICATE, short_text=short, long_text=long,
        predicate=predicate, args=terms,
    )


def connective(subtype: str, args: Sequence[Sentence]) -> Sentence:
    """Build a connective sentence from its subtype and operands."""
    args = tuple(args)
    if subtype in BINARY_CONNECTIVES:
        if len(args) != 2:
            raise ValueError(f"{subtype} takes 2 operands, got {len(args)}")
        short = f"{args[0].long_text} {subtype} {args[1].long_text}"
        long = f"({short})"
    elif subtype == NOT:
        if len(args) != 1:
            raise ValueError(f"NOT takes 1 operand, got {len(args)}")
        short = f"NOT {args[0].long_text}"
        long = f"({short})"
    elif subtype in (TRUE, FALSE):
        if args:
            raise ValueError(f"{subtype} takes no operands")
        short = long = subtype
    else:
        raise ValueError(f"Unknown connective: {subtype!r}")
    return Sentence(type=CONNECTIVE, subtype=subtype, short_text=short, long_text=long, args=args)


def conj(a: Sentence, b: Sentence) -> Sentence:
    return connective(AND, (a, b))


def disj(a: Sentence, b: Sentence) -> Sentence:
    return connective(OR, (a, b))


def implies(a: Sentence, b: Sentence) -> Sentence:
    return connective(IMPLIES, (a, b))


def iff(a: Sentence, b: Sentence) -> Sentence:
    return connective(IFF, (a, b))


def neg(a: Sentence) -> Sentence:
    return connective(NOT, (a,))


TRUTH = connective(TRUE, ())
FALSITY = connective(FALSE, ())


def quantifier(subtype: str, variable: BoundVariable, body: Sentence) -> Sentence:
    """Build a quantified sentence ``FOR ALL X: body`` or ``THERE EXISTS X: body``."""
    if subtype not in QUANTIFIERS:
        raise ValueError(f"Unknown quantifier: {subtype!r}")
    if not isinstance(variable, BoundVariable):
        raise TypeMismatch(f"Quantifier needs a bound variable, got {type(variable).__name__}")
    short = f"{_QUANTIFIER_TEXT[subtype]} {variable.short_text}: {body.long_text}"
    return Sentence(
        type=QUANTIFIER, subtype=subtype, short_text=short, long_text=f"({short})",
        args=(body,), variable=variable,
    )


def for_all(variable: BoundVariable, body: Sentence) -> Sentence:
    return quantifier(FOR_ALL, variable, body)


def there_exists(variable: BoundVariable, body: Sentence) -> Sentence:
    return quantifier(THERE_EXISTS, variable, body)


# ----------------------------------------------------------------------
# Traversal
# ----------------------------------------------------------------------


def iter_variables(node: Sentence | Term) -> Iterator[FreeVariable | BoundVariable]:
    """Yield every variable occurrence in *node*, quantifier variables included."""
    if isinstance(node, Term):
        if node.variable is not None:
            yield node.variable
        for arg in node.args:
            yield from iter_variables(arg)
        return
    if node.type == QUANTIFIER:
        assert node.variable is not None
        yield node.variable
    for arg in node.args:
        yield from iter_variables(arg)


def bound_variable_names(node: Sentence | Term) -> list[str]:
    """Distinct bound variable names occurring in *node*, in first-seen order."""
    names: list[str] = []
    for v in iter_variables(node):
        if isinstance(v, BoundVariable) and v.name not in names:
            names.append(v.name)
    return names


def free_variable_names(node: Sentence | Term) -> list[str]:
    """Distinct free variable names occurring in *node*, in first-seen order."""
    names: list[str] = []
    for v in iter_variables(node):
        if isinstance(v, FreeVariable) and v.name not in names:
            names.append(v.name)
    return names
