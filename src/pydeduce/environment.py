"""Assumption frames and environments.

An environment is a tuple of ``Assumption`` frames, outermost first, and
the empty tuple is the root environment. Three kinds of frame open a
scope:

    assuming   Assume A                (a hypothesis)
    letting    Let x be arbitrary      (introduces a free variable)
    setting    Set x s.t. A            (introduces a free variable with a property)

Frame order matters: it drives both display and the prefix/suffix
alignment the matcher performs.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby

from pydeduce.syntax import FreeVariable, Sentence

# Assumption type constants
ASSUMING = "assuming"
LETTING = "letting"
SETTING = "setting"

ROOT_ENVIRONMENT_TEXT = "root environment"


@dataclass(frozen=True, slots=True)
class Assumption:
    """A single scope-introducing frame.

    Attributes:
        type: One of ASSUMING, LETTING, SETTING.
        sentence: The sentence assumed (ASSUMING and SETTING).
        variable: The free variable introduced (LETTING and SETTING).
    """

    type: str
    sentence: Sentence | None = None
    variable: FreeVariable | None = None

    @property
    def name(self) -> str:
        if self.type == ASSUMING:
            return f"Assume {self.sentence}"
        if self.type == LETTING:
            return f"Let {self.variable} be arbitrary"
        return f"Set {self.variable} s.t. {self.sentence}"

    def __str__(self) -> str:
        return self.name


Environment = tuple[Assumption, ...]

ROOT: Environment = ()


def assuming_frame(sentence: Sentence) -> Assumption:
    return Assumption(type=ASSUMING, sentence=sentence)


def letting_frame(variable: FreeVariable) -> Assumption:
    return Assumption(type=LETTING, variable=variable)


def setting_frame(variable: FreeVariable, sentence: Sentence) -> Assumption:
    return Assumption(type=SETTING, sentence=sentence, variable=variable)


def environment_text(environment: Environment) -> str:
    """Render an environment, outermost frame first.

    Consecutive ``assuming`` frames share one keyword, as do consecutive
    ``letting`` frames::

        assuming A, B, letting x, y be arbitrary, setting z s.t. P(z)
    """
    if not environment:
        return ROOT_ENVIRONMENT_TEXT

    parts: list[str] = []
    for kind, run in groupby(environment, key=lambda a: a.type):
        frames = list(run)
        if kind == ASSUMING:
            parts.append("assuming " + ", ".join(str(a.sentence) for a in frames))
        elif kind == LETTING:
            parts.append("letting " + ", ".join(str(a.variable) for a in frames) + " be arbitrary")
        else:
            parts.extend(f"setting {a.variable} s.t. {a.sentence}" for a in frames)
    return ", ".join(parts)
