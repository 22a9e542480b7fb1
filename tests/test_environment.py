"""Tests for pydeduce.environment: frames and environment text."""

from pydeduce.environment import (
    ROOT,
    assuming_frame,
    environment_text,
    letting_frame,
    setting_frame,
)
from pydeduce.syntax import atomic, conj, predicate_sentence


class TestAssumptionNames:
    def test_assuming(self, rain):
        assert assuming_frame(rain).name == "Assume Rain"

    def test_letting(self, x):
        assert letting_frame(x).name == "Let x be arbitrary"

    def test_setting(self, p, x):
        assert setting_frame(x, predicate_sentence(p, [x])).name == "Set x s.t. P(x)"


class TestEnvironmentText:
    def test_root(self):
        assert environment_text(ROOT) == "root environment"

    def test_single_frame(self, rain):
        assert environment_text((assuming_frame(rain),)) == "assuming Rain"

    def test_runs_are_grouped(self, p, x, y):
        z = type(x)("z")
        env = (
            assuming_frame(atomic("A")),
            assuming_frame(atomic("B")),
            letting_frame(x),
            letting_frame(y),
            setting_frame(z, predicate_sentence(p, [z])),
        )
        assert environment_text(env) == (
            "assuming A, B, letting x, y be arbitrary, setting z s.t. P(z)"
        )

    def test_interleaved_runs_stay_separate(self, rain, wet, x):
        env = (assuming_frame(rain), letting_frame(x), assuming_frame(wet))
        assert environment_text(env) == "assuming Rain, letting x be arbitrary, assuming Wet"

    def test_compound_sentences_use_short_text(self, rain, wet):
        env = (assuming_frame(conj(rain, wet)),)
        assert environment_text(env) == "assuming Rain AND Wet"

    def test_consecutive_setting_frames(self, p, x, y):
        env = (setting_frame(x, predicate_sentence(p, [x])), setting_frame(y, predicate_sentence(p, [y])))
        assert environment_text(env) == "setting x s.t. P(x), setting y s.t. P(y)"
