"""Tests for logging output of the engine."""

import logging

from pydeduce.catalog import MODUS_PONENS
from pydeduce.context import sentence_context
from pydeduce.legality import is_legal
from pydeduce.matcher import Matcher
from pydeduce.syntax import atomic, implies, predicate_sentence


class TestLoggingOutput:
    def test_unlock_logged_at_info(self, state, catalog, caplog):
        with caplog.at_level(logging.INFO, logger="pydeduce.laws"):
            state.unlock(catalog[MODUS_PONENS])
        assert any(
            "UNLOCKED Modus ponens: Given A, A IMPLIES B: deduce B." in r.message for r in caplog.records
        )

    def test_relock_not_logged_twice(self, state, catalog, caplog):
        with caplog.at_level(logging.INFO, logger="pydeduce.laws"):
            state.unlock(catalog[MODUS_PONENS])
            state.unlock(catalog[MODUS_PONENS])
        assert len([r for r in caplog.records if "UNLOCKED" in r.message]) == 1

    def test_law_definition_logged_at_debug(self, state, caplog):
        with caplog.at_level(logging.DEBUG, logger="pydeduce.laws"):
            state.define_law("Echo", [atomic("A")], atomic("A"))
        assert any("Defined law" in r.message for r in caplog.records)

    def test_legality_rejection_logged(self, p, x, caplog):
        with caplog.at_level(logging.DEBUG, logger="pydeduce.legality"):
            assert not is_legal(sentence_context(predicate_sentence(p, [x])))
        assert any("Illegal: P(x) out of scope" in r.message for r in caplog.records)

    def test_scan_logged_at_debug(self, state, catalog, rain, wet, caplog):
        state.unlock(catalog[MODUS_PONENS])
        with caplog.at_level(logging.DEBUG, logger="pydeduce.matcher"):
            Matcher(state).find_deductions([rain, implies(rain, wet)])
        messages = [r.message for r in caplog.records]
        assert any(m.startswith("Matching [Rain, Rain IMPLIES Wet]") for m in messages)
        assert "Found 1 deductions" in messages

    def test_clean_scan_emits_no_warnings(self, state, catalog, rain, wet, caplog):
        state.unlock(catalog[MODUS_PONENS])
        with caplog.at_level(logging.WARNING, logger="pydeduce"):
            Matcher(state).find_deductions([rain, implies(rain, wet)])
        assert caplog.records == []
