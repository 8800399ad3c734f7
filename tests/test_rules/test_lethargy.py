"""Tests for LethargyOverrideRule (PHASE_OVERRIDE stage)."""

from __future__ import annotations

import pytest

from readiness_engine.models.enums import CascadeStage, StatusTag
from readiness_engine.models.status import StatusInputs
from readiness_engine.rules.cycle.lethargy import LethargyOverrideRule


class TestLethargyOverrideRule:
    def setup_method(self) -> None:
        self.rule = LethargyOverrideRule()

    def test_rule_metadata(self) -> None:
        assert self.rule.stage == CascadeStage.PHASE_OVERRIDE
        assert self.rule.order == 0

    @pytest.mark.parametrize("readiness", [4, 5, 6])
    def test_fires_on_lethargic_luteal_day(self, readiness) -> None:
        inputs = StatusInputs(readiness=readiness, cycle_phase="Luteal", hrv_vs_baseline_percent=110)
        outcome = self.rule.evaluate(inputs, StatusTag.RECOVER)
        assert outcome.tag == StatusTag.MAINTAIN
        assert outcome.reasons[0].code == "LETHARGY_OVERRIDE"

    def test_hrv_threshold_is_strict(self) -> None:
        inputs = StatusInputs(readiness=5, cycle_phase="Luteal", hrv_vs_baseline_percent=105)
        assert self.rule.evaluate(inputs, StatusTag.RECOVER) is None

    @pytest.mark.parametrize("readiness", [3, 7])
    def test_readiness_outside_band(self, readiness) -> None:
        inputs = StatusInputs(readiness=readiness, cycle_phase="Luteal", hrv_vs_baseline_percent=120)
        assert self.rule.evaluate(inputs, StatusTag.MAINTAIN) is None

    def test_not_luteal(self) -> None:
        inputs = StatusInputs(readiness=5, cycle_phase="Follicular", hrv_vs_baseline_percent=120)
        assert self.rule.evaluate(inputs, StatusTag.MAINTAIN) is None

    def test_missing_hrv_is_not_applicable(self) -> None:
        inputs = StatusInputs(readiness=5, cycle_phase="Luteal")
        assert self.rule.has_required_data(inputs) is False

    def test_non_finite_hrv_is_not_applicable(self) -> None:
        inputs = StatusInputs(readiness=5, cycle_phase="Luteal", hrv_vs_baseline_percent=float("nan"))
        assert self.rule.has_required_data(inputs) is False
