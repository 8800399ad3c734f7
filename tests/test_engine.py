"""Tests for StatusEngine: the full cascade, scenarios and invariants."""

from __future__ import annotations

import itertools

import numpy as np
import pytest

from readiness_engine import compute_status
from readiness_engine.engine import StatusEngine
from readiness_engine.models.decision_trace import RuleStatus
from readiness_engine.models.enums import (
    CyclePhase,
    GoalIntent,
    InstructionClass,
    PrescriptionHint,
    Signal,
    StatusTag,
)
from readiness_engine.models.status import StatusInputs
from readiness_engine.registry import RuleRegistry
from readiness_engine.rules.readiness.base_readiness import BaseReadinessRule

ACWR_VALUES = [None, float("nan"), 0.5, 0.79, 0.8, 1.0, 1.3, 1.31, 1.5, 1.51, 2.4]
READINESS_VALUES = [None, 1, 3, 4, 5, 6, 8, 10]
RED_FLAG_VALUES = [None, 0, 1, 2, 3]
PHASES = [None, "Menstrual", "Follicular", "Luteal"]
HRV_VALUES = [None, 90.0, 100.0, 110.0]
CYCLE_DAYS = [None, 1, 3, 10]


def _input_grid(**fixed):
    for acwr, readiness, flags, phase, hrv, day in itertools.product(
        ACWR_VALUES, READINESS_VALUES, RED_FLAG_VALUES, PHASES, HRV_VALUES, CYCLE_DAYS
    ):
        values = dict(
            acwr=acwr,
            readiness=readiness,
            red_flags_count=flags,
            cycle_phase=phase,
            hrv_vs_baseline_percent=hrv,
            cycle_day_index=day,
        )
        values.update(fixed)
        yield StatusInputs(**values)


class TestScenarios:
    def setup_method(self) -> None:
        self.engine = StatusEngine()

    def test_golden_push(self, golden_inputs) -> None:
        decision = self.engine.compute_status(golden_inputs)
        assert decision.tag == StatusTag.PUSH
        assert decision.signal == Signal.GREEN
        assert decision.instruction_class == InstructionClass.HARD_PUSH

    def test_spike_ceiling_beats_high_readiness(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(acwr=1.6, readiness=9, red_flags_count=0, cycle_phase="Follicular")
        )
        assert decision.tag == StatusTag.RECOVER
        assert "ACWR_SPIKE_CEILING" in decision.reason_codes

    def test_floor_blocks_push(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(acwr=0.75, readiness=8, red_flags_count=0, cycle_phase="Follicular")
        )
        assert decision.tag == StatusTag.MAINTAIN
        assert "ACWR_DETRAINING_FLOOR" in decision.reason_codes

    def test_sick_overrides_everything(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(is_sick_or_injured=True, readiness=9, acwr=1.0)
        )
        assert decision.tag == StatusTag.RECOVER
        assert decision.reason_codes == ("SICK_OR_INJURED",)

    def test_no_acwr_no_push(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(acwr=None, readiness=8, red_flags_count=0, cycle_phase="Follicular")
        )
        assert decision.tag == StatusTag.MAINTAIN
        assert "NO_ACWR_NO_PUSH" in decision.reason_codes

    def test_lethargy_overrides_luteal_recover(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(cycle_phase="Luteal", readiness=5, hrv_vs_baseline_percent=110)
        )
        assert decision.tag == StatusTag.MAINTAIN
        assert decision.reason_codes[0] == "LUTEAL_LOW_READINESS"
        assert "LETHARGY_OVERRIDE" in decision.reason_codes

    def test_elite_rebound_pushes_in_sweet_spot(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(acwr=1.1, readiness=9, red_flags_count=0, cycle_phase="Menstrual",
                         cycle_day_index=2)
        )
        assert decision.tag == StatusTag.PUSH
        assert "ELITE_REBOUND_OVERRIDE" in decision.reason_codes

    def test_elite_rebound_capped_by_overreaching(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(acwr=1.4, readiness=9, red_flags_count=0, cycle_phase="Menstrual",
                         cycle_day_index=2)
        )
        assert decision.tag == StatusTag.RECOVER
        assert "ACWR_OVERREACHING_CEILING" in decision.reason_codes

    def test_elite_rebound_without_acwr_is_maintain(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(readiness=9, red_flags_count=0, cycle_phase="Menstrual", cycle_day_index=1)
        )
        assert decision.tag == StatusTag.MAINTAIN
        assert decision.reason_codes[-1] == "NO_ACWR_NO_PUSH"

    def test_spike_raises_rest_to_recover(self) -> None:
        decision = self.engine.compute_status(StatusInputs(acwr=1.8, readiness=2, red_flags_count=0))
        assert decision.tag == StatusTag.RECOVER
        assert decision.reason_codes == ("READINESS_LOW", "ACWR_SPIKE_CEILING")

    def test_clamp_reason_only_when_tag_changes(self) -> None:
        decision = self.engine.compute_status(StatusInputs(acwr=1.4, readiness=6, red_flags_count=0))
        assert decision.tag == StatusTag.MAINTAIN
        assert decision.reason_codes == ("NO_SPECIFIC_CONDITION",)

    def test_progress_hint_keeps_tag(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(acwr=1.0, readiness=7, red_flags_count=0, goal_intent=GoalIntent.PROGRESS)
        )
        assert decision.tag == StatusTag.MAINTAIN
        assert decision.prescription_hint == PrescriptionHint.PROGRESSIVE_STIMULUS
        assert decision.reason_codes[-1] == "GOAL_PROGRESS"

    def test_sick_suppresses_progress_hint(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(is_sick_or_injured=True, acwr=1.0, readiness=9, red_flags_count=0,
                         goal_intent=GoalIntent.PROGRESS)
        )
        assert decision.prescription_hint is None

    def test_missing_checkin_holds_maintain(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(acwr=1.0, readiness=9, red_flags_count=0, has_checkin=False)
        )
        assert decision.tag == StatusTag.MAINTAIN
        assert decision.signal == Signal.ORANGE
        assert decision.reason_codes == ("MISSING_CHECKIN_INPUT",)

    def test_sick_without_checkin_still_recovers(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(is_sick_or_injured=True, has_checkin=False)
        )
        assert decision.tag == StatusTag.RECOVER
        assert decision.reason_codes == ("SICK_OR_INJURED",)

    def test_numpy_bool_sick_flag_recovers(self) -> None:
        decision = self.engine.compute_status(
            StatusInputs(is_sick_or_injured=np.bool_(True), readiness=9, acwr=1.0)
        )
        assert decision.tag == StatusTag.RECOVER

    def test_module_level_compute_status(self, golden_inputs) -> None:
        assert compute_status(golden_inputs).tag == StatusTag.PUSH


class TestDecisionTrace:
    def setup_method(self) -> None:
        self.engine = StatusEngine()

    def test_records_every_rule(self, golden_inputs) -> None:
        decision = self.engine.compute_status(golden_inputs)
        ids = [r.rule_id for r in decision.trace.rule_results]
        assert ids == self.engine.registry.cascade_ids()
        assert decision.trace.final_tag == StatusTag.PUSH

    def test_fired_and_skipped(self, golden_inputs) -> None:
        trace = self.engine.compute_status(golden_inputs).trace
        assert trace.fired_rule_ids == ("base_readiness",)
        statuses = {r.rule_id: r.status for r in trace.rule_results}
        assert statuses["sick_override"] == RuleStatus.SKIPPED
        assert statuses["lethargy_override"] == RuleStatus.NOT_APPLICABLE
        assert statuses["acwr_bounds"] == RuleStatus.SKIPPED

    def test_terminal_rule_stops_cascade(self) -> None:
        trace = self.engine.compute_status(StatusInputs(is_sick_or_injured=True, acwr=2.0)).trace
        assert trace.terminated_by == "sick_override"
        assert trace.fired_rule_ids == ("sick_override",)
        later = [r for r in trace.rule_results if r.rule_id != "sick_override"]
        assert all(r.status == RuleStatus.SKIPPED for r in later)

    def test_missing_checkin_terminates_cascade(self) -> None:
        trace = self.engine.compute_status(StatusInputs(readiness=None, has_checkin=False)).trace
        assert trace.terminated_by == "missing_checkin"
        assert trace.fired_rule_ids == ("missing_checkin",)
        assert trace.final_tag == StatusTag.MAINTAIN
        statuses = {r.rule_id: r.status for r in trace.rule_results}
        assert statuses["sick_override"] == RuleStatus.SKIPPED
        assert statuses["base_readiness"] == RuleStatus.SKIPPED
        assert len(trace.rule_results) == len(self.engine.registry.cascade_ids())

    def test_tag_transitions_recorded(self) -> None:
        trace = self.engine.compute_status(
            StatusInputs(acwr=0.7, readiness=8, red_flags_count=0, cycle_phase=CyclePhase.FOLLICULAR)
        ).trace
        bounds = next(r for r in trace.rule_results if r.rule_id == "acwr_bounds")
        assert bounds.tag_before == StatusTag.PUSH
        assert bounds.tag_after == StatusTag.MAINTAIN

    def test_custom_registry(self) -> None:
        registry = RuleRegistry()
        registry.register(BaseReadinessRule())
        engine = StatusEngine(registry=registry)
        decision = engine.compute_status(
            StatusInputs(acwr=None, readiness=8, red_flags_count=0, cycle_phase="Follicular")
        )
        # Without the fallback rule registered nothing caps the PUSH
        assert decision.tag == StatusTag.PUSH

    def test_empty_registry_defaults_to_maintain(self) -> None:
        decision = StatusEngine(registry=RuleRegistry()).compute_status(StatusInputs(readiness=9))
        assert decision.tag == StatusTag.MAINTAIN


class TestInvariants:
    """Properties that must hold over the whole input grid."""

    engine = StatusEngine()

    def test_idempotent(self) -> None:
        for inputs in itertools.islice(_input_grid(), 0, None, 97):
            assert self.engine.compute_status(inputs) == self.engine.compute_status(inputs)

    def test_sick_always_recovers(self) -> None:
        for inputs in _input_grid(is_sick_or_injured=True):
            assert self.engine.compute_status(inputs).tag == StatusTag.RECOVER
        unchecked = _input_grid(is_sick_or_injured=True, has_checkin=False)
        for inputs in itertools.islice(unchecked, 0, None, 7):
            assert self.engine.compute_status(inputs).tag == StatusTag.RECOVER

    @pytest.mark.parametrize("acwr", [1.51, 1.6, 3.0])
    def test_spike_ceiling(self, acwr) -> None:
        for inputs in _input_grid(acwr=acwr):
            assert self.engine.compute_status(inputs).tag == StatusTag.RECOVER

    def test_floor_never_pushes(self) -> None:
        for inputs in _input_grid(acwr=0.5):
            assert self.engine.compute_status(inputs).tag != StatusTag.PUSH

    def test_floor_turns_push_into_maintain(self) -> None:
        base_only = RuleRegistry()
        discovered = StatusEngine().registry
        for rule_id in ("base_readiness", "lethargy_override", "elite_rebound"):
            base_only.register(discovered.get(rule_id))
        pre_clamp = StatusEngine(registry=base_only)
        for inputs in _input_grid(acwr=0.5):
            if pre_clamp.compute_status(inputs).tag == StatusTag.PUSH:
                assert self.engine.compute_status(inputs).tag == StatusTag.MAINTAIN

    @pytest.mark.parametrize("acwr", [None, float("nan"), float("inf")])
    def test_no_ratio_never_pushes(self, acwr) -> None:
        for inputs in _input_grid(acwr=acwr):
            assert self.engine.compute_status(inputs).tag != StatusTag.PUSH

    def test_signal_matches_tag(self) -> None:
        expected = {
            StatusTag.PUSH: Signal.GREEN,
            StatusTag.MAINTAIN: Signal.ORANGE,
            StatusTag.RECOVER: Signal.RED,
            StatusTag.REST: Signal.RED,
        }
        for inputs in itertools.islice(_input_grid(), 0, None, 13):
            decision = self.engine.compute_status(inputs)
            assert decision.signal == expected[decision.tag]

    def test_every_decision_has_a_reason(self) -> None:
        for inputs in itertools.islice(_input_grid(), 0, None, 31):
            assert self.engine.compute_status(inputs).reasons
