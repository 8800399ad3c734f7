"""Tests for StatusInputs accessors and StatusDecision derived fields."""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from readiness_engine.models.enums import (
    CyclePhase,
    InstructionClass,
    Signal,
    StatusTag,
)
from readiness_engine.models.status import Reason, StatusDecision, StatusInputs


class TestStatusInputs:
    def test_non_finite_values_read_as_missing(self) -> None:
        inputs = StatusInputs(
            acwr=float("nan"),
            readiness=float("inf"),
            red_flags_count=None,
            hrv_vs_baseline_percent=float("-inf"),
        )
        assert inputs.acwr_value is None
        assert inputs.readiness_value is None
        assert inputs.red_flags_value is None
        assert inputs.hrv_percent_value is None

    def test_phase_parsed_from_label(self) -> None:
        assert StatusInputs(cycle_phase="follicular").phase == CyclePhase.FOLLICULAR
        assert StatusInputs(cycle_phase="Mid_Luteal").phase == CyclePhase.LUTEAL
        assert StatusInputs(cycle_phase="Unknown").phase is None

    def test_frozen(self) -> None:
        inputs = StatusInputs(acwr=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            inputs.acwr = 2.0  # type: ignore[misc]

    @pytest.mark.parametrize(
        "flag, expected", [(np.bool_(True), True), (np.bool_(False), False), (None, False), (1, True)]
    )
    def test_sick_flag_coerced_to_bool(self, flag, expected) -> None:
        inputs = StatusInputs(is_sick_or_injured=flag)
        assert type(inputs.is_sick_or_injured) is bool
        assert inputs.is_sick_or_injured is expected

    def test_checkin_present_by_default(self) -> None:
        assert StatusInputs().has_checkin is True


class TestStatusDecision:
    @pytest.mark.parametrize(
        "tag, signal, instruction",
        [
            (StatusTag.REST, Signal.RED, InstructionClass.NO_TRAINING),
            (StatusTag.RECOVER, Signal.RED, InstructionClass.ACTIVE_RECOVERY),
            (StatusTag.MAINTAIN, Signal.ORANGE, InstructionClass.MAINTAIN),
            (StatusTag.PUSH, Signal.GREEN, InstructionClass.HARD_PUSH),
        ],
    )
    def test_derived_fields(self, tag, signal, instruction) -> None:
        decision = StatusDecision(tag=tag)
        assert decision.signal == signal
        assert decision.instruction_class == instruction

    def test_reason_codes(self) -> None:
        decision = StatusDecision(
            tag=StatusTag.MAINTAIN,
            reasons=(Reason("NO_SPECIFIC_CONDITION"), Reason("NO_ACWR_NO_PUSH", "text")),
        )
        assert decision.reason_codes == ("NO_SPECIFIC_CONDITION", "NO_ACWR_NO_PUSH")
