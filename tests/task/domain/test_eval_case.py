"""Tests for EvalCase."""

import pytest
from pydantic import ValidationError

from eval_express.task.domain.eval_case import RESERVED_EVAL_KEYS, EvalCase


class TestEvalCaseFields:
    def test_extra_keys_are_kept(self) -> None:
        case = EvalCase(input="hi", expected_output="HI", temperature=0.0)

        assert case.fields()["temperature"] == 0.0

    def test_fields_include_declared_keys(self) -> None:
        case = EvalCase(id="x", input="hi", expected_output="HI")

        fields = case.fields()

        assert fields["id"] == "x"
        assert fields["input"] == "hi"
        assert fields["expected_output"] == "HI"
        assert fields["scorer"] is None

    def test_expected_output_may_be_none(self) -> None:
        assert EvalCase(input=1, expected_output=None).expected_output is None

    def test_input_is_required(self) -> None:
        with pytest.raises(ValidationError):
            EvalCase(expected_output="x")  # type: ignore[call-arg]

    def test_is_frozen(self) -> None:
        case = EvalCase(input=1, expected_output=1)

        with pytest.raises(ValidationError):
            case.input = 2  # type: ignore[misc]


class TestReservedKeys:
    def test_reserved_set(self) -> None:
        assert RESERVED_EVAL_KEYS == {
            "id",
            "name",
            "input",
            "expected_output",
            "scorer",
            "metadata",
        }
