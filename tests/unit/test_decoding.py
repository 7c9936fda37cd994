"""Unit tests for oracle reply decoding."""
import pytest

from batAgent.agents.decoding import (
    decode_capability_answer,
    decode_delegation,
    decode_tool_selection,
    strip_code_fences,
)
from batAgent.errors import OracleResponseUnparseable


class TestStripCodeFences:
    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}```') == '{"a": 1}'

    def test_plain_text_untouched(self):
        assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


class TestToolSelection:
    def test_valid(self):
        selection = decode_tool_selection('{"tool": "calc", "input": {"expression": "1+1"}}')
        assert selection.tool == "calc"
        assert selection.input == {"expression": "1+1"}

    def test_input_defaults_to_empty(self):
        assert decode_tool_selection('{"tool": "now"}').input == {}

    @pytest.mark.parametrize(
        "raw, reason",
        [
            ("use calc please", "invalid JSON"),
            ('["calc"]', "expected a JSON object"),
            ('{"input": {}}', "schema mismatch"),
            ('{"tool": ""}', "schema mismatch"),
            ('{"tool": "calc", "input": "2+2"}', "schema mismatch"),
        ],
    )
    def test_unparseable(self, raw, reason):
        with pytest.raises(OracleResponseUnparseable, match=reason) as exc_info:
            decode_tool_selection(raw)

        assert exc_info.value.kind == "tool selection"
        assert exc_info.value.raw_response == raw


class TestDelegationDecision:
    def test_wire_names(self):
        decision = decode_delegation(
            '{"shouldDelegate": true, "reason": "needs math", "targetAgentRole": "Analyst"}'
        )
        assert decision.should_delegate is True
        assert decision.reason == "needs math"
        assert decision.target_agent_role == "Analyst"

    def test_negative_decision_is_not_an_error(self):
        decision = decode_delegation('{"shouldDelegate": false}')
        assert decision.should_delegate is False
        assert decision.target_agent_role == ""

    def test_fenced(self):
        decision = decode_delegation('```json\n{"shouldDelegate": false, "reason": "", "targetAgentRole": ""}\n```')
        assert decision.should_delegate is False

    @pytest.mark.parametrize("raw", ["", "no", '{"reason": "x"}', "null"])
    def test_unparseable(self, raw):
        with pytest.raises(OracleResponseUnparseable) as exc_info:
            decode_delegation(raw)
        assert exc_info.value.kind == "delegation"


@pytest.mark.parametrize(
    "answer, expected",
    [("yes", True), ("Yes", True), ("\tYES\n", True), ("no", False), ("yes.", False), ("", False)],
)
def test_capability_answer(answer, expected):
    assert decode_capability_answer(answer) is expected
