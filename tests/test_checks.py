"""Tests for the check catalog and its option handling."""

import pytest

from zodkit import CheckParams, IssueCode, ParseContext, ParsePayload
from zodkit.kernel.checks import (
    CheckDefinition,
    CustomCheck,
    MinSize,
    MultipleOfCheck,
    OneOfCheck,
    OverwriteCheck,
    RangeCheck,
    UniqueCheck,
    call_with_optional_context,
    normalize_check_params,
    run_checks,
    same_value,
)
from zodkit.kernel.internals import SchemaInternals
from zodkit.codes import TypeCode


def _payload(value):
    return ParsePayload(value)


class TestCheckParams:
    def test_message_shorthand(self):
        params = normalize_check_params("too short")
        assert params.error is not None
        assert params.abort is False

    def test_mapping_and_keywords(self):
        params = normalize_check_params({"abort": True}, path=["x"])
        assert params.abort is True
        assert params.path == ["x"]

    def test_keywords_win(self):
        assert normalize_check_params({"abort": True}, abort=False).abort is False

    def test_existing_params_pass_through(self):
        original = CheckParams(abort=True)
        assert normalize_check_params(original).abort is True

    def test_unknown_form_rejected(self):
        with pytest.raises(TypeError):
            normalize_check_params(42)


class TestRunChecks:
    def test_collects_every_failure(self):
        payload = _payload("ab")
        checks = [MinSize(3, "string"), MinSize(5, "string")]
        run_checks(checks, payload, ParseContext())
        assert [issue.code for issue in payload.issues] == [IssueCode.TOO_SMALL, IssueCode.TOO_SMALL]

    def test_abort_stops_after_failure(self):
        payload = _payload("ab")
        checks = [MinSize(3, "string", CheckParams(abort=True)), MinSize(5, "string")]
        run_checks(checks, payload, ParseContext())
        assert len(payload.issues) == 1

    def test_abort_only_on_failure(self):
        payload = _payload("abcd")
        checks = [MinSize(3, "string", CheckParams(abort=True)), MinSize(5, "string")]
        run_checks(checks, payload, ParseContext())
        assert payload.issues[0].get("minimum") == 5

    def test_when_predicate(self):
        check = MinSize(3, "string", CheckParams(when=lambda payload: payload.value != "ok"))
        payload = _payload("ok")
        run_checks([check], payload, ParseContext())
        assert payload.issues == []

    def test_check_error_sets_message(self):
        payload = _payload("ab")
        run_checks([MinSize(3, "string", normalize_check_params("short"))], payload, ParseContext())
        assert payload.issues[0].message == "short"
        assert payload.issues[0].inst is not None


class TestCatalog:
    def test_range_check_records_bound(self):
        internals = SchemaInternals(TypeCode.INT)
        internals.add_check(RangeCheck("gte", 3, "number"))
        assert internals.bag["minimum"] == 3

    def test_range_check_rejects_unknown_kind(self):
        with pytest.raises(ValueError):
            RangeCheck("between", 3, "number")

    def test_multiple_of_zero_rejected(self):
        with pytest.raises(ValueError):
            MultipleOfCheck(0, "number")

    def test_unique_handles_unhashable_items(self):
        payload = _payload([{"a": 1}, {"a": 1}, {"b": 2}])
        UniqueCheck().apply(payload, ParseContext())
        assert payload.issues[0].get("duplicates") == [{"a": 1}]

    def test_one_of_aborts(self):
        assert OneOfCheck(["a"]).abort is True

    def test_overwrite_replaces_value(self):
        payload = _payload(" a ")
        OverwriteCheck(str.strip).apply(payload, ParseContext())
        assert payload.value == "a"
        assert payload.issues == []

    def test_definitions(self):
        assert MinSize(3, "string").definition() == CheckDefinition("min_size", {"minimum": 3, "origin": "string"})
        assert OneOfCheck(["a", "b"]).definition().params == {"values": ["a", "b"]}


class TestCustomCheck:
    def test_refine_mode_path_and_code(self):
        params = CheckParams(path=["field"], params={"hint": "x"}, code=IssueCode.INVALID_VALUE)
        payload = _payload(1)
        CustomCheck(lambda v: False, params).apply(payload, ParseContext())

        issue = payload.issues[0]
        assert issue.code == IssueCode.INVALID_VALUE
        assert issue.path == ["field"]
        assert issue.get("hint") == "x"

    def test_check_mode_adds_own_issues(self):
        def check(payload):
            payload.add_issue("one")
            payload.add_issue("two")

        payload = _payload(1)
        CustomCheck(check, mode="check").apply(payload, ParseContext())
        assert [issue.message for issue in payload.issues] == ["one", "two"]

    def test_value_error_becomes_issue(self):
        def fail(value):
            raise ValueError("bad value")

        payload = _payload(1)
        CustomCheck(fail).apply(payload, ParseContext())
        assert payload.issues[0].message == "bad value"


class TestHelpers:
    @pytest.mark.parametrize("a, b, expected", [
        (1, 1, True),
        (1, True, False),
        (True, True, True),
        (0, False, False),
        ("a", "a", True),
        (1, 1.0, True),
    ])
    def test_same_value(self, a, b, expected):
        assert same_value(a, b) is expected

    def test_call_with_optional_context(self):
        assert call_with_optional_context(lambda v: v + 1, 1, "ctx") == 2
        assert call_with_optional_context(lambda v, ctx: (v, ctx), 1, "ctx") == (1, "ctx")
        assert call_with_optional_context(lambda *args: args, 1, "ctx") == (1, "ctx")
