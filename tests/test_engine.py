"""Tests for the parse pipeline: nil handling, default/prefault, Ref outputs, strict parse."""

import pytest

import zodkit as zk
from zodkit import IssueCode, ParseContext, Ref, ZodError


class TestDefaultAndPrefault:
    """Default short-circuits; prefault substitutes and re-validates."""

    def test_default_bypasses_minimum(self):
        """min(50).default(10) returns 10.0 for None without running the min check."""
        schema = zk.float64().min(50).default(10)

        value, error = schema.safe_parse(None)
        assert error is None
        assert value == 10.0
        assert isinstance(value, float)

    def test_default_left_alone_when_leaf_rejects_it(self):
        assert zk.int_().default("n/a").parse(None) == "n/a"

    def test_default_does_not_apply_to_present_values(self):
        """A present value still goes through the checks."""
        schema = zk.float64().min(50).default(10)

        _, error = schema.safe_parse(40)
        assert error is not None
        assert error.issues[0].code == IssueCode.TOO_SMALL
        assert error.issues[0].minimum == 50

    def test_prefault_triggers_only_on_nil(self):
        """Prefault replaces None and the substitute is validated."""
        schema = zk.float64().min(50).prefault(100)

        assert schema.parse(None) == 100.0
        assert isinstance(schema.parse(None), float)

        _, error = schema.safe_parse(10)
        assert error.codes == [IssueCode.TOO_SMALL]

    def test_failing_prefault_reports_validation_error(self):
        """No second fallback when the prefault itself is invalid."""
        schema = zk.float64().min(50).prefault(10)

        _, error = schema.safe_parse(None)
        assert error.codes == [IssueCode.TOO_SMALL]

    def test_default_wins_over_prefault(self):
        schema = zk.string().prefault("from prefault").default("from default")
        assert schema.parse(None) == "from default"

    def test_default_wins_over_nilable(self):
        """A nilable schema with a default returns the default for None."""
        schema = zk.string().nilable().default("x")
        assert schema.parse(None) == "x"

    def test_default_func_evaluated_each_time(self):
        calls = []

        def make():
            calls.append(1)
            return len(calls)

        schema = zk.int_().default_func(make)
        assert schema.parse(None) == 1
        assert schema.parse(None) == 2
        assert schema.parse(7) == 7
        assert len(calls) == 2

    def test_prefault_func(self):
        schema = zk.slice_(zk.string()).prefault_func(list)
        assert schema.parse(None) == []


class TestNilHandling:
    """Optional, nilable and non-optional flags."""

    def test_required_schema_rejects_none(self):
        _, error = zk.string().safe_parse(None)

        issue = error.issues[0]
        assert issue.code == IssueCode.INVALID_TYPE
        assert issue.expected == "string"
        assert issue.received == "nil"
        assert issue.message == "Invalid input: expected string, received nil"

    def test_optional_and_nilable_accept_none(self):
        assert zk.string().optional().parse(None) is None
        assert zk.string().nilable().parse(None) is None
        assert zk.string().nullish().parse(None) is None

    def test_non_optional_revokes_optional(self):
        schema = zk.string().optional().non_optional()

        _, error = schema.safe_parse(None)
        assert error.codes == [IssueCode.NON_OPTIONAL_ABSENT]
        assert error.issues[0].message == "Invalid input: expected string, received nil"
        assert schema.parse("ok") == "ok"

    def test_non_optional_beats_default(self):
        schema = zk.string().default("x").non_optional()

        _, error = schema.safe_parse(None)
        assert error.codes == [IssueCode.NON_OPTIONAL_ABSENT]

    def test_value_refine_skipped_for_none(self):
        """A value-constrained nilable schema does not run refinements on None."""
        schema = zk.string().nilable().refine(lambda v: v is not None, "required")
        assert schema.parse(None) is None

    def test_ref_refine_sees_none(self):
        """A Ref-constrained nilable schema runs its refinements on None too."""
        schema = zk.string_ptr().nilable().refine(lambda v: v is not None, "required")

        _, error = schema.safe_parse(None)
        assert error.codes == [IssueCode.CUSTOM]
        assert error.issues[0].message == "required"

    def test_refine_any_sees_none_on_ref_schema(self):
        seen = []
        schema = zk.int_ptr().nilable().refine_any(lambda v: seen.append(v) or True)
        assert schema.parse(None) is None
        assert seen == [None]

    def test_value_schema_skips_checks_for_none(self):
        seen = []
        schema = zk.int_().nilable().refine_any(lambda v: seen.append(v) or True)
        schema.parse(None)
        assert seen == []


class TestRefConstraint:
    """Ref boxes stand in for pointers."""

    def test_nilable_pointer_identity(self):
        """The Ref passed in is the Ref handed back."""
        schema = zk.float64_ptr().nilable()
        ref = Ref(3.14)

        out = schema.parse(ref)
        assert out is ref
        assert out.value == 3.14
        assert schema.parse(None) is None

    def test_pointer_identity_after_conversion(self):
        """Converted values are written back into the caller's Ref."""
        ref = Ref(2)
        out = zk.float64_ptr().parse(ref)
        assert out is ref
        assert isinstance(ref.value, float)

    def test_ptr_schema_boxes_plain_input(self):
        out = zk.string_ptr().parse("x")
        assert isinstance(out, Ref)
        assert out == Ref("x")

    def test_value_schema_unwraps_ref(self):
        assert zk.int_().parse(Ref(5)) == 5

    def test_ref_left_untouched_on_failure(self):
        ref = Ref("abc")
        _, error = zk.string_ptr().min(5).safe_parse(ref)
        assert error is not None
        assert ref.value == "abc"


class TestImmutability:
    """Modifiers never change the receiver."""

    def test_nilable_leaves_original_unchanged(self):
        base = zk.string()
        nilable = base.nilable()

        assert nilable.parse(None) is None
        _, error = base.safe_parse(None)
        assert error is not None

    @pytest.mark.parametrize("modify", [
        lambda s: s.optional(),
        lambda s: s.nilable(),
        lambda s: s.default("d"),
        lambda s: s.prefault("p"),
        lambda s: s.min(3),
        lambda s: s.refine(lambda v: False),
        lambda s: s.overwrite(str.upper),
        lambda s: s.describe("described"),
        lambda s: s.transform(len),
    ])
    def test_every_modifier_copies(self, modify):
        base = zk.string()
        before = [base.safe_parse(v) for v in (None, "ab", "abcd", 1)]
        modify(base)
        after = [base.safe_parse(v) for v in (None, "ab", "abcd", 1)]

        assert [r.value for r in before] == [r.value for r in after]
        assert [r.error.to_list() if r.error else None for r in before] == \
            [r.error.to_list() if r.error else None for r in after]
        assert base.internals.checks == []

    def test_check_list_not_shared(self):
        base = zk.int_().min(1)
        narrowed = base.max(5)
        assert len(narrowed.internals.checks) == len(base.internals.checks) + 1


class TestUniversalProperties:
    def test_parse_is_idempotent(self):
        schema = zk.object_({
            "name": zk.string().trim(),
            "age": zk.coerce.int_(),
            "role": zk.string().default("user"),
        })
        first = schema.parse({"name": "  ada ", "age": "36"})
        assert first == {"name": "ada", "age": 36, "role": "user"}
        assert schema.parse(first) == first

    def test_issue_stability(self):
        schema = zk.object_({"a": zk.int_().min(3), "b": zk.slice_(zk.string())})
        data = {"a": 1, "b": ["x", 2], "c": True}

        first = schema.safe_parse(data).error.to_list()
        second = schema.safe_parse(data).error.to_list()
        assert first == second

    def test_issue_order_follows_traversal(self):
        schema = zk.object_({"a": zk.string(), "b": zk.string(), "c": zk.string()})
        _, error = schema.safe_parse({"a": 1, "b": "ok", "c": 2})
        assert [issue.path for issue in error.issues] == [("a",), ("c",)]


class TestChecksAndCoercion:
    def test_checks_run_in_declaration_order(self):
        schema = zk.string().trim().min(1)
        _, error = schema.safe_parse("   ")
        assert error.codes == [IssueCode.TOO_SMALL]

    def test_all_failing_checks_are_collected(self):
        schema = zk.string().min(5).regex(r"^\d+$")
        _, error = schema.safe_parse("ab")
        assert error.codes == [IssueCode.TOO_SMALL, IssueCode.INVALID_FORMAT]

    def test_abort_stops_later_checks(self):
        schema = zk.string().min(5, abort=True).regex(r"^\d+$")
        _, error = schema.safe_parse("ab")
        assert error.codes == [IssueCode.TOO_SMALL]

    def test_when_skips_check(self):
        schema = zk.int_().refine(lambda v: v % 2 == 0, when=lambda payload: payload.value > 10)
        assert schema.parse(3) == 3
        assert schema.safe_parse(11).error is not None

    def test_failed_coercion_is_invalid_type(self):
        _, error = zk.coerce.int_().safe_parse("twelve")
        assert error.codes == [IssueCode.INVALID_TYPE]
        assert error.issues[0].received == "string"

    def test_check_can_emit_several_issues(self):
        def check(payload):
            payload.add_issue("first")
            payload.add_issue({"code": "custom", "message": "second", "path": ["x"]})

        _, error = zk.any_().check(check).safe_parse({})
        assert [i.message for i in error.issues] == ["first", "second"]
        assert error.issues[1].path == ("x",)

    def test_refine_with_custom_path_and_params(self):
        schema = zk.object_({"a": zk.string(), "b": zk.string()}).refine(
            lambda v: v["a"] == v["b"],
            {"error": "must match", "path": ["b"], "params": {"rule": "eq"}},
        )
        _, error = schema.safe_parse({"a": "x", "b": "y"})
        issue = error.issues[0]
        assert issue.path == ("b",)
        assert issue.message == "must match"
        assert issue.params == {"rule": "eq"}

    def test_refine_value_error_becomes_custom_issue(self):
        def fail(value):
            raise ValueError("no thanks")

        _, error = zk.string().refine(fail).safe_parse("x")
        assert error.issues[0].code == IssueCode.CUSTOM
        assert error.issues[0].message == "no thanks"

    def test_refine_other_exceptions_propagate(self):
        def boom(value):
            raise KeyError("boom")

        with pytest.raises(KeyError):
            zk.string().refine(boom).safe_parse("x")


class TestStrictParse:
    def test_strict_parse_runs_checks(self):
        _, error = zk.int_().min(5).safe_strict_parse(3)
        assert error.codes == [IssueCode.TOO_SMALL]

    def test_strict_parse_skips_type_recognition(self):
        assert zk.string().strict_parse("ok") == "ok"

    def test_strict_parse_validates_children(self):
        schema = zk.object_({"a": zk.int_()})
        with pytest.raises(ZodError):
            schema.strict_parse({"a": "x"})


class TestParseSurface:
    def test_parse_raises_zod_error(self):
        with pytest.raises(ZodError) as excinfo:
            zk.int_().parse("x")
        assert isinstance(excinfo.value, ValueError)

    def test_safe_parse_result_shape(self):
        result = zk.int_().safe_parse(1)
        assert result.success
        assert result == (1, None)

    def test_parse_any_matches_safe_parse(self):
        assert zk.int_().parse_any(1) == zk.int_().safe_parse(1)

    def test_context_path_prefixes_issues(self):
        ctx = ParseContext(path=("root", 0))
        _, error = zk.int_().safe_parse("x", ctx)
        assert error.issues[0].path == ("root", 0)

    def test_report_input(self):
        _, error = zk.int_().safe_parse("x", ParseContext(report_input=True))
        assert error.issues[0].input == "x"
        _, error = zk.int_().safe_parse("x")
        assert error.issues[0].input is None
