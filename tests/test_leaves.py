"""Tests for leaf schemas: strings, numbers, booleans, time, enums, literals and special leaves."""

import datetime
import math
from enum import Enum

import pytest

import zodkit as zk
from zodkit import IssueCode

UTC = datetime.timezone.utc


class Color(Enum):
    RED = "red"
    GREEN = "green"


class TestString:
    def test_accepts_only_str(self):
        assert zk.string().parse("x") == "x"
        _, error = zk.string().safe_parse(5)
        assert error.issues[0].message == "Invalid input: expected string, received int"

    def test_length_messages(self):
        _, error = zk.string().min(3).safe_parse("ab")
        assert error.issues[0].message == "Too small: expected string to have at least 3 characters"

        _, error = zk.string().max(1).safe_parse("ab")
        assert error.issues[0].message == "Too big: expected string to have at most 1 characters"

        _, error = zk.string().length(3).safe_parse("ab")
        assert error.issues[0].message == "Too small: expected string to have exactly 3 characters"

    def test_prefix_suffix_includes(self):
        _, error = zk.string().starts_with("ab").safe_parse("xyz")
        issue = error.issues[0]
        assert issue.code == IssueCode.INVALID_FORMAT
        assert issue.format == "starts_with"
        assert issue.message == 'Invalid string: must start with "ab"'
        assert issue.params["prefix"] == "ab"

        assert zk.string().ends_with("z").parse("xyz") == "xyz"
        _, error = zk.string().includes("q").safe_parse("xyz")
        assert error.issues[0].message == 'Invalid string: must include "q"'

    def test_regex(self):
        schema = zk.string().regex(r"^\d{3}$")
        assert schema.parse("123") == "123"
        _, error = schema.safe_parse("12a")
        assert error.issues[0].pattern == r"^\d{3}$"

    def test_case_checks(self):
        assert zk.string().lowercase().safe_parse("Abc").error is not None
        assert zk.string().uppercase().parse("ABC") == "ABC"

    def test_trim_runs_before_later_checks(self):
        schema = zk.string().trim().min(2)
        assert schema.parse("  ab ") == "ab"
        assert schema.safe_parse(" a ").error.codes == [IssueCode.TOO_SMALL]

    def test_case_overwrites(self):
        assert zk.string().to_lower_case().parse("ABC") == "abc"
        assert zk.string().to_upper_case().parse("abc") == "ABC"

    @pytest.mark.parametrize("method, good, bad", [
        ("email", "ada@example.com", "not-an-email"),
        ("url", "https://example.com/path", "example"),
        ("uuid", "123e4567-e89b-12d3-a456-426614174000", "123e4567"),
        ("ipv4", "192.168.0.1", "256.0.0.1"),
        ("ipv6", "::1", "1.2.3.4"),
        ("cidrv4", "10.0.0.0/8", "10.0.0.0"),
        ("cidrv6", "2001:db8::/32", "2001:db8::"),
        ("base64", "aGVsbG8=", "aGVsbG8"),
        ("e164", "+14155552671", "14155552671"),
        ("iso_date", "2024-02-29", "2023-02-29"),
        ("iso_time", "10:30:00", "25:00"),
        ("iso_datetime", "2024-01-01T10:00:00Z", "2024-01-01 10:00"),
        ("iso_duration", "P1DT2H", "1 day"),
        ("ulid", "01ARZ3NDEKTSV4RRFFQ69G5FAV", "01ARZ3NDEK"),
        ("nanoid", "V1StGXR8_Z5jdHi6B-myT", "short"),
        ("jwt", "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.e30.c2ln", "a.b"),
    ])
    def test_formats(self, method, good, bad):
        schema = getattr(zk.string(), method)()
        assert schema.parse(good) == good
        _, error = schema.safe_parse(bad)
        assert error.codes == [IssueCode.INVALID_FORMAT]

    def test_format_messages(self):
        _, error = zk.string().email().safe_parse("x")
        assert error.issues[0].message == "Invalid email address"
        assert error.issues[0].format == "email"

    def test_coerce(self):
        assert zk.coerce.string().parse(12) == "12"
        assert zk.coerce.string().parse(True) == "true"
        assert zk.coerce.string().parse(2.0) == "2"


class TestInteger:
    def test_rejects_bool_and_float(self):
        _, error = zk.int_().safe_parse(True)
        assert error.issues[0].received == "bool"
        _, error = zk.int_().safe_parse(1.5)
        assert error.issues[0].received == "float"

    def test_width_bounds(self):
        _, error = zk.int8().safe_parse(200)
        issue = error.issues[0]
        assert issue.code == IssueCode.TOO_BIG
        assert issue.maximum == 127

        _, error = zk.uint8().safe_parse(-1)
        assert error.issues[0].code == IssueCode.TOO_SMALL
        assert zk.uint64().parse(2 ** 64 - 1) == 2 ** 64 - 1

    def test_bigint_is_unbounded(self):
        assert zk.bigint().parse(2 ** 100) == 2 ** 100
        _, error = zk.bigint().positive().safe_parse(0)
        assert error.issues[0].origin == "bigint"

    def test_coerce(self):
        assert zk.coerce.int_().parse("42") == 42
        assert zk.coerce.int_().parse(3.0) == 3
        assert zk.coerce.int_().safe_parse(3.5).error is not None
        assert zk.coerce.int_().safe_parse(True).error.codes == [IssueCode.INVALID_TYPE]

    def test_range_checks(self):
        _, error = zk.int_().positive().safe_parse(0)
        issue = error.issues[0]
        assert issue.inclusive is False
        assert issue.message == "Too small: expected number to be more than 0"

        assert zk.int_().non_negative().parse(0) == 0
        assert zk.int_().lt(5).safe_parse(5).error.codes == [IssueCode.TOO_BIG]

    def test_multiple_of(self):
        _, error = zk.int_().multiple_of(3).safe_parse(7)
        assert error.issues[0].code == IssueCode.NOT_MULTIPLE_OF
        assert error.issues[0].message == "Invalid number: must be a multiple of 3"
        assert zk.int_().step(3).parse(9) == 9

    def test_safe(self):
        assert zk.int_().safe().safe_parse(2 ** 60).error.codes == [IssueCode.TOO_BIG]

    def test_bounds_exposed(self):
        schema = zk.int_().min(5).max(10)
        assert schema.min_value == 5
        assert schema.max_value == 10


class TestFloat:
    def test_widens_ints(self):
        out = zk.float64().parse(3)
        assert out == 3.0
        assert isinstance(out, float)

    def test_rejects_nan(self):
        _, error = zk.float64().safe_parse(math.nan)
        assert error.issues[0].received == "NaN"

    def test_finite(self):
        assert zk.float64().parse(math.inf) == math.inf
        assert zk.float64().finite().safe_parse(math.inf).error is not None

    def test_integer(self):
        assert zk.float64().integer().parse(2.0) == 2.0
        _, error = zk.float64().integer().safe_parse(1.5)
        assert error.issues[0].expected == "int"

    def test_float_multiple_of(self):
        assert zk.float64().multiple_of(0.1).parse(0.3) == 0.3

    def test_float32_bounds(self):
        assert zk.float32().safe_parse(1e39).error.codes == [IssueCode.TOO_BIG]

    def test_coerce(self):
        assert zk.coerce.float64().parse("1.5") == 1.5
        assert zk.coerce.number().parse(True) == 1.0
        assert zk.coerce.float64().safe_parse("abc").error.codes == [IssueCode.INVALID_TYPE]


class TestComplex:
    def test_promotes_reals(self):
        assert zk.complex128().parse(1) == complex(1, 0)
        assert zk.complex_().parse(1 + 2j) == 1 + 2j
        assert zk.complex64().safe_parse(True).error is not None

    def test_coerce(self):
        assert zk.coerce.complex128().parse("1+2j") == 1 + 2j


class TestBool:
    def test_strict_recognition(self):
        assert zk.bool_().parse(False) is False
        assert zk.bool_().safe_parse(1).error.issues[0].received == "int"

    def test_coerce(self):
        assert zk.coerce.bool_().parse("yes") is True
        assert zk.coerce.bool_().parse("off") is False
        assert zk.coerce.bool_().parse(0) is False
        assert zk.coerce.bool_().safe_parse("maybe").error.codes == [IssueCode.INVALID_TYPE]


class TestStringBool:
    """Booleans spelled as strings."""

    @pytest.mark.parametrize("text, expected", [
        ("true", True),
        ("YES", True),
        ("On", True),
        ("enabled", True),
        ("false", False),
        ("0", False),
        ("off", False),
        ("Disabled", False),
    ])
    def test_default_spellings(self, text, expected):
        assert zk.stringbool().parse(text) is expected

    def test_unknown_spelling_is_invalid_value(self):
        _, error = zk.stringbool().safe_parse("maybe")
        issue = error.issues[0]
        assert issue.code == IssueCode.INVALID_VALUE
        assert "yes" in issue.values
        assert "no" in issue.values

    def test_non_string_is_invalid_type(self):
        _, error = zk.stringbool().safe_parse(True)
        assert error.codes == [IssueCode.INVALID_TYPE]
        assert error.issues[0].expected == "stringbool"

    def test_custom_spellings_case_sensitive(self):
        schema = zk.stringbool(truthy=["Y"], falsy=["N"], case="sensitive")
        assert schema.parse("Y") is True
        assert schema.parse("N") is False
        assert schema.safe_parse("y").error.codes == [IssueCode.INVALID_VALUE]
        assert schema.safe_parse("true").error.codes == [IssueCode.INVALID_VALUE]

    def test_unknown_case_mode_rejected(self):
        with pytest.raises(ValueError):
            zk.stringbool(case="upper")

    def test_coerce_stringifies_but_refuses_bools(self):
        assert zk.coerce.stringbool().parse(1) is True
        assert zk.coerce.stringbool().parse(0) is False
        assert zk.coerce.stringbool().safe_parse(True).error.codes == [IssueCode.INVALID_TYPE]

    def test_refinements_see_the_boolean(self):
        seen = []
        schema = zk.stringbool().refine(lambda v: seen.append(v) or v, "must be on")

        assert schema.parse("on") is True
        _, error = schema.safe_parse("off")
        assert error.issues[0].message == "must be on"
        assert seen == [True, False]

    def test_schema_error_overrides_invalid_value(self):
        assert zk.stringbool("yes or no please").safe_parse("maybe").error.issues[0].message == "yes or no please"


class TestTime:
    def test_accepts_datetime(self):
        moment = datetime.datetime(2024, 1, 1, tzinfo=UTC)
        assert zk.time().parse(moment) is moment
        assert zk.time().safe_parse("2024-01-01").error.issues[0].expected == "time"

    def test_coerce_iso_with_z(self):
        out = zk.coerce.time().parse("2024-01-01T12:00:00Z")
        assert out == datetime.datetime(2024, 1, 1, 12, tzinfo=UTC)

    def test_coerce_timestamp(self):
        assert zk.coerce.time().parse(0) == datetime.datetime(1970, 1, 1, tzinfo=UTC)

    def test_bounds(self):
        start = datetime.datetime(2024, 1, 1, tzinfo=UTC)
        schema = zk.coerce.time().min(start)

        _, error = schema.safe_parse("2023-06-01T00:00:00Z")
        issue = error.issues[0]
        assert issue.code == IssueCode.TOO_SMALL
        assert issue.origin == "time"
        assert issue.message == "Too small: expected time to be at least 2024-01-01T00:00:00+00:00"

        assert zk.time().before(start).safe_parse(start + datetime.timedelta(days=1)).error is not None

    def test_naive_bound_against_coerced_aware_value(self):
        """Coerced timestamps are UTC-aware; a naive bound is read as UTC."""
        schema = zk.coerce.time().min(datetime.datetime(2020, 1, 1))

        assert schema.parse("2021-01-01T00:00:00Z") == datetime.datetime(2021, 1, 1, tzinfo=UTC)
        assert schema.parse(1609459200) == datetime.datetime(2021, 1, 1, tzinfo=UTC)

        _, error = schema.safe_parse("2019-12-31T23:59:59Z")
        assert error.codes == [IssueCode.TOO_SMALL]
        assert error.issues[0].minimum == datetime.datetime(2020, 1, 1)

    def test_aware_bound_against_naive_value(self):
        schema = zk.time().max(datetime.datetime(2024, 1, 1, tzinfo=UTC))

        assert schema.parse(datetime.datetime(2023, 1, 1)) == datetime.datetime(2023, 1, 1)
        assert schema.safe_parse(datetime.datetime(2025, 1, 1)).error.codes == [IssueCode.TOO_BIG]


class TestEnum:
    def test_membership(self):
        schema = zk.enum("a", "b")
        assert schema.parse("a") == "a"

        _, error = schema.safe_parse("c")
        issue = error.issues[0]
        assert issue.code == IssueCode.INVALID_VALUE
        assert issue.values == ("a", "b")
        assert issue.message == 'Invalid option: expected one of "a"|"b"'

    def test_wrong_type_is_invalid_value(self):
        assert zk.enum("a", "b").safe_parse(1).error.codes == [IssueCode.INVALID_VALUE]

    def test_list_form(self):
        assert zk.enum(["a", "b"]).options == ("a", "b")

    def test_extract_and_exclude(self):
        schema = zk.enum("a", "b", "c")
        assert schema.extract(["a", "b"]).options == ("a", "b")
        assert schema.exclude(["a"]).options == ("b", "c")
        assert schema.exclude(["a"]).safe_parse("a").error is not None

    def test_enum_view(self):
        assert zk.enum("a", "b").enum == {"a": "a", "b": "b"}
        assert zk.native_enum(Color).enum == {"RED": "red", "GREEN": "green"}

    def test_native_enum_outputs_members(self):
        schema = zk.native_enum(Color)
        assert schema.parse("red") is Color.RED
        assert schema.parse(Color.GREEN) is Color.GREEN
        assert schema.safe_parse("blue").error.codes == [IssueCode.INVALID_VALUE]

    def test_empty_enum_is_deferred_error(self):
        schema = zk.enum()
        _, error = schema.safe_parse("a")
        assert error.codes == [IssueCode.CONSTRUCTION_FAILED]
        assert error.issues[0].message.startswith("Invalid schema:")


class TestLiteral:
    def test_single_value(self):
        schema = zk.literal("a")
        assert schema.value == "a"
        assert schema.parse("a") == "a"
        assert schema.safe_parse("b").error.issues[0].message == 'Invalid input: expected "a"'

    def test_bool_and_int_are_distinct(self):
        assert zk.literal(1).safe_parse(True).error.codes == [IssueCode.INVALID_VALUE]
        assert zk.literal(True).safe_parse(1).error.codes == [IssueCode.INVALID_VALUE]
        assert zk.literal(1).parse(1) == 1

    def test_several_values(self):
        schema = zk.literal("a", 2)
        assert schema.values == ("a", 2)
        assert schema.parse(2) == 2


class TestSpecialLeaves:
    def test_nil(self):
        assert zk.nil().parse(None) is None
        _, error = zk.nil().safe_parse(0)
        assert error.issues[0].expected == "nil"

    def test_any_and_unknown(self):
        for schema in (zk.any_(), zk.unknown()):
            assert schema.parse(None) is None
            assert schema.parse({"x": 1}) == {"x": 1}

    def test_never(self):
        assert zk.never().safe_parse(1).error.issues[0].expected == "never"
        assert zk.never().safe_parse(None).error is not None

    def test_custom(self):
        schema = zk.custom(lambda v: isinstance(v, int) and v > 0, "positive only")
        assert schema.parse(3) == 3
        _, error = schema.safe_parse(-1)
        assert error.issues[0].code == IssueCode.CUSTOM
        assert error.issues[0].message == "positive only"

    def test_custom_without_predicate(self):
        assert zk.custom().parse(object) is object
