"""Tests for formstate.validation: rules, schemas, and evaluate()."""

from datetime import date

import pytest

from formstate.errors import SchemaError
from formstate.validation import (
    Schema,
    UploadedFile,
    ValidationResult,
    blood_group,
    email,
    evaluate,
    future_date,
    matches,
    matches_field,
    max_length,
    min_length,
    number_range,
    password,
    phone,
    registration_schema,
    required,
    time_of_day,
    upload,
    url,
    validate,
    when,
)

NO_VALUES: dict[str, object] = {}

# ---------------------------------------------------------------------------
# Individual rule tests
# ---------------------------------------------------------------------------


class TestRequired:
    def test_empty_string(self) -> None:
        assert required("Email")("", NO_VALUES) == "Email is required"

    def test_whitespace_only(self) -> None:
        assert required()("   ", NO_VALUES) == "This field is required"

    def test_none(self) -> None:
        assert required()(None, NO_VALUES) is not None

    def test_false(self) -> None:
        assert required()(False, NO_VALUES) is not None

    def test_empty_list(self) -> None:
        assert required()([], NO_VALUES) is not None

    def test_zero_is_present(self) -> None:
        assert required()(0, NO_VALUES) is None

    def test_valid(self) -> None:
        assert required()("hello", NO_VALUES) is None


class TestLength:
    def test_min_below(self) -> None:
        assert min_length(2, "Name")("a", NO_VALUES) == "Name must be at least 2 characters"

    def test_min_at(self) -> None:
        assert min_length(2)("ab", NO_VALUES) is None

    def test_min_skips_empty(self) -> None:
        assert min_length(2)("", NO_VALUES) is None

    def test_max_exceeds(self) -> None:
        assert max_length(5, "Name")("123456", NO_VALUES) == "Name must not exceed 5 characters"

    def test_max_at(self) -> None:
        assert max_length(5)("12345", NO_VALUES) is None

    def test_numbers_have_no_length(self) -> None:
        assert min_length(1, "Age")(25, NO_VALUES) is None
        assert max_length(1, "Age")(250, NO_VALUES) is None

    def test_numeric_field_in_schema(self) -> None:
        errors = evaluate({"age": [required("Age"), min_length(1, "Age")]}, {"age": 25})
        assert errors == {}


class TestEmail:
    def test_valid(self) -> None:
        assert email()("donor@example.com", NO_VALUES) is None

    def test_missing_at(self) -> None:
        assert email()("donorexample.com", NO_VALUES) == "Please enter a valid email address"

    def test_missing_tld(self) -> None:
        assert email()("donor@example", NO_VALUES) is not None

    def test_empty_passes(self) -> None:
        assert email()("", NO_VALUES) is None

    def test_trailing_newline_rejected(self) -> None:
        assert email()("a@b.co\n", NO_VALUES) is not None


class TestPhone:
    def test_local(self) -> None:
        assert phone()("01712345678", NO_VALUES) is None

    def test_with_country_code(self) -> None:
        assert phone()("+8801712345678", NO_VALUES) is None

    def test_bad_operator_prefix(self) -> None:
        assert phone()("01212345678", NO_VALUES) is not None

    def test_too_short(self) -> None:
        assert phone()("0171234", NO_VALUES) is not None

    def test_trailing_newline_rejected(self) -> None:
        assert phone()("01712345678\n", NO_VALUES) is not None


class TestUrl:
    def test_valid_https(self) -> None:
        assert url()("https://example.com/donors", NO_VALUES) is None

    def test_no_scheme(self) -> None:
        assert url()("example.com", NO_VALUES) is not None


class TestTimeOfDay:
    @pytest.mark.parametrize("value", ["09:30", "9:05", "23:59", "00:00"])
    def test_valid(self, value: str) -> None:
        assert time_of_day()(value, NO_VALUES) is None

    @pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "09:30\n"])
    def test_invalid(self, value: str) -> None:
        assert time_of_day()(value, NO_VALUES) is not None


class TestMatches:
    def test_valid_pattern(self) -> None:
        assert matches(r"^\d{3}$")("123", NO_VALUES) is None

    def test_whole_value_must_match(self) -> None:
        assert matches(r"\d{3}")("1234", NO_VALUES) is not None

    def test_trailing_newline_rejected(self) -> None:
        assert matches(r"^\d{3}$")("123\n", NO_VALUES) is not None

    def test_custom_message(self) -> None:
        assert matches(r"^\d+$", message="Numbers only")("abc", NO_VALUES) == "Numbers only"


class TestBloodGroup:
    @pytest.mark.parametrize("group", ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"])
    def test_all_groups(self, group: str) -> None:
        assert blood_group()(group, NO_VALUES) is None

    def test_unknown_group(self) -> None:
        assert blood_group()("C+", NO_VALUES) == "Please select a valid blood group"


class TestPassword:
    def test_too_short(self) -> None:
        assert password()("abc", NO_VALUES) == "Password must be at least 6 characters long"

    def test_long_enough(self) -> None:
        assert password()("abcdef", NO_VALUES) is None

    def test_first_unmet_requirement_reported(self) -> None:
        rule = password(8, require_uppercase=True, require_numbers=True)
        assert rule("abcdefgh", NO_VALUES) == "Password must contain at least one uppercase letter"
        assert rule("Abcdefgh", NO_VALUES) == "Password must contain at least one number"
        assert rule("Abcdefg1", NO_VALUES) is None

    def test_special(self) -> None:
        rule = password(require_special=True)
        assert rule("abcdef", NO_VALUES) is not None
        assert rule("abc!def", NO_VALUES) is None


class TestFutureDate:
    @staticmethod
    def _today() -> date:
        return date(2026, 3, 10)

    def test_today_allowed(self) -> None:
        assert future_date(today=self._today)("2026-03-10", NO_VALUES) is None

    def test_past_rejected(self) -> None:
        assert future_date(today=self._today)("2026-03-09", NO_VALUES) == "Date cannot be in the past"

    def test_date_object(self) -> None:
        assert future_date(today=self._today)(date(2026, 4, 1), NO_VALUES) is None

    def test_garbage_rejected(self) -> None:
        assert future_date(today=self._today)("next tuesday", NO_VALUES) is not None


class TestNumberRange:
    def test_within(self) -> None:
        assert number_range(1, 10, "Units")(5, NO_VALUES) is None

    def test_below(self) -> None:
        assert number_range(min=1, label="Units")(0, NO_VALUES) == "Units must be at least 1"

    def test_above(self) -> None:
        assert number_range(max=10, label="Units")("11", NO_VALUES) == "Units must not exceed 10"

    def test_not_a_number(self) -> None:
        assert number_range(1, 10, "Units")("many", NO_VALUES) == "Units must be a number"


class TestUpload:
    def test_valid_image(self) -> None:
        file = UploadedFile("avatar.PNG", "image/png", 1024)
        assert upload()(file, NO_VALUES) is None

    def test_too_large(self) -> None:
        file = UploadedFile("avatar.png", "image/png", 3 * 1024 * 1024)
        assert upload()(file, NO_VALUES) == "File size must be less than 2MB"

    def test_wrong_type(self) -> None:
        file = UploadedFile("report.pdf", "application/pdf", 1024)
        assert upload()(file, NO_VALUES) == "File type must be one of: image/jpeg, image/png, image/gif"

    def test_wrong_extension(self) -> None:
        file = UploadedFile("avatar.bmp", "image/png", 1024)
        assert upload()(file, NO_VALUES) is not None

    def test_no_file(self) -> None:
        assert upload()(None, NO_VALUES) is None


class TestCrossField:
    def test_matches_field(self) -> None:
        rule = matches_field("password", "Passwords do not match")
        assert rule("xyz", {"password": "abc"}) == "Passwords do not match"
        assert rule("abc", {"password": "abc"}) is None

    def test_when_inactive(self) -> None:
        rule = when(lambda values: values.get("status") == "inprogress", required("Hospital"))
        assert rule("", {"status": "pending"}) is None

    def test_when_active(self) -> None:
        rule = when(lambda values: values.get("status") == "inprogress", required("Hospital"))
        assert rule("", {"status": "inprogress"}) == "Hospital is required"


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestSchema:
    def test_non_callable_rejected_at_construction(self) -> None:
        with pytest.raises(SchemaError) as exc_info:
            Schema({"email": [required(), "not a validator"]})
        assert exc_info.value.field == "email"

    def test_string_entry_rejected(self) -> None:
        with pytest.raises(SchemaError):
            Schema({"email": "required"})

    def test_bare_callable_is_one_validator(self) -> None:
        rule = required()
        schema = Schema({"email": rule})
        assert schema["email"] == (rule,)

    def test_mapping_interface(self) -> None:
        schema = Schema({"a": [required()], "b": []})
        assert list(schema) == ["a", "b"]
        assert len(schema) == 2
        assert "a" in schema

    def test_immutable(self) -> None:
        schema = Schema({})
        with pytest.raises(AttributeError):
            schema._fields = {}  # type: ignore[misc]


# ---------------------------------------------------------------------------
# evaluate() / validate()
# ---------------------------------------------------------------------------


class TestEvaluate:
    def test_required_email_example(self) -> None:
        errors = evaluate({"email": [required("Email"), email()]}, {"email": ""})
        assert errors == {"email": "Email is required"}

    def test_first_failure_wins(self) -> None:
        def first(value: object, values: object) -> str:
            return "A"

        def second(value: object, values: object) -> str:
            return "B"

        assert evaluate({"f": [first, second]}, {"f": 1}) == {"f": "A"}

    def test_short_circuit_skips_later_validators(self) -> None:
        calls: list[str] = []

        def failing(value: object, values: object) -> str:
            calls.append("failing")
            return "nope"

        def never(value: object, values: object) -> None:
            calls.append("never")
            return None

        evaluate({"f": [failing, never]}, {"f": 1})
        assert calls == ["failing"]

    def test_valid_fields_have_no_entry(self) -> None:
        errors = evaluate(
            {"name": [required("Name")], "email": [required("Email")]},
            {"name": "Rahim", "email": ""},
        )
        assert errors == {"email": "Email is required"}

    def test_empty_message_is_a_pass(self) -> None:
        assert evaluate({"f": [lambda value, values: ""]}, {"f": 1}) == {}

    def test_missing_field_checked_as_none(self) -> None:
        assert evaluate({"title": [required("Title")]}, {}) == {"title": "Title is required"}

    def test_errors_only_for_schema_fields(self) -> None:
        errors = evaluate({"a": [required()]}, {"a": "", "b": ""})
        assert set(errors) == {"a"}

    def test_idempotent(self) -> None:
        schema = registration_schema()
        values = {"name": "R", "email": "bad", "password": "", "bloodGroup": "Z"}
        assert evaluate(schema, values) == evaluate(schema, values)

    def test_cross_field_confirmation(self) -> None:
        schema = {
            "password": [required()],
            "confirm": [lambda v, all_values: "Mismatch" if v != all_values["password"] else None],
        }
        assert evaluate(schema, {"password": "abc", "confirm": "xyz"}) == {"confirm": "Mismatch"}
        assert evaluate(schema, {"password": "abc", "confirm": "abc"}) == {}

    def test_plain_mapping_non_callable_raises(self) -> None:
        with pytest.raises(SchemaError):
            evaluate({"f": [None]}, {"f": 1})

    def test_validator_exception_propagates(self) -> None:
        def broken(value: object, values: object) -> None:
            raise ZeroDivisionError

        with pytest.raises(ZeroDivisionError):
            evaluate({"f": [broken]}, {"f": 1})


class TestValidate:
    def test_valid_result_is_truthy(self) -> None:
        result = validate({"name": "Rahim"}, {"name": [required()]})
        assert isinstance(result, ValidationResult)
        assert result
        assert result.is_valid
        assert result.errors == {}

    def test_invalid_result_is_falsy(self) -> None:
        result = validate({"name": ""}, {"name": [required("Name")]})
        assert not result
        assert result.errors == {"name": "Name is required"}


class TestRegistrationSchema:
    def test_complete_registration(self) -> None:
        values = {
            "name": "Rahima Akter",
            "email": "rahima@example.com",
            "password": "secret1",
            "bloodGroup": "O+",
            "district": "Dhaka",
            "upazila": "Savar",
        }
        assert evaluate(registration_schema(), values) == {}

    def test_empty_registration(self) -> None:
        errors = evaluate(registration_schema(), {})
        assert errors == {
            "name": "Name is required",
            "email": "Email is required",
            "password": "Password is required",
            "bloodGroup": "Blood group is required",
            "district": "District is required",
            "upazila": "Upazila is required",
        }

    def test_format_errors(self) -> None:
        values = {
            "name": "R",
            "email": "rahima",
            "password": "abc",
            "bloodGroup": "Q+",
            "district": "Dhaka",
            "upazila": "Savar",
        }
        assert evaluate(registration_schema(), values) == {
            "name": "Name must be at least 2 characters",
            "email": "Please enter a valid email address",
            "password": "Password must be at least 6 characters long",
            "bloodGroup": "Please select a valid blood group",
        }
