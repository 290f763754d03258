import pytest

from easyguide.errors import ApplicationError, ERROR_CODES
from easyguide.validation import Validator, dry_payload, throw_validation_error, to_bool


class TestValidator:
    def test_first_failing_rule_wins(self):
        errors = Validator("", "email").required().email().result()
        assert errors == [{
            "field": "email",
            "errorCode": ERROR_CODES["validation"],
            "errorMessage": 'Field "email" is required',
        }]

    def test_invalid_email_has_own_code(self):
        errors = Validator("not-an-email", "email").required().email().result()
        assert errors[0]["errorCode"] == ERROR_CODES["validation__invalid_email"]

    def test_optional_field_skips_rules_when_empty(self):
        assert Validator(None, "age").required(False).is_number().result() == []
        assert Validator("abc", "age").required(False).is_number().result()

    def test_phone_accepts_leading_plus(self):
        assert Validator("+447700900123", "phone").phone().result() == []
        assert Validator("12-34", "phone").phone().result()

    def test_array_rules(self):
        assert Validator(["Mon", "Xyz"], "days").is_array().specific_array_values(("Mon", "Tue")).result()
        assert Validator([], "items").is_array().array_min_length(1).result()
        assert Validator([1, 2, 3], "items").is_array().array_max_length(2).result()
        assert Validator([1, 2], "items").is_array().array_max_length(2).result() == []

    def test_number_range_and_length(self):
        assert Validator(5, "qty").number(1, 10).result() == []
        assert "greater than or equal to 1" in Validator(0, "qty").number(1, 10).result()[0]["errorMessage"]
        assert Validator("abcdef", "code").min_length(2).max_length(4).result()

    def test_date_format(self):
        assert Validator("2024-02-30", "date").date_format().result()
        assert Validator("2024-02-28", "date").date_format().result() == []


def test_throw_validation_error_raises_400():
    with pytest.raises(ApplicationError) as exc:
        throw_validation_error(Validator(None, "name").required().result())
    assert exc.value.status_code == 400
    assert exc.value.error_message == "Invalid parameters"
    assert exc.value.errors[0]["field"] == "name"

    throw_validation_error([])


def test_dry_payload_keeps_known_convertible_keys():
    values = dry_payload({"a": "1", "b": "x", "c": None, "d": 5}, {"a": int, "b": int, "c": str})
    assert values == {"a": 1}


def test_to_bool():
    assert to_bool("true") is True
    assert to_bool("0") is False
    assert to_bool(1) is True
    assert to_bool("maybe") is None
