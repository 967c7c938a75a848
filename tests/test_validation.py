import pytest

from ledger.errors import FieldError, ValidationFailure
from ledger.validation import RegisterForm, SignInForm, validate_register, validate_sign_in


def _failure(fn, data) -> ValidationFailure:
    with pytest.raises(ValidationFailure) as ei:
        fn(data)
    return ei.value


@pytest.mark.parametrize(
    "email,password",
    [
        ("a@example.com", "x" * 8),
        ("first.last+tag@mail.example.org", "correct horse battery"),
        ("UPPER@EXAMPLE.IO", "y" * 32),
    ],
)
def test_sign_in_accepts_valid_pairs(email: str, password: str):
    form = validate_sign_in({"email": email, "password": password})
    assert isinstance(form, SignInForm)
    assert form.email == email
    assert form.password == password


def test_sign_in_password_of_seven_chars_is_too_short():
    err = _failure(validate_sign_in, {"email": "a@example.com", "password": "x" * 7})
    assert err.errors == (FieldError("password", "Password must be more than 8 characters"),)


def test_sign_in_password_of_thirty_three_chars_is_too_long():
    err = _failure(validate_sign_in, {"email": "a@example.com", "password": "x" * 33})
    assert err.messages("password") == ["Password must be less than 32 characters"]


def test_empty_password_reports_every_violated_rule():
    err = _failure(validate_sign_in, {"email": "a@example.com", "password": ""})
    assert err.messages("password") == [
        "Password is required",
        "Password must be more than 8 characters",
    ]


def test_empty_email_reports_required_and_format():
    err = _failure(validate_sign_in, {"email": "", "password": "x" * 10})
    assert err.messages("email") == ["Email is required", "Invalid email"]


@pytest.mark.parametrize(
    "email", ["plainaddress", "a@b", "@example.com", ".a@example.com", "a..b@example.com"]
)
def test_malformed_email_is_invalid(email: str):
    err = _failure(validate_sign_in, {"email": email, "password": "x" * 10})
    assert err.messages() == ["Invalid email"]


def test_missing_fields_report_only_required_messages():
    err = _failure(validate_sign_in, {})
    assert err.by_field() == {
        "email": ["Email is required"],
        "password": ["Password is required"],
    }


def test_null_field_is_treated_as_missing():
    err = _failure(validate_sign_in, {"email": None, "password": "x" * 10})
    assert err.messages() == ["Email is required"]


def test_non_string_field_is_rejected():
    err = _failure(validate_sign_in, {"email": "a@example.com", "password": 12345678})
    assert err.messages("password") == ["Expected string"]


def test_bytes_field_is_not_coerced_to_string():
    err = _failure(validate_sign_in, {"email": "a@example.com", "password": b"12345678"})
    assert err.messages("password") == ["Expected string"]

    err = _failure(
        validate_register,
        {"name": bytearray(b"Ada"), "email": "a@example.com", "password": "x" * 8},
    )
    assert err.by_field() == {"name": ["Expected string"]}


def test_non_mapping_input_is_rejected():
    err = _failure(validate_sign_in, ["a@example.com", "password"])
    assert err.errors[0].field == "__root__"


def test_register_name_boundary_is_inclusive():
    form = validate_register({"name": "n" * 32, "email": "a@example.com", "password": "x" * 8})
    assert isinstance(form, RegisterForm)
    assert len(form.name) == 32


def test_register_name_of_thirty_three_chars_fails():
    err = _failure(
        validate_register, {"name": "n" * 33, "email": "a@example.com", "password": "x" * 8}
    )
    assert err.errors == (FieldError("name", "Name must be less than 32 characters"),)


def test_register_reports_errors_in_field_order():
    err = _failure(validate_register, {"name": "", "email": "nope", "password": "short"})
    assert err.messages() == [
        "Name is required",
        "Invalid email",
        "Password must be more than 8 characters",
    ]
    assert [e.field for e in err.errors] == ["name", "email", "password"]


def test_register_missing_name():
    err = _failure(validate_register, {"email": "a@example.com", "password": "x" * 8})
    assert err.by_field() == {"name": ["Name is required"]}


def test_extra_keys_are_ignored():
    form = validate_sign_in({"email": "a@example.com", "password": "x" * 8, "remember": True})
    assert not hasattr(form, "remember")
