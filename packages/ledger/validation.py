"""Sign-in and registration input contracts.

Validation is pure: nothing here touches the database. Each field carries an
ordered list of rules and every violated rule contributes one message, so an
empty password reports both "Password is required" and "Password must be more
than 8 characters". A missing (or null) field reports only its required
message.

Usage
-----
form = validate_register({"name": "Ada", "email": "ada@example.com", "password": "..."})
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .errors import FieldError, ValidationFailure

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 32
NAME_MAX_LENGTH = 32

# local@domain.tld; no leading dot and no consecutive dots in the local part.
_EMAIL_RE = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)

FormT = TypeVar("FormT", bound=BaseModel)

# (violates, message) pairs evaluated in order.
Rule = tuple[Callable[[str], bool], str]

_EMAIL_RULES: tuple[Rule, ...] = (
    (lambda v: len(v) < 1, "Email is required"),
    (lambda v: _EMAIL_RE.match(v) is None, "Invalid email"),
)
_PASSWORD_RULES: tuple[Rule, ...] = (
    (lambda v: len(v) < 1, "Password is required"),
    (lambda v: len(v) < PASSWORD_MIN_LENGTH, "Password must be more than 8 characters"),
    (lambda v: len(v) > PASSWORD_MAX_LENGTH, "Password must be less than 32 characters"),
)
_NAME_RULES: tuple[Rule, ...] = (
    (lambda v: len(v) < 1, "Name is required"),
    (lambda v: len(v) > NAME_MAX_LENGTH, "Name must be less than 32 characters"),
)

_REQUIRED_MESSAGES = {
    "email": "Email is required",
    "password": "Password is required",
    "name": "Name is required",
}


def _apply_rules(rules: tuple[Rule, ...], value: str) -> str:
    violations = [message for violates, message in rules if violates(value)]
    if violations:
        raise PydanticCustomError(
            "field_rules",
            "{summary}",
            {"summary": "; ".join(violations), "messages": violations},
        )
    return value


class SignInForm(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _apply_rules(_EMAIL_RULES, v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _apply_rules(_PASSWORD_RULES, v)


class RegisterForm(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _apply_rules(_NAME_RULES, v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _apply_rules(_EMAIL_RULES, v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _apply_rules(_PASSWORD_RULES, v)


def _field_errors(exc: ValidationError) -> list[FieldError]:
    out: list[FieldError] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "__root__"
        kind = err.get("type")
        if kind == "field_rules":
            for message in (err.get("ctx") or {}).get("messages", []):
                out.append(FieldError(field, message))
        elif field == "__root__":
            out.append(FieldError(field, "Expected an object"))
        elif kind == "missing" or err.get("input") is None:
            out.append(FieldError(field, _REQUIRED_MESSAGES.get(field, "Required")))
        else:
            out.append(FieldError(field, "Expected string"))
    return out


def _validate(model: type[FormT], data: Mapping[str, Any] | Any) -> FormT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailure(_field_errors(exc)) from None


def validate_sign_in(data: Mapping[str, Any] | Any) -> SignInForm:
    """Return a :class:`SignInForm` or raise :class:`ValidationFailure`."""

    return _validate(SignInForm, data)


def validate_register(data: Mapping[str, Any] | Any) -> RegisterForm:
    """Return a :class:`RegisterForm` or raise :class:`ValidationFailure`."""

    return _validate(RegisterForm, data)


__all__ = [
    "NAME_MAX_LENGTH",
    "PASSWORD_MAX_LENGTH",
    "PASSWORD_MIN_LENGTH",
    "RegisterForm",
    "SignInForm",
    "validate_register",
    "validate_sign_in",
]
