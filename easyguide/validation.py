# easyguide/validation.py
import re
from datetime import datetime

from easyguide.errors import ApplicationError, ERROR_CODES

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+\-']+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$")
PASSWORD_RE = re.compile(r"^[0-9a-zA-Z~!@#$%^&*_\-+=`|(){}\[\]:;\"'<>,.?/]+$")
PHONE_RE = re.compile(r"^\d{7,15}$")

INVALID_PARAMETERS = "Invalid parameters"


def _is_empty(value) -> bool:
    return value is None or value == "" or value == [] or value == {}


def _to_float(value):
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class Validator:
    """
    Chainable validation of one request field.

        errors = [
            *Validator(data.get("email"), "email").required().email().result(),
            *Validator(data.get("age"), "age").required(False).is_number().result(),
        ]

    The first failing rule wins; rules after it are no-ops. ``required(False)``
    stops the chain for empty values.
    """

    def __init__(self, value, field: str, trim: bool = True):
        self.value = value.strip() if trim and isinstance(value, str) else value
        self.field = field
        self.error = None
        self._skip = False

    def _fail(self, message: str, code=ERROR_CODES["validation"]):
        self.error = {"field": self.field, "errorCode": code, "errorMessage": message}
        return self

    @property
    def _done(self) -> bool:
        return self.error is not None or self._skip

    def result(self) -> list:
        if self._skip or self.error is None:
            return []
        return [self.error]

    def required(self, is_required: bool = True):
        if self._done:
            return self
        if not is_required:
            if _is_empty(self.value):
                self._skip = True
            return self
        if _is_empty(self.value):
            return self._fail(f'Field "{self.field}" is required')
        return self

    def is_number(self):
        if self._done:
            return self
        if _to_float(self.value) is None:
            return self._fail(f'Field "{self.field}" must be a number')
        return self

    def only_digits(self):
        if self._done:
            return self
        if not re.fullmatch(r"\d+", str(self.value)):
            return self._fail(f'Field "{self.field}" must contain only digits')
        return self

    def is_boolean(self):
        if self._done:
            return self
        if not isinstance(self.value, bool):
            return self._fail(f'Field "{self.field}" must be a boolean')
        return self

    def is_array(self):
        if self._done:
            return self
        if not isinstance(self.value, list):
            return self._fail(f'Field "{self.field}" must be an array')
        return self

    def email(self):
        if self._done:
            return self
        if not isinstance(self.value, str) or not EMAIL_RE.match(self.value):
            return self._fail("Invalid email format", ERROR_CODES["validation__invalid_email"])
        return self

    def password(self):
        if self._done:
            return self
        if not isinstance(self.value, str) or not PASSWORD_RE.match(self.value):
            return self._fail("Password contains forbidden characters")
        return self

    def enumeration(self, options):
        if self._done:
            return self
        if self.value not in options:
            allowed = ", ".join(str(o) for o in options)
            return self._fail(f'Field "{self.field}" must be one of: {allowed}')
        return self

    def specific_array_values(self, options):
        if self._done or not isinstance(self.value, list):
            return self
        for item in self.value:
            if item not in options:
                return self._fail(f'Field "{self.field}" contains invalid value "{item}"')
        return self

    def date_format(self, fmt: str = "%Y-%m-%d", min_date: str | None = None, max_date: str | None = None):
        if self._done:
            return self
        try:
            parsed = datetime.strptime(str(self.value), fmt)
        except ValueError:
            return self._fail(f'Field "{self.field}" must be a date in format {fmt}')
        if min_date and parsed < datetime.strptime(min_date, fmt):
            return self._fail(f'Field "{self.field}" must not be before {min_date}')
        if max_date and parsed > datetime.strptime(max_date, fmt):
            return self._fail(f'Field "{self.field}" must not be after {max_date}')
        return self

    def min_length(self, length: int):
        if self._done:
            return self
        if not _is_empty(self.value) and len(str(self.value)) < length:
            return self._fail(f'Field "{self.field}" must be at least {length} characters long')
        return self

    def max_length(self, length: int):
        if self._done:
            return self
        if not _is_empty(self.value) and len(str(self.value)) > length:
            return self._fail(f'Field "{self.field}" must be at most {length} characters long')
        return self

    def number(self, min_value=None, max_value=None):
        if self._done:
            return self
        value = _to_float(self.value)
        if value is None:
            return self
        if min_value is not None and value < min_value:
            return self._fail(f'Field "{self.field}" must be greater than or equal to {min_value}')
        if max_value is not None and value > max_value:
            return self._fail(f'Field "{self.field}" must be less than or equal to {max_value}')
        return self

    def phone(self):
        if self._done:
            return self
        digits = str(self.value)
        if digits.startswith("+"):
            digits = digits[1:]
        if not PHONE_RE.match(digits):
            return self._fail("Invalid phone number")
        return self

    def array_min_length(self, length: int):
        if self._done:
            return self
        if isinstance(self.value, list) and len(self.value) < length:
            return self._fail(f'Field "{self.field}" must contain at least {length} items')
        return self

    def array_max_length(self, length: int):
        if self._done:
            return self
        if isinstance(self.value, list) and len(self.value) > length:
            return self._fail(f'Field "{self.field}" must contain at most {length} items')
        return self


def throw_validation_error(errors, message: str = INVALID_PARAMETERS):
    if errors:
        raise ApplicationError(400, ERROR_CODES["validation"], message, errors)


def dry_payload(payload: dict | None, schema: dict) -> dict:
    """
    Keep only the keys listed in ``schema``, converted by their transform.
    Keys that are missing, convert to None, or fail to convert are dropped.
    """
    result = {}
    for key, transform in schema.items():
        if not payload or key not in payload or payload[key] is None:
            continue
        try:
            value = transform(payload[key]) if transform else payload[key]
        except (TypeError, ValueError):
            continue
        if value is not None:
            result[key] = value
    return result


def to_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false", "1", "0"):
        return value.strip().lower() in ("true", "1")
    if isinstance(value, int):
        return bool(value)
    return None


def to_str(value):
    return str(value).strip()
