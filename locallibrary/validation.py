"""Form sanitization and validation.

Forms are pydantic models whose string fields are trimmed, length-checked
and then escaped. Failures come back as an ordered list of
``FieldError`` with human-readable messages instead of an exception, so the
caller can re-render the form.
"""

import html
from typing import Annotated, Any, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, StringConstraints, ValidationError
from pydantic_core import PydanticCustomError

from locallibrary.schemas.common import FieldError

F = TypeVar("F", bound=BaseModel)

# field -> pydantic error type (or "*" for any) -> message
Messages = dict[str, dict[str, str]]

_EXTRA_ESCAPES = str.maketrans({"/": "&#x2F;", "\\": "&#x5C;", "`": "&#96;"})


def escape(value: str) -> str:
    """HTML-escape a value for safe storage and display.

    Beyond ``html.escape`` this also escapes ``/``, ``\\`` and backticks.
    """
    return html.escape(value, quote=True).translate(_EXTRA_ESCAPES)


def _trim(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _escape_within(max_length: int | None):
    def check(value: str) -> str:
        value = escape(value)
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError(
                "string_too_long",
                "String should have at most {max_length} characters",
                {"max_length": max_length},
            )
        return value

    return AfterValidator(check)


def _blank_to_none(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


def sanitized(min_length: int | None = None, max_length: int | None = None) -> Any:
    """A string that is trimmed, checked for ``min_length``, then escaped.

    ``max_length`` bounds the escaped value, which is what gets stored.
    """
    return Annotated[str, BeforeValidator(_trim), StringConstraints(min_length=min_length), _escape_within(max_length)]


Trimmed = Annotated[str, BeforeValidator(_trim)]
BlankIsNone = BeforeValidator(_blank_to_none)


def validate_form(form_cls: type[F], raw: dict[str, Any], messages: Messages) -> tuple[F | None, list[FieldError]]:
    try:
        return form_cls.model_validate(raw), []
    except ValidationError as exc:
        return None, [_to_field_error(err, messages) for err in exc.errors()]


def _to_field_error(err: dict[str, Any], messages: Messages) -> FieldError:
    field = ".".join(str(part) for part in err["loc"]) or "__root__"
    table = messages.get(field, {})
    msg = table.get(err["type"]) or table.get("*") or err["msg"]
    return FieldError(field=field, msg=msg)
