"""Field types bounded by what the SQLite row store can hold."""

from typing import Annotated

from pydantic import AfterValidator, Field

# SQLite INTEGER columns hold signed 64-bit values.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def check_text(value: str) -> str:
    """Reject strings the store cannot encode, such as lone surrogates."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"text is not valid UTF-8 at position {exc.start}: {exc.reason}") from exc
    return value


StoreInt = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
StoreText = Annotated[str, AfterValidator(check_text)]
