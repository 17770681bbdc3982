from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationInfo, field_serializer, field_validator

from lm_log_service.codec import coerce_timestamp, decode_optional_timestamp, encode_timestamp
from lm_log_service.schemas.prompt import PromptMessage
from lm_log_service.schemas.types import StoreInt, StoreText

TIMESTAMP_FIELDS = ("prompt_submit_ts", "response_receipt_ts")


class LogRecordBody(BaseModel):
    """Every field of a log record except its store-assigned id."""

    model_provider: StoreText
    model_name: StoreText
    model_version: StoreText
    app_name: StoreText
    app_project: StoreText
    app_version: StoreText
    prompt: list[PromptMessage]
    response: StoreText
    prompt_user_id: StoreText
    prompt_app_hostname: StoreText
    prompt_submit_ts: datetime
    response_receipt_ts: datetime
    input_tokens: StoreInt
    output_tokens: StoreInt
    # Caller-supplied; never derived from input + output.
    total_tokens: StoreInt

    @field_validator(*TIMESTAMP_FIELDS, mode="before")
    @classmethod
    def _decode_timestamps(cls, value: object) -> datetime:
        return coerce_timestamp(value)

    @field_serializer(*TIMESTAMP_FIELDS)
    def _encode_timestamps(self, value: datetime) -> str:
        return encode_timestamp(value)


class CreateLogRecord(LogRecordBody):
    pass


class LogRecord(LogRecordBody):
    id: StoreInt


class LogRecordCreated(BaseModel):
    id: StoreInt


class PatchLogRecord(BaseModel):
    """Sparse update: omitted fields are left unchanged.

    ``null`` is not a value of any log record field, so an explicit ``null``
    is rejected rather than being confused with omission.
    """

    model_provider: StoreText | None = None
    model_name: StoreText | None = None
    model_version: StoreText | None = None
    app_name: StoreText | None = None
    app_project: StoreText | None = None
    app_version: StoreText | None = None
    prompt: list[PromptMessage] | None = None
    response: StoreText | None = None
    prompt_user_id: StoreText | None = None
    prompt_app_hostname: StoreText | None = None
    prompt_submit_ts: datetime | None = None
    response_receipt_ts: datetime | None = None
    input_tokens: StoreInt | None = None
    output_tokens: StoreInt | None = None
    total_tokens: StoreInt | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            raise ValueError(f"{info.field_name} may be omitted but not null")
        return value

    @field_validator(*TIMESTAMP_FIELDS, mode="before")
    @classmethod
    def _decode_timestamps(cls, value: object) -> datetime | None:
        if isinstance(value, datetime):
            return coerce_timestamp(value)
        return decode_optional_timestamp(value)

    @field_serializer(*TIMESTAMP_FIELDS)
    def _encode_timestamps(self, value: datetime | None) -> str | None:
        return None if value is None else encode_timestamp(value)

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller actually supplied."""
        return {name: getattr(self, name) for name in self.model_fields_set}
