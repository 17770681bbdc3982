from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

from lm_log_service.errors import InvalidRole
from lm_log_service.schemas.types import StoreText


class ChatRole(StrEnum):
    """Speaker of a single message in a prompt transcript."""

    system = "system"
    assistant = "assistant"
    user = "user"
    tool = "tool"


def decode_role(value: object) -> ChatRole:
    """Map a wire tag to a ``ChatRole``; tags are case-sensitive."""
    if isinstance(value, ChatRole):
        return value
    if isinstance(value, str):
        try:
            return ChatRole(value)
        except ValueError:
            raise InvalidRole(value) from None
    raise InvalidRole(value)


class PromptMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: StoreText

    @field_validator("role", mode="before")
    @classmethod
    def _decode_role(cls, value: object) -> ChatRole:
        return decode_role(value)
