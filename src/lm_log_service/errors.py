"""Exception types raised by the log record codecs and persistence layer.

Decode errors (``InvalidRole``, ``InvalidTimestamp``, ``TranscriptDecodeError``)
subclass ``ValueError`` so pydantic validators report them as field errors.
Gateway errors (``LogRecordNotFound``, ``StoreError``) carry the record id and
the attempted operation so callers can log and map them meaningfully.
"""


class LogServiceError(Exception):
    pass


class InvalidRole(LogServiceError, ValueError):
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Invalid chat role {value!r} (expected one of: system, assistant, user, tool)"
        )


class InvalidTimestamp(LogServiceError, ValueError):
    def __init__(self, value: object, reason: str = "") -> None:
        self.value = value
        message = f"Invalid timestamp {value!r} (expected YYYY-MM-DDTHH:MM:SS.ffffff)"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TranscriptDecodeError(LogServiceError, ValueError):
    pass


class LogRecordNotFound(LogServiceError):
    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"Log record {record_id} not found")


class StoreError(LogServiceError):
    def __init__(self, operation: str, record_id: int | None = None) -> None:
        self.operation = operation
        self.record_id = record_id
        target = f" for log record {record_id}" if record_id is not None else ""
        super().__init__(f"Store failure during {operation}{target}")
