"""Persistence gateway for language-model log records.

Every operation takes the caller's ``Session`` explicitly and returns
canonical ``LogRecord`` values, never table rows. Missing ids raise
``LogRecordNotFound``; any failure of the underlying store, including a stored
row that no longer decodes, raises ``StoreError`` chained to the cause.

``replace`` and ``patch`` check existence and then write within one session.
Nothing here locks: two concurrent patches of the same id may both read the
old state, and whichever commits last wins.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from lm_log_service.codec import (
    decode_timestamp,
    decode_transcript,
    encode_timestamp,
    encode_transcript,
)
from lm_log_service.errors import LogRecordNotFound, StoreError
from lm_log_service.models.log_record import LogRecordRow
from lm_log_service.schemas.log_record import (
    CreateLogRecord,
    LogRecord,
    LogRecordBody,
    PatchLogRecord,
)
from lm_log_service.schemas.types import INT64_MAX, INT64_MIN
from lm_log_service.services.merge import apply_patch

logger = logging.getLogger(__name__)


def row_values(data: LogRecordBody) -> dict[str, Any]:
    """Encode every non-id field of *data* into its column representation."""
    return {
        "model_provider": data.model_provider,
        "model_name": data.model_name,
        "model_version": data.model_version,
        "app_name": data.app_name,
        "app_project": data.app_project,
        "app_version": data.app_version,
        "prompt": encode_transcript(data.prompt),
        "response": data.response,
        "prompt_user_id": data.prompt_user_id,
        "prompt_app_hostname": data.prompt_app_hostname,
        "prompt_submit_ts": encode_timestamp(data.prompt_submit_ts),
        "response_receipt_ts": encode_timestamp(data.response_receipt_ts),
        "input_tokens": data.input_tokens,
        "output_tokens": data.output_tokens,
        "total_tokens": data.total_tokens,
    }


def record_from_row(row: LogRecordRow) -> LogRecord:
    """Decode a stored row back into a ``LogRecord``."""
    return LogRecord(
        id=row.id,  # type: ignore[arg-type]
        model_provider=row.model_provider,
        model_name=row.model_name,
        model_version=row.model_version,
        app_name=row.app_name,
        app_project=row.app_project,
        app_version=row.app_version,
        prompt=decode_transcript(row.prompt),
        response=row.response,
        prompt_user_id=row.prompt_user_id,
        prompt_app_hostname=row.prompt_app_hostname,
        prompt_submit_ts=decode_timestamp(row.prompt_submit_ts),
        response_receipt_ts=decode_timestamp(row.response_receipt_ts),
        input_tokens=row.input_tokens,
        output_tokens=row.output_tokens,
        total_tokens=row.total_tokens,
    )


def _decode_row(row: LogRecordRow, operation: str) -> LogRecord:
    try:
        return record_from_row(row)
    except ValueError as exc:
        logger.exception("Stored log record %s could not be decoded", row.id)
        raise StoreError(operation, row.id) from exc


def _get_row(record_id: int, session: Session, operation: str) -> LogRecordRow:
    # No row can hold an id outside the INTEGER range.
    if not INT64_MIN <= record_id <= INT64_MAX:
        raise LogRecordNotFound(record_id)
    try:
        row = session.get(LogRecordRow, record_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to read log record %d during %s", record_id, operation)
        raise StoreError(operation, record_id) from exc
    if row is None:
        raise LogRecordNotFound(record_id)
    return row


def _write_row(
    row: LogRecordRow,
    values: dict[str, Any],
    session: Session,
    operation: str,
) -> LogRecordRow:
    for key, value in values.items():
        setattr(row, key, value)
    record_id = row.id
    try:
        session.add(row)
        session.commit()
        session.refresh(row)
    except (SQLAlchemyError, ValueError, OverflowError) as exc:
        # sqlite3 raises OverflowError and UnicodeEncodeError at bind time,
        # outside the SQLAlchemy exception hierarchy.
        session.rollback()
        logger.exception("Failed to write log record %s during %s", record_id, operation)
        raise StoreError(operation, record_id) from exc
    return row


def create_log_record(data: CreateLogRecord, session: Session) -> int:
    """Insert a new row and return its store-assigned id."""
    row = _write_row(LogRecordRow(), row_values(data), session, "create")
    logger.info(
        "Created log record %d (%s/%s, app=%s)",
        row.id,
        data.model_provider,
        data.model_name,
        data.app_name,
    )
    return row.id  # type: ignore[return-value]


def get_log_record(record_id: int, session: Session) -> LogRecord:
    row = _get_row(record_id, session, "read")
    return _decode_row(row, "read")


def replace_log_record(record_id: int, data: CreateLogRecord, session: Session) -> LogRecord:
    """Overwrite every field of an existing record."""
    row = _get_row(record_id, session, "replace")
    row = _write_row(row, row_values(data), session, "replace")
    logger.info("Replaced log record %d", record_id)
    return _decode_row(row, "replace")


def patch_log_record(record_id: int, data: PatchLogRecord, session: Session) -> LogRecord:
    """Merge the supplied fields into an existing record."""
    row = _get_row(record_id, session, "patch")
    merged = apply_patch(_decode_row(row, "patch"), data)
    row = _write_row(row, row_values(merged), session, "patch")
    logger.info("Patched log record %d (fields: %s)", record_id, ", ".join(sorted(data.changes())))
    return _decode_row(row, "patch")
