"""Endpoints for recording and updating language-model invocation logs."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlmodel import Session

from lm_log_service.database import get_session
from lm_log_service.errors import LogRecordNotFound, StoreError
from lm_log_service.schemas.log_record import (
    CreateLogRecord,
    LogRecord,
    LogRecordCreated,
    PatchLogRecord,
)
from lm_log_service.schemas.types import INT64_MAX, INT64_MIN
from lm_log_service.services.log_record_service import (
    create_log_record,
    get_log_record,
    patch_log_record,
    replace_log_record,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lm/log", tags=["lm"])

RecordId = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)]


def _store_failure(exc: StoreError) -> HTTPException:
    logger.error("%s", exc)
    return HTTPException(500, str(exc))


@router.post("", response_model=LogRecordCreated, status_code=201)
def post_log(
    data: CreateLogRecord,
    session: Session = Depends(get_session),
) -> LogRecordCreated:
    """Record a new language-model invocation."""
    try:
        record_id = create_log_record(data, session)
    except StoreError as exc:
        raise _store_failure(exc) from exc
    return LogRecordCreated(id=record_id)


@router.get("/{record_id}", response_model=LogRecord)
def get_log(record_id: RecordId, session: Session = Depends(get_session)) -> LogRecord:
    try:
        return get_log_record(record_id, session)
    except LogRecordNotFound as exc:
        raise HTTPException(404, str(exc)) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


@router.put("/{record_id}", response_model=LogRecord)
def put_log(
    record_id: RecordId,
    data: CreateLogRecord,
    session: Session = Depends(get_session),
) -> LogRecord:
    """Replace every field of an existing log record."""
    try:
        return replace_log_record(record_id, data, session)
    except LogRecordNotFound as exc:
        raise HTTPException(404, str(exc)) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


@router.patch("/{record_id}", response_model=LogRecord)
def patch_log(
    record_id: RecordId,
    data: PatchLogRecord,
    session: Session = Depends(get_session),
) -> LogRecord:
    """Update only the fields present in the request body."""
    try:
        return patch_log_record(record_id, data, session)
    except LogRecordNotFound as exc:
        raise HTTPException(404, str(exc)) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc
