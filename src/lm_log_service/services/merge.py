from lm_log_service.schemas.log_record import LogRecord, PatchLogRecord


def apply_patch(existing: LogRecord, patch: PatchLogRecord) -> LogRecord:
    """Overlay the fields present in *patch* onto *existing*.

    Pure: *existing* is not modified and the result shares no mutable state
    with it. ``id`` is not a patch field, so it always carries over.
    """
    return existing.model_copy(update=patch.changes(), deep=True)
