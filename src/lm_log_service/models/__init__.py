from lm_log_service.models.log_record import LogRecordRow

__all__ = [
    "LogRecordRow",
]
