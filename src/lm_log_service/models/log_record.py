"""Row layout of the ``log_records`` table.

The transcript is kept as a JSON array in a single text column and both
timestamps as canonical text (see ``lm_log_service.codec``), so the table
holds only primitive columns.
"""

from sqlmodel import Column, Field, SQLModel, Text


class LogRecordRow(SQLModel, table=True):
    __tablename__ = "log_records"

    id: int | None = Field(default=None, primary_key=True)
    model_provider: str
    model_name: str
    model_version: str
    app_name: str
    app_project: str
    app_version: str
    prompt: str = Field(sa_column=Column(Text, nullable=False))
    response: str = Field(sa_column=Column(Text, nullable=False))
    prompt_user_id: str
    prompt_app_hostname: str
    prompt_submit_ts: str
    response_receipt_ts: str
    input_tokens: int
    output_tokens: int
    total_tokens: int
