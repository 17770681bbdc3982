import logging
from collections.abc import Generator

from sqlalchemy import Engine, event
from sqlmodel import Session, SQLModel, create_engine, text

from lm_log_service.config import Settings, settings

logger = logging.getLogger(__name__)


def _on_connect(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def make_engine(config: Settings) -> Engine:
    """Build the process-wide engine; it is shared by every request session."""
    config.db_path.parent.mkdir(parents=True, exist_ok=True)
    eng = create_engine(
        config.database_url,
        echo=config.sql_echo,
        connect_args={"timeout": 30, "check_same_thread": False},
    )
    event.listen(eng, "connect", _on_connect)
    return eng


engine = make_engine(settings)


def create_db_and_tables() -> None:
    SQLModel.metadata.create_all(engine)
    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()
    logger.info("Database ready at %s", engine.url.database)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
