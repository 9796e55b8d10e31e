import logging
from sqlmodel import create_engine, SQLModel, Session
from sqlalchemy import inspect
from parkshare.config import Config

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if Config.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(Config.DATABASE_URL, echo=Config.SQL_ECHO, connect_args=connect_args)

def init_db():
    # IMPORT REGISTERS THE TABLES ON SQLModel.metadata
    import parkshare.models.parking_models  # noqa: F401
    try:
        inspector = inspect(engine)
        existing_tables = set(inspector.get_table_names())
        missing_tables = [name for name in SQLModel.metadata.tables if name not in existing_tables]

        # create_all ONLY CREATES WHAT IS MISSING, SAFE TO RUN ON EVERY START
        SQLModel.metadata.create_all(engine)
        if missing_tables:
            logger.info(f"Tables created successfully: {', '.join(missing_tables)}")
        else:
            logger.info("Tables already exist, skipping creation")
    except Exception as e:
        logger.error(f"Error in initializing the database: {e}")
        raise

def get_db():
    try:
        with Session(engine) as session:
            yield session
    except Exception as e:
        logger.error(f"Error during database session: {e}")
        raise
