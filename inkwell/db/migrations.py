from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from alembic.runtime.migration import MigrationContext

from inkwell.db.session import SQLALCHEMY_DATABASE_URL
from inkwell.core.logger import Logger

logger = Logger.get_logger()


def run_migrations() -> None:
    """alembic upgrade head (最新リビジョンなら何もしない)"""
    BASE_DIR = Path(__file__).resolve().parents[2]
    alembic_ini = BASE_DIR / "alembic.ini"

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(BASE_DIR / "migrations"))
    cfg.attributes["configure_logger"] = False
    script = ScriptDirectory.from_config(cfg)
    head_rev = script.get_current_head()
    try:
        engine = create_engine(SQLALCHEMY_DATABASE_URL)
        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            current_rev = context.get_current_revision()
        if current_rev == head_rev:
            return
    except SQLAlchemyError as e:
        logger.error(f"Error checking migration revision: {e}")

    logger.info(f"Upgrading database schema to {head_rev}")
    command.upgrade(cfg, "head")
