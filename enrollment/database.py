from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from enrollment.config import settings

engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    """Create the definition tables if they don't exist yet."""
    from enrollment.models import document_requirement, form_field  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
