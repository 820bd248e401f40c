from functools import wraps
import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from storefront.config import get_settings
from storefront.errors import UnavailableError, ValidationError

settings = get_settings()
logger = logging.getLogger(__name__)


def make_engine(database_url: str):
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": 30}
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    # Register every model on the metadata before creating tables
    import storefront.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def safe_read(default):
    """Return ``default()`` instead of raising when the database is unreachable."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except OperationalError as e:
                logger.warning(f"Database not available for {func.__name__}: {e}")
                return default()
        return wrapper
    return decorator


def commit(db: Session, conflict: str = "A record with these values already exists") -> None:
    try:
        db.commit()
    except OperationalError as e:
        db.rollback()
        logger.error(f"Database write failed: {e}")
        raise UnavailableError() from e
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Write rejected by constraint: {e.orig}")
        raise ValidationError(conflict) from e
