from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from autos_lujo.core.config import get_settings

settings = get_settings()

# hosted Postgres hands out 'postgres://', SQLAlchemy wants 'postgresql://'
db_url = settings.database_url
if db_url.startswith("postgres://"):
    db_url = db_url.replace("postgres://", "postgresql://", 1)

engine = create_engine(
    db_url,
    # "check_same_thread" is only valid for SQLite
    connect_args={"check_same_thread": False} if db_url.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
