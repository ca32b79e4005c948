from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from taskflow.config.settings import settings

DATABASE_URL = settings.DATABASE_URL

# SQLite needs check_same_thread off for the threadpool, hosted PostgreSQL wants sslmode=require
if settings.is_sqlite():
    connect_args = {"check_same_thread": False}
elif "sslmode" in DATABASE_URL:
    connect_args = {}
else:
    connect_args = {"sslmode": "require"}

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    echo=settings.DATABASE_ECHO,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# ✅ This is required to be imported wherever DB session is needed
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
