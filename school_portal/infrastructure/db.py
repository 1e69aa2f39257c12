from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from ..config import settings

engine_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False}
else:
    engine_args.update(pool_size=10, max_overflow=20, pool_recycle=3600)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    **engine_args
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
