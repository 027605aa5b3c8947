import os
from sqlalchemy import create_engine, Column, Integer, Float, Text, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker
from datetime import datetime, timezone

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is missing.")

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class PredictionLog(Base):
    """Anonymous record of one aggregation run. Holds no user identifiers."""
    __tablename__ = "prediction_log"
    id = Column(Integer, primary_key=True, index=True)
    symptoms = Column(Text, nullable=False)
    predicted_diseases = Column(Text, nullable=False)
    top_probability = Column(Float, nullable=True)
    timestamp = Column(DateTime, default=_utcnow)


Base.metadata.create_all(bind=engine)
