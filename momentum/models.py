from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KeyValue(Base):
    __tablename__ = "kv_store"
    key = Column(String, primary_key=True)          # e.g. "momentumData"
    value = Column(Text, nullable=False)            # serialized tracker state
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
