from fastapi import Header, HTTPException, Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from .config import settings
from .store import GoalStore

engine = create_engine(settings.database_url, pool_pre_ping=True, future=True)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

def get_store(request: Request) -> GoalStore:
    # one store per app, created in the lifespan handler
    return request.app.state.store

def require_api_key(x_api_key: str | None = Header(default=None)):
    if not x_api_key or x_api_key != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")
