from app.database.base import Base
from app.database.engine import create_app_engine, engine, init_db
from app.database.session import SessionLocal, get_db

__all__ = ["Base", "SessionLocal", "create_app_engine", "engine", "get_db", "init_db"]
