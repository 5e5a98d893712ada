"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from finplan.infrastructure.database.repositories import StoreRepository
from finplan.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_store_repository(db: Session = Depends(get_db)) -> StoreRepository:
    """Provide key-value store repository bound to the request session"""
    return StoreRepository(db)
