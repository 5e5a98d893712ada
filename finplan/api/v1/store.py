"""/v1/store/{key} - Key-value snapshot store access"""

import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from finplan.api.dependencies import get_request_id
from finplan.api.v1.schemas import StoreValueResponse
from finplan.domain.exceptions import StorageError
from finplan.infrastructure.database.repositories import StoreRepository
from finplan.infrastructure.database.session import get_db
from finplan.infrastructure.observability.logging import log_store_write

router = APIRouter()


@router.get("/store/{key}", response_model=StoreValueResponse)
def get_value(key: str, db: Session = Depends(get_db)):
    value = StoreRepository(db).get(key)
    if value is None:
        raise HTTPException(status_code=404, detail="Key not found")
    return StoreValueResponse(key=key, value=value)


@router.put("/store/{key}", response_model=StoreValueResponse)
def put_value(key: str, request: Request, value: Any = Body(...), db: Session = Depends(get_db)):
    """Replace the value stored under ``key`` (the body is the JSON value itself)"""
    request_id = get_request_id(request)
    try:
        StoreRepository(db).set(key, value)
        db.commit()
    except StorageError as e:
        db.rollback()
        logging.warning(f"Store write rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    log_store_write(request_id, key, "set")
    return StoreValueResponse(key=key, value=value)


@router.delete("/store/{key}", status_code=204)
def delete_value(key: str, request: Request, db: Session = Depends(get_db)):
    if not StoreRepository(db).remove(key):
        raise HTTPException(status_code=404, detail="Key not found")
    db.commit()
    log_store_write(get_request_id(request), key, "remove")
