from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gestor.core.security import get_current_owner_id
from gestor.db import get_db
from gestor.schemas.summary import MonthSummary
from gestor.services.summary import current_month_summary

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("/current-month", response_model=MonthSummary)
def current_month(db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    return current_month_summary(db, owner_id)
