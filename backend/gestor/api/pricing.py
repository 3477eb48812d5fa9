from fastapi import APIRouter, Depends

from gestor.core.security import get_current_owner_id
from gestor.schemas.pricing import PricingInput, PricingResult
from gestor.services.pricing import calculate_suggested_price

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post("/suggest", response_model=PricingResult, dependencies=[Depends(get_current_owner_id)])
def suggest_price(payload: PricingInput):
    return calculate_suggested_price(payload)
