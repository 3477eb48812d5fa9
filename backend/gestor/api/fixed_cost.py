from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from gestor.core.security import get_current_owner_id
from gestor.db import get_db, utcnow
from gestor.schemas.fixed_cost import FixedCostCreate, FixedCostOut, FixedCostUpdate, LaunchedFixedCostsOut
from gestor.schemas.obligation import ObligationOut
from gestor.services import fixed_costs as svc

router = APIRouter(prefix="/fixed-costs", tags=["fixed-costs"])


@router.post("", response_model=FixedCostOut, status_code=201)
def create_fixed_cost(payload: FixedCostCreate, db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    return svc.create_fixed_cost(db, owner_id, payload)


@router.get("", response_model=list[FixedCostOut])
def list_fixed_costs(active_only: bool = False, db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    return svc.list_fixed_costs(db, owner_id, active_only=active_only)


# antes de /{fixed_cost_id} para não ser capturada como id
@router.get("/launched", response_model=LaunchedFixedCostsOut)
def launched_this_month(db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    today = utcnow().date()
    return LaunchedFixedCostsOut(
        month=today.strftime("%Y-%m"),
        fixed_cost_ids=svc.launched_fixed_cost_ids_for_month(db, owner_id, today),
    )


@router.patch("/{fixed_cost_id}", response_model=FixedCostOut)
def update_fixed_cost(
    fixed_cost_id: str,
    payload: FixedCostUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner_id),
):
    return svc.update_fixed_cost(db, owner_id, fixed_cost_id, payload)


@router.delete("/{fixed_cost_id}", status_code=204)
def delete_fixed_cost(fixed_cost_id: str, db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    svc.delete_fixed_cost(db, owner_id, fixed_cost_id)
    return Response(status_code=204)


@router.post("/{fixed_cost_id}/launch", response_model=ObligationOut, status_code=201)
def launch_fixed_cost(fixed_cost_id: str, db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    return svc.launch_fixed_cost(db, owner_id, fixed_cost_id)
