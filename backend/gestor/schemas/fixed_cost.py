from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class FixedCostCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    monthly_amount: Decimal = Field(ge=0, max_digits=14, decimal_places=2)
    category: str | None = Field(default=None, max_length=80)
    notes: str | None = Field(default=None, max_length=500)
    active: bool = True


class FixedCostUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    monthly_amount: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    category: str | None = Field(default=None, max_length=80)
    notes: str | None = Field(default=None, max_length=500)
    active: bool | None = None


class FixedCostOut(BaseModel):
    id: str
    name: str
    monthly_amount: Decimal
    category: str | None = None
    notes: str | None = None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LaunchedFixedCostsOut(BaseModel):
    month: str = Field(description="YYYY-MM")
    fixed_cost_ids: list[str] = Field(default_factory=list)
