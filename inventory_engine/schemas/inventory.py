
from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal


class InventoryResponse(BaseModel):
    id: int
    code: str
    product: str
    category: str
    unit: str
    stock: Decimal
    limit: Decimal | None
    last_notified: datetime | None

    class Config:
        from_attributes = True
