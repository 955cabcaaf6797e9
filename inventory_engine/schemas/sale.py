# schemas/sale.py

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from decimal import Decimal

from inventory_engine.schemas.notification import NotificationResponse


class CheckoutItem(BaseModel):
    product_id: int | None = None
    quantity: Decimal = Field(..., gt=0)
    price: Decimal = Field(..., ge=0)


class PaymentInfo(BaseModel):
    payment_method: str = "Cash"

    # Used when payment_method is "Transfer"
    bank_name: str | None = None
    account_number: str | None = None


class CheckoutRequest(PaymentInfo):
    # Filled from the bearer token when the request comes over HTTP
    actor_id: int | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    items: List[CheckoutItem] = []
    tag: str | None = None
    memo: str | None = None


class SalesOrderCreate(BaseModel):
    actor_id: int | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    items: List[CheckoutItem] = []
    status: str = "Pending"
    order_date: datetime | None = None
    tag: str | None = None
    memo: str | None = None


class PaymentCreate(PaymentInfo):
    amount: Decimal = Field(..., gt=0)
    payment_date: datetime | None = None


class SalesItemResponse(BaseModel):
    id: int
    product_id: int
    quantity: Decimal
    price: Decimal
    line_total: Decimal

    class Config:
        from_attributes = True

class InvoiceResponse(BaseModel):
    id: int
    sales_order_id: int
    amount: Decimal
    payment_method: str
    bank_name: str | None
    account_number: str | None
    payment_date: datetime

    class Config:
        from_attributes = True

class SalesOrderResponse(BaseModel):
    id: int
    user_id: int
    customer_id: str | None
    customer_name: str | None
    total: Decimal
    status: str
    payment_status: str
    channel: str
    tag: str | None
    memo: str | None
    order_date: datetime
    items: List[SalesItemResponse]
    invoices: List[InvoiceResponse]

    class Config:
        from_attributes = True

class CheckoutResponse(BaseModel):
    order: SalesOrderResponse
    invoice: InvoiceResponse | None
    notifications: List[NotificationResponse]

    class Config:
        from_attributes = True
