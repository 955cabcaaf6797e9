# =========================================================
# SALES ROUTER
#
# Sales orders submitted from the back office. Stock is consumed at
# submission; payments arrive later through /sales/{id}/pay.
# =========================================================

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventory_engine.database import get_db
from inventory_engine.core.auth import MANAGER_ROLES, SALES_ROLES, require_roles
from inventory_engine.routers.pos import to_checkout_response
from inventory_engine.schemas.sale import (
    CheckoutResponse,
    InvoiceResponse,
    PaymentCreate,
    SalesOrderCreate,
    SalesOrderResponse,
)
from inventory_engine.services import consumption, ledger

router = APIRouter(prefix="/sales", tags=["Sales"])


# =========================================================
# SUBMIT SALES ORDER
# =========================================================
@router.post("", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
def submit_sales_order(
    order_data: SalesOrderCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*MANAGER_ROLES)),
):
    order_data = order_data.model_copy(update={"actor_id": current_user.id})

    result = consumption.submit_sales_order(db, order_data)

    return to_checkout_response(result)


# =========================================================
# GET SINGLE SALES ORDER
# =========================================================
@router.get("/{order_id}", response_model=SalesOrderResponse)
def get_sales_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*SALES_ROLES)),
):
    return ledger.get_order(db, order_id)


# =========================================================
# RECORD PAYMENT
# =========================================================
@router.post("/{order_id}/pay", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def pay_sales_order(
    order_id: int,
    payment: PaymentCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*MANAGER_ROLES)),
):
    return ledger.record_payment(db, order_id, payment)
