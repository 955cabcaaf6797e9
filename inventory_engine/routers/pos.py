# =========================================================
# POS ROUTER
#
# Checkout from a POS terminal. The sale, its invoice, the stock it
# consumes and any stock alerts are committed together or not at all.
# =========================================================

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from inventory_engine.database import get_db
from inventory_engine.core.auth import SALES_ROLES, require_roles
from inventory_engine.core.rate_limiter import limiter
from inventory_engine.schemas.notification import NotificationResponse
from inventory_engine.schemas.sale import (
    CheckoutRequest,
    CheckoutResponse,
    InvoiceResponse,
    SalesOrderResponse,
)
from inventory_engine.services import consumption

router = APIRouter(prefix="/pos", tags=["POS"])


def to_checkout_response(result: consumption.CheckoutResult) -> CheckoutResponse:
    return CheckoutResponse(
        order=SalesOrderResponse.model_validate(result.order),
        invoice=InvoiceResponse.model_validate(result.invoice) if result.invoice else None,
        notifications=[
            NotificationResponse.model_validate(notification)
            for notification in result.notifications
        ],
    )


# =========================================================
# CHECKOUT
# =========================================================
@router.post("/checkout", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def checkout(
    request: Request,
    cart: CheckoutRequest,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*SALES_ROLES)),
):
    # The terminal's logged-in staff member is the actor, whatever the body says
    cart = cart.model_copy(update={"actor_id": current_user.id})

    result = consumption.checkout(db, cart)

    return to_checkout_response(result)
