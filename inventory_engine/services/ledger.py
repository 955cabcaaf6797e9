# inventory_engine/services/ledger.py
#
# Writes the sale itself: order header, line items and invoices.

import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session, selectinload

from inventory_engine.core.exceptions import NotFoundError, ValidationError
from inventory_engine.core.units import to_decimal
from inventory_engine.models.invoices import Invoice
from inventory_engine.models.sale_items import SalesItem
from inventory_engine.models.sales import SalesOrder
from inventory_engine.schemas.sale import PaymentCreate, PaymentInfo

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

POS_CHANNEL = "pos"
ORDER_CHANNEL = "order"


def money(value) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def create_order(
    db: Session,
    *,
    actor_id: int,
    items,
    channel: str,
    status: str,
    payment_status: str,
    customer_id: str | None = None,
    customer_name: str | None = None,
    tag: str | None = None,
    memo: str | None = None,
    order_date: datetime | None = None,
) -> SalesOrder:
    total = Decimal("0.00")
    sales_items = []

    for item in items:
        line_total = money(item.price * item.quantity)
        total += line_total

        sales_items.append(
            SalesItem(
                product_id=item.product_id,
                quantity=item.quantity,
                price=money(item.price),
                line_total=line_total,
            )
        )

    order = SalesOrder(
        user_id=actor_id,
        customer_id=customer_id,
        customer_name=customer_name,
        total=total,
        status=status,
        payment_status=payment_status,
        channel=channel,
        tag=tag,
        memo=memo,
        order_date=order_date or datetime.now(timezone.utc),
        items=sales_items,
    )
    db.add(order)
    db.flush()

    return order


def create_invoice(
    db: Session,
    order: SalesOrder,
    payment: PaymentInfo,
    amount: Decimal | None = None,
    payment_date: datetime | None = None,
) -> Invoice:
    is_transfer = payment.payment_method == "Transfer"

    invoice = Invoice(
        sales_order=order,
        amount=money(order.total if amount is None else amount),
        payment_method=payment.payment_method,
        bank_name=payment.bank_name if is_transfer else None,
        account_number=payment.account_number if is_transfer else None,
        payment_date=payment_date or datetime.now(timezone.utc),
    )
    db.add(invoice)
    db.flush()

    return invoice


def get_order(db: Session, order_id: int) -> SalesOrder:
    order = (
        db.query(SalesOrder)
        .options(
            selectinload(SalesOrder.items).joinedload(SalesItem.product),
            selectinload(SalesOrder.invoices),
        )
        .filter(SalesOrder.id == order_id)
        .first()
    )

    if not order:
        raise NotFoundError(f"Sales order {order_id} not found")

    return order


def record_payment(db: Session, order_id: int, payment: PaymentCreate) -> Invoice:
    """
    Add a payment to an existing order; the order becomes "Paid" once the
    invoices cover its total. Commits.
    """
    order = (
        db.query(SalesOrder)
        .filter(SalesOrder.id == order_id)
        .with_for_update()
        .first()
    )

    if not order:
        raise NotFoundError(f"Sales order {order_id} not found")

    if order.payment_status == "Paid":
        raise ValidationError(f"Sales order {order_id} is already paid")

    try:
        invoice = create_invoice(
            db,
            order,
            payment,
            amount=payment.amount,
            payment_date=payment.payment_date,
        )

        total_paid = sum((inv.amount for inv in order.invoices), Decimal("0.00"))
        if total_paid >= order.total:
            order.payment_status = "Paid"

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(invoice)
    logger.info(
        f"Payment recorded: order={order_id} amount={invoice.amount} "
        f"status={order.payment_status}"
    )
    return invoice
