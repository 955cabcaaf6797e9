# inventory_engine/services/consumption.py
#
# Turns a completed sale into stock consumption.
#
# One call is one unit of work: the order, its invoice, every stock
# decrement (direct or exploded through a bill of materials) and the stock
# alerts they trigger are committed together, or nothing is.

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Union

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_engine.core.config import settings
from inventory_engine.core.exceptions import (
    ConsumptionError,
    InsufficientStockError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from inventory_engine.core.units import convert, quantize_stock, to_decimal
from inventory_engine.models.inventory import InventoryItem
from inventory_engine.models.invoices import Invoice
from inventory_engine.models.notifications import Notification
from inventory_engine.models.sales import SalesOrder
from inventory_engine.schemas.sale import CheckoutRequest, SalesOrderCreate
from inventory_engine.services import bom_catalog, inventory_store, ledger, notifier

logger = logging.getLogger(__name__)


# =========================================================
# CONSUMPTION PLAN
# =========================================================

@dataclass(frozen=True)
class MaterialDraw:
    material: InventoryItem
    # Already converted into the material's own unit
    quantity: Decimal


@dataclass(frozen=True)
class DirectConsumption:
    """No recipe: the sold item leaves stock itself."""

    item: InventoryItem
    quantity: Decimal

    @property
    def draws(self) -> list[MaterialDraw]:
        return [MaterialDraw(self.item, self.quantity)]


@dataclass(frozen=True)
class ExplodedConsumption:
    """The sold item is made to order; its materials leave stock instead."""

    product: InventoryItem
    lines: list[MaterialDraw] = field(default_factory=list)

    @property
    def draws(self) -> list[MaterialDraw]:
        return list(self.lines)


ConsumptionPlan = Union[DirectConsumption, ExplodedConsumption]


def _drawable(item: InventoryItem, quantity: Decimal) -> Decimal:
    # Anything below the stock precision would be written as a zero decrement
    if quantize_stock(quantity) <= 0:
        raise ValidationError(
            f"Quantity of {item.product} is too small to take out of stock"
        )
    return quantity


def plan_line(db: Session, product_id: int, quantity) -> ConsumptionPlan:
    """
    Work out what selling ``quantity`` of ``product_id`` takes out of stock.

    Reads only. Unknown items and unit mismatches fail here, before the
    checkout has written anything.
    """
    quantity = to_decimal(quantity)
    product = inventory_store.get(db, product_id)

    bom = bom_catalog.find_by_output_product(db, product_id)
    if bom is None:
        return DirectConsumption(item=product, quantity=_drawable(product, quantity))

    lines = []
    for line in bom.materials:
        material = line.material
        if material is None:
            raise NotFoundError(
                f"Material {line.material_id} of {product.product} not found"
            )

        needed = convert(to_decimal(line.qty) * quantity, line.unit, material.unit)
        lines.append(MaterialDraw(material=material, quantity=_drawable(material, needed)))

    return ExplodedConsumption(product=product, lines=lines)


# =========================================================
# CHECKOUT
# =========================================================

@dataclass
class CheckoutResult:
    order: SalesOrder
    invoice: Invoice | None
    notifications: list[Notification]


class _Deadline:
    def __init__(self, seconds: float):
        self.seconds = seconds
        self.expires_at = time.monotonic() + seconds

    def check(self, step: str) -> None:
        if time.monotonic() > self.expires_at:
            raise StorageError(
                f"Checkout exceeded {self.seconds}s during {step}"
            )


def validate_cart(actor_id, items) -> None:
    if not actor_id:
        raise ValidationError("Staff ID required")

    if not items:
        raise ValidationError("Sale must contain items")

    for position, item in enumerate(items, start=1):
        if item.product_id is None:
            raise ValidationError(f"Item {position} has no product")

        if item.quantity is None or item.quantity <= 0:
            raise ValidationError(f"Item {position} quantity must be greater than zero")

        if item.price is None or item.price < 0:
            raise ValidationError(f"Item {position} price cannot be negative")


def _bound_statements(db: Session) -> None:
    # PostgreSQL cancels any single statement stuck longer than the checkout
    # budget; SQLite is bounded by its busy timeout instead.
    if db.get_bind().dialect.name == "postgresql":
        millis = int(settings.CHECKOUT_TIMEOUT_SECONDS * 1000)
        db.execute(text(f"SET LOCAL statement_timeout = {millis}"))


def apply_plan(
    db: Session,
    plan: ConsumptionPlan,
    staged: dict[int, Notification],
    now: datetime,
) -> None:
    for draw in plan.draws:
        material = draw.material

        new_stock = inventory_store.decrement(db, material.id, draw.quantity)
        if new_stock is None:
            raise InsufficientStockError(material.id, material.product)

        if notifier.should_notify(material):
            # One alert per item per checkout, reporting the final stock
            staged[material.id] = notifier.build(material, is_out_of_stock=new_stock <= 0)
            inventory_store.mark_notified(db, material.id, now)


def _consume(
    db: Session,
    request,
    *,
    channel: str,
    status: str,
    payment_status: str,
    payment=None,
    order_date: datetime | None = None,
) -> CheckoutResult:
    validate_cart(request.actor_id, request.items)

    deadline = _Deadline(settings.CHECKOUT_TIMEOUT_SECONDS)
    now = datetime.now(timezone.utc)
    staged: dict[int, Notification] = {}

    try:
        _bound_statements(db)

        plans = [plan_line(db, item.product_id, item.quantity) for item in request.items]
        deadline.check("planning")

        inventory_store.lock(
            db, (draw.material.id for plan in plans for draw in plan.draws)
        )

        order = ledger.create_order(
            db,
            actor_id=request.actor_id,
            items=request.items,
            channel=channel,
            status=status,
            payment_status=payment_status,
            customer_id=request.customer_id,
            customer_name=request.customer_name,
            tag=request.tag,
            memo=request.memo,
            order_date=order_date,
        )

        for plan in plans:
            apply_plan(db, plan, staged, now)
            deadline.check("stock update")

        invoice = ledger.create_invoice(db, order, payment) if payment is not None else None

        notifications = list(staged.values())
        notifier.emit(db, notifications)

        deadline.check("commit")
        db.commit()

    except ConsumptionError as exc:
        db.rollback()
        logger.warning(f"Checkout aborted: {exc.code} {exc.message}")
        raise

    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Checkout aborted by storage failure: {exc}")
        raise StorageError("Unable to complete sale") from exc

    except BaseException:
        # Cancelled by the caller: nothing may survive
        db.rollback()
        raise

    logger.info(
        f"Checkout committed: order={order.id} channel={channel} "
        f"total={order.total} lines={len(request.items)} alerts={len(notifications)}"
    )

    return CheckoutResult(order=order, invoice=invoice, notifications=notifications)


def checkout(db: Session, request: CheckoutRequest) -> CheckoutResult:
    """POS checkout: the sale is paid on the spot and invoiced with the order."""
    return _consume(
        db,
        request,
        channel=ledger.POS_CHANNEL,
        status="Completed",
        payment_status="Paid",
        payment=request,
    )


def submit_sales_order(db: Session, request: SalesOrderCreate) -> CheckoutResult:
    """Sales-order submission: stock is consumed now, payments are recorded later."""
    return _consume(
        db,
        request,
        channel=ledger.ORDER_CHANNEL,
        status=request.status,
        payment_status="Unpaid",
        order_date=request.order_date,
    )
