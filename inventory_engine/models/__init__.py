# Importing every model registers it on Base.metadata

from inventory_engine.models.users import User
from inventory_engine.models.inventory import InventoryItem
from inventory_engine.models.production import BillOfMaterials, MaterialLine
from inventory_engine.models.sales import SalesOrder
from inventory_engine.models.sale_items import SalesItem
from inventory_engine.models.invoices import Invoice
from inventory_engine.models.notifications import Notification

__all__ = [
    "User",
    "InventoryItem",
    "BillOfMaterials",
    "MaterialLine",
    "SalesOrder",
    "SalesItem",
    "Invoice",
    "Notification",
]
