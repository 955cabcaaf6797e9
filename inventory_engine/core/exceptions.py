# inventory_engine/core/exceptions.py
#
# Every failure the consumption engine can surface. Each one aborts the
# whole checkout; main.py maps them onto HTTP responses.


class ConsumptionError(Exception):
    code = "CONSUMPTION_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ConsumptionError):
    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(ConsumptionError):
    code = "NOT_FOUND"
    status_code = 404


class IncompatibleUnitsError(ConsumptionError):
    """Bad catalog data: a BOM line and its material measure different things."""

    code = "INCOMPATIBLE_UNITS"
    status_code = 422

    def __init__(self, from_unit: str, to_unit: str):
        super().__init__(f"Cannot convert {from_unit} to {to_unit}")
        self.from_unit = from_unit
        self.to_unit = to_unit


class InsufficientStockError(ConsumptionError):
    code = "INSUFFICIENT_STOCK"
    status_code = 409

    def __init__(self, item_id: int, item_name: str):
        super().__init__(f"Insufficient {item_name} stock")
        self.item_id = item_id
        self.item_name = item_name


class StorageError(ConsumptionError):
    code = "STORAGE_ERROR"
    status_code = 503
