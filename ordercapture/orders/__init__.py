from ordercapture.orders.errors import BrokerError, OrderCaptureError, StoreError
from ordercapture.orders.models import Order
from ordercapture.orders.variants import BackendVariant

__all__ = ["BackendVariant", "BrokerError", "Order", "OrderCaptureError", "StoreError"]
