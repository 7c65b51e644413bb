from ordercapture.shared.messaging.base import OrderSender
from ordercapture.shared.messaging.sender_factory import create_order_sender

__all__ = ["OrderSender", "create_order_sender"]
