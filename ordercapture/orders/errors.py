class OrderCaptureError(Exception):
    """Base class for failures surfaced by the order service."""


class StoreError(OrderCaptureError):
    """The order could not be written to the document store."""


class BrokerError(OrderCaptureError):
    """The order reference could not be handed to the message broker."""
