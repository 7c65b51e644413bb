from typing import Optional

from ordercapture.orders.variants import BackendVariant
from ordercapture.shared.clients import EventHubClient, RabbitMQClient
from ordercapture.shared.logger import StructuredLogger
from ordercapture.shared.messaging.base import OrderSender
from ordercapture.shared.messaging.transports.hosted_sender import HostedOrderSender
from ordercapture.shared.messaging.transports.rabbitmq_sender import ORDER_QUEUE, RabbitMQOrderSender


def create_order_sender(
    variant: BackendVariant,
    event_hub_client: Optional[EventHubClient] = None,
    rabbitmq_client: Optional[RabbitMQClient] = None,
    queue: str = ORDER_QUEUE,
    logger: Optional[StructuredLogger] = None,
) -> OrderSender:
    """Pick the sender implementation for a broker variant. Called once per service instance."""
    logger = logger or StructuredLogger("OrderSenderFactory")

    if variant is BackendVariant.HOSTED:
        if event_hub_client is None:
            raise ValueError("Hosted broker selected but no Event Hubs client was provided")
        sender: OrderSender = HostedOrderSender(event_hub_client)
    else:
        if rabbitmq_client is None:
            raise ValueError("Self-managed broker selected but no RabbitMQ client was provided")
        sender = RabbitMQOrderSender(rabbitmq_client, queue=queue)

    logger.info(f"Created {type(sender).__name__}", backend=sender.backend_name, endpoint=sender.endpoint)
    return sender
