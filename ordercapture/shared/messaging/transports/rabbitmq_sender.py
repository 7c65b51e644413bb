import asyncio

from ordercapture.shared.clients import RabbitMQClient
from ordercapture.shared.messaging.base import OrderSender

ORDER_QUEUE = "order"


class RabbitMQOrderSender(OrderSender):
    """
    Publishes order messages to a durable RabbitMQ queue through the default exchange.

    Each send opens its own connection and channel, declares the queue (idempotent),
    publishes, and closes both again. pika is blocking, so the whole span runs in the
    loop's default executor.
    """

    backend_name = "self-managed-broker"

    def __init__(self, rabbitmq_client: RabbitMQClient, queue: str = ORDER_QUEUE):
        self.rabbitmq_client = rabbitmq_client
        self.queue = queue

    @property
    def endpoint(self) -> str:
        return self.rabbitmq_client.endpoint

    async def send(self, body: bytes):
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._publish, body)

    def _publish(self, body: bytes):
        connection = self.rabbitmq_client.create_connection()
        try:
            channel = connection.channel()
            try:
                channel.queue_declare(
                    queue=self.queue,
                    durable=True,
                    exclusive=False,
                    auto_delete=False,
                    arguments=None,
                )
                channel.basic_publish(
                    exchange="",
                    routing_key=self.queue,
                    body=body,
                    properties=None,
                    mandatory=False,
                )
            finally:
                if channel.is_open:
                    channel.close()
        finally:
            if connection.is_open:
                connection.close()
