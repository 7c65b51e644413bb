from typing import Optional

import pika

from ordercapture.shared.endpoints import redact_credentials
from ordercapture.shared.logger import StructuredLogger


class RabbitMQClient:
    """
    Connection factory for a RabbitMQ broker (AMQP 0.9.1).
    Holds only the parsed parameters; every call to create_connection opens a new
    blocking connection that the caller owns and must close.
    """

    def __init__(self, amqp_url: str, logger: Optional[StructuredLogger] = None):
        self.amqp_url = amqp_url
        self.logger = logger or StructuredLogger("RabbitMQClient")
        self.parameters = pika.URLParameters(amqp_url)

    @property
    def endpoint(self) -> str:
        return redact_credentials(self.amqp_url)

    def create_connection(self) -> pika.BlockingConnection:
        connection = pika.BlockingConnection(self.parameters)
        self.logger.debug("RabbitMQ connection opened", endpoint=self.endpoint)
        return connection
