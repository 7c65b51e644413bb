import asyncio
from typing import Optional

from aiokafka import AIOKafkaProducer
from aiokafka.helpers import create_ssl_context

from ordercapture.shared.endpoints import redact_credentials, split_url
from ordercapture.shared.logger import StructuredLogger

EVENT_HUBS_KAFKA_PORT = 9093


class EventHubClient:
    """
    Async producer for an Azure Event Hub, talking to the namespace's Kafka-compatible endpoint.

    Takes the AMQP form of the connection URL,
    ``amqps://<policy>:<key>@<namespace>.servicebus.windows.net/<event hub>``,
    and authenticates with SASL PLAIN using the equivalent Event Hubs connection string.
    """

    def __init__(self, amqp_url: str, logger: Optional[StructuredLogger] = None):
        self.amqp_url = amqp_url
        self.logger = logger or StructuredLogger("EventHubClient")

        parts = split_url(amqp_url)
        self.namespace_host = parts.host.rsplit(":", 1)[0]
        self.topic = parts.path.strip("/")
        self.bootstrap_servers = f"{self.namespace_host}:{EVENT_HUBS_KAFKA_PORT}"
        self.connection_string = (
            f"Endpoint=sb://{self.namespace_host}/;"
            f"SharedAccessKeyName={parts.username};"
            f"SharedAccessKey={parts.password};"
            f"EntityPath={self.topic}"
        )

        self._producer: Optional[AIOKafkaProducer] = None
        self._running = False
        self._start_lock = asyncio.Lock()

    @property
    def endpoint(self) -> str:
        return redact_credentials(self.amqp_url)

    # --- Lifecycle ---
    async def start(self):
        """Start the producer once; concurrent callers wait on the same start."""
        async with self._start_lock:
            if self._running:
                return

            self._producer = AIOKafkaProducer(
                bootstrap_servers=self.bootstrap_servers,
                security_protocol="SASL_SSL",
                sasl_mechanism="PLAIN",
                sasl_plain_username="$ConnectionString",
                sasl_plain_password=self.connection_string,
                ssl_context=create_ssl_context(),
            )
            try:
                await self._producer.start()
            except Exception as e:
                self.logger.error("Failed to start Event Hubs producer", error=str(e), endpoint=self.endpoint)
                self._producer = None
                raise
            self._running = True
            self.logger.info("Event Hubs producer started", bootstrap_servers=self.bootstrap_servers, topic=self.topic)

    async def stop(self):
        if not self._running:
            return
        await self._producer.stop()
        self._producer = None
        self._running = False
        self.logger.info("Event Hubs producer stopped")

    # --- Send ---
    async def send(self, body: bytes):
        """Send one message and wait for the broker acknowledgement."""
        if not self._running:
            await self.start()
        await self._producer.send_and_wait(self.topic, body)
