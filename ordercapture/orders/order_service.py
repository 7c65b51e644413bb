import json
import random
from typing import Optional

from ordercapture.config.settings import Settings
from ordercapture.orders.errors import BrokerError, StoreError
from ordercapture.orders.models import Order
from ordercapture.orders.variants import BackendVariant, classify_broker_endpoint, classify_store_endpoint
from ordercapture.shared.clients import EventHubClient, MongoStoreClient, RabbitMQClient
from ordercapture.shared.endpoints import redact_credentials
from ordercapture.shared.logger import StructuredLogger
from ordercapture.shared.messaging import OrderSender, create_order_sender
from ordercapture.shared.telemetry import DependencyTracker, TelemetryClient

ORDER_STATUS_OPEN = "Open"
PARTITION_COUNT = 11

STORE_DEPENDENCY_TYPE = "MongoDB"
BROKER_DEPENDENCY_TYPE = "AMQP"


class OrderService:
    """
    Captures orders into MongoDB / Cosmos DB and announces them on RabbitMQ / Event Hubs.

    Which flavour of each backend is in use is decided once, here, from the configured
    endpoints. The store flavour only changes telemetry labels; the broker flavour picks
    the sender implementation. Both public operations report every outbound call through
    a DependencyTracker and propagate failures as StoreError / BrokerError.
    """

    def __init__(
        self,
        store: MongoStoreClient,
        settings: Settings,
        telemetry: TelemetryClient,
        event_hub_client: Optional[EventHubClient] = None,
        rabbitmq_client: Optional[RabbitMQClient] = None,
        custom_telemetry: Optional[TelemetryClient] = None,
        logger: Optional[StructuredLogger] = None,
        rng: Optional[random.Random] = None,
    ):
        self.logger = logger or StructuredLogger("OrderService")
        self.settings = settings
        self.store = store
        self.telemetry = telemetry
        self.custom_telemetry = custom_telemetry
        self._rng = rng or random.Random()

        self.team_name = settings.app.team_name

        self._store_variant = classify_store_endpoint(store.endpoint)
        self._broker_variant = classify_broker_endpoint(settings.amqp.url)

        self._sender: OrderSender = create_order_sender(
            self._broker_variant,
            event_hub_client=event_hub_client,
            rabbitmq_client=rabbitmq_client,
            queue=settings.amqp.queue,
            logger=self.logger,
        )

        # Dependency records go to the custom sink when one is configured
        self._tracker = DependencyTracker(
            telemetry=custom_telemetry or telemetry,
            logger=self.logger,
            exception_telemetry=custom_telemetry,
        )

        self.log_configuration()

    # --- Backend selection ---
    @property
    def store_variant(self) -> BackendVariant:
        return self._store_variant

    @property
    def broker_variant(self) -> BackendVariant:
        return self._broker_variant

    @property
    def store_backend_name(self) -> str:
        return f"{self._store_variant.value}-store"

    @property
    def broker_backend_name(self) -> str:
        return self._sender.backend_name

    # --- Diagnostics ---
    def validate_variable(self, value: Optional[str], name: str):
        """Log whether a configuration value is set, and to what."""
        if not value:
            self.logger.info(f"The configuration value {name} has not been set")
        else:
            self.logger.info(f"The configuration value {name} is {value}")

    def log_configuration(self):
        self.validate_variable(self.settings.telemetry.instrumentation_key, "APPINSIGHTS_KEY")
        self.validate_variable(redact_credentials(self.settings.mongo.url), "MONGOURL")
        self.logger.info(f"Store variant: {self._store_variant.value}")
        self.validate_variable(redact_credentials(self.settings.amqp.url), "AMQPURL")
        self.logger.info(f"Broker variant: {self._broker_variant.value}")
        self.validate_variable(self.team_name, "TEAMNAME")
        self.validate_variable(self.settings.app.default_source, "SOURCE")

    # --- Persistence ---
    async def capture_order(self, order: Order) -> str:
        """
        Stamp the order as open, default its source, assign a random product partition
        and insert it into the orders collection. Returns the stored identifier.
        """
        order.status = ORDER_STATUS_OPEN
        if not order.source:
            order.source = self.settings.app.default_source

        # Overwrites any caller-supplied product
        partition = self._rng.randrange(PARTITION_COUNT)
        order.product = f"product-{partition}"

        async def _insert() -> str:
            return await self.store.insert_one(self.settings.mongo.collection, order.to_document())

        try:
            order_id = await self._tracker.track(
                self.store_backend_name,
                self.store.endpoint,
                STORE_DEPENDENCY_TYPE,
                _insert,
                order_id=order.id,
                source=order.source,
            )
        except Exception as exc:
            raise StoreError(f"Failed to capture order {order.id or '<unassigned>'}: {exc}") from exc

        order.id = order_id
        db = self.store_backend_name
        self.logger.trace(f"CaptureOrder {order.id}: - Team Name {self.team_name} - db {db}")
        # The order is already stored; a broken event sink must not report the capture as failed
        try:
            self.telemetry.track_event(f"CaptureOrder: - Team Name {self.team_name} - db {db}")
        except Exception as exc:
            self.logger.error("Failed to emit capture event", order_id=order.id, error=str(exc))
        return order.id

    # --- Publication ---
    def build_message(self, order: Order) -> bytes:
        """Compact JSON reference to the order: ``{"order":"<id>","source":"<team>"}``."""
        return json.dumps({"order": order.id, "source": self.team_name}, separators=(",", ":")).encode("utf-8")

    async def publish_order(self, order: Order):
        body = self.build_message(order)
        sender = self._sender

        async def _send():
            await sender.send(body)
            self.logger.trace(f"Sent message to {sender.backend_name} {sender.endpoint} {body.decode('utf-8')}")

        try:
            await self._tracker.track(
                sender.backend_name,
                sender.endpoint,
                BROKER_DEPENDENCY_TYPE,
                _send,
                order_id=order.id,
            )
        except Exception as exc:
            raise BrokerError(f"Failed to publish order {order.id}: {exc}") from exc
