from functools import lru_cache
from typing import Optional

from ordercapture.config.settings import Settings
from ordercapture.orders.order_service import OrderService
from ordercapture.orders.variants import BackendVariant, classify_broker_endpoint
from ordercapture.shared.clients import EventHubClient, MongoStoreClient, RabbitMQClient
from ordercapture.shared.logger import StructuredLogger
from ordercapture.shared.metrics import MetricsCollector
from ordercapture.shared.telemetry import LoggingTelemetryClient


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_logger(name: str) -> StructuredLogger:
    settings = get_settings()
    return StructuredLogger(name=name, log_file=settings.app.log_file, level=settings.app.log_level)


# ----------------------------
# Store client
# ----------------------------
@lru_cache
def get_store_client() -> MongoStoreClient:
    settings = get_settings()
    return MongoStoreClient(
        url=settings.mongo.url,
        database=settings.mongo.database,
        logger=get_logger("MongoStoreClient"),
    )


# ----------------------------
# Broker clients, only the configured flavour is built
# ----------------------------
@lru_cache
def get_event_hub_client() -> Optional[EventHubClient]:
    settings = get_settings()
    if classify_broker_endpoint(settings.amqp.url) is not BackendVariant.HOSTED:
        return None
    return EventHubClient(amqp_url=settings.amqp.url, logger=get_logger("EventHubClient"))


@lru_cache
def get_rabbitmq_client() -> Optional[RabbitMQClient]:
    settings = get_settings()
    if classify_broker_endpoint(settings.amqp.url) is BackendVariant.HOSTED:
        return None
    return RabbitMQClient(amqp_url=settings.amqp.url, logger=get_logger("RabbitMQClient"))


# ----------------------------
# Telemetry
# ----------------------------
@lru_cache
def get_telemetry_client() -> LoggingTelemetryClient:
    logger = get_logger("Telemetry")
    return LoggingTelemetryClient(logger=logger, metrics=MetricsCollector(logger))


@lru_cache
def get_custom_telemetry_client() -> Optional[LoggingTelemetryClient]:
    key = get_settings().telemetry.instrumentation_key
    if not key:
        return None
    logger = get_logger("CustomTelemetry")
    return LoggingTelemetryClient(instrumentation_key=key, logger=logger, metrics=MetricsCollector(logger))


# ----------------------------
# Order service
# ----------------------------
@lru_cache
def get_order_service() -> OrderService:
    return OrderService(
        store=get_store_client(),
        settings=get_settings(),
        telemetry=get_telemetry_client(),
        event_hub_client=get_event_hub_client(),
        rabbitmq_client=get_rabbitmq_client(),
        custom_telemetry=get_custom_telemetry_client(),
        logger=get_logger("OrderService"),
    )


async def start_clients():
    """Open the long-lived backend handles ahead of the first request."""
    get_store_client().connect()
    event_hub_client = get_event_hub_client()
    if event_hub_client is not None:
        await event_hub_client.start()


async def stop_clients():
    event_hub_client = get_event_hub_client()
    if event_hub_client is not None:
        await event_hub_client.stop()
    await get_store_client().close()
