from enum import Enum

from ordercapture.shared.endpoints import endpoint_host

HOSTED_STORE_SUFFIX = "documents.azure.com"
HOSTED_BROKER_SUFFIX = "servicebus.windows.net"


class BackendVariant(str, Enum):
    HOSTED = "hosted"
    SELF_MANAGED = "self-managed"


def _classify(endpoint: str, hosted_suffix: str) -> BackendVariant:
    if hosted_suffix in endpoint_host(endpoint):
        return BackendVariant.HOSTED
    return BackendVariant.SELF_MANAGED


def classify_store_endpoint(endpoint: str) -> BackendVariant:
    """Cosmos DB accounts live under documents.azure.com; anything else is a plain MongoDB."""
    return _classify(endpoint, HOSTED_STORE_SUFFIX)


def classify_broker_endpoint(endpoint: str) -> BackendVariant:
    """Event Hubs namespaces live under servicebus.windows.net; anything else is RabbitMQ."""
    return _classify(endpoint, HOSTED_BROKER_SUFFIX)
