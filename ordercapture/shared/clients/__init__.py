from ordercapture.shared.clients.event_hub_client import EventHubClient
from ordercapture.shared.clients.mongo_client import MongoStoreClient
from ordercapture.shared.clients.rabbitmq_client import RabbitMQClient

__all__ = ["EventHubClient", "MongoStoreClient", "RabbitMQClient"]
