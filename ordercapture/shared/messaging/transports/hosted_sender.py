from ordercapture.shared.clients import EventHubClient
from ordercapture.shared.messaging.base import OrderSender


class HostedOrderSender(OrderSender):
    """Sends order messages over the shared, long-lived Event Hubs producer."""

    backend_name = "hosted-broker"

    def __init__(self, event_hub_client: EventHubClient):
        self.event_hub_client = event_hub_client

    @property
    def endpoint(self) -> str:
        return self.event_hub_client.endpoint

    async def send(self, body: bytes):
        await self.event_hub_client.send(body)
