from unittest.mock import MagicMock

import pytest

from ordercapture.orders.variants import BackendVariant
from ordercapture.shared.messaging import create_order_sender
from ordercapture.shared.messaging.transports.hosted_sender import HostedOrderSender
from ordercapture.shared.messaging.transports.rabbitmq_sender import RabbitMQOrderSender


def test_selects_sender_per_variant(event_hub_client, rabbitmq_client):
    hosted = create_order_sender(BackendVariant.HOSTED, event_hub_client, rabbitmq_client, logger=MagicMock())
    self_managed = create_order_sender(BackendVariant.SELF_MANAGED, event_hub_client, rabbitmq_client, logger=MagicMock())

    assert isinstance(hosted, HostedOrderSender)
    assert hosted.backend_name == "hosted-broker"
    assert isinstance(self_managed, RabbitMQOrderSender)
    assert self_managed.backend_name == "self-managed-broker"
    assert self_managed.queue == "order"


def test_missing_client_for_variant():
    with pytest.raises(ValueError):
        create_order_sender(BackendVariant.HOSTED, rabbitmq_client=MagicMock(), logger=MagicMock())
    with pytest.raises(ValueError):
        create_order_sender(BackendVariant.SELF_MANAGED, event_hub_client=MagicMock(), logger=MagicMock())
