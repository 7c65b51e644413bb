from typing import Protocol


class OrderSender(Protocol):
    backend_name: str

    @property
    def endpoint(self) -> str:
        raise NotImplementedError

    async def send(self, body: bytes):
        raise NotImplementedError
