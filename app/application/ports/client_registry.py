from abc import ABC, abstractmethod

from app.domain.entities.client_config import ClientConfig


class ClientRegistryPort(ABC):
    @abstractmethod
    def get(self, routing_key: str) -> ClientConfig | None:
        raise NotImplementedError

    @abstractmethod
    def all(self) -> list[ClientConfig]:
        raise NotImplementedError
