from abc import ABC, abstractmethod
from typing import Protocol


class PaymentGateway(Protocol):
    def charge(self, amount: int) -> str: ...


class Repository(ABC):
    @abstractmethod
    def get(self, key): ...


class BaseService(ABC):
    @abstractmethod
    def run(self): ...

    def describe(self):
        return "service"
