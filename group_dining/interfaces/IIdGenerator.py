from abc import ABC, abstractmethod

class IIdGenerator(ABC):
    @abstractmethod
    def session_id(self) -> str:
        pass

    @abstractmethod
    def order_id(self) -> str:
        pass
