from abc import ABC, abstractmethod
from pathlib import Path


class IReceiptWriter(ABC):
    @abstractmethod
    async def save(self, *, sale_id: int, content: bytes) -> Path:
        pass
