"""Key-value store interface for simulator state"""

from abc import ABC, abstractmethod
from typing import Dict, Optional


class KeyValueStore(ABC):
    """Minimal string store, the server-side counterpart of browser localStorage"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used by tests and for ephemeral sessions"""

    def __init__(self) -> None:
        self.data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)
