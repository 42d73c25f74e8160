from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Codec(ABC):
    """
    Interfaccia minima per codec di testo.

    compress() returns whatever the codec needs to get the text back;
    decompress() takes exactly that object.
    """

    codec_id: str

    @abstractmethod
    def compress(self, symbols: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    def decompress(self, encoded: Any) -> str:
        raise NotImplementedError
