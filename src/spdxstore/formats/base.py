"""Tree codec interface shared by every wire format."""

from abc import ABC, abstractmethod
from typing import Any

from spdxstore.config import Format


class TreeCodec(ABC):
    """
    Converts an abstract tree (dicts, lists and scalars) to bytes and back.

    Codecs hold no state, so one instance per format is shared by every
    caller.
    """

    format: Format

    @abstractmethod
    def encode(self, tree: Any) -> bytes:
        """Encode a tree into bytes."""

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Decode bytes into a tree."""
