"""JSON tree codecs (compact and pretty printed)."""

import json
from typing import Any

from spdxstore.config import Format
from spdxstore.formats.base import TreeCodec


class JsonCodec(TreeCodec):
    format = Format.JSON

    def encode(self, tree: Any) -> bytes:
        return json.dumps(tree, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return json.loads(data)


class PrettyJsonCodec(JsonCodec):
    format = Format.JSON_PRETTY

    def encode(self, tree: Any) -> bytes:
        return json.dumps(tree, ensure_ascii=False, indent=2).encode("utf-8")
