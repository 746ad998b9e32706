"""YAML tree codec."""

from typing import Any

import yaml

from spdxstore.config import Format
from spdxstore.formats.base import TreeCodec


class YamlCodec(TreeCodec):
    format = Format.YAML

    def encode(self, tree: Any) -> bytes:
        text = yaml.safe_dump(tree, sort_keys=False, allow_unicode=True, default_flow_style=False)
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return yaml.safe_load(data)
