"""Wire format codecs (JSON, pretty JSON, XML, YAML)."""

from typing import Dict

from spdxstore.config import Format
from spdxstore.formats.base import TreeCodec
from spdxstore.formats.json_codec import JsonCodec, PrettyJsonCodec
from spdxstore.formats.xml_codec import XmlCodec
from spdxstore.formats.yaml_codec import YamlCodec

_CODECS: Dict[Format, TreeCodec] = {
    Format.JSON: JsonCodec(),
    Format.JSON_PRETTY: PrettyJsonCodec(),
    Format.XML: XmlCodec(),
    Format.YAML: YamlCodec(),
}


def codec_for(fmt: Format) -> TreeCodec:
    """The codec for fmt."""
    return _CODECS[fmt]


__all__ = ["TreeCodec", "JsonCodec", "PrettyJsonCodec", "XmlCodec", "YamlCodec", "codec_for"]
