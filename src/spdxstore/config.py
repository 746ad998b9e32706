"""
Format and verbosity configuration.

A StoreConfig is an immutable value. Changing the configuration of a
MultiFormatStore replaces the whole value, so the format, the verbosity and
the codec derived from them can never be observed out of step.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Type, TypeVar, Union

import yaml


class Format(Enum):
    """Wire formats."""
    JSON = "JSON"                # compact JSON
    JSON_PRETTY = "JSON_PRETTY"  # indented JSON
    XML = "XML"
    YAML = "YAML"


class Verbosity(Enum):
    """How much of the reference graph is inlined on output."""
    COMPACT = "COMPACT"    # ids for every reference, license expressions included
    STANDARD = "STANDARD"  # expand referenced elements one level, license expressions as text
    FULL = "FULL"          # expand every element and license expression


_E = TypeVar("_E", bound=Enum)


def _parse_enum(enum_type: Type[_E], value: Union[str, _E]) -> _E:
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_")
        if key in enum_type.__members__:
            return enum_type[key]
    allowed = ", ".join(enum_type.__members__)
    raise ValueError(f"Invalid {enum_type.__name__} '{value}' (expected one of: {allowed})")


@dataclass(frozen=True)
class StoreConfig:
    """
    Format and verbosity used by a MultiFormatStore.

    Properties:
        format: Wire format used for serialize and deserialize
        verbosity: Expansion policy for serialize (deserialize needs COMPACT)
    """

    format: Format = Format.JSON
    verbosity: Verbosity = Verbosity.COMPACT

    def with_format(self, fmt: Format) -> StoreConfig:
        return replace(self, format=_parse_enum(Format, fmt))

    def with_verbosity(self, verbosity: Verbosity) -> StoreConfig:
        return replace(self, verbosity=_parse_enum(Verbosity, verbosity))

    def to_dict(self) -> Dict[str, str]:
        return {"format": self.format.value, "verbosity": self.verbosity.value}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> StoreConfig:
        """
        Build a config from a mapping such as {"format": "yaml", "verbosity": "full"}.

        Missing keys keep their defaults.

        Raises:
            ValueError: on unknown keys or values
        """
        unknown = set(d) - {"format", "verbosity"}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        config = cls()
        if d.get("format") is not None:
            config = config.with_format(d["format"])
        if d.get("verbosity") is not None:
            config = config.with_verbosity(d["verbosity"])
        return config


def load_config(path: Union[str, Path]) -> StoreConfig:
    """
    Load a StoreConfig from a YAML file.

    Example file:
        format: JSON_PRETTY
        verbosity: STANDARD

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not a mapping or holds invalid values
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return StoreConfig.from_dict(data)
