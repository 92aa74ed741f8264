"""Domain models for momo-order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Order:
    """One submitted order. Replaced as a whole on edit, never mutated."""

    name: str
    meat_momos: int = 0
    veggie_momos: int = 0
    wants_soy_sauce: bool = True

    @property
    def momo_count(self) -> int:
        return self.meat_momos + self.veggie_momos

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        return {
            "name": self.name,
            "meatMomos": self.meat_momos,
            "veggieMomos": self.veggie_momos,
            "wantsSoySauce": self.wants_soy_sauce,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Order:
        """Build from the persisted JSON shape.

        Missing keys raise KeyError; a soy flag that is not a JSON boolean raises TypeError.
        """
        return cls(
            name=str(raw["name"]),
            meat_momos=int(raw["meatMomos"]),
            veggie_momos=int(raw["veggieMomos"]),
            wants_soy_sauce=_as_bool(raw["wantsSoySauce"], "wantsSoySauce"),
        )


@dataclass(frozen=True)
class NameConfig:
    """Soy sauce preference applied when a known name is picked on the form."""

    name: str
    default_soy_sauce: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "defaultSoySauce": self.default_soy_sauce}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> NameConfig:
        return cls(name=str(raw["name"]), default_soy_sauce=_as_bool(raw["defaultSoySauce"], "defaultSoySauce"))
