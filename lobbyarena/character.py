"""Game characters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from lobbyarena.primitives import Rect, Vec2


@dataclass
class Character:
    """A character occupying a rectangular hit box."""

    hit_box: Rect = field(default_factory=Rect)

    @classmethod
    def create(cls, pos: Vec2, size: Vec2) -> Character:
        """Make a character at ``pos`` with the given size; the vectors are copied."""
        return cls(Rect(pos.copy(), size.copy()))

    def to_dict(self) -> dict[str, Any]:
        return {"HitBox": self.hit_box.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> Character:
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        return cls(Rect.from_dict(data.get("HitBox")))