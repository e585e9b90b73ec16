"""Two-dimensional vectors and axis-aligned rectangles."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _divide(a: float, b: float) -> float:
    """Divide with IEEE semantics: division by zero yields an infinity or NaN."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _fields(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return data


def _number(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} must be a number, got {value!r}")
    return float(value)


@dataclass
class Vec2:
    """A mutable 2D vector; arithmetic methods update it in place."""

    x: float = 0.0
    y: float = 0.0

    def set(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def add_value(self, value: float) -> None:
        self.x += value
        self.y += value

    def sub_value(self, value: float) -> None:
        self.x -= value
        self.y -= value

    def mul_value(self, value: float) -> None:
        self.x *= value
        self.y *= value

    def div_value(self, value: float) -> None:
        self.x = _divide(self.x, value)
        self.y = _divide(self.y, value)

    def add_vec2(self, other: Vec2) -> None:
        self.x += other.x
        self.y += other.y

    def sub_vec2(self, other: Vec2) -> None:
        self.x -= other.x
        self.y -= other.y

    def mul_vec2(self, other: Vec2) -> None:
        self.x *= other.x
        self.y *= other.y

    def div_vec2(self, other: Vec2) -> None:
        self.x = _divide(self.x, other.x)
        self.y = _divide(self.y, other.y)

    def negate(self) -> None:
        self.x = -self.x
        self.y = -self.y

    def copy(self) -> Vec2:
        return Vec2(self.x, self.y)

    def to_dict(self) -> dict[str, float]:
        return {"X": self.x, "Y": self.y}

    @classmethod
    def from_dict(cls, data: Any) -> Vec2:
        fields = _fields(data)
        return cls(_number(fields, "X"), _number(fields, "Y"))


@dataclass
class Rect:
    """An axis-aligned rectangle with its origin at the top-left corner."""

    pos: Vec2 = field(default_factory=Vec2)
    size: Vec2 = field(default_factory=Vec2)

    @property
    def left(self) -> float:
        return self.pos.x

    @property
    def right(self) -> float:
        return self.pos.x + self.size.x

    @property
    def top(self) -> float:
        return self.pos.y

    @property
    def bottom(self) -> float:
        return self.pos.y + self.size.y

    @property
    def center(self) -> Vec2:
        return Vec2(self.pos.x + self.size.x / 2, self.pos.y + self.size.y / 2)

    def move(self, offset: Vec2) -> None:
        self.pos.add_vec2(offset)

    def intersects(self, other: Rect) -> bool:
        return (
            self.left < other.right
            and self.right > other.left
            and self.top < other.bottom
            and self.bottom > other.top
        )

    def contains(self, point: Vec2) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {"Pos": self.pos.to_dict(), "Size": self.size.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> Rect:
        fields = _fields(data)
        return cls(Vec2.from_dict(fields.get("Pos")), Vec2.from_dict(fields.get("Size")))