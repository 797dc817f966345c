"""Geometry and state of the loading spinner and the circular progress gauge."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Dot:
    """One spinner dot: its centre and its radius."""

    x: float
    y: float
    radius: float


@dataclass
class LoadingSpinner:
    """A ring of dots whose sizes rotate from frame to frame.

    Call ``layout`` with the widget size before asking for frames.
    """

    dot_count: int = 20
    color: tuple[int, int, int] = (44, 167, 248)
    max_diameter: float = 10.0
    min_diameter: float = 2.0
    interval: int = 50
    index: int = field(default=0, init=False)
    _ranges: list[float] = field(default_factory=list, init=False, repr=False)
    _positions: list[tuple[float, float]] = field(default_factory=list, init=False, repr=False)

    @property
    def size_hint(self) -> tuple[int, int]:
        """Preferred widget size."""
        return (180, 180)

    @property
    def positions(self) -> list[tuple[float, float]]:
        """Centres of the dots from the last layout."""
        return list(self._positions)

    def layout(self, width: int, height: int) -> list[Dot]:
        """Place the dots on a circle fitting a widget of the given size.

        Returns the dots with the radii of the first frame.
        """
        if self.dot_count < 2:
            raise ValueError(f"a spinner needs at least two dots, not {self.dot_count}")
        if width < 0 or height < 0:
            raise ValueError(f"size must not be negative: {width}x{height}")

        half = float(min(width, height) // 2)
        center_distance = half - self.max_diameter / 2 - 1
        gap = (self.max_diameter - self.min_diameter) / (self.dot_count - 1) / 2
        angle_gap = 360.0 / self.dot_count

        self._ranges = [self.max_diameter / 2 - i * gap for i in range(self.dot_count)]
        self._positions = []
        for i in range(self.dot_count):
            radian = math.radians(-angle_gap * i)
            self._positions.append(
                (half + center_distance * math.cos(radian), half - center_distance * math.sin(radian))
            )
        return [Dot(x, y, r) for (x, y), r in zip(self._positions, self._ranges)]

    def frame(self) -> list[Dot]:
        """The dots of the current frame; advances the animation by one step."""
        if len(self._positions) != self.dot_count:
            raise RuntimeError("layout() must be called before drawing frames")
        count = self.dot_count
        dots = [
            Dot(x, y, self._ranges[(self.index + count - i) % count])
            for i, (x, y) in enumerate(self._positions)
        ]
        self.index += 1
        return dots


@dataclass
class ProgressGauge:
    """A circular progress gauge with a title and a percentage label."""

    title: str = ""
    color: str = "#2CA7F8"
    min_value: float = 0.0
    max_value: float = 100.0
    value: float = 0.0
    null_position: int = 0
    border_width: int = 5

    @property
    def size_hint(self) -> tuple[int, int]:
        """Preferred widget size."""
        return (160, 160)

    @property
    def radius(self) -> int:
        """Radius of the arc in the gauge's 200x200 logical coordinates."""
        return 99 - self.border_width // 2

    def arc_length(self) -> float:
        """Sweep of the value arc in degrees, drawn clockwise from the null position."""
        span = self.max_value - self.min_value
        if span == 0:
            raise ValueError("maximum and minimum value must differ")
        return 360.0 / span * (self.value - self.min_value)

    def percent_text(self) -> str:
        """The value with one decimal and a percent sign."""
        return f"{self.value:.1f}%"