from __future__ import annotations

from dataclasses import dataclass, field
import math


@dataclass
class FlingAnimation:
    """Inertial scroll with constant deceleration, sampled by an external frame clock.

    Offsets are screen pixels of the viewport start relative to the domain
    start. Velocity decays linearly to zero after `abs(velocity) / deceleration`
    seconds; the offset is clamped to `[min_offset, max_offset]`.
    """

    start_offset: float
    velocity: float
    min_offset: float
    max_offset: float
    deceleration: float
    started_at: float
    _finished: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.deceleration <= 0:
            raise ValueError("deceleration must be > 0")
        if self.max_offset < self.min_offset:
            self.max_offset = self.min_offset
        self.start_offset = min(max(float(self.start_offset), self.min_offset), self.max_offset)
        if self.velocity == 0:
            self._finished = True

    @property
    def duration(self) -> float:
        return abs(self.velocity) / self.deceleration

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def final_offset(self) -> float:
        return self.offset_at(self.started_at + self.duration)

    def abort(self) -> None:
        self._finished = True

    def velocity_at(self, now: float) -> float:
        t = self._elapsed(now)
        return math.copysign(max(0.0, abs(self.velocity) - self.deceleration * t), self.velocity)

    def offset_at(self, now: float) -> float:
        t = self._elapsed(now)
        direction = math.copysign(1.0, self.velocity)
        raw = self.start_offset + self.velocity * t - direction * 0.5 * self.deceleration * t * t
        return min(max(raw, self.min_offset), self.max_offset)

    def compute(self, now: float) -> tuple[bool, float]:
        """Advance to `now`; returns `(still_running, offset)`."""
        offset = self.offset_at(now)
        if self._finished:
            return (False, offset)
        hit_edge = (self.velocity > 0 and offset >= self.max_offset) or (
            self.velocity < 0 and offset <= self.min_offset
        )
        if now - self.started_at >= self.duration or hit_edge:
            self._finished = True
        return (not self._finished, offset)

    def _elapsed(self, now: float) -> float:
        return min(max(0.0, now - self.started_at), self.duration)
