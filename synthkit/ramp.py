"""Smoothing of parameter changes over a block of frames."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

_MIN_FRAMES = 32
_THRESHOLD = 0.001


@dataclass
class Port:
    """A mutable parameter value that a ramp can follow."""

    value: float = 0.0


class Ramp(ABC):
    """Linear ramp of one or more values towards freshly evaluated targets."""

    def __init__(self, nvalues: int = 1) -> None:
        self._nvalues = nvalues
        self._value0 = [0.0] * nvalues
        self._value1 = [0.0] * nvalues
        self._delta = [0.0] * nvalues
        self._frames = 0

    def reset(self) -> None:
        """Start from the last target and evaluate new targets, without ramping."""
        self._value0 = list(self._value1)
        self._value1 = [self.evaluate(i) for i in range(self._nvalues)]
        self._frames = 0

    def process(self, nframes: int) -> None:
        """Advance the ramp by a block, starting a new one if the inputs moved."""
        if self._frames > 0:
            nframes = min(nframes, self._frames)
            self._value0 = [v + nframes * d for v, d in zip(self._value0, self._delta)]
            self._frames -= nframes
        elif self.probe():
            self.reset()
            self._frames = max(nframes, _MIN_FRAMES)
            self._delta = [(v1 - v0) / self._frames
                           for v0, v1 in zip(self._value0, self._value1)]

    def value(self, n: int, i: int = 0) -> float:
        """Value at frame n of the current block for value index i."""
        if n < self._frames:
            return self._value0[i] + n * self._delta[i]
        return self._value1[i]

    @abstractmethod
    def probe(self) -> bool:
        """Whether the inputs changed enough to start a new ramp."""

    @abstractmethod
    def evaluate(self, i: int) -> float:
        """Target value for index i."""


class PortRamp(Ramp):
    """Ramp towards the product of any number of tracked ports."""

    def __init__(self, nvalues: int = 1) -> None:
        super().__init__(nvalues)
        self._ports: tuple[Optional[Port], ...] = ()
        self._tracked: list[float] = []

    def track(self, *args: Optional[Port]) -> None:
        """Follow the given ports (None for an absent one) and jump to their product."""
        self._ports = args
        self._tracked = [0.0] * len(args)
        self.reset()

    def probe(self) -> bool:
        return any(
            port is not None and abs(port.value - seen) > _THRESHOLD
            for port, seen in zip(self._ports, self._tracked)
        )

    def evaluate(self, i: int) -> float:
        self._tracked = [
            port.value if port is not None else seen
            for port, seen in zip(self._ports, self._tracked)
        ]
        result = 1.0 if self._tracked else 0.0
        for v in self._tracked:
            result *= v
        return result