# map_route/app/playback.py
"""
Incremental reveal of a finished search.

The search itself always runs to completion; a renderer that wants to animate
it pulls frames from a `Playback` at whatever pace it likes. Iterating again
starts over from the first frame.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

from map_route.domain.entities.geography import RawSegment
from map_route.search.engine import SearchResult


@dataclass(frozen=True)
class Frame:
    phase: Literal["trace", "path"]
    index: int  # frame number within the phase
    added: list[RawSegment]  # segments that became visible in this frame
    visible: list[RawSegment]  # all segments of this phase visible so far


class Playback:
    def __init__(self, result: SearchResult, *, step: int = 10, path_step: int | None = None):
        if step < 1 or (path_step is not None and path_step < 1):
            raise ValueError("step must be >= 1")
        self.result = result
        self.step = step
        self.path_step = path_step or step

    def _phase(self, phase, segments, step) -> Iterator[Frame]:
        for k, i in enumerate(range(0, len(segments), step)):
            yield Frame(phase, k, segments[i : i + step], segments[: i + step])

    def __iter__(self) -> Iterator[Frame]:
        yield from self._phase("trace", self.result.trace, self.step)
        yield from self._phase("path", self.result.path, self.path_step)

    def __len__(self) -> int:
        n_trace = -(-len(self.result.trace) // self.step)
        n_path = -(-len(self.result.path) // self.path_step)
        return n_trace + n_path
