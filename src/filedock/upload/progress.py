"""
Cosmetic upload progress.

Progress is simulated with random increments while the real request is in
flight; it never reflects bytes actually sent. Entries stop short of 100%
and the whole list is cleared once the request settles.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Iterable, Optional, TypeVar

T = TypeVar("T")


class UploadStatus(str, Enum):
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETE = "complete"


@dataclass(slots=True)
class UploadProgressEntry:
    file_name: str
    progress: float = 0.0
    status: UploadStatus = UploadStatus.UPLOADING


@dataclass(slots=True, frozen=True)
class ProgressProfile:
    interval_sec: float
    max_step: float
    processing_threshold: float
    cap: float = 90.0


FILES_PROFILE = ProgressProfile(interval_sec=0.5, max_step=20.0, processing_threshold=50.0)
FOLDER_PROFILE = ProgressProfile(interval_sec=0.7, max_step=15.0, processing_threshold=60.0)


class UploadProgressTracker:
    """Progress list for one upload batch."""

    def __init__(
        self,
        profile: ProgressProfile = FILES_PROFILE,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._profile = profile
        self._rng = rng or random.Random()
        self._entries: list[UploadProgressEntry] = []

    @property
    def profile(self) -> ProgressProfile:
        return self._profile

    @property
    def entries(self) -> list[UploadProgressEntry]:
        return list(self._entries)

    def start(self, file_names: Iterable[str]) -> None:
        self._entries = [UploadProgressEntry(file_name=name) for name in file_names]

    def tick(self) -> None:
        """
        Advance every entry by a random step, capped below completion.

        The status is decided from the progress before this step.
        """
        p = self._profile
        for entry in self._entries:
            previous = entry.progress
            entry.progress = min(previous + self._rng.random() * p.max_step, p.cap)
            entry.status = (
                UploadStatus.PROCESSING
                if previous > p.processing_threshold
                else UploadStatus.UPLOADING
            )

    def clear(self) -> None:
        self._entries = []


async def simulate_progress(
    tracker: UploadProgressTracker,
    request: Awaitable[T],
    *,
    interval_sec: Optional[float] = None,
) -> T:
    """
    Tick tracker until request settles, then clear it.

    The request's result or exception is passed through unchanged.
    """
    interval = tracker.profile.interval_sec if interval_sec is None else interval_sec

    async def ticker() -> None:
        while True:
            await asyncio.sleep(interval)
            tracker.tick()

    ticking = asyncio.create_task(ticker())
    try:
        return await request
    finally:
        ticking.cancel()
        try:
            await ticking
        except asyncio.CancelledError:
            pass
        tracker.clear()
