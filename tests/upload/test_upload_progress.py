import asyncio
import random
import unittest

from filedock.upload.progress import (
    FILES_PROFILE,
    FOLDER_PROFILE,
    UploadProgressTracker,
    UploadStatus,
    simulate_progress,
)


class TestUploadProgressTracker(unittest.TestCase):
    def test_start_initializes_entries(self) -> None:
        tracker = UploadProgressTracker()
        tracker.start(["a.txt", "docs/b.txt"])
        self.assertEqual([e.file_name for e in tracker.entries], ["a.txt", "docs/b.txt"])
        self.assertTrue(all(e.progress == 0 for e in tracker.entries))
        self.assertTrue(all(e.status is UploadStatus.UPLOADING for e in tracker.entries))

    def test_progress_is_non_decreasing_and_capped(self) -> None:
        for profile in (FILES_PROFILE, FOLDER_PROFILE):
            tracker = UploadProgressTracker(profile, rng=random.Random(7))
            tracker.start(["a", "b", "c"])
            previous = [0.0, 0.0, 0.0]
            for _ in range(50):
                tracker.tick()
                current = [e.progress for e in tracker.entries]
                for before, after in zip(previous, current):
                    self.assertGreaterEqual(after, before)
                    self.assertLessEqual(after, 90.0)
                previous = current

    def test_status_flips_after_threshold(self) -> None:
        tracker = UploadProgressTracker(FILES_PROFILE, rng=random.Random(1))
        tracker.start(["a"])
        for _ in range(100):
            tracker.tick()
        entry = tracker.entries[0]
        self.assertEqual(entry.progress, 90.0)
        self.assertIs(entry.status, UploadStatus.PROCESSING)

    def test_clear(self) -> None:
        tracker = UploadProgressTracker()
        tracker.start(["a"])
        tracker.clear()
        self.assertEqual(tracker.entries, [])


class TestSimulateProgress(unittest.IsolatedAsyncioTestCase):
    async def test_ticks_until_request_settles_then_clears(self) -> None:
        tracker = UploadProgressTracker(FILES_PROFILE, rng=random.Random(3))
        tracker.start(["a"])
        seen = []

        async def request():
            for _ in range(5):
                await asyncio.sleep(0.01)
                seen.append(tracker.entries[0].progress)
            return "ok"

        result = await simulate_progress(tracker, request(), interval_sec=0.001)

        self.assertEqual(result, "ok")
        self.assertGreater(max(seen), 0.0)
        self.assertEqual(tracker.entries, [])

    async def test_failure_passes_through_and_clears(self) -> None:
        tracker = UploadProgressTracker()
        tracker.start(["a"])

        async def request():
            raise RuntimeError("upload failed")

        with self.assertRaises(RuntimeError):
            await simulate_progress(tracker, request(), interval_sec=0.001)
        self.assertEqual(tracker.entries, [])


if __name__ == "__main__":
    unittest.main()
