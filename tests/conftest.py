import random

import pytest

from spinwheel import log
from spinwheel.engine.models import Segment
from spinwheel.engine.scheduler import FrameHandle, FrameScheduler


class ManualScheduler(FrameScheduler):
    """Frames only run when the test says so."""

    def __init__(self):
        self.pending = []

    def schedule(self, callback):
        handle = FrameHandle()
        self.pending.append((handle, callback))
        return handle

    def run_next(self):
        """Run the oldest pending frame (skipping cancelled ones). False when nothing ran."""
        while self.pending:
            handle, callback = self.pending.pop(0)
            if not handle.cancelled:
                callback()
                return True
        return False

    def run_until_idle(self, max_frames=100000):
        frames = 0
        while self.run_next():
            frames += 1
            assert frames <= max_frames, "spin did not settle"
        return frames


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    target = tmp_path / "log_files"
    monkeypatch.setattr(log, "LOG_DIR", str(target))
    return target


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def segments():
    return [
        Segment("a", "Pizza", 1, "#ef4444"),
        Segment("b", "Sushi", 2, "#3b82f6"),
        Segment("c", "Tacos", 1, "#10b981", url="https://example.com/tacos"),
    ]
