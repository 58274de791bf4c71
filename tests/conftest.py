import sys
import threading

import numpy as np
import pytest
from PyQt5.QtCore import QCoreApplication

from practice.capture import CaptureBackend, MediaTrack, StreamHandle
from practice.detection import Detector
from practice.errors import DetectionError
from practice.surface import RenderSurface


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


class FakeTrack(MediaTrack):
    def __init__(self):
        self.stop_count = 0
    
    @property
    def stopped(self):
        return self.stop_count > 0
    
    def stop(self):
        self.stop_count += 1
    
    def read(self):
        return None if self.stopped else np.zeros((480, 640, 3), dtype=np.uint8)


class FakeBackend(CaptureBackend):
    def __init__(self, available=True, error=None):
        self.available = available
        self.error = error
        self.open_count = 0
        self.tracks = []
    
    def is_available(self):
        return self.available
    
    def open(self, constraints):
        self.open_count += 1
        if self.error is not None:
            raise self.error
        track = FakeTrack()
        self.tracks.append(track)
        return StreamHandle([track])


class FakeSurface(RenderSurface):
    """Fires ready (or an error) synchronously from bind()."""
    
    def __init__(self, ready_on_bind=True, error_on_bind=None):
        self.ready_on_bind = ready_on_bind
        self.error_on_bind = error_on_bind
        self.stream = None
        self.bind_count = 0
        self.unbind_count = 0
        self.bound = threading.Event()
        self._on_ready = None
        self._on_error = None
    
    def bind(self, stream, on_ready, on_error):
        self.stream = stream
        self.bind_count += 1
        self._on_ready = on_ready
        self._on_error = on_error
        self.bound.set()
        if self.error_on_bind is not None:
            on_error(self.error_on_bind)
        elif self.ready_on_bind:
            on_ready()
    
    def unbind(self):
        self.unbind_count += 1
        self.stream = None
    
    def fire_ready(self):
        self._on_ready()
    
    def fire_error(self, error):
        self._on_error(error)
    
    def latest_frame(self):
        return None if self.stream is None else self.stream.read()


class FixedDetector(Detector):
    def __init__(self, delta):
        self.delta = delta
        self.frames = []
        self.reset_count = 0
    
    def advance_progress(self, frame=None):
        self.frames.append(frame)
        return self.delta
    
    def reset(self):
        self.reset_count += 1


class FailingDetector(Detector):
    def advance_progress(self, frame=None):
        raise DetectionError("no hand in frame")


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def surface():
    return FakeSurface()
