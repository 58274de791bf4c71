import threading

import numpy as np

from practice.capture import StreamHandle
from practice.surface import FrameSurface
from conftest import FakeTrack


class BrokenTrack(FakeTrack):
    def read(self):
        raise RuntimeError("device unplugged")


class SlowTrack(FakeTrack):
    """Returns nothing for the first few reads."""
    def __init__(self, empty_reads=3):
        super().__init__()
        self.empty_reads = empty_reads
    
    def read(self):
        if self.empty_reads > 0:
            self.empty_reads -= 1
            return None
        return np.zeros((120, 160, 3), dtype=np.uint8)


def test_ready_fires_once_on_first_frame():
    surface = FrameSurface(poll_interval=0.001)
    ready = threading.Event()
    calls = []
    
    def on_ready():
        calls.append(1)
        ready.set()
    
    surface.bind(StreamHandle([SlowTrack()]), on_ready, lambda e: None)
    assert ready.wait(2.0)
    surface.unbind()
    
    assert calls == [1]

def test_overlay_matches_frame_size():
    surface = FrameSurface(size=(640, 480), poll_interval=0.001)
    assert surface.overlay.shape == (480, 640, 4)
    
    ready = threading.Event()
    surface.bind(StreamHandle([SlowTrack(0)]), ready.set, lambda e: None)
    assert ready.wait(2.0)
    
    assert surface.overlay.shape == (120, 160, 4)
    assert surface.latest_frame().shape == (120, 160, 3)
    surface.unbind()
    assert surface.latest_frame() is None
    assert not surface.is_bound

def test_read_error_is_reported():
    surface = FrameSurface(poll_interval=0.001)
    errors = []
    failed = threading.Event()
    
    def on_error(e):
        errors.append(e)
        failed.set()
    
    surface.bind(StreamHandle([BrokenTrack()]), lambda: None, on_error)
    assert failed.wait(2.0)
    surface.unbind()
    assert isinstance(errors[0], RuntimeError)

def test_unbind_without_stream_is_harmless():
    surface = FrameSurface()
    surface.unbind()
    surface.unbind()
    assert surface.latest_frame() is None

def test_stream_stop_is_idempotent():
    track = FakeTrack()
    stream = StreamHandle([track])
    stream.stop()
    stream.stop()
    assert not stream.active
    assert stream.read() is None
    assert track.stop_count == 1
