"""
Render surfaces for camera streams.
A surface shows the live stream and signals when the first frame is ready.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple
import threading
import time
import numpy as np


ReadyCallback = Callable[[], None]
ErrorCallback = Callable[[Exception], None]


class RenderSurface(ABC):
    """Somewhere a bound stream is displayed."""
    
    @abstractmethod
    def bind(self, stream, on_ready: ReadyCallback, on_error: ErrorCallback) -> None:
        """
        Attach a stream to this surface.
        
        Args:
            stream: StreamHandle to display
            on_ready: Called once when the stream can be rendered
            on_error: Called if the stream fails while bound
        """
    
    @abstractmethod
    def unbind(self) -> None:
        """Detach the current stream. Safe to call when nothing is bound."""
    
    def latest_frame(self) -> Optional[np.ndarray]:
        return None


class FrameSurface(RenderSurface):
    """
    Pulls frames from the bound stream on a background thread.
    
    The latest frame is kept for detectors and the UI. An RGBA overlay of
    matching dimensions is available for annotations.
    """
    
    def __init__(self, size: Tuple[int, int] = (640, 480), poll_interval: float = 1 / 30):
        """
        Args:
            size: (width, height) used for the overlay until a frame arrives
            poll_interval: Delay between reads when the stream returns nothing
        """
        self._size = size
        self._poll_interval = poll_interval
        self._stream = None
        self._thread: Optional[threading.Thread] = None
        self._is_running = False
        
        self._frame_lock = threading.Lock()
        self._latest_frame: Optional[np.ndarray] = None
        self._overlay = self._make_overlay(size)
    
    @staticmethod
    def _make_overlay(size: Tuple[int, int]) -> np.ndarray:
        width, height = size
        return np.zeros((height, width, 4), dtype=np.uint8)
    
    @property
    def overlay(self) -> np.ndarray:
        return self._overlay
    
    @property
    def is_bound(self) -> bool:
        return self._stream is not None
    
    def bind(self, stream, on_ready: ReadyCallback, on_error: ErrorCallback) -> None:
        self.unbind()
        self._stream = stream
        self._is_running = True
        self._thread = threading.Thread(
            target=self._read_loop,
            args=(stream, on_ready, on_error),
            daemon=True,
        )
        self._thread.start()
    
    def _read_loop(self, stream, on_ready: ReadyCallback, on_error: ErrorCallback):
        """Background thread to pull frames until unbound."""
        ready_sent = False
        while self._is_running and stream is self._stream:
            try:
                frame = stream.read()
            except Exception as e:
                print(f"Video error: {e}")
                self._is_running = False
                on_error(e)
                return
            
            if frame is None:
                time.sleep(self._poll_interval)
                continue
            
            with self._frame_lock:
                self._latest_frame = frame
                if not ready_sent:
                    self._overlay = self._make_overlay((frame.shape[1], frame.shape[0]))
            
            if not ready_sent:
                ready_sent = True
                on_ready()
    
    def unbind(self) -> None:
        self._is_running = False
        self._stream = None
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        with self._frame_lock:
            self._latest_frame = None
    
    def latest_frame(self) -> Optional[np.ndarray]:
        with self._frame_lock:
            return self._latest_frame
