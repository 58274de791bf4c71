"""
Camera acquisition and release for a practice session.
Owns at most one stream and guarantees it is released.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import List, Optional
import os
import sys
import threading
import cv2
import numpy as np
from PyQt5.QtCore import QObject, pyqtSignal

from .config import CameraConfig, HostConfig
from .errors import (
    CaptureError, CaptureUnknown, CaptureUnsupported, DeviceNotFound,
    DeviceNotSupported, InsecureContext, InvalidTransition, PermissionDenied,
)
from .surface import RenderSurface


LOCAL_HOSTNAMES = ("localhost", "127.0.0.1", "::1")


class CaptureState(Enum):
    """Camera lifecycle state."""
    IDLE = auto()
    ACQUIRING = auto()
    ACTIVE = auto()
    FAILED = auto()


@dataclass(frozen=True)
class CaptureConstraints:
    """Requested stream format. Values are ideals, not hard requirements."""
    width: int = 640
    height: int = 480
    facing: str = "user"
    
    @classmethod
    def from_config(cls, config: CameraConfig) -> "CaptureConstraints":
        return cls(width=config.width, height=config.height, facing=config.facing)


@dataclass
class CaptureHost:
    """Origin the app is served from."""
    scheme: str = "https"
    hostname: str = "localhost"
    
    @property
    def is_secure_context(self) -> bool:
        return self.scheme.rstrip(':').lower() == "https" or self.hostname in LOCAL_HOSTNAMES
    
    @classmethod
    def from_config(cls, config: HostConfig) -> "CaptureHost":
        return cls(scheme=config.scheme, hostname=config.hostname)


class MediaTrack(ABC):
    """One track of a stream."""
    kind = "video"
    
    @abstractmethod
    def stop(self) -> None:
        """Stop the track and free its device. Must be idempotent."""
    
    def read(self) -> Optional[np.ndarray]:
        return None


class OpenCVTrack(MediaTrack):
    """Video track backed by cv2.VideoCapture."""
    
    def __init__(self, cap: cv2.VideoCapture):
        self._cap = cap
        self._lock = threading.Lock()
        self._stopped = False
    
    def read(self) -> Optional[np.ndarray]:
        with self._lock:
            if self._stopped:
                return None
            ret, frame = self._cap.read()
        return frame if ret else None
    
    def stop(self) -> None:
        with self._lock:
            if not self._stopped:
                self._stopped = True
                self._cap.release()


class StreamHandle:
    """A live stream made of one or more tracks."""
    
    def __init__(self, tracks: List[MediaTrack]):
        self._tracks = list(tracks)
        self._active = True
    
    @property
    def tracks(self) -> List[MediaTrack]:
        return list(self._tracks)
    
    @property
    def active(self) -> bool:
        return self._active
    
    def read(self) -> Optional[np.ndarray]:
        """Read a frame from the first video track."""
        if not self._active:
            return None
        for track in self._tracks:
            if track.kind == "video":
                return track.read()
        return None
    
    def stop(self) -> None:
        """Stop every track. Calling twice is harmless."""
        if not self._active:
            return
        self._active = False
        for track in self._tracks:
            track.stop()


class CaptureBackend(ABC):
    """Access to capture devices."""
    
    @abstractmethod
    def is_available(self) -> bool:
        """True if this environment can capture video at all."""
    
    @abstractmethod
    def open(self, constraints: CaptureConstraints) -> StreamHandle:
        """
        Open a device.
        
        Raises:
            CaptureError: If the device cannot be opened.
        """


class OpenCVBackend(CaptureBackend):
    """
    Webcam access through OpenCV.
    
    OpenCV has no notion of camera facing, so the preferred device is
    selected by index (the built-in front camera is normally 0).
    """
    
    def __init__(self, device_id: int = 0):
        self._device_id = device_id
    
    def is_available(self) -> bool:
        return bool(cv2.videoio_registry.getCameraBackends())
    
    def _device_path(self) -> Optional[Path]:
        if sys.platform.startswith("linux"):
            return Path(f"/dev/video{self._device_id}")
        return None
    
    def open(self, constraints: CaptureConstraints) -> StreamHandle:
        path = self._device_path()
        if path is not None:
            if not path.exists():
                raise DeviceNotFound(f"{path} does not exist")
            if not os.access(path, os.R_OK):
                raise PermissionDenied(f"No read access to {path}")
        
        try:
            cap = cv2.VideoCapture(self._device_id)
        except cv2.error as e:
            raise DeviceNotSupported(str(e)) from e
        
        if not cap.isOpened():
            cap.release()
            raise DeviceNotFound(f"Cannot open camera device {self._device_id}")
        
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, constraints.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, constraints.height)
        return StreamHandle([OpenCVTrack(cap)])


class MediaCaptureHandle(QObject):
    """
    Owns the camera stream of one session.
    
    Acquisition checks the environment, opens the device, binds the stream to
    a render surface and waits for the surface to report the first frame.
    If no ready signal arrives within ready_timeout while the stream is still
    held, the handle goes active anyway.
    """
    state_changed = pyqtSignal(object)  # Emits CaptureState
    
    def __init__(self, backend: CaptureBackend, surface: RenderSurface,
                 host: Optional[CaptureHost] = None,
                 constraints: Optional[CaptureConstraints] = None,
                 ready_timeout: float = 5.0, parent=None):
        """
        Args:
            backend: Device access
            surface: Where the stream is rendered
            host: Origin used for the secure context check
            constraints: Requested stream format
            ready_timeout: Seconds to wait for the ready signal
        """
        super().__init__(parent)
        self._backend = backend
        self._surface = surface
        self._host = host or CaptureHost()
        self._constraints = constraints or CaptureConstraints()
        self._ready_timeout = ready_timeout
        
        self._lock = threading.RLock()
        self._state = CaptureState.IDLE
        self._failure: Optional[CaptureError] = None
        self._stream: Optional[StreamHandle] = None
        self._ready = threading.Event()
    
    @property
    def state(self) -> CaptureState:
        return self._state
    
    @property
    def failure(self) -> Optional[CaptureError]:
        """The error behind a FAILED state."""
        return self._failure
    
    @property
    def stream(self) -> Optional[StreamHandle]:
        return self._stream
    
    @property
    def constraints(self) -> CaptureConstraints:
        return self._constraints
    
    @property
    def surface(self) -> RenderSurface:
        return self._surface
    
    def _set_state(self, state: CaptureState):
        if state is self._state:
            return
        self._state = state
        self.state_changed.emit(state)
    
    def acquire(self) -> Optional[StreamHandle]:
        """
        Open the camera and wait until it is ready to render.
        
        Returns:
            The active stream, or None if release() cancelled the attempt.
        
        Raises:
            InvalidTransition: If an acquisition is already in progress.
            CaptureError: If the camera could not be acquired. The handle is
                          left FAILED with nothing held.
        """
        with self._lock:
            if self._state is CaptureState.ACQUIRING:
                raise InvalidTransition("Camera is already starting")
            if self._state is CaptureState.ACTIVE:
                return self._stream
            self._failure = None
            self._set_state(CaptureState.ACQUIRING)
        
        try:
            self._check_environment()
            stream = self._backend.open(self._constraints)
        except CaptureError as e:
            self._fail(e)
            raise
        except Exception as e:
            error = CaptureUnknown(str(e))
            self._fail(error)
            raise error from e
        
        ready = threading.Event()
        with self._lock:
            if self._state is not CaptureState.ACQUIRING:
                # Released while the device was opening
                stream.stop()
                return None
            self._stream = stream
            self._ready = ready
            
            self._surface.bind(
                stream,
                on_ready=lambda: self._on_ready(stream),
                on_error=lambda e: self._on_surface_error(stream, e),
            )
            if self._stream is not stream:
                # Released from inside bind()
                self._surface.unbind()
        
        if not ready.wait(self._ready_timeout):
            with self._lock:
                if self._stream is stream and self._state is CaptureState.ACQUIRING:
                    print("Camera timeout - setting active anyway")
                    self._set_state(CaptureState.ACTIVE)
        
        with self._lock:
            if self._state is CaptureState.FAILED:
                raise self._failure
            if self._stream is not stream:
                return None
            return stream
    
    def _check_environment(self):
        if not self._backend.is_available():
            raise CaptureUnsupported("Camera capture is not supported")
        if not self._host.is_secure_context:
            raise InsecureContext(
                f"{self._host.scheme}://{self._host.hostname} is not a secure context"
            )
    
    def _on_ready(self, stream: StreamHandle):
        with self._lock:
            if self._stream is stream and self._state is CaptureState.ACQUIRING:
                print("Camera loaded successfully")
                self._set_state(CaptureState.ACTIVE)
            self._ready.set()
    
    def _on_surface_error(self, stream: StreamHandle, error: Exception):
        with self._lock:
            if self._stream is not stream:
                return
            acquiring = self._state is CaptureState.ACQUIRING
        
        if acquiring:
            self._fail(CaptureUnknown(f"Video error: {error}"))
        else:
            self.release()
        self._ready.set()
    
    def _fail(self, error: CaptureError):
        print(f"Error accessing camera: {error}")
        self._drop_stream()
        with self._lock:
            self._failure = error
            self._set_state(CaptureState.FAILED)
    
    def _drop_stream(self):
        with self._lock:
            stream, self._stream = self._stream, None
        self._surface.unbind()
        if stream is not None:
            stream.stop()
    
    def release(self) -> None:
        """
        Stop every track and return to IDLE.
        
        Safe to call from any state, any number of times. Cancels an
        acquisition in progress.
        """
        self._drop_stream()
        with self._lock:
            self._failure = None
            self._set_state(CaptureState.IDLE)
            self._ready.set()
