"""
Practice session for a single gesture.
Coordinates the camera, instruction steps, hints and detection progress.
"""
from dataclasses import dataclass
from typing import Optional, Tuple
from PyQt5.QtCore import QObject, pyqtSignal

from catalog import Gesture
from .capture import (
    CaptureHost, CaptureConstraints, CaptureState, MediaCaptureHandle, OpenCVBackend,
)
from .config import Config
from .cursor import InstructionCursor
from .detection import DetectionRunner, DetectionState, Detector, SimulatedDetector
from .errors import CaptureError, InvalidTransition
from .surface import FrameSurface


@dataclass(frozen=True)
class CompletionEvent:
    """Sent to the points collaborator when a gesture is completed."""
    gesture_id: str
    points_awarded: int


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the practice view needs to render."""
    gesture_id: str
    camera_state: CaptureState
    camera_error: Optional[str]
    detection_state: DetectionState
    progress: int
    step_index: int
    step_count: int
    current_instruction: str
    step_statuses: Tuple[str, ...]
    hints_visible: bool
    key_points: Tuple[str, ...]
    completed: bool
    can_previous: bool
    can_next: bool
    can_start_camera: bool
    can_stop_camera: bool
    can_start_detection: bool


class PracticeSession(QObject):
    """
    State machine for practicing one gesture.
    
    Operations return True when accepted. Calls the UI should already have
    disabled (e.g. starting detection without an active camera) are rejected
    without raising. close() always releases the camera, and the session can
    be used as a context manager to guarantee it.
    """
    camera_state_changed = pyqtSignal(object)     # Emits CaptureState
    camera_error = pyqtSignal(str)                # User-facing message
    detection_state_changed = pyqtSignal(object)  # Emits DetectionState
    progress_changed = pyqtSignal(int)            # Rounded 0-100
    step_changed = pyqtSignal(int)
    hints_toggled = pyqtSignal(bool)
    detection_failed = pyqtSignal(str)
    session_completed = pyqtSignal(object)        # Emits CompletionEvent
    
    def __init__(self, gesture: Gesture, capture: MediaCaptureHandle,
                 runner: Optional[DetectionRunner] = None,
                 detector: Optional[Detector] = None, parent=None):
        """
        Args:
            gesture: Gesture being practiced
            capture: Camera handle owned by this session
            runner: Detection runner, a default 200ms runner if None
            detector: Progress capability, simulated if None
        """
        super().__init__(parent)
        self._gesture = gesture
        self._capture = capture
        self._runner = runner or DetectionRunner(parent=self)
        self._detector = detector or SimulatedDetector()
        self._cursor = InstructionCursor(gesture.step_count)
        
        self._hints_visible = False
        self._completed = False
        self._closed = False
        self._camera_error: Optional[str] = None
        
        self._runner.set_frame_source(capture.surface.latest_frame)
        self._capture.state_changed.connect(self.camera_state_changed)
        self._runner.state_changed.connect(self.detection_state_changed)
        self._runner.progress_changed.connect(self._on_progress)
        self._runner.completed.connect(self._on_detection_completed)
        self._runner.failed.connect(self.detection_failed)
    
    @classmethod
    def from_config(cls, gesture: Gesture, config: Config, parent=None) -> "PracticeSession":
        """Build a session on the local webcam."""
        constraints = CaptureConstraints.from_config(config.camera)
        capture = MediaCaptureHandle(
            OpenCVBackend(config.camera.device_id),
            FrameSurface((constraints.width, constraints.height)),
            host=CaptureHost.from_config(config.host),
            constraints=constraints,
            ready_timeout=config.camera.ready_timeout,
        )
        return cls(
            gesture,
            capture,
            runner=DetectionRunner.from_config(config.detection),
            detector=SimulatedDetector.from_config(config.detection),
            parent=parent,
        )
    
    # -- State -----------------------------------------------------------
    
    @property
    def gesture(self) -> Gesture:
        return self._gesture
    
    @property
    def capture(self) -> MediaCaptureHandle:
        return self._capture
    
    @property
    def camera_state(self) -> CaptureState:
        return self._capture.state
    
    @property
    def camera_active(self) -> bool:
        return self._capture.state is CaptureState.ACTIVE
    
    @property
    def last_camera_error(self) -> Optional[str]:
        return self._camera_error
    
    @property
    def detection_state(self) -> DetectionState:
        return self._runner.state
    
    @property
    def progress(self) -> int:
        return self._runner.reported_progress
    
    @property
    def step_index(self) -> int:
        return self._cursor.index
    
    @property
    def current_instruction(self) -> str:
        return self._gesture.instructions[self._cursor.index]
    
    @property
    def hints_visible(self) -> bool:
        return self._hints_visible
    
    @property
    def key_points(self) -> Tuple[str, ...]:
        """Key points to show, empty while hints are hidden."""
        return self._gesture.key_points if self._hints_visible else ()
    
    @property
    def completed(self) -> bool:
        return self._completed
    
    @property
    def closed(self) -> bool:
        return self._closed
    
    @property
    def can_start_detection(self) -> bool:
        return (
            not self._closed
            and not self._completed
            and self.camera_active
            and self._runner.state is DetectionState.IDLE
        )
    
    def snapshot(self) -> SessionSnapshot:
        camera_state = self._capture.state
        return SessionSnapshot(
            gesture_id=self._gesture.id,
            camera_state=camera_state,
            camera_error=self._camera_error,
            detection_state=self._runner.state,
            progress=self.progress,
            step_index=self._cursor.index,
            step_count=self._cursor.step_count,
            current_instruction=self.current_instruction,
            step_statuses=tuple(self._cursor.status(i) for i in range(self._cursor.step_count)),
            hints_visible=self._hints_visible,
            key_points=self.key_points,
            completed=self._completed,
            can_previous=not self._closed and not self._cursor.at_start,
            can_next=not self._closed and not self._cursor.at_end,
            can_start_camera=not self._closed and camera_state in (CaptureState.IDLE, CaptureState.FAILED),
            can_stop_camera=not self._closed and camera_state is CaptureState.ACTIVE,
            can_start_detection=self.can_start_detection,
        )
    
    # -- Camera ----------------------------------------------------------
    
    def start_camera(self) -> bool:
        """
        Acquire the camera. Blocks until the stream is ready or the ready
        timeout elapses.
        
        Returns:
            True if the camera is now active. On failure the mapped message
            is emitted on camera_error and the camera can be retried.
        """
        if self._closed:
            return False
        
        self._camera_error = None
        try:
            self._capture.acquire()
        except InvalidTransition:
            return False
        except CaptureError as e:
            self._camera_error = e.user_message
            self.camera_error.emit(e.user_message)
            return False
        return self.camera_active
    
    def stop_camera(self) -> bool:
        """Release the camera. Detection progress and step are kept."""
        self._capture.release()
        return True
    
    # -- Detection -------------------------------------------------------
    
    def start_detection(self) -> bool:
        if not self.can_start_detection:
            return False
        try:
            self._runner.start(self._detector)
        except InvalidTransition:
            return False
        return True
    
    def _on_progress(self, progress: float):
        self.progress_changed.emit(self._runner.reported_progress)
    
    def _on_detection_completed(self):
        if self._completed:
            return
        self._completed = True
        self.session_completed.emit(
            CompletionEvent(gesture_id=self._gesture.id, points_awarded=self._gesture.points)
        )
    
    def reset_practice(self) -> bool:
        """Start over from step one. The camera is left as it is."""
        if self._closed:
            return False
        self._runner.reset()
        self._completed = False
        if self._cursor.index != 0:
            self._cursor.reset()
            self.step_changed.emit(0)
        return True
    
    # -- Steps and hints -------------------------------------------------
    
    def next_step(self) -> bool:
        if self._closed or not self._cursor.next():
            return False
        self._runner.reset()
        self.step_changed.emit(self._cursor.index)
        return True
    
    def previous_step(self) -> bool:
        if self._closed or not self._cursor.previous():
            return False
        self._runner.reset()
        self.step_changed.emit(self._cursor.index)
        return True
    
    def toggle_hints(self) -> bool:
        if self._closed:
            return False
        self._hints_visible = not self._hints_visible
        self.hints_toggled.emit(self._hints_visible)
        return True
    
    # -- Teardown --------------------------------------------------------
    
    def close(self):
        """Cancel pending ticks and release the camera. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._runner.reset()
        self._capture.release()
    
    def __enter__(self) -> "PracticeSession":
        return self
    
    def __exit__(self, *_) -> None:
        self.close()
