"""
Detection progress for a practice step.
A pluggable detector supplies progress deltas on a fixed tick.
"""
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Callable, Optional
import math
import random
import numpy as np
from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from .config import DetectionConfig
from .errors import DetectionError, InvalidTransition


FrameSource = Callable[[], Optional[np.ndarray]]

# Progress is a percentage; a run completes at exactly this value
TARGET_PROGRESS = 100.0


class DetectionState(Enum):
    """Detection run state."""
    IDLE = auto()
    RUNNING = auto()
    COMPLETED = auto()


class Detector(ABC):
    """Computes how much closer the learner is to the target gesture."""
    
    @abstractmethod
    def advance_progress(self, frame: Optional[np.ndarray] = None) -> float:
        """
        Return a progress delta for one tick.
        
        Args:
            frame: Latest camera frame, if one is available
        
        Raises:
            DetectionError: If the frame could not be evaluated.
        """
    
    def reset(self) -> None:
        """Forget any state from a previous run."""


class SimulatedDetector(Detector):
    """
    Stand-in detector that ignores the frame.
    Returns a random delta in [min_delta, max_delta) to mimic noisy confidence.
    """
    
    def __init__(self, min_delta: float = 5.0, max_delta: float = 20.0,
                 seed: Optional[int] = None):
        if max_delta < min_delta:
            raise ValueError("max_delta must not be below min_delta")
        self._min_delta = min_delta
        self._max_delta = max_delta
        self._rng = random.Random(seed)
    
    @classmethod
    def from_config(cls, config: DetectionConfig) -> "SimulatedDetector":
        return cls(config.min_delta, config.max_delta, config.seed)
    
    def advance_progress(self, frame: Optional[np.ndarray] = None) -> float:
        return self._min_delta + self._rng.random() * (self._max_delta - self._min_delta)


class TimedTask(QObject):
    """
    Repeating callback on a QTimer that can be cancelled.
    Once cancelled, the callback is never invoked again.
    """
    
    def __init__(self, interval_ms: int, callback: Callable[[], None], parent=None):
        super().__init__(parent)
        self._callback = callback
        self._cancelled = False
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)
    
    @property
    def active(self) -> bool:
        return not self._cancelled and self._timer.isActive()
    
    def start(self):
        if not self._cancelled:
            self._timer.start()
    
    def cancel(self):
        self._cancelled = True
        self._timer.stop()
    
    def _fire(self):
        if self._cancelled:
            return
        self._callback()


class DetectionRunner(QObject):
    """
    Drives detection progress from 0 to 100.
    
    Each run is tagged with a generation number; ticks scheduled by a run
    that has since been reset or restarted are dropped.
    """
    progress_changed = pyqtSignal(float)
    state_changed = pyqtSignal(object)  # Emits DetectionState
    completed = pyqtSignal()
    failed = pyqtSignal(str)
    
    def __init__(self, interval_ms: int = 200, frame_source: Optional[FrameSource] = None, parent=None):
        """
        Args:
            interval_ms: Tick interval
            frame_source: Returns the latest camera frame for the detector
        """
        super().__init__(parent)
        self._interval_ms = interval_ms
        self._frame_source = frame_source
        
        self._state = DetectionState.IDLE
        self._progress = 0.0
        self._detector: Optional[Detector] = None
        self._task: Optional[TimedTask] = None
        self._generation = 0
    
    @classmethod
    def from_config(cls, config: DetectionConfig,
                    frame_source: Optional[FrameSource] = None) -> "DetectionRunner":
        return cls(config.tick_interval_ms, frame_source)
    
    @property
    def state(self) -> DetectionState:
        return self._state
    
    @property
    def progress(self) -> float:
        return self._progress
    
    @property
    def reported_progress(self) -> int:
        """Progress rounded half up, as displayed."""
        return int(math.floor(self._progress + 0.5))
    
    @property
    def target(self) -> float:
        return TARGET_PROGRESS
    
    def set_frame_source(self, frame_source: Optional[FrameSource]):
        self._frame_source = frame_source
    
    def _set_state(self, state: DetectionState):
        if state is self._state:
            return
        self._state = state
        self.state_changed.emit(state)
    
    def _set_progress(self, progress: float):
        if progress == self._progress:
            return
        self._progress = progress
        self.progress_changed.emit(progress)
    
    def start(self, detector: Detector):
        """
        Begin a run with the given detector.
        
        Raises:
            InvalidTransition: If a run is in progress or already completed.
        """
        if self._state is DetectionState.RUNNING:
            raise InvalidTransition("Detection is already running")
        if self._state is DetectionState.COMPLETED:
            raise InvalidTransition("Detection already completed, reset first")
        
        self._generation += 1
        generation = self._generation
        self._detector = detector
        detector.reset()
        self._set_progress(0.0)
        self._set_state(DetectionState.RUNNING)
        
        self._task = TimedTask(self._interval_ms, lambda: self._on_tick(generation), self)
        self._task.start()
    
    def tick(self):
        """Apply one advancement step to the current run."""
        self._on_tick(self._generation)
    
    def _on_tick(self, generation: int):
        if generation != self._generation or self._state is not DetectionState.RUNNING:
            return
        
        frame = self._frame_source() if self._frame_source is not None else None
        try:
            delta = self._detector.advance_progress(frame)
        except DetectionError as e:
            print(f"Detection failed: {e}")
            self._stop_task()
            self._set_progress(0.0)
            self._set_state(DetectionState.IDLE)
            self.failed.emit(str(e))
            return
        
        progress = self._progress + max(0.0, float(delta))
        if progress >= TARGET_PROGRESS:
            self._stop_task()
            self._set_progress(TARGET_PROGRESS)
            self._set_state(DetectionState.COMPLETED)
            self.completed.emit()
        else:
            self._set_progress(progress)
    
    def _stop_task(self):
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            task.deleteLater()
    
    def reset(self):
        """Stop any run and return to IDLE with zero progress."""
        self._generation += 1
        self._stop_task()
        self._set_progress(0.0)
        self._set_state(DetectionState.IDLE)
