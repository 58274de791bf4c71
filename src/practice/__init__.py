"""
Practice Session Module

Camera lifecycle, instruction steps and detection progress for
practicing a single gesture.
"""
from .config import Config, load_config
from .errors import (
    CaptureError, CaptureErrorKind, CaptureUnknown, CaptureUnsupported,
    DetectionError, DeviceNotFound, DeviceNotSupported, InsecureContext,
    InvalidTransition, PermissionDenied, PracticeError,
)
from .capture import (
    CaptureBackend, CaptureConstraints, CaptureHost, CaptureState,
    MediaCaptureHandle, MediaTrack, OpenCVBackend, StreamHandle,
)
from .surface import FrameSurface, RenderSurface
from .detection import DetectionRunner, DetectionState, Detector, SimulatedDetector, TimedTask
from .cursor import InstructionCursor
from .session import CompletionEvent, PracticeSession, SessionSnapshot

__all__ = [
    'Config',
    'load_config',
    'PracticeError',
    'InvalidTransition',
    'DetectionError',
    'CaptureError',
    'CaptureErrorKind',
    'CaptureUnsupported',
    'InsecureContext',
    'PermissionDenied',
    'DeviceNotFound',
    'DeviceNotSupported',
    'CaptureUnknown',
    'CaptureBackend',
    'CaptureConstraints',
    'CaptureHost',
    'CaptureState',
    'MediaCaptureHandle',
    'MediaTrack',
    'OpenCVBackend',
    'StreamHandle',
    'RenderSurface',
    'FrameSurface',
    'DetectionRunner',
    'DetectionState',
    'Detector',
    'SimulatedDetector',
    'TimedTask',
    'InstructionCursor',
    'CompletionEvent',
    'PracticeSession',
    'SessionSnapshot',
]
