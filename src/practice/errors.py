"""
Error taxonomy for practice sessions.
Capture errors carry the message shown to the learner.
"""
from enum import Enum, auto


MESSAGE_PREFIX = "Unable to access camera. "


class CaptureErrorKind(Enum):
    """Reasons a camera could not be acquired."""
    UNSUPPORTED = auto()
    INSECURE_CONTEXT = auto()
    PERMISSION_DENIED = auto()
    DEVICE_NOT_FOUND = auto()
    DEVICE_NOT_SUPPORTED = auto()
    UNKNOWN = auto()


# Each message names the action that resolves it
USER_MESSAGES = {
    CaptureErrorKind.UNSUPPORTED: (
        "Camera capture is not available in this environment. "
        "Install a camera backend or use a supported system."
    ),
    CaptureErrorKind.INSECURE_CONTEXT: (
        "Camera access requires a secure connection (HTTPS). "
        "Open the app over HTTPS or from localhost."
    ),
    CaptureErrorKind.PERMISSION_DENIED: (
        "Please allow camera permissions and try again."
    ),
    CaptureErrorKind.DEVICE_NOT_FOUND: (
        "No camera found on this device. Connect a camera and try again."
    ),
    CaptureErrorKind.DEVICE_NOT_SUPPORTED: (
        "This camera cannot provide the requested video format. "
        "Try a different camera."
    ),
    CaptureErrorKind.UNKNOWN: (
        "Please check your camera settings and try again."
    ),
}


class PracticeError(Exception):
    """Base class for all practice session errors."""


class InvalidTransition(PracticeError):
    """An operation was called in a state that does not allow it."""


class DetectionError(PracticeError):
    """Raised by a detector that could not produce a progress delta."""


class CaptureError(PracticeError):
    """
    Camera acquisition failure.
    
    Attributes:
        kind: Which failure occurred
        user_message: Text to show the learner
    """
    kind = CaptureErrorKind.UNKNOWN
    
    def __init__(self, message: str = ""):
        super().__init__(message or USER_MESSAGES[self.kind])
        self.detail = message
    
    @property
    def user_message(self) -> str:
        return MESSAGE_PREFIX + USER_MESSAGES[self.kind]


class CaptureUnsupported(CaptureError):
    kind = CaptureErrorKind.UNSUPPORTED


class InsecureContext(CaptureError):
    kind = CaptureErrorKind.INSECURE_CONTEXT


class PermissionDenied(CaptureError):
    kind = CaptureErrorKind.PERMISSION_DENIED


class DeviceNotFound(CaptureError):
    kind = CaptureErrorKind.DEVICE_NOT_FOUND


class DeviceNotSupported(CaptureError):
    kind = CaptureErrorKind.DEVICE_NOT_SUPPORTED


class CaptureUnknown(CaptureError):
    kind = CaptureErrorKind.UNKNOWN
