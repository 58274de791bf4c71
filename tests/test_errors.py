from practice.errors import (
    CaptureErrorKind, CaptureUnknown, CaptureUnsupported, DeviceNotFound,
    DeviceNotSupported, InsecureContext, PermissionDenied, USER_MESSAGES,
)

ALL_ERRORS = [
    CaptureUnsupported, InsecureContext, PermissionDenied,
    DeviceNotFound, DeviceNotSupported, CaptureUnknown,
]


def test_every_kind_has_a_distinct_message():
    messages = [cls().user_message for cls in ALL_ERRORS]
    assert len(set(messages)) == len(ALL_ERRORS)
    assert set(USER_MESSAGES) == set(CaptureErrorKind)

def test_messages_name_the_fix():
    assert "allow camera permissions" in PermissionDenied().user_message
    assert "Connect a camera" in DeviceNotFound().user_message
    assert "HTTPS" in InsecureContext().user_message

def test_detail_does_not_leak_into_user_message():
    error = CaptureUnknown("ioctl failed: -22")
    assert str(error) == "ioctl failed: -22"
    assert "ioctl" not in error.user_message
    assert error.user_message.startswith("Unable to access camera. ")
