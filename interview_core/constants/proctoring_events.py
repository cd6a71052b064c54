"""
Description:
Proctoring event types that need a reviewer's attention.

Event types are an open tag set, but the suspicious ones form a closed enumeration:
a new kind of suspicious activity has to be added here explicitly, otherwise it is
logged as not suspicious.
"""
import enum


class SuspiciousEventType(str, enum.Enum):
    FACE_NOT_DETECTED = "face_not_detected"
    MULTIPLE_FACES = "multiple_faces"
    TAB_SWITCH = "tab_switch"
    WINDOW_BLUR = "window_blur"
    FULLSCREEN_EXIT = "fullscreen_exit"
    COPY_PASTE_DETECTED = "copy_paste_detected"
    RIGHT_CLICK_DETECTED = "right_click_detected"


SUSPICIOUS_EVENT_TYPES = frozenset(event.value for event in SuspiciousEventType)

SESSION_START_EVENT = "session_start"


def is_suspicious(event_type: str) -> bool:
    """Suspiciousness depends on the event type only, never on the reported severity."""
    return event_type in SUSPICIOUS_EVENT_TYPES
