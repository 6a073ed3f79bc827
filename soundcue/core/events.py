"""
Host event classification for SoundCue.

Maps raw host events onto sound categories. Host events are JSON objects
of the form ``{"type": "...", "properties": {...}}``; anything that does
not match a known shape is ignored rather than rejected.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config.models import CueCategory


# Host event types
SESSION_CREATED = "session.created"
SESSION_IDLE = "session.idle"
SESSION_ERROR = "session.error"
PERMISSION_ASKED = "permission.asked"
MESSAGE_UPDATED = "message.updated"


@dataclass
class ClassifiedEvent:
    """
    Result of classifying one host event.

    Attributes:
        event_type: The host's event type string
        category: Sound category, or None when no cue is implied yet
        session_id: Originating session ("" when the host gave none)
        notify: Whether a desktop notification is warranted
        notify_message: Body text for that notification
        is_prompt: True for user messages, which feed the rapid-prompt
            detector and may become an "annoyed" cue
    """
    event_type: str
    category: Optional[CueCategory] = None
    session_id: str = ""
    notify: bool = False
    notify_message: str = ""
    is_prompt: bool = False

    @property
    def ignored(self) -> bool:
        """Nothing further happens for this event."""
        return self.category is None and not self.is_prompt


# type -> (category, notify, message)
_SESSION_EVENTS = {
    SESSION_IDLE: (CueCategory.COMPLETE, True, "Task complete"),
    SESSION_ERROR: (CueCategory.ERROR, True, "Session error"),
    PERMISSION_ASKED: (CueCategory.PERMISSION, True, "Permission needed"),
}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_id(value: Any) -> str:
    return value if isinstance(value, str) else ""


class EventClassifier:
    """
    Maps host events to (category, session id, notify).

    Example:
        >>> classifier = EventClassifier()
        >>> result = classifier.classify(
        ...     {"type": "session.idle", "properties": {"sessionID": "ses_1"}})
        >>> result.category, result.session_id, result.notify
        (<CueCategory.COMPLETE: 'complete'>, 'ses_1', True)
    """

    def classify(self, event: Any) -> ClassifiedEvent:
        """
        Classify a host event.

        Args:
            event: Decoded host event

        Returns:
            ClassifiedEvent; unknown or malformed events come back ignored
        """
        if not isinstance(event, dict):
            return ClassifiedEvent(event_type="")

        event_type = _as_id(event.get("type"))
        properties = _as_dict(event.get("properties"))

        if event_type == SESSION_CREATED:
            info = _as_dict(properties.get("info"))
            return ClassifiedEvent(
                event_type=event_type,
                category=CueCategory.GREETING,
                session_id=_as_id(info.get("id")),
            )

        if event_type in _SESSION_EVENTS:
            category, notify, message = _SESSION_EVENTS[event_type]
            return ClassifiedEvent(
                event_type=event_type,
                category=category,
                session_id=_as_id(properties.get("sessionID")),
                notify=notify,
                notify_message=message,
            )

        if event_type == MESSAGE_UPDATED:
            info = _as_dict(properties.get("info"))
            if info.get("role") != "user":
                return ClassifiedEvent(event_type=event_type)
            return ClassifiedEvent(
                event_type=event_type,
                session_id=_as_id(info.get("sessionID")),
                is_prompt=True,
            )

        return ClassifiedEvent(event_type=event_type)
