"""
Chat message and outfit records.
"""
from typing import Any, Dict, List, NamedTuple, Optional

ROLE_USER = 'user'
ROLE_MODEL = 'model'

TARGET_USER = 'user'
TARGET_CHAR = 'char'


class Message(NamedTuple):
    """One chat message; ``timestamp`` is the virtual clock in ms"""
    id: str = ""
    role: str = ROLE_USER
    text: str = ""
    timestamp: int = 0
    image: Optional[str] = None
    speaker_name: Optional[str] = None
    is_system_event: bool = False

    @property
    def is_user(self) -> bool:
        return self.role == ROLE_USER

    @property
    def is_model(self) -> bool:
        return self.role == ROLE_MODEL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Message':
        """Create a message from its stored camelCase mapping"""
        timestamp = data.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            timestamp = 0
        return cls(
            id=str(data.get("id") or ""),
            role=data.get("role") or ROLE_USER,
            text=data.get("text") or "",
            timestamp=int(timestamp),
            image=data.get("image"),
            speaker_name=data.get("speakerName"),
            is_system_event=bool(data.get("isSystemEvent", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "role": self.role,
            "text": self.text,
            "timestamp": self.timestamp,
        }
        if self.image is not None:
            data["image"] = self.image
        if self.speaker_name is not None:
            data["speakerName"] = self.speaker_name
        if self.is_system_event:
            data["isSystemEvent"] = True
        return data


class OutfitItem(NamedTuple):
    """A worn clothing item; ``target`` is 'user' or 'char'"""
    id: str = ""
    target: str = TARGET_CHAR
    part: str = ""
    desc: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OutfitItem':
        return cls(
            id=str(data.get("id") or ""),
            target=data.get("target") or TARGET_CHAR,
            part=data.get("part") or "",
            desc=data.get("desc") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return self._asdict()


def ensure_message(value: Any) -> Message:
    """Accept either a Message or its stored mapping"""
    if isinstance(value, Message):
        return value
    if isinstance(value, dict):
        return Message.from_dict(value)
    raise TypeError(f"Expected Message or mapping, got {type(value).__name__}")


def ensure_messages(values: Any) -> List[Message]:
    """Coerce a message sequence; ``None`` yields an empty history"""
    if values is None:
        return []
    return [ensure_message(value) for value in values]


def ensure_outfit(value: Any) -> OutfitItem:
    if isinstance(value, OutfitItem):
        return value
    if isinstance(value, dict):
        return OutfitItem.from_dict(value)
    raise TypeError(f"Expected OutfitItem or mapping, got {type(value).__name__}")
