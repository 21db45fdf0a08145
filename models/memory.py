"""
Shared memory records anchored to a character.

Older saves stored each memory as a JSON-encoded string (or as free text
before that). Records are now typed and carry an explicit schema version;
``parse_memory`` upgrades anything older on read.
"""
import json
from typing import Any, Dict, List, Optional

SCHEMA_VERSION = 2
LEGACY_SCHEMA_VERSION = 1

LEGACY_TITLE = "Legacy Memory"
RAW_FRAGMENT_DESCRIPTION = "Raw memory fragment."


class SharedMemory:
    """A memory the user and character share (title, description, virtual timestamp)"""

    __slots__ = ("title", "description", "timestamp", "schema_version")

    def __init__(self, title: str, description: str = "", timestamp: Optional[int] = None,
                 schema_version: int = SCHEMA_VERSION):
        self.title = title
        self.description = description
        self.timestamp = timestamp
        self.schema_version = schema_version

    @classmethod
    def create(cls, title: str, description: str, virtual_time: int) -> 'SharedMemory':
        """Build a new current-schema memory stamped with the virtual clock"""
        return cls(title=title, description=description, timestamp=virtual_time)

    def to_dict(self) -> Dict[str, Any]:
        """Convert memory to the current storage form"""
        return {
            "schemaVersion": SCHEMA_VERSION,
            "title": self.title,
            "description": self.description,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], schema_version: Optional[int] = None) -> 'SharedMemory':
        """Create a memory from its mapping form (any schema version)"""
        if schema_version is None:
            schema_version = data.get("schemaVersion", SCHEMA_VERSION)
        return cls(
            title=str(data.get("title") or LEGACY_TITLE),
            description=str(data.get("description") or ""),
            timestamp=_coerce_timestamp(data.get("timestamp")),
            schema_version=schema_version,
        )

    def __eq__(self, other):
        if not isinstance(other, SharedMemory):
            return NotImplemented
        return (self.title, self.description, self.timestamp) == (other.title, other.description, other.timestamp)

    def __repr__(self):
        return f"SharedMemory(title={self.title!r}, timestamp={self.timestamp!r})"


def _coerce_timestamp(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    return None


def parse_memory(raw: Any) -> SharedMemory:
    """
    Parse one stored memory entry of any schema version.

    Args:
        raw: A mapping (current schema) or a string (legacy schema)

    Returns:
        SharedMemory: The upgraded record; never raises
    """
    if isinstance(raw, SharedMemory):
        return raw
    if isinstance(raw, dict):
        return SharedMemory.from_dict(raw)

    text = raw if isinstance(raw, str) else str(raw)
    try:
        decoded = json.loads(text)
    except (TypeError, ValueError):
        return SharedMemory(LEGACY_TITLE, text, schema_version=LEGACY_SCHEMA_VERSION)

    if isinstance(decoded, dict) and decoded.get("title"):
        return SharedMemory.from_dict(decoded, schema_version=LEGACY_SCHEMA_VERSION)

    return SharedMemory(text, RAW_FRAGMENT_DESCRIPTION, schema_version=LEGACY_SCHEMA_VERSION)


def parse_memories(raw_list: Any) -> List[SharedMemory]:
    """Parse a stored memory list; anything that is not a list yields no memories"""
    if not isinstance(raw_list, (list, tuple)):
        return []
    return [parse_memory(raw) for raw in raw_list if raw is not None]


def serialize_memory(memory: Any) -> Dict[str, Any]:
    """Serialize one memory (any schema version) to the current storage form"""
    return parse_memory(memory).to_dict()


def serialize_memories(memories: List[SharedMemory]) -> List[Dict[str, Any]]:
    """Serialize memories to the current storage form"""
    return [serialize_memory(memory) for memory in memories]
