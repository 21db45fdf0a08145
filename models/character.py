"""
Character profile model read by the analyzers.

Profiles arrive as the camelCase JSON written by the character store. Every
field has a default so a partially filled profile never breaks an analysis.
"""
from typing import Any, Dict, List, Optional

from models.memory import SharedMemory, parse_memories, serialize_memories

DEFAULT_TRAIT_SCORE = 50


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _trait(value: Any, default: Optional[int] = DEFAULT_TRAIT_SCORE) -> Optional[int]:
    """Coerce a trait score to an int in [0, 100]"""
    if value is None or isinstance(value, bool):
        return default
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return default
    return max(0, min(100, score))


class ProfileSection:
    """
    Base class for one section of a character profile.

    Subclasses declare ``FIELDS`` as ``(attribute, json_key, default)`` triples;
    ``TRAIT_FIELDS`` lists attributes holding 0-100 trait scores.
    """

    FIELDS = ()
    TRAIT_FIELDS = ()

    def __init__(self, **kwargs):
        for attr, _key, default in self.FIELDS:
            setattr(self, attr, kwargs.get(attr, default))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        """Create a section from its stored mapping; missing keys use defaults"""
        data = data if isinstance(data, dict) else {}
        values = {}
        for attr, key, default in cls.FIELDS:
            raw = data.get(key, data.get(attr))
            if attr in cls.TRAIT_FIELDS:
                values[attr] = _trait(raw, default)
            else:
                values[attr] = _text(raw, default)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for attr, key, _default in self.FIELDS}

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        fields = ", ".join(f"{attr}={getattr(self, attr)!r}" for attr, _key, _default in self.FIELDS)
        return f"{type(self).__name__}({fields})"


class Appearance(ProfileSection):
    FIELDS = (
        ("height", "height", ""),
        ("build", "build", ""),
        ("features", "features", ""),
        ("style", "style", ""),
    )


class Psychometrics(ProfileSection):
    """Five-factor traits plus decision style and empathy, each 0-100"""

    FIELDS = (
        ("openness", "openness", DEFAULT_TRAIT_SCORE),
        ("conscientiousness", "conscientiousness", DEFAULT_TRAIT_SCORE),
        ("extraversion", "extraversion", DEFAULT_TRAIT_SCORE),
        ("agreeableness", "agreeableness", DEFAULT_TRAIT_SCORE),
        ("neuroticism", "neuroticism", DEFAULT_TRAIT_SCORE),
        ("decision_style", "decisionStyle", DEFAULT_TRAIT_SCORE),
        ("empathy", "empathy", DEFAULT_TRAIT_SCORE),
    )
    TRAIT_FIELDS = tuple(attr for attr, _key, _default in FIELDS)


class EmotionalProfile(ProfileSection):
    FIELDS = (
        ("stability", "stability", ""),
        ("joy_triggers", "joyTriggers", ""),
        ("anger_triggers", "angerTriggers", ""),
        ("sadness_triggers", "sadnessTriggers", ""),
    )


class MoralProfile(ProfileSection):
    FIELDS = (
        ("alignment", "alignment", ""),
        ("values", "values", ""),
        ("philosophy", "philosophy", ""),
    )


class SocialProfile(ProfileSection):
    FIELDS = (
        ("social_battery", "socialBattery", ""),
        ("trust_factor", "trustFactor", ""),
        ("interaction_style", "interactionStyle", ""),
    )


class Duality(ProfileSection):
    """Surface mask, hidden core and the point where the mask breaks"""

    FIELDS = (
        ("mask", "mask", ""),
        ("core", "core", ""),
        ("breaking_point", "breakingPoint", ""),
    )


class Capabilities(ProfileSection):
    FIELDS = (
        ("skills", "skills", ""),
        ("flaws", "flaws", ""),
    )


class Lore(ProfileSection):
    FIELDS = (
        ("backstory", "backstory", ""),
        ("secrets", "secrets", ""),
        ("allies", "allies", ""),
        ("enemies", "enemies", ""),
        ("user_relationship", "userRelationship", ""),
    )


class Scenario(ProfileSection):
    FIELDS = (
        ("current_location", "currentLocation", ""),
        ("current_activity", "currentActivity", ""),
    )


class MemoryCortex:
    """Shared memories and current obsessions"""

    def __init__(self, memories: Optional[List[SharedMemory]] = None, obsessions: str = ""):
        self.memories = list(memories or [])
        self.obsessions = obsessions

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'MemoryCortex':
        data = data if isinstance(data, dict) else {}
        return cls(
            memories=parse_memories(data.get("memories")),
            obsessions=_text(data.get("obsessions")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "memories": serialize_memories(self.memories),
            "obsessions": self.obsessions,
        }

    def __eq__(self, other):
        if not isinstance(other, MemoryCortex):
            return NotImplemented
        return self.memories == other.memories and self.obsessions == other.obsessions


class Character:
    """Read-only character profile consumed by the analyzers"""

    IDENTITY_FIELDS = (
        ("id", "id", ""),
        ("name", "name", ""),
        ("description", "description", ""),
        ("role", "role", ""),
        ("species", "species", ""),
        ("gender", "gender", ""),
        ("age", "age", ""),
    )

    def __init__(self, id: str = "", name: str = "", description: str = "", role: str = "",
                 species: str = "", gender: str = "", age: str = "",
                 appearance: Optional[Appearance] = None,
                 psychometrics: Optional[Psychometrics] = None,
                 emotional_profile: Optional[EmotionalProfile] = None,
                 moral_profile: Optional[MoralProfile] = None,
                 social_profile: Optional[SocialProfile] = None,
                 duality: Optional[Duality] = None,
                 capabilities: Optional[Capabilities] = None,
                 lore: Optional[Lore] = None,
                 memory: Optional[MemoryCortex] = None,
                 scenario: Optional[Scenario] = None):
        # Identity
        self.id = id
        self.name = name
        self.description = description
        self.role = role
        self.species = species
        self.gender = gender
        self.age = age

        # Profile sections
        self.appearance = appearance or Appearance()
        self.psychometrics = psychometrics or Psychometrics()
        self.emotional_profile = emotional_profile or EmotionalProfile()
        self.moral_profile = moral_profile or MoralProfile()
        self.social_profile = social_profile or SocialProfile()
        self.duality = duality or Duality()
        self.capabilities = capabilities or Capabilities()
        self.lore = lore or Lore()
        self.memory = memory or MemoryCortex()
        # None means the profile has no scenario configured
        self.scenario = scenario

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Character':
        """Create a character from the stored camelCase mapping"""
        data = data if isinstance(data, dict) else {}
        identity = {attr: _text(data.get(key), default) for attr, key, default in cls.IDENTITY_FIELDS}
        scenario_data = data.get("scenario")

        return cls(
            appearance=Appearance.from_dict(data.get("appearance")),
            psychometrics=Psychometrics.from_dict(data.get("psychometrics")),
            emotional_profile=EmotionalProfile.from_dict(data.get("emotionalProfile")),
            moral_profile=MoralProfile.from_dict(data.get("moralProfile")),
            social_profile=SocialProfile.from_dict(data.get("socialProfile")),
            duality=Duality.from_dict(data.get("duality")),
            capabilities=Capabilities.from_dict(data.get("capabilities")),
            lore=Lore.from_dict(data.get("lore")),
            memory=MemoryCortex.from_dict(data.get("memory")),
            scenario=Scenario.from_dict(scenario_data) if isinstance(scenario_data, dict) else None,
            **identity
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the profile back to its stored camelCase mapping"""
        data = {key: getattr(self, attr) for attr, key, _default in self.IDENTITY_FIELDS}
        data.update({
            "appearance": self.appearance.to_dict(),
            "psychometrics": self.psychometrics.to_dict(),
            "emotionalProfile": self.emotional_profile.to_dict(),
            "moralProfile": self.moral_profile.to_dict(),
            "socialProfile": self.social_profile.to_dict(),
            "duality": self.duality.to_dict(),
            "capabilities": self.capabilities.to_dict(),
            "lore": self.lore.to_dict(),
            "memory": self.memory.to_dict(),
        })
        if self.scenario is not None:
            data["scenario"] = self.scenario.to_dict()
        return data

    def trait_text(self) -> str:
        """Concatenated free-text traits used for sensitivity checks, lowercased"""
        return " ".join([
            self.capabilities.flaws,
            self.emotional_profile.sadness_triggers,
            self.emotional_profile.anger_triggers,
            self.lore.backstory,
            self.description,
        ]).lower()

    def __repr__(self):
        return f"Character(id={self.id!r}, name={self.name!r})"


def ensure_character(value: Any) -> Optional[Character]:
    """Accept either a Character or its stored mapping"""
    if value is None or isinstance(value, Character):
        return value
    if isinstance(value, dict):
        return Character.from_dict(value)
    raise TypeError(f"Expected Character or mapping, got {type(value).__name__}")
