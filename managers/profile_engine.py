"""
Profile engine: composes every analyzer into one neural profile snapshot.
"""
import math
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from config import ENGINE_CONFIG, LOGGING_CONFIG, PERFORMANCE_CONFIG
from managers.engram import EngramContext, analyze_active_engrams
from managers.psyche import analyze_psyche
from managers.relationship import analyze_relationship
from models.character import Character, ensure_character
from models.message import OutfitItem, TARGET_CHAR, ensure_messages, ensure_outfit
from models.states import (
    DualityState, MemoryFocus, NeuralProfile, PsycheState, PsycheSummary,
    initializing_relationship_state, neutral_psyche_state,
)
from utils.error_handler import EngineLogger, safe_execute
from utils.performance_utils import LRUCache, global_performance_monitor

logger = logging.getLogger(LOGGING_CONFIG["LOGGER_NAME"])

DEFAULT_APPEARANCE = "Default Appearance"
DEFAULT_ALIGNMENT = "Neutral"
SCANNING_FOCUS = ("Scanning Context...",)
BREAKDOWN_WARNING = "CRITICAL: MENTAL BREAKDOWN"
BREAKDOWN_SCORE = 20
UNKNOWN_TIME_BUCKET = None
PROVIDER_ENGINE_LIMIT = 8

# (threshold, label, colour) checked in order, the last match wins
MASK_INTEGRITY_LEVELS = (
    (60, "Cracking", "#facc15"),
    (30, "Fracturing", "#f87171"),
    (10, "SHATTERED", "#dc2626"),
)
INTACT_INTEGRITY = ("Intact", "#34d399")

SettingsProvider = Callable[[], Mapping[str, Any]]


def default_settings() -> Dict[str, Any]:
    return {"userName": ENGINE_CONFIG["DEFAULT_USER_NAME"]}


def visual_state(character: Character, outfits: Sequence[OutfitItem]) -> str:
    """Character outfit first, then the base style, then a placeholder"""
    for outfit in outfits:
        if outfit.target == TARGET_CHAR:
            return outfit.desc
    return character.appearance.style or DEFAULT_APPEARANCE


def psyche_warning(psyche: PsycheState) -> Optional[str]:
    if psyche.modifiers:
        warning = psyche.modifiers[0].upper()
        if len(psyche.modifiers) > 1:
            warning += " +"
        return warning
    if psyche.score < BREAKDOWN_SCORE:
        return BREAKDOWN_WARNING
    return None


def summarize_psyche(psyche: PsycheState) -> PsycheSummary:
    return PsycheSummary(
        stability=psyche.score,
        status=psyche.status,
        trend=psyche.trend,
        warning=psyche_warning(psyche),
        emotional_intelligence=psyche.emotional_intelligence,
        recovery_rate=psyche.recovery_rate,
        modifiers=psyche.modifiers,
    )


def mask_integrity(stability: int):
    """Mask integrity label and colour for a rounded psyche score"""
    label, color = INTACT_INTEGRITY
    for threshold, level_label, level_color in MASK_INTEGRITY_LEVELS:
        if stability < threshold:
            label, color = level_label, level_color
    return label, color


def derive_duality(character: Character, psyche: PsycheState) -> DualityState:
    integrity, color = mask_integrity(psyche.score)
    return DualityState(
        alignment=character.moral_profile.alignment or DEFAULT_ALIGNMENT,
        mask_integrity=integrity,
        integrity_color=color,
    )


def neutral_profile() -> NeuralProfile:
    """Profile shown when the computation fails"""
    psyche = neutral_psyche_state()
    integrity, color = mask_integrity(psyche.score)
    return NeuralProfile(
        visual_state=DEFAULT_APPEARANCE,
        psyche=summarize_psyche(psyche),
        social=initializing_relationship_state(),
        duality=DualityState(DEFAULT_ALIGNMENT, integrity, color),
        memory=MemoryFocus(SCANNING_FOCUS),
        is_processing=False,
    )


class ProfileEngine:
    """
    Builds neural profiles and memoizes them per simulated minute.

    The memo key uses object identity, so callers must pass a new message list
    when the history changes (the chat layer always does).
    """

    def __init__(self, settings_provider: Optional[SettingsProvider] = None,
                 cache_size: Optional[int] = None):
        self.settings_provider = settings_provider or default_settings
        self.cache = LRUCache(max_size=cache_size or ENGINE_CONFIG["PROFILE_CACHE_SIZE"])
        self.bucket_ms = ENGINE_CONFIG["CACHE_BUCKET_MS"]
        self.engine_logger = EngineLogger()
        self.monitor = global_performance_monitor if PERFORMANCE_CONFIG["ENABLE_PERFORMANCE_MONITORING"] else None
        # character id -> last computed profile, for transition logging
        self.last_profiles = {}

    def time_bucket(self, virtual_time) -> Optional[int]:
        """Simulated-minute bucket; unusable clocks share one bucket"""
        if isinstance(virtual_time, (int, float)) and math.isfinite(virtual_time):
            return int(virtual_time // self.bucket_ms)
        return UNKNOWN_TIME_BUCKET

    def cache_key(self, character, messages, outfits, virtual_time):
        length = len(messages) if isinstance(messages, (list, tuple)) else -1
        return (id(character), id(messages), length, id(outfits), self.time_bucket(virtual_time))

    @safe_execute(default_factory=neutral_profile)
    def compute(self, character, messages, outfits, virtual_time) -> NeuralProfile:
        """
        Neural profile for one render.

        Args:
            character: Character or its stored mapping
            messages: Message list (Message objects or mappings), oldest first
            outfits: Worn outfit items
            virtual_time: In-story time in ms

        Returns:
            NeuralProfile: The memoized snapshot for this minute, if any
        """
        key = self.cache_key(character, messages, outfits, virtual_time)
        cached = self.cache.get(key)
        if cached is not None:
            return cached[1]

        if self.monitor:
            self.monitor.start_timer("profile_engine.compute")
        try:
            profile = self._build(character, messages, outfits, virtual_time)
        finally:
            if self.monitor:
                self.monitor.end_timer("profile_engine.compute")

        # Keep the key objects alive so their ids cannot be reused
        self.cache.put(key, ((character, messages, outfits), profile))
        return profile

    def _build(self, character, messages, outfits, virtual_time) -> NeuralProfile:
        character = ensure_character(character)
        messages = ensure_messages(messages)
        outfits = [ensure_outfit(outfit) for outfit in (outfits or [])]

        psyche = analyze_psyche(character, messages, virtual_time)
        social = analyze_relationship(character, messages, psyche)

        scenario = character.scenario
        settings = self.settings_provider() or {}
        context = EngramContext(
            user_name=settings.get("userName") or ENGINE_CONFIG["DEFAULT_USER_NAME"],
            char_name=character.name,
            char_role=character.role,
        )
        engrams = analyze_active_engrams(
            messages,
            scenario.current_location if scenario else "",
            scenario.current_activity if scenario else "",
            context,
        )

        profile = NeuralProfile(
            visual_state=visual_state(character, outfits),
            psyche=summarize_psyche(psyche),
            social=social,
            duality=derive_duality(character, psyche),
            memory=MemoryFocus(tuple(engrams) if engrams else SCANNING_FOCUS),
            is_processing=bool(messages) and messages[-1].is_user,
        )
        self._log_transitions(character, profile)
        return profile

    def _log_transitions(self, character: Character, profile: NeuralProfile):
        character_id = character.id or character.name
        previous = self.last_profiles.get(character_id)
        self.last_profiles[character_id] = profile
        if previous is None:
            return

        if previous.psyche.stability != profile.psyche.stability:
            self.engine_logger.log_score_change(character_id, "psyche", previous.psyche.stability,
                                                profile.psyche.stability)
        if previous.psyche.status != profile.psyche.status:
            self.engine_logger.log_status_change(character_id, "status", previous.psyche.status,
                                                 profile.psyche.status)
        if previous.social.score != profile.social.score:
            self.engine_logger.log_score_change(character_id, "relationship", previous.social.score,
                                                profile.social.score)
        if previous.social.tier.id != profile.social.tier.id:
            self.engine_logger.log_status_change(character_id, "tier", previous.social.tier.label,
                                                 profile.social.tier.label)
        if previous.duality.mask_integrity != profile.duality.mask_integrity:
            self.engine_logger.log_status_change(character_id, "mask", previous.duality.mask_integrity,
                                                 profile.duality.mask_integrity)

    def clear_cache(self):
        self.cache.clear()
        self.last_profiles.clear()


# Shared engine behind compute_neural_profile
default_engine = ProfileEngine()

# settings provider -> engine, so each provider keeps its own memo and history
provider_engines = LRUCache(max_size=PROVIDER_ENGINE_LIMIT)


def engine_for(settings_provider: Optional[SettingsProvider] = None) -> ProfileEngine:
    """Engine bound to a settings provider; the shared default engine for None"""
    if settings_provider is None:
        return default_engine
    engine = provider_engines.get(settings_provider)
    if engine is None:
        engine = ProfileEngine(settings_provider)
        provider_engines.put(settings_provider, engine)
    return engine


def compute_neural_profile(character, messages, outfits, virtual_time,
                           settings_provider: Optional[SettingsProvider] = None) -> NeuralProfile:
    """
    Compute the neural profile for one render.

    Uses the shared default engine, or the engine bound to the given
    settings provider, so repeated renders hit the same memo.
    """
    return engine_for(settings_provider).compute(character, messages, outfits, virtual_time)
