"""
Psyche analyzer: the character's mental stability.

The score is re-derived from scratch on every call: trait baseline, scenario
stress, the character's own condition, time of day and a decaying scan of the
last ten messages. Nothing is accumulated between calls, so the same history
always gives the same result.
"""
import re
import logging
from datetime import datetime
from typing import Optional, Sequence, Tuple

from config import LOGGING_CONFIG
from core.keywords import (
    AGGRESSION_KEYWORDS, STALKING_KEYWORDS, STALKING_ADDRESS_KEYWORDS, COMFORT_KEYWORDS,
    SCENARIO_HIGH_STRESS_KEYWORDS, SCENARIO_MODERATE_STRESS_KEYWORDS, SCENARIO_COMFORT_KEYWORDS,
    contains_any,
)
from managers.internal_state import analyze_internal_state
from models.character import Character, DEFAULT_TRAIT_SCORE, ensure_character
from models.message import Message, ROLE_MODEL, ensure_messages
from models.states import (
    PsycheState, neutral_psyche_state,
    STATUS_STABLE, STATUS_ANXIOUS, STATUS_FRIGHTENED, STATUS_PANICKED, STATUS_BROKEN,
    TREND_RISING, TREND_FALLING, TREND_STABLE,
)
from utils.error_handler import safe_execute
from utils.numeric import clamp, js_round, js_to_fixed, js_remainder, string_hash32

logger = logging.getLogger(LOGGING_CONFIG["LOGGER_NAME"])

BASELINE_SCORE = 80
FRAGILE_BASELINE = 60
STOIC_BASELINE = 90

SCENARIO_HIGH_STRESS_IMPACT = -15
SCENARIO_MODERATE_STRESS_IMPACT = -8
SCENARIO_COMFORT_IMPACT = 10
SCENARIO_HIGH_STRESS_LABEL = "Scenario Stress (High)"
SCENARIO_MODERATE_STRESS_LABEL = "Scenario Stress (Mod)"

INTERNAL_STATE_WINDOW = 5
HISTORY_WINDOW = 10

MIDNIGHT_START_HOUR = 0
MIDNIGHT_END_HOUR = 4
MIDNIGHT_STRESS = 5
MIDNIGHT_LABEL = "Midnight Melancholy"

YELLING_STRESS = 15
AGGRESSION_STRESS = 20
STALKING_STRESS = 25
COMFORT_BASE = 10
RECOVERY_BOOST_BASE = 5

VERBAL_AGGRESSION_LABEL = "Verbal Aggression"
EMOTIONAL_ABUSE_LABEL = "Emotional Abuse"
PARANOIA_LABEL = "Paranoia Trigger"

# Labels that mean the newest message is still hurting; healing pauses
ACTIVE_STRESS_LABELS = (VERBAL_AGGRESSION_LABEL, EMOTIONAL_ABUSE_LABEL)

TREND_MARGIN = 2

# (threshold, status) checked in order, the last match wins
STATUS_THRESHOLDS = (
    (80, STATUS_ANXIOUS),
    (50, STATUS_FRIGHTENED),
    (30, STATUS_PANICKED),
    (10, STATUS_BROKEN),
)

_CAPITAL_RE = re.compile(r'[A-Z]')


def _neuroticism(character: Character) -> int:
    # 0 counts as unset, same as a missing trait
    return character.psychometrics.neuroticism or DEFAULT_TRAIT_SCORE


def calculate_eq(character: Character) -> float:
    """
    Emotional intelligence composite, 0-100.

    Empathy 40%, agreeableness 30%, openness 20%, emotional stability
    (inverted neuroticism) 10%.
    """
    p = character.psychometrics
    stability = 100 - _neuroticism(character)
    eq = (p.empathy * 0.4) + (p.agreeableness * 0.3) + (p.openness * 0.2) + (stability * 0.1)
    return clamp(eq, 0, 100)


def scenario_text(character: Character) -> str:
    """Lowercased ``"<location> <activity>"``; empty when nothing is set"""
    scenario = character.scenario
    if scenario is None:
        return ""
    location = scenario.current_location or ""
    activity = scenario.current_activity or ""
    if not location and not activity:
        return ""
    return f"{location} {activity}".lower()


def scenario_chaos(text: str) -> int:
    """Deterministic mood variance in -9..9 derived from the scenario text"""
    return js_remainder(string_hash32(text), 10)


def calculate_scenario_impact(character: Character) -> Tuple[int, Optional[str]]:
    """
    Stability impact of the character's current scenario.

    Returns:
        tuple: (impact, modifier). The modifier is only set for stressful
        scenarios; comfort adds to the score silently.
    """
    text = scenario_text(character)

    impact = 0
    label = None
    if contains_any(text, SCENARIO_HIGH_STRESS_KEYWORDS):
        impact = SCENARIO_HIGH_STRESS_IMPACT
        label = SCENARIO_HIGH_STRESS_LABEL
    elif contains_any(text, SCENARIO_MODERATE_STRESS_KEYWORDS):
        impact = SCENARIO_MODERATE_STRESS_IMPACT
        label = SCENARIO_MODERATE_STRESS_LABEL
    elif contains_any(text, SCENARIO_COMFORT_KEYWORDS):
        impact = SCENARIO_COMFORT_IMPACT

    return impact + scenario_chaos(text), label


def virtual_hour(virtual_time: float) -> Optional[int]:
    """Local hour of a virtual timestamp in ms, or None if it cannot be converted"""
    try:
        return datetime.fromtimestamp(virtual_time / 1000).hour
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def is_yelling(text: str) -> bool:
    """All-caps shouting or more than two exclamation marks"""
    is_caps = len(text) > 5 and text == text.upper() and bool(_CAPITAL_RE.search(text))
    return is_caps or text.count('!') > 2


def decay_factor(age: int, eq: float) -> float:
    """Weight of a message ``age`` steps before the newest one (age 0)"""
    return max(0.1, 1 - (age * (0.15 + (eq / 500))))


def status_for_score(score: float) -> str:
    status = STATUS_STABLE
    for threshold, label in STATUS_THRESHOLDS:
        if score < threshold:
            status = label
    return status


def _dedupe(labels) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(labels))


@safe_execute(default_factory=neutral_psyche_state)
def analyze_psyche(character: Character, messages: Sequence[Message], virtual_time: float) -> PsycheState:
    """
    Compute the character's mental stability.

    Args:
        character: Character profile (or its stored mapping)
        messages: Full chat history, oldest first
        virtual_time: Current in-story time in ms

    Returns:
        PsycheState: Score 0-100, status, modifiers, trend, EQ and recovery rate
    """
    character = ensure_character(character)
    messages = ensure_messages(messages)

    # 1. Traits
    neuroticism = _neuroticism(character)
    resilience = 1 - (neuroticism / 100)
    eq = calculate_eq(character)

    # 2. Baseline
    stability_text = character.emotional_profile.stability.lower()
    score = BASELINE_SCORE
    if 'low' in stability_text or 'fragile' in stability_text:
        score = FRAGILE_BASELINE
    elif 'high' in stability_text or 'stoic' in stability_text:
        score = STOIC_BASELINE

    modifiers = []
    cumulative_stress = 0.0
    recovery_boost = 0.0

    # 3. Scenario
    scenario_impact, scenario_label = calculate_scenario_impact(character)
    score += scenario_impact
    if scenario_label:
        modifiers.append(scenario_label)

    # 4. The character's own condition
    bot_messages = [m for m in messages if m.role == ROLE_MODEL][-INTERNAL_STATE_WINDOW:]
    if bot_messages:
        internal = analyze_internal_state(bot_messages, character)
        score += internal.impact
        if internal.modifier:
            modifiers.append(internal.modifier)

    # 5. Circadian rhythm
    hour = virtual_hour(virtual_time)
    if hour is not None and MIDNIGHT_START_HOUR <= hour < MIDNIGHT_END_HOUR:
        cumulative_stress += MIDNIGHT_STRESS
        modifiers.append(MIDNIGHT_LABEL)

    # 6. Decaying history scan
    recent = messages[-HISTORY_WINDOW:]
    base_recovery = 2 + (eq / 20) + (resilience * 3)
    newest_index = len(recent) - 1

    for index, message in enumerate(recent):
        if not message.is_user:
            continue

        decay = decay_factor(newest_index - index, eq)
        is_newest = index == newest_index
        text = message.text
        text_lower = text.lower()
        stress = 0
        comfort = 0.0

        if is_yelling(text):
            stress += YELLING_STRESS
            if is_newest:
                modifiers.append(VERBAL_AGGRESSION_LABEL)

        if contains_any(text_lower, AGGRESSION_KEYWORDS):
            stress += AGGRESSION_STRESS
            if is_newest:
                modifiers.append(EMOTIONAL_ABUSE_LABEL)

        if contains_any(text_lower, STALKING_KEYWORDS) and contains_any(text_lower, STALKING_ADDRESS_KEYWORDS):
            stress += STALKING_STRESS
            if is_newest:
                modifiers.append(PARANOIA_LABEL)

        if contains_any(text_lower, COMFORT_KEYWORDS):
            forgiveness = 1 + (eq / 100)
            comfort += COMFORT_BASE * forgiveness
            if is_newest:
                recovery_boost += RECOVERY_BOOST_BASE * forgiveness

        cumulative_stress += stress * decay
        score += comfort * decay

    # 7. Resilience absorbs part of the stress
    effective_stress = cumulative_stress * (1 - (resilience * 0.4))
    score -= effective_stress

    # 8. Natural healing, paused while the newest message is still hostile
    recovery = base_recovery + recovery_boost
    healing = 0.0
    actively_stressed = any(label in modifiers for label in ACTIVE_STRESS_LABELS)
    if recent and not actively_stressed:
        healing = recovery
        score += healing

    score = clamp(score, 0, 100)

    # The trend weighs stress against the recovery capacity, applied or not
    if effective_stress > recovery + TREND_MARGIN:
        trend = TREND_FALLING
    elif recovery > effective_stress + TREND_MARGIN:
        trend = TREND_RISING
    else:
        trend = TREND_STABLE

    state = PsycheState(
        score=js_round(score),
        status=status_for_score(score),
        modifiers=_dedupe(modifiers),
        trend=trend,
        emotional_intelligence=js_round(eq),
        recovery_rate=js_to_fixed(recovery, 1),
    )
    logger.debug(f"Psyche for {character.id or character.name}: {state.score} {state.status} "
                 f"(stress {effective_stress:.2f}, healing {healing:.2f})")
    return state
