"""
Internal-state analyzer.

Reads the character's own recent messages for physical and emotional cues
(violence, pleasure, illness, comfort, weather) and turns them into a single
stability impact. Categories are checked in a fixed priority order and the
first one that fires decides the result.
"""
import logging
from typing import Optional, Sequence

from config import LOGGING_CONFIG
from core.keywords import (
    VIOLENCE_KEYWORDS, PLEASURE_KEYWORDS, JOY_KEYWORDS,
    HEALTH_SEVERE_KEYWORDS, HEALTH_MODERATE_KEYWORDS, HEALTH_RECOVERY_KEYWORDS,
    WEATHER_RAIN_KEYWORDS, WEATHER_STORM_KEYWORDS, WEATHER_COLD_KEYWORDS,
    STORM_SENSITIVITY_TRAITS, COLD_SENSITIVITY_TRAITS, RAIN_JOY_TRIGGERS,
    contains_any,
)
from models.character import Character, ensure_character
from models.message import Message, ensure_messages
from models.states import InternalStateResult
from utils.error_handler import safe_execute

logger = logging.getLogger(LOGGING_CONFIG["LOGGER_NAME"])

# ─── Impacts and labels ─────────────────────────────────────────────────────
VIOLENCE_IMPACT = -25
VIOLENCE_LABEL = "Physical Trauma"

PLEASURE_IMPACT = 15
PLEASURE_LABEL = "Euphoric State"

COMFORT_IMPACT = 8
COMFORT_LABEL = "Feeling Safe"

HEALTH_SEVERE_IMPACT = -15
HEALTH_SEVERE_LABEL = "Critical Condition"
HEALTH_MODERATE_IMPACT = -8
HEALTH_MODERATE_LABEL = "Physical Illness"
HEALTH_RECOVERY_MITIGATION = 10
HEALTH_RECOVERING_LABEL = "Recovering"
HEALTH_SCAN_LIMIT = 3
# Health only wins when it is worse than this
HEALTH_REPORT_THRESHOLD = -5

STORM_PHOBIA_IMPACT = -15
STORM_DISCOMFORT_IMPACT = -2
COLD_SENSITIVE_IMPACT = -10
RAIN_JOY_IMPACT = 5
WEATHER_DISTRESS_LABEL = "Weather Distress"
WEATHER_COMFORT_LABEL = "Weather Comfort"


def check_weather_impact(text: str, character: Character) -> int:
    """
    Weather impact of one lowercased message for a given character.

    Storm and rain/cold effects are independent and add up.

    Args:
        text: Lowercased message text
        character: Character whose traits decide how weather lands

    Returns:
        int: Signed impact, 0 when no weather is mentioned or it does not matter
    """
    impact = 0
    traits = character.trait_text()

    if contains_any(text, WEATHER_STORM_KEYWORDS):
        if contains_any(traits, STORM_SENSITIVITY_TRAITS):
            impact += STORM_PHOBIA_IMPACT
        else:
            impact += STORM_DISCOMFORT_IMPACT

    if contains_any(text, WEATHER_RAIN_KEYWORDS) or contains_any(text, WEATHER_COLD_KEYWORDS):
        joy_triggers = character.emotional_profile.joy_triggers.lower()
        if contains_any(traits, COLD_SENSITIVITY_TRAITS):
            impact += COLD_SENSITIVE_IMPACT
        elif contains_any(joy_triggers, RAIN_JOY_TRIGGERS):
            impact += RAIN_JOY_IMPACT

    return impact


def analyze_health(messages: Sequence[Message]) -> InternalStateResult:
    """
    Accumulate illness cues over the newest few messages.

    The scan runs newest first; only the newest message (i == 0) may set the
    label, and a severe label there is never downgraded to a moderate one.
    """
    impact = 0
    label = None
    severity = 0
    mitigation = 0

    scan_limit = min(len(messages), HEALTH_SCAN_LIMIT)
    for i in range(scan_limit):
        text = messages[len(messages) - 1 - i].text.lower()

        if contains_any(text, HEALTH_RECOVERY_KEYWORDS):
            mitigation += HEALTH_RECOVERY_MITIGATION

        if contains_any(text, HEALTH_SEVERE_KEYWORDS):
            impact += HEALTH_SEVERE_IMPACT
            if i == 0:
                label = HEALTH_SEVERE_LABEL
                severity = 2
        elif contains_any(text, HEALTH_MODERATE_KEYWORDS):
            impact += HEALTH_MODERATE_IMPACT
            if i == 0 and severity < 2:
                label = HEALTH_MODERATE_LABEL
                severity = 1

    # Recovery pulls a negative impact toward zero, never past it
    if impact < 0 and mitigation > 0:
        impact = min(0, impact + mitigation)
        if impact == 0:
            label = HEALTH_RECOVERING_LABEL

    return InternalStateResult(impact, label)


@safe_execute(default_factory=InternalStateResult)
def analyze_internal_state(recent_bot_messages: Sequence[Message],
                           character: Optional[Character] = None) -> InternalStateResult:
    """
    Analyze the character's condition from its own latest messages.

    Args:
        recent_bot_messages: Recent model-authored messages, oldest first
        character: Optional profile; enables trait-based weather sensitivity

    Returns:
        InternalStateResult: ``impact`` and optional ``modifier`` label
    """
    messages = ensure_messages(recent_bot_messages)
    if not messages:
        return InternalStateResult()

    character = ensure_character(character)
    latest_text = messages[-1].text.lower()

    if contains_any(latest_text, VIOLENCE_KEYWORDS):
        return InternalStateResult(VIOLENCE_IMPACT, VIOLENCE_LABEL)

    if contains_any(latest_text, PLEASURE_KEYWORDS):
        return InternalStateResult(PLEASURE_IMPACT, PLEASURE_LABEL)

    health = analyze_health(messages)
    if health.impact < HEALTH_REPORT_THRESHOLD:
        logger.debug(f"Health cues: impact {health.impact} ({health.modifier})")
        return health

    if contains_any(latest_text, JOY_KEYWORDS):
        return InternalStateResult(COMFORT_IMPACT, COMFORT_LABEL)

    if character is not None:
        weather = check_weather_impact(latest_text, character)
        if weather != 0:
            label = WEATHER_DISTRESS_LABEL if weather < 0 else WEATHER_COMFORT_LABEL
            return InternalStateResult(weather, label)

    return InternalStateResult()
