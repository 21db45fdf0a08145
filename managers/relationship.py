"""
Relationship analyzer: the character's bond with the user.

A starting disposition comes from the free-text "relation to user" field. The
message history then shifts it slowly, and the newest user message gets an
instant-impact pass (betrayal of a high bond, friend-zone friction). The
result is mapped onto the 45-row tier catalog.
"""
import logging
from typing import NamedTuple, Optional, Sequence

from config import LOGGING_CONFIG
from core.keywords import ROMANCE_KEYWORDS, HOSTILE_KEYWORDS, contains_any
from models.character import Character, ensure_character
from models.message import Message, ensure_messages
from models.states import (
    PsycheState, RelationshipState, initializing_relationship_state,
    REL_TREND_IMPROVING, REL_TREND_DETERIORATING, REL_TREND_STAGNANT, REL_TREND_VOLATILE,
)
from models.tiers import find_tier, tier_progress
from utils.error_handler import safe_execute
from utils.numeric import clamp, js_round

logger = logging.getLogger(LOGGING_CONFIG["LOGGER_NAME"])

DEFAULT_RELATION = "Stranger"
DEFAULT_PSYCHE_SCORE = 50
HISTORY_WINDOW = 50

MIN_SCORE = -100
MAX_SCORE = 100

# Ordered overwrite rules: every matching rule replaces the previous result.
# Each entry is (substrings, score, romantic) where romantic None leaves the flag alone.
STARTING_RULES = (
    (('friend', 'teman'), 30, None),
    (('best friend', 'sahabat'), 60, None),
    (('ally', 'sekutu'), 25, None),
    (('family', 'keluarga', 'sister', 'brother'), 70, None),
    (('childhood', 'kecil'), 50, None),
    (('girlfriend', 'boyfriend', 'pacar', 'wife', 'husband', 'istri', 'suami', 'lover'), 75, True),
    (('ex', 'mantan'), -10, True),
    (('crush', 'gebetan'), 45, True),
    (('enemy', 'musuh'), -50, None),
    (('rival',), -20, None),
    (('hater', 'pembenci'), -80, None),
    (('stranger', 'asing'), 0, None),
)

# Psyche thresholds for emotional volatility
FRAGILE_PSYCHE = 40
STEADY_PSYCHE = 80
UNSTABLE_PSYCHE = 30

MAINTENANCE_FLOOR = -20
MAINTENANCE_GAIN = 0.1
HISTORY_ROMANCE_GAIN = 1.0
HISTORY_HOSTILE_LOSS = 3.0
ROMANCE_ELIGIBLE_SCORE = 30

INERTIA_SCORE = 80
BETRAYAL_SCORE = 60
ROMANTIC_BETRAYAL_LOSS = 50
PLATONIC_BETRAYAL_LOSS = 35
MINOR_HOSTILE_LOSS = 5
FRIENDZONE_SCORE = 75
FRIENDZONE_LOSS = 5
ROMANCE_GAIN = 2
UNWELCOME_ROMANCE_LOSS = 2
PASSIVE_DRIFT = 0.2

HEARTBROKEN_LABEL = "Heartbroken / Betrayed"
DEEPLY_HURT_LABEL = "Deeply Hurt"
AWKWARD_LABEL = "Awkward Tension"
UNCOMFORTABLE_LABEL = "Uncomfortable"
UNSTABLE_SUFFIX = " (Unstable)"


class StartingParams(NamedTuple):
    score: int
    is_romantic: bool


class InstantImpact(NamedTuple):
    """Effect of the newest user message before the final context pass"""
    shift: float
    trend: str
    is_romantic: bool
    label: Optional[str]


def get_starting_params(relation_text: Optional[str]) -> StartingParams:
    """
    Starting score and romance flag from the "relation to user" text.

    Rules are applied in order and later matches overwrite earlier ones, so
    "ex best friend" ends up as an ex. Matching is substring based.
    """
    lower = (relation_text or "").lower()
    score = 0
    is_romantic = False

    for keywords, rule_score, romantic in STARTING_RULES:
        if contains_any(lower, keywords):
            score = rule_score
            if romantic is not None:
                is_romantic = romantic

    return StartingParams(score, is_romantic)


def psyche_factors(psyche_score: float):
    """
    Psyche-driven multipliers.

    Returns:
        tuple: (volatility, trust_dampener). A fragile mind overreacts to
        hostility and gains trust slowly; a steady one shrugs hostility off.
    """
    if psyche_score < FRAGILE_PSYCHE:
        volatility = 1.5
    elif psyche_score > STEADY_PSYCHE:
        volatility = 0.8
    else:
        volatility = 1.0
    dampener = 0.5 if psyche_score < FRAGILE_PSYCHE else 1.0
    return volatility, dampener


def instant_impact(text: str, score: float, is_romantic: bool,
                   volatility: float, dampener: float) -> InstantImpact:
    """Score shift caused by the newest user message"""
    text = text.lower()
    is_hostile = contains_any(text, HOSTILE_KEYWORDS)
    is_romance = contains_any(text, ROMANCE_KEYWORDS)
    inertia = 0.5 if abs(score) > INERTIA_SCORE else 1.0

    if is_hostile:
        if score > BETRAYAL_SCORE:
            if is_romantic:
                return InstantImpact(-ROMANTIC_BETRAYAL_LOSS * volatility, REL_TREND_VOLATILE, False,
                                     HEARTBROKEN_LABEL)
            return InstantImpact(-PLATONIC_BETRAYAL_LOSS * volatility, REL_TREND_DETERIORATING, is_romantic,
                                 DEEPLY_HURT_LABEL)
        return InstantImpact(-MINOR_HOSTILE_LOSS * volatility, REL_TREND_DETERIORATING, is_romantic, None)

    if is_romance:
        if is_romantic:
            return InstantImpact(ROMANCE_GAIN * dampener * inertia, REL_TREND_IMPROVING, True, None)
        if score > FRIENDZONE_SCORE:
            return InstantImpact(-FRIENDZONE_LOSS, REL_TREND_STAGNANT, False, AWKWARD_LABEL)
        if score > ROMANCE_ELIGIBLE_SCORE:
            return InstantImpact(ROMANCE_GAIN * dampener, REL_TREND_IMPROVING, True, None)
        return InstantImpact(-UNWELCOME_ROMANCE_LOSS, REL_TREND_STAGNANT, False, UNCOMFORTABLE_LABEL)

    if score > MAINTENANCE_FLOOR:
        return InstantImpact(PASSIVE_DRIFT * inertia, REL_TREND_STAGNANT, is_romantic, None)
    return InstantImpact(0, REL_TREND_STAGNANT, is_romantic, None)


def context_label(score: float, is_romantic: bool, psyche_score: float) -> str:
    """Final context label, derived from the final score only"""
    if score < -80:
        label = "Nemesis"
    elif score < -40:
        label = "Hostile"
    elif score < 0:
        label = "Cold"
    elif is_romantic:
        label = "Romantic Interest"
    else:
        label = "Platonic Bond"

    if psyche_score < UNSTABLE_PSYCHE:
        label += UNSTABLE_SUFFIX
    return label


@safe_execute(default_factory=initializing_relationship_state)
def analyze_relationship(character: Character, messages: Sequence[Message],
                         psyche: Optional[PsycheState] = None) -> RelationshipState:
    """
    Derive the relationship state between the character and the user.

    Args:
        character: Character profile (or its stored mapping)
        messages: Chat history, oldest first
        psyche: Psyche state computed for the same history; None reads as 50

    Returns:
        RelationshipState: Score -100..100, tier, progress, trend and context.
        A missing character or a non-list history gives the
        "Initializing..." state.
    """
    if character is None or not isinstance(messages, (list, tuple)):
        return initializing_relationship_state()

    character = ensure_character(character)
    messages = ensure_messages(messages)

    start = get_starting_params(character.lore.user_relationship or DEFAULT_RELATION)
    score = float(start.score)
    is_romantic = start.is_romantic

    recent = messages[-HISTORY_WINDOW:]
    last_message = recent[-1] if recent and recent[-1].is_user else None
    history = recent[:-1] if last_message is not None else recent

    psyche_score = psyche.score if psyche is not None else DEFAULT_PSYCHE_SCORE
    volatility, dampener = psyche_factors(psyche_score)

    # Established bond
    for message in history:
        if not (message.is_user and message.text):
            continue
        text = message.text.lower()
        shift = 0.0
        if score > MAINTENANCE_FLOOR:
            shift += MAINTENANCE_GAIN * dampener
        if contains_any(text, ROMANCE_KEYWORDS):
            shift += HISTORY_ROMANCE_GAIN * dampener
            if score > ROMANCE_ELIGIBLE_SCORE:
                is_romantic = True
        if contains_any(text, HOSTILE_KEYWORDS):
            shift -= HISTORY_HOSTILE_LOSS * volatility
        score += shift

    score = clamp(score, MIN_SCORE, MAX_SCORE)

    # Instant impact of the newest user message
    trend = REL_TREND_STAGNANT
    if last_message is not None and last_message.text:
        impact = instant_impact(last_message.text, score, is_romantic, volatility, dampener)
        score = clamp(score + impact.shift, MIN_SCORE, MAX_SCORE)
        trend = impact.trend
        is_romantic = impact.is_romantic
        if impact.label:
            logger.debug(f"Relationship event for {character.id or character.name}: {impact.label}")

    tier = find_tier(score, is_romantic)

    # The branch label above is superseded by the score-based label here
    state = RelationshipState(
        score=js_round(score),
        tier=tier,
        progress=tier_progress(score, tier),
        trend=trend,
        context=context_label(score, is_romantic, psyche_score),
    )
    logger.debug(f"Relationship for {character.id or character.name}: {state.score} {tier.label}")
    return state
