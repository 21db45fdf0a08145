"""
Engram extractor: what the character is thinking about right now.

Scores the words of the last few messages by recency, adds the current
location, activity and the names of the people involved, and returns the
strongest few as the character's short-term focus.
"""
import re
import logging
from typing import Dict, List, NamedTuple, Optional, Sequence

from config import LOGGING_CONFIG
from core.keywords import STOP_WORDS
from models.message import Message, ensure_messages
from utils.error_handler import safe_execute

logger = logging.getLogger(LOGGING_CONFIG["LOGGER_NAME"])

MESSAGE_WINDOW = 5
TOP_ENGRAMS = 5
MIN_WORD_LENGTH = 3
UNKNOWN_LOCATION = 'Unknown'

LOCATION_WEIGHT = 1.2
ACTIVITY_WEIGHT = 1.0
NAME_WEIGHT = 0.5
ROLE_WEIGHT = 0.6

_NON_ALNUM_RE = re.compile(r'[^a-z0-9\s]')


class EngramContext(NamedTuple):
    """Identity anchors injected into the focus list"""
    user_name: Optional[str] = None
    char_name: Optional[str] = None
    char_role: Optional[str] = None


def _add_terms(scores: Dict[str, float], text: str, weight: float):
    for word in text.lower().split():
        if word not in STOP_WORDS:
            scores[word] = scores.get(word, 0) + weight


def score_engrams(messages: Sequence[Message], current_location: str = "", current_activity: str = "",
                  context: Optional[EngramContext] = None) -> Dict[str, float]:
    """
    Raw engram scores in first-insertion order.

    Message words are stripped to ``[a-z0-9]``; injected context words keep
    their punctuation and skip the length filter.
    """
    recent = list(messages)[-MESSAGE_WINDOW:]
    scores = {}

    for index, message in enumerate(recent):
        clean = _NON_ALNUM_RE.sub('', message.text.lower())
        # The newest message weighs 1.5, the oldest of a full window 0.7
        weight = 0.5 + ((index + 1) / len(recent))
        for word in clean.split():
            if len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS:
                scores[word] = scores.get(word, 0) + weight

    if current_location and current_location != UNKNOWN_LOCATION:
        _add_terms(scores, current_location, LOCATION_WEIGHT)
    if current_activity:
        _add_terms(scores, current_activity, ACTIVITY_WEIGHT)

    if context is not None:
        if context.user_name:
            _add_terms(scores, context.user_name, NAME_WEIGHT)
        if context.char_name:
            _add_terms(scores, context.char_name, NAME_WEIGHT)
        if context.char_role:
            _add_terms(scores, context.char_role, ROLE_WEIGHT)

    return scores


@safe_execute(default_factory=list)
def analyze_active_engrams(messages: Sequence[Message], current_location: str = "",
                           current_activity: str = "", context: Optional[EngramContext] = None) -> List[str]:
    """
    Extract the character's current focus.

    Args:
        messages: Chat history, oldest first
        current_location: Scenario location ("Unknown" is ignored)
        current_activity: Scenario activity
        context: Optional user/character identity anchors

    Returns:
        list: Up to five capitalized keywords, strongest first
    """
    scores = score_engrams(ensure_messages(messages), current_location, current_activity, context)

    # sorted() is stable, so ties keep first-insertion order
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    engrams = [word[:1].upper() + word[1:] for word, _score in ranked[:TOP_ENGRAMS]]
    logger.debug(f"Active engrams: {engrams}")
    return engrams
