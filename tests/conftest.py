"""Shared builders and fixtures for the NeuroSense test suite."""
import itertools
from datetime import datetime

import pytest

from managers.profile_engine import default_engine, provider_engines
from models.character import Character
from models.message import Message, ROLE_USER
from utils.error_handler import error_aggregator

# Local wall-clock times, so the circadian check is timezone independent
DAYTIME_MS = int(datetime(2024, 1, 1, 12, 0).timestamp() * 1000)
MIDNIGHT_MS = int(datetime(2024, 1, 1, 2, 0).timestamp() * 1000)

_ids = itertools.count(1)


def build_character(psychometrics=None, emotional=None, lore=None, scenario=None, **fields):
    """Character with neutral traits and a "moderate" stability label."""
    data = {
        "id": "char-1",
        "name": "Aria",
        "role": "Librarian",
        "description": "A quiet librarian.",
        "appearance": {"style": "Casual sweater"},
        "psychometrics": {
            "openness": 50, "conscientiousness": 50, "extraversion": 50,
            "agreeableness": 50, "neuroticism": 50, "decisionStyle": 50, "empathy": 50,
        },
        "emotionalProfile": {
            "stability": "moderate", "joyTriggers": "", "angerTriggers": "", "sadnessTriggers": "",
        },
        "moralProfile": {"alignment": "Neutral Good"},
        "capabilities": {"skills": "", "flaws": ""},
        "lore": {"backstory": "", "userRelationship": "Stranger"},
        "memory": {"memories": [], "obsessions": ""},
    }
    data["psychometrics"].update(psychometrics or {})
    data["emotionalProfile"].update(emotional or {})
    data["lore"].update(lore or {})
    if scenario is not None:
        data["scenario"] = scenario
    for key, value in fields.items():
        if isinstance(value, dict) and isinstance(data.get(key), dict):
            data[key].update(value)
        else:
            data[key] = value
    return Character.from_dict(data)


def build_message(text, role=ROLE_USER, timestamp=DAYTIME_MS):
    return Message(id=f"m{next(_ids)}", role=role, text=text, timestamp=timestamp)


def build_history(*entries):
    """Messages from ``(role, text)`` pairs, or plain strings for user messages."""
    messages = []
    for entry in entries:
        role, text = (ROLE_USER, entry) if isinstance(entry, str) else entry
        messages.append(build_message(text, role=role))
    return messages


@pytest.fixture
def make_character():
    return build_character


@pytest.fixture
def make_message():
    return build_message


@pytest.fixture
def make_history():
    return build_history


@pytest.fixture
def daytime_ms():
    return DAYTIME_MS


@pytest.fixture
def midnight_ms():
    return MIDNIGHT_MS


@pytest.fixture(autouse=True)
def reset_shared_state():
    error_aggregator.reset()
    default_engine.clear_cache()
    provider_engines.clear()
    yield
    default_engine.clear_cache()
    provider_engines.clear()
