"""Tests for the profile engine."""
import logging

import pytest

from managers.profile_engine import (
    ProfileEngine, compute_neural_profile, default_engine, mask_integrity, neutral_profile,
    psyche_warning, visual_state, DEFAULT_APPEARANCE, SCANNING_FOCUS, BREAKDOWN_WARNING,
)
from models.message import OutfitItem, ROLE_MODEL
from models.states import PsycheState, INITIALIZING_CONTEXT
from utils.error_handler import PSYCHE_LEVEL


def psyche(score, modifiers=()):
    return PsycheState(score, "Stable", tuple(modifiers), "stable", 50, 6.0)


def test_visual_state_prefers_character_outfit(make_character):
    outfits = [
        OutfitItem(id="o1", target="user", part="top", desc="Hoodie"),
        OutfitItem(id="o2", target="char", part="dress", desc="Red dress"),
    ]
    assert visual_state(make_character(), outfits) == "Red dress"
    assert visual_state(make_character(), outfits[:1]) == "Casual sweater"
    assert visual_state(make_character(appearance={"style": ""}), []) == DEFAULT_APPEARANCE


def test_psyche_warning():
    assert psyche_warning(psyche(52, ["Verbal Aggression", "Emotional Abuse"])) == "VERBAL AGGRESSION +"
    assert psyche_warning(psyche(60, ["Midnight Melancholy"])) == "MIDNIGHT MELANCHOLY"
    assert psyche_warning(psyche(19)) == BREAKDOWN_WARNING
    assert psyche_warning(psyche(20)) is None


@pytest.mark.parametrize("stability, label, color", [
    (100, "Intact", "#34d399"),
    (60, "Intact", "#34d399"),
    (59, "Cracking", "#facc15"),
    (30, "Cracking", "#facc15"),
    (29, "Fracturing", "#f87171"),
    (10, "Fracturing", "#f87171"),
    (9, "SHATTERED", "#dc2626"),
    (0, "SHATTERED", "#dc2626"),
])
def test_mask_integrity(stability, label, color):
    assert mask_integrity(stability) == (label, color)


def test_profile_for_fresh_chat(make_character, daytime_ms):
    profile = compute_neural_profile(make_character(), [], [], daytime_ms)
    assert profile.visual_state == "Casual sweater"
    assert profile.psyche.stability == 80
    assert profile.psyche.warning is None
    assert profile.social.tier.id == 'n1'
    assert profile.duality.alignment == "Neutral Good"
    assert profile.duality.mask_integrity == "Intact"
    # identity anchors: role 0.6, then user name and character name at 0.5
    assert profile.memory.focus == ("Librarian", "User", "Aria")
    assert profile.is_processing is False


def test_profile_under_attack(make_character, make_history, daytime_ms):
    profile = compute_neural_profile(make_character(), make_history("KAMU BODOH SEKALI!!!"), [], daytime_ms)
    assert profile.psyche.stability == 52
    assert profile.psyche.status == "Anxious"
    assert profile.psyche.warning == "VERBAL AGGRESSION +"
    assert profile.duality.mask_integrity == "Cracking"
    assert profile.is_processing is True
    assert "Bodoh" in profile.memory.focus


def test_scanning_focus_when_nothing_stands_out(make_character, daytime_ms):
    character = make_character(name="", role="")
    profile = compute_neural_profile(character, [], [], daytime_ms, settings_provider=lambda: {"userName": "you"})
    assert profile.memory.focus == SCANNING_FOCUS


def test_settings_provider_supplies_user_name(make_character, daytime_ms):
    profile = compute_neural_profile(make_character(), [], [], daytime_ms,
                                     settings_provider=lambda: {"userName": "Budi"})
    assert "Budi" in profile.memory.focus


def test_is_processing_follows_last_speaker(make_character, make_history, daytime_ms):
    engine = ProfileEngine()
    assert engine.compute(make_character(), make_history("hi"), [], daytime_ms).is_processing is True
    assert engine.compute(make_character(), make_history("hi", (ROLE_MODEL, "hello")), [],
                          daytime_ms).is_processing is False


def test_same_inputs_hit_the_cache(make_character, make_history, daytime_ms):
    engine = ProfileEngine()
    character, history, outfits = make_character(), make_history("hello there"), []
    first = engine.compute(character, history, outfits, daytime_ms)
    # later in the same simulated minute
    second = engine.compute(character, history, outfits, daytime_ms + 30000)
    assert second is first
    assert engine.cache.hits == 1


def test_new_minute_recomputes(make_character, make_history, daytime_ms):
    engine = ProfileEngine()
    character, history, outfits = make_character(), make_history("hello there"), []
    first = engine.compute(character, history, outfits, daytime_ms)
    later = engine.compute(character, history, outfits, daytime_ms + 60000)
    assert later is not first
    assert later == first


def test_appending_to_the_history_recomputes(make_character, make_history, make_message, daytime_ms):
    engine = ProfileEngine()
    character, history, outfits = make_character(), make_history("hello there"), []
    first = engine.compute(character, history, outfits, daytime_ms)
    history.append(make_message("you are useless"))
    second = engine.compute(character, history, outfits, daytime_ms)
    assert second is not first
    assert second.social.score < first.social.score


def test_cache_is_bounded(make_character, daytime_ms):
    engine = ProfileEngine(cache_size=2)
    character = make_character()
    histories = [[] for _ in range(3)]
    for history in histories:
        engine.compute(character, history, [], daytime_ms)
    assert engine.cache.size() == 2


def test_mappings_and_objects_give_the_same_profile(make_character, make_history, daytime_ms):
    character = make_character(scenario={"currentLocation": "Park", "currentActivity": "reading"})
    history = make_history("hujan deras di taman", (ROLE_MODEL, "*smiles* it is raining"))
    outfits = [OutfitItem(id="o1", target="char", part="coat", desc="Yellow raincoat")]

    from_objects = ProfileEngine().compute(character, history, outfits, daytime_ms)
    from_mappings = ProfileEngine().compute(
        character.to_dict(),
        [m.to_dict() for m in history],
        [o.to_dict() for o in outfits],
        daytime_ms,
    )
    assert from_mappings == from_objects
    assert from_objects.visual_state == "Yellow raincoat"


def test_transitions_are_logged(make_character, make_history, daytime_ms, caplog):
    caplog.set_level(PSYCHE_LEVEL, logger="neurosense")
    engine = ProfileEngine()
    character = make_character()
    engine.compute(character, [], [], daytime_ms)
    engine.compute(character, make_history("KAMU BODOH SEKALI!!!"), [], daytime_ms)

    messages = [r.getMessage() for r in caplog.records if r.levelno == PSYCHE_LEVEL]
    assert "Character char-1 - psyche: 80 -> 52 (-28)" in messages
    assert "Character char-1 - status: Stable -> Anxious" in messages
    assert "Character char-1 - mask: Intact -> Cracking" in messages


def test_no_transition_logged_on_first_profile(make_character, daytime_ms, caplog):
    caplog.set_level(PSYCHE_LEVEL, logger="neurosense")
    ProfileEngine().compute(make_character(), [], [], daytime_ms)
    assert not [r for r in caplog.records if r.levelno == PSYCHE_LEVEL]


def test_failure_gives_neutral_profile(daytime_ms, caplog):
    caplog.set_level(logging.ERROR, logger="neurosense")
    profile = ProfileEngine().compute(42, [], [], daytime_ms)
    assert profile == neutral_profile()
    assert profile.social.context == INITIALIZING_CONTEXT
    assert profile.memory.focus == SCANNING_FOCUS
    assert any("compute" in r.getMessage() for r in caplog.records)


def test_to_dict_uses_storage_keys(make_character, daytime_ms):
    data = compute_neural_profile(make_character(), [], [], daytime_ms).to_dict()
    assert set(data) == {"visualState", "psyche", "social", "duality", "memory", "isProcessing"}
    assert data["psyche"]["emotionalIntelligence"] == 50
    assert data["duality"]["maskIntegrity"] == "Intact"
    assert data["social"]["tier"]["glowColor"].startswith("#")
    assert data["memory"]["focus"] == ["Librarian", "User", "Aria"]


def test_default_engine_is_shared(make_character, daytime_ms):
    character, history, outfits = make_character(), [], []
    first = compute_neural_profile(character, history, outfits, daytime_ms)
    assert compute_neural_profile(character, history, outfits, daytime_ms) is first
    assert default_engine.cache.hits == 1


def test_fresh_outfit_list_is_a_new_key(make_character, daytime_ms):
    character, history = make_character(), []
    first = compute_neural_profile(character, history, [], daytime_ms)
    second = compute_neural_profile(character, history, [], daytime_ms)
    assert second is not first
    assert second == first


@pytest.mark.parametrize("virtual_time", [float("nan"), float("inf"), None])
def test_unusable_clock_still_builds_a_profile(make_character, make_history, virtual_time):
    engine = ProfileEngine()
    character, history, outfits = make_character(), make_history("hello there"), []
    profile = engine.compute(character, history, outfits, virtual_time)
    assert profile.social.context == "Platonic Bond"
    assert profile.psyche.modifiers == ()
    assert "Hello" in profile.memory.focus
    assert engine.compute(character, history, outfits, virtual_time) is profile


def test_time_bucket(daytime_ms):
    engine = ProfileEngine()
    assert engine.time_bucket(daytime_ms) == engine.time_bucket(daytime_ms + 59999 - daytime_ms % 60000)
    assert engine.time_bucket(-30000) == -1
    assert engine.time_bucket(float("nan")) is None


def test_settings_provider_keeps_its_engine(make_character, make_history, daytime_ms, caplog):
    caplog.set_level(PSYCHE_LEVEL, logger="neurosense")

    def settings():
        return {"userName": "Budi"}

    character, outfits = make_character(), []
    history = make_history("hello there")
    first = compute_neural_profile(character, history, outfits, daytime_ms, settings_provider=settings)
    assert compute_neural_profile(character, history, outfits, daytime_ms, settings_provider=settings) is first

    compute_neural_profile(character, make_history("KAMU BODOH SEKALI!!!"), outfits, daytime_ms,
                           settings_provider=settings)
    messages = [r.getMessage() for r in caplog.records if r.levelno == PSYCHE_LEVEL]
    assert any(m.startswith("Character char-1 - psyche:") for m in messages)
    assert default_engine.cache.size() == 0
