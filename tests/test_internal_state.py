"""Tests for the internal-state analyzer."""
from managers.internal_state import analyze_internal_state, analyze_health, check_weather_impact
from models.message import Message, ROLE_MODEL
from models.states import InternalStateResult


def bot(*texts):
    return [Message(id=f"b{i}", role=ROLE_MODEL, text=text) for i, text in enumerate(texts)]


def test_empty_history_has_no_impact():
    assert analyze_internal_state([]) == InternalStateResult(0, None)
    assert analyze_internal_state(None) == InternalStateResult(0, None)


def test_violence_wins_over_comfort():
    result = analyze_internal_state(bot("*slap* Then a warm hug."))
    assert result == InternalStateResult(-25, "Physical Trauma")


def test_only_the_latest_message_decides_priority():
    assert analyze_internal_state(bot("*slap*", "the afternoon is quiet")) == InternalStateResult(0, None)


def test_pleasure():
    assert analyze_internal_state(bot("a soft kiss on the cheek")) == InternalStateResult(15, "Euphoric State")


def test_pleasure_outranks_health():
    result = analyze_internal_state(bot("a kiss even with this fever"))
    assert result.modifier == "Euphoric State"


def test_severe_health_in_latest_message():
    result = analyze_internal_state(bot("I think I have a fever"))
    assert result == InternalStateResult(-15, "Critical Condition")


def test_health_accumulates_over_three_messages():
    result = analyze_internal_state(bot("my head has a headache", "still a headache", "coughing hard"))
    assert result == InternalStateResult(-24, "Physical Illness")


def test_health_scan_is_limited_to_three_messages():
    result = analyze_internal_state(bot("a headache", "a headache", "a headache", "a headache"))
    assert result.impact == -24


def test_health_label_comes_from_latest_message_only():
    result = analyze_internal_state(bot("vomit and blood everywhere", "feeling a bit dizzy"))
    assert result == InternalStateResult(-23, "Physical Illness")

    result = analyze_internal_state(bot("feeling dizzy", "I might collapse"))
    assert result == InternalStateResult(-23, "Critical Condition")


def test_mild_health_below_threshold_falls_through():
    assert analyze_internal_state(bot("a slight cough")) == InternalStateResult(-8, "Physical Illness")
    # -15 + 10 mitigation = -5, which is not reported
    assert analyze_internal_state(bot("a terrible fever", "took medicine, feeling better")) == InternalStateResult(0, None)


def test_recovery_never_pushes_past_zero():
    assert analyze_health(bot("feeling dizzy", "drank some medicine")) == InternalStateResult(0, "Recovering")
    assert analyze_health(bot("a terrible fever", "took medicine, feeling better")) == InternalStateResult(-5, None)


def test_comfort():
    assert analyze_internal_state(bot("wrapped in a warm hug")) == InternalStateResult(8, "Feeling Safe")


def test_storm_phobia(make_character):
    character = make_character(capabilities={"flaws": "terrified of thunder"})
    result = analyze_internal_state(bot("the storm rolls in"), character)
    assert result == InternalStateResult(-15, "Weather Distress")


def test_storm_without_phobia_is_mild(make_character):
    result = analyze_internal_state(bot("the storm rolls in"), make_character())
    assert result == InternalStateResult(-2, "Weather Distress")


def test_rain_lover(make_character):
    character = make_character(emotional={"joyTriggers": "rain on the window"})
    result = analyze_internal_state(bot("listening to the rain"), character)
    assert result == InternalStateResult(5, "Weather Comfort")


def test_weather_effects_accumulate(make_character):
    character = make_character(capabilities={"flaws": "scared of thunder, weak body"})
    assert check_weather_impact("storm and heavy rain", character) == -25


def test_weather_needs_a_character():
    assert analyze_internal_state(bot("the storm rolls in")) == InternalStateResult(0, None)
