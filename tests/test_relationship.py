"""Tests for the relationship analyzer."""
import pytest

from managers.relationship import analyze_relationship, get_starting_params, instant_impact, psyche_factors
from models.message import ROLE_MODEL
from models.states import PsycheState, INITIALIZING_CONTEXT
from models.tiers import COMPLEX_TIERS


def psyche(score):
    return PsycheState(score, "Stable", (), "stable", 50, 6.0)


@pytest.mark.parametrize("relation, expected", [
    ("girlfriend", (75, True)),
    ("Best Friend", (60, False)),
    ("teman kantor", (30, False)),
    ("childhood friend", (50, False)),
    ("older sister", (70, False)),
    ("ex-girlfriend", (-10, True)),
    ("secret crush", (45, True)),
    ("sworn enemy", (-50, False)),
    ("rival", (-20, False)),
    ("Hater", (-80, False)),
    ("Stranger", (0, False)),
    ("", (0, False)),
    (None, (0, False)),
])
def test_starting_params(relation, expected):
    assert tuple(get_starting_params(relation)) == expected


def test_girlfriend_starts_deeply_in_love(make_character):
    state = analyze_relationship(make_character(lore={"userRelationship": "girlfriend"}), [])
    assert state.score == 75
    assert state.tier.id == 'r10'
    assert state.tier.label == "Deeply In Love"
    assert state.context == "Romantic Interest"
    assert state.trend == "stagnant"
    assert state.progress == 0


def test_romantic_betrayal(make_character, make_history):
    character = make_character(lore={"userRelationship": "girlfriend"})
    history = make_history(*["i love you"] * 10, "kamu bodoh")
    state = analyze_relationship(character, history)
    # 75 + 10 * 1.1 = 86, then -50 and the romance is over
    assert state.score == 36
    assert state.tier.id == 'p2'
    assert state.trend == "volatile"
    # the betrayal label is replaced by the score-based one
    assert state.context == "Platonic Bond"


def test_platonic_betrayal(make_character, make_history):
    character = make_character(lore={"userRelationship": "best friend"})
    state = analyze_relationship(character, make_history("hello there", "hello there", "you are useless"))
    assert state.score == 25
    assert state.tier.id == 'n5'
    assert state.trend == "deteriorating"
    assert state.progress == pytest.approx(24.0)


def test_romance_turns_friendship_romantic(make_character, make_history):
    character = make_character(lore={"userRelationship": "best friend"})
    state = analyze_relationship(character, make_history("you look beautiful"))
    assert state.score == 62
    assert state.tier.id == 'r7'
    assert state.trend == "improving"
    assert state.context == "Romantic Interest"
    assert state.progress == pytest.approx(50.0)


def test_unwelcome_romance(make_character, make_history):
    state = analyze_relationship(make_character(), make_history("hey beautiful"))
    assert state.score == -2
    assert state.tier.id == 'h10'
    assert state.context == "Cold"


def test_friend_zone_friction():
    impact = instant_impact("you are beautiful", 78, False, 1.0, 1.0)
    assert impact.shift == -5
    assert impact.label == "Awkward Tension"
    assert impact.trend == "stagnant"
    assert impact.is_romantic is False


def test_passive_drift(make_character, make_history):
    state = analyze_relationship(make_character(), make_history("hello there"))
    assert state.score == 0
    assert state.tier.id == 'n1'
    assert state.progress == pytest.approx(4.0)
    assert state.context == "Platonic Bond"


def test_inertia_halves_gains_at_high_scores(make_character, make_history):
    character = make_character(lore={"userRelationship": "girlfriend"})
    state = analyze_relationship(character, make_history(*["i love you"] * 15))
    # 75 + 14 * 1.1 = 90.4, then +2 * 0.5
    assert state.score == 91
    assert state.tier.id == 'r13'
    assert state.trend == "improving"


def test_fragile_psyche_amplifies_hostility(make_character, make_history):
    state = analyze_relationship(make_character(), make_history("i hate you"), psyche(20))
    assert state.score == -7
    assert state.tier.id == 'h10'
    assert state.context == "Cold (Unstable)"
    assert state.trend == "deteriorating"


def test_zero_psyche_score_is_not_treated_as_missing(make_character, make_history):
    state = analyze_relationship(make_character(), make_history("hello there"), psyche(0))
    assert state.context.endswith("(Unstable)")
    without = analyze_relationship(make_character(), make_history("hello there"))
    assert without.context == "Platonic Bond"


def test_psyche_factors():
    assert psyche_factors(20) == (1.5, 0.5)
    assert psyche_factors(50) == (1.0, 1.0)
    assert psyche_factors(90) == (0.8, 1.0)


def test_trailing_model_message_means_no_instant_impact(make_character, make_history):
    state = analyze_relationship(make_character(), make_history("hello there", (ROLE_MODEL, "hi")))
    assert state.score == 0
    assert state.trend == "stagnant"


def test_only_last_fifty_messages_count(make_character, make_history):
    history = make_history(*["hello there"] * 100, (ROLE_MODEL, "ok"))
    state = analyze_relationship(make_character(), history)
    # 49 user messages in the window at +0.1 each
    assert state.score == 5


def test_no_maintenance_gain_for_enemies(make_character, make_history):
    character = make_character(lore={"userRelationship": "enemy"})
    history = make_history("hello there", "hello there", (ROLE_MODEL, "..."))
    state = analyze_relationship(character, history)
    assert state.score == -50
    assert state.tier.id == 'h6'
    assert state.context == "Hostile"


@pytest.mark.parametrize("messages", [None, "not a list", 42])
def test_non_list_history_gives_initializing_state(make_character, messages):
    state = analyze_relationship(make_character(), messages)
    assert state.context == INITIALIZING_CONTEXT
    assert state.tier == COMPLEX_TIERS[0]
    assert state.score == 0
    assert state.progress == 0
    assert state.trend == "stagnant"


def test_missing_character_gives_initializing_state(make_history):
    assert analyze_relationship(None, make_history("hi")).context == INITIALIZING_CONTEXT


def test_scores_stay_in_bounds(make_character, make_history):
    character = make_character(lore={"userRelationship": "hater"})
    state = analyze_relationship(character, make_history(*["i hate you, die"] * 60), psyche(10))
    assert state.score == -100
    assert state.tier.id == 'h1'
    assert state.context == "Nemesis (Unstable)"
