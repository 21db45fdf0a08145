"""
Relationship tier catalog.

45 bands: 10 Hostile (-100..-1), 5 Neutral (0..29) and two parallel 15-band
paths above 30, Platonic and Romantic. Icons are symbolic tags; mapping a tag
to a glyph is up to the renderer.
"""
from typing import Any, Dict, Iterable, NamedTuple, Tuple

TYPE_HOSTILE = 'Hostile'
TYPE_NEUTRAL = 'Neutral'
TYPE_PLATONIC = 'Platonic'
TYPE_ROMANTIC = 'Romantic'

RELATION_TYPES = (TYPE_HOSTILE, TYPE_NEUTRAL, TYPE_PLATONIC, TYPE_ROMANTIC)


class RelationshipTier(NamedTuple):
    id: str
    label: str
    min_score: int
    max_score: int
    type: str
    icon: str
    glow_color: str
    description: str

    @property
    def width(self) -> int:
        return self.max_score - self.min_score

    @property
    def midpoint(self) -> float:
        return (self.min_score + self.max_score) / 2

    def contains(self, score: float) -> bool:
        return self.min_score <= score <= self.max_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "minScore": self.min_score,
            "maxScore": self.max_score,
            "type": self.type,
            "icon": self.icon,
            "glowColor": self.glow_color,
            "description": self.description,
        }


def _tiers(tier_type: str, rows: Iterable[Tuple]) -> Tuple[RelationshipTier, ...]:
    return tuple(
        RelationshipTier(tier_id, label, low, high, tier_type, icon, glow, description)
        for tier_id, label, low, high, icon, glow, description in rows
    )


HOSTILE_TIERS = _tiers(TYPE_HOSTILE, (
    ('h1', "Abyssal Hatred", -100, -91, 'skull', "#450a0a",
     "Pure, unadulterated loathing. You are their sworn enemy."),
    ('h2', "Nemesis", -90, -81, 'sword', "#7f1d1d", "They actively plot your downfall."),
    ('h3', "Vindictive", -80, -71, 'flame', "#991b1b", "Full of vengeance and spite."),
    ('h4', "Hostile", -70, -61, 'alert-octagon', "#dc2626", "Openly aggressive and unfriendly."),
    ('h5', "Enemy", -60, -51, 'slash', "#c2410c", "Considers you a threat."),
    ('h6', "Resentful", -50, -41, 'frown', "#ea580c", "Holds a deep grudge against you."),
    ('h7', "Disgusted", -40, -31, 'thumbs-down', "#f97316", "Physically repulsed by your presence."),
    ('h8', "Distrustful", -30, -21, 'shield-alert', "#d97706", "Suspicious of your every move."),
    ('h9', "Cold", -20, -11, 'eye-off', "#f59e0b", "Icy demeanor, short responses."),
    ('h10', "Unfriendly", -10, -1, 'lock', "#ca8a04", "Not interested in talking."),
))

NEUTRAL_TIERS = _tiers(TYPE_NEUTRAL, (
    ('n1', "Stranger", 0, 5, 'user', "#71717a", "No history, no emotional connection."),
    ('n2', "Passerby", 6, 11, 'ghost', "#a1a1aa", "Just another face in the crowd."),
    ('n3', "Acquaintance", 12, 17, 'user-check', "#0d9488", "Knows your name, polite but distant."),
    ('n4', "Casual Contact", 18, 23, 'message-square', "#14b8a6", "Chats occasionally about surface topics."),
    ('n5', "Friendly Face", 24, 29, 'smile', "#2dd4bf", "Happy to see you, but no deep bond."),
))

PLATONIC_TIERS = _tiers(TYPE_PLATONIC, (
    ('p1', "Buddy", 30, 34, 'users', "#6ee7b7", "Good for hanging out."),
    ('p2', "Friend", 35, 39, 'users', "#34d399", "A solid friendship foundation."),
    ('p3', "Good Friend", 40, 44, 'users', "#10b981", "Reliable and fun to be around."),
    ('p4', "Trusted Ally", 45, 49, 'shield', "#059669", "Has your back in a pinch."),
    ('p5', "Companion", 50, 54, 'anchor', "#22d3ee", "Comfortable silence is possible."),
    ('p6', "Close Friend", 55, 59, 'link', "#06b6d4", "Shares personal stories."),
    ('p7', "Confidant", 60, 64, 'lock', "#0891b2", "Trusts you with secrets."),
    ('p8', "Best Friend", 65, 69, 'star', "#60a5fa", "Top priority in their social circle."),
    ('p9', "Partner in Crime", 70, 74, 'zap', "#3b82f6", "Inseparable dynamic duo."),
    ('p10', "Sworn Sibling", 75, 79, 'fingerprint', "#2563eb", "Family in all but blood."),
    ('p11', "Family", 80, 84, 'home', "#818cf8", "Unconditional acceptance."),
    ('p12', "Soul Sibling", 85, 89, 'sun', "#6366f1", "Spiritual resonance."),
    ('p13', "Kindred Spirit", 90, 94, 'network', "#4f46e5", "Two minds thinking as one."),
    ('p14', "Platonic Soulmate", 95, 97, 'gem', "#8b5cf6", "The highest form of friendship."),
    ('p15', "Unbreakable Bond", 98, 100, 'crown', "#a78bfa", "A legendary connection transcending time."),
))

ROMANTIC_TIERS = _tiers(TYPE_ROMANTIC, (
    ('r1', "Interested", 30, 34, 'sparkles', "#f9a8d4", "Curious about you romantically."),
    ('r2', "Crush", 35, 39, 'heart', "#f472b6", "Butterflies in the stomach."),
    ('r3', "Flirt", 40, 44, 'zap', "#ec4899", "Playful tension and hints."),
    ('r4', "Date", 45, 49, 'calendar', "#db2777", "Testing the waters of romance."),
    ('r5', "Sweetheart", 50, 54, 'heart', "#fb7185", "Early relationship warmth."),
    ('r6', "Partner", 55, 59, 'user-check', "#f43f5e", "Committed and steady."),
    ('r7', "Lover", 60, 64, 'flame', "#e11d48", "Deep passion and intimacy."),
    ('r8', "Intimate", 65, 69, 'unlock', "#ef4444", "Sharing deepest vulnerabilities."),
    ('r9', "Devoted", 70, 74, 'shield', "#dc2626", "Loyalty above all else."),
    ('r10', "Deeply In Love", 75, 79, 'heart', "#e879f9", "Consumed by affection."),
    ('r11', "Life Partner", 80, 84, 'home', "#d946ef", "Building a future together."),
    ('r12', "Soulmate", 85, 89, 'network', "#c026d3", "Destined connection."),
    ('r13', "True Love", 90, 94, 'star', "#a855f7", "Pure, unwavering love."),
    ('r14', "Eternal Vow", 95, 97, 'gem', "#9333ea", "A bond beyond lifetimes."),
    ('r15', "Twin Flames", 98, 100, 'moon', "#8b5cf6", "Two halves of the same soul."),
))

COMPLEX_TIERS = HOSTILE_TIERS + NEUTRAL_TIERS + PLATONIC_TIERS + ROMANTIC_TIERS

FALLBACK_TIER = RelationshipTier(
    'fallback', 'Unknown', 0, 0, TYPE_NEUTRAL, 'user', "#71717a", "Relationship status unavailable."
)

TIERS_BY_ID = {tier.id: tier for tier in COMPLEX_TIERS}


def applicable_tiers(is_romantic: bool, tiers: Iterable[RelationshipTier] = COMPLEX_TIERS) -> Tuple[RelationshipTier, ...]:
    """Hostile and Neutral tiers plus whichever upper path the context selects"""
    upper = TYPE_ROMANTIC if is_romantic else TYPE_PLATONIC
    return tuple(t for t in tiers if t.type in (TYPE_HOSTILE, TYPE_NEUTRAL, upper))


def find_tier(score: float, is_romantic: bool = False,
              tiers: Iterable[RelationshipTier] = COMPLEX_TIERS) -> RelationshipTier:
    """
    Resolve the tier for a score.

    Args:
        score: Relationship score, usually fractional
        is_romantic: Use the Romantic path above 30 instead of the Platonic one
        tiers: Tier catalog to search

    Returns:
        RelationshipTier: The first band containing the score; failing that the
        band whose midpoint is nearest (first one wins a tie); FALLBACK_TIER
        when no tier is eligible
    """
    eligible = applicable_tiers(is_romantic, tiers)
    for tier in eligible:
        if tier.contains(score):
            return tier

    if not eligible:
        return FALLBACK_TIER
    # min() keeps the first of equally distant tiers
    return min(eligible, key=lambda t: abs(score - t.midpoint))


def tier_progress(score: float, tier: RelationshipTier) -> float:
    """Position of the score inside the tier band, 0-100"""
    if tier.width == 0:
        return 100.0
    progress = (score - tier.min_score) / tier.width * 100
    return min(100.0, max(0.0, progress))
