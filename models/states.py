"""
Derived states produced by the analyzers.

These are recomputed from the message history on every call and never
persisted. ``to_dict`` emits the camelCase shape the chat frontend renders.
"""
from typing import Any, Dict, NamedTuple, Optional, Tuple

from models.tiers import COMPLEX_TIERS, RelationshipTier

# Psyche status labels, checked from the bottom up
STATUS_STABLE = 'Stable'
STATUS_ANXIOUS = 'Anxious'
STATUS_FRIGHTENED = 'Frightened'
STATUS_PANICKED = 'Panicked'
STATUS_BROKEN = 'Broken'

TREND_RISING = 'rising'
TREND_FALLING = 'falling'
TREND_STABLE = 'stable'

REL_TREND_IMPROVING = 'improving'
REL_TREND_DETERIORATING = 'deteriorating'
REL_TREND_STAGNANT = 'stagnant'
REL_TREND_VOLATILE = 'volatile'

NEUTRAL_PSYCHE_SCORE = 80
INITIALIZING_CONTEXT = "Initializing..."


class InternalStateResult(NamedTuple):
    """Stability impact derived from the character's own recent messages"""
    impact: float = 0
    modifier: Optional[str] = None


class PsycheState(NamedTuple):
    score: int
    status: str
    modifiers: Tuple[str, ...]
    trend: str
    emotional_intelligence: int
    recovery_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "status": self.status,
            "modifiers": list(self.modifiers),
            "trend": self.trend,
            "emotionalIntelligence": self.emotional_intelligence,
            "recoveryRate": self.recovery_rate,
        }


class RelationshipState(NamedTuple):
    score: int
    tier: RelationshipTier
    progress: float
    trend: str
    context: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "tier": self.tier.to_dict(),
            "progress": self.progress,
            "trend": self.trend,
            "context": self.context,
        }


class PsycheSummary(NamedTuple):
    stability: int
    status: str
    trend: str
    warning: Optional[str]
    emotional_intelligence: int
    recovery_rate: float
    modifiers: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stability": self.stability,
            "status": self.status,
            "trend": self.trend,
            "warning": self.warning,
            "emotionalIntelligence": self.emotional_intelligence,
            "recoveryRate": self.recovery_rate,
            "modifiers": list(self.modifiers),
        }


class DualityState(NamedTuple):
    alignment: str
    mask_integrity: str
    integrity_color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alignment": self.alignment,
            "maskIntegrity": self.mask_integrity,
            "integrityColor": self.integrity_color,
        }


class MemoryFocus(NamedTuple):
    focus: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"focus": list(self.focus)}


class NeuralProfile(NamedTuple):
    """Everything the UI shows about a character's mind for one render"""
    visual_state: str
    psyche: PsycheSummary
    social: RelationshipState
    duality: DualityState
    memory: MemoryFocus
    is_processing: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visualState": self.visual_state,
            "psyche": self.psyche.to_dict(),
            "social": self.social.to_dict(),
            "duality": self.duality.to_dict(),
            "memory": self.memory.to_dict(),
            "isProcessing": self.is_processing,
        }


def neutral_psyche_state() -> PsycheState:
    return PsycheState(
        score=NEUTRAL_PSYCHE_SCORE,
        status=STATUS_STABLE,
        modifiers=(),
        trend=TREND_STABLE,
        emotional_intelligence=50,
        recovery_rate=0.0,
    )


def initializing_relationship_state() -> RelationshipState:
    return RelationshipState(
        score=0,
        tier=COMPLEX_TIERS[0],
        progress=0,
        trend=REL_TREND_STAGNANT,
        context=INITIALIZING_CONTEXT,
    )
