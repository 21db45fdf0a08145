"""
Data models for the NeuroSense engine.
"""
# Inputs
from models.character import Character, ensure_character
from models.message import Message, OutfitItem
from models.memory import SharedMemory, parse_memories, serialize_memory

# Derived states
from models.states import (
    InternalStateResult, PsycheState, RelationshipState,
    PsycheSummary, DualityState, MemoryFocus, NeuralProfile
)

# Tier catalog
from models.tiers import RelationshipTier, COMPLEX_TIERS, FALLBACK_TIER, find_tier

__all__ = [
    # Inputs
    'Character', 'ensure_character', 'Message', 'OutfitItem',
    'SharedMemory', 'parse_memories', 'serialize_memory',

    # Derived states
    'InternalStateResult', 'PsycheState', 'RelationshipState',
    'PsycheSummary', 'DualityState', 'MemoryFocus', 'NeuralProfile',

    # Tier catalog
    'RelationshipTier', 'COMPLEX_TIERS', 'FALLBACK_TIER', 'find_tier'
]
