"""
Analyzer modules for the NeuroSense engine.
"""
# Analyzers
from managers.engram import EngramContext, analyze_active_engrams
from managers.internal_state import analyze_internal_state
from managers.psyche import analyze_psyche, calculate_eq, calculate_scenario_impact
from managers.relationship import analyze_relationship, get_starting_params

# Composition root
from managers.profile_engine import ProfileEngine, compute_neural_profile, engine_for

__all__ = [
    # Analyzers
    'EngramContext', 'analyze_active_engrams',
    'analyze_internal_state',
    'analyze_psyche', 'calculate_eq', 'calculate_scenario_impact',
    'analyze_relationship', 'get_starting_params',

    # Composition root
    'ProfileEngine', 'compute_neural_profile', 'engine_for'
]
