"""
Core components for the NeuroSense engine.
"""
from core.keywords import contains_any, STOP_WORDS
from core.initialization import initialize_engine

__all__ = ['contains_any', 'STOP_WORDS', 'initialize_engine']
