# scripts/__init__.py
# This file makes the scripts directory a Python package

# Import the replay tool
from scripts.replay_session import replay_session

__all__ = ['replay_session']
