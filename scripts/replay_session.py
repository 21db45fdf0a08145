"""
Replay a saved chat session through the NeuroSense engine.

Prints the neural profile as JSON, either once for the whole session or once
per message prefix with --step.
"""
import os
import sys
import json
import argparse
from pathlib import Path

# Add project root to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import ENGINE_CONFIG, PERFORMANCE_CONFIG
from managers.profile_engine import ProfileEngine
from models.character import Character
from models.message import Message, OutfitItem
from utils.logging_helper import get_logger, setup_logging
from utils.memory_monitor import force_garbage_collection, log_memory_usage, monitor_memory_threshold
from utils.performance_utils import PerformanceMonitor, performance_timer

replay_monitor = PerformanceMonitor()


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Replay a saved chat session through the NeuroSense engine')
    parser.add_argument('session', type=str,
                        help='Session JSON file (messages, virtualTime, optional outfits and character)')
    parser.add_argument('--character', type=str, default=None,
                        help='Character JSON file (default: the "character" entry of the session)')
    parser.add_argument('--user-name', type=str, default=None,
                        help=f'User name for identity engrams (default: {ENGINE_CONFIG["DEFAULT_USER_NAME"]})')
    parser.add_argument('--step', action='store_true',
                        help='Print one profile per message instead of only the final one')
    parser.add_argument('--output', type=str, default=None,
                        help='Write the JSON to this file instead of stdout')
    return parser.parse_args(argv)


@performance_timer("replay.load_json", monitor=replay_monitor)
def load_json(path):
    """Load a JSON document from disk"""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def session_virtual_time(session, messages):
    """Session clock, falling back to the newest message timestamp"""
    virtual_time = session.get("virtualTime")
    if isinstance(virtual_time, (int, float)) and not isinstance(virtual_time, bool):
        return virtual_time
    return messages[-1].timestamp if messages else 0


def replay_session(session, character_data=None, user_name=None, step=False):
    """
    Run a session through a fresh profile engine

    Args:
        session: Parsed session mapping
        character_data: Character mapping; defaults to ``session["character"]``
        user_name: User name for identity engrams
        step: Produce one profile per message prefix

    Returns:
        list: Profile dicts, one per step (a single entry without ``step``)
    """
    if character_data is None:
        character_data = session.get("character")
    if not isinstance(character_data, dict):
        raise ValueError("No character found; pass --character or embed one in the session")

    character = Character.from_dict(character_data)
    messages = [Message.from_dict(m) for m in session.get("messages", [])]
    outfits = [OutfitItem.from_dict(o) for o in session.get("outfits", [])]
    final_time = session_virtual_time(session, messages)

    settings = {"userName": user_name or ENGINE_CONFIG["DEFAULT_USER_NAME"]}
    engine = ProfileEngine(settings_provider=lambda: settings)

    if step:
        prefixes = [messages[:i] for i in range(1, len(messages) + 1)] or [[]]
    else:
        prefixes = [messages]

    logger = get_logger()
    logger.debug(f"Replaying {len(messages)} message(s) for {character.name or character.id} in {len(prefixes)} step(s)")

    profiles = []
    for prefix in prefixes:
        virtual_time = prefix[-1].timestamp if (step and prefix) else final_time
        replay_monitor.start_timer("replay.profile")
        profile = engine.compute(character, prefix, outfits, virtual_time)
        replay_monitor.end_timer("replay.profile")
        profiles.append(profile.to_dict())

    return profiles


def collect_garbage(logger):
    """Run a full collection and report how much it freed"""
    collected = force_garbage_collection()
    logger.info(f"Garbage collection freed {collected} objects")
    return collected


def main(argv=None):
    args = parse_args(argv)
    logger = setup_logging(log_to_file=False)

    session_path = Path(args.session)
    logger.info(f"Replaying session {session_path}")
    log_memory_usage(logger, "Before replay")

    session = load_json(session_path)
    character_data = load_json(args.character) if args.character else None

    try:
        profiles = replay_session(session, character_data, user_name=args.user_name, step=args.step)
    except ValueError as e:
        logger.error(str(e))
        return 1

    output = json.dumps(profiles if args.step else profiles[0], indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding='utf-8')
        logger.info(f"Wrote profile(s) to {args.output}")
    else:
        print(output)

    stats = replay_monitor.get_stats("replay.profile")
    if stats:
        logger.info(f"Computed {stats['count']} profile(s), avg {stats['avg'] * 1000:.2f} ms, "
                    f"max {stats['max'] * 1000:.2f} ms")
    log_memory_usage(logger, "After replay")
    monitor_memory_threshold(logger, PERFORMANCE_CONFIG["MEMORY_THRESHOLD_MB"],
                             on_exceeded=lambda: collect_garbage(logger))
    return 0


if __name__ == "__main__":
    sys.exit(main())
