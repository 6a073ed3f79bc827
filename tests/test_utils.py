#!/usr/bin/env python3
"""
Foundation tests for SoundCue

Tests that the small building blocks work on their own:
- utils: RNG streams and validators
- core: Clocks
- output: Debug logger

Run from the repository root:
    python tests/test_utils.py
"""

import sys
import os
import io
import json

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), '..'))

from soundcue.utils import (
    SeededRNG, RNGManager, ValidationError, clamp, validate_choice, validate_range,
    validate_volume,
)
from soundcue.core import ManualClock, SystemClock
from soundcue.output import DebugLogger, LogLevel, create_null_logger


def test_rng():
    """Test random number generation."""
    print("\n=== Testing RNG ===")

    # Seeded reproducibility
    rng1 = SeededRNG(seed=42)
    rng2 = SeededRNG(seed=42)
    v1 = [rng1.choice(["a", "b", "c", "d"]) for _ in range(20)]
    v2 = [rng2.choice(["a", "b", "c", "d"]) for _ in range(20)]
    assert v1 == v2, "Seeded RNG not reproducible"
    print("  ✓ Seeded reproducibility")

    # Reset replays the sequence
    rng1.reset()
    assert [rng1.choice(["a", "b", "c", "d"]) for _ in range(20)] == v1, "reset failed"
    assert rng1.call_count == 20, f"call_count wrong: {rng1.call_count}"
    print("  ✓ reset / call_count")

    # State round-trip
    rng = SeededRNG(seed=7)
    rng.randint(0, 100)
    saved = rng.get_state()
    ahead = [rng.randint(0, 100) for _ in range(5)]
    rng.set_state(saved)
    assert [rng.randint(0, 100) for _ in range(5)] == ahead, "set_state failed"
    print("  ✓ get_state / set_state")

    # Empty choice raises
    try:
        SeededRNG(seed=1).choice([])
        assert False, "choice([]) should raise"
    except IndexError:
        pass
    print("  ✓ empty choice")

    # RNG manager
    manager = RNGManager(master_seed=42)
    packs = manager.get('packs')
    sounds = manager.get('sounds')
    assert packs.seed != sounds.seed, "RNG streams should have different seeds"
    assert manager.get('packs') is packs, "streams should be cached"
    again = RNGManager(master_seed=42)
    assert again.get('packs').seed == packs.seed, "derived seeds not reproducible"
    print("  ✓ RNGManager")

    print("  All RNG tests passed!")


def test_validators():
    """Test command-input validation."""
    print("\n=== Testing Validators ===")

    assert clamp(1.5, 0.0, 1.0) == 1.0, "clamp high failed"
    assert clamp(-0.5, 0.0, 1.0) == 0.0, "clamp low failed"
    assert clamp(0.5, 0.0, 1.0) == 0.5, "clamp middle failed"
    print("  ✓ clamp")

    assert validate_range(5, 0, 10) == 5
    try:
        validate_range(11, 0, 10, field="level")
        assert False, "out of range should raise"
    except ValidationError as e:
        assert e.field == "level", f"wrong field: {e.field}"
        assert str(e).startswith("level: "), f"wrong message: {e}"
    print("  ✓ validate_range")

    assert validate_volume("0.25") == 0.25, "numeric string rejected"
    assert validate_volume(1) == 1.0, "int rejected"
    for bad in ("x", None, True, 2):
        try:
            validate_volume(bad)
            assert False, f"{bad!r} should be rejected"
        except ValidationError:
            pass
    print("  ✓ validate_volume")

    assert validate_choice("pause", ["pause", "resume"]) == "pause"
    try:
        validate_choice("mute", ["pause", "resume"], field="action")
        assert False, "unknown choice should raise"
    except ValidationError as e:
        assert "pause, resume" in str(e), f"choices missing: {e}"
    print("  ✓ validate_choice")

    print("  All validator tests passed!")


def test_clock():
    """Test time sources."""
    print("\n=== Testing Clock ===")

    clock = ManualClock(current_time=100.0)
    assert clock.now() == 100.0
    assert clock.advance(2.5) == 102.5
    clock.set(50.0)
    assert clock.now() == 50.0
    try:
        clock.advance(-1)
        assert False, "negative advance should raise"
    except ValueError:
        pass
    print("  ✓ ManualClock")

    system = SystemClock()
    assert system.now() > 1_000_000_000, "system clock not epoch seconds"
    print("  ✓ SystemClock")

    print("  All clock tests passed!")


def test_debug_logger():
    """Test the structured logger."""
    print("\n=== Testing Debug Logger ===")

    stream = io.StringIO()
    logger = DebugLogger(level=LogLevel.DEBUG, output=stream)
    logger.debug("engine", "classified", category="greeting")
    logger.warning("config", "fell back to defaults")
    logger.log_cue("peon", "greeting", "hello.wav", 0.5)
    assert logger.count == 3, f"wrong entry count: {logger.count}"
    assert len(logger.get_warnings()) == 1
    assert logger.get_by_category("sound")[0].data["volume"] == "0.50"
    assert "PLAY peon/hello.wav" in stream.getvalue(), "console output missing"
    print("  ✓ Levels and output")

    entry = logger.get_by_category("engine")[0]
    assert entry.category == "engine", f"category field overwritten: {entry.category}"
    assert entry.data == {"category": "greeting"}, f"data field lost: {entry.data}"
    print("  ✓ category as a data field")

    data = json.loads(logger.to_json())
    assert len(data) == 3, "to_json failed"
    logger.clear()
    assert logger.count == 0
    assert logger, "an empty logger must still be truthy"
    print("  ✓ Query / export / clear")

    small = DebugLogger(level=LogLevel.INFO, max_entries=2)
    for i in range(5):
        small.info("engine", f"msg {i}")
    assert [e.message for e in small.get_entries()] == ["msg 3", "msg 4"], "max_entries failed"
    print("  ✓ max_entries")

    quiet = create_null_logger()
    quiet.info("engine", "dropped")
    quiet.error("engine", "kept")
    assert quiet.count == 1, "null logger should keep only warnings and errors"
    print("  ✓ create_null_logger")

    print("  All logger tests passed!")


def main():
    """Run all foundation tests."""
    print("=" * 60)
    print("SoundCue - Foundation Tests")
    print("=" * 60)

    try:
        test_rng()
        test_validators()
        test_clock()
        test_debug_logger()

        print("\n" + "=" * 60)
        print("ALL FOUNDATION TESTS PASSED!")
        print("=" * 60)
        return 0

    except AssertionError as e:
        print(f"\n✗ TEST FAILED: {e}")
        return 1
    except Exception as e:
        print(f"\n✗ ERROR: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
