#!/usr/bin/env python3
"""Non-interactive difficulty demonstration.

Plays a scripted two-and-a-half minute session on a fake clock and prints
every level transition and adaptive report as it happens.
"""

from gauntlet.difficulty import DifficultyLevel
from gauntlet.engine import DifficultyEngine
from gauntlet.events import ADAPTIVE_DIFFICULTY, DIFFICULTY_CHANGED
from gauntlet.scheduler import ManualScheduler
from gauntlet.spawning import SpawnScaler


def level_color(level: DifficultyLevel) -> str:
    """ANSI color prefix for a difficulty level."""
    colors = {
        DifficultyLevel.EASY: "\033[92m",
        DifficultyLevel.MEDIUM: "\033[93m",
        DifficultyLevel.HARD: "\033[33m",
        DifficultyLevel.NIGHTMARE: "\033[91m",
    }
    return colors.get(level, "")


RESET = "\033[0m"

# (second, event, argument)
SCRIPT = [
    (3, "score", 2),
    (8, "score", 5),
    (12, "life", None),
    (20, "score", 8),
    (34, "streak", None),
    (35, "score", 14),
    (41, "life", None),
    (42, "life", None),
    (50, "score", 22),
    (70, "streak", None),
    (75, "score", 31),
    (95, "score", 44),
    (118, "life", None),
    (140, "score", 60),
]


def main():
    print("=" * 60)
    print("  Gauntlet Difficulty Demo")
    print("=" * 60)
    print()

    clock = ManualScheduler()
    engine = DifficultyEngine(clock)
    spawner = SpawnScaler(engine)

    def on_change(event):
        print(
            f"  [{clock.now() / 1000:6.1f}s] {level_color(event.level)}"
            f"{event.previous_level.name} -> {event.level.name}{RESET}"
            f" ({event.config.display_name}, via {event.trigger.value})"
        )

    def on_report(report):
        print(
            f"  [{clock.now() / 1000:6.1f}s] adaptive: lives={report.lives_lost_rate}"
            f" rate={report.score_gain_rate:.2f}/s streaks={report.streak_frequency}"
            f" x{report.recommendation:.3f}"
        )

    engine.events.subscribe(DIFFICULTY_CHANGED, on_change)
    engine.events.subscribe(ADAPTIVE_DIFFICULTY, on_report)

    for second, kind, arg in SCRIPT:
        clock.advance(second * 1000 - clock.now())
        if kind == "score":
            engine.on_score_changed(arg)
        elif kind == "life":
            engine.on_life_lost()
        elif kind == "streak":
            engine.on_streak_achieved()

    clock.advance(150_000 - clock.now())

    stats = engine.get_difficulty_stats()
    print()
    print("-" * 60)
    print(f"  Final level:     {stats.current_level.name}")
    print(f"  Highest reached: {stats.highest_level_reached.name}")
    print(f"  Changes:         {stats.difficulty_changes}")
    print(f"  Spawn rate:      x{stats.current_multipliers['spawn_rate']:.3f}")
    print(f"  Speed:           x{stats.current_multipliers['speed']:.2f}")
    print(f"  Stroller delay:  {spawner.spawn_delay(3000):.0f}ms (base 3000ms)")
    print("-" * 60)

    engine.destroy()


if __name__ == "__main__":
    main()
