"""Level thresholds and titles shown on progression responses.

``xp_required`` is cumulative total XP. Levels between two entries carry
the title of the lower one.
"""

from __future__ import annotations

LEVEL_THRESHOLDS: list[dict] = [
    {"level": 1, "title": "Recruit", "xp_required": 0},
    {"level": 2, "title": "Private", "xp_required": 500},
    {"level": 3, "title": "Private First Class", "xp_required": 1200},
    {"level": 4, "title": "Corporal", "xp_required": 2000},
    {"level": 5, "title": "Sergeant", "xp_required": 3000},
    {"level": 10, "title": "Staff Sergeant", "xp_required": 10000},
    {"level": 15, "title": "Master Sergeant", "xp_required": 25000},
    {"level": 20, "title": "First Sergeant", "xp_required": 50000},
    {"level": 25, "title": "Sergeant Major", "xp_required": 85000},
    {"level": 30, "title": "Second Lieutenant", "xp_required": 130000},
    {"level": 40, "title": "First Lieutenant", "xp_required": 250000},
    {"level": 50, "title": "Captain", "xp_required": 400000},
    {"level": 60, "title": "Major", "xp_required": 600000},
    {"level": 70, "title": "Lieutenant Colonel", "xp_required": 850000},
    {"level": 80, "title": "Colonel", "xp_required": 1150000},
    {"level": 90, "title": "Brigadier General", "xp_required": 1500000},
    {"level": 100, "title": "General", "xp_required": 2000000},
]


def level_info(level: int) -> dict:
    """Title of a level and the next titled threshold above it.

    Levels between thresholds carry the title of the highest threshold at or
    below them. At the top threshold, ``next_level`` repeats the current one.
    """
    current = LEVEL_THRESHOLDS[0]
    next_level = LEVEL_THRESHOLDS[-1]

    for threshold in LEVEL_THRESHOLDS:
        if threshold["level"] <= level:
            current = threshold
        else:
            next_level = threshold
            break

    return {
        "title": current["title"],
        "next_level": next_level["level"],
        "next_title": next_level["title"],
        "next_level_xp": next_level["xp_required"],
    }
