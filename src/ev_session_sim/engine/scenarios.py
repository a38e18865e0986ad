"""Scenario narrative classifier.

Maps (charging speed, time spent, starting SoC) to one descriptive sentence
via an ordered rule table: the first rule whose guard matches produces the
text. Ranges overlap on purpose, so the order of ``SCENARIO_RULES`` decides
the output (a critically low battery beats a quick DC stop, and so on).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

# ═══════════════════════════════════════════════════════════════════════════
# Narratives
# ═══════════════════════════════════════════════════════════════════════════

EMERGENCY_HIGHWAY = (
    "Emergency charge! You pushed your range a bit too far on a road trip and made a quick stop "
    "at a highway fast charger to get enough juice to reach your destination. 😅"
)
EMERGENCY_NEARBY = (
    "Running on fumes! You found a nearby charging station just in time and are getting enough "
    "charge to make it home or to your next stop. 🔋"
)
EMERGENCY_ANY_STATION = (
    "Battery was critically low, but you're charging up at whatever station you could find. "
    "Time to grab a meal and relax while the battery recovers. 🍔"
)
QUICK_PIT_STOP = (
    "Quick pit stop on a road trip! You're topping up at a highway fast charger while grabbing "
    "coffee and using the restroom. ☕"
)
STRATEGIC_TOP_UP = (
    "Strategic top-up during a grocery run or errand. Fast charging makes this quick and convenient! 🛒"
)
ROAD_TRIP_MEAL = (
    "Perfect charging break during a road trip. Time for a sit-down meal at a nearby restaurant "
    "while the car charges to 80%. 🍽️"
)
COFFEE_OR_MOVIE = (
    "Enjoying a leisurely coffee shop visit or catching a movie while your EV charges. "
    "The perfect excuse to take a break! ☕🎬"
)
SHOPPING_DAY = (
    "Shopping day! Your car is charging at the mall or shopping center while you browse stores "
    "with friends and family. 🛍️"
)
WORK_OR_VISIT = (
    "Charging at work or during a long visit with family/friends. Your EV will be fully charged "
    "and ready when you're done for the day. 💼👨‍👩‍👧‍👦"
)
HOME_AFTER_ROAD_TRIP = (
    "Home from a long road trip! Plugging in overnight to fully recover the battery for the week "
    "ahead. Sweet dreams! 😴🌙"
)
OVERNIGHT_HOME = (
    "Typical overnight home charging. You'll wake up to a full battery, ready for whatever the day "
    "brings. Perfect for daily commuting! 🏠🌅"
)
OVERNIGHT_LEVEL2 = (
    "Overnight charging at home with Level 2. Your EV will be topped off and ready for a full day "
    "of driving or that weekend road trip! 🚗💨"
)
OPPORTUNISTIC = (
    "Quick opportunistic charge while running a short errand. Every little bit helps add some "
    "extra range! 🎯"
)
EXTENDED_SESSION = (
    "Extended charging session, likely overnight or during a full workday. Your battery will be "
    "completely refreshed and ready for maximum range! 🔋✨"
)
FAST_SESSION = (
    "Fast charging session. Perfect for a quick break during longer trips or when you need to add "
    "range in a hurry. ⚡"
)
MODERATE_SESSION = (
    "Moderate-speed charging while taking care of errands, shopping, or grabbing a bite to eat. 🍕"
)
DESTINATION_LEVEL2 = (
    "Level 2 charging during a longer activity. Great for destination charging at hotels, "
    "restaurants, or entertainment venues. 🏨"
)
TRICKLE_LEVEL1 = (
    "Trickle charging with Level 1. Slow but steady - perfect for when you have plenty of time and "
    "just need to maintain or slowly build up your charge. 🐌"
)


# ═══════════════════════════════════════════════════════════════════════════
# Rule table
# ═══════════════════════════════════════════════════════════════════════════

Guard = Callable[[float, float, float], bool]
"""(speed_kw, hours, soc_pct) → matches?"""


@dataclass(frozen=True)
class ScenarioRule:
    """One row of the classifier: a guard plus the text it produces."""

    name: str
    applies: Guard
    describe: Callable[[float, float, float], str]


def _by_speed(speed: float, *, fast: str, moderate: str, slow: str) -> str:
    if speed >= 150:
        return fast
    if speed >= 50:
        return moderate
    return slow


SCENARIO_RULES: tuple[ScenarioRule, ...] = (
    ScenarioRule(
        "critical_battery",
        lambda speed, hours, soc: soc < 10,
        lambda speed, hours, soc: _by_speed(
            speed,
            fast=EMERGENCY_HIGHWAY, moderate=EMERGENCY_NEARBY, slow=EMERGENCY_ANY_STATION,
        ),
    ),
    ScenarioRule(
        "quick_dcfc_stop",
        lambda speed, hours, soc: hours < 0.5 and speed >= 150,
        lambda speed, hours, soc: QUICK_PIT_STOP if soc < 30 else STRATEGIC_TOP_UP,
    ),
    ScenarioRule(
        "medium_dcfc_stop",
        lambda speed, hours, soc: 0.5 <= hours <= 1.5 and speed >= 100,
        lambda speed, hours, soc: ROAD_TRIP_MEAL,
    ),
    ScenarioRule(
        "level2_outing",
        lambda speed, hours, soc: 1.5 <= hours <= 4 and 15 <= speed < 50,
        lambda speed, hours, soc: COFFEE_OR_MOVIE if hours <= 2.5 else SHOPPING_DAY,
    ),
    ScenarioRule(
        "level2_long_stay",
        lambda speed, hours, soc: 4 <= hours <= 8 and 10 <= speed < 50,
        lambda speed, hours, soc: WORK_OR_VISIT,
    ),
    ScenarioRule(
        "overnight_slow",
        lambda speed, hours, soc: hours >= 6 and speed < 25,
        lambda speed, hours, soc: HOME_AFTER_ROAD_TRIP if soc < 20 else OVERNIGHT_HOME,
    ),
    ScenarioRule(
        "overnight_level2",
        lambda speed, hours, soc: hours >= 6 and 25 <= speed < 50,
        lambda speed, hours, soc: OVERNIGHT_LEVEL2,
    ),
    ScenarioRule(
        "short_slow_stop",
        lambda speed, hours, soc: hours < 0.5 and speed < 50,
        lambda speed, hours, soc: OPPORTUNISTIC,
    ),
    ScenarioRule(
        "extended_session",
        lambda speed, hours, soc: hours >= 8,
        lambda speed, hours, soc: EXTENDED_SESSION,
    ),
    ScenarioRule(
        "speed_fallback",
        lambda speed, hours, soc: True,
        lambda speed, hours, soc: (
            FAST_SESSION if speed >= 150
            else MODERATE_SESSION if speed >= 50
            else DESTINATION_LEVEL2 if speed >= 10
            else TRICKLE_LEVEL1
        ),
    ),
)


def match_scenario_rule(
    charging_speed_kw: float,
    time_spent_hours: float,
    starting_soc_pct: float,
) -> ScenarioRule:
    """First rule in ``SCENARIO_RULES`` whose guard matches."""
    for rule in SCENARIO_RULES:
        if rule.applies(charging_speed_kw, time_spent_hours, starting_soc_pct):
            return rule
    raise RuntimeError("scenario rule table has no catch-all rule")


def describe_scenario(
    charging_speed_kw: float,
    time_spent_hours: float,
    starting_soc_pct: float,
) -> str:
    """One-sentence story of what the driver is doing during this session."""
    rule = match_scenario_rule(charging_speed_kw, time_spent_hours, starting_soc_pct)
    return rule.describe(charging_speed_kw, time_spent_hours, starting_soc_pct)
