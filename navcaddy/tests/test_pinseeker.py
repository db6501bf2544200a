from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest
from pydantic import ValidationError

from navcaddy.bag.models import BagProfile, Club, ClubType
from navcaddy.caddie import (
    CourseHole,
    HazardLocation,
    HazardType,
    HazardZone,
    PinPosition,
    PinSeekerEngine,
    compute_strategy,
)
from navcaddy.errors import InvalidArgument
from navcaddy.memory.aggregator import aggregate_shots
from navcaddy.memory.models import MissDirection, MissPattern
from navcaddy.memory.store import MissPatternStore
from navcaddy.readiness import ReadinessScore, ReadinessSource
from navcaddy.repositories import (
    InMemoryBagRepository,
    InMemoryPatternRepository,
    InMemoryShotRepository,
    PatternRepository,
)

from .conftest import NOW


def _readiness(overall: int) -> ReadinessScore:
    return ReadinessScore(overall=overall, timestamp=NOW, source=ReadinessSource.MANUAL_ENTRY)


def _hazard(kind: HazardType, side: str, *misses: MissDirection) -> HazardZone:
    return HazardZone(
        type=kind,
        location=HazardLocation(side=side, distance_range=(180, 240)),
        penalty_strokes=1.0,
        affected_misses=list(misses),
    )


def _pattern(direction: MissDirection, confidence: float, days_ago: float) -> MissPattern:
    return MissPattern(
        id=f"{direction.value}-{days_ago}",
        direction=direction,
        frequency=4,
        confidence=confidence,
        last_occurrence=NOW - timedelta(days=days_ago),
    )


def _hole(par: int = 4, length: int = 360, hazards=()) -> CourseHole:
    return CourseHole(number=7, par=par, length_meters=length, hazards=list(hazards))


def _strategy(hole=None, handicap=9, readiness=80, patterns=(), clubs=None):
    return compute_strategy(
        hole or _hole(),
        handicap,
        _readiness(readiness),
        list(patterns),
        clubs or {},
        NOW,
    )


def test_safety_margin_scales_with_readiness() -> None:
    assert _strategy(handicap=9, readiness=80).recommended_landing_zone.safety_margin == 18
    assert _strategy(handicap=9, readiness=40).recommended_landing_zone.safety_margin == 36
    medium = _strategy(handicap=9, readiness=50).recommended_landing_zone.safety_margin
    assert 18 < medium < 36


def test_negative_handicap_rejected() -> None:
    with pytest.raises(InvalidArgument):
        _strategy(handicap=-1)


def test_defaults_to_straight_without_patterns() -> None:
    strategy = _strategy()
    zone = strategy.recommended_landing_zone
    assert strategy.personalized_for.dominant_miss is MissDirection.STRAIGHT
    assert zone.target_line == 180
    assert zone.visual_cue == "Aim center of fairway"
    assert strategy.personalized_for.club_distances == {}


def test_recent_pattern_beats_older_stronger_one() -> None:
    patterns = [
        _pattern(MissDirection.SLICE, 0.8, 30),
        _pattern(MissDirection.HOOK, 0.5, 1),
    ]
    strategy = _strategy(patterns=patterns)
    assert strategy.personalized_for.dominant_miss is MissDirection.HOOK


def test_slice_aims_left_and_hook_aims_right() -> None:
    slice_zone = _strategy(patterns=[_pattern(MissDirection.SLICE, 0.5, 1)])
    hook_zone = _strategy(patterns=[_pattern(MissDirection.HOOK, 0.5, 1)])

    assert slice_zone.recommended_landing_zone.target_line < 180
    assert "left" in slice_zone.recommended_landing_zone.visual_cue.lower()
    assert hook_zone.recommended_landing_zone.target_line > 180
    assert "right" in hook_zone.recommended_landing_zone.visual_cue.lower()


def test_par_three_cue_still_names_bias() -> None:
    strategy = _strategy(
        hole=_hole(par=3, length=150), patterns=[_pattern(MissDirection.SLICE, 0.5, 1)]
    )
    assert strategy.recommended_landing_zone.ideal_distance == 150
    assert "left" in strategy.recommended_landing_zone.visual_cue


def test_ideal_distance_by_par() -> None:
    assert _strategy(hole=_hole(par=4, length=360)).recommended_landing_zone.ideal_distance == 252
    assert _strategy(hole=_hole(par=5, length=505)).recommended_landing_zone.ideal_distance == 353


def test_danger_zones_follow_dominant_miss() -> None:
    hazards = [
        _hazard(HazardType.WATER, "right", MissDirection.SLICE),
        _hazard(HazardType.BUNKER, "left", MissDirection.HOOK),
        _hazard(HazardType.OB, "right", MissDirection.SLICE, MissDirection.PUSH),
    ]
    strategy = _strategy(
        hole=_hole(hazards=hazards), patterns=[_pattern(MissDirection.SLICE, 0.5, 1)]
    )

    assert len(strategy.danger_zones) == 2
    assert all(MissDirection.SLICE in z.affected_misses for z in strategy.danger_zones)
    assert "right hazards" in strategy.recommended_landing_zone.visual_cue


def test_risk_callouts_are_ranked_and_capped() -> None:
    hazards = [
        _hazard(HazardType.BUNKER, "right", MissDirection.SLICE),
        _hazard(HazardType.TREES, "right", MissDirection.SLICE),
        _hazard(HazardType.WATER, "right", MissDirection.SLICE),
        _hazard(HazardType.PENALTY_ROUGH, "right", MissDirection.SLICE),
        _hazard(HazardType.OB, "right", MissDirection.SLICE),
    ]
    strategy = _strategy(
        hole=_hole(hazards=hazards), patterns=[_pattern(MissDirection.SLICE, 0.5, 1)]
    )
    callouts = strategy.risk_callouts

    assert len(callouts) == 3
    assert "water" in callouts[0].lower()
    assert "OB" in callouts[1]
    assert "bunker" in callouts[2].lower()
    assert all("slice" in callout.lower() for callout in callouts)


def test_no_callouts_for_unaffected_hazards() -> None:
    hazards = [_hazard(HazardType.WATER, "left", MissDirection.HOOK)]
    strategy = _strategy(
        hole=_hole(hazards=hazards), patterns=[_pattern(MissDirection.SLICE, 0.5, 1)]
    )
    assert strategy.danger_zones == []
    assert strategy.risk_callouts == []


def test_hole_and_pin_validation() -> None:
    with pytest.raises(ValidationError):
        CourseHole(number=1, par=6, length_meters=400)
    with pytest.raises(ValidationError):
        HazardLocation(side="behind", distance_range=(0, 10))
    with pytest.raises(ValidationError):
        HazardLocation(side="left", distance_range=(50, 10))
    with pytest.raises(ValidationError):
        PinPosition(left=True)
    assert PinPosition(back=True, right=True).describe() == "Back right"


def test_end_to_end_slice_strategy(make_shot) -> None:
    shots = [make_shot(MissDirection.SLICE, days_ago=2) for _ in range(4)]
    shots += [make_shot(days_ago=1) for _ in range(6)]
    patterns = aggregate_shots(shots, NOW)

    strategy = _strategy(hole=_hole(par=4, length=360), handicap=9, readiness=62, patterns=patterns)
    zone = strategy.recommended_landing_zone

    assert strategy.personalized_for.dominant_miss is MissDirection.SLICE
    assert zone.ideal_distance == 252
    assert zone.safety_margin == 18
    assert zone.target_line < 180
    assert strategy.personalized_for.readiness_score == 62


class _BrokenPatterns(PatternRepository):
    async def get_miss_patterns(self):
        raise RuntimeError("storage offline")

    async def update_pattern(self, pattern):
        raise RuntimeError("storage offline")

    async def delete_stale_patterns(self):
        raise RuntimeError("storage offline")


def test_engine_reads_patterns_and_active_bag(clock) -> None:
    patterns = InMemoryPatternRepository(clock=clock)
    asyncio.run(patterns.update_pattern(_pattern(MissDirection.HOOK, 0.6, 2)))
    bags = InMemoryBagRepository()
    bags.add_bag(
        BagProfile(id="bag-1", name="Main"),
        [
            Club(id="7i", name="7-iron", type=ClubType.IRON, estimated_carry=150),
            Club(id="pw", name="PW", type=ClubType.WEDGE, estimated_carry=120),
        ],
    )
    engine = PinSeekerEngine(patterns, bags, clock=clock)

    strategy = asyncio.run(engine.compute_strategy(_hole(), 12, _readiness(75)))

    assert strategy.personalized_for.dominant_miss is MissDirection.HOOK
    assert strategy.personalized_for.club_distances == {"7-iron": 150, "PW": 120}
    assert strategy.recommended_landing_zone.safety_margin == 24


def test_engine_degrades_when_collaborators_fail(clock) -> None:
    engine = PinSeekerEngine(_BrokenPatterns(), InMemoryBagRepository(), clock=clock)
    strategy = asyncio.run(engine.compute_strategy(_hole(), 10, _readiness(90)))
    assert strategy.personalized_for.dominant_miss is MissDirection.STRAIGHT
    assert strategy.personalized_for.club_distances == {}


def test_engine_keeps_aggregated_ranking_after_save(clock, make_shot) -> None:
    shot_repo = InMemoryShotRepository(clock=clock)
    pattern_repo = InMemoryPatternRepository(clock=clock)
    store = MissPatternStore(shot_repo, pattern_repo, clock=clock)
    shots = [make_shot(MissDirection.SLICE, days_ago=10) for _ in range(6)]
    shots += [make_shot(MissDirection.HOOK) for _ in range(3)]
    shots.append(make_shot())
    for shot in shots:
        asyncio.run(store.record_miss(shot))

    refreshed = asyncio.run(store.refresh())
    assert [p.direction for p in refreshed] == [MissDirection.SLICE, MissDirection.HOOK]

    engine = PinSeekerEngine(pattern_repo, InMemoryBagRepository(), clock=clock)
    strategy = asyncio.run(engine.compute_strategy(_hole(), 10, _readiness(80)))

    assert strategy.personalized_for.dominant_miss is MissDirection.SLICE
    assert strategy.recommended_landing_zone.target_line == 170
