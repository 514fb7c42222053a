"""Tests for personal bests and athlete statistics."""

from collections.abc import Callable
from datetime import date

from swimtimes.identity.store import IdentityStore
from swimtimes.models.athlete import Athlete
from swimtimes.models.snapshot import Snapshot
from swimtimes.models.swim_time import PoolLength, Stroke, SwimTime
from swimtimes.services.stats import RECENT_TIMES_LIMIT, athlete_stats, personal_bests


class TestPersonalBests:
    """Tests for personal_bests function."""

    def test_fastest_per_event(self, make_swim_time: Callable[..., SwimTime]):
        """Only the fastest time of each event is kept."""
        times = [
            make_swim_time("Ann Lee", id="slow", measured_time="1:05.00"),
            make_swim_time("Ann Lee", id="fast", measured_time="59.80"),
            make_swim_time("Ann Lee", id="mid", measured_time="1:00.10"),
        ]

        bests = personal_bests(times)

        assert [b.id for b in bests] == ["fast"]

    def test_events_kept_apart(self, make_swim_time: Callable[..., SwimTime]):
        """Stroke, distance and pool length each define a separate event."""
        times = [
            make_swim_time("Ann Lee", id="base"),
            make_swim_time("Ann Lee", id="stroke", stroke=Stroke.BUTTERFLY),
            make_swim_time("Ann Lee", id="distance", distance=200),
            make_swim_time("Ann Lee", id="pool", pool_length=PoolLength.LCM),
        ]

        bests = personal_bests(times)

        assert [b.id for b in bests] == ["base", "stroke", "distance", "pool"]

    def test_athletes_kept_apart(self, make_swim_time: Callable[..., SwimTime]):
        times = [
            make_swim_time("Ann Lee", id="ann", measured_time="58.00"),
            make_swim_time("Bob Stone", id="bob", measured_time="1:10.00"),
        ]

        assert {b.id for b in personal_bests(times)} == {"ann", "bob"}

    def test_first_wins_on_tie(self, make_swim_time: Callable[..., SwimTime]):
        times = [
            make_swim_time("Ann Lee", id="first"),
            make_swim_time("Ann Lee", id="second"),
        ]

        assert [b.id for b in personal_bests(times)] == ["first"]

    def test_empty(self):
        assert personal_bests([]) == []


class TestAthleteStats:
    """Tests for athlete_stats function."""

    def test_stats_per_athlete(self, make_swim_time: Callable[..., SwimTime]):
        store = IdentityStore(
            Snapshot(
                athletes=[
                    Athlete(canonical_name="bob Stone"),
                    Athlete(canonical_name="Ann Lee", aliases=["A.Lee"]),
                    Athlete(canonical_name="Cara Diaz"),
                ],
                swim_times=[
                    make_swim_time(
                        "Ann Lee", id="old", swim_date=date(2023, 1, 1)
                    ),
                    make_swim_time(
                        "Ann Lee",
                        id="new",
                        swim_date=date(2024, 1, 1),
                        measured_time="1:00.00",
                    ),
                    make_swim_time("bob Stone", id="bob"),
                ],
            )
        )

        stats = athlete_stats(store)

        assert [s.name for s in stats] == ["Ann Lee", "bob Stone", "Cara Diaz"]
        ann = stats[0]
        assert ann.aliases == ["A.Lee"]
        assert ann.total_times == 2
        assert [t.id for t in ann.recent_times] == ["new", "old"]
        assert [t.id for t in ann.personal_bests] == ["new"]
        assert stats[2].total_times == 0
        assert stats[2].personal_bests == []

    def test_recent_times_limited(self, make_swim_time: Callable[..., SwimTime]):
        store = IdentityStore(
            Snapshot(
                athletes=[Athlete(canonical_name="Ann Lee")],
                swim_times=[
                    make_swim_time("Ann Lee", swim_date=date(2024, 1, day))
                    for day in range(1, RECENT_TIMES_LIMIT + 6)
                ],
            )
        )

        ann = athlete_stats(store)[0]

        assert ann.total_times == RECENT_TIMES_LIMIT + 5
        assert len(ann.recent_times) == RECENT_TIMES_LIMIT
        assert ann.recent_times[0].swim_date == date(2024, 1, RECENT_TIMES_LIMIT + 5)
