"""Belief tracking: staleness, direct sightings and relayed sightings."""

from hypothesis import given
from hypothesis import strategies as st

from mazechase.comms import Messenger
from mazechase.config import BeliefConfig
from mazechase.constants import UNKNOWN_POSITION, UNKNOWN_TICK
from mazechase.env import BeliefState, BeliefTracker

NO_SIGHTING = UNKNOWN_POSITION


def make_tracker(threshold: int = 5, agent_id: str = "pursuer_0") -> BeliefTracker:
    return BeliefTracker(agent_id, BeliefConfig(tick_threshold=threshold))


class TestStaleness:
    def test_belief_survives_until_threshold(self):
        tracker = make_tracker(threshold=5)
        tracker.observe(0, 42, current_tick=10)

        assert tracker.observe(0, NO_SIGHTING, current_tick=14).position == 42
        belief = tracker.observe(0, NO_SIGHTING, current_tick=16)
        assert belief.position == UNKNOWN_POSITION
        assert belief.tick_observed == UNKNOWN_TICK

    def test_level_start_clears_belief(self):
        tracker = make_tracker(threshold=50)
        tracker.observe(0, 42, current_tick=40)
        # New level: the tick counter restarts
        assert not tracker.observe(0, NO_SIGHTING, current_tick=1).is_known

    def test_no_evidence_is_unknown(self):
        tracker = make_tracker()
        belief = tracker.observe(0, NO_SIGHTING, current_tick=7, messenger=Messenger())
        assert belief == BeliefState()
        assert not belief.is_known

    @given(
        seen_at=st.integers(min_value=3, max_value=100),
        gap=st.integers(min_value=0, max_value=60),
        threshold=st.integers(min_value=1, max_value=50),
    )
    def test_stale_beliefs_are_dropped(self, seen_at, gap, threshold):
        tracker = make_tracker(threshold=threshold)
        tracker.observe(0, 17, current_tick=seen_at)
        belief = tracker.observe(0, NO_SIGHTING, current_tick=seen_at + gap)
        assert belief.is_known == (gap < threshold)


class TestDirectSighting:
    def test_direct_sighting_overrides_and_is_published(self):
        m = Messenger()
        tracker = make_tracker()
        tracker.observe(0, 10, current_tick=5, messenger=m)
        belief = tracker.observe(0, 11, current_tick=6, messenger=m)

        assert belief == BeliefState(position=11, tick_observed=6)
        msgs = m.read("pursuer_1")
        assert [(msg.sender, msg.position, msg.tick) for msg in msgs] == [
            ("pursuer_0", 10, 5),
            ("pursuer_0", 11, 6),
        ]

    def test_direct_sighting_beats_newer_relayed_message(self):
        m = Messenger()
        m.publish("pursuer_1", 99, tick=8)
        tracker = make_tracker()
        assert tracker.observe(0, 12, current_tick=9, messenger=m).position == 12


class TestRelayedSightings:
    def test_adopts_teammate_sighting_from_earlier_tick(self):
        m = Messenger()
        m.publish("pursuer_1", 30, tick=7)
        tracker = make_tracker()
        assert tracker.observe(0, NO_SIGHTING, current_tick=8, messenger=m) == BeliefState(30, 7)

    def test_ignores_same_tick_and_older_messages(self):
        m = Messenger()
        tracker = make_tracker()
        tracker.observe(0, 20, current_tick=6, messenger=m)
        m.publish("pursuer_1", 30, tick=5)  # older than held belief
        m.publish("pursuer_2", 31, tick=9)  # same tick as now
        assert tracker.observe(0, NO_SIGHTING, current_tick=9, messenger=m) == BeliefState(20, 6)

    def test_newest_message_wins_regardless_of_order(self):
        m = Messenger()
        m.publish("pursuer_1", 30, tick=8)
        m.publish("pursuer_2", 31, tick=6)
        tracker = make_tracker()
        assert tracker.observe(0, NO_SIGHTING, current_tick=9, messenger=m) == BeliefState(30, 8)

    def test_tie_goes_to_first_published(self):
        m = Messenger()
        m.publish("pursuer_1", 30, tick=8)
        m.publish("pursuer_2", 31, tick=8)
        tracker = make_tracker()
        assert tracker.observe(0, NO_SIGHTING, current_tick=9, messenger=m).position == 30

    @given(
        held=st.integers(min_value=3, max_value=50),
        now=st.integers(min_value=3, max_value=100),
        ticks=st.lists(st.integers(min_value=0, max_value=120), max_size=12),
    )
    def test_adopted_tick_is_strictly_between_held_and_now(self, held, now, ticks):
        m = Messenger()
        for i, tick in enumerate(ticks):
            m.publish("pursuer_1", 100 + i, tick=tick)

        tracker = make_tracker(threshold=1000)
        tracker.state = BeliefState(position=5, tick_observed=held)
        belief = tracker.observe(0, NO_SIGHTING, current_tick=now, messenger=m)

        candidates = [t for t in ticks if held < t < now]
        if candidates:
            assert belief.tick_observed == max(candidates)
            assert held < belief.tick_observed < now
        else:
            assert belief == BeliefState(5, held)
