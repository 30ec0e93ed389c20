# chainlog - context tests
"""Timestamp tracker and context composer"""

from chainlog.logging import LogContext, TimestampTracker


class TestTimestampTracker:
    """Timestamp diffs"""

    def test_first_tick_is_zero(self, clock):
        clock.now = 5_000
        tracker = TimestampTracker(clock)

        assert tracker.tick() == 0
        assert tracker.last_timestamp_ms == 5_000

    def test_following_ticks(self, clock):
        clock.now = 5_000
        tracker = TimestampTracker(clock)
        tracker.tick()

        clock.now = 5_120
        assert tracker.tick() == 120
        clock.now = 5_125
        assert tracker.tick() == 5

    def test_reset(self, clock):
        clock.now = 5_000
        tracker = TimestampTracker(clock)
        tracker.tick()
        clock.now = 9_000

        tracker.reset()

        assert tracker.last_timestamp_ms == 0
        assert tracker.tick() == 0
        assert tracker.last_timestamp_ms == 9_000

    def test_clock_going_backwards(self, clock):
        clock.now = 5_000
        tracker = TimestampTracker(clock)
        tracker.tick()

        clock.now = 4_000

        assert tracker.tick() == 0
        assert tracker.last_timestamp_ms == 5_000

    def test_wall_clock_default(self):
        tracker = TimestampTracker()

        assert tracker.tick() == 0
        assert tracker.tick() >= 0
        assert tracker.last_timestamp_ms > 0


class TestLogContext:
    """Fields and tags"""

    def test_overlay_skips_reserved_keys(self):
        context = LogContext(additional_fields={"region": "eu", "level": "x", "tags": []})

        assert context.overlay() == {"region": "eu"}

    def test_tags_order(self):
        context = LogContext("Orders", ctx_params=["env:test", "v2"])

        assert context.tags(["call"]) == ["env:test", "v2", "call"]

    def test_segments(self):
        context = LogContext("Orders", ctx_params=["env:test"])

        assert context.segments(["tag1", 3]) == ["Orders", "env:test", "tag1", "3"]

    def test_segments_skip_empty(self):
        context = LogContext(None, ctx_params=[""])

        assert context.segments([None, "tag"]) == ["tag"]

    def test_timestamp_diff_consumes_a_tick(self, clock):
        clock.now = 1_000
        context = LogContext(tracker=TimestampTracker(clock))

        assert context.timestamp_diff() == 0
        clock.now = 1_040
        assert context.timestamp_diff() == 40
