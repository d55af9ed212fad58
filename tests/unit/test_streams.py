"""
Unit tests for the synchronous stream primitives.
"""

from tocspy.streams import (
    MISSING,
    SharedStream,
    Signal,
    Stream,
    Subscription,
    combine_latest,
    distinct_until_changed,
    map_values,
    scan,
    share_replay,
)


class TestSubscription:
    """Test Subscription behavior."""

    def test_unsubscribe_runs_dispose_once(self):
        """Dispose runs on first unsubscribe only."""
        calls = []
        sub = Subscription(lambda: calls.append(1))

        sub.unsubscribe()
        sub.unsubscribe()

        assert calls == [1]
        assert sub.closed

    def test_context_manager(self):
        """Leaving the with-block unsubscribes."""
        calls = []
        with Subscription(lambda: calls.append(1)):
            pass
        assert calls == [1]


class TestSignal:
    """Test the hot, value-holding source."""

    def test_replays_current_value(self):
        """New observers get the current value immediately."""
        signal = Signal(5)
        received = []
        signal.subscribe(received.append)

        assert received == [5]

    def test_no_replay_without_value(self):
        """A signal without a value delivers nothing on subscribe."""
        signal = Signal()
        received = []
        signal.subscribe(received.append)

        assert received == []
        assert signal.value is MISSING
        assert not signal.has_value

    def test_emit_and_unsubscribe(self):
        """Observers get emitted values until they unsubscribe."""
        signal = Signal()
        received = []
        sub = signal.subscribe(received.append)

        signal.emit(1)
        sub.unsubscribe()
        signal.emit(2)

        assert received == [1]
        assert signal.value == 2
        assert signal.observer_count == 0

    def test_reentrant_emit_is_queued(self):
        """Values emitted during delivery arrive after the current one."""
        signal = Signal()
        first, second = [], []

        def bounce(value):
            first.append(value)
            if value == 1:
                signal.emit(2)

        signal.subscribe(bounce)
        signal.subscribe(second.append)
        signal.emit(1)

        # Both observers see 1 before either sees 2
        assert first == [1, 2]
        assert second == [1, 2]

    def test_observer_removed_during_delivery(self):
        """An observer detached mid-delivery does not receive the value."""
        signal = Signal()
        received = []
        subs = {}

        subs["first"] = signal.subscribe(lambda v: subs["second"].unsubscribe())
        subs["second"] = signal.subscribe(received.append)
        signal.emit(1)

        assert received == []


class TestOperators:
    """Test stream operators."""

    def test_map_values(self):
        """map_values transforms each value."""
        signal = Signal(2)
        received = []
        signal.pipe(map_values(lambda v: v * 10)).subscribe(received.append)
        signal.emit(3)

        assert received == [20, 30]

    def test_scan_restarts_per_subscription(self):
        """Every subscription folds from the seed."""
        signal = Signal(1)
        totals = signal.pipe(scan(lambda acc, v: acc + v, 0))
        first, second = [], []

        totals.subscribe(first.append)
        signal.emit(2)
        totals.subscribe(second.append)

        assert first == [1, 3]
        assert second == [2]

    def test_distinct_until_changed(self):
        """Consecutive duplicates are dropped."""
        signal = Signal()
        received = []
        signal.pipe(distinct_until_changed()).subscribe(received.append)
        for v in [1, 1, 2, 2, 1]:
            signal.emit(v)

        assert received == [1, 2, 1]

    def test_distinct_with_comparer(self):
        """A custom comparer decides what counts as a change."""
        signal = Signal()
        received = []
        signal.pipe(distinct_until_changed(lambda a, b: a is b)).subscribe(received.append)
        value = [1]
        signal.emit(value)
        signal.emit(value)
        signal.emit([1])

        assert len(received) == 2


class TestCombineLatest:
    """Test joining on the latest value of each source."""

    def test_waits_for_every_source(self):
        """Nothing is emitted until both sources have a value."""
        a, b = Signal(), Signal()
        received = []
        combine_latest(a, b).subscribe(received.append)

        a.emit(1)
        assert received == []

        b.emit("x")
        assert received == [(1, "x")]

    def test_either_source_emits(self):
        """A change on either side pairs with the other's latest."""
        a, b = Signal(1), Signal("x")
        received = []
        combine_latest(a, b).subscribe(received.append)

        a.emit(2)
        a.emit(3)
        b.emit("y")

        assert received == [(1, "x"), (2, "x"), (3, "x"), (3, "y")]

    def test_unsubscribe_detaches_all_sources(self):
        """Disposing the combination detaches from each source."""
        a, b = Signal(1), Signal(2)
        sub = combine_latest(a, b).subscribe(lambda v: None)
        sub.unsubscribe()

        assert a.observer_count == 0
        assert b.observer_count == 0


class TestSharedStream:
    """Test reference-counted multicast with replay."""

    def make_counted(self, signal):
        """Source that counts how often the mapping runs."""
        calls = []

        def double(v):
            calls.append(v)
            return v * 2

        return signal.pipe(map_values(double)), calls

    def test_connects_lazily(self):
        """The source is not subscribed until the first observer."""
        signal = Signal(1)
        shared = SharedStream(signal)

        assert signal.observer_count == 0
        assert not shared.connected

        shared.subscribe(lambda v: None)
        assert signal.observer_count == 1
        assert shared.connected

    def test_single_computation(self):
        """Observers share one upstream computation."""
        signal = Signal(1)
        source, calls = self.make_counted(signal)
        shared = source.pipe(share_replay())
        first, second = [], []

        shared.subscribe(first.append)
        shared.subscribe(second.append)
        signal.emit(2)

        assert calls == [1, 2]
        assert first == [2, 4]
        assert second == [2, 4]
        assert signal.observer_count == 1

    def test_late_observer_gets_latest(self):
        """An observer joining later receives the latest value at once."""
        signal = Signal(1)
        shared = SharedStream(signal)
        shared.subscribe(lambda v: None)
        signal.emit(7)

        late = []
        shared.subscribe(late.append)

        assert late == [7]

    def test_teardown_on_last_unsubscribe(self):
        """The last observer leaving disconnects and drops the value."""
        signal = Signal(1)
        shared = SharedStream(signal)
        a = shared.subscribe(lambda v: None)
        b = shared.subscribe(lambda v: None)

        a.unsubscribe()
        assert shared.connected
        assert shared.refcount == 1

        b.unsubscribe()
        assert not shared.connected
        assert shared.latest is MISSING
        assert signal.observer_count == 0

    def test_resubscribe_restarts_computation(self):
        """After teardown, a new observer starts from the seed again."""
        signal = Signal(1)
        shared = signal.pipe(scan(lambda acc, v: acc + v, 0), share_replay())

        first = []
        sub = shared.subscribe(first.append)
        signal.emit(10)
        sub.unsubscribe()

        second = []
        shared.subscribe(second.append)

        assert first == [1, 11]
        assert second == [10]

    def test_observer_detaching_another_on_replay(self):
        """An observer may detach another from inside its replayed value."""
        signal = Signal(1)
        shared = SharedStream(signal)
        received = []
        first = shared.subscribe(received.append)

        shared.subscribe(lambda v: first.unsubscribe())
        signal.emit(2)

        assert received == [1]
        assert shared.refcount == 1
        assert shared.connected

    def test_emit_from_observer_keeps_order(self):
        """A value emitted on another input during delivery reaches everyone after the current one."""
        left, right = Signal(1), Signal(10)
        shared = combine_latest(left, right).pipe(map_values(sum), share_replay())
        first, second = [], []

        def bump_right(total):
            first.append(total)
            if total == 12:
                right.emit(20)

        shared.subscribe(bump_right)
        shared.subscribe(second.append)
        left.emit(2)

        assert first == [11, 12, 22]
        assert second == [11, 12, 22]
        assert shared.latest == 22

    def test_plain_stream_is_cold(self):
        """Without sharing, every observer runs its own computation."""
        signal = Signal(1)
        source, calls = self.make_counted(signal)
        assert isinstance(source, Stream)

        source.subscribe(lambda v: None)
        source.subscribe(lambda v: None)

        assert calls == [1, 1]
