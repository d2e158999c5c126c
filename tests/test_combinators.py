from rpush import Design, apply, pass_, passed, pipe, sink, tee
from rpush.combinators import fifo_to_rpush
from rpush.kernel import is_ready
from rpush.runtime import mk_fifo
from fakes import Blocked, Capture


def test_apply_identity_matches_direct_push() -> None:
    design = Design()
    direct = Capture(design.clock)
    mapped = Capture(design.clock)

    for x in [0, 1, "a", None, (1, 2)]:
        direct.push(x)
        apply(lambda v: v, mapped).push(x)

    assert mapped.seen == direct.seen


def test_apply_composition_law() -> None:
    design = Design()
    nested = Capture(design.clock)
    composed = Capture(design.clock)

    def f(x: int) -> int:
        return x + 1

    def g(x: int) -> int:
        return x * 3

    left = apply(f, apply(g, nested))
    right = apply(lambda x: g(f(x)), composed)
    for x in range(5):
        left.push(x)
        right.push(x)

    assert nested.values == composed.values == [3, 6, 9, 12, 15]


def test_apply_is_synchronous() -> None:
    design = Design()
    capture = Capture(design.clock)

    apply(str, capture).push(42)

    assert capture.seen == [(0, "42")]


def test_apply_clear_delegates() -> None:
    design = Design()
    capture = Capture(design.clock)

    apply(abs, capture).clear()

    assert capture.clears == 1


def test_tee_observes_before_forwarding() -> None:
    log: list[tuple[str, int]] = []

    class Recorder:
        def push(self, x: int) -> None:
            log.append(("push", x))

        def clear(self) -> None:
            log.append(("clear", 0))

    consumer = tee(lambda x: log.append(("observe", x)), Recorder())
    consumer.push(1)
    consumer.push(2)

    assert log == [("observe", 1), ("push", 1), ("observe", 2), ("push", 2)]


def test_tee_forwards_unchanged_and_observes_once() -> None:
    design = Design()
    capture = Capture(design.clock)
    observed: list[object] = []
    payload = {"k": [1, 2]}

    tee(observed.append, capture).push(payload)

    assert observed == [payload]
    assert capture.values[0] is payload


def test_tee_clear_only_clears_destination() -> None:
    design = Design()
    capture = Capture(design.clock)
    observed: list[object] = []

    tee(observed.append, capture).clear()

    assert observed == []
    assert capture.clears == 1


def test_sink_absorbs_everything() -> None:
    design = Design()
    consumer = design.build(sink())

    for x in range(10):
        consumer.push(x)
        consumer.clear()
    consumer.clear()

    assert consumer.ready
    assert design.clock.rules == ()
    assert design.clock.tick() == []


def test_pass_forwards_without_latency() -> None:
    design = Design()
    capture = Capture(design.clock)
    consumer = design.build(pass_(capture))

    consumer.push("x")
    consumer.clear()

    assert capture.seen == [(0, "x")]
    assert capture.clears == 1
    assert [i.kind for i in design.instances] == ["pass"]


def test_pass_gives_each_use_its_own_instance() -> None:
    design = Design()
    capture = Capture(design.clock)

    first = design.build(pass_(capture))
    second = design.build(pass_(capture))

    assert first.path == "top.pass"
    assert second.path == "top.pass_1"


def test_passed_applies_mapping() -> None:
    design = Design()
    capture = Capture(design.clock)

    consumer = design.build(passed(lambda x: -x, capture))
    consumer.push(4)

    assert capture.seen == [(0, -4)]


def test_pipe_wraps_pass_around_sink() -> None:
    design = Design()
    consumer = design.build(pipe(pass_, sink()))

    consumer.push(1)

    assert [i.path for i in design.instances] == ["top.sink", "top.pass"]


def test_fifo_to_rpush_enqueues_and_clears() -> None:
    design = Design()
    queue = design.build(mk_fifo(depth=2))
    consumer = fifo_to_rpush(queue)

    consumer.push(5)
    design.clock.tick()

    assert queue.first() == 5

    consumer.clear()

    assert not queue.not_empty


def test_fifo_to_rpush_readiness_follows_queue() -> None:
    design = Design()
    queue = design.build(mk_fifo(depth=1))
    consumer = fifo_to_rpush(queue)

    assert consumer.ready
    consumer.push(1)
    design.clock.tick()

    assert not consumer.ready


def test_readiness_propagates_through_pure_combinators() -> None:
    design = Design()
    blocked = Blocked()

    assert not is_ready(apply(str, blocked))
    assert not is_ready(tee(print, blocked))
    assert not is_ready(design.build(pass_(blocked)))
    assert is_ready(apply(str, Capture(design.clock)))
