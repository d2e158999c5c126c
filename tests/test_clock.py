import logging

import pytest

from rpush import Clock, Design, SimConfig, Trace, buffer, sink
from rpush.kernel import RuleError


def test_rules_fire_when_guard_holds() -> None:
    clock = Clock()
    fired: list[int] = []
    enabled = {"on": False}

    clock.add_rule("r", lambda: enabled["on"], lambda: fired.append(clock.cycle))

    assert clock.tick() == []
    enabled["on"] = True
    assert clock.tick() == ["r"]
    assert fired == [1]
    assert clock.cycle == 2


def test_rules_fire_in_registration_order() -> None:
    clock = Clock()
    order: list[str] = []
    clock.add_rule("a", lambda: True, lambda: order.append("a"))
    clock.add_rule("b", lambda: True, lambda: order.append("b"))

    assert clock.run(2) == [["a", "b"], ["a", "b"]]
    assert order == ["a", "b", "a", "b"]


def test_run_rejects_negative_cycles() -> None:
    with pytest.raises(ValueError):
        Clock().run(-1)


def test_rule_error_keeps_rule_and_cycle() -> None:
    trace = Trace()
    clock = Clock(trace=trace)

    def boom() -> None:
        raise RuntimeError("boom")

    clock.add_rule("bad", lambda: True, boom)

    with pytest.raises(RuleError) as excinfo:
        clock.tick()

    assert excinfo.value.rule == "bad"
    assert excinfo.value.cycle == 0
    assert "boom" in str(excinfo.value)
    assert trace.get_events("rule_error")[0].info["rule"] == "bad"


def test_trace_records_fired_rules_with_cycle() -> None:
    design = Design(SimConfig(trace=True))
    consumer = design.build(buffer(design.build(sink())))

    consumer.push(1)
    design.clock.run(2)

    assert design.trace is not None
    fired = design.trace.get_events("rule_fired")
    assert [(ev.cycle, ev.info["rule"]) for ev in fired] == [(1, "top.buffer.forward")]


def test_tick_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    clock = Clock()
    clock.add_rule("r", lambda: True, lambda: None)

    with caplog.at_level(logging.DEBUG, logger="rpush.kernel.clock"):
        clock.tick()

    assert "cycle 0 fired 1 rule(s)" in caplog.text


def test_disabled_trace_records_nothing() -> None:
    trace = Trace(enabled=False)
    design = Design(trace=trace)
    consumer = design.build(buffer(design.build(sink())))

    consumer.push(1)
    design.clock.run(2)

    assert len(trace) == 0
    assert trace.get_events() == []


def test_trace_clear_restarts_numbering() -> None:
    design = Design(SimConfig(trace=True))
    consumer = design.build(buffer(design.build(sink())))
    trace = design.trace
    assert trace is not None
    assert len(trace) == 2

    trace.clear()
    consumer.push(1)
    design.clock.run(2)

    events = trace.get_events()
    assert len(trace) == 1
    assert events[0].id == 0
    assert events[0].parent_id is None
    assert events[0].action == "rule_fired"
