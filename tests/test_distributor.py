"""Test per-player event queues."""
import pytest
from hexcore.errors import InvalidReference
from hexcore.geometry import MapPath
from hexcore.model import AttackUnitEvent, EndTurnEvent, FireMode, MoveEvent
from hexruntime.distributor import EventDistributor
from hexruntime.eventlog import EventLog


def test_every_player_sees_every_event_in_order():
    """Published events reach all queues in publication order."""
    d = EventDistributor([0, 1])
    evts = [MoveEvent(0, MapPath([(0, 0), (1, 0)])), EndTurnEvent(0, 1)]
    for e in evts:
        d.publish(e)
    assert list(d.drain(0)) == evts
    assert d.take(1) == evts[0]
    assert d.pending(1) == 1


def test_take_from_empty_queue():
    """An empty queue yields None."""
    d = EventDistributor([0, 1])
    assert d.take(0) is None


def test_queues_hold_copies():
    """Each player gets its own copy of the event."""
    d = EventDistributor([0, 1])
    d.publish(EndTurnEvent(0, 1))
    a = d.take(0)
    b = d.take(1)
    assert a == b
    assert a is not b


def test_redaction_hook():
    """A per-viewer filter can hide events from some players."""
    def hide_attacks_from_player_1(viewer, event):
        if viewer == 1 and isinstance(event, AttackUnitEvent):
            return None
        return event

    d = EventDistributor([0, 1], redact=hide_attacks_from_player_1)
    d.publish(AttackUnitEvent(0, 1, FireMode.ACTIVE, False))
    d.publish(EndTurnEvent(0, 1))
    assert d.pending(0) == 2
    assert list(d.drain(1)) == [EndTurnEvent(0, 1)]


def test_unknown_player():
    """Queues exist only for configured players."""
    d = EventDistributor([0, 1])
    with pytest.raises(InvalidReference):
        d.take(2)


def test_event_log_offsets():
    """The log hands out events by offset."""
    log = EventLog()
    log.append(EndTurnEvent(0, 1))
    log.append(EndTurnEvent(1, 0))
    assert len(log) == 2
    assert log.all() == [EndTurnEvent(0, 1), EndTurnEvent(1, 0)]
    chunk, next_offset = log.since(1)
    assert chunk == [EndTurnEvent(1, 0)]
    assert next_offset == 2
    assert log.since(5) == ([], 5)
