import random
import threading

import pytest

from models import MODES
from state import SessionState
from tests.conftest import RecordingEmitter, queued_modes


def test_client_is_in_at_most_one_queue_after_every_find(core):
    rng = random.Random(7)
    sids = ["A", "B", "C", "D", "E"]
    for _ in range(200):
        sid = rng.choice(sids)
        core.find(sid, rng.choice(MODES))
        for other in sids:
            assert len(queued_modes(core, other)) <= 1
        # a satisfiable match is never left waiting
        assert all(size < 2 for size in core.queues.sizes().values())


def test_unknown_mode_is_ignored(core, emitter):
    assert core.find("A", "chess") == []
    assert core.find("A", None) == []
    assert core.queues.sizes() == {"video": 0, "voice": 0, "text": 0}
    assert emitter.sent == []


def test_find_from_unknown_client_is_ignored(core):
    assert core.find("ghost", "video") == []
    assert core.queues.size("video") == 0


def test_matched_clients_leave_every_queue(core):
    core.find("A", "video")
    core.find("B", "video")

    for sid in ("A", "B"):
        assert queued_modes(core, sid) == []
        assert core.registry.get(sid).mode is None


def test_searching_again_ends_the_current_match(core, emitter):
    core.find("A", "video")
    core.find("B", "video")
    emitter.clear()

    core.find("A", "voice")

    assert emitter.events("B", "peer-left") == [{"peerId": "A"}]
    assert core.registry.get("A").matched_room is None
    assert core.registry.members("A#B") == ["B"]
    assert core.queues.waiting("voice") == ["A"]


def test_client_can_cycle_between_queue_and_match(core):
    core.find("A", "text")
    core.find("B", "text")
    core.find("A", "text")
    outcomes = core.find("C", "text")

    assert outcomes[0].room == "A#C"
    assert core.registry.get("A").matched_room == "A#C"
    assert list(core.registry.get("A").rooms) == ["A#C"]


def test_leave_queue(core, emitter):
    core.find("A", "voice")

    assert core.leave_queue("A") == "voice"
    assert core.queues.size("voice") == 0
    assert emitter.events("A", "queue-status") == [{"status": "idle"}]

    assert core.leave_queue("A") is None


def test_disconnect_removes_client_from_queue(core, emitter):
    core.find("A", "video")
    core.disconnect("A", "transport close")
    core.find("B", "video")

    assert emitter.events("B", "matched") == []
    assert core.queues.waiting("video") == ["B"]
    assert "A" not in core.registry


def test_disconnect_notifies_each_room_exactly_once(core, emitter):
    for sid in ("E", "F", "H"):
        core.join_room(sid, "r1")
    core.join_room("H", "r2")
    core.join_room("G", "r2")
    core.join_room("E", "r2")

    core.disconnect("H", "client namespace disconnect")

    # E shares two rooms with H and hears about each of them once
    assert emitter.events("E", "peer-left") == [{"peerId": "H"}, {"peerId": "H"}]
    assert emitter.events("F", "peer-left") == [{"peerId": "H"}]
    assert emitter.events("G", "peer-left") == [{"peerId": "H"}]
    assert emitter.events("H", "peer-left") == []
    assert core.registry.members("r1") == ["E", "F"]


def test_disconnect_twice_is_harmless(core, emitter):
    core.join_room("E", "r1")
    core.join_room("H", "r1")

    core.disconnect("H")
    core.disconnect("H")

    assert emitter.events("E", "peer-left") == [{"peerId": "H"}]


def test_disconnected_client_cannot_send(core, emitter):
    core.join_room("E", "r1")
    core.join_room("F", "r1")
    core.disconnect("F")
    emitter.clear()

    assert core.message("F", {"room": "r1", "text": "hi"}) == []
    assert core.signal("offer", "F", {"to": "E", "sdp": "X"}) is False
    assert emitter.sent == []


def test_stats(core):
    core.find("A", "video")
    core.find("B", "text")
    core.find("C", "text")

    stats = core.stats()
    assert stats["clients"] == 8
    assert stats["queues"] == {"video": 1, "voice": 0, "text": 0}
    assert stats["rooms"] == {"B#C": 2}


def test_reset_clears_everything(core):
    core.find("A", "video")
    core.join_room("E", "r1")
    core.reset()

    assert core.stats() == {"clients": 0, "queues": {m: 0 for m in MODES}, "rooms": {}}


@pytest.mark.parametrize("mode", MODES)
def test_every_mode_matches(core, mode):
    core.find("A", mode)
    assert core.find("B", mode)[0].mode == mode


def test_threads_interleaving_find_and_disconnect_keep_invariants():
    emitter = RecordingEmitter()
    state = SessionState(emitter, max_room_id_length=300, max_message_length=2000)
    sids = [f"c{i}" for i in range(40)]
    for sid in sids:
        state.connect(sid)
    start = threading.Barrier(8)

    def worker(seed):
        rng = random.Random(seed)
        start.wait()
        for _ in range(300):
            sid = rng.choice(sids)
            roll = rng.random()
            if roll < 0.7:
                state.find(sid, rng.choice(MODES))
            elif roll < 0.85:
                state.disconnect(sid, "transport close")
            else:
                state.connect(sid)

    threads = [threading.Thread(target=worker, args=(seed,)) for seed in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    for sid in sids:
        assert len(queued_modes(state, sid)) <= 1
    assert all(size < 2 for size in state.queues.sizes().values())
    for to, event, payload in emitter.sent:
        if event == "matched":
            assert payload["peerId"] != to
    for room, members in state.registry.rooms.items():
        assert all(sid in state.registry for sid in members)


def test_events_are_delivered_after_the_lock_is_released():
    free_during_delivery = []

    def lock_is_free():
        # another thread must be able to take the lock while events go out
        if state._lock.acquire(timeout=1):
            state._lock.release()
            free_during_delivery.append(True)
        else:
            free_during_delivery.append(False)

    def emit(event, payload, to=None):
        other = threading.Thread(target=lock_is_free)
        other.start()
        other.join()

    state = SessionState(emit, max_room_id_length=300, max_message_length=2000)
    state.connect("A")
    state.connect("B")
    state.find("A", "video")
    state.find("B", "video")

    # matched + peers-in-room for each side
    assert free_during_delivery == [True, True, True, True]
