import pytest

from state import SessionState


class RecordingEmitter:
    """Stands in for socketio.emit, keeps every delivery in order."""

    def __init__(self):
        self.sent = []

    def __call__(self, event, payload, to=None):
        self.sent.append((to, event, payload))

    def to(self, sid):
        return [(event, payload) for target, event, payload in self.sent if target == sid]

    def events(self, sid, name):
        return [payload for event, payload in self.to(sid) if event == name]

    def clear(self):
        self.sent.clear()


@pytest.fixture
def emitter():
    return RecordingEmitter()


@pytest.fixture
def core(emitter):
    state = SessionState(emitter, max_room_id_length=300, max_message_length=2000)
    for sid in ("A", "B", "C", "D", "E", "F", "G", "H"):
        state.connect(sid)
    return state


@pytest.fixture
def app():
    from main import app as flask_app
    from state import session

    flask_app.config["TESTING"] = True
    session.reset()
    yield flask_app
    session.reset()


@pytest.fixture
def socket_client(app):
    from extensions import socketio

    clients = []

    def _connect():
        client = socketio.test_client(app)
        clients.append(client)
        return client

    yield _connect

    for client in clients:
        if client.is_connected():
            client.disconnect()


def drain(client):
    """Every event the test client received so far, grouped by name. Empties the client queue."""
    by_name = {}
    for received in client.get_received():
        name = received["name"]
        args = received["args"]
        # the test client unwraps the payload of "message" events
        payload = args[0] if isinstance(args, list) else args
        by_name.setdefault(name, []).append(payload)
    return by_name


def queued_modes(state, sid):
    """Every mode whose queue currently holds `sid`."""
    return [mode for mode in state.queues.queues if sid in state.queues.waiting(mode)]
