# signaling_events.py
from flask import request
from extensions import socketio
from state import session


# --- directed signaling (guarded against self targets in the relay) ---

@socketio.on("offer")
def on_offer(data=None):
    session.signal("offer", request.sid, data)


@socketio.on("answer")
def on_answer(data=None):
    session.signal("answer", request.sid, data)


@socketio.on("ice-candidate")
def on_ice_candidate(data=None):
    session.signal("ice-candidate", request.sid, data)


# --- room chat, sender excluded ---

@socketio.on("message")
def on_message(data=None):
    session.message(request.sid, data)
