# lobby_events.py
from flask import request
from extensions import socketio
from state import session
from utils import extract_mode, extract_room


@socketio.on("find")
def on_find(data=None):
    """Client asks for a partner in a mode ({mode: video|voice|text})."""
    session.find(request.sid, extract_mode(data))


@socketio.on("leave-queue")
def on_leave_queue(data=None):
    """Client cancelled the search."""
    session.leave_queue(request.sid)


@socketio.on("join-room")
def on_join_room(data=None):
    session.join_room(request.sid, extract_room(data))


@socketio.on("leave-room")
def on_leave_room(data=None):
    session.leave_room(request.sid, extract_room(data))
