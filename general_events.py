# general_events.py
import logging
from flask import request
from extensions import socketio
from state import session

logger = logging.getLogger("signaling.events")


@socketio.on("connect")
def on_connect():
    session.connect(request.sid)
    logger.info("🟢 User connected: %s", request.sid)


@socketio.on("disconnect")
def on_disconnect(reason=None):  # Flask-SocketIO passes the disconnect reason
    logger.info("🔴 User disconnected: %s %s", request.sid, f"({reason})" if reason else "")
    session.disconnect(request.sid, reason)
