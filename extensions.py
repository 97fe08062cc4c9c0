# extensions.py
from flask_socketio import SocketIO

# Threading mode: handlers may run on several threads, SessionState serializes them.
# Matchmaking state lives in this process only, so no message_queue is configured.
socketio = SocketIO(async_mode='threading')
