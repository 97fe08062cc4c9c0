# main.py
# Do NOT import gevent or eventlet: the server runs Flask-SocketIO in 'threading' mode.
import logging

from flask import Flask
import config
from extensions import socketio
from health_check import health_bp

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("signaling")

# --- event handlers ---
# Importing these modules registers their @socketio.on handlers.
import general_events  # noqa: E402,F401
import lobby_events  # noqa: E402,F401
import signaling_events  # noqa: E402,F401
# ----------------------

app = Flask(__name__)
app.config['SECRET_KEY'] = config.SECRET_KEY
app.register_blueprint(health_bp)

# websocket only, like the browser clients connect
socketio.init_app(app, cors_allowed_origins=config.CORS_ALLOWED_ORIGINS, transports=["websocket"])


@app.route("/")
def index():
    return "✅ Signaling server active", 200


@socketio.on_error_default
def on_socket_error(e):
    # the protocol has no error channel back to the client: log and drop
    logger.exception("❌ Unhandled error in socket handler: %s", e)


if __name__ == "__main__":
    logger.info("✅ Signaling server running on port %d", config.PORT)
    # allow_unsafe_werkzeug for the threaded dev server, use_reloader=False to keep a single state owner
    socketio.run(app, host=config.HOST, port=config.PORT, debug=False, allow_unsafe_werkzeug=True, use_reloader=False)
