"""WSGI entry point for production deployment"""

from main import app, socketio
import config

if __name__ == "__main__":
    # This is used only for local testing without gunicorn
    socketio.run(app, host=config.HOST, port=config.PORT, allow_unsafe_werkzeug=True)
