"""Health check endpoint for monitoring worker status"""

from flask import Blueprint, jsonify
import psutil
import os
from state import session

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Server status, memory usage and matchmaking counters.
    Used by load balancer health checks.
    """
    try:
        process = psutil.Process(os.getpid())
        memory_mb = process.memory_info().rss / 1024 / 1024
        stats = session.stats()

        return jsonify({
            "status": "healthy",
            "pid": os.getpid(),
            "memory_mb": round(memory_mb, 2),
            "cpu_percent": round(process.cpu_percent(interval=0.1), 2),
            "clients": stats["clients"],
            "queued": sum(stats["queues"].values()),
            "rooms": len(stats["rooms"]),
            "num_threads": process.num_threads()
        }), 200

    except Exception as e:
        return jsonify({
            "status": "unhealthy",
            "error": str(e)
        }), 500


@health_bp.route('/metrics', methods=['GET'])
def metrics():
    """
    Detailed metrics endpoint for debugging
    """
    try:
        process = psutil.Process(os.getpid())
        memory_info = process.memory_info()
        stats = session.stats()

        return jsonify({
            "process": {
                "pid": os.getpid(),
                "cpu_percent": process.cpu_percent(interval=0.1),
                "num_threads": process.num_threads(),
                "num_fds": process.num_fds() if hasattr(process, 'num_fds') else None
            },
            "memory": {
                "rss_mb": round(memory_info.rss / 1024 / 1024, 2),
                "vms_mb": round(memory_info.vms / 1024 / 1024, 2),
                "percent": process.memory_percent()
            },
            "clients": stats["clients"],
            "queues": stats["queues"],
            "rooms": {
                "total": len(stats["rooms"]),
                "details": [
                    {"room_id": room_id, "members": members}
                    for room_id, members in stats["rooms"].items()
                ]
            }
        }), 200

    except Exception as e:
        return jsonify({
            "error": str(e)
        }), 500
