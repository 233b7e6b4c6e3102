#!/usr/bin/env python3
"""
CodeIR - Code Submission & Review
=================================
Run: python3 -m codeir.app
Then point the frontend at: http://localhost:3000
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from codeir.config import config, CORS_ORIGINS
from codeir.auth import init_auth
from codeir.routes import register_routes

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, origins=CORS_ORIGINS)

# ══════════════════════════════════════════════════════════════
# AUTHENTICATION
# ══════════════════════════════════════════════════════════════
init_auth(app)

# ══════════════════════════════════════════════════════════════
# ROUTES
# ══════════════════════════════════════════════════════════════
register_routes(app)


@app.route('/api/health')
def health():
    """Liveness check plus non-secret configuration."""
    return jsonify({"status": "ok", "config": config.to_dict()})


# ══════════════════════════════════════════════════════════════
# MAIN
# ══════════════════════════════════════════════════════════════

if __name__ == '__main__':
    logger.info("CodeIR API listening on http://%s:%s", config.host, config.port)
    app.run(host=config.host, port=config.port, debug=config.debug)
