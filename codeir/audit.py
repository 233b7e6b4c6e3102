"""
Audit trail for CodeIR.

Records who submitted code and who saved grades. Entries never contain
source code, feedback text or credentials, only ids.
"""
import os
import logging
from datetime import datetime

from codeir.config import AUDIT_LOG_FILE

logger = logging.getLogger(__name__)


def audit_log(action: str, details: str = "", user: str = "anonymous"):
    """Append one `timestamp | user | action | details` line to the audit log."""
    try:
        timestamp = datetime.now().isoformat()
        log_entry = f"{timestamp} | {user} | {action} | {details}\n"

        with open(AUDIT_LOG_FILE, 'a') as f:
            f.write(log_entry)
    except OSError as e:
        logger.warning("Audit log error: %s", e)


def get_audit_logs(limit: int = 100):
    """Retrieve recent audit log entries, newest first."""
    if not os.path.exists(AUDIT_LOG_FILE):
        return []

    with open(AUDIT_LOG_FILE, 'r') as f:
        lines = f.readlines()

    recent = lines[-limit:] if limit > 0 else []
    logs = []
    for line in recent:
        parts = line.rstrip('\n').split(' | ', 3)
        if len(parts) >= 3:
            logs.append({
                'timestamp': parts[0],
                'user': parts[1],
                'action': parts[2],
                'details': parts[3] if len(parts) > 3 else ''
            })
    return logs[::-1]
