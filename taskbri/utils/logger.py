"""
JSON-line logging of authentication and authorization outcomes.

Module code logs through ``logging.getLogger(__name__)``; auth outcomes go
through ``AuthEventLogger`` so each event is one JSON object with a stable
``event`` name that can be filtered on.
"""

import json
import logging
import sys
from datetime import datetime, timezone


class AuthEventLogger:
    """Emits one JSON line per auth event."""

    def __init__(self, name: str = "taskbri.auth", level: int = logging.INFO):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Prevent adding handlers multiple times
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            self.logger.addHandler(handler)

    def _emit(self, level: int, event: str, **fields):
        if not self.logger.isEnabledFor(level):
            return
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event,
            **fields,
        }
        self.logger.log(level, json.dumps(record, default=str))

    def token_rejected(self, reason: str):
        """Bearer token failed signature or expiry checks."""
        self._emit(logging.WARNING, "token_rejected", reason=reason)

    def unknown_subject(self, user_id: str):
        """Token verified but its subject has no account."""
        self._emit(logging.WARNING, "unknown_subject", user_id=user_id)

    def membership_denied(self, project_id: str, user_id: str):
        self._emit(logging.INFO, "membership_denied", project_id=project_id, user_id=user_id)
