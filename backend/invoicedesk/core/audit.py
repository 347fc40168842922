"""
Audit logging for invoice writes and sign-ins.

Entries are single JSON lines on the ``audit`` logger so they can be shipped
separately from application logs. Passwords are never included.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

audit_logger = logging.getLogger("audit")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AuditLog:
    """Central audit logging for data changes."""

    @staticmethod
    def log_authentication(email: str, success: bool, reason: str = ""):
        """
        Usage:
            AuditLog.log_authentication("user@nextmail.com", True)
            AuditLog.log_authentication("user@nextmail.com", False, reason="Invalid password")
        """
        log_entry = {
            "timestamp": _now(),
            "event_type": "auth.login",
            "email": email,
            "success": success,
        }

        if reason and not success:
            log_entry["reason"] = reason

        audit_logger.info(json.dumps(log_entry))

    @staticmethod
    def log_action(
        action: str,  # "create", "update", "delete"
        resource_type: str,
        resource_id: Any,
        changes: Optional[Dict[str, Any]] = None,
    ):
        """
        Usage:
            AuditLog.log_action("create", "invoice", invoice_id, changes={"amount": 4999})
            AuditLog.log_action("delete", "invoice", invoice_id)
        """
        log_entry = {
            "timestamp": _now(),
            "event_type": f"{resource_type}.{action}",
            "resource_id": str(resource_id),
        }

        if changes:
            log_entry["changes"] = changes

        audit_logger.info(json.dumps(log_entry, default=str))
