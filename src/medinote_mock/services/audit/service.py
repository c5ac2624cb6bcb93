from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from src.medinote_mock.time_utils import utc_now_iso

logger = logging.getLogger("audit")


@dataclass
class AuditEvent:
    """Structured representation of an audit event.

    Keeps the payload to ids, types and small counters. Patient names and
    transcript text never go into the audit log.
    """

    timestamp: str
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    subject: Optional[str] = None
    extra: Optional[Dict[str, Any]] = None


class AuditService:
    def log_event(
        self,
        *,
        action: str,
        resource_type: str,
        resource_id: Optional[str] = None,
        subject: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> AuditEvent:
        """Log a structured audit event and return it.

        - `action`: high-level verb, e.g., "create_session", "notify_chunk".
        - `resource_type`: coarse type, e.g., "recording_session", "audio_chunk".
        - `resource_id`: stable identifier when available.
        - `subject`: caller identifier. If omitted, it is taken from the
          security context of the current request: ``None`` on public
          routes. Deferred effects scheduled with ``loop.call_later`` run
          in a copy of the scheduling context and so carry the subject of
          the request that scheduled them.
        - `extra`: optional small dict of non-PHI metadata (counts, flags).
        """

        if subject is None:
            from src.medinote_mock.security import get_current_subject

            subject = get_current_subject()

        event = AuditEvent(
            timestamp=utc_now_iso(),
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            subject=subject,
            extra=extra,
        )

        try:
            logger.info(json.dumps(asdict(event)))
        except TypeError:
            # Something in extra is not JSON serializable; log without it.
            safe_event = asdict(event)
            safe_event["extra"] = None
            logger.info(json.dumps(safe_event))

        return event


audit_service = AuditService()
