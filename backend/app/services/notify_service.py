# app/services/notify_service.py
from __future__ import annotations

import smtplib
import threading
import traceback
from email.message import EmailMessage
from typing import Any, Dict, Optional

from app.settings import Settings

# server-owned fields, not part of what the visitor typed
_SKIP_FIELDS = {"_id", "status", "created_at"}


def build_contact_email(submission: Dict[str, Any], submission_id: str, *, sender: str, recipient: str) -> EmailMessage:
    name = str(submission.get("name") or "website visitor")
    msg = EmailMessage()
    msg["Subject"] = f"New contact message from {name}"
    msg["From"] = sender
    msg["To"] = recipient
    if submission.get("email"):
        msg["Reply-To"] = str(submission["email"])

    lines = [f"{k}: {v}" for k, v in submission.items() if k not in _SKIP_FIELDS and k != "message"]
    body = "\n".join(lines)
    if submission.get("message"):
        body += f"\n\nMessage:\n{submission['message']}"
    body += f"\n\nSubmission id: {submission_id}"
    msg.set_content(body)
    return msg


class ContactNotifier:
    """Best-effort email about a new contact submission, sent off the request path."""

    def __init__(self, settings: Settings):
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return bool(self._settings.SMTP_HOST and self._settings.CONTACT_TO_EMAIL)

    def notify(self, submission: Dict[str, Any], submission_id: str) -> Optional[threading.Thread]:
        if not self.enabled:
            return None
        t = threading.Thread(target=self._send, args=(dict(submission), submission_id), daemon=True)
        try:
            t.start()
        except RuntimeError as e:
            print("[notify] could not start email thread:", e)
            return None
        return t

    def _send(self, submission: Dict[str, Any], submission_id: str) -> None:
        s = self._settings
        try:
            recipient = s.CONTACT_TO_EMAIL
            msg = build_contact_email(
                submission,
                submission_id,
                sender=s.CONTACT_FROM_EMAIL or recipient,
                recipient=recipient,
            )
            with smtplib.SMTP(s.SMTP_HOST, s.SMTP_PORT, timeout=s.SMTP_TIMEOUT_SECONDS) as server:
                if s.SMTP_STARTTLS:
                    server.starttls()
                if s.SMTP_USER and s.SMTP_PASS:
                    server.login(s.SMTP_USER, s.SMTP_PASS)
                server.send_message(msg)
            print(f"[notify] contact email sent id={submission_id}")
        except Exception as e:
            print("[notify] contact email failed:", e)
            traceback.print_exc()
