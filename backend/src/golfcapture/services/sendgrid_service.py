"""
SendGrid Integration Service
Delivers rendered emails through the SendGrid v3 HTTP API
"""

import logging
from typing import Any, Dict, Optional

import httpx

from golfcapture.config import settings

logger = logging.getLogger(__name__)


class SendGridService:
    """Thin async client for POST /v3/mail/send"""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.SENDGRID_API_KEY
        self.base_url = (base_url or settings.SENDGRID_BASE_URL).rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def build_payload(to_email: str, subject: str, body_html: str, body_text: Optional[str] = None) -> Dict[str, Any]:
        content = []
        # SendGrid requires text/plain before text/html
        if body_text:
            content.append({"type": "text/plain", "value": body_text})
        content.append({"type": "text/html", "value": body_html})

        return {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": settings.EMAIL_FROM_ADDRESS, "name": settings.EMAIL_FROM_NAME},
            "subject": subject,
            "content": content,
        }

    async def send_email(
        self, to_email: str, subject: str, body_html: str, body_text: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send one email

        Returns:
            {"success": True, "message_id": ...} or {"success": False, "error": ...}
        """
        if not self.api_key:
            return {"success": False, "error": "SendGrid API key not configured"}

        payload = self.build_payload(to_email, subject, body_html, body_text)

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.base_url}/v3/mail/send",
                    headers=self.headers,
                    json=payload,
                    timeout=settings.EMAIL_SEND_TIMEOUT_SECONDS,
                )
                response.raise_for_status()

                return {"success": True, "message_id": response.headers.get("X-Message-Id")}

        except httpx.HTTPStatusError as e:
            return {"success": False, "error": f"SendGrid returned {e.response.status_code}: {e.response.text}"}
        except Exception as e:
            return {"success": False, "error": str(e)}
