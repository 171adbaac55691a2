"""
Notification Service
SMS alerts to the course manager via Twilio
"""

import logging
from datetime import datetime
from typing import Any, Dict

from twilio.rest import Client

from golfcapture.config import settings
from golfcapture.models.course import Course
from golfcapture.models.customer import Customer
from golfcapture.utils.contact import mask_phone

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for sending manager notifications over SMS"""

    def __init__(self):
        self.twilio_client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        self.from_number = settings.TWILIO_PHONE_NUMBER

    def send_sms(self, to_phone: str, message: str) -> Dict[str, Any]:
        """
        Send SMS via Twilio

        Args:
            to_phone: Recipient phone number
            message: Message content

        Returns:
            Result dictionary with status
        """
        try:
            twilio_message = self.twilio_client.messages.create(body=message, from_=self.from_number, to=to_phone)

            return {
                "success": True,
                "message_id": twilio_message.sid,
                "status": twilio_message.status,
                "to": to_phone,
                "sent_at": datetime.utcnow(),
            }

        except Exception as e:
            logger.error(f"Failed to send SMS to {mask_phone(to_phone)}: {str(e)}")
            return {"success": False, "error": str(e), "to": to_phone}

    def send_prospect_alert(self, course: Course, customer: Customer) -> Dict[str, Any]:
        """
        Tell the course manager a new membership prospect just checked in

        Args:
            course: Course the capture happened at
            customer: Newly enrolled prospect

        Returns:
            Result dictionary
        """
        if not course.manager_phone:
            return {"success": False, "error": "No manager phone number configured"}

        message = f"""
        🎯 NEW MEMBERSHIP PROSPECT - {course.name}

        Name: {customer.full_name or 'Unknown'}
        Phone: {customer.phone or 'N/A'}
        Email: {customer.email or 'N/A'}
        Score: {customer.membership_score}/100
        Visits: {customer.visit_count}

        They're in the pipeline - consider reaching out!
        """.strip()

        return self.send_sms(course.manager_phone, message)


def notify_new_prospect(course: Course, customer: Customer) -> None:
    """Best-effort prospect alert; never raises"""
    if not settings.twilio_configured or not course.manager_phone:
        return

    try:
        result = NotificationService().send_prospect_alert(course, customer)
    except Exception as e:
        logger.error(f"Prospect alert for customer {customer.id} failed: {str(e)}")
        return

    if result.get("success"):
        logger.info(f"Prospect alert sent for customer {customer.id}")
