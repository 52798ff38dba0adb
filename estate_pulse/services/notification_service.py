"""E-mail notifications for scheduled meetings"""

import logging
from html import escape
from typing import Any, Dict, List, Optional

import httpx

from estate_pulse.config import settings
from estate_pulse.schemas.meeting import MeetingNotification

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Meeting notification could not be delivered"""
    pass


class MeetingNotifier:
    """Client for a Resend-compatible e-mail API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        sender: Optional[str] = None,
        recipients: Optional[List[str]] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.api_url = api_url or settings.resend_api_url
        self.sender = sender or settings.notification_from
        self.recipients = recipients or settings.notification_recipients_list
        self.timeout_seconds = timeout_seconds or settings.notification_timeout_seconds
        self.transport = transport

    def build_email(self, notification: MeetingNotification) -> Dict[str, Any]:
        """Build the e-mail request body; all user text is HTML-escaped"""
        html = (
            "<h1>New Meeting Scheduled</h1>"
            f"<p><strong>Project:</strong> {escape(notification.project_name)}</p>"
            f"<p><strong>Date:</strong> {escape(notification.meeting_date)}</p>"
            f"<p><strong>Time:</strong> {escape(notification.meeting_time)}</p>"
            f"<p><strong>Attendees:</strong> {escape(notification.attendees)}</p>"
            "<p>This meeting was scheduled through the Estate Pulse project dashboard.</p>"
        )
        return {
            "from": self.sender,
            "to": self.recipients,
            "subject": "New Meeting Scheduled",
            "html": html,
        }

    async def send_meeting_notification(self, notification: MeetingNotification) -> Dict[str, Any]:
        """
        Send the meeting e-mail.

        Args:
            notification: Project name, date, time and attendees

        Returns:
            Decoded response body of the e-mail API

        Raises:
            NotificationError: If no API key is configured or delivery fails
        """
        if not self.api_key:
            raise NotificationError("Notification API key is not configured")

        logger.info(
            f"Sending meeting email for {notification.project_name} "
            f"on {notification.meeting_date} {notification.meeting_time}"
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=self.build_email(notification),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                body = response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            logger.error(f"Email API rejected meeting email: {e.response.status_code}")
            raise NotificationError(f"Email API returned {e.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Email API request failed: {e}")
            raise NotificationError(f"Email API request failed: {e}")
        except ValueError as e:
            logger.error(f"Email API returned an unreadable reply: {e}")
            raise NotificationError(f"Email API returned an unreadable reply: {e}")

        logger.info("Meeting email sent successfully")
        return body
