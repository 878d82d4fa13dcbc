"""
Reminder email service with AWS SES.
Renders the reminder template and sends it to a single recipient.
"""

import re
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from jinja2 import Template
from starlette.concurrency import run_in_threadpool

from tenant_admin.core.config import Settings, settings as default_settings
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)


REMINDER_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ subject }}</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #2563eb; color: white; padding: 20px; text-align: center; }
        .content { padding: 30px; background: #f8fafc; }
        .button {
            display: inline-block;
            background: #2563eb;
            color: white;
            padding: 12px 24px;
            text-decoration: none;
            border-radius: 6px;
            margin: 20px 0;
        }
        .footer { text-align: center; padding: 20px; color: #64748b; font-size: 14px; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{{ subject }}</h1>
        </div>
        <div class="content">
            <p>Hello {{ user_name }},</p>
            <p>{{ message }}</p>
            {% if action_url %}
            <div style="text-align: center;">
                <a href="{{ action_url }}" class="button">Open dashboard</a>
            </div>
            {% endif %}
        </div>
        <div class="footer">
            <p>This email was sent automatically, please do not reply.</p>
        </div>
    </div>
</body>
</html>
"""

DEFAULT_REMINDER_MESSAGE = "You have pending items waiting for your attention."


def create_ses_client(config: Settings = default_settings):
    return boto3.client(
        "ses",
        region_name=config.aws_region,
        aws_access_key_id=config.aws_access_key_id,
        aws_secret_access_key=config.aws_secret_access_key,
    )


class ReminderEmailService:
    """Send templated reminder emails through SES"""

    def __init__(self, ses_client: Any = None, config: Settings = default_settings):
        self.ses_client = ses_client if ses_client is not None else create_ses_client(config)
        self.from_email = config.ses_from_email
        self.subject = config.reminder_subject
        self.frontend_url = config.frontend_url

    async def send_reminder(
        self,
        email: str,
        user_name: Optional[str] = None,
        message: Optional[str] = None,
        action_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send a reminder email

        Args:
            email: recipient address
            user_name: greeting name, "there" when missing
            message: reminder body, a generic text when missing
            action_url: link rendered as a button, frontend URL when missing

        Returns:
            Dict with ``success`` and either ``message_id`` or ``error``
        """
        try:
            html_content = self.render_reminder(
                user_name=user_name or "there",
                message=message or DEFAULT_REMINDER_MESSAGE,
                action_url=action_url or self.frontend_url,
            )
            response = await run_in_threadpool(
                self._send_email,
                to_email=email,
                subject=self.subject,
                html_content=html_content,
                text_content=self._html_to_text(html_content),
            )
            logger.info(f"Reminder email sent to {email}, MessageId={response.get('MessageId')}")
            return {"success": True, "message_id": response.get("MessageId")}

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to send reminder email to {email}: {str(e)}")
            return {"success": False, "error": str(e)}

    def render_reminder(self, user_name: str, message: str, action_url: Optional[str]) -> str:
        template = Template(REMINDER_TEMPLATE, autoescape=True)
        return template.render(
            subject=self.subject,
            user_name=user_name,
            message=message,
            action_url=action_url,
        )

    def _send_email(self, to_email: str, subject: str, html_content: str, text_content: str) -> Dict[str, Any]:
        return self.ses_client.send_email(
            Source=self.from_email,
            Destination={"ToAddresses": [to_email]},
            Message={
                "Subject": {"Data": subject, "Charset": "UTF-8"},
                "Body": {
                    "Html": {"Data": html_content, "Charset": "UTF-8"},
                    "Text": {"Data": text_content, "Charset": "UTF-8"},
                },
            },
        )

    def _html_to_text(self, html_content: str) -> str:
        """Convert HTML to plain text"""
        # <head> holds only the stylesheet
        body = re.sub(r"<head>.*?</head>", "", html_content, flags=re.S)
        text = re.sub("<[^<]+?>", "", body)
        text = re.sub(r"\s+", " ", text)
        return text.strip()
