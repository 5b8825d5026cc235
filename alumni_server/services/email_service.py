"""Outbound email for verification and password reset codes.

Sends through SendGrid when SENDGRID_API_KEY is configured. Without a
key (development, tests) the message is recorded in `outbox` and a log
line notes the suppressed send.
"""
import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

logger = logging.getLogger(__name__)

BRAND = 'Alumni Community'


def _code_email_html(name, heading, intro, label, code, expiry_note):
    return f"""
    <html>
      <body style="font-family: Arial, sans-serif; background-color: #0a0a0a; padding: 20px;">
        <div style="max-width: 600px; margin: auto; background: #1a1a1a; color: #ffffff; padding: 20px; border-radius: 10px;">
          <h1 style="color: #3b82f6; text-align: center;">{BRAND}</h1>
          <p style="color: #6b7280; text-align: center;">{heading}</p>
          <h2 style="color: #10b981;">Hello {name}!</h2>
          <p style="color: #d1d5db;">{intro}</p>
          <div style="border: 2px solid #3b82f6; border-radius: 10px; padding: 20px; text-align: center;">
            <h3 style="color: #3b82f6; margin: 0 0 10px 0;">{label}</h3>
            <div style="font-size: 32px; font-weight: bold; letter-spacing: 5px; font-family: monospace;">{code}</div>
          </div>
          <p style="color: #d1d5db; font-size: 14px;">{expiry_note}</p>
        </div>
      </body>
    </html>
    """


class EmailService:

    def __init__(self, api_key=None, from_email=None):
        self.api_key = api_key
        self.from_email = from_email
        self.outbox = []

    def _send(self, to_email, subject, html_content):
        if not self.api_key:
            self.outbox.append({'to': to_email, 'subject': subject, 'html': html_content})
            logger.info("[EMAIL] SendGrid not configured, suppressed '%s' to %s", subject, to_email)
            return False

        message = Mail(
            from_email=(self.from_email, BRAND),
            to_emails=to_email,
            subject=subject,
            html_content=html_content,
        )
        try:
            response = SendGridAPIClient(self.api_key).send(message)
        except Exception:
            logger.exception("[SENDGRID] Failed to send '%s' to %s", subject, to_email)
            raise
        logger.info("[SENDGRID] '%s' to %s, status %s", subject, to_email, response.status_code)
        return True

    def send_verification_email(self, to_email, code, name):
        html = _code_email_html(
            name,
            'Email Verification',
            'Thank you for joining! Use the code below to verify your email address.',
            'Verification Code',
            code,
            "If you didn't create an account, please ignore this email.",
        )
        return self._send(to_email, f'{BRAND} - Email Verification', html)

    def send_password_reset_email(self, to_email, code, name, expires_minutes):
        html = _code_email_html(
            name,
            'Password Reset Request',
            'We received a request to reset your password. Use the code below to set a new password.',
            'Reset Code',
            code,
            f"This code will expire in {expires_minutes} minutes. If you didn't request a reset, please ignore this email.",
        )
        return self._send(to_email, f'{BRAND} - Password Reset', html)
