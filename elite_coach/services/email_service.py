import logging

import resend

from elite_coach.core.config import settings

logger = logging.getLogger(__name__)


def verification_link(token: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/verify-email?token={token}"


class EmailService:
    @staticmethod
    def send_verification_email(email_to: str, full_name: str, token: str):
        link = verification_link(token)

        if not settings.RESEND_API_KEY:
            logger.warning(f"RESEND_API_KEY not set, verification link for {email_to}: {link}")
            return None

        resend.api_key = settings.RESEND_API_KEY
        params = {
            "from": settings.SENDER_EMAIL,
            "to": [email_to],
            "subject": "Confirm your Elite Fitness Coach account",
            "html": f"""
            <div style="font-family: sans-serif; max-width: 480px; margin: auto; padding: 20px;">
                <h2 style="color: #ea580c;">Welcome, {full_name}!</h2>
                <p>Please confirm your email address to start using your dashboard.</p>
                <p style="text-align: center; margin: 32px 0;">
                    <a href="{link}" style="background: #ea580c; color: #fff; padding: 12px 24px;
                       border-radius: 8px; text-decoration: none;">Confirm email</a>
                </p>
                <p style="font-size: 12px; color: #777;">
                    This link expires in {settings.EMAIL_VERIFICATION_EXPIRE_HOURS} hours.
                </p>
            </div>
            """
        }
        try:
            return resend.Emails.send(params)
        except Exception as e:
            # runs as a background task, nothing upstream to report to
            logger.error(f"Failed to send verification email to {email_to}: {e}")
            return None


email_service = EmailService()
