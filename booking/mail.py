import smtplib
import ssl
from email.message import EmailMessage

from booking.core import config


def send_mail(to: str, subject: str, body: str) -> None:
    """Deliver a plain-text email through the configured SMTP server."""
    message = EmailMessage()
    message['From'] = config.MAIL_FROM
    message['To'] = to
    message['Subject'] = subject
    message.set_content(body)

    with smtplib.SMTP(config.MAIL_HOST, config.MAIL_PORT, timeout=30) as server:
        if config.MAIL_USE_TLS:
            server.starttls(context=ssl.create_default_context())
        if config.MAIL_USER:
            server.login(config.MAIL_USER, config.MAIL_PASSWORD)
        server.send_message(message)
