"""
SMTP email transport, resolved once from configuration
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Optional
from urllib.parse import unquote, urlparse

from fastapi.concurrency import run_in_threadpool

from eventdesk.core.config import Settings

logger = logging.getLogger(__name__)

# host, port, implicit TLS
KNOWN_SERVICES = {
    "gmail": ("smtp.gmail.com", 465, True),
    "outlook": ("smtp-mail.outlook.com", 587, False),
    "hotmail": ("smtp-mail.outlook.com", 587, False),
    "office365": ("smtp.office365.com", 587, False),
    "yahoo": ("smtp.mail.yahoo.com", 465, True),
    "zoho": ("smtp.zoho.com", 465, True),
}


class SmtpTransport:
    """Sends one HTML message per connection"""

    def __init__(
        self,
        host: str,
        port: int,
        secure: bool = False,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        timeout: float = 20.0,
    ):
        self.host = host
        self.port = port
        self.secure = secure
        self.username = username
        self.password = password
        self.sender = sender or username or f"no-reply@{host}"
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"SmtpTransport(host={self.host!r}, port={self.port}, secure={self.secure})"

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable email client.")
        message.add_alternative(html, subtype="html")
        return message

    def _send_blocking(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self.secure:
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with server:
            if not self.secure:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=context)
                    server.ehlo()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(message)

    async def send(self, to: str, subject: str, html: str) -> None:
        message = self.build_message(to, subject, html)
        await run_in_threadpool(self._send_blocking, message)


def resolve_email_transport(settings: Settings) -> Optional[SmtpTransport]:
    """Pick the transport from, in order: SMTP_URL, SMTP_HOST, EMAIL_SERVICE.

    Returns None when nothing usable is configured; email is then disabled.
    """
    sender = settings.EMAIL_FROM
    timeout = settings.SMTP_TIMEOUT_SECONDS

    if settings.SMTP_URL:
        parsed = urlparse(settings.SMTP_URL)
        if parsed.scheme not in ("smtp", "smtps") or not parsed.hostname:
            logger.error(f"Ignoring SMTP_URL with unsupported form: scheme={parsed.scheme!r}")
        else:
            secure = parsed.scheme == "smtps"
            username = unquote(parsed.username) if parsed.username else None
            return SmtpTransport(
                host=parsed.hostname,
                port=parsed.port or (465 if secure else 587),
                secure=secure,
                username=username,
                password=unquote(parsed.password) if parsed.password else None,
                sender=sender or username,
                timeout=timeout,
            )

    if settings.SMTP_HOST:
        secure = settings.SMTP_SECURE
        return SmtpTransport(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT or (465 if secure else 587),
            secure=secure,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=sender or settings.SMTP_USER,
            timeout=timeout,
        )

    if settings.EMAIL_SERVICE:
        service = KNOWN_SERVICES.get(settings.EMAIL_SERVICE.strip().lower())
        if service is None:
            logger.error(f"Unknown EMAIL_SERVICE {settings.EMAIL_SERVICE!r}")
        elif not (settings.SMTP_USER and settings.SMTP_PASSWORD):
            logger.error("EMAIL_SERVICE is set but SMTP_USER/SMTP_PASSWORD are missing")
        else:
            host, port, secure = service
            return SmtpTransport(
                host=host,
                port=port,
                secure=secure,
                username=settings.SMTP_USER,
                password=settings.SMTP_PASSWORD,
                sender=sender or settings.SMTP_USER,
                timeout=timeout,
            )

    return None
