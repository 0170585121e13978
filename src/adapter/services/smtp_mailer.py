"""SMTP implementation of IMailer.

Bodies are rendered from Jinja2 templates; the blocking smtplib exchange
runs on a worker thread so the event loop is never held.
"""

import asyncio
import logging
import os
import smtplib
from email.message import EmailMessage

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.app.services.mailer import IMailer, MailMessage

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")


class SmtpMailer(IMailer):
    def __init__(
        self,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        use_tls: bool = False,
        sender: str = "no-reply@example.com",
        product_name: str = "Task Manager",
        product_link: str = "",
        template_dir: str = _DEFAULT_TEMPLATE_DIR,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._sender = sender
        self._product = {"name": product_name, "link": product_link}
        self._jinja = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    @classmethod
    def from_config(cls, config) -> "SmtpMailer":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
            use_tls=config.SMTP_USE_TLS,
            sender=config.MAIL_FROM,
            product_name=config.MAIL_PRODUCT_NAME,
            product_link=config.MAIL_PRODUCT_LINK,
        )

    def render(self, message: MailMessage) -> EmailMessage:
        context = {"content": message.content, "product": self._product}
        email = EmailMessage()
        email["From"] = self._sender
        email["To"] = message.recipient
        email["Subject"] = message.subject
        email.set_content(self._jinja.get_template("action_email.txt").render(**context))
        email.add_alternative(
            self._jinja.get_template("action_email.html").render(**context),
            subtype="html",
        )
        return email

    def _deliver(self, email: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=30) as server:
            if self._use_tls:
                server.starttls()
            if self._username and self._password:
                server.login(self._username, self._password)
            server.send_message(email)

    async def send(self, message: MailMessage) -> bool:
        try:
            email = self.render(message)
            await asyncio.to_thread(self._deliver, email)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                f"Email service failed for {message.recipient} "
                f"({type(e).__name__}: {e}); check the SMTP settings"
            )
            return False
        return True
