"""
Mailer interface and fire-and-forget delivery.

Use cases never await delivery: they hand a MailMessage to the
MailDispatcher, which sends it on a background task and only logs the
outcome.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional, Set

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class MailContent(BaseModel):
    """Structured body, rendered to HTML/plaintext by the mailer"""

    name: str
    intro: str
    instruction: str
    button_text: str
    action_url: str
    outro: str = "Need help, or have questions? Just reply to this email, we'd love to help."


class MailMessage(BaseModel):
    recipient: str
    subject: str
    content: MailContent


class IMailer(ABC):
    """Mail delivery collaborator"""

    @abstractmethod
    async def send(self, message: MailMessage) -> bool:
        """Deliver a message. Returns False on failure, never raises."""
        pass


def email_verification_content(username: str, verification_url: str) -> MailContent:
    return MailContent(
        name=username,
        intro="Welcome to our App! We're excited to have you on board.",
        instruction="To verify your email please click on the button below.",
        button_text="Verify your email",
        action_url=verification_url,
    )


def password_reset_content(username: str, password_reset_url: str) -> MailContent:
    return MailContent(
        name=username,
        intro="We got a request to reset the password of your account.",
        instruction="To reset your password click on the button below.",
        button_text="Reset password",
        action_url=password_reset_url,
    )


class MailDispatcher:
    """Schedules deliveries as background tasks and logs their outcome"""

    def __init__(self, mailer: IMailer):
        self.mailer = mailer
        self._pending: Set[asyncio.Task] = set()

    def dispatch(self, message: MailMessage) -> Optional[asyncio.Task]:
        try:
            task = asyncio.get_running_loop().create_task(self._deliver(message))
        except RuntimeError:
            logger.error(f"No running event loop; mail to {message.recipient} dropped")
            return None
        # Hold a reference until done so the task is not garbage collected
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(self, message: MailMessage) -> None:
        try:
            sent = await self.mailer.send(message)
        except Exception:
            logger.exception(f"Mail delivery to {message.recipient} raised")
            return
        if sent:
            logger.info(f"Mail '{message.subject}' sent to {message.recipient}")
        else:
            logger.warning(f"Mail '{message.subject}' to {message.recipient} failed")

    async def drain(self) -> None:
        """Wait for every outstanding delivery"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
