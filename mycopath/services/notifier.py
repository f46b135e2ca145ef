"""Outbound account e-mail.

Delivery is simulated: each message is rendered and written to the
structured log instead of being handed to an SMTP relay.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from mycopath.config import get_settings

logger = structlog.get_logger("mycopath.mail")


@dataclass(slots=True, frozen=True)
class MailMessage:
	to: str
	subject: str
	body: str


class Notifier:
	def __init__(self) -> None:
		settings = get_settings()
		self.sender = settings.mail_from
		self.base_url = settings.app_base_url.rstrip("/")

	def send(self, message: MailMessage) -> bool:
		logger.info(
			"mail_sent",
			sender=self.sender,
			to=message.to,
			subject=message.subject,
			body=message.body,
		)
		return True

	def send_verification(self, email: str, token: str, name: str) -> bool:
		link = f"{self.base_url}/verify-email?token={token}"
		return self.send(
			MailMessage(
				to=email,
				subject="Verify your Mycopath account",
				body=(
					f"Hello {name},\n\nConfirm your e-mail address to finish registering:\n"
					f"{link}\n\nThe link expires in {get_settings().verification_token_ttl_hours} hours."
				),
			)
		)

	def send_welcome(self, email: str, name: str) -> bool:
		return self.send(
			MailMessage(
				to=email,
				subject="Welcome to Mycopath",
				body=f"Hello {name},\n\nYour account is active. Sign in at {self.base_url}/auth.",
			)
		)

	def send_password_reset(self, email: str, token: str, name: str) -> bool:
		link = f"{self.base_url}/reset-password?token={token}"
		return self.send(
			MailMessage(
				to=email,
				subject="Reset your Mycopath password",
				body=(
					f"Hello {name},\n\nUse this link to choose a new password:\n{link}\n\n"
					f"The link expires in {get_settings().password_reset_token_ttl_minutes} minutes."
				),
			)
		)

	def send_password_changed(self, email: str, name: str) -> bool:
		return self.send(
			MailMessage(
				to=email,
				subject="Your Mycopath password has been reset",
				body=f"Hello {name},\n\nYour password was changed. Contact an administrator if this was not you.",
			)
		)
