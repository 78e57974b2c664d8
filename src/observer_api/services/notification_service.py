"""SMS delivery through an HTTP gateway.

Delivery is fire-and-forget: failures are logged and reported as ``False``,
never raised, so a gateway outage cannot undo an account change that has
already been committed.  Each attempt is also written to the JSON log sink
as a work-log record.
"""

import httpx
from loguru import logger

from observer_api.core.config import Settings
from observer_api.models import User

DEFAULT_TIMEOUT = 10.0
PASSWORD_SUBJECT = "Login password"


def mask_phone(phone: str | None) -> str:
    """Hide all but the last four digits of a phone number for logging."""
    if not phone:
        return "<none>"
    return f"{'*' * max(len(phone) - 4, 0)}{phone[-4:]}"


class SmsNotifier:
    """Sends one-way text messages.

    Args:
        gateway_url: Gateway endpoint; delivery is disabled when None.
        api_key: Optional bearer token for the gateway.
        sender: Sender name.
        timeout: Request timeout in seconds.
        login_url: Login address included in password messages.
        transport: Optional httpx transport (used in tests).
    """

    def __init__(
        self,
        gateway_url: str | None,
        *,
        api_key: str | None = None,
        sender: str = "observers",
        timeout: float = DEFAULT_TIMEOUT,
        login_url: str = "bit.ly/rosvybory",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._gateway_url = gateway_url
        self._api_key = api_key
        self._sender = sender
        self._timeout = timeout
        self._login_url = login_url
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmsNotifier":
        return cls(
            settings.sms_gateway_url,
            api_key=settings.sms_api_key,
            sender=settings.sms_sender,
            timeout=settings.sms_timeout,
            login_url=settings.login_url,
        )

    @property
    def enabled(self) -> bool:
        return self._gateway_url is not None

    async def send_message(self, phone: str, text: str, subject: str) -> bool:
        """Deliver ``text`` to ``phone``.

        Args:
            phone: Normalised 10-digit recipient number.
            text: Message body.
            subject: Short description recorded in the work log.

        Returns:
            True if the gateway accepted the message.
        """
        worklog = logger.bind(json_output=True, subject=subject, phone=mask_phone(phone))
        if self._gateway_url is None:
            logger.warning(f"SMS gateway not configured, dropping '{subject}' message to {mask_phone(phone)}")
            worklog.info("sms not sent: gateway not configured")
            return False

        payload = {"to": phone, "from": self._sender, "text": text}
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._gateway_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.TimeoutException:
            logger.warning(f"SMS gateway timeout sending '{subject}' to {mask_phone(phone)}")
            worklog.info("sms not sent: timeout")
            return False
        except httpx.HTTPStatusError as e:
            logger.warning(f"SMS gateway HTTP error {e.response.status_code} sending '{subject}'")
            worklog.info(f"sms not sent: HTTP {e.response.status_code}")
            return False
        except httpx.HTTPError as e:
            logger.warning(f"SMS gateway error sending '{subject}': {e}")
            worklog.info("sms not sent: transport error")
            return False

        worklog.info("sms sent")
        return True

    async def send_password(self, user: User) -> bool:
        """Send the user's freshly generated password to their phone."""
        if user.password is None:
            logger.warning(f"User {user.id} has no generated password to send")
            return False
        text = f"Observer database login: {self._login_url}, password: {user.password}"
        return await self.send_message(user.phone, text, PASSWORD_SUBJECT)
