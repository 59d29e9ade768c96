import logging

import httpx

from src.app.services.notification_service import INotificationService

logger = logging.getLogger(__name__)


class ConsoleNotificationService(INotificationService):
    """Writes alerts to the service log"""

    async def send_admin_alert(self, message: str) -> None:
        logger.info(f"[ADMIN ALERT] {message}")

    async def send_system_alert(self, message: str) -> None:
        logger.error(f"[SYSTEM ALERT] {message}")


class WebhookNotificationService(INotificationService):
    """
    Posts alerts to a chat webhook (Slack/Discord-compatible {"text": ...}).

    Delivery failures are logged; alerts never break the caller.
    """

    def __init__(self, webhook_url: str, *, timeout: float = 5.0, client: httpx.AsyncClient = None):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client = client

    async def _post(self, text: str) -> None:
        try:
            if self._client is not None:
                response = await self._client.post(self.webhook_url, json={"text": text})
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.webhook_url, json={"text": text})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error(f"Webhook notification failed: {exc}")

    async def send_admin_alert(self, message: str) -> None:
        await self._post(f"[ADMIN ALERT] {message}")

    async def send_system_alert(self, message: str) -> None:
        await self._post(f"[SYSTEM ALERT] {message}")
