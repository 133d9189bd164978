# jadwal/services/notification/notification_service.py
"""
Real-time notifications for the business dashboard and customer browsers.

Events are published to Redis pub/sub channels; the websocket gateway that
fans them out to connected clients subscribes to the same channels. Delivery is
best effort: a failed publish is logged and never undoes the data change that
triggered it.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from jadwal.config.redis import RedisKeys, get_redis
from jadwal.config.settings import get_settings

logger = logging.getLogger(__name__)

Publisher = Callable[[str, str], Awaitable[Any]]


async def redis_publish(channel: str, message: str) -> int:
    """Publish a message on a Redis channel, returns the number of receivers"""
    client = await get_redis()
    return await client.publish(channel, message)


class NotificationService:
    """Publishes booking events to business and customer channels"""

    # Event types emitted by the booking core
    NEW_BOOKING = "new_booking"
    STATUS_CHANGED = "status_changed"
    RESCHEDULE_REQUEST = "reschedule_request"
    RESCHEDULE_SUGGESTION = "reschedule_suggestion"
    RESCHEDULE_CONFIRMED = "reschedule_confirmed"

    def __init__(self, publisher: Optional[Publisher] = None, enabled: bool = True):
        self.publisher = publisher or redis_publish
        self.enabled = enabled

    async def notify_business(self, business_id, event: Dict[str, Any]) -> bool:
        channel = RedisKeys.BUSINESS_NOTIFICATIONS.format(business_id=business_id)
        return await self._publish(channel, event)

    async def notify_customer(self, customer_id, event: Dict[str, Any]) -> bool:
        if customer_id is None:
            # Walk-in bookings have no customer channel to reach
            return False
        channel = RedisKeys.CUSTOMER_NOTIFICATIONS.format(customer_id=customer_id)
        return await self._publish(channel, event)

    async def _publish(self, channel: str, event: Dict[str, Any]) -> bool:
        if not self.enabled:
            return False

        payload = {
            "type": "notification",
            "payload": event,
            "sent_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            await self.publisher(channel, json.dumps(payload, default=str))
            logger.debug(f"Published {event.get('type')} to {channel}")
            return True
        except Exception as e:
            logger.warning(f"Notification to {channel} failed: {e}")
            return False


_notifier: Optional[NotificationService] = None


def get_notifier() -> NotificationService:
    """FastAPI dependency returning the process-wide notifier"""
    global _notifier
    if _notifier is None:
        _notifier = NotificationService(enabled=get_settings().NOTIFICATIONS_ENABLED)
    return _notifier
