import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncWebsocketConsumer):
    """
    Live notification feed. Joins group ``user_<id>``, which is where
    ``push_notification`` sends every new notification of that user.
    """

    async def connect(self):
        self.user_id = self.scope.get("user_id")

        if self.user_id is None:
            logger.info("WS rejected: no gateway identity")
            await self.close()
            return

        self.group_name = f"user_{self.user_id}"
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        if getattr(self, "group_name", None):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def send_notification(self, event):
        payload = {key: value for key, value in event.items() if key != "type"}
        await self.send(text_data=json.dumps(payload))
