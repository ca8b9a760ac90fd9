"""Routes encoded messages to channels by name."""

import logging
from typing import Dict, List, Optional

from ..core.errors import UnknownChannelError
from .channel import MethodChannel

logger = logging.getLogger(__name__)


class BinaryMessenger:
    """Registry of the method channels a host exposes."""

    def __init__(self):
        self._channels: Dict[str, MethodChannel] = {}

    def register(self, channel: MethodChannel) -> MethodChannel:
        if channel.name in self._channels:
            logger.warning(f"Replacing channel {channel.name}")
        self._channels[channel.name] = channel
        return channel

    def unregister(self, name: str) -> None:
        self._channels.pop(name, None)

    def channel(self, name: str) -> MethodChannel:
        try:
            return self._channels[name]
        except KeyError:
            raise UnknownChannelError(name) from None

    @property
    def names(self) -> List[str]:
        return sorted(self._channels)

    async def send(self, name: str, message: bytes) -> Optional[bytes]:
        """Deliver an encoded call to the channel called ``name``.

        Raises:
            UnknownChannelError: If no such channel is registered
        """
        return await self.channel(name).handle_message(message)
