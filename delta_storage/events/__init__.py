"""
Push notifications for directory changes.
"""

from delta_storage.events.bridge import (
    DIRECTORY_CHANGE,
    DIRECTORY_INITIALIZE,
    ChangeNotificationBridge,
    ChannelState,
    Subscription,
)
from delta_storage.events.channel import EventChannel, SocketIOChannel

__all__ = [
    "DIRECTORY_CHANGE",
    "DIRECTORY_INITIALIZE",
    "ChangeNotificationBridge",
    "ChannelState",
    "EventChannel",
    "SocketIOChannel",
    "Subscription",
]
