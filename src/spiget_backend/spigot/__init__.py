from .client import SpigotClient, get_spigot_client, close_spigot_client
from .exceptions import (
    SpigotError,
    SpigotAPIError,
    SpigotConnectionError,
    SpigotTimeoutError,
    SpigotResourceNotFoundError,
)
from .schemas import SpigotResource

__all__ = [
    "SpigotClient",
    "get_spigot_client",
    "close_spigot_client",
    "SpigotError",
    "SpigotAPIError",
    "SpigotConnectionError",
    "SpigotTimeoutError",
    "SpigotResourceNotFoundError",
    "SpigotResource",
]
