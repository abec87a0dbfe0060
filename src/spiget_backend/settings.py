import os
import threading


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ["true", "1", "yes", "on"]


class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")

        # Security: Force disable debug info in API responses (overrides DEBUG_MODE)
        self.DISABLE_API_DEBUG_INFO = _flag("DISABLE_API_DEBUG_INFO", "false")

        # Node role; only the master proxies downloads and accepts update requests.
        # Fixed for the lifetime of the process; the master must be configured explicitly.
        self.SERVER_MODE = os.environ.get("SERVER_MODE", "mirror").lower()
        self.MASTER_URL = os.environ.get("MASTER_URL", "https://api.spiget.org/v2")

        # Upstream origin
        self.USER_AGENT = os.environ.get("USER_AGENT", "Spiget/2.0 (+https://spiget.org)")
        self.SPIGOT_URL = os.environ.get("SPIGOT_URL", "https://www.spigotmc.org")
        self.SPIGOT_API_URL = os.environ.get("SPIGOT_API_URL", "https://api.spigotmc.org/simple/0.2/index.php")
        self.UPSTREAM_TIMEOUT = float(os.environ.get("UPSTREAM_TIMEOUT", "5"))
        self.PROXY_TIMEOUT = float(os.environ.get("PROXY_TIMEOUT", "60"))

        # File and image hosting
        self.CDN_URL = os.environ.get("CDN_URL", "https://cdn.spiget.org/file/spiget-resources")
        self.FALLBACK_ICON_URL = os.environ.get(
            "FALLBACK_ICON_URL",
            "https://static.spigotmc.org/styles/spigot/xenresource/resource_icon.png",
        )

        # Pagination
        self.PAGE_SIZE_DEFAULT = int(os.environ.get("PAGE_SIZE_DEFAULT", "10"))
        self.PAGE_SIZE_MAX = int(os.environ.get("PAGE_SIZE_MAX", "1000"))

    @property
    def is_master(self) -> bool:
        return self.SERVER_MODE == "master"

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

settings = BackendSettings()


def get_settings() -> BackendSettings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
