from .roles import require_master

__all__ = ["require_master"]
