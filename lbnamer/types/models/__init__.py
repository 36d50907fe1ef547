from .namer_config import NamerConfig

__all__ = ["NamerConfig"]
