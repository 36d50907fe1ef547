from .namer_config import NamerConfigSchema

__all__ = ["NamerConfigSchema"]
