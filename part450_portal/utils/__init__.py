from .hashing import composite_key, sha256_hash
from .logger import setup_logging

__all__ = ["composite_key", "sha256_hash", "setup_logging"]
