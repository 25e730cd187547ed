"""
Rate limiter configuration using slowapi
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from layoutlens.config import config

# Initialize the limiter
limiter = Limiter(key_func=get_remote_address, enabled=bool(config.get("rate_limit", "enabled", True)))
