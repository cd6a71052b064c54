"""
Description:
Rate limiter shared by the routers, keyed by client IP address. Limits are set
per route with the `limiter.limit` decorator.

Dependencies:
- slowapi: For rate limiting functionality.
- loguru: For logging information about the rate limiter initialization.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from loguru import logger

limiter = Limiter(key_func=get_remote_address)
logger.info("Rate limiter initialized")
