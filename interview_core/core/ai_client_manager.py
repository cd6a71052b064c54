"""
AI Client Manager

This module manages separate AI client instances for the three oracles (question
generation, answer scoring and feedback summarization) so that a slow summary
request never queues behind per-answer scoring traffic.
"""

import threading
from typing import Dict, Optional
from loguru import logger
from openai import AsyncOpenAI
from interview_core.core import config

SERVICE_TYPES = ("question_generation", "scoring", "summarization")


class AIClientManager:
    """
    Manages dedicated AsyncOpenAI clients per oracle.

    Clients are created lazily on first use so that importing the application
    does not require an API key.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self._api_key = api_key
        self._base_url = base_url
        self._clients: Dict[str, AsyncOpenAI] = {}
        self._initialized = False
        self._lock = threading.Lock()

    def _initialize_clients(self):
        """Lazy initialization of client instances."""
        if self._initialized:
            return

        with self._lock:
            # Double-check locking for initialization
            if self._initialized:
                return

            api_key = self._api_key or config.ORACLE_API_KEY
            if not api_key:
                raise RuntimeError(
                    "ORACLE_API_KEY environment variable is not set. "
                    "Please set it in your .env file or environment variables."
                )

            base_url = self._base_url or config.ORACLE_BASE_URL

            try:
                self._clients = {
                    service_type: AsyncOpenAI(base_url=base_url, api_key=api_key)
                    for service_type in SERVICE_TYPES
                }
                self._initialized = True
                logger.info(f"Initialized {len(self._clients)} dedicated AI client instances")
            except Exception as e:
                logger.error(f"Failed to initialize AI clients: {e}")
                raise RuntimeError(f"Failed to initialize AI clients: {e}") from e

    def get_client(self, service_type: str) -> AsyncOpenAI:
        """
        Get a dedicated client for the specified oracle.

        Args:
            service_type (str): "question_generation", "scoring" or "summarization"

        Raises:
            ValueError: If service_type is not supported
            RuntimeError: If clients failed to initialize
        """
        if service_type not in SERVICE_TYPES:
            raise ValueError(f"Unsupported service type: {service_type}. Available: {list(SERVICE_TYPES)}")

        self._initialize_clients()
        return self._clients[service_type]


_ai_manager: Optional[AIClientManager] = None
_manager_lock = threading.Lock()

def get_ai_client_manager() -> AIClientManager:
    """Get the process-wide AIClientManager, creating it on first use."""
    global _ai_manager

    if _ai_manager is None:
        with _manager_lock:
            # Double-check locking pattern
            if _ai_manager is None:
                _ai_manager = AIClientManager()

    return _ai_manager
