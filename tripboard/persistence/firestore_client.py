"""Firestore async client singleton."""

from __future__ import annotations

import logging
from typing import Any

from tripboard.persistence.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

_client: Any = None


def get_firestore_client() -> Any:
    """Return a lazy-initialized Firestore AsyncClient.

    Uses Application Default Credentials (ADC); set
    ``FIRESTORE_EMULATOR_HOST`` to target a local emulator.
    """
    global _client
    if _client is not None:
        return _client

    from google.cloud.firestore import AsyncClient

    try:
        _client = AsyncClient()
    except Exception as exc:
        raise StoreUnavailableError(f"Cannot create Firestore client: {exc}") from exc
    logger.info("Using Google Cloud Firestore")
    return _client


def _reset_client() -> None:
    """Reset the singleton (for testing only)."""
    global _client
    _client = None
