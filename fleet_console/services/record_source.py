# fleet_console/services/record_source.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from fleet_console.services.field_registry import get_entity

logger = logging.getLogger(__name__)


class RecordSourceError(Exception):
    """The fleet API could not be reached or returned an unusable payload."""


class RecordSource:
    """
    Thin client over the fleet API's list endpoints.

    Every call is a full fetch; there is no incremental sync.
    Accepts either a bare JSON array or {"data": [...]}.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 15.0,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or "").rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def list(self, entity_type: str) -> List[Dict[str, Any]]:
        endpoint = f"{self.base_url}/api/{get_entity(entity_type).endpoint}"
        try:
            response = self.session.get(endpoint, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.warning("[Fleet API Error] Endpoint: %s | Error: %s", endpoint, e)
            raise RecordSourceError(f"Failed to load {entity_type}") from e
        except ValueError as e:
            logger.warning("[Fleet API Error] Endpoint: %s | Invalid JSON: %s", endpoint, e)
            raise RecordSourceError(f"Failed to load {entity_type}") from e

        if isinstance(payload, dict):
            payload = payload.get("data")
        if not isinstance(payload, list):
            raise RecordSourceError(f"Unexpected payload for {entity_type}")

        return [r for r in payload if isinstance(r, dict)]
