"""
Record Service API Client

Responsibilities:
- Create and replace motion records
- Fetch the person roster
- Person deregistration

The service speaks JSON over HTTP. requests is blocking, so every call runs in
a worker thread to keep the Discord event loop responsive.
"""

from typing import Any, List, Optional
from urllib.parse import quote
import asyncio
import logging

import requests

from antragsbot.config import get_settings
from antragsbot.errors import RecordServiceError
from antragsbot.models.motion import Motion, Person

logger = logging.getLogger(__name__)


def _extract_error_detail(e: requests.HTTPError) -> str:
    """Pull a human-readable detail string from an HTTPError response."""
    try:
        return e.response.json().get("detail", str(e))
    except Exception:
        return str(e)


class RecordServiceClient:
    """HTTP client for the canonical motion record store."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.record_service_url).rstrip("/")
        self.timeout = timeout or settings.record_service_timeout
        self.session = session or requests.Session()

        token = token if token is not None else settings.record_service_token
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, endpoint: str, json: Optional[dict] = None) -> Any:
        if not self.base_url:
            raise RecordServiceError("RECORD_SERVICE_URL ist nicht konfiguriert.")

        url = f"{self.base_url}{endpoint}"
        try:
            resp = self.session.request(method, url, json=json, timeout=self.timeout)
            resp.raise_for_status()
            if not resp.content:
                return None
            return resp.json()
        except requests.HTTPError as e:
            detail = _extract_error_detail(e)
            logger.error(f"Record Service error {method} {endpoint}: {detail}")
            raise RecordServiceError(f"Record Service: {detail}") from e
        except requests.RequestException as e:
            logger.error(f"Cannot reach Record Service at {url}: {e}")
            raise RecordServiceError("Record Service ist nicht erreichbar.") from e

    async def _call(self, method: str, endpoint: str, json: Optional[dict] = None) -> Any:
        return await asyncio.to_thread(self._request, method, endpoint, json)

    async def create_record(self, motion: Motion) -> Motion:
        """
        Create a canonical record.

        Returns:
            The submitted motion carrying the assigned id
        """
        logger.info(f"Creating record for motion '{motion.title}'")
        payload = motion.model_dump(mode="json", exclude={"id"}, exclude_none=True)
        data = await self._call("POST", "/motions", json=payload)
        record_id = data.get("id") if isinstance(data, dict) else None
        if record_id in (None, ""):
            raise RecordServiceError("Record Service hat keine Antrags-ID vergeben.")
        created = motion.model_copy(update={"id": str(record_id)})
        logger.info(f"Record Service assigned id {created.id}")
        return created

    async def edit_record(self, motion: Motion) -> Motion:
        """Replace the record identified by motion.id with the given fields."""
        if not motion.id:
            raise ValueError("motion.id is required for an edit")

        logger.info(f"Replacing record {motion.id}")
        payload = motion.model_dump(mode="json", exclude_none=True)
        data = await self._call("PUT", f"/motions/{motion.id}", json=payload)
        return Motion.model_validate(data) if data else motion

    async def list_persons(self) -> List[Person]:
        data = await self._call("GET", "/persons")
        persons = [Person.model_validate(item) for item in data or []]
        logger.debug(f"Fetched roster of {len(persons)} persons")
        return persons

    async def put_deregistration(self, name: str) -> None:
        """Deregister a person by display name."""
        logger.info(f"Deregistering person '{name}'")
        await self._call("PUT", f"/persons/{quote(name, safe='')}/deregistration")
