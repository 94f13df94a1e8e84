from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Protocol

import httpx
from sqlalchemy.exc import SQLAlchemyError

from .surveys.engine import record_response
from .surveys.schema import SurveySpec


logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    """A submission was not stored; ``message`` is shown to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SubmissionGateway(Protocol):
    async def submit_answers(self, survey_id: str, answers: Dict[str, Any]) -> Dict[str, Any]:
        ...


class StoreSubmissionGateway:
    """Persists submissions in the local database, in-process."""

    async def submit_answers(self, survey_id: str, answers: Dict[str, Any]) -> Dict[str, Any]:
        try:
            row = await asyncio.to_thread(record_response, survey_id, answers)
        except SQLAlchemyError as e:
            logger.exception("submit error")
            raise SubmissionError("server error") from e
        return {"ok": True, "data": row.to_dict()}


class HttpSubmissionGateway:
    """Talks to a running survey service over HTTP."""

    def __init__(self, base_url: str, timeout: float = 20.0, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def fetch_survey(self) -> SurveySpec:
        url = f"{self.base_url}/api/survey"
        async with self._client() as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return SurveySpec.model_validate(resp.json())

    async def submit_answers(self, survey_id: str, answers: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/api/submit"
        payload = {"surveyId": survey_id, "answers": answers}
        try:
            async with self._client() as client:
                resp = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise SubmissionError(str(e) or "Submission failed") from e

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not resp.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            raise SubmissionError(str(error or "Submit failed"))
        if not isinstance(data, dict):
            raise SubmissionError("Malformed response from server")
        return data
