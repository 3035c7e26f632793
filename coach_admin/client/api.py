"""
HTTP client for the coach API.

Wraps an httpx.Client and turns responses back into domain objects and
domain errors:
- 404 -> CoachNotFoundError
- 400 -> InvalidCoachError
- anything else that isn't 2xx, or no response at all -> CoachApiError

Any httpx.Client works as transport, including FastAPI's TestClient.
"""

import logging
from typing import Any, Mapping, Optional

import httpx

from ..config.settings import Settings, get_settings
from ..core.coaches.errors import CoachError, CoachNotFoundError, InvalidCoachError
from ..core.coaches.models import Coach

logger = logging.getLogger(__name__)


class CoachApiError(CoachError):
    """Raised when the coach API fails or can't be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class CoachApiClient:
    """
    Synchronous client for the coach endpoints.

    Pass `client` to reuse an existing httpx.Client; otherwise one is
    created from settings (COACH_API_URL, CLIENT_TIMEOUT_SECONDS) and
    closed by `close()`.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            settings = settings or get_settings()
            self._client = httpx.Client(
                base_url=base_url or settings.coach_api_url,
                timeout=settings.client_timeout_seconds,
            )
            self._owns_client = True

    def __enter__(self) -> "CoachApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    # -----------------------------------------------------------------------
    # Endpoints
    # -----------------------------------------------------------------------

    def list_coaches(self) -> list[Coach]:
        data = self._request("GET", "/coaches")
        return [self._to_coach(item) for item in data]

    def get_coach(self, coach_id: str) -> Coach:
        return self._to_coach(self._request("GET", f"/coaches/{coach_id}", coach_id=coach_id))

    def create_coach(self, fields: Mapping[str, Any]) -> Coach:
        return self._to_coach(self._request("POST", "/coaches", json=dict(fields)))

    def update_coach(self, coach_id: str, fields: Mapping[str, Any]) -> Coach:
        data = self._request("PUT", f"/coaches/{coach_id}", json=dict(fields), coach_id=coach_id)
        return self._to_coach(data)

    def delete_coach(self, coach_id: str) -> str:
        data = self._request("DELETE", f"/coaches/{coach_id}", coach_id=coach_id)
        return data.get("message", "")

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        coach_id: Optional[str] = None,
    ) -> Any:
        try:
            response = self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.error(
                "Coach API unreachable",
                extra={"method": method, "path": path, "error": str(e)}
            )
            raise CoachApiError(f"Could not reach coach service: {e}")

        if response.is_success:
            return response.json()

        detail = self._error_detail(response)

        if response.status_code == 404:
            raise CoachNotFoundError(coach_id or "", detail)
        if response.status_code == 400:
            raise InvalidCoachError(detail)

        logger.error(
            "Coach API request failed",
            extra={"method": method, "path": path, "status_code": response.status_code}
        )
        raise CoachApiError(detail, status_code=response.status_code)

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase

        if isinstance(body, dict):
            detail = body.get("detail") or body.get("error")
            if isinstance(detail, str):
                return detail
        return response.reason_phrase

    @staticmethod
    def _to_coach(data: Mapping[str, Any]) -> Coach:
        try:
            return Coach.from_dict(dict(data))
        except (KeyError, TypeError, ValueError) as e:
            raise CoachApiError(f"Unexpected coach payload: {e}")
