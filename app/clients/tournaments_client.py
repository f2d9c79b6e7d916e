import json
import logging
from typing import Any

import httpx

from app.utils.pagination import MetaData

logger = logging.getLogger(__name__)

JSON_PATCH_MEDIA_TYPE = "application/json-patch+json"


class TournamentsClientError(Exception):
    """Non-success response from the tournaments API."""

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        self.body = body
        detail = body.get("detail") if isinstance(body, dict) else body
        super().__init__(f"Tournaments API returned {status_code}: {detail}")


class TournamentsClient:
    """Async client for the tournaments endpoints.

    Pass ``transport`` to route requests somewhere other than the network,
    e.g. ``httpx.ASGITransport(app=app)``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api",
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TournamentsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, url, **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            logger.warning("%s %s failed with %s", method, url, response.status_code)
            raise TournamentsClientError(response.status_code, body)
        return response

    async def list_tournaments(
        self,
        page_number: int = 1,
        page_size: int | None = None,
        include_games: bool = False,
    ) -> tuple[list[dict[str, Any]], MetaData | None]:
        params: dict[str, Any] = {"pageNumber": page_number, "includeGames": include_games}
        if page_size is not None:
            params["pageSize"] = page_size
        response = await self._request("GET", "/tournaments", params=params)
        return response.json(), parse_pagination(response.headers.get("X-Pagination"))

    async def get_tournament(self, tournament_id: int, include_games: bool = False) -> dict[str, Any]:
        response = await self._request(
            "GET", f"/tournaments/{tournament_id}", params={"includeGames": include_games}
        )
        return response.json()

    async def create_tournament(self, title: str, start_date: str) -> dict[str, Any]:
        response = await self._request(
            "POST", "/tournaments", json={"title": title, "startDate": start_date}
        )
        return response.json()

    async def patch_tournament(
        self, tournament_id: int, operations: list[dict[str, Any]]
    ) -> dict[str, Any] | None:
        """Apply a JSON patch. Returns None when the server reports no change (304)."""
        response = await self._request(
            "PATCH",
            f"/tournaments/{tournament_id}",
            content=json.dumps(operations),
            headers={"Content-Type": JSON_PATCH_MEDIA_TYPE},
        )
        if response.status_code == 304:
            return None
        return response.json()

    async def delete_tournament(self, tournament_id: int) -> dict[str, Any]:
        response = await self._request("DELETE", f"/tournaments/{tournament_id}")
        return response.json()


def parse_pagination(header: str | None) -> MetaData | None:
    if not header:
        return None
    data = json.loads(header)
    return MetaData(
        current_page=data["currentPage"],
        total_pages=data["totalPages"],
        page_size=data["pageSize"],
        total_count=data["totalCount"],
    )
