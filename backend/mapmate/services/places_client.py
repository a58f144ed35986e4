import httpx
import logging
from typing import Optional
from mapmate.core.config import settings
from mapmate.core.errors import UpstreamServiceError
from mapmate.core.logger import logs
from mapmate.models.geo_model import Business, Coordinate, PlaceResult

NEARBY_SEARCH_PATH = "/maps/api/place/nearbysearch/json"
OK_STATUSES = {"OK", "ZERO_RESULTS"}

class PlacesClient:
    """Thin wrapper around the Google Places Nearby Search endpoint."""

    def __init__(
        self,
        api_key: str = None,
        base_url: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_MAPS_API_KEY
        self.base_url = (base_url or settings.MAPS_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self.transport = transport

    async def nearby_search(
        self,
        lat: float = None,
        lng: float = None,
        radius: int = None,
        keyword: str = None,
        page_token: str = None,
    ) -> dict:
        """
        One upstream call. With a page_token every other parameter is ignored
        upstream, so only the token and key are sent.
        Returns the raw payload: {"results": [...], "next_page_token": ...}
        """
        if page_token:
            params = {"pagetoken": page_token, "key": self.api_key}
        else:
            params = {
                "location": f"{lat},{lng}",
                "radius": radius,
                "keyword": keyword,
                "key": self.api_key
            }

        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}{NEARBY_SEARCH_PATH}",
                    params=params,
                    timeout=self.timeout
                )
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPError as e:
                raise UpstreamServiceError("Places request failed", details=str(e)) from e
            except ValueError as e:
                raise UpstreamServiceError("Places response was not valid JSON", details=str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("results", []), list):
            raise UpstreamServiceError(
                "Places response was not valid JSON",
                details=f"unexpected payload: {str(data)[:200]}"
            )

        status = data.get("status")
        if status is not None and status not in OK_STATUSES:
            raise UpstreamServiceError(
                "Places request failed",
                details=data.get("error_message") or status
            )
        return data

def to_place_result(raw: dict) -> Optional[PlaceResult]:
    """Reshape one upstream result. Results without a place_id are dropped."""
    place_id = raw.get("place_id")
    if not place_id:
        logs.log(logging.WARNING, f"Skipping result without place_id: {raw.get('name')}")
        return None

    location = raw.get("geometry", {}).get("location", {})
    return PlaceResult(
        place_id=place_id,
        name=raw.get("name", ""),
        categories=raw.get("types", []),
        location=Coordinate(lat=location.get("lat", 0.0), lng=location.get("lng", 0.0)),
        address=raw.get("vicinity") or raw.get("formatted_address") or "",
        phone=raw.get("formatted_phone_number") or "N/A"
    )

def to_business(raw: dict) -> Business:
    location = raw.get("geometry", {}).get("location", {})
    return Business(
        name=raw.get("name", ""),
        description=", ".join(raw.get("types", [])),
        lat=location.get("lat"),
        lng=location.get("lng"),
        address=raw.get("vicinity"),
        phone=raw.get("formatted_phone_number") or "N/A"
    )
