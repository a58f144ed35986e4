import asyncio
import logging
from typing import Awaitable, Callable, List
from mapmate.core.config import settings
from mapmate.core.errors import UpstreamServiceError
from mapmate.core.grid import generate_grid
from mapmate.core.logger import logs
from mapmate.models.geo_model import Business, GridPoint, PlaceResult, SearchQuery
from mapmate.services.places_client import PlacesClient, to_business, to_place_result

class PlacesService:
    """
    Aggregates Nearby Search results.

    fetch_all_pages follows pagination tokens for one location and tolerates
    upstream failures (partial results are returned). grid_search fans a query
    out over a 3x3 grid and fails as a whole if any point fails.
    """

    def __init__(
        self,
        client: PlacesClient,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        max_pages: int = None,
        page_delay: float = None,
        result_cap: int = None,
    ):
        self.client = client
        self.sleep = sleep
        self.max_pages = max_pages or settings.MAX_PAGES
        self.page_delay = settings.PAGE_DELAY_SECONDS if page_delay is None else page_delay
        self.result_cap = result_cap or settings.GRID_RESULT_CAP

    async def fetch_all_pages(self, query: SearchQuery) -> List[PlaceResult]:
        results: List[PlaceResult] = []
        next_page_token = None

        for page in range(self.max_pages):
            if next_page_token:
                # Upstream tokens are not valid immediately after being issued
                await self.sleep(self.page_delay)

            try:
                logs.log(logging.INFO, f"Fetching page {page + 1} for '{query.keyword}' at {query.center.lat}, {query.center.lng}")
                data = await self.client.nearby_search(
                    lat=query.center.lat,
                    lng=query.center.lng,
                    radius=settings.PAGE_SEARCH_RADIUS_M,
                    keyword=query.keyword,
                    page_token=next_page_token
                )
            except UpstreamServiceError as e:
                logs.log(logging.ERROR, f"Error fetching results: {e.error}", extra={"details": e.details})
                break

            results.extend(self._reshape(data.get("results", [])))
            next_page_token = data.get("next_page_token")
            if not next_page_token:
                break

        logs.log(logging.INFO, f"Collected {len(results)} results for '{query.keyword}'")
        return results

    async def grid_search(self, query: SearchQuery) -> List[PlaceResult]:
        grid_points = generate_grid(query.center, query.radius_km)
        logs.log(logging.INFO, f"Grid search for '{query.keyword}' over {len(grid_points)} points, radius {query.radius_km} km")

        tasks = [
            asyncio.create_task(self._search_point(point, query.keyword))
            for point in grid_points
        ]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            # one failed point fails the search, stop the rest
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        for task in tasks:
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()

        # merge in grid index order, never completion order
        per_point = [task.result() for task in tasks]

        unique: List[PlaceResult] = []
        seen = set()
        for point_results in per_point:
            for place in point_results:
                if place.place_id in seen:
                    continue
                seen.add(place.place_id)
                unique.append(place)

        logs.log(logging.INFO, f"Grid search found {len(unique)} unique places, returning up to {self.result_cap}")
        return unique[:self.result_cap]

    async def _search_point(self, point: GridPoint, keyword: str) -> List[PlaceResult]:
        try:
            data = await self.client.nearby_search(
                lat=point.lat,
                lng=point.lng,
                radius=settings.GRID_POINT_RADIUS_M,
                keyword=keyword
            )
        except UpstreamServiceError as e:
            logs.log(logging.ERROR, f"Grid point {point.index} failed: {e.error}", extra={"details": e.details})
            raise
        return self._reshape(data.get("results", []))

    async def find_businesses(self, keyword: str, lat: float, lng: float) -> List[Business]:
        data = await self.client.nearby_search(
            lat=lat,
            lng=lng,
            radius=settings.BUSINESS_SEARCH_RADIUS_M,
            keyword=keyword
        )
        businesses = [to_business(raw) for raw in data.get("results", [])]
        logs.log(logging.INFO, f"Found {len(businesses)} businesses for '{keyword}'")
        return businesses

    def _reshape(self, raw_results: list) -> List[PlaceResult]:
        places = []
        for raw in raw_results:
            place = to_place_result(raw)
            if place is not None:
                places.append(place)
        return places
