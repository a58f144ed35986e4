from fastapi import APIRouter, Depends, Query

from mapmate.core.errors import UpstreamServiceError
from mapmate.models.geo_model import (
    Coordinate,
    FindBusinessesRequest,
    FindBusinessesResponse,
    PlacesResponse,
    SearchQuery,
)
from mapmate.routes.dependencies import get_places_service
from mapmate.services.Places_service import PlacesService

router = APIRouter(prefix="/api")

@router.post("/find-businesses", response_model=FindBusinessesResponse)
async def find_businesses_endpoint(
    request: FindBusinessesRequest,
    service: PlacesService = Depends(get_places_service)
):
    try:
        businesses = await service.find_businesses(request.query, request.lat, request.lng)
    except UpstreamServiceError as e:
        raise UpstreamServiceError("Failed to find businesses", details=e.details) from e
    return FindBusinessesResponse(businesses=businesses)

@router.get("/nearby-search", response_model=PlacesResponse)
async def nearby_search_endpoint(
    query: str = Query(..., min_length=1),
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    service: PlacesService = Depends(get_places_service)
):
    """Every page for one location. Upstream failures end the stream early."""
    search = SearchQuery(keyword=query, center=Coordinate(lat=lat, lng=lng))
    return PlacesResponse(results=await service.fetch_all_pages(search))

@router.get("/grid-search", response_model=PlacesResponse)
async def grid_search_endpoint(
    query: str = Query(..., min_length=1),
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: float = Query(..., ge=0, description="Radius in kilometers"),
    service: PlacesService = Depends(get_places_service)
):
    search = SearchQuery(keyword=query, center=Coordinate(lat=lat, lng=lng), radius_km=radius)
    try:
        results = await service.grid_search(search)
    except UpstreamServiceError as e:
        raise UpstreamServiceError("An error occurred during the search", details=e.details) from e
    return PlacesResponse(results=results)
