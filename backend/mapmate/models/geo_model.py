from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional

# --- Domain Models ---
class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

class GridPoint(BaseModel):
    """A lattice position around a center. Coordinates are not range-checked."""
    model_config = ConfigDict(frozen=True)

    row: int
    col: int
    lat: float
    lng: float

    @property
    def index(self) -> int:
        return self.row * 3 + self.col

class SearchQuery(BaseModel):
    keyword: str
    center: Coordinate
    radius_km: float = Field(0.0, ge=0)

class PlaceResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    place_id: str
    name: str = ""
    categories: List[str] = []
    location: Coordinate
    address: str = ""
    phone: str = "N/A"

class Business(BaseModel):
    name: str
    description: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    address: Optional[str] = None
    phone: str = "N/A"

# --- API Request/Response Models ---
class FindBusinessesRequest(BaseModel):
    query: str = Field(..., min_length=1)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

class FindBusinessesResponse(BaseModel):
    businesses: List[Business]

class PlacesResponse(BaseModel):
    results: List[PlaceResult]
