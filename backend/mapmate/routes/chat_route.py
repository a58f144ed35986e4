from fastapi import APIRouter, Depends

from mapmate.core.errors import UpstreamServiceError
from mapmate.core.llm_connection import LLMService, get_llm_service
from mapmate.models.base_model import (
    ChatRequest,
    ChatResponse,
    ExtractLocationsRequest,
    ExtractLocationsResponse,
    SummaryRequest,
    SummaryResponse,
)

router = APIRouter(prefix="/api")

@router.post("/openai-chat", response_model=ChatResponse)
async def chat_endpoint(request: ChatRequest, llm: LLMService = Depends(get_llm_service)):
    try:
        reply = await llm.chat(request.message, request.history)
    except UpstreamServiceError as e:
        raise UpstreamServiceError("Failed to communicate with AI", details=e.details) from e
    return ChatResponse(message=reply)

@router.post("/extract-locations", response_model=ExtractLocationsResponse)
async def extract_locations_endpoint(
    request: ExtractLocationsRequest,
    llm: LLMService = Depends(get_llm_service)
):
    try:
        locations = await llm.extract_locations(request.text)
    except UpstreamServiceError as e:
        raise UpstreamServiceError("Failed to extract locations", details=e.details) from e
    return ExtractLocationsResponse(locations=locations)

@router.post("/generate-summary", response_model=SummaryResponse)
async def generate_summary_endpoint(
    request: SummaryRequest,
    llm: LLMService = Depends(get_llm_service)
):
    try:
        summary = await llm.generate_summary(request.lat, request.lng)
    except UpstreamServiceError as e:
        raise UpstreamServiceError("An error occurred while generating the summary.", details=e.details) from e
    return SummaryResponse(summary=summary)
