"""
Reverse proxy: /api/place/* is forwarded to the provider's /maps/api/place/*.
"""
import httpx
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request, Response

from mapmate.core.config import settings
from mapmate.core.errors import UpstreamServiceError
from mapmate.core.logger import logs

router = APIRouter(prefix="/api")

# Hop-by-hop and connection specific headers are never forwarded
EXCLUDED_HEADERS = {
    "host", "connection", "keep-alive", "transfer-encoding", "content-length",
    "content-encoding", "te", "trailer", "upgrade", "proxy-authorization", "proxy-authenticate",
}

class MapsProxy:
    def __init__(self, base_url: str = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or settings.MAPS_BASE_URL).rstrip("/")
        self.transport = transport

    async def forward(self, request: Request, path: str) -> Response:
        url = f"{self.base_url}/maps/api/place/{path}"
        if request.url.query:
            url = f"{url}?{request.url.query}"
        headers = {k: v for k, v in request.headers.items() if k.lower() not in EXCLUDED_HEADERS}
        headers["origin"] = self.base_url

        logs.log(logging.INFO, f"Proxying {request.method} /api/place/{path}")
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                upstream = await client.request(
                    request.method,
                    url,
                    content=await request.body(),
                    headers=headers,
                    timeout=settings.HTTP_TIMEOUT_SECONDS
                )
            except httpx.HTTPError as e:
                logs.log(logging.ERROR, f"Proxy request failed: {str(e)}")
                raise UpstreamServiceError("Proxy request failed", details=str(e)) from e

        response_headers = {
            k: v for k, v in upstream.headers.items() if k.lower() not in EXCLUDED_HEADERS
        }
        return Response(content=upstream.content, status_code=upstream.status_code, headers=response_headers)

def get_maps_proxy() -> MapsProxy:
    return MapsProxy()

@router.api_route("/place/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"])
async def place_proxy_endpoint(path: str, request: Request, proxy: MapsProxy = Depends(get_maps_proxy)):
    return await proxy.forward(request, path)
