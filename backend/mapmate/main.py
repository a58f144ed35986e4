import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mapmate.core.config import settings
from mapmate.core.db_connection import db_connection
from mapmate.core.errors import AppError
from mapmate.core.logger import logs, request_context
from mapmate.routes import frontend_route
from mapmate.routes.auth_route import router as auth_router
from mapmate.routes.chat_route import router as chat_router
from mapmate.routes.comments_route import router as comments_router
from mapmate.routes.places_route import router as places_router
from mapmate.routes.proxy_route import router as proxy_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = settings.missing_secrets()
    if missing:
        logs.log(logging.CRITICAL, f"Missing required configuration: {', '.join(missing)}")
        raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")
    logs.log(logging.INFO, f"MapMate backend starting (storage: {settings.STORAGE_MODE})")
    yield
    db_connection.close()

app = FastAPI(title="MapMate Backend", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    token = request_context.set({
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path
    })
    try:
        response = await call_next(request)
    finally:
        request_context.reset(token)
    response.headers["X-Request-ID"] = request_id
    return response

app.include_router(chat_router)
app.include_router(places_router)
app.include_router(proxy_router)
app.include_router(auth_router)
app.include_router(comments_router)

# --- Error Handlers ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    # loc is (source, ..., field), e.g. ("body", "message") or ("query", "lat")
    loc = first.get("loc", ())
    field = str(loc[-1]) if len(loc) > 1 else None

    if field is None:
        message = "Request body is required"
    elif first.get("type") == "missing":
        message = f"{field.capitalize()} is required"
    else:
        message = f"Invalid value for {field}"
    return JSONResponse(status_code=400, content=jsonable_encoder({"error": message, "details": errors}))

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logs.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "MapMate Backend"}

if settings.STATIC_DIR and Path(settings.STATIC_DIR).is_dir():
    frontend_route.register(app, settings.STATIC_DIR)
else:
    # --- Root Endpoint ---
    @app.get("/")
    async def root():
        return {
            "message": "Welcome to MapMate API",
            "status": "running",
            "endpoints": {
                "health": "/health",
                "grid_search": "/api/grid-search",
                "docs": "/docs"
            },
            "version": "1.0.0"
        }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("mapmate.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
