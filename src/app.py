"""LogiRoute FastAPI application.

Web server that processes fleet dispatch commands synchronously via HTTP.
Each request is wrapped in the LogiRoute domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config environment ("test" under pytest).
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from logiroute.api.errors import register_exception_handlers
from logiroute.domain import logiroute
from logiroute.utils.logging import add_context, clear_context

logiroute.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="LogiRoute API",
    description="Fleet dispatch — vehicles, packages and delivery routes",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the LogiRoute domain context for each API request."""
    if not request.url.path.startswith("/api"):
        # Health check, docs, etc.
        return await call_next(request)

    add_context(path=request.url.path, method=request.method)
    try:
        with logiroute.domain_context():
            return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from logiroute.api.routes import delivery_router, package_router, vehicle_router  # noqa: E402

app.include_router(vehicle_router)
app.include_router(package_router)
app.include_router(delivery_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "logiroute": {"name": logiroute.name},
            },
        }
    )
