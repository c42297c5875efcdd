"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from portal.api import pages
from portal.api.v1 import router as v1_router
from portal.core.config import settings
from portal.core.security import AUTH_COOKIE_NAME, get_token_codec
from portal.services.request_gate import RedirectTo, decide, is_excluded

app = FastAPI(
    title="Membership Portal API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_gate(request: Request, call_next):
    """Redirect unauthenticated or wrong-role navigations before any handler runs."""
    path = request.url.path
    if not is_excluded(path, settings.GATE_EXCLUDED_PREFIXES):
        decision = decide(
            path,
            request.cookies.get(AUTH_COOKIE_NAME),
            get_token_codec().verify,
        )
        if isinstance(decision, RedirectTo):
            return RedirectResponse(decision.location, status_code=307)
    return await call_next(request)


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)
app.include_router(pages.router, tags=["pages"])


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Membership Portal API"}
