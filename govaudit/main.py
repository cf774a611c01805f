from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from govaudit import __version__
from govaudit.routers import governance, health

app = FastAPI(title="Governance Audit API", version=__version__)


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""
    return RedirectResponse(url="/docs")


app.include_router(governance.router, prefix="/api", tags=["governance"])
app.include_router(health.router, prefix="/api", tags=["health"])
