from fastapi import FastAPI, Request, Query, Depends
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from kitchen.api.dependencies import current_user
from kitchen.domain.errors import KitchenError
from kitchen.infra.database import init_db
from kitchen.events.web_observers import start as start_event_observers, get_events as get_web_events

# Routers
from kitchen.api.routes import catalog, pantry, recipes, shopping

# Logging
logger = logging.getLogger("kitchen_app")

# Initialize FastAPI app
app = FastAPI(title="Recipe Kitchen API")

# Include routers
app.include_router(catalog.router)
app.include_router(pantry.router)
app.include_router(recipes.router)
app.include_router(shopping.router)


@app.on_event("startup")
def _startup_database():
    """Create tables and seed the catalog before the first request."""
    init_db()
    logger.info("Database ready, catalog seeded")


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web notifications when the app starts."""
    start_event_observers()
    logger.info("Web observers for kitchen events started")


@app.exception_handler(KitchenError)
async def _kitchen_error_handler(request: Request, exc: KitchenError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
    else:
        logger.info("%s %s rejected with %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "detail": exc.detail})


@app.get("/api/events")
def api_events(since: Optional[int] = Query(default=None, ge=0), user: str = Depends(current_user)):
    """Recent fridge and shopping list events of the acting user, newer than ``since``."""
    return get_web_events(since=since, owner_user_id=user)


@app.get("/api/health")
def health():
    return {"status": "ok"}
