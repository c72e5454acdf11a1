"""
FastAPI Backend dla Grid Tactics.

Endpoints:
    POST /api/game/new      - nowa bitwa (opcjonalnie własne drużyny)
    GET  /api/game/state    - bieżący stan bitwy
    POST /api/game/action   - komenda aktywnej jednostki gracza
    GET  /api/templates     - szablony postaci
    GET  /api/skills        - katalog umiejętności
    GET  /api/grid-config   - wymiary siatki i połowy drużyn
    GET  /api/health        - health check

Uruchomienie:
    uvicorn api.main:app --reload

Błędy sesji (GameServiceError) -> HTTP 400 {"code": ..., "message": ...}
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from api.routers import catalog, game
from tactics.service import GameServiceError, GameSession


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    # Startup - jedna sesja na proces API
    app.state.session = GameSession()
    print("🚀 Grid Tactics API starting...")
    print(f"🎲 Session seed: {app.state.session.seed}")
    print(f"🌐 Open http://localhost:8000/docs in your browser")
    yield
    # Shutdown
    print("👋 Grid Tactics API shutting down...")


app = FastAPI(
    title="Grid Tactics API",
    description="Backend API for the Grid Tactics turn-based battle simulator",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins (including file://)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(game.router, prefix="/api", tags=["Game"])
app.include_router(catalog.router, prefix="/api", tags=["Catalog"])


@app.exception_handler(GameServiceError)
async def game_service_error_handler(request: Request, exc: GameServiceError):
    """Błąd sesji -> 400 z kodem maszynowym."""
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
