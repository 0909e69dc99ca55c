"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

traduction des erreurs métier en réponses HTTP

Inclut les routers (ex : /api/v1/games).

Au démarrage : logging, création des tables, lancement du balayeur de rétention.
À l'arrêt : arrêt propre du balayeur.

🔹 Point unique d’exécution : uvicorn trivia.main:app --reload.
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trivia.core.config import settings
from trivia.core.logging_config import setup_logging
from trivia.core.openapi import custom_openapi
from trivia.db.session import get_backend, init_db
from trivia.domain.errors import ConflictError
from trivia.features.retention.sweeper import RetentionSweeper

from trivia.api.v1.routers import games, players, stats

import uvicorn

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_tags=[
        {"name": "games", "description": "Création des parties, questions mélangées, classement"},
        {"name": "players", "description": "Inscription idempotente, réponses, fin de partie"},
        {"name": "stats", "description": "Statistiques et compteur de visites"},
    ],
)

# CORS (ajustez selon vos besoins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

# Routers
app.include_router(games.router, prefix="/api/v1")
app.include_router(players.router, prefix="/api/v1")
app.include_router(stats.router, prefix="/api/v1")

# Génération du schéma OpenAPI custom
app.openapi = lambda: custom_openapi(app)


# -----------------------------
# Erreurs métier -> HTTP
# -----------------------------
@app.exception_handler(LookupError)
def not_found_handler(request: Request, exc: LookupError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ConflictError)
def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(ValueError)
def validation_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


# -----------------------------
# Démarrage / arrêt
# -----------------------------
sweeper: Optional[RetentionSweeper] = None


@app.on_event("startup")
def on_startup():
    global sweeper
    setup_logging()
    init_db()
    if settings.RETENTION_ENABLED:
        sweeper = RetentionSweeper(
            get_backend().stores,
            horizon=settings.retention_horizon,
            interval_seconds=settings.RETENTION_SWEEP_INTERVAL_SECONDS,
        )
        sweeper.start()


@app.on_event("shutdown")
def on_shutdown():
    global sweeper
    if sweeper is not None:
        sweeper.stop()
        sweeper = None


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8080, reload=(settings.ENV == "dev"))  # http://localhost:8080
