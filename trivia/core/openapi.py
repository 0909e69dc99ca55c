"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec les conventions de l'API.
"""

from fastapi.openapi.utils import get_openapi


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API du quiz en direct : les hôtes créent une partie, les joueurs la rejoignent par code.\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Codes de partie : 6 caractères, sans 0/O ni 1/I.\n"
            "- `selected_answer = -1` : temps écoulé, pas de réponse.\n"
            "- Erreurs : 400/422 entrée invalide, 404 introuvable, 409 conflit.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
