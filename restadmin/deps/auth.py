"""
Garde d'authentification admin
==============================

Objectif
--------
Middleware HTTP `admin_gate` : n'autorise une requête que si elle porte exactement
`Authorization: Bearer <token>`, le token étant celui de `restadmin.json`.

Comportement & codes retour
---------------------------
- 401 si le header est absent ou différent (schéma compris), pour *toute*
  requête : le contrôle passe avant le routage, donc chemins inconnus, mauvais
  verbes et redirections `/x/` → `/x` répondent aussi 401 sans jeton.
- Sinon la requête suit son cours (routeurs).

Notes
-----
- Pas de session ni de cookie : le header est revérifié à chaque requête.
- Les refus sont journalisés en INFO (ce n'est pas une erreur serveur).
- Le token n'apparaît jamais dans les logs.
"""
from __future__ import annotations

import hmac
import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def is_authorized(received: str | None, token: str) -> bool:
    """True si `received` vaut exactement `Bearer <token>`."""
    expected = f"Bearer {token}"
    # Comparaison à temps constant sur les octets (le header peut être non-ASCII)
    return hmac.compare_digest((received or "").encode("utf-8"), expected.encode("utf-8"))


async def admin_gate(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Middleware `http` monté par `create_app()`; l'état admin est lu sur `app.state`."""
    token = request.app.state.admin.config.token
    if is_authorized(request.headers.get("Authorization"), token):
        return await call_next(request)

    logger.info(
        "Rejected unauthenticated request",
        extra={
            "method": request.method,
            "path": request.url.path,
            "client": request.client.host if request.client else None,
        },
    )
    return JSONResponse(
        status_code=401,
        content={"detail": "Invalid token"},
        headers={"WWW-Authenticate": "Bearer"},
    )
