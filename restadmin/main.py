"""
RestAdmin : point d'entrée
==========================

Rôle
----
- `create_app(state)` : instancie l'app FastAPI et monte les routeurs admin,
  avec l'état applicatif (config + accès au serveur de jeu) passé explicitement.
- `main()` : démarrage autonome. Charge la config, refuse un token faible
  (code de sortie 1, avant d'ouvrir le port), branche le `JsonHostDirectory`
  sur le dossier du serveur puis sert jusqu'à Ctrl+C.

Notes
-----
- Toute requête passe par le middleware `admin_gate` avant le routage.
- Un hôte embarquant l'API construit lui-même son `AdminState` et pilote
  `AdminServer.start()` / `stop()` depuis ses propres événements de cycle de vie.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from fastapi import FastAPI

from restadmin.config.settings import ConfigInvalid, load_config, settings
from restadmin.deps.auth import admin_gate
from restadmin.routes.players import router as players_router
from restadmin.routes.whitelist import router as whitelist_router
from restadmin.services.admin_state import AdminState
from restadmin.services.host_directory import HostDataInvalid, JsonHostDirectory
from restadmin.services.server import AdminServer

logger = logging.getLogger("restadmin")

__version__ = "1.0.0"


def create_app(state: AdminState) -> FastAPI:
    # Pas de /docs ni /openapi.json : tout passe derrière le token
    app = FastAPI(
        title="RestAdmin",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.admin = state
    app.middleware("http")(admin_gate)

    app.include_router(players_router)
    app.include_router(whitelist_router)
    return app


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Initializing RestAdmin")

    config_path = Path(settings.CONFIG_PATH)
    try:
        config = load_config(config_path)
    except ConfigInvalid as exc:
        logger.error(f"{exc} ({config_path}). Shutting down.")
        sys.exit(1)

    try:
        directory = JsonHostDirectory(Path(settings.SERVER_DIR))
    except HostDataInvalid as exc:
        logger.error(f"{exc}. Shutting down.")
        sys.exit(1)

    state = AdminState(config=config, directory=directory)
    server = AdminServer(create_app(state), config)

    server.start()
    try:
        server.wait()
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()


if __name__ == "__main__":
    main()
