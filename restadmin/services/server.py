"""
Service: server.py
Rôle :
- Faire tourner l'app FastAPI sous uvicorn dans un thread dédié, pour que le
  serveur de jeu (hôte) garde la main.

Cycle de vie :
- `start()` : à appeler une fois l'hôte entièrement initialisé.
- `stop()`  : à appeler avant l'arrêt de l'hôte. Les requêtes en cours peuvent
  être coupées (pas de drain garanti).
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

import uvicorn
from fastapi import FastAPI

from restadmin.config.settings import RestAdminConfig

logger = logging.getLogger(__name__)


class AdminServer:
    """Serveur HTTP de l'API admin, démarré/arrêté par l'hôte."""

    def __init__(self, app: FastAPI, config: RestAdminConfig) -> None:
        self.app = app
        self.config = config
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def started(self) -> bool:
        """True une fois le socket ouvert par uvicorn."""
        return bool(self._server is not None and self._server.started)

    def start(self) -> None:
        if self.running:
            raise RuntimeError("RestAdmin server is already running")

        self._server = uvicorn.Server(
            uvicorn.Config(
                app=self.app,
                host=self.config.host,
                port=self.config.port,
                log_config=None,  # garde la config logging du processus
            )
        )
        self._thread = threading.Thread(
            target=self._server.run,
            name="restadmin-http",
            daemon=True,
        )
        self._thread.start()
        logger.info("Started RestAdmin", extra={"host": self.config.host, "port": self.config.port})

    def wait(self, poll_interval: float = 0.5) -> None:
        """Bloque jusqu'à la fin du thread serveur (interruptible par Ctrl+C)."""
        while self._thread is not None and self._thread.is_alive():
            self._thread.join(poll_interval)

    def stop(self, timeout: float = 5.0) -> None:
        if self._server is None or self._thread is None:
            return
        self._server.should_exit = True
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("RestAdmin server thread did not exit in time", extra={"timeout": timeout})
        self._server = None
        self._thread = None
        logger.info("Stopped RestAdmin")
