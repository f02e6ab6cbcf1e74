"""
État applicatif de l'API admin.

Un `AdminState` est construit par l'hôte (config + accès au serveur de jeu) et
passé à `create_app()`; les routes le récupèrent via `deps.state.get_admin_state`.
Aucun singleton de module.
"""
from __future__ import annotations

from dataclasses import dataclass

from restadmin.config.settings import RestAdminConfig
from .host_directory import HostDirectory


@dataclass(frozen=True)
class AdminState:
    config: RestAdminConfig
    directory: HostDirectory
