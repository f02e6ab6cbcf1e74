"""
Service: host_directory.py
Rôle :
- Définir l'interface `HostDirectory` : ce que l'API admin attend du serveur de jeu
  (sessions connectées, cache de profils, whitelist).
- Fournir `JsonHostDirectory`, implémentation sur les fichiers du serveur.

Stockage (dossier du serveur) :
- `usercache.json` : [{"name", "uuid", "expiresOn"}]  (lecture seule ici)
- `whitelist.json` : [{"uuid", "name"}]              (réécrit par `save_whitelist`)

Concurrence :
- Le serveur est l'unique écrivain de la whitelist; un `RLock` sérialise toutes
  les lectures/écritures. L'API ne prend aucun verrou de son côté.
"""
from __future__ import annotations

import abc
import logging
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from restadmin.models.player import PlayerProfile
from .io_utils import read_json, write_json

logger = logging.getLogger(__name__)

USERCACHE_FILENAME = "usercache.json"
WHITELIST_FILENAME = "whitelist.json"


class HostDataInvalid(ValueError):
    """Fichier du serveur illisible (JSON invalide, racine qui n'est pas une liste...)."""


class HostDirectory(metaclass=abc.ABCMeta):
    """Vue de l'API admin sur l'état vivant du serveur de jeu."""

    @abc.abstractmethod
    def connected_players(self) -> List[PlayerProfile]:
        """Profils des sessions actuellement connectées."""

    @abc.abstractmethod
    def find_by_id(self, player_id: UUID) -> Optional[PlayerProfile]:
        """Recherche dans le cache utilisateurs par identifiant."""

    @abc.abstractmethod
    def find_by_name(self, name: str) -> Optional[PlayerProfile]:
        """Recherche dans le cache utilisateurs par nom exact."""

    @abc.abstractmethod
    def is_whitelisted(self, profile: PlayerProfile) -> bool:
        ...

    @abc.abstractmethod
    def whitelisted_names(self) -> List[str]:
        ...

    @abc.abstractmethod
    def add_to_whitelist(self, profile: PlayerProfile) -> None:
        ...

    @abc.abstractmethod
    def remove_from_whitelist(self, profile: PlayerProfile) -> None:
        ...

    @abc.abstractmethod
    def save_whitelist(self) -> None:
        """Persiste la whitelist (fichier du serveur)."""


def _read_entries(path: Path) -> List[Any]:
    """Liste JSON brute d'un fichier du serveur ([] s'il est absent)."""
    try:
        entries = read_json(path)
    except (OSError, ValueError) as exc:
        raise HostDataInvalid(f"{path} is unreadable: {exc}") from exc
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise HostDataInvalid(f"{path} must contain a JSON list")
    return entries


def _parse_profiles(entries: List[Any], source: Path) -> Tuple[List[PlayerProfile], List[Any]]:
    """Convertit des entrées {uuid, name} en profils; renvoie aussi les entrées illisibles."""
    profiles: list[PlayerProfile] = []
    rejected: list[Any] = []
    for entry in entries:
        try:
            profiles.append(PlayerProfile(id=UUID(str(entry["uuid"])), name=str(entry["name"])))
        except (KeyError, TypeError, ValueError):
            logger.warning("Malformed profile entry", extra={"source": str(source), "entry": entry})
            rejected.append(entry)
    return profiles, rejected


class JsonHostDirectory(HostDirectory):
    """
    Implémentation de `HostDirectory` sur les fichiers JSON du serveur de jeu.

    Les sessions connectées sont tenues en mémoire : le serveur appelle
    `player_joined()` / `player_left()` au fil des connexions.
    """

    def __init__(self, server_dir: Path) -> None:
        self.server_dir = Path(server_dir)
        self._lock = RLock()
        self._users_by_id: Dict[UUID, PlayerProfile] = {}
        self._whitelist: Dict[UUID, PlayerProfile] = {}
        # Entrées de whitelist.json non comprises : conservées telles quelles à la sauvegarde
        self._whitelist_unparsed: List[Any] = []
        self._sessions: Dict[UUID, PlayerProfile] = {}
        self.load()

    # -----------------------------
    # Chemins / chargement
    # -----------------------------
    @property
    def usercache_path(self) -> Path:
        return self.server_dir / USERCACHE_FILENAME

    @property
    def whitelist_path(self) -> Path:
        return self.server_dir / WHITELIST_FILENAME

    def load(self) -> None:
        """
        (Re)charge cache utilisateurs et whitelist depuis le disque.

        Lève `HostDataInvalid` si un fichier n'est pas une liste JSON lisible.
        """
        with self._lock:
            users, _ = _parse_profiles(_read_entries(self.usercache_path), self.usercache_path)
            self._users_by_id = {p.id: p for p in users}
            entries, rejected = _parse_profiles(_read_entries(self.whitelist_path), self.whitelist_path)
            self._whitelist = {p.id: p for p in entries}
            self._whitelist_unparsed = rejected
        logger.info(
            "Host directory loaded",
            extra={"users": len(self._users_by_id), "whitelisted": len(self._whitelist)},
        )

    # -----------------------------
    # Sessions (appelé par le serveur de jeu)
    # -----------------------------
    def player_joined(self, profile: PlayerProfile) -> None:
        """Enregistre une session; le profil entre aussi dans le cache utilisateurs."""
        with self._lock:
            self._users_by_id[profile.id] = profile
            self._sessions[profile.id] = profile

    def player_left(self, player_id: UUID) -> None:
        with self._lock:
            self._sessions.pop(player_id, None)

    def connected_players(self) -> List[PlayerProfile]:
        with self._lock:
            return list(self._sessions.values())

    # -----------------------------
    # Cache utilisateurs
    # -----------------------------
    def find_by_id(self, player_id: UUID) -> Optional[PlayerProfile]:
        with self._lock:
            return self._users_by_id.get(player_id)

    def find_by_name(self, name: str) -> Optional[PlayerProfile]:
        with self._lock:
            for profile in self._users_by_id.values():
                if profile.name == name:
                    return profile
        return None

    # -----------------------------
    # Whitelist
    # -----------------------------
    def is_whitelisted(self, profile: PlayerProfile) -> bool:
        with self._lock:
            return profile.id in self._whitelist

    def whitelisted_names(self) -> List[str]:
        with self._lock:
            return [p.name for p in self._whitelist.values()]

    def add_to_whitelist(self, profile: PlayerProfile) -> None:
        with self._lock:
            self._whitelist.setdefault(profile.id, profile)

    def remove_from_whitelist(self, profile: PlayerProfile) -> None:
        with self._lock:
            self._whitelist.pop(profile.id, None)

    def save_whitelist(self) -> None:
        with self._lock:
            payload: list[Any] = [{"uuid": str(p.id), "name": p.name} for p in self._whitelist.values()]
            payload.extend(self._whitelist_unparsed)
            write_json(self.whitelist_path, payload, indent=True)
