"""
Module routes/whitelist.py
Rôle:
- Consulter et modifier la whitelist du serveur de jeu.

Intégrations:
- resolve_profile(): `{id_or_name}` → profil canonique (UUID d'abord, puis nom).
- HostDirectory: lecture/écriture de la whitelist + persistance (`save_whitelist`).

Remarques:
- Profil introuvable → 400 sur GET/POST, mais 500 sur DELETE. Cette asymétrie
  est conservée telle quelle (les clients existants s'y fient) et couverte par
  les tests.
- POST est idempotent : un joueur déjà présent est renvoyé sans doublon.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from restadmin.deps.state import get_directory
from restadmin.models.player import PlayerProfile
from restadmin.services.host_directory import HostDirectory
from restadmin.services.resolver import resolve_profile

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/whitelist",
    tags=["whitelist"],
)


def _resolve_or_fail(directory: HostDirectory, id_or_name: str, status_code: int) -> PlayerProfile:
    profile = resolve_profile(directory, id_or_name)
    if profile is None:
        raise HTTPException(status_code=status_code, detail=f"Failed to find {id_or_name}")
    return profile


@router.get("", response_model=List[str])
def list_whitelist(directory: HostDirectory = Depends(get_directory)):
    """Noms whitelistés, tels que connus du serveur."""
    return directory.whitelisted_names()


@router.get("/{id_or_name}", response_model=bool)
def check_whitelisted(id_or_name: str, directory: HostDirectory = Depends(get_directory)):
    """True/False pour le profil résolu; 400 si introuvable."""
    profile = _resolve_or_fail(directory, id_or_name, 400)
    return directory.is_whitelisted(profile)


@router.post("/{id_or_name}", response_model=PlayerProfile)
def add_to_whitelist(id_or_name: str, directory: HostDirectory = Depends(get_directory)):
    """Ajoute le joueur (no-op s'il y est déjà) et renvoie son profil."""
    profile = _resolve_or_fail(directory, id_or_name, 400)
    if directory.is_whitelisted(profile):
        return profile

    directory.add_to_whitelist(profile)
    logger.info("Added player to the whitelist", extra={"player": profile.name, "player_id": str(profile.id)})
    directory.save_whitelist()
    return profile


@router.delete("/{id_or_name}", response_model=PlayerProfile)
def remove_from_whitelist(id_or_name: str, directory: HostDirectory = Depends(get_directory)):
    """Retire le joueur et renvoie son profil; 500 si introuvable."""
    profile = _resolve_or_fail(directory, id_or_name, 500)
    directory.remove_from_whitelist(profile)
    logger.info("Removed player from the whitelist", extra={"player": profile.name, "player_id": str(profile.id)})
    directory.save_whitelist()
    return profile
