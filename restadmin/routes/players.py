"""
Module routes/players.py
Rôle:
- Lister les joueurs actuellement connectés au serveur de jeu.

Intégrations:
- HostDirectory.connected_players() : lecture seule, liste vide si personne.
"""
from typing import List

from fastapi import APIRouter, Depends

from restadmin.deps.state import get_directory
from restadmin.models.player import PlayerProfile
from restadmin.services.host_directory import HostDirectory

router = APIRouter(
    prefix="/players",
    tags=["players"],
)


@router.get("", response_model=List[PlayerProfile])
def list_players(directory: HostDirectory = Depends(get_directory)):
    """Profils canoniques {id, name} des sessions connectées."""
    return directory.connected_players()
