"""
Résolution d'un segment d'URL (UUID ou nom) vers un profil canonique.

Ordre :
1. forme UUID canonique (8-4-4-4-12 hexa) → recherche par identifiant;
2. sinon → recherche par nom exact.

Un nom d'affichage qui a la forme d'un UUID part donc en recherche par
identifiant : comportement du serveur, non corrigé ici.
"""
from __future__ import annotations

import re
from typing import Optional
from uuid import UUID

from restadmin.models.player import PlayerProfile
from .host_directory import HostDirectory

_CANONICAL_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def parse_uuid(value: str) -> Optional[UUID]:
    """UUID si `value` est en forme canonique, sinon None."""
    if not _CANONICAL_UUID_RE.match(value):
        return None
    return UUID(value)


def resolve_profile(directory: HostDirectory, id_or_name: str) -> Optional[PlayerProfile]:
    """Retourne le profil canonique ou None (identifiant/nom inconnu du cache)."""
    player_id = parse_uuid(id_or_name)
    if player_id is not None:
        return directory.find_by_id(player_id)
    return directory.find_by_name(id_or_name)
