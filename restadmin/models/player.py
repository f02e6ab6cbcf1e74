"""
Models / player.py
Rôle:
- Profil canonique d'un compte joueur, tel que connu du cache utilisateurs du serveur.

Champs:
- id: UUID du compte (sérialisé en chaîne canonique `xxxxxxxx-xxxx-...`).
- name: nom d'affichage.
"""
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PlayerProfile(BaseModel):
    """Paire (id, name) renvoyée par l'API; jamais modifiée ici."""
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
