"""
Configuration de RestAdmin
==========================

Rôle
----
- `Settings` : paramètres du *processus* (chemin du fichier de config, dossier
  du serveur de jeu, niveau de log), surchargeables via `.env` ou l'environnement.
- `RestAdminConfig` : contenu du fichier `restadmin.json` (port, host, token),
  chargé une seule fois au démarrage puis immuable.
- `load_config()` : lit le fichier (le crée avec des valeurs par défaut s'il
  n'existe pas) et refuse un token faible.

Intégrations
------------
- `pydantic-settings` charge les variables `RESTADMIN_*` et le fichier `.env`.
- `main.main()` appelle `load_config()` et quitte (code 1) sur `ConfigInvalid`
  avant d'ouvrir le port HTTP.

Exemple de `restadmin.json`
---------------------------
{
  "port": 7070,
  "host": "0.0.0.0",
  "token": "une-valeur-longue-et-secrète"
}

Exemples de `.env`
------------------
RESTADMIN_CONFIG_PATH="/srv/minecraft/config/restadmin.json"
RESTADMIN_SERVER_DIR="/srv/minecraft"
RESTADMIN_LOG_LEVEL="DEBUG"
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from restadmin.services.io_utils import read_json, write_json

logger = logging.getLogger(__name__)

# Token livré dans le fichier par défaut : le serveur refuse de démarrer avec.
PLACEHOLDER_TOKEN = "changeme"
MIN_TOKEN_LENGTH = 12

DEFAULT_CONFIG = {
    "port": 7070,
    "host": "0.0.0.0",
    "token": PLACEHOLDER_TOKEN,
}


class ConfigInvalid(ValueError):
    """Fichier de configuration inutilisable (token faible, JSON invalide...)."""


class Settings(BaseSettings):
    # Fichier JSON {port, host, token}
    CONFIG_PATH: str = os.path.join("config", "restadmin.json")
    # Dossier du serveur de jeu (usercache.json, whitelist.json)
    SERVER_DIR: str = "."
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="RESTADMIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class RestAdminConfig(BaseModel):
    """Contenu validé de `restadmin.json` (gelé après chargement)."""
    model_config = ConfigDict(frozen=True)

    port: int = Field(ge=1, le=65535)
    host: str
    token: str


def check_token(token: str) -> None:
    """Lève `ConfigInvalid` si le token est le placeholder ou trop court."""
    if token == PLACEHOLDER_TOKEN:
        raise ConfigInvalid(
            f"You must change the token in the config file. Use at least {MIN_TOKEN_LENGTH} characters."
        )
    if len(token) < MIN_TOKEN_LENGTH:
        raise ConfigInvalid(
            f"The token in the config file is too short. Use at least {MIN_TOKEN_LENGTH} characters."
        )


def load_config(path: Path) -> RestAdminConfig:
    """
    Charge `restadmin.json`.

    - Fichier absent : écrit `DEFAULT_CONFIG` puis le relit (le token par défaut
      est ensuite refusé, l'opérateur doit l'éditer).
    - Fichier illisible / JSON invalide / champ manquant / token faible : `ConfigInvalid`.
    """
    if not path.exists():
        logger.info("Writing default config", extra={"path": str(path)})
        try:
            write_json(path, DEFAULT_CONFIG, indent=True)
        except OSError as exc:
            raise ConfigInvalid(f"{path} cannot be created: {exc}") from exc

    try:
        raw = read_json(path)
    except OSError as exc:
        raise ConfigInvalid(f"{path} is unreadable: {exc}") from exc
    except ValueError as exc:  # orjson.JSONDecodeError hérite de ValueError
        raise ConfigInvalid(f"{path} is not valid JSON: {exc}") from exc

    try:
        config = RestAdminConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigInvalid(f"{path} is malformed: {exc}") from exc

    check_token(config.token)
    return config


# Instance importable : `from restadmin.config.settings import settings`
settings = Settings()
