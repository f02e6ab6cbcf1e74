"""
Utilitaires IO JSON basés sur orjson.
- read_json(Path)  → Any | None (None si fichier manquant)
- write_json(Path, data, indent=False) → écriture atomique (fichier temporaire + replace)

Attention:
- orjson renvoie/attend des bytes; on lit/écrit en mode binaire.
- orjson sérialise nativement les UUID en chaîne canonique.
"""
import os
from pathlib import Path
from typing import Any

import orjson as json


def read_json(path: Path) -> Any:
    """Lit un fichier JSON (ou None s'il n'existe pas)."""
    if not path.exists():
        return None
    with path.open("rb") as f:
        return json.loads(f.read())


def write_json(path: Path, data: Any, indent: bool = False) -> None:
    """Écrit un fichier JSON (dossier parent créé si absent)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    option = json.OPT_INDENT_2 if indent else 0
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("wb") as f:
        f.write(json.dumps(data, option=option))
    os.replace(tmp, path)
