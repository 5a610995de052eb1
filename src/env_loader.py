from __future__ import annotations

import os
from pathlib import Path


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def load_dotenv_if_present(path: str | Path | None = None) -> int:
    """
    Lightweight .env loader used when generating the report locally.

    - Reads KEY=VALUE pairs from the given file (default: ".env" in CWD).
    - Ignores empty lines, comments starting with "#" and a leading "export ".
    - Strips one level of matching quotes around values.
    - Does *not* overwrite variables that are already present in os.environ.

    Returns the number of variables that were set. In AWS Lambda the
    variables come from the function configuration, the file does not exist
    and this returns 0.
    """
    env_path = Path(path or ".env")
    if not env_path.exists():
        return 0

    try:
        text = env_path.read_text(encoding="utf-8")
    except OSError:
        return 0

    loaded = 0
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue
        if key not in os.environ:
            os.environ[key] = _strip_quotes(value.strip())
            loaded += 1
    return loaded


__all__ = ["load_dotenv_if_present"]
