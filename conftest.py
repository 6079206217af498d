"""Root conftest: loads .env.test before dm_service.config is imported."""
from __future__ import annotations

import os
from pathlib import Path

_env_test = Path(__file__).resolve().parent / ".env.test"

for raw in _env_test.read_text().splitlines() if _env_test.exists() else []:
    line = raw.strip()
    if not line or line.startswith("#") or "=" not in line:
        continue
    key, _, value = line.partition("=")
    os.environ[key.strip()] = value.strip()
