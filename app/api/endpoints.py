from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter


ENDPOINTS_FILE = Path(__file__).resolve().parents[1] / "endpoints.json"


def load_endpoints(path: Path = ENDPOINTS_FILE) -> Dict[str, Any]:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


ENDPOINTS = load_endpoints()

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("", summary="Describe every available endpoint")
async def api_get_endpoints() -> Dict[str, Any]:
    return ENDPOINTS
