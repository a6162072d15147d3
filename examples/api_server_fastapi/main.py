"""Example FastAPI server for `fuzzymatch`.

Goals
-----
- Search-as-you-type backend: one request per keystroke
- Load the key list once at startup (do NOT reload per request)
- Minimal API response: {"term": ..., "matches": [...]}

Endpoints
---------
POST /search
Request JSON:
    {"term": "...", "threshold": 0.5}   # threshold is optional
Response JSON:
    {
      "term": "...",
      "matches": [{"index": 3, "value": "..."}, ...]
    }

GET /health
    {"status": "ok", "keys": 1234}

Required environment variables
------------------------------
- FUZZYMATCH_KEYS_FILE
    Path to the keys file (one key per line, or a JSON array in *.json).

Optional environment variables
------------------------------
- FUZZYMATCH_THRESHOLD (default: 0.5)

Run (example)
-------------
1) Install dependencies:
   pip install -e ".[api]"

2) Export env:
   export FUZZYMATCH_KEYS_FILE="/abs/path/to/titles.txt"

3) Start server:
   uvicorn examples.api_server_fastapi.main:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from fuzzymatch import fuzzymatch

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    """Request payload for POST /search."""

    term: str = Field(..., description="The search term (may be empty).")
    threshold: float | None = Field(
        default=None,
        description="Override the server default threshold for this request.",
    )


class MatchItem(BaseModel):
    index: int
    value: str


class SearchResponse(BaseModel):
    """Response payload for POST /search."""

    term: str
    matches: list[MatchItem]


def _load_dotenv_if_present() -> None:
    """Load a local `.env` file if present.

    Behavior:
    - If `FUZZYMATCH_ENV_FILE` is set, load that file.
    - Otherwise try `.env` in the current working directory, then next to
      this `main.py`.

    Real environment variables always win; `.env` only fills missing ones.
    """

    def parse_line(line: str) -> tuple[str, str] | None:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            return None
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()

        # Remove simple quotes.
        if (
            value.startswith(('"', "'"))
            and value.endswith(('"', "'"))
            and len(value) >= 2
        ):
            value = value[1:-1]

        if not key:
            return None
        return key, value

    candidates: list[Path] = []
    explicit = os.getenv("FUZZYMATCH_ENV_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    else:
        candidates.append(Path.cwd() / ".env")
        candidates.append(Path(__file__).resolve().parent / ".env")

    env_path = next((p for p in candidates if p.exists() and p.is_file()), None)
    if env_path is None:
        return

    for raw in env_path.read_text(encoding="utf-8").splitlines():
        parsed = parse_line(raw)
        if parsed is None:
            continue
        key, value = parsed
        if key in os.environ:
            continue
        os.environ[key] = value


# Load `.env` early so it is visible in lifespan.
_load_dotenv_if_present()


def _get_env_required(name: str) -> str:
    """Read a required environment variable."""
    value = os.getenv(name, "").strip()
    if not value:
        raise RuntimeError(f"Missing required env var: {name}")
    return value


def _get_env_float(name: str, default: float) -> float:
    """Read an environment variable as float with a default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid float env var {name}={raw!r}") from e


def load_keys(path: Path) -> list[str]:
    """Load keys from a text file (one per line) or a JSON array (*.json)."""
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(raw)
        if not isinstance(data, list) or not all(isinstance(k, str) for k in data):
            raise RuntimeError(f"{str(path)!r} must contain a JSON array of strings")
        return data
    return [line for line in raw.splitlines() if line.strip()]


class _AppState:
    """Holds long-lived objects shared across requests."""

    def __init__(self) -> None:
        self.keys: list[str] | None = None
        self.threshold: float = 0.5


STATE = _AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the key list once and reuse it."""
    keys_path = Path(_get_env_required("FUZZYMATCH_KEYS_FILE")).expanduser()
    if not keys_path.is_file():
        raise RuntimeError(f"FUZZYMATCH_KEYS_FILE does not exist: {keys_path}")

    STATE.keys = load_keys(keys_path)
    STATE.threshold = _get_env_float("FUZZYMATCH_THRESHOLD", 0.5)
    logger.info("Loaded %d keys from %s", len(STATE.keys), keys_path)

    yield

    STATE.keys = None


app = FastAPI(title="Fuzzymatch API", version="0.1.0", lifespan=lifespan)


@app.get("/health")
def health() -> dict[str, Any]:
    if STATE.keys is None:
        raise HTTPException(status_code=503, detail="Server is still starting up")
    return {"status": "ok", "keys": len(STATE.keys)}


@app.post("/search", response_model=SearchResponse)
def search(req: SearchRequest) -> SearchResponse:
    """Match the term against the loaded keys."""
    if STATE.keys is None:
        raise HTTPException(status_code=503, detail="Server is still starting up")

    threshold = STATE.threshold if req.threshold is None else req.threshold
    matches = fuzzymatch(STATE.keys, req.term, threshold)

    return SearchResponse(
        term=req.term,
        matches=[MatchItem(index=m.index, value=m.value) for m in matches],
    )
