"""Process-wide configuration for the Pokedoku backend.

Upstream endpoints, timeouts and cache sizing live here. A handful of values
can be overridden through environment variables so deployments can tune them
without code changes.
"""

from __future__ import annotations

import os

# ── Upstream PokeAPI ────────────────────────────────────────────────────────
REST_BASE = "https://pokeapi.co/api/v2/"

# Tried in order; the first endpoint that answers with data wins.
GRAPHQL_ENDPOINTS = (
    "https://beta.pokeapi.co/graphql/v1beta",
    "https://graphql-pokeapi.graphcdn.app/",
    "https://graphql-pokeapi.vercel.app/api/graphql",
)

REQUEST_TIMEOUT_SECONDS = float(os.environ.get("POKEDOKU_REQUEST_TIMEOUT", "8"))
USER_AGENT = "Pokedoku-Server/1.0"

# ── Sprites ─────────────────────────────────────────────────────────────────
SPRITE_URL_TEMPLATE = "https://img.pokemondb.net/sprites/home/normal/{name}.png"

# ── Cache ───────────────────────────────────────────────────────────────────
CACHE_TTL_SECONDS = float(os.environ.get("POKEDOKU_CACHE_TTL", str(15 * 60)))
CACHE_MAX_ENTRIES = int(os.environ.get("POKEDOKU_CACHE_MAX_ENTRIES", "1000"))

# ── Names ───────────────────────────────────────────────────────────────────
MAX_NAME_LENGTH = 50
SPECIES_INDEX_LIMIT = 2000

# ── Logging ─────────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("POKEDOKU_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
