"""Upstream access helpers for PokeAPI (REST, GraphQL) and pypokedex."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

# requests covers the REST and GraphQL calls pypokedex does not expose.
import requests

import pypokedex

from . import config

logger = logging.getLogger(__name__)

SPECIES_QUERY = """
query getPokemonByName($name: String!) {
  pokemon_v2_pokemon(where: { name: { _eq: $name } }) {
    id
    name
    pokemon_v2_pokemontypes { pokemon_v2_type { name } }
    pokemon_v2_pokemonspecy {
      name
      is_legendary
      is_mythical
      pokemon_v2_pokemoncolor { name }
      pokemon_v2_generation { name }
      evolution_chain_id
    }
  }
}
"""


@lru_cache(maxsize=256)
def _cached_fetch(url: str) -> Dict:
    """Fetch JSON data from a URL with caching.

    Args:
        url: PokeAPI URL to request.

    Returns:
        Parsed JSON response data.

    Raises:
        requests.RequestException: If the HTTP request fails.
        ValueError: If the response cannot be decoded as JSON.
    """
    # Memoize raw responses so repeated tool calls reuse one upstream hit
    # instead of running into the public rate limit.
    response = requests.get(
        url,
        timeout=config.REQUEST_TIMEOUT_SECONDS,
        headers={"User-Agent": config.USER_AGENT},
    )
    response.raise_for_status()
    return response.json()


def _fetch_json(url: str, context: str) -> Dict:
    """Fetch JSON data and wrap errors with context.

    Args:
        url: PokeAPI URL to request.
        context: Description used for error messages.

    Returns:
        Parsed JSON response data.

    Raises:
        ValueError: If the request fails or JSON decoding fails.
    """
    # Every upstream failure surfaces as one ValueError shape for callers.
    try:
        return _cached_fetch(url)
    except (requests.RequestException, ValueError) as exc:
        raise ValueError(f"Failed to fetch {context}: {exc}") from exc


def _graphql_fetch(query: str, variables: Optional[Dict[str, Any]] = None) -> Dict:
    """Run a GraphQL query against the configured endpoints in order.

    Args:
        query: GraphQL document.
        variables: Query variables.

    Returns:
        The ``data`` object of the first successful response.

    Raises:
        ValueError: If the query is empty or every endpoint fails.
    """
    if not isinstance(query, str) or not query.strip():
        raise ValueError("GraphQL query must be a non-empty string")

    errors: List[str] = []
    for endpoint in config.GRAPHQL_ENDPOINTS:
        try:
            response = requests.post(
                endpoint,
                json={"query": query, "variables": variables or {}},
                timeout=config.REQUEST_TIMEOUT_SECONDS,
                headers={"User-Agent": config.USER_AGENT},
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("GraphQL endpoint %s failed: %s", endpoint, exc)
            errors.append(f"{endpoint}: {exc}")
            continue

        if not isinstance(payload, dict):
            logger.warning("GraphQL endpoint %s returned %s, expected an object", endpoint, type(payload).__name__)
            errors.append(f"{endpoint}: unexpected response shape")
            continue
        if payload.get("errors"):
            messages = ", ".join(
                str(err.get("message") if isinstance(err, dict) else err) for err in payload["errors"]
            )
            logger.warning("GraphQL errors from %s: %s", endpoint, messages)
            errors.append(f"{endpoint}: {messages}")
            continue
        if payload.get("data"):
            logger.debug("GraphQL query served by %s", endpoint)
            return payload["data"]
        errors.append(f"{endpoint}: no data in response")

    raise ValueError(f"All GraphQL endpoints failed: {'; '.join(errors)}")


def _lookup(name_or_dex: str):
    """Fetch a pypokedex.Pokemon by name or dex number.

    Args:
        name_or_dex: Pokemon name (case-insensitive) or dex number.

    Returns:
        The pypokedex Pokemon object.

    Raises:
        ValueError: If the Pokemon cannot be found.
    """
    try:
        # pypokedex keeps its own response cache; digit-only input is a dex number.
        if name_or_dex.isdigit():
            return pypokedex.get(dex=int(name_or_dex))
        return pypokedex.get(name=name_or_dex.lower())
    except Exception as exc:
        # Callers only ever see the short message, not the client traceback.
        raise ValueError(f"Could not find Pokemon '{name_or_dex}': {exc}") from exc


def fetch_species_graphql(key: str) -> Optional[Dict]:
    """Return the GraphQL ``pokemon_v2_pokemon`` row for a key, or ``None``."""
    data = _graphql_fetch(SPECIES_QUERY, {"name": key})
    rows = data.get("pokemon_v2_pokemon") or []
    return rows[0] if rows else None


def fetch_species_rest(species: str) -> Dict:
    """Fetch the REST ``pokemon-species`` record for a species name or dex number."""
    return _fetch_json(f"{config.REST_BASE}pokemon-species/{species}", context=f"species data for {species}")


def fetch_evolution_chain(chain_id_or_url: Any) -> Dict:
    """Fetch a REST evolution chain by numeric id or full URL."""
    url = str(chain_id_or_url)
    if not url.startswith("http"):
        url = f"{config.REST_BASE}evolution-chain/{url}"
    return _fetch_json(url.rstrip("/"), context=f"evolution chain {chain_id_or_url}")


@lru_cache(maxsize=1)
def _list_species_names() -> List[str]:
    """Return every species name from the REST index.

    Returns:
        Raw species names in dex order.
    """
    data = _fetch_json(
        f"{config.REST_BASE}pokemon-species?limit={config.SPECIES_INDEX_LIMIT}",
        context="species listing",
    )
    return [entry["name"] for entry in data.get("results", []) if entry.get("name")]
