"""Expose FastMCP tools for Pokedoku lookups and guess validation."""

from __future__ import annotations

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from . import config
from .forms import classify
from .models import (
    CacheStats,
    Classification,
    Criterion,
    EvolutionAnalysis,
    EvolutionDebug,
    GuessValidation,
    ResolvedPokemon,
)
from .naming import normalize
from .pokemon import (
    analyze_pokemon_evolution as _analyze_pokemon_evolution,
    cache_stats as _cache_stats,
    clear_cache as _clear_cache,
    debug_evolution as _debug_evolution,
    list_pokemon_names as _list_pokemon_names,
    resolve_pokemon as _resolve_pokemon,
    validate_guess as _validate_guess,
    validate_name,
)
from .regions import region_detected_via, resolve_region as _resolve_region

logger = logging.getLogger(__name__)

mcp = FastMCP("Pokedoku Server")


@mcp.tool()
def get_pokemon(name: str) -> ResolvedPokemon:
    """Resolve a Pokemon with region, types, categories and evolution info.

    Args:
        name: Pokemon or form name (e.g. "Mr. Mime", "raichu-alola").

    Returns:
        The enriched Pokemon record.
    """
    return _resolve_pokemon(name)


@mcp.tool()
def analyze_evolution(name: str) -> EvolutionAnalysis:
    """Report evolution stage, trigger and branching for a Pokemon.

    Args:
        name: Pokemon or form name.

    Returns:
        Evolution analysis; ``error`` is set when the chain is unusable.
    """
    return _analyze_pokemon_evolution(name)


@mcp.tool()
def debug_evolution(name: str) -> EvolutionDebug:
    """Show the full evolution chain and lookup details for troubleshooting.

    Args:
        name: Pokemon or form name, or a national dex number.

    Returns:
        Stage, region, categories and sprite checks for the Pokemon, plus a
        readable rendering of its whole chain with species count and depth.
    """
    return _debug_evolution(name)


@mcp.tool()
def validate_guess(name: str, row: Criterion, column: Criterion) -> GuessValidation:
    """Check whether a Pokemon satisfies a grid cell's row and column.

    Args:
        name: Guessed Pokemon name.
        row: Row criterion, e.g. ``{"kind": "type", "value": "fire"}``.
        column: Column criterion, e.g. ``{"kind": "region", "value": "Kanto"}``.

    Returns:
        Per-criterion outcomes and the combined verdict.
    """
    return _validate_guess(name, row, column)


@mcp.tool()
def list_pokemon_names() -> list[str]:
    """List every species name as a normalized key (for autocomplete)."""
    return _list_pokemon_names()


@mcp.tool()
def classify_name(name: str) -> Classification:
    """Classify a name into form tags and special categories without any lookup.

    Legendary and mythical flags need species data, so use ``get_pokemon``
    when those matter.
    """
    return classify(validate_name(name))


@mcp.tool()
def resolve_region(name: str, generation: Optional[str] = None) -> dict[str, str]:
    """Resolve the game region for a name, plus the rule that decided it.

    Args:
        name: Pokemon or form name.
        generation: Generation slug or alias (e.g. "generation-iv", "4").

    Returns:
        The normalized key, the region and the deciding rule.
    """
    key = validate_name(name)
    return {
        "name": key,
        "region": _resolve_region(key, generation),
        "detected_via": region_detected_via(key),
    }


@mcp.tool()
def normalize_name(name: str) -> str:
    """Return the canonical lookup key for a name (empty when unusable)."""
    return normalize(name)


@mcp.tool()
def cache_stats() -> CacheStats:
    """Report entry counts for the lookup cache."""
    return _cache_stats()


@mcp.tool()
def clear_cache() -> CacheStats:
    """Empty the lookup cache."""
    return _clear_cache()


def main() -> None:
    """Configure logging and run the MCP server."""
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    logger.info("Starting Pokedoku MCP server")
    mcp.run()


if __name__ == "__main__":
    main()
