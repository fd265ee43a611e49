"""Pokemon lookup service used by the MCP tool wrappers."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from . import api, config
from .cache import TTLCache
from .criteria import CriterionLike, _as_criterion, evaluate_cell
from .evolution import chain_from_payload, count_species, get_depth, safe_analyze, simplify
from .forms import classify
from .models import (
    CacheStats,
    CriterionResult,
    EvolutionAnalysis,
    EvolutionDebug,
    GuessValidation,
    ResolvedPokemon,
)
from .naming import (
    display_name,
    get_base_form_name,
    get_sprite_safe_name,
    normalize,
    sprite_issues,
    sprite_url,
)
from .regions import resolve_region
from .tables import DEFAULT_TABLES, SpeciesTables

logger = logging.getLogger(__name__)

_VALID_KEY = re.compile(r"^[a-z0-9-]+$")

_cache = TTLCache()


def validate_name(name: Any, tables: SpeciesTables = DEFAULT_TABLES) -> str:
    """Normalize a user-supplied name and reject anything unusable.

    Raises:
        ValueError: If the key is empty, longer than the configured limit,
            or contains characters outside ``[a-z0-9-]``.
    """
    key = normalize(name, tables)
    if not key or len(key) > config.MAX_NAME_LENGTH or not _VALID_KEY.match(key):
        raise ValueError(f"Invalid Pokemon name: {name!r}")
    return key


def _lookup_key(name: Any, tables: SpeciesTables) -> str:
    """Validate a name and turn a bare dex number into the species key."""
    key = validate_name(name, tables)
    if key.isdigit():
        key = normalize(api._lookup(key).name, tables)
        logger.debug("Dex number %s resolved to %s", name, key)
    return key


def build_record(
    key: str,
    types: List[str],
    generation: Optional[str],
    is_legendary: bool = False,
    is_mythical: bool = False,
    evolution: Optional[EvolutionAnalysis] = None,
    color: Optional[str] = None,
    tables: SpeciesTables = DEFAULT_TABLES,
) -> ResolvedPokemon:
    """Assemble a :class:`ResolvedPokemon` from upstream facts.

    Form classification, region resolution, type and evolution overrides and
    sprite/display naming are all applied here so that the record can be built
    (and tested) without any network access.

    Args:
        key: Normalized key.
        types: Types reported upstream.
        generation: Generation slug of the species.
        is_legendary: Legendary flag of the species.
        is_mythical: Mythical flag of the species.
        evolution: Evolution analysis for the species, if available.
        color: Pokedex color of the species.
        tables: Lookup tables.

    Returns:
        The enriched record.
    """
    classification = classify(key, is_legendary, is_mythical, tables)
    evolved_by = evolution.evolved_by if evolution else None
    if classification.evolution_override:
        evolved_by = classification.evolution_override

    return ResolvedPokemon(
        name=key,
        display_name=display_name(key),
        sprite_key=get_sprite_safe_name(key, tables),
        sprite_url=sprite_url(key, tables),
        region=resolve_region(key, generation, tables),
        generation=generation,
        types=list(classification.type_override or types),
        color=color,
        categories=classification.categories,
        form_tags=classification.form_tags,
        is_legendary=is_legendary,
        is_mythical=is_mythical,
        stage=evolution.stage if evolution else None,
        evolved_by=evolved_by,
        is_branched=evolution.is_branched if evolution else False,
    )


def _species_from_graphql(key: str) -> Optional[Dict[str, Any]]:
    row = api.fetch_species_graphql(key)
    if not row:
        return None
    species = row.get("pokemon_v2_pokemonspecy") or {}
    return {
        "species_name": species.get("name") or key,
        "types": [
            (entry.get("pokemon_v2_type") or {}).get("name")
            for entry in row.get("pokemon_v2_pokemontypes") or []
            if (entry.get("pokemon_v2_type") or {}).get("name")
        ],
        "generation": (species.get("pokemon_v2_generation") or {}).get("name"),
        "is_legendary": bool(species.get("is_legendary")),
        "is_mythical": bool(species.get("is_mythical")),
        "color": (species.get("pokemon_v2_pokemoncolor") or {}).get("name"),
        "chain_ref": species.get("evolution_chain_id"),
    }


def _species_from_rest(key: str, tables: SpeciesTables) -> Dict[str, Any]:
    base = get_base_form_name(key, tables)
    try:
        pk = api._lookup(key)
    except ValueError:
        if base == key:
            raise
        logger.info("No pokemon record for %s; falling back to %s", key, base)
        pk = api._lookup(base)

    try:
        species = api.fetch_species_rest(base)
    except ValueError:
        # Form keys are not species names; the dex number always is.
        species = api.fetch_species_rest(str(pk.dex))

    return {
        "species_name": species.get("name") or base,
        "types": list(pk.types),
        "generation": (species.get("generation") or {}).get("name"),
        "is_legendary": bool(species.get("is_legendary")),
        "is_mythical": bool(species.get("is_mythical")),
        "color": (species.get("color") or {}).get("name"),
        "chain_ref": (species.get("evolution_chain") or {}).get("url"),
    }


def _species_info(key: str, tables: SpeciesTables) -> Dict[str, Any]:
    cached = _cache.get("species", key)
    if cached is not None:
        return cached

    info: Optional[Dict[str, Any]] = None
    try:
        info = _species_from_graphql(key)
    except ValueError as exc:
        logger.warning("GraphQL lookup failed for %s, using REST: %s", key, exc)
    if info is None:
        info = _species_from_rest(key, tables)

    _cache.set("species", key, info)
    return info


def _analyze_with_info(key: str, info: Dict[str, Any], tables: SpeciesTables) -> EvolutionAnalysis:
    cached = _cache.get("evolution", key)
    if cached is not None:
        return cached

    chain_ref = info.get("chain_ref")
    if not chain_ref:
        return EvolutionAnalysis(error="No evolution chain available")
    try:
        payload = api.fetch_evolution_chain(chain_ref)
    except ValueError as exc:
        # Not cached so a later call can retry the fetch.
        logger.warning("Evolution chain fetch failed for %s: %s", key, exc)
        return EvolutionAnalysis(error=str(exc))

    analysis = safe_analyze(payload, info.get("species_name") or key, tables)
    _cache.set("evolution", key, analysis)
    return analysis


def resolve_pokemon(name: str, tables: SpeciesTables = DEFAULT_TABLES) -> ResolvedPokemon:
    """Resolve a name into a fully enriched Pokemon record.

    GraphQL is tried first; REST (pypokedex plus the species endpoint) is the
    fallback.

    Args:
        name: Pokemon name or form name in any spelling, or a national dex number.
        tables: Lookup tables.

    Returns:
        The enriched record.

    Raises:
        ValueError: If the name is invalid or cannot be found upstream.
    """
    key = _lookup_key(name, tables)
    info = _species_info(key, tables)
    evolution = _analyze_with_info(key, info, tables)
    return build_record(
        key,
        types=info["types"],
        generation=info["generation"],
        is_legendary=info["is_legendary"],
        is_mythical=info["is_mythical"],
        evolution=evolution,
        color=info.get("color"),
        tables=tables,
    )


def analyze_pokemon_evolution(name: str, tables: SpeciesTables = DEFAULT_TABLES) -> EvolutionAnalysis:
    """Return stage, evolution method and branching for a Pokemon.

    Raises:
        ValueError: If the name is invalid or cannot be found upstream.
    """
    key = _lookup_key(name, tables)
    return _analyze_with_info(key, _species_info(key, tables), tables)


def debug_evolution(name: str, tables: SpeciesTables = DEFAULT_TABLES) -> EvolutionDebug:
    """Collect what is needed to troubleshoot a Pokemon's evolution data.

    Combines the resolved record (stage, region, categories, sprite key) with
    a readable rendering of the whole upstream chain, its species count and
    depth, and any likely sprite naming problems. Chain fetch problems are
    reported through ``error``.

    Args:
        name: Pokemon name or form name in any spelling, or a national dex number.
        tables: Lookup tables.

    Returns:
        The debug report.

    Raises:
        ValueError: If the name is invalid or cannot be found upstream.
    """
    record = resolve_pokemon(name, tables)
    # Dex numbers carry no spelling, so check the resolved key instead.
    raw = name if isinstance(name, str) and not name.strip().isdigit() else record.name
    report = EvolutionDebug(
        pokemon=record.name,
        display_name=record.display_name,
        stage=record.stage,
        evolved_by=record.evolved_by,
        is_branched=record.is_branched,
        region=record.region,
        categories=record.categories,
        form_tags=record.form_tags,
        sprite_key=record.sprite_key,
        sprite_issues=sprite_issues(raw, tables),
    )

    chain_ref = _species_info(record.name, tables).get("chain_ref")
    if not chain_ref:
        return report.model_copy(update={"error": "No evolution chain available"})
    try:
        root = chain_from_payload(api.fetch_evolution_chain(chain_ref))
    except ValueError as exc:
        logger.warning("Evolution chain fetch failed for %s: %s", record.name, exc)
        return report.model_copy(update={"error": str(exc)})
    if root is None:
        return report.model_copy(update={"error": "Unrecognized evolution chain payload"})

    return report.model_copy(
        update={
            "chain": simplify(root),
            "total_species": count_species(root),
            "chain_depth": get_depth(root),
        }
    )


def validate_guess(
    name: str,
    row: CriterionLike,
    column: CriterionLike,
    tables: SpeciesTables = DEFAULT_TABLES,
) -> GuessValidation:
    """Check a guess against a grid cell's row and column criteria.

    An unresolvable name yields ``is_valid=False`` with ``error`` set.
    """
    try:
        pokemon = resolve_pokemon(name, tables)
    except ValueError as exc:
        logger.info("Guess %r could not be resolved: %s", name, exc)
        return GuessValidation(
            pokemon=str(name),
            row=CriterionResult(criterion=_as_criterion(row), passed=False),
            column=CriterionResult(criterion=_as_criterion(column), passed=False),
            is_valid=False,
            error=str(exc),
        )
    return evaluate_cell(pokemon, row, column)


def list_pokemon_names(tables: SpeciesTables = DEFAULT_TABLES) -> List[str]:
    """Return every species name as a normalized key (empty on upstream failure)."""
    cached = _cache.get("names", "all")
    if cached is not None:
        return cached
    try:
        raw_names = api._list_species_names()
    except ValueError as exc:
        logger.error("Failed to fetch Pokemon names: %s", exc)
        return []

    names = [key for key in (normalize(n, tables) for n in raw_names) if key]
    _cache.set("names", "all", names)
    logger.info("Loaded %d Pokemon names", len(names))
    return names


def cache_stats() -> CacheStats:
    _cache.cleanup()
    return _cache.stats()


def clear_cache() -> CacheStats:
    """Empty the service cache and the memoized upstream responses."""
    _cache.clear()
    api._cached_fetch.cache_clear()
    api._list_species_names.cache_clear()
    return _cache.stats()
