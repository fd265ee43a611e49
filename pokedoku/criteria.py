"""Puzzle criterion matching against resolved Pokemon records."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Union

from .models import Criterion, CriterionResult, GuessValidation, ResolvedPokemon
from .naming import normalize
from .regions import canonical_region, generation_number

logger = logging.getLogger(__name__)

PokemonLike = Union[ResolvedPokemon, Mapping[str, Any]]
CriterionLike = Union[Criterion, Mapping[str, Any], None]

STAGE_ALIASES: Dict[str, str] = {
    "base": "Base Stage",
    "basic": "Base Stage",
    "first": "Base Stage",
    "base-stage": "Base Stage",
    "first-stage": "Base Stage",
    "middle": "Middle Stage",
    "second": "Middle Stage",
    "middle-stage": "Middle Stage",
    "second-stage": "Middle Stage",
    "final": "Final Stage",
    "last": "Final Stage",
    "final-stage": "Final Stage",
    "fully-evolved": "Final Stage",
}

CATEGORY_SYNONYMS: Dict[str, str] = {
    "ultrabeast": "ultra-beast",
    "ultra-beasts": "ultra-beast",
    "ub": "ultra-beast",
    "paradox-pokemon": "paradox",
    "starter-pokemon": "starter",
    "fossil-pokemon": "fossil",
    "baby-pokemon": "baby",
    "legendary-pokemon": "legendary",
    "mythical-pokemon": "mythical",
    "mythic": "mythical",
}

# Spellings PokeAPI does not use for its color names.
COLOR_SYNONYMS: Dict[str, str] = {"grey": "gray", "violet": "purple"}

_REGIONAL_TAGS = ("regional-alola", "regional-galar", "regional-hisui", "regional-paldea")

FORM_SYNONYMS: Dict[str, tuple] = {
    "mega": ("mega", "mega-x", "mega-y"),
    "mega-evolution": ("mega", "mega-x", "mega-y"),
    "gigantamax": ("gigantamax",),
    "gmax": ("gigantamax",),
    "primal": ("primal",),
    "primal-reversion": ("primal",),
    "totem": ("totem",),
    "totem-form": ("totem",),
    "regional": _REGIONAL_TAGS,
    "regional-form": _REGIONAL_TAGS,
    "alolan": ("regional-alola",),
    "alolan-form": ("regional-alola",),
    "galarian": ("regional-galar",),
    "galarian-form": ("regional-galar",),
    "hisuian": ("regional-hisui",),
    "hisuian-form": ("regional-hisui",),
    "paldean": ("regional-paldea",),
    "paldean-form": ("regional-paldea",),
}

# Evolution-metadata checks for the richer ``evolution`` criterion kind.
EVOLUTION_CHECKS: Dict[str, Callable[[str, bool], bool]] = {
    "branched": lambda evolved_by, branched: branched,
    "branching": lambda evolved_by, branched: branched,
    "linear": lambda evolved_by, branched: not branched,
    "trade": lambda evolved_by, branched: evolved_by.startswith("trade"),
    "item": lambda evolved_by, branched: "item" in evolved_by,
    "use-item": lambda evolved_by, branched: "item" in evolved_by,
    "level": lambda evolved_by, branched: evolved_by.startswith("level"),
    "level-up": lambda evolved_by, branched: evolved_by.startswith("level"),
    "friendship": lambda evolved_by, branched: evolved_by == "friendship",
}


def _get(pokemon: PokemonLike, attr: str, default: Any = None) -> Any:
    if isinstance(pokemon, Mapping):
        value = pokemon.get(attr, default)
    else:
        value = getattr(pokemon, attr, default)
    return default if value is None else value


def _as_criterion(criterion: CriterionLike) -> Criterion:
    if isinstance(criterion, Criterion):
        return criterion
    if isinstance(criterion, Mapping):
        kind, value = criterion.get("kind"), criterion.get("value")
        return Criterion(
            kind=None if kind is None else str(kind),
            value=None if value is None else str(value),
        )
    return Criterion()


def _lower_types(pokemon: PokemonLike) -> List[str]:
    return [str(t).lower() for t in _get(pokemon, "types", [])]


def _match_type(pokemon: PokemonLike, value: str) -> bool:
    return value.strip().lower() in _lower_types(pokemon)


def _match_dualtype(pokemon: PokemonLike, value: str) -> bool:
    types = _lower_types(pokemon)
    wanted = [part.strip().lower() for part in value.split("/") if part.strip()]
    if len(types) != 2 or len(wanted) != 2:
        return False
    return all(t in types for t in wanted)


def _match_region(pokemon: PokemonLike, value: str) -> bool:
    region = str(_get(pokemon, "region", "")).lower()
    expected = canonical_region(value) or value.strip()
    return bool(region) and region == expected.lower()


def _match_color(pokemon: PokemonLike, value: str) -> bool:
    color = str(_get(pokemon, "color", "")).lower()
    key = normalize(value)
    return bool(color) and color == COLOR_SYNONYMS.get(key, key)


def _match_special(pokemon: PokemonLike, value: str) -> bool:
    key = normalize(value)
    key = CATEGORY_SYNONYMS.get(key, key)
    categories = [str(c).lower() for c in _get(pokemon, "categories", [])]

    if key == "legendary":
        return bool(_get(pokemon, "is_legendary", False)) or "legendary" in categories
    if key == "mythical":
        return bool(_get(pokemon, "is_mythical", False)) or "mythical" in categories
    if key in FORM_SYNONYMS:
        form_tags = set(_get(pokemon, "form_tags", []))
        return any(tag in form_tags for tag in FORM_SYNONYMS[key])
    return key in categories


def _match_stage(pokemon: PokemonLike, value: str, kind: str) -> bool:
    key = normalize(value)
    stage = _get(pokemon, "stage", None)
    target = STAGE_ALIASES.get(key)
    if target is not None:
        return stage == target

    if kind == "evolution":
        evolved_by = str(_get(pokemon, "evolved_by", "")).lower()
        branched = bool(_get(pokemon, "is_branched", False))
        check = EVOLUTION_CHECKS.get(key)
        if check is not None:
            return check(evolved_by, branched)
        return evolved_by == value.strip().lower()
    return False


def _match_flag(pokemon: PokemonLike, value: str, flag: str) -> bool:
    expected = normalize(value) == flag.replace("is_", "")
    return bool(_get(pokemon, flag, False)) == expected


def _match_generation(pokemon: PokemonLike, value: str) -> bool:
    actual = generation_number(_get(pokemon, "generation", None))
    return actual is not None and actual == generation_number(value)


def matches(pokemon: PokemonLike, criterion: CriterionLike) -> bool:
    """Decide whether a resolved Pokemon satisfies a puzzle criterion.

    A criterion without ``kind`` or ``value`` is satisfied vacuously.
    Unrecognized kinds fail.

    Args:
        pokemon: Resolved record (model or mapping with the same fields).
        criterion: ``{"kind": ..., "value": ...}``.

    Returns:
        True when the criterion is satisfied.
    """
    crit = _as_criterion(criterion)
    if not crit.kind or not crit.value:
        return True

    kind = crit.kind.strip().lower()
    value = str(crit.value)
    try:
        if kind == "type":
            return _match_type(pokemon, value)
        if kind == "dualtype":
            return _match_dualtype(pokemon, value)
        if kind == "region":
            return _match_region(pokemon, value)
        if kind == "special":
            return _match_special(pokemon, value)
        if kind in ("stage", "evolution"):
            return _match_stage(pokemon, value, kind)
        if kind == "legendary":
            return _match_flag(pokemon, value, "is_legendary")
        if kind == "mythical":
            return _match_flag(pokemon, value, "is_mythical")
        if kind == "generation":
            return _match_generation(pokemon, value)
        if kind in ("color", "colour"):
            return _match_color(pokemon, value)
    except (AttributeError, TypeError, ValueError) as exc:
        logger.warning("Criterion %s=%s could not be evaluated: %s", kind, value, exc)
        return False

    logger.info("Unknown criterion kind: %s", kind)
    return False


def evaluate_cell(
    pokemon: ResolvedPokemon,
    row: CriterionLike,
    column: CriterionLike,
) -> GuessValidation:
    """Evaluate a guess against both criteria of a grid cell."""
    row_crit = _as_criterion(row)
    col_crit = _as_criterion(column)
    row_ok = matches(pokemon, row_crit)
    col_ok = matches(pokemon, col_crit)
    logger.debug("%s - row %s: %s, column %s: %s", pokemon.name, row_crit.kind, row_ok, col_crit.kind, col_ok)
    return GuessValidation(
        pokemon=pokemon.name,
        row=CriterionResult(criterion=row_crit, passed=row_ok),
        column=CriterionResult(criterion=col_crit, passed=col_ok),
        is_valid=row_ok and col_ok,
    )
