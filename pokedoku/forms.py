"""Form and special-category classification for normalized names."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .models import Classification, FormTag
from .naming import get_base_form_name
from .tables import DEFAULT_TABLES, SpeciesTables

logger = logging.getLogger(__name__)

# A suffix counts when it is followed by another hyphen segment or the end of the key.
REGIONAL_PATTERNS: Tuple[Tuple[re.Pattern, FormTag], ...] = (
    (re.compile(r"-alola(?=-|$)"), "regional-alola"),
    (re.compile(r"-galar(?=-|$)"), "regional-galar"),
    (re.compile(r"-hisui(?=-|$)"), "regional-hisui"),
    (re.compile(r"-paldea(?=-|$)"), "regional-paldea"),
)

# Most specific first: mega-x must win over plain mega.
BATTLE_FORM_PATTERNS: Tuple[Tuple[re.Pattern, FormTag], ...] = (
    (re.compile(r"-mega-x(?=-|$)"), "mega-x"),
    (re.compile(r"-mega-y(?=-|$)"), "mega-y"),
    (re.compile(r"-mega(?=-|$)"), "mega"),
    (re.compile(r"-(gmax|gigantamax)(?=-|$)"), "gigantamax"),
    (re.compile(r"-primal(?=-|$)"), "primal"),
    (re.compile(r"-totem(?=-|$)"), "totem"),
)

BATTLE_FORM_REGION_PATTERN = re.compile(r"-(mega|primal|gmax|gigantamax)(?=-|$)")


def _first_match(key: str, patterns) -> Optional[FormTag]:
    for pattern, tag in patterns:
        if pattern.search(key):
            return tag
    return None


def detect_form_tags(key: str) -> List[FormTag]:
    """Return the regional tag (if any) followed by the battle-form tag (if any)."""
    tags: List[FormTag] = []
    regional = _first_match(key, REGIONAL_PATTERNS)
    if regional:
        tags.append(regional)
    battle = _first_match(key, BATTLE_FORM_PATTERNS)
    if battle:
        tags.append(battle)
    return tags


def is_battle_form(key: str) -> bool:
    """Return True for mega, primal and gigantamax keys."""
    return bool(BATTLE_FORM_REGION_PATTERN.search(key or ""))


def detect_categories(
    key: str,
    is_legendary: bool = False,
    is_mythical: bool = False,
    tables: SpeciesTables = DEFAULT_TABLES,
) -> List[str]:
    """Return the special categories for a key.

    Membership is tested on the base form so that regional and battle forms
    inherit their species' categories. Legendary/mythical come from the
    species record flags.
    """
    base = get_base_form_name(key, tables)
    categories: List[str] = []
    if is_legendary:
        categories.append("legendary")
    if is_mythical:
        categories.append("mythical")
    for category, members in (
        ("fossil", tables.fossils),
        ("ultra-beast", tables.ultra_beasts),
        ("paradox", tables.paradox),
        ("starter", tables.starters),
        ("baby", tables.babies),
    ):
        if base in members:
            categories.append(category)
    return categories or ["normal"]


def classify(
    key: str,
    is_legendary: bool = False,
    is_mythical: bool = False,
    tables: SpeciesTables = DEFAULT_TABLES,
) -> Classification:
    """Classify a normalized key into form tags, categories and overrides.

    Args:
        key: Normalized key.
        is_legendary: Legendary flag from the species record.
        is_mythical: Mythical flag from the species record.
        tables: Lookup tables.

    Returns:
        Classification; degrades to the neutral default on any error.
    """
    try:
        type_override = tables.type_overrides.get(key)
        return Classification(
            form_tags=detect_form_tags(key),
            categories=detect_categories(key, is_legendary, is_mythical, tables),
            type_override=list(type_override) if type_override else None,
            evolution_override=tables.evolution_overrides.get(key),
        )
    except Exception as exc:  # classification must never fail a lookup
        logger.warning("Classification failed for %r: %s", key, exc)
        return Classification()
