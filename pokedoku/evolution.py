"""Evolution chain traversal and analysis helpers."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Set

from .models import (
    ChainStats,
    ChainValidation,
    EvolutionAnalysis,
    EvolutionDetail,
    EvolutionNode,
    SimplifiedNode,
)
from .naming import NO_MATCH, match_strength, name_variants
from .tables import DEFAULT_TABLES, SpeciesTables

logger = logging.getLogger(__name__)

# Traversal ceilings; upstream chains are at most three stages deep.
ANALYSIS_DEPTH_LIMIT = 10
DEPTH_MEASURE_LIMIT = 20
SIMPLIFY_DEPTH_LIMIT = 10
SIMPLIFY_NODE_LIMIT = 50
ADAPTER_DEPTH_LIMIT = 20

NOT_FOUND_ERROR = "Target Pokémon not found in evolution chain"

_CHAIN_WRAPPER_KEYS = (
    "data",
    "chain",
    "evolutionChain",
    "response",
    "pokemon_v2_evolutionchain",
    "pokemon_v2_evolutionchain_by_pk",
)


# --- Payload adapter ---


def _ref_name(ref: Any) -> Optional[str]:
    """Return ``ref["name"]`` for named API resources, or the string itself."""
    if isinstance(ref, dict):
        return ref.get("name")
    if isinstance(ref, str):
        return ref
    return None


def _detail_from_rest(detail: Dict[str, Any]) -> EvolutionDetail:
    return EvolutionDetail(
        trigger=_ref_name(detail.get("trigger")),
        item=_ref_name(detail.get("item")),
        held_item=_ref_name(detail.get("held_item")),
        min_level=detail.get("min_level"),
        min_happiness=detail.get("min_happiness"),
        min_beauty=detail.get("min_beauty"),
        known_move_type=_ref_name(detail.get("known_move_type")),
        location=_ref_name(detail.get("location")),
    )


def _detail_from_graphql(row: Dict[str, Any]) -> EvolutionDetail:
    return EvolutionDetail(
        trigger=_ref_name(row.get("pokemon_v2_evolutiontrigger")),
        item=_ref_name(row.get("pokemon_v2_item")),
        held_item=_ref_name(row.get("pokemonV2ItemByHeldItemId")),
        min_level=row.get("min_level"),
        min_happiness=row.get("min_happiness"),
        min_beauty=row.get("min_beauty"),
        known_move_type=_ref_name(row.get("pokemon_v2_type")),
        location=_ref_name(row.get("pokemon_v2_location")),
    )


def _node_from_rest(data: Dict[str, Any], depth: int = 0) -> EvolutionNode:
    """Convert a REST ``{species, evolves_to, evolution_details}`` node."""
    node = EvolutionNode(
        species_name=_ref_name(data.get("species")) or "",
        evolution_details=[
            _detail_from_rest(detail)
            for detail in data.get("evolution_details") or []
            if isinstance(detail, dict)
        ],
    )
    children = [child for child in data.get("evolves_to") or [] if isinstance(child, dict)]
    if children and depth >= ADAPTER_DEPTH_LIMIT:
        logger.warning("Chain payload deeper than %d levels at %s; truncating", depth, node.species_name)
        return node
    node.children = [_node_from_rest(child, depth + 1) for child in children]
    return node


def _tree_from_species_rows(rows: List[Dict[str, Any]]) -> Optional[EvolutionNode]:
    """Build a tree from GraphQL species rows linked by ``evolves_from_species_id``."""
    rows = sorted(
        (row for row in rows if isinstance(row, dict) and row.get("name")),
        key=lambda row: row.get("id") or 0,
    )
    nodes: Dict[Any, EvolutionNode] = {}
    for row in rows:
        nodes[row.get("id")] = EvolutionNode(
            species_name=row["name"],
            evolution_details=[
                _detail_from_graphql(evo)
                for evo in row.get("pokemon_v2_pokemonevolutions") or []
                if isinstance(evo, dict)
            ],
        )

    roots: List[EvolutionNode] = []
    for row in rows:
        node = nodes[row.get("id")]
        parent = nodes.get(row.get("evolves_from_species_id"))
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.children.append(node)

    if not roots:
        return None
    if len(roots) > 1:
        logger.warning("GraphQL chain has %d roots; using %s", len(roots), roots[0].species_name)
    return roots[0]


def _from_payload(data: Any) -> Optional[EvolutionNode]:
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    if isinstance(data, EvolutionNode):
        return data
    if isinstance(data, list):
        if not data:
            return None
        if isinstance(data[0], dict) and "pokemon_v2_pokemonspecies" in data[0]:
            return _from_payload(data[0])
        return _tree_from_species_rows(data)
    if not isinstance(data, dict):
        logger.warning("Unknown evolution data format: %s", type(data).__name__)
        return None

    if "species" in data:
        return _node_from_rest(data)
    if "pokemon_v2_pokemonspecies" in data:
        return _tree_from_species_rows(data["pokemon_v2_pokemonspecies"] or [])
    for key in _CHAIN_WRAPPER_KEYS:
        if data.get(key):
            return _from_payload(data[key])

    logger.warning("Unknown evolution data format with keys %s", sorted(data))
    return None


def chain_from_payload(payload: Any) -> Optional[EvolutionNode]:
    """Normalize an upstream evolution payload into an :class:`EvolutionNode` tree.

    Accepts REST payloads (``{"chain": {...}}`` or the bare chain node),
    GraphQL payloads (flat species rows, optionally wrapped in ``data`` /
    ``pokemon_v2_evolutionchain``) and JSON strings of either.

    Args:
        payload: Raw upstream data.

    Returns:
        Root node, or ``None`` when the shape is not recognized.
    """
    if not payload:
        logger.warning("No evolution data provided")
        return None
    try:
        return _from_payload(payload)
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        logger.error("Failed to normalize evolution chain: %s", exc)
        return None


def _coerce(chain: Any) -> Optional[EvolutionNode]:
    if chain is None or isinstance(chain, EvolutionNode):
        return chain
    return chain_from_payload(chain)


# --- Analysis ---


def determine_evolution_method(detail: Optional[EvolutionDetail]) -> str:
    """Describe how an evolution edge is triggered.

    Precedence: trade, item, held item, level with explicit level, friendship,
    beauty, known move type, location, generic item use, plain level up.
    """
    if detail is None:
        return "Unknown Method"
    if detail.trigger == "trade":
        return "Trade"
    if detail.item:
        return f"Use Item: {detail.item}"
    if detail.held_item:
        return f"Held Item: {detail.held_item}"
    if detail.trigger == "level-up" and detail.min_level:
        return f"Level {detail.min_level}"
    if detail.min_happiness:
        return "Friendship"
    if detail.min_beauty:
        return "Beauty"
    if detail.known_move_type:
        return f"Knows Move Type: {detail.known_move_type}"
    if detail.location:
        return f"At Location: {detail.location}"
    if detail.trigger == "use-item":
        return "Use Evolution Item"
    return "Level Up"


def _walk(
    node: EvolutionNode,
    parent: Optional[EvolutionNode],
    depth: int,
    variants: frozenset,
    state: Dict[str, Any],
) -> None:
    """Depth-first search for the target, recording stage, trigger and branching.

    The first node with the strongest match wins: an exact name match
    replaces an earlier loose one, but a loose match never replaces an exact
    one (``porygon`` must not be overridden by ``porygon2``).
    """
    current = node.species_name.lower()
    strength = match_strength(current, variants)
    if depth < 5:
        logger.debug("%s- %s%s", "  " * depth, current, " <- target" if strength else "")

    if strength > state["match"]:
        state["found"] = True
        state["match"] = strength
        if parent is None:
            state["stage"] = "Base Stage"
        elif not node.children:
            state["stage"] = "Final Stage"
        else:
            state["stage"] = "Middle Stage"

        # Trigger data lives on this node's edge from its parent.
        state["evolved_by"] = "None"
        if parent is not None and node.evolution_details:
            state["evolved_by"] = determine_evolution_method(node.evolution_details[0])

    # Branching is chain-global and recorded at the first branch point seen.
    if not state["is_branched"] and len(node.children) > 1:
        state["is_branched"] = True

    if depth < ANALYSIS_DEPTH_LIMIT:
        for child in node.children:
            _walk(child, node, depth + 1, variants, state)
    elif node.children:
        logger.warning("Depth limit reached at %s, stopping traversal", current)


def analyze(chain: Any, target_name: Any, tables: SpeciesTables = DEFAULT_TABLES) -> EvolutionAnalysis:
    """Determine stage, evolution method and branching for a target species.

    Args:
        chain: Root :class:`EvolutionNode` or a raw upstream chain payload.
        target_name: Species or form name to locate.
        tables: Lookup tables used for name matching.

    Returns:
        Analysis result; problems are reported through ``error`` rather than raised.
    """
    if not chain:
        return EvolutionAnalysis(error="No evolution chain provided")
    if not target_name or not isinstance(target_name, str):
        return EvolutionAnalysis(error="No target Pokémon name provided")

    root = _coerce(chain)
    if root is None:
        return EvolutionAnalysis(error="Unrecognized evolution chain payload")

    variants = name_variants(target_name, tables)
    if not variants:
        return EvolutionAnalysis(error="No target Pokémon name provided")

    logger.debug("Analyzing evolution chain %s for %s", root.species_name, target_name)
    state: Dict[str, Any] = {
        "found": False,
        "match": NO_MATCH,
        "stage": "Unknown",
        "evolved_by": "None",
        "is_branched": False,
    }
    try:
        _walk(root, None, 0, variants, state)
    except Exception as exc:  # malformed trees degrade to an Unknown result
        logger.error("Error during evolution chain traversal for %s: %s", target_name, exc)
        return EvolutionAnalysis(error=f"Traversal error: {exc}")

    if not state["found"]:
        logger.info("Target %s not found in evolution chain; variants tried: %s", target_name, sorted(variants))
        return EvolutionAnalysis(error=NOT_FOUND_ERROR)

    return EvolutionAnalysis(
        stage=state["stage"],
        evolved_by=state["evolved_by"],
        is_branched=state["is_branched"],
    )


# --- Chain metrics ---


def _count(node: EvolutionNode, ancestors: Set[int]) -> int:
    if id(node) in ancestors:
        return 0
    ancestors = ancestors | {id(node)}
    return 1 + sum(_count(child, ancestors) for child in node.children)


def count_species(chain: Any) -> int:
    """Count every node in the chain (0 for a missing chain)."""
    root = _coerce(chain)
    if root is None:
        logger.warning("count_species: no chain provided")
        return 0
    return _count(root, set())


def _max_depth(node: EvolutionNode, depth: int) -> int:
    if depth >= DEPTH_MEASURE_LIMIT or not node.children:
        return depth
    return max(_max_depth(child, depth + 1) for child in node.children)


def get_depth(chain: Any) -> int:
    """Return the deepest level reached below the root, capped at 20."""
    root = _coerce(chain)
    if root is None:
        logger.warning("get_depth: no chain provided")
        return 0
    return _max_depth(root, 0)


def _summarize_detail(node: EvolutionNode) -> Optional[Dict[str, Optional[str]]]:
    if not node.evolution_details:
        return None
    detail = node.evolution_details[0]
    return {
        "trigger": detail.trigger,
        "min_level": str(detail.min_level) if detail.min_level is not None else None,
        "item": detail.item,
    }


def _flatten(node: EvolutionNode, depth: int, out: List[SimplifiedNode], state: Dict[str, bool]) -> None:
    if len(out) >= SIMPLIFY_NODE_LIMIT:
        state["truncated"] = True
        return
    out.append(
        SimplifiedNode(
            species=node.species_name or "unknown",
            depth=depth,
            child_count=len(node.children),
            child_names=[child.species_name or "unknown" for child in node.children],
            evolution_summary=_summarize_detail(node),
        )
    )
    if depth < SIMPLIFY_DEPTH_LIMIT:
        for child in node.children:
            _flatten(child, depth + 1, out, state)


def simplify(chain: Any) -> List[SimplifiedNode]:
    """Flatten a chain into depth-annotated records for inspection.

    At most 50 nodes are emitted; a trailing warning entry marks truncation.
    """
    root = _coerce(chain)
    if root is None:
        return [SimplifiedNode(species="unknown", depth=0, warning="No chain data")]

    out: List[SimplifiedNode] = []
    state = {"truncated": False}
    _flatten(root, 0, out, state)
    if state["truncated"]:
        out.append(SimplifiedNode(warning=f"Stopped at {SIMPLIFY_NODE_LIMIT} nodes to prevent overflow"))
    logger.debug("Simplified chain: %d nodes", len(out))
    return out


# --- Validation ---


def _find_cycle(node: EvolutionNode, path: List[str]) -> Optional[str]:
    name = node.species_name
    if name in path:
        return " -> ".join(path + [name])
    path.append(name)
    for child in node.children:
        cycle = _find_cycle(child, path)
        if cycle:
            return cycle
    path.pop()
    return None


def validate(chain: Any) -> ChainValidation:
    """Check a chain for missing names and ancestor cycles.

    Returns:
        ``is_valid=False`` with a description, or ``is_valid=True`` with the
        species count and depth.
    """
    if not chain:
        return ChainValidation(is_valid=False, error="Chain is missing")
    root = _coerce(chain)
    if root is None:
        return ChainValidation(is_valid=False, error="Unrecognized chain payload")
    if not root.species_name:
        return ChainValidation(is_valid=False, error="Chain species missing name")

    cycle = _find_cycle(root, [])
    if cycle:
        return ChainValidation(is_valid=False, error=f"Circular reference detected: {cycle}")

    return ChainValidation(is_valid=True, species_count=count_species(root), depth=get_depth(root))


def safe_analyze(chain: Any, target_name: Any, tables: SpeciesTables = DEFAULT_TABLES) -> EvolutionAnalysis:
    """Validate the chain first, then analyze it and attach chain stats."""
    try:
        root = _coerce(chain)
        validation = validate(root)
        if not validation.is_valid:
            logger.error("Evolution chain validation failed: %s", validation.error)
            return EvolutionAnalysis(error=f"Invalid chain: {validation.error}", validated=False)

        analysis = analyze(root, target_name, tables)
        return analysis.model_copy(
            update={
                "validated": True,
                "chain_stats": ChainStats(species_count=validation.species_count, depth=validation.depth),
            }
        )
    except Exception as exc:  # last-resort guard around validation + analysis
        logger.error("Critical error analyzing %s: %s", target_name, exc)
        return EvolutionAnalysis(
            error=f"Analysis crashed: {exc}",
            validated=False,
            chain_stats=ChainStats(species_count=0, depth=0),
        )
