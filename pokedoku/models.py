"""Pydantic models for Pokedoku records and tool outputs."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Stage = Literal["Base Stage", "Middle Stage", "Final Stage", "Unknown"]

FormTag = Literal[
    "regional-alola",
    "regional-galar",
    "regional-hisui",
    "regional-paldea",
    "mega",
    "mega-x",
    "mega-y",
    "gigantamax",
    "primal",
    "totem",
    "none",
]

SpecialCategory = Literal[
    "legendary",
    "mythical",
    "starter",
    "fossil",
    "baby",
    "ultra-beast",
    "paradox",
    "normal",
]


# --- Evolution chain models ---


class EvolutionDetail(BaseModel):
    """How a single evolution edge is triggered (all fields optional)."""

    trigger: Optional[str] = None
    item: Optional[str] = None
    held_item: Optional[str] = None
    min_level: Optional[int] = None
    min_happiness: Optional[int] = None
    min_beauty: Optional[int] = None
    known_move_type: Optional[str] = None
    location: Optional[str] = None


class EvolutionNode(BaseModel):
    """Node in an evolution tree rooted at the chain's base species."""

    species_name: str
    children: List["EvolutionNode"] = Field(default_factory=list)
    # Details describe the edge from the parent to this node.
    evolution_details: List[EvolutionDetail] = Field(default_factory=list)


EvolutionNode.model_rebuild()


class ChainStats(BaseModel):
    """Size metrics for a validated chain."""

    species_count: int
    depth: int


class EvolutionAnalysis(BaseModel):
    """Stage, trigger and branching information for one species in a chain."""

    stage: Stage = "Unknown"
    evolved_by: str = "None"
    is_branched: bool = False
    error: Optional[str] = None
    validated: Optional[bool] = None
    chain_stats: Optional[ChainStats] = None


class ChainValidation(BaseModel):
    """Result of a structural check over an evolution chain."""

    is_valid: bool
    error: Optional[str] = None
    species_count: Optional[int] = None
    depth: Optional[int] = None


class SimplifiedNode(BaseModel):
    """Flattened chain entry used for inspection and debugging."""

    species: Optional[str] = None
    depth: Optional[int] = None
    child_count: int = 0
    child_names: List[str] = Field(default_factory=list)
    evolution_summary: Optional[Dict[str, Optional[str]]] = None
    # Only set on truncation/error markers.
    warning: Optional[str] = None


# --- Classification models ---


class Classification(BaseModel):
    """Form tags, categories and overrides derived from a normalized name."""

    form_tags: List[FormTag] = Field(default_factory=list)
    categories: List[SpecialCategory] = Field(default_factory=lambda: ["normal"])
    type_override: Optional[List[str]] = None
    evolution_override: Optional[str] = None

    @property
    def form_tag(self) -> FormTag:
        """Return the primary form tag, or ``"none"``."""
        return self.form_tags[0] if self.form_tags else "none"


# --- Puzzle models ---


class Criterion(BaseModel):
    """A row or column rule of the puzzle grid."""

    kind: Optional[str] = None
    value: Optional[str] = None


class ResolvedPokemon(BaseModel):
    """Fully enriched Pokemon record consumed by the criterion matcher."""

    name: str = Field(description="Normalized lookup key")
    display_name: str
    sprite_key: str
    sprite_url: str
    region: str
    generation: Optional[str] = Field(default=None, description="Generation slug, e.g. generation-iii")
    types: List[str] = Field(default_factory=list)
    color: Optional[str] = Field(default=None, description="Pokedex body color, e.g. red")
    categories: List[SpecialCategory] = Field(default_factory=lambda: ["normal"])
    form_tags: List[FormTag] = Field(default_factory=list)
    is_legendary: bool = False
    is_mythical: bool = False
    stage: Optional[Stage] = None
    evolved_by: Optional[str] = None
    is_branched: bool = False


class CriterionResult(BaseModel):
    """Outcome of a single criterion check."""

    criterion: Criterion
    passed: bool


class GuessValidation(BaseModel):
    """Row, column and combined outcome of a grid-cell guess."""

    pokemon: str
    row: CriterionResult
    column: CriterionResult
    is_valid: bool
    error: Optional[str] = None


class EvolutionDebug(BaseModel):
    """Troubleshooting view of a Pokemon and its whole evolution chain."""

    pokemon: str
    display_name: str
    stage: Optional[Stage] = None
    evolved_by: Optional[str] = None
    is_branched: bool = False
    region: str
    categories: List[SpecialCategory] = Field(default_factory=list)
    form_tags: List[FormTag] = Field(default_factory=list)
    sprite_key: str
    sprite_issues: List[str] = Field(default_factory=list)
    total_species: int = 0
    chain_depth: int = 0
    chain: List[SimplifiedNode] = Field(default_factory=list)
    error: Optional[str] = None


class CacheStats(BaseModel):
    """Entry counts for the lookup cache namespaces."""

    species: int
    evolution: int
    names: int
    total_entries: int
