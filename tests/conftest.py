from typing import Any, Dict, Iterable, List, Optional

import pytest

import pokedoku.api as api
import pokedoku.pokemon as pokemon_service

REST = "https://pokeapi.co/api/v2/"


class StubPokemon:
    def __init__(self, name: str, dex: int, types: Iterable[str]) -> None:
        self.name = name
        self.dex = dex
        self.types = tuple(types)


def _chain_node(name: str, children: Optional[List[Dict]] = None, **detail: Any) -> Dict[str, Any]:
    """Build a REST evolution chain node; keyword args become the edge detail."""
    details = []
    if detail:
        entry: Dict[str, Any] = {}
        for key, value in detail.items():
            entry[key] = {"name": value} if key in {"trigger", "item", "held_item"} else value
        details.append(entry)
    return {"species": {"name": name}, "evolution_details": details, "evolves_to": children or []}


BULBASAUR_CHAIN = {
    "id": 1,
    "chain": _chain_node(
        "bulbasaur",
        [
            _chain_node(
                "ivysaur",
                [_chain_node("venusaur", trigger="level-up", min_level=32)],
                trigger="level-up",
                min_level=16,
            )
        ],
    ),
}

CHARMANDER_CHAIN = {
    "id": 2,
    "chain": _chain_node(
        "charmander",
        [
            _chain_node(
                "charmeleon",
                [_chain_node("charizard", trigger="level-up", min_level=36)],
                trigger="level-up",
                min_level=16,
            )
        ],
    ),
}

PICHU_CHAIN = {
    "id": 10,
    "chain": _chain_node(
        "pichu",
        [
            _chain_node(
                "pikachu",
                [_chain_node("raichu", trigger="use-item", item="thunder-stone")],
                trigger="level-up",
                min_happiness=220,
            )
        ],
    ),
}

EEVEE_CHAIN = {
    "id": 67,
    "chain": _chain_node(
        "eevee",
        [
            _chain_node("vaporeon", trigger="use-item", item="water-stone"),
            _chain_node("jolteon", trigger="use-item", item="thunder-stone"),
            _chain_node("flareon", trigger="use-item", item="fire-stone"),
            _chain_node("espeon", trigger="level-up", min_happiness=160),
        ],
    ),
}

MEWTWO_CHAIN = {"id": 63, "chain": _chain_node("mewtwo")}


@pytest.fixture
def bulbasaur_chain() -> Dict[str, Any]:
    return BULBASAUR_CHAIN


@pytest.fixture
def eevee_chain() -> Dict[str, Any]:
    return EEVEE_CHAIN


@pytest.fixture(autouse=True)
def reset_caches() -> None:
    api._cached_fetch.cache_clear()
    api._list_species_names.cache_clear()
    pokemon_service._cache.clear()


@pytest.fixture(autouse=True)
def stubbed_external_dependencies(monkeypatch: pytest.MonkeyPatch) -> None:
    pokemon_registry = {
        "bulbasaur": StubPokemon("bulbasaur", 1, ["grass", "poison"]),
        "ivysaur": StubPokemon("ivysaur", 2, ["grass", "poison"]),
        "venusaur": StubPokemon("venusaur", 3, ["grass", "poison"]),
        "charizard": StubPokemon("charizard", 6, ["fire", "flying"]),
        "charizard-mega-x": StubPokemon("charizard-mega-x", 6, ["fire", "dragon"]),
        "pikachu": StubPokemon("pikachu", 25, ["electric"]),
        "raichu": StubPokemon("raichu", 26, ["electric"]),
        "raichu-alola": StubPokemon("raichu-alola", 26, ["electric", "psychic"]),
        "mewtwo": StubPokemon("mewtwo", 150, ["psychic"]),
        "mr-mime": StubPokemon("mr-mime", 122, ["psychic", "fairy"]),
    }
    # Forms share their species' dex number; dex lookups return the default form.
    by_dex = {pk.dex: pk for name, pk in pokemon_registry.items() if name not in {"charizard-mega-x", "raichu-alola"}}

    def fake_get(*, name: Optional[str] = None, dex: Optional[int] = None):
        if name is not None and name.lower() in pokemon_registry:
            return pokemon_registry[name.lower()]
        if dex is not None and dex in by_dex:
            return by_dex[dex]
        raise ValueError("Pokemon not found")

    monkeypatch.setattr(api.pypokedex, "get", fake_get)

    def species(
        name: str, dex: int, generation: str, chain_id: int, color: str, legendary: bool = False
    ) -> Dict[str, Any]:
        return {
            "id": dex,
            "name": name,
            "generation": {"name": generation},
            "is_legendary": legendary,
            "is_mythical": False,
            "color": {"name": color},
            "evolution_chain": {"url": f"{REST}evolution-chain/{chain_id}/"},
        }

    species_entries = {
        "bulbasaur": species("bulbasaur", 1, "generation-i", 1, "green"),
        "ivysaur": species("ivysaur", 2, "generation-i", 1, "green"),
        "venusaur": species("venusaur", 3, "generation-i", 1, "green"),
        "charizard": species("charizard", 6, "generation-i", 2, "red"),
        "pikachu": species("pikachu", 25, "generation-i", 10, "yellow"),
        "raichu": species("raichu", 26, "generation-i", 10, "yellow"),
        "mewtwo": species("mewtwo", 150, "generation-i", 63, "purple", legendary=True),
        "mr-mime": species("mr-mime", 122, "generation-i", 58, "pink"),
    }
    species_by_dex = {str(entry["id"]): entry for entry in species_entries.values()}

    evolution_chains = {
        f"{REST}evolution-chain/1": BULBASAUR_CHAIN,
        f"{REST}evolution-chain/2": CHARMANDER_CHAIN,
        f"{REST}evolution-chain/10": PICHU_CHAIN,
        f"{REST}evolution-chain/63": MEWTWO_CHAIN,
        f"{REST}evolution-chain/67": EEVEE_CHAIN,
    }

    species_listing = {
        "results": [{"name": name} for name in ("bulbasaur", "ivysaur", "mr-mime", "nidoran-f", "ho-oh")]
    }

    def fake_fetch_json(url: str, context: str) -> Dict[str, Any]:
        if url.startswith(f"{REST}pokemon-species?"):
            return species_listing
        if "/pokemon-species/" in url:
            key = url.rstrip("/").split("/")[-1]
            entry = species_entries.get(key) or species_by_dex.get(key)
            if entry is not None:
                return entry
        if "/evolution-chain/" in url:
            chain_url = url.rstrip("/")
            if chain_url in evolution_chains:
                return evolution_chains[chain_url]
        raise ValueError(f"Failed to fetch {context}: 404 Not Found")

    monkeypatch.setattr(api, "_fetch_json", fake_fetch_json)

    def unavailable_graphql(query: str, variables: Optional[Dict[str, Any]] = None) -> Dict:
        raise ValueError("All GraphQL endpoints failed: offline")

    # REST is the default path in tests; GraphQL tests patch this explicitly.
    monkeypatch.setattr(api, "_graphql_fetch", unavailable_graphql)
