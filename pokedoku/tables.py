"""Static species lookup tables shared by the classification helpers.

The tables are immutable and built once at import time. Components receive
them through a :class:`SpeciesTables` bundle so callers (and tests) can swap
in alternative data without touching module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

# --- Membership lists ---

FOSSIL_POKEMON = frozenset(
    {
        "omanyte", "omastar", "kabuto", "kabutops", "aerodactyl",
        "lileep", "cradily", "anorith", "armaldo",
        "cranidos", "rampardos", "shieldon", "bastiodon",
        "tirtouga", "carracosta", "archen", "archeops",
        "tyrunt", "tyrantrum", "amaura", "aurorus",
        "dracozolt", "arctozolt", "dracovish", "arctovish",
    }
)

ULTRA_BEASTS = frozenset(
    {
        "nihilego", "buzzwole", "pheromosa", "xurkitree", "celesteela",
        "kartana", "guzzlord", "poipole", "naganadel", "stakataka",
        "blacephalon",
    }
)

PARADOX_POKEMON = frozenset(
    {
        "great-tusk", "scream-tail", "brute-bonnet", "flutter-mane",
        "slither-wing", "sandy-shocks", "roaring-moon", "iron-treads",
        "iron-bundle", "iron-hands", "iron-jugulis", "iron-moth",
        "iron-thorns", "iron-valiant", "walking-wake", "iron-leaves",
        "gouging-fire", "raging-bolt", "iron-boulder", "iron-crown",
    }
)

STARTERS = frozenset(
    {
        "bulbasaur", "ivysaur", "venusaur", "charmander", "charmeleon", "charizard",
        "squirtle", "wartortle", "blastoise", "chikorita", "bayleef", "meganium",
        "cyndaquil", "quilava", "typhlosion", "totodile", "croconaw", "feraligatr",
        "treecko", "grovyle", "sceptile", "torchic", "combusken", "blaziken",
        "mudkip", "marshtomp", "swampert", "turtwig", "grotle", "torterra",
        "chimchar", "monferno", "infernape", "piplup", "prinplup", "empoleon",
        "snivy", "servine", "serperior", "tepig", "pignite", "emboar",
        "oshawott", "dewott", "samurott", "chespin", "quilladin", "chesnaught",
        "fennekin", "braixen", "delphox", "froakie", "frogadier", "greninja",
        "rowlet", "dartrix", "decidueye", "litten", "torracat", "incineroar",
        "popplio", "brionne", "primarina", "grookey", "thwackey", "rillaboom",
        "scorbunny", "raboot", "cinderace", "sobble", "drizzile", "inteleon",
        "sprigatito", "floragato", "meowscarada", "fuecoco", "crocalor", "skeledirge",
        "quaxly", "quaxwell", "quaquaval",
    }
)

BABY_POKEMON = frozenset(
    {
        "pichu", "cleffa", "igglybuff", "togepi", "tyrogue", "smoochum",
        "elekid", "magby", "azurill", "wynaut", "budew", "chingling",
        "bonsly", "mime-jr", "happiny", "munchlax", "riolu", "mantyke", "toxel",
    }
)

# Hyphenated species whose hyphen is part of the name, not a form suffix.
PROTECTED_NAMES = frozenset(
    {
        "mr-mime", "mr-rime", "mime-jr", "ho-oh", "type-null", "porygon-z",
        "jangmo-o", "hakamo-o", "kommo-o", "nidoran-f", "nidoran-m",
        "tapu-koko", "tapu-lele", "tapu-bulu", "tapu-fini",
        "wo-chien", "chien-pao", "ting-lu", "chi-yu",
    }
    | PARADOX_POKEMON
)

# --- Region tables ---

GENERATION_TO_REGION = MappingProxyType(
    {
        "generation-i": "Kanto",
        "generation-ii": "Johto",
        "generation-iii": "Hoenn",
        "generation-iv": "Sinnoh",
        "generation-v": "Unova",
        "generation-vi": "Kalos",
        "generation-vii": "Alola",
        "generation-viii": "Galar",
        "generation-ix": "Paldea",
    }
)

REGIONS: Tuple[str, ...] = tuple(GENERATION_TO_REGION.values())

REGIONAL_SUFFIXES = MappingProxyType(
    {
        "alola": "Alola",
        "galar": "Galar",
        "hisui": "Hisui",
        "paldea": "Paldea",
    }
)

FOSSIL_REGIONS = MappingProxyType(
    {
        "omanyte": "Kanto", "omastar": "Kanto", "kabuto": "Kanto",
        "kabutops": "Kanto", "aerodactyl": "Kanto",
        "lileep": "Hoenn", "cradily": "Hoenn", "anorith": "Hoenn", "armaldo": "Hoenn",
        "cranidos": "Sinnoh", "rampardos": "Sinnoh",
        "shieldon": "Sinnoh", "bastiodon": "Sinnoh",
        "tirtouga": "Unova", "carracosta": "Unova", "archen": "Unova", "archeops": "Unova",
        "tyrunt": "Kalos", "tyrantrum": "Kalos", "amaura": "Kalos", "aurorus": "Kalos",
        "dracozolt": "Galar", "arctozolt": "Galar",
        "dracovish": "Galar", "arctovish": "Galar",
    }
)

LEGENDARY_REGIONS = MappingProxyType(
    {
        # Kanto
        "articuno": "Kanto", "zapdos": "Kanto", "moltres": "Kanto",
        "mewtwo": "Kanto", "mew": "Kanto",
        # Johto
        "raikou": "Johto", "entei": "Johto", "suicune": "Johto",
        "lugia": "Johto", "ho-oh": "Johto", "celebi": "Johto",
        # Hoenn
        "regirock": "Hoenn", "regice": "Hoenn", "registeel": "Hoenn",
        "latias": "Hoenn", "latios": "Hoenn", "kyogre": "Hoenn",
        "groudon": "Hoenn", "rayquaza": "Hoenn", "jirachi": "Hoenn", "deoxys": "Hoenn",
        # Sinnoh
        "uxie": "Sinnoh", "mesprit": "Sinnoh", "azelf": "Sinnoh",
        "dialga": "Sinnoh", "palkia": "Sinnoh", "heatran": "Sinnoh",
        "regigigas": "Sinnoh", "giratina": "Sinnoh", "cresselia": "Sinnoh",
        "phione": "Sinnoh", "manaphy": "Sinnoh", "darkrai": "Sinnoh",
        "shaymin": "Sinnoh", "arceus": "Sinnoh",
        # Unova
        "victini": "Unova", "cobalion": "Unova", "terrakion": "Unova",
        "virizion": "Unova", "tornadus": "Unova", "thundurus": "Unova",
        "reshiram": "Unova", "zekrom": "Unova", "landorus": "Unova",
        "kyurem": "Unova", "keldeo": "Unova", "meloetta": "Unova", "genesect": "Unova",
        # Kalos
        "xerneas": "Kalos", "yveltal": "Kalos", "zygarde": "Kalos",
        "diancie": "Kalos", "hoopa": "Kalos", "volcanion": "Kalos",
        # Alola
        "type-null": "Alola", "silvally": "Alola",
        "tapu-koko": "Alola", "tapu-lele": "Alola", "tapu-bulu": "Alola", "tapu-fini": "Alola",
        "cosmog": "Alola", "cosmoem": "Alola", "solgaleo": "Alola", "lunala": "Alola",
        "necrozma": "Alola", "magearna": "Alola", "marshadow": "Alola", "zeraora": "Alola",
        "meltan": "Alola", "melmetal": "Alola",
        # Galar
        "zacian": "Galar", "zamazenta": "Galar", "eternatus": "Galar",
        "kubfu": "Galar", "urshifu": "Galar", "zarude": "Galar",
        "regieleki": "Galar", "regidrago": "Galar", "glastrier": "Galar",
        "spectrier": "Galar", "calyrex": "Galar",
        # Paldea
        "wo-chien": "Paldea", "chien-pao": "Paldea", "ting-lu": "Paldea", "chi-yu": "Paldea",
        "koraidon": "Paldea", "miraidon": "Paldea", "okidogi": "Paldea",
        "munkidori": "Paldea", "fezandipiti": "Paldea", "ogerpon": "Paldea",
        "terapagos": "Paldea", "pecharunt": "Paldea",
    }
)

# Hand-pinned corrections, keyed by full form name or base species name.
REGION_OVERRIDES = MappingProxyType(
    {
        "lucario": "Sinnoh",
        "charizard": "Kanto",
        "venusaur": "Kanto",
        "pikachu": "Kanto",
        "ninetales": "Kanto",
        "snorlax": "Kanto",
        "lycanroc-dusk": "Alola",
        "lycanroc-midnight": "Alola",
        "lycanroc-midday": "Alola",
        "wishiwashi-school": "Alola",
        "minior-meteor": "Alola",
        "minior-core": "Alola",
        "oricorio-baile": "Alola",
        "oricorio-pom-pom": "Alola",
        "oricorio-pau": "Alola",
        "oricorio-sensu": "Alola",
        "zygarde-10": "Kalos",
        "zygarde-50": "Kalos",
        "zygarde-complete": "Kalos",
    }
)

# --- Form suffixes ---

# Priority order for single-pass base-form stripping.
FORM_SUFFIXES: Tuple[str, ...] = (
    "-alola", "-galar", "-hisui", "-paldea",
    "-mega-x", "-mega-y", "-mega",
    "-gmax", "-gigantamax",
    "-primal", "-ash", "-totem",
    "-ice-rider", "-shadow-rider",
    "-wellspring", "-hearthflame", "-cornerstone",
    "-stellar", "-terastal",
    "-plant", "-sandy", "-trash", "-land", "-sky", "-standard", "-zen",
    "-incarnate", "-therian", "-origin", "-ordinary", "-resolute",
    "-aria", "-pirouette", "-male", "-female", "-shield", "-blade",
    "-average", "-small", "-large", "-super",
    "-baile", "-pom-pom", "-pau", "-sensu",
    "-midday", "-midnight", "-dusk", "-solo", "-school",
    "-red", "-orange", "-yellow", "-green", "-blue", "-indigo", "-violet",
    "-disguised", "-busted", "-amped", "-low-key", "-noice",
    "-full-belly", "-hangry",
)

# --- Sprites ---

SPRITE_EXCEPTIONS = MappingProxyType(
    {
        "tauros-paldea": "tauros-paldean-combat",
        "tauros-paldea-combat-breed": "tauros-paldean-combat",
        "tauros-paldea-aqua": "tauros-paldean-aqua",
        "tauros-paldea-aqua-breed": "tauros-paldean-aqua",
        "tauros-paldea-blaze": "tauros-paldean-blaze",
        "tauros-paldea-blaze-breed": "tauros-paldean-blaze",
        "wooper-paldea": "wooper-paldean",
        "ogerpon-wellspring": "ogerpon-wellspring-mask",
        "ogerpon-hearthflame": "ogerpon-hearthflame-mask",
        "ogerpon-cornerstone": "ogerpon-cornerstone-mask",
        "minior": "minior-red-meteor",
        "minior-red": "minior-red-meteor",
        "minior-orange": "minior-orange-meteor",
        "minior-yellow": "minior-yellow-meteor",
        "minior-green": "minior-green-meteor",
        "minior-blue": "minior-blue-meteor",
        "minior-indigo": "minior-indigo-meteor",
        "minior-violet": "minior-violet-meteor",
        "minior-red-core": "minior-red",
        "minior-orange-core": "minior-orange",
        "minior-yellow-core": "minior-yellow",
        "minior-green-core": "minior-green",
        "minior-blue-core": "minior-blue",
        "minior-indigo-core": "minior-indigo",
        "minior-violet-core": "minior-violet",
        "calyrex-ice": "calyrex-ice-rider",
        "calyrex-shadow": "calyrex-shadow-rider",
    }
)

SPRITE_SUFFIXES: Tuple[Tuple[str, str], ...] = (
    ("-alola", "-alolan"),
    ("-galar", "-galarian"),
    ("-hisui", "-hisuian"),
    ("-paldea", "-paldean"),
    ("-gmax", "-gigantamax"),
)

SPRITE_PROBLEM_NAMES = frozenset(
    {"farfetchd", "mr-mime", "mime-jr", "type-null", "ho-oh", "jangmo-o", "hakamo-o", "kommo-o"}
)

# --- Per-form overrides ---

TYPE_OVERRIDES = MappingProxyType(
    {
        # Alola
        "rattata-alola": ("dark", "normal"),
        "raticate-alola": ("dark", "normal"),
        "raichu-alola": ("electric", "psychic"),
        "sandshrew-alola": ("ice", "steel"),
        "sandslash-alola": ("ice", "steel"),
        "vulpix-alola": ("ice",),
        "ninetales-alola": ("ice", "fairy"),
        "diglett-alola": ("ground", "steel"),
        "dugtrio-alola": ("ground", "steel"),
        "meowth-alola": ("dark",),
        "persian-alola": ("dark",),
        "geodude-alola": ("rock", "electric"),
        "graveler-alola": ("rock", "electric"),
        "golem-alola": ("rock", "electric"),
        "grimer-alola": ("poison", "dark"),
        "muk-alola": ("poison", "dark"),
        "exeggutor-alola": ("grass", "dragon"),
        "marowak-alola": ("fire", "ghost"),
        # Galar
        "ponyta-galar": ("psychic",),
        "rapidash-galar": ("psychic", "fairy"),
        "slowbro-galar": ("poison", "psychic"),
        "slowking-galar": ("poison", "psychic"),
        "farfetchd-galar": ("fighting",),
        "weezing-galar": ("poison", "fairy"),
        "mr-mime-galar": ("ice", "psychic"),
        "corsola-galar": ("ghost",),
        "zigzagoon-galar": ("dark", "normal"),
        "linoone-galar": ("dark", "normal"),
        "darumaka-galar": ("ice",),
        "darmanitan-galar": ("ice",),
        "yamask-galar": ("ground", "ghost"),
        "stunfisk-galar": ("ground", "steel"),
        "articuno-galar": ("psychic", "flying"),
        "zapdos-galar": ("fighting", "flying"),
        "moltres-galar": ("dark", "flying"),
        # Hisui
        "growlithe-hisui": ("fire", "rock"),
        "arcanine-hisui": ("fire", "rock"),
        "voltorb-hisui": ("electric", "grass"),
        "electrode-hisui": ("electric", "grass"),
        "typhlosion-hisui": ("fire", "ghost"),
        "qwilfish-hisui": ("dark", "poison"),
        "sneasel-hisui": ("fighting", "poison"),
        "samurott-hisui": ("water", "dark"),
        "lilligant-hisui": ("grass", "fighting"),
        "zorua-hisui": ("normal", "ghost"),
        "zoroark-hisui": ("normal", "ghost"),
        "braviary-hisui": ("psychic", "flying"),
        "sliggoo-hisui": ("steel", "dragon"),
        "goodra-hisui": ("steel", "dragon"),
        "avalugg-hisui": ("ice", "rock"),
        "decidueye-hisui": ("grass", "fighting"),
        # Paldea
        "wooper-paldea": ("poison", "ground"),
        "tauros-paldea": ("fighting",),
        "tauros-paldea-combat-breed": ("fighting",),
        "tauros-paldea-blaze": ("fighting", "fire"),
        "tauros-paldea-blaze-breed": ("fighting", "fire"),
        "tauros-paldea-aqua": ("fighting", "water"),
        "tauros-paldea-aqua-breed": ("fighting", "water"),
        # Battle forms
        "charizard-mega-x": ("fire", "dragon"),
        "ampharos-mega": ("electric", "dragon"),
        "pinsir-mega": ("bug", "flying"),
        "gyarados-mega": ("water", "dark"),
        "aggron-mega": ("steel",),
        "lopunny-mega": ("normal", "fighting"),
        "altaria-mega": ("dragon", "fairy"),
        "sceptile-mega": ("grass", "dragon"),
        "audino-mega": ("normal", "fairy"),
        "groudon-primal": ("ground", "fire"),
    }
)

EVOLUTION_OVERRIDES = MappingProxyType(
    {
        "lycanroc-dusk": "Evolves from Rockruff with Own Tempo ability",
        "alcremie": "Evolves from Milcery with sweet item + spin",
        "urshifu-rapid-strike": "Evolves from Kubfu in Tower of Waters",
        "urshifu-single-strike": "Evolves from Kubfu in Tower of Darkness",
        "sirfetchd": "Evolves from Galarian Farfetch'd after landing three critical hits in one battle",
        "runerigus": "Evolves from Galarian Yamask after taking damage and passing under the Dusty Bowl arch",
    }
)


@dataclass(frozen=True)
class SpeciesTables:
    """Bundle of lookup tables handed to the classification components."""

    fossils: frozenset = FOSSIL_POKEMON
    ultra_beasts: frozenset = ULTRA_BEASTS
    paradox: frozenset = PARADOX_POKEMON
    starters: frozenset = STARTERS
    babies: frozenset = BABY_POKEMON
    protected_names: frozenset = PROTECTED_NAMES
    generation_to_region: Mapping[str, str] = field(default_factory=lambda: GENERATION_TO_REGION)
    regional_suffixes: Mapping[str, str] = field(default_factory=lambda: REGIONAL_SUFFIXES)
    fossil_regions: Mapping[str, str] = field(default_factory=lambda: FOSSIL_REGIONS)
    legendary_regions: Mapping[str, str] = field(default_factory=lambda: LEGENDARY_REGIONS)
    region_overrides: Mapping[str, str] = field(default_factory=lambda: REGION_OVERRIDES)
    form_suffixes: Tuple[str, ...] = FORM_SUFFIXES
    sprite_exceptions: Mapping[str, str] = field(default_factory=lambda: SPRITE_EXCEPTIONS)
    sprite_suffixes: Tuple[Tuple[str, str], ...] = SPRITE_SUFFIXES
    sprite_problem_names: frozenset = SPRITE_PROBLEM_NAMES
    type_overrides: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: TYPE_OVERRIDES)
    evolution_overrides: Mapping[str, str] = field(default_factory=lambda: EVOLUTION_OVERRIDES)


DEFAULT_TABLES = SpeciesTables()
