# CatalogLoader.py
"""""
Gas and reaction catalogs from the game's YAML prototypes.

The prototype files use local tags ('!type:GasReactantEffect') that a plain
safe loader rejects, so CatalogYamlLoader turns any of them into a
TaggedValue. Records are read leniently: a gas that cannot be read shows up
as 'n/a', a reaction that is not a mapping is skipped.
"""""

import sys

import yaml

from . import SourceLoader
from . import error as E

# Order of the values in Reaction.minimum_requirements
REQUIREMENT_INDEX = [
    "oxygen",
    "nitrogen",
    "carbon dioxide",
    "plasma",
    "tritium",
    "vapor",
    "ammonia",
    "n2o",
    "frezon",
]


class TaggedValue:
    def __init__(self, tag, value):
        self.tag = tag
        self.value = value

    def __eq__(self, other):
        return isinstance(other, TaggedValue) and (self.tag, self.value) == (other.tag, other.value)

    def __repr__(self):
        return f"TaggedValue({self.tag!r}, {self.value!r})"


class CatalogYamlLoader(yaml.SafeLoader):
    pass


def _construct_tagged(loader, tag_suffix, node):
    if isinstance(node, yaml.MappingNode):
        value = loader.construct_mapping(node, deep=True)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_scalar(node)
    return TaggedValue("!" + tag_suffix, value)


CatalogYamlLoader.add_multi_constructor("!", _construct_tagged)


class Gas:
    def __init__(self, name, specific_heat=None, heat_capacity_ratio=None, molar_mass=None):
        self.name = name
        self.specific_heat = specific_heat
        self.heat_capacity_ratio = heat_capacity_ratio
        self.molar_mass = molar_mass

    def __repr__(self):
        return f"Gas({self.name!r})"


class Reaction:
    def __init__(self, id, priority=None, minimum_temperature=None, maximum_temperature=None,
                 minimum_requirements=None, effects=None):
        self.id = id
        self.priority = priority
        self.minimum_temperature = minimum_temperature
        self.maximum_temperature = maximum_temperature
        self.minimum_requirements = minimum_requirements or []
        self.effects = effects or ["n/a"]

    def __repr__(self):
        return f"Reaction({self.id!r})"


def _as_float(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _as_int(value):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def load_documents(text):
    try:
        documents = yaml.load(text, Loader=CatalogYamlLoader)
    except yaml.YAMLError as e:
        raise E.LoaderError(f"Catalog could not be parsed: {e}", code="6003")

    if documents is None:
        return []
    if not isinstance(documents, list):
        raise E.LoaderError("Catalog is not a list of prototypes.", code="6003")
    return documents


def parse_gas(document):
    if not isinstance(document, dict) or not isinstance(document.get("name"), str):
        return Gas("n/a")
    return Gas(
        document["name"],
        specific_heat=_as_float(document.get("specificHeat")),
        heat_capacity_ratio=_as_float(document.get("heatCapacityRatio")),
        molar_mass=_as_float(document.get("molarMass")),
    )


def parse_gases(text):
    return [parse_gas(document) for document in load_documents(text)]


def format_effect(effect):
    """Tag (if any) followed by the YAML of the effect's value."""
    if isinstance(effect, TaggedValue):
        return effect.tag + yaml.safe_dump(_plain(effect.value), default_flow_style=False, sort_keys=False)
    return yaml.safe_dump(_plain(effect), default_flow_style=False, sort_keys=False)


def _plain(value):
    # safe_dump cannot represent TaggedValue, so nested ones become text
    if isinstance(value, TaggedValue):
        return format_effect(value).rstrip("\n")
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def parse_reaction(document):
    requirements = document.get("minimumRequirements")
    if isinstance(requirements, list):
        requirements = [float(item) for item in requirements
                        if _as_float(item) is not None]
    else:
        requirements = []

    effects = document.get("effects")
    if isinstance(effects, list):
        effects = [format_effect(effect) for effect in effects]
    else:
        effects = ["n/a"]

    reaction_id = document.get("id")
    return Reaction(
        reaction_id if isinstance(reaction_id, str) else "n/a",
        priority=_as_int(document.get("priority")),
        minimum_temperature=_as_float(document.get("minimumTemperature")),
        maximum_temperature=_as_float(document.get("maximumTemperature")),
        minimum_requirements=requirements,
        effects=effects,
    )


def parse_reactions(text):
    reactions = []
    for document in load_documents(text):
        if not isinstance(document, dict):
            print("Failed to parse reaction: invalid document format", file=sys.stderr)
            continue
        reactions.append(parse_reaction(document))
    return reactions


def fetch_gases(url, timeout=10):
    return parse_gases(SourceLoader.fetch_text(url, timeout))


def fetch_reactions(url, timeout=10):
    return parse_reactions(SourceLoader.fetch_text(url, timeout))


def requirement_legend():
    return "\n".join(f"{index}){gas}" for index, gas in enumerate(REQUIREMENT_INDEX, start=1))
