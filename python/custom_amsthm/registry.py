from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from custom_amsthm import DEFAULT_META_KEY
from custom_amsthm.helpers import meta_to_bool, stringify, warn

from . import pandoc_types as pan


class NumberingScope(Enum):
    SECTION = "section"
    """Numbers are declared per-section in LaTeX, e.g. Theorem 2.1"""
    GLOBAL = "global"
    """Numbers run continuously through the document"""

    @classmethod
    def from_style(cls, style: str) -> "NumberingScope":
        # Only an exact "section" selects the per-section declaration
        if style == cls.SECTION.value:
            return cls.SECTION
        if style != cls.GLOBAL.value:
            warn(
                f"unknown numbering-style '{style}', numbering continuously as if it were 'global'"
            )
        return cls.GLOBAL


@dataclass(frozen=True)
class EnvironmentDefinition:
    key: str
    """Block ids of the form '{key}-...' are instances of this environment"""
    name: str
    """The human-readable name used in titles, e.g. 'Theorem'"""
    reference_prefix: str
    """The text put before the number in cross-references"""
    latex_name: str
    """The LaTeX environment name passed to \\newtheorem"""
    numbered: bool = True
    numbering_scope: NumberingScope = NumberingScope.SECTION

    @property
    def id_prefix(self) -> str:
        return f"{self.key}-"

    def matches(self, identifier: str) -> bool:
        return bool(identifier) and identifier.startswith(self.id_prefix)

    @classmethod
    def from_meta(cls, entry: Dict[str, Any]) -> "EnvironmentDefinition":
        """Build a definition from one entry of the metadata list, defaulting all missing fields.

        `entry` is the dict inside a MetaMap. Raises KeyError if there is no `key`."""
        key = stringify(entry["key"])
        name = stringify(entry["name"]) if "name" in entry else key
        reference_prefix = (
            stringify(entry["reference-prefix"])
            if "reference-prefix" in entry
            else name
        )
        latex_name = (
            stringify(entry["latex-name"]) if "latex-name" in entry else name.lower()
        )
        numbering_style = (
            stringify(entry["numbering-style"])
            if "numbering-style" in entry
            else NumberingScope.SECTION.value
        )
        return cls(
            key=key,
            name=name,
            reference_prefix=reference_prefix,
            latex_name=latex_name,
            numbered=meta_to_bool(entry.get("numbered"), default=True),
            numbering_scope=NumberingScope.from_style(numbering_style),
        )


@dataclass
class Registry:
    """
    The state shared by every stage of one filter run.

    The registrar fills in `environments`.
    The block renderer is the only thing that increments `counters` and writes to `assigned_numbers`,
    and the reference resolver only reads `assigned_numbers`.
    """

    environments: Dict[str, EnvironmentDefinition] = field(default_factory=dict)
    """Insertion-ordered - the order is used for prefix matching and the LaTeX preamble"""
    counters: Dict[str, int] = field(default_factory=dict)
    assigned_numbers: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.environments)

    def register(self, env: EnvironmentDefinition) -> None:
        if env.key in self.environments:
            warn(f"environment '{env.key}' is declared twice, using the last one")
            # Re-insert so the declaration order follows the winning entry
            del self.environments[env.key]
        self.environments[env.key] = env
        self.counters[env.key] = 0
        self.assigned_numbers[env.key] = {}

    def definitions(self) -> Iterable[EnvironmentDefinition]:
        return self.environments.values()

    def match(self, identifier: str) -> Optional[EnvironmentDefinition]:
        """Find the first declared environment whose prefix the identifier starts with"""
        if not identifier:
            return None
        for env in self.environments.values():
            if env.matches(identifier):
                return env
        return None

    def next_number(self, env: EnvironmentDefinition, block_id: str) -> str:
        """Count a new instance of `env` and record its number against `block_id`"""
        self.counters[env.key] += 1
        number = str(self.counters[env.key])
        self.assigned_numbers[env.key][block_id] = number
        return number

    def lookup_number(
        self, env: EnvironmentDefinition, block_id: str
    ) -> Optional[str]:
        return self.assigned_numbers[env.key].get(block_id)


def _meta_entries(value: Any, meta_key: str) -> List[Any]:
    if isinstance(value, pan.MetaList):
        return list(value[0])
    if isinstance(value, pan.MetaMap):
        return [value]
    warn(f"{meta_key} metadata should be a list of environment declarations")
    return []


def register_environments(
    meta: pan.Meta, registry: Registry, meta_key: str = DEFAULT_META_KEY
) -> Registry:
    """Read every environment declared under `meta_key` into the registry.

    Malformed entries are skipped with a warning - they never stop the document from being processed."""
    value = meta[0].get(meta_key)
    if value is None:
        return registry
    for i, entry in enumerate(_meta_entries(value, meta_key)):
        if not isinstance(entry, pan.MetaMap):
            warn(f"{meta_key} entry {i} is not a map, skipping it")
            continue
        if not stringify(entry[0].get("key")):
            warn(f"{meta_key} entry {i} has no 'key', skipping it")
            continue
        registry.register(EnvironmentDefinition.from_meta(entry[0]))
    return registry
