"""
Entity registry.

One mapping per entity category, all keyed by Doxygen refid. The registry
owns every entity; everything else holds ids and looks entities up again
when it needs them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import DuplicateIdentifierError, UnknownIdentifierError
from .model import (
    Class,
    ClassVariant,
    Compound,
    CompoundKind,
    Define,
    EnumType,
    EnumValue,
    Function,
    Variable,
)

CATEGORIES = (
    "compounds",
    "classes",
    "functions",
    "variables",
    "defines",
    "enums",
    "enum_values",
)


@dataclass
class Registry:
    compounds: dict[str, Compound] = field(default_factory=dict)
    classes: dict[str, Class] = field(default_factory=dict)
    functions: dict[str, Function] = field(default_factory=dict)
    variables: dict[str, Variable] = field(default_factory=dict)
    defines: dict[str, Define] = field(default_factory=dict)
    enums: dict[str, EnumType] = field(default_factory=dict)
    enum_values: dict[str, EnumValue] = field(default_factory=dict)

    # ── Declaration ──

    def declare_compound(self, refid, kind, name):
        if refid in self.compounds:
            raise DuplicateIdentifierError("compounds", refid)
        compound = Compound(name=name, kind=kind)
        self.compounds[refid] = compound
        return compound

    def declare_class(self, refid, name, kind):
        if refid in self.classes:
            raise DuplicateIdentifierError("classes", refid)
        variant = {
            CompoundKind.STRUCT: ClassVariant.STRUCT,
            CompoundKind.INTERFACE: ClassVariant.INTERFACE,
        }.get(kind, ClassVariant.CLASS)
        cls = Class(unqualified_name=name.split("::")[-1], variant=variant)
        self.classes[refid] = cls
        return cls

    def declare_member(self, category, refid, factory=None):
        """Insert a default entity unless *refid* is already known.

        Doxygen lists the same member under every compound that shows it
        (its file, namespace and groups), so re-declaring a member returns
        the existing entity instead of failing.
        """
        table = self._table(category)
        entity = table.get(refid)
        if entity is None:
            entity = factory() if factory else _DEFAULTS[category]()
            table[refid] = entity
        return entity

    # ── Lookup ──

    def lookup(self, category, refid):
        try:
            return self._table(category)[refid]
        except KeyError:
            raise UnknownIdentifierError(category, refid) from None

    def __contains__(self, refid):
        return any(refid in self._table(c) for c in CATEGORIES)

    def iter(self, category):
        return iter(self._table(category).items())

    def summary(self):
        return {c: len(self._table(c)) for c in CATEGORIES}

    def _table(self, category):
        if category not in CATEGORIES:
            raise ValueError(f"unknown registry category: {category}")
        return getattr(self, category)


_DEFAULTS = {
    "functions": Function,
    "variables": Variable,
    "defines": Define,
    "enums": EnumType,
    "enum_values": EnumValue,
}
