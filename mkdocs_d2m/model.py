"""
Data model for documented C++ entities.

Everything here is plain data. Entities are created with default values by
the declaration pass and filled in by the definition pass; see parser.py.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum

RefID = str


class CompoundKind(Enum):
    FILE = "file"
    DIRECTORY = "dir"
    NAMESPACE = "namespace"
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    CONCEPT = "concept"
    PAGE = "page"
    GROUP = "group"

    @property
    def is_class_like(self):
        return self in (CompoundKind.CLASS, CompoundKind.STRUCT, CompoundKind.INTERFACE)


class MemberKind(Enum):
    DEFINE = "define"
    FRIEND = "friend"
    TYPEDEF = "typedef"
    VARIABLE = "variable"
    FUNCTION = "function"
    ENUM = "enum"
    ENUM_VALUE = "enumvalue"


class AccessLevel(Enum):
    PRIVATE = "private"
    PROTECTED = "protected"
    PUBLIC = "public"

    def __str__(self):
        return self.value


class ClassVariant(Enum):
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"


@dataclass
class Comment:
    brief: list[str] = field(default_factory=list)
    details: list[str] = field(default_factory=list)
    params: dict[str, str] = field(default_factory=dict)
    template_params: dict[str, str] = field(default_factory=dict)
    returns: str = ""
    preconditions: list[str] = field(default_factory=list)
    postconditions: list[str] = field(default_factory=list)
    exceptions: dict[str, str] = field(default_factory=dict)
    see_also: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def is_empty(self):
        return not any(getattr(self, f.name) for f in fields(self))


@dataclass
class Compound:
    name: str = ""
    title: str = ""
    kind: CompoundKind = CompoundKind.FILE
    # Child ids per category, in index order
    groups: list[RefID] = field(default_factory=list)
    namespaces: list[RefID] = field(default_factory=list)
    classes: list[RefID] = field(default_factory=list)
    enums: list[RefID] = field(default_factory=list)
    enum_values: list[RefID] = field(default_factory=list)
    functions: list[RefID] = field(default_factory=list)
    variables: list[RefID] = field(default_factory=list)
    defines: list[RefID] = field(default_factory=list)
    comment: Comment = field(default_factory=Comment)


@dataclass
class Class:
    unqualified_name: str = ""
    template_parameters: list[str] = field(default_factory=list)
    variant: ClassVariant = ClassVariant.CLASS

    @property
    def is_struct(self):
        return self.variant is ClassVariant.STRUCT

    @property
    def is_interface(self):
        return self.variant is ClassVariant.INTERFACE


@dataclass
class Function:
    name: str = ""
    qualified_name: str = ""
    return_type: str = ""
    arguments: str = ""
    parameters: list[str] = field(default_factory=list)
    template_parameters: list[str] = field(default_factory=list)
    definition: str = ""
    access: AccessLevel = AccessLevel.PRIVATE
    comment: Comment = field(default_factory=Comment)
    is_static: bool = False
    is_const: bool = False
    is_inline: bool = False
    is_noexcept: bool = False
    is_virtual: bool = False
    is_explicit: bool = False
    # Set from the declaring compound's kind, never by the definition pass
    is_member: bool = False


@dataclass
class Variable:
    name: str = ""
    qualified_name: str = ""
    definition: str = ""
    access: AccessLevel = AccessLevel.PRIVATE
    comment: Comment = field(default_factory=Comment)
    is_static: bool = False
    is_constexpr: bool = False
    is_mutable: bool = False


@dataclass
class Define:
    name: str = ""


@dataclass
class EnumValue:
    name: str = ""
    initializer: str | None = None
    comment: Comment = field(default_factory=Comment)


@dataclass
class EnumType:
    name: str = ""
    qualified_name: str = ""
    is_scoped: bool = False
    comment: Comment = field(default_factory=Comment)
    values: list[EnumValue] = field(default_factory=list)
