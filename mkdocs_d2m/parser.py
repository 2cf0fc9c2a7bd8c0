"""
Doxygen XML parser.

Ingestion runs in two passes over a Doxygen XML output directory:

  - the declaration pass reads ``index.xml`` and creates a default entity
    for every compound and member it lists, recording which compound owns
    which members;
  - the definition pass reads every other ``*.xml`` document and fills in
    the entities declared for the ``<compounddef>`` it holds.

Members are referenced from many documents but defined in one, so nothing
is looked up before the index has been read in full.
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET

from .comments import extract_comment, extract_text
from .errors import SchemaError
from .model import AccessLevel, CompoundKind, Define, MemberKind
from .registry import Registry
from .signature import align_arguments, collapse_noexcept, strip_redundant_const

log = logging.getLogger("mkdocs.plugins.d2m")

INDEX_FILE = "index.xml"


# ── Schema helpers ──


def _load_xml(path):
    try:
        return ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise SchemaError(f"Failed to parse {path}: {exc}") from exc


def _attr(elem, name, default=None):
    value = elem.get(name, default)
    if value is None:
        raise SchemaError(f"<{elem.tag}> is missing the {name!r} attribute")
    return value


def _enum_attr(enum_cls, elem, name):
    value = _attr(elem, name)
    try:
        return enum_cls(value)
    except ValueError:
        raise SchemaError(f"<{elem.tag}> has unsupported {name}={value!r}") from None


def _yes_no(elem, name, default=None):
    value = _attr(elem, name, default)
    if value not in ("yes", "no"):
        raise SchemaError(f"<{elem.tag}> has {name}={value!r}, expected yes/no")
    return value == "yes"


def _child(elem, tag):
    child = elem.find(tag)
    if child is None:
        raise SchemaError(f"<{elem.tag} id={elem.get('id')!r}> has no <{tag}>")
    return child


def _child_text(elem, tag):
    return "".join(_child(elem, tag).itertext()).strip()


def _append_unique(ids, refid):
    if refid not in ids:
        ids.append(refid)


# -- declaration pass --


def _declare_member(registry, elem, parent):
    refid = _attr(elem, "refid")
    kind = _enum_attr(MemberKind, elem, "kind")

    if kind is MemberKind.FUNCTION:
        func = registry.declare_member("functions", refid)
        if parent.kind in (CompoundKind.CLASS, CompoundKind.STRUCT):
            func.is_member = True
        _append_unique(parent.functions, refid)
    elif kind is MemberKind.VARIABLE:
        registry.declare_member("variables", refid)
        _append_unique(parent.variables, refid)
    elif kind is MemberKind.DEFINE:
        name = _child_text(elem, "name")
        registry.declare_member("defines", refid, lambda: Define(name=name))
        _append_unique(parent.defines, refid)
    elif kind is MemberKind.ENUM:
        registry.declare_member("enums", refid)
        _append_unique(parent.enums, refid)
    elif kind is MemberKind.ENUM_VALUE:
        registry.declare_member("enum_values", refid)
        _append_unique(parent.enum_values, refid)
    # friends and typedefs are not materialized


def _declare_compound(registry, elem):
    refid = _attr(elem, "refid")
    kind = _enum_attr(CompoundKind, elem, "kind")
    name = _child_text(elem, "name")

    if kind.is_class_like:
        registry.declare_class(refid, name, kind)
    compound = registry.declare_compound(refid, kind, name)

    for member in elem.findall("member"):
        _declare_member(registry, member, compound)


def declare_compounds(root, registry=None):
    """Run the declaration pass over a parsed ``<doxygenindex>`` element."""
    registry = Registry() if registry is None else registry
    for elem in root.findall("compound"):
        _declare_compound(registry, elem)
    return registry


def parse_index(path):
    log.debug("d2m: parsing index %s", path)
    return declare_compounds(_load_xml(path))


# -- definition pass --


def _template_parameters(elem):
    tpl = elem.find("templateparamlist")
    if tpl is None:
        return []
    params = []
    for param in tpl.findall("param"):
        ptype = param.find("type")
        if ptype is not None:
            params.append("".join(ptype.itertext()).strip())
    return params


def _parse_function(elem, func, registry):
    func.access = _enum_attr(AccessLevel, elem, "prot")
    func.is_static = _yes_no(elem, "static")
    func.is_const = _yes_no(elem, "const")
    func.is_explicit = _yes_no(elem, "explicit")
    func.is_inline = _yes_no(elem, "inline")
    func.is_virtual = _attr(elem, "virt") != "non-virtual"
    # Read from the const attribute, not from Doxygen's noexcept attribute
    func.is_noexcept = _yes_no(elem, "const", default="no")

    func.name = _child_text(elem, "name")
    func.qualified_name = _child_text(elem, "qualifiedname")
    func.definition = _child_text(elem, "definition")
    func.return_type = _child_text(elem, "type")
    func.arguments = _child_text(elem, "argsstring")
    func.template_parameters = _template_parameters(elem)

    # The same declname can show up once per overload context
    for param in elem.findall("param"):
        declname = param.find("declname")
        if declname is None:
            continue
        name = "".join(declname.itertext()).strip()
        if name and name not in func.parameters:
            func.parameters.append(name)

    func.comment = extract_comment(elem)

    strip_redundant_const(func)
    collapse_noexcept(func)
    align_arguments(func)


def _parse_variable(elem, var, registry):
    var.access = _enum_attr(AccessLevel, elem, "prot")
    var.is_static = _yes_no(elem, "static")
    var.is_mutable = _yes_no(elem, "mutable")
    var.is_constexpr = _yes_no(elem, "constexpr", default="no")

    var.name = _child_text(elem, "name")
    var.qualified_name = _child_text(elem, "qualifiedname")
    var.definition = _child_text(elem, "definition")
    var.comment = extract_comment(elem)


def _initializer(elem):
    if elem is None:
        return None
    text = "".join(elem.itertext()).strip()
    if text.startswith("= "):
        text = text[2:]
    return text


def _parse_enum(elem, enum, registry):
    enum.name = _child_text(elem, "name")
    enum.qualified_name = _child_text(elem, "qualifiedname")
    enum.is_scoped = _yes_no(elem, "strong")
    enum.comment = extract_comment(elem)

    values = []
    for ev in elem.findall("enumvalue"):
        value = registry.lookup("enum_values", _attr(ev, "id"))
        value.name = _child_text(ev, "name")
        value.initializer = _initializer(ev.find("initializer"))
        value.comment = extract_comment(ev)
        values.append(value)
    enum.values = values


_MEMBER_PARSERS = {
    "function": ("functions", _parse_function),
    "variable": ("variables", _parse_variable),
    "enum": ("enums", _parse_enum),
}


def _parse_member_definition(elem, registry):
    kind = _attr(elem, "kind")
    entry = _MEMBER_PARSERS.get(kind)
    if entry is None:
        return
    category, parse = entry
    parse(elem, registry.lookup(category, _attr(elem, "id")), registry)


_INNER_LISTS = {
    "innergroup": "groups",
    "innerclass": "classes",
    "innernamespace": "namespaces",
}


def _parse_compound_definition(elem, registry):
    refid = _attr(elem, "id")
    kind = _enum_attr(CompoundKind, elem, "kind")
    if kind in (CompoundKind.FILE, CompoundKind.NAMESPACE):
        log.debug("d2m: skipping %s compound %s", kind.value, refid)
        return

    compound = registry.lookup("compounds", refid)
    for child in elem:
        tag = child.tag
        if tag == "title":
            compound.title = extract_text(child)
        elif tag in _INNER_LISTS:
            inner = child.get("refid")
            if inner:
                _append_unique(getattr(compound, _INNER_LISTS[tag]), inner)
        elif tag == "sectiondef":
            for member in child.findall("memberdef"):
                _parse_member_definition(member, registry)
        elif tag == "memberdef":
            _parse_member_definition(child, registry)
        elif tag == "templateparamlist" and kind.is_class_like:
            registry.lookup("classes", refid).template_parameters = _template_parameters(elem)

    compound.comment = extract_comment(elem)


def define_compounds(root, registry):
    """Run the definition pass over one parsed per-compound document."""
    for elem in root.findall("compounddef"):
        _parse_compound_definition(elem, registry)
    return registry


def parse_definition_file(path, registry):
    log.debug("d2m: parsing %s", path)
    root = _load_xml(path)
    if root.find("compounddef") is None:
        log.debug("d2m: no compound definition in %s", path)
        return registry
    return define_compounds(root, registry)


def parse_xml(input_dir, index_file=INDEX_FILE):
    """Read a Doxygen XML directory into a fully populated Registry."""
    log.info("d2m: reading Doxygen XML from %s", input_dir)
    registry = parse_index(os.path.join(input_dir, index_file))

    for fn in sorted(os.listdir(input_dir)):
        if fn == index_file or not fn.endswith(".xml"):
            continue
        path = os.path.join(input_dir, fn)
        if os.path.isfile(path):
            parse_definition_file(path, registry)

    counts = registry.summary()
    log.info(
        "d2m: %d compounds, %d classes, %d functions, %d variables, %d defines, %d enums",
        counts["compounds"],
        counts["classes"],
        counts["functions"],
        counts["variables"],
        counts["defines"],
        counts["enums"],
    )
    return registry
