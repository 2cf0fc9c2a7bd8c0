"""
Doc comment extraction from Doxygen description markup.

Doxygen writes descriptions as nested ``<para>``, ``<itemizedlist>``,
``<computeroutput>``, ``<ref>`` ... elements, with parameter lists and
tagged sections (``\\return``, ``\\note``, ...) embedded inside paragraphs.
This module flattens that markup to plain text and sorts the tagged parts
into a :class:`~mkdocs_d2m.model.Comment`.
"""

from __future__ import annotations

import logging

from .model import Comment

log = logging.getLogger("mkdocs.plugins.d2m")


# ── Text flattening ──


def _text_para(elem):
    return _flatten(elem)


def _text_code(elem):
    return f" `{_flatten(elem)}` "


def _text_list(elem):
    return "\n" + _flatten(elem)


def _text_list_item(elem):
    return "* " + _flatten(elem) + "\n"


def _text_ref(elem):
    refid = elem.get("refid")  # noqa: F841
    kindref = elem.get("kindref")  # noqa: F841
    # TODO: turn refid/kindref into a link once the renderer resolves page URLs
    return _flatten(elem)


_TEXT_HANDLERS = {
    "para": _text_para,
    "computeroutput": _text_code,
    "itemizedlist": _text_list,
    "listitem": _text_list_item,
    "ref": _text_ref,
}


def _flatten(elem):
    parts = []
    if elem.text:
        parts.append(elem.text.strip())
    for child in elem:
        handler = _TEXT_HANDLERS.get(child.tag)
        if handler is not None:
            parts.append(handler(child))
        if child.tail:
            parts.append(child.tail.strip())
    return "".join(parts)


def extract_text(elem):
    """Flatten *elem* to plain text.

    Text nodes are trimmed and concatenated. Paragraphs and references are
    transparent, inline code becomes a backtick span and list items become
    ``* item`` lines. Any other child element contributes nothing, although
    the text following it is kept.
    """
    if elem is None:
        return ""
    return _flatten(elem)


# ── Tagged sections ──

_PARAM_LIST_FIELDS = {
    "param": "params",
    "exception": "exceptions",
    "templateparam": "template_params",
}


def _parse_parameter_list(plist, comment):
    kind = plist.get("kind")
    attr = _PARAM_LIST_FIELDS.get(kind)
    if attr is None:
        log.info("d2m: ignoring parameter list of kind %r", kind)
        return
    mapping = getattr(comment, attr)
    assert not mapping, f"parameter list of kind {kind!r} given twice in one comment"

    for item in plist.findall("parameteritem"):
        name_elem = item.find("parameternamelist/parametername")
        if name_elem is None:
            continue
        name = extract_text(name_elem)
        mapping[name] = extract_text(item.find("parameterdescription"))


def _parse_simple_section(sect, comment):
    kind = sect.get("kind")
    text = extract_text(sect)
    if kind == "return":
        comment.returns = text
    elif kind in ("note", "remark"):
        comment.notes.append(text)
    elif kind == "see":
        comment.see_also.append(text)
    elif kind == "warning":
        comment.warnings.append(text)
    elif kind == "pre":
        comment.preconditions.append(text)
    elif kind == "post":
        comment.postconditions.append(text)
    else:
        log.info("d2m: ignoring simple section of kind %r", kind)


def extract_comment(elem):
    """Build a Comment from the brief/detailed descriptions under *elem*.

    Works for both ``<compounddef>`` and ``<memberdef>``/``<enumvalue>``
    elements. Missing descriptions leave the matching fields empty.
    """
    comment = Comment()

    brief = elem.find("briefdescription")
    if brief is not None:
        para = brief.find("para")
        if para is not None:
            comment.brief.append(extract_text(para))

    detailed = elem.find("detaileddescription")
    if detailed is None:
        return comment

    # One entry per paragraph, blank when only tagged sections make it up
    for para in detailed.findall("para"):
        comment.details.append(extract_text(para))
        for plist in para.findall("parameterlist"):
            _parse_parameter_list(plist, comment)
        for sect in para.findall("simplesect"):
            _parse_simple_section(sect, comment)

    return comment
