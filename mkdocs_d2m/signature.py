"""
Display rewrites for Doxygen ``argsstring`` text.

The argument text is treated as an opaque string: no C++ grammar, just a
few pattern-based rewrites that keep everything they do not touch intact.
"""

from __future__ import annotations

_NOEXCEPT = "noexcept("
_TRAILING_RETURN = "->"


def _match_paren(text, start):
    """Index just past the ``)`` that closes the ``(`` at *start*, or -1."""
    depth = 0
    for i in range(start, len(text)):
        c = text[i]
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return i + 1
    return -1


def _split_arguments(func):
    """Split argsstring into (parameter list, trailing qualifiers)."""
    args = func.arguments
    suffix = ""
    if func.return_type == "auto" and _TRAILING_RETURN in args:
        args, tail = args.split(_TRAILING_RETURN, 1)
        suffix = _TRAILING_RETURN + tail

    open_at = args.find("(")
    close_at = _match_paren(args, open_at) if open_at >= 0 else -1
    if close_at < 0:
        return args, suffix
    return args[:close_at], args[close_at:] + suffix


def strip_redundant_const(func):
    """Drop top-level ``const`` from by-value parameters.

    ``const int x`` shows the same interface as ``int x``; ``const Foo& y``
    does not, so fragments with a pointer or reference are left alone.
    """
    if not func.parameters:
        return

    head, tail = _split_arguments(func)
    fragments = []
    for frag in head.split(","):
        if "*" not in frag and "&" not in frag:
            frag = frag.replace("const ", "")
        fragments.append(frag)
    func.arguments = ",".join(fragments) + tail


def collapse_noexcept(func):
    """Replace conditional ``noexcept(expr)`` with ``noexcept(...)``."""
    args = func.arguments
    start = args.find(_NOEXCEPT)
    while start >= 0:
        paren = start + len(_NOEXCEPT) - 1
        end = _match_paren(args, paren)
        if end < 0:
            args = args[:start] + "noexcept(...)"
            break
        args = args[:start] + "noexcept(...)" + args[end:]
        start = args.find(_NOEXCEPT, start + len("noexcept(...)"))
    func.arguments = args


def _signature_indent(func):
    width = 0
    if func.is_static:
        width += len("static ")
    if func.is_explicit:
        width += len("explicit ")
    # "<return type> <name>(" keeps the separating space even for constructors
    width += len(func.return_type) + 1
    return width + len(func.name) + 1


def align_arguments(func):
    """Put each parameter on its own line, aligned after the ``(``.

    The indent matches ``[static ][explicit ]<return type> <name>(`` as
    rendered. Fragments holding template arguments are kept on the line of
    the previous fragment, since the comma split can fall inside ``<...>``.
    """
    if len(func.parameters) < 2:
        return

    head, tail = _split_arguments(func)
    pad = ",\n" + " " * _signature_indent(func)
    fragments = head.split(",")
    out = fragments[0]
    for frag in fragments[1:]:
        if "<" in frag or ">" in frag:
            out += "," + frag
        else:
            out += pad + frag.lstrip()
    func.arguments = out + tail
