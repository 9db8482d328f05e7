# datatips/interpolation.py

from __future__ import annotations

from string import Formatter
from typing import Any, Mapping, Optional


def paste(*parts: Any, sep: str = " ") -> str:
    """The naive way: convert every piece to str and glue them together."""
    return sep.join(str(p) for p in parts)


def template_fields(template: str) -> list:
    """
    Top-level placeholder names used in `template`, in order. Positional
    placeholders show up as "" ("{}") or digits ("{0}").
    """
    names = []
    for _, field, _, _ in Formatter().parse(template):
        if field is None:
            continue
        # "{row.name}" / "{scores[0]}" -> "row" / "scores"
        base = field.split(".", 1)[0].split("[", 1)[0]
        if base not in names:
            names.append(base)
    return names


def interpolate(template: str, bindings: Optional[Mapping[str, Any]] = None, **extra: Any) -> str:
    """
    Fill `{name}` placeholders from `bindings` (keyword arguments win on
    clashes). Format specs and attribute / index access work as in
    str.format:

      interpolate("{user} has {n:,} posts", user="ann", n=12000)
      -> "ann has 12,000 posts"

    Only named placeholders are supported; "{}" or "{0}" raise ValueError.
    """
    fields = template_fields(template)

    positional = [name for name in fields if name == "" or name.isdigit()]
    if positional:
        raise ValueError(
            f"Positional placeholders are not supported, use named ones like '{{name}}': "
            f"{['{' + p + '}' for p in positional]}"
        )

    values = {**(bindings or {}), **extra}

    missing = [name for name in fields if name not in values]
    if missing:
        raise KeyError(f"No binding for placeholder(s): {missing}")

    return template.format_map(values)
