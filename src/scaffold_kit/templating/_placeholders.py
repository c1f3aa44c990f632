from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date

_WHITESPACE = re.compile(r"\s+")


def substitute(content: str, bindings: Mapping[str, str]) -> str:
    """Replace every literal ``{{KEY}}`` in content with its bound value.

    Keys match exactly (case-sensitive, no whitespace inside the braces).
    Tokens with no binding are left untouched.
    """
    for key, value in bindings.items():
        content = content.replace("{{" + key + "}}", str(value))
    return content


def slugify(name: str) -> str:
    """'My Cool App' -> 'my-cool-app'."""
    return _WHITESPACE.sub("-", name.lower())


def camelize(name: str) -> str:
    """'My Cool App' -> 'myCoolApp'."""
    words = name.split()
    if not words:
        return ""
    return words[0].lower() + "".join(w[:1].upper() + w[1:] for w in words[1:])


def derive_bindings(
    values: Mapping[str, str],
    name_key: str = "PROJECT_NAME",
    today: date | None = None,
) -> dict[str, str]:
    """Collected values plus the slug, camel-case and year bindings."""
    name = values.get(name_key, "")
    bindings = dict(values)
    bindings[f"{name_key}_SLUG"] = slugify(name)
    bindings[f"{name_key}_CAMEL"] = camelize(name)
    bindings["YEAR"] = str((today or date.today()).year)
    return bindings
