"""
Naming helpers used by the generators.

Every helper is a pure function of its input, so generated paths and
class names are stable across builds.
"""

from __future__ import annotations

import re

# Irregular plurals that don't follow standard rules
_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "foot": "feet",
    "tooth": "teeth",
    "mouse": "mice",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "index": "indices",
    "status": "statuses",
    "address": "addresses",
}

_UNCOUNTABLE = frozenset({"equipment", "information", "rice", "money", "series", "species", "news"})

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def pluralize(word: str) -> str:
    """Convert a singular English word to its plural form.

    CamelCase input pluralizes only its last word:

        >>> pluralize("Post")
        'Posts'
        >>> pluralize("BlogCategory")
        'BlogCategories'
        >>> pluralize("Person")
        'People'
    """
    if not word:
        return word

    lower_word = word.lower()
    if lower_word in _UNCOUNTABLE:
        return word

    if lower_word in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower_word]
        if word[0].isupper():
            return plural.capitalize()
        return plural

    # Handle CamelCase - pluralize the last word only
    camel_match = re.match(r"^(.+)([A-Z][a-z]+)$", word)
    if camel_match:
        prefix, last_word = camel_match.groups()
        if prefix and last_word != word:
            return prefix + pluralize(last_word)

    if lower_word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    if lower_word.endswith("y"):
        if len(word) > 1 and lower_word[-2] in "aeiou":
            return word + "s"
        return word[:-1] + "ies"
    if lower_word.endswith("fe"):
        return word[:-2] + "ves"
    if lower_word.endswith(("elf", "alf", "olf", "eaf", "oaf", "arf")):
        return word[:-1] + "ves"
    return word + "s"


def words(name: str) -> list[str]:
    """Split StudlyCase, camelCase, snake_case or kebab-case into words."""
    parts = re.split(r"[\s_\-]+", name.strip())
    out: list[str] = []
    for part in parts:
        if part:
            out.extend(w for w in _WORD_BOUNDARY.split(part) if w)
    return out


def snake_case(name: str) -> str:
    """BlogPost → blog_post."""
    return "_".join(w.lower() for w in words(name))


def kebab_case(name: str) -> str:
    """BlogPost → blog-post."""
    return "-".join(w.lower() for w in words(name))


def studly_case(name: str) -> str:
    """blog-post → BlogPost."""
    return "".join(w[:1].upper() + w[1:] for w in words(name))


def camel_case(name: str) -> str:
    """BlogPost → blogPost."""
    studly = studly_case(name)
    return studly[:1].lower() + studly[1:]


def title_case(name: str) -> str:
    """blog-post → Blog Post."""
    return " ".join(w[:1].upper() + w[1:] for w in words(name))


def table_name(model: str) -> str:
    """Database table for a model: BlogPost → blog_posts."""
    return snake_case(pluralize(model))


def route_slug(model: str) -> str:
    """URL slug for a model resource: BlogPost → blog-posts."""
    return kebab_case(pluralize(model))
