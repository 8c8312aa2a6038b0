"""Name derivation helpers: casing and English inflection.

Usage:
    >>> snake_case("BlogPost")
    'blog_post'
    >>> studly_case("blog_post")
    'BlogPost'
    >>> pluralize("category")
    'categories'
    >>> singularize("People")
    'Person'
"""

import re

UNCOUNTABLE = frozenset(
    {
        "audio",
        "data",
        "equipment",
        "feedback",
        "fish",
        "information",
        "knowledge",
        "metadata",
        "money",
        "news",
        "rice",
        "series",
        "sheep",
        "species",
        "traffic",
    }
)

IRREGULAR = {
    "child": "children",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "tooth": "teeth",
    "woman": "women",
}

# (pattern, replacement) pairs, first match wins
_PLURAL_RULES: list[tuple[str, str]] = [
    (r"(quiz)$", r"\1zes"),
    (r"(matr|vert|ind)(ix|ex)$", r"\1ices"),
    (r"(alias|status|bus|campus)$", r"\1es"),
    (r"(octop|vir)us$", r"\1i"),
    (r"(cris|ax|test)is$", r"\1es"),
    (r"([^aeiouy]|qu)y$", r"\1ies"),
    (r"(x|ch|ss|sh|z)$", r"\1es"),
    (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
    (r"(hero|potato|tomato|echo)$", r"\1es"),
    (r"sis$", "ses"),
    (r"(bacteri|curricul|medi|memorand|millenni|stadi|strat)um$", r"\1a"),
    (r"s$", "s"),
    (r"$", "s"),
]

_SINGULAR_RULES: list[tuple[str, str]] = [
    (r"(quiz)zes$", r"\1"),
    (r"(matr)ices$", r"\1ix"),
    (r"(vert|ind)ices$", r"\1ex"),
    (r"(alias|status|bus|campus)es$", r"\1"),
    (r"(octop|vir)i$", r"\1us"),
    (r"(cris|ax|test)es$", r"\1is"),
    (r"(hero|potato|tomato|echo)es$", r"\1"),
    (r"(m)ovies$", r"\1ovie"),
    (r"(cook|zomb)ies$", r"\1ie"),
    (r"([^aeiouy]|qu)ies$", r"\1y"),
    (r"(x|ch|ss|sh|z)es$", r"\1"),
    (r"(kni|wi|li)ves$", r"\1fe"),
    (r"([lr]|lea|loa|thie)ves$", r"\1f"),
    (r"(analy|ba|diagno|parenthe|progno|synop|the)ses$", r"\1sis"),
    (r"(bacteri|curricul|medi|memorand|millenni|stadi|strat)a$", r"\1um"),
    (r"(alias|status|bus|campus|ss|us|is)$", r"\1"),
    (r"s$", ""),
]

_WORD_SPLIT = re.compile(r"[\s\-]+")


def snake_case(value: str) -> str:
    """Convert ``BlogPost`` / ``blogPost`` / ``blog post`` to ``blog_post``."""
    value = _WORD_SPLIT.sub("_", value.strip())
    value = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", value)
    value = re.sub(r"(?<=[A-Z])(?=[A-Z][a-z])", "_", value)
    return re.sub(r"_+", "_", value).lower()


def studly_case(value: str) -> str:
    """Convert ``blog_post`` / ``blog-post`` / ``blogPost`` to ``BlogPost``."""
    words = re.split(r"[_\s\-]+", value.strip())
    return "".join(word[:1].upper() + word[1:] for word in words if word)


def _split_last_word(value: str) -> tuple[str, str]:
    """Split a compound name into (prefix, last word)."""
    match = re.search(r"([A-Z]?[a-z0-9]+|[A-Z]+)$", value)
    if not match:
        return value, ""
    return value[: match.start()], match.group(1)


def _match_case(word: str, template: str) -> str:
    if template.isupper() and len(template) > 1:
        return word.upper()
    if template[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


def _inflect(value: str, irregular: dict[str, str], rules: list[tuple[str, str]]) -> str:
    prefix, word = _split_last_word(value)
    if not word:
        return value

    lower = word.lower()
    if lower in UNCOUNTABLE:
        return value

    if lower in irregular:
        return prefix + _match_case(irregular[lower], word)

    for pattern, replacement in rules:
        if re.search(pattern, lower):
            return prefix + _match_case(re.sub(pattern, replacement, lower, count=1), word)

    return value


def pluralize(value: str) -> str:
    """Plural form of the last word in *value*, preserving its case."""
    if _split_last_word(value)[1].lower() in IRREGULAR.values():
        return value
    return _inflect(value, IRREGULAR, _PLURAL_RULES)


def singularize(value: str) -> str:
    """Singular form of the last word in *value*, preserving its case."""
    if _split_last_word(value)[1].lower() in IRREGULAR:
        return value
    singular_irregular = {plural: single for single, plural in IRREGULAR.items()}
    return _inflect(value, singular_irregular, _SINGULAR_RULES)


def table_name(name: str) -> str:
    """Database table for an entity name: pluralized snake case."""
    return pluralize(snake_case(name))


def migration_class_name(name: str) -> str:
    """``Create<PluralStudly>Table`` class for a create-table migration."""
    return f"Create{pluralize(studly_case(name))}Table"


def model_class_name(name: str) -> str:
    """Singular StudlyCase model class for an entity name."""
    return singularize(studly_case(name))
