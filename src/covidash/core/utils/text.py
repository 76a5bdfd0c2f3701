import re

_WORD = re.compile(r"\w\S*")


def capitalize(s) -> str:
    if not isinstance(s, str):
        return ""
    return s[:1].upper() + s[1:]


def to_title_case(s: str) -> str:
    """Upper-case the first letter of every word and lower-case the rest."""
    return _WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), s)
