"""
Defang / refang transforms for indicator values.

"Defanged" indicators are rendered so they cannot be clicked or resolved by
accident (``evil[.]com``, ``hxxp://``); "refanged" ones are the live form.
Extraction stores the raw matched text and derives either rendering on demand
through `format_ioc`.
"""
import re

# Applied in order; each marker maps back to its live character(s)
_REFANG_RULES = (
    (re.compile(r"\[\.\]"), "."),
    (re.compile(r"hxxp", re.IGNORECASE), "http"),
    (re.compile(r"\[:\]"), ":"),
    (re.compile(r"\[at\]", re.IGNORECASE), "@"),
    (re.compile(r"\[/\]"), "/"),
)

_HTTP = re.compile(r"http", re.IGNORECASE)


def refang(text: str) -> str:
    """Turn defang markers back into live characters. Live text is returned unchanged."""
    for pattern, live in _REFANG_RULES:
        text = pattern.sub(live, text)
    return text


def defang(value: str, ioc_type: str) -> str:
    """Render a live value in its safe form. Hashes and CVEs are never defanged."""
    if ioc_type in ("ipv4", "domain"):
        return value.replace(".", "[.]")
    if ioc_type == "url":
        return _HTTP.sub("hxxp", value).replace("://", "[://]")
    if ioc_type == "email":
        return value.replace("@", "[at]").replace(".", "[.]")
    return value


def format_ioc(value: str, ioc_type: str, want_defanged: bool) -> str:
    # Normalise to the live form first so partially defanged input renders consistently
    clean = refang(value)
    return defang(clean, ioc_type) if want_defanged else clean
