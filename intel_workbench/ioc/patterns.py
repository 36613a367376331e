"""
patterns.py - Ordered regex registry for IOC extraction.

The order of `IOC_PATTERNS` is a precedence contract: longer and more
specific token shapes claim their characters before generic ones, so a URL's
host is not reported again as a domain and a SHA256 is never split into
shorter hashes. Every pattern accepts the live form and the common defanged
spellings ([.], hxxp, [:], [at], [/]).
"""
import re
from dataclasses import dataclass
from typing import Dict, Tuple

# Separator between dotted labels: live '.' or defanged '[.]'
DOT = r"(?:\[\.\]|\.)"

TLDS = (
    "com", "net", "org", "edu", "gov", "mil", "io", "co", "info", "biz", "me", "tv", "cc",
    "ru", "cn", "de", "uk", "fr", "br", "in", "jp", "au", "ca", "nl", "se", "ch", "es", "it",
    "pl", "za", "kr", "tw", "xyz", "top", "club", "online", "site", "tech", "space", "pro",
    "app", "dev",
)

URL_PATTERN_STR = r"""(?:hxxps?|https?):?(?:\[:\]|:)//(?:\[/\]|/)?[^\s<>"']+"""

EMAIL_PATTERN_STR = r"[a-zA-Z0-9._%+\-]+(?:@|\[at\])[a-zA-Z0-9.\-]+" + DOT + r"[a-zA-Z]{2,}"

CVE_PATTERN_STR = r"CVE-\d{4}-\d{4,}"

_V6SEG = r"[0-9a-fA-F]{1,4}"
IPV6_PATTERN_STR = (
    rf"(?:{_V6SEG}:){{7}}{_V6SEG}"
    rf"|(?:{_V6SEG}:){{1,7}}:"
    rf"|(?:{_V6SEG}:){{1,6}}:{_V6SEG}"
    r"|::(?:[fF]{4}:)?(?:\d{1,3}\.){3}\d{1,3}"
)

IPV4_PATTERN_STR = rf"\b\d{{1,3}}{DOT}\d{{1,3}}{DOT}\d{{1,3}}{DOT}\d{{1,3}}\b"

DOMAIN_PATTERN_STR = (
    rf"\b(?:[a-zA-Z0-9](?:[a-zA-Z0-9\-]{{0,61}}[a-zA-Z0-9])?{DOT})+"
    rf"(?:{'|'.join(TLDS)})\b"
)


@dataclass(frozen=True)
class IocPattern:
    type: str
    regex: re.Pattern


# re.ASCII: word boundaries and digits are ASCII-only
IOC_PATTERNS: Tuple[IocPattern, ...] = (
    IocPattern("url", re.compile(URL_PATTERN_STR, re.IGNORECASE)),
    IocPattern("email", re.compile(EMAIL_PATTERN_STR, re.IGNORECASE | re.ASCII)),
    IocPattern("cve", re.compile(CVE_PATTERN_STR, re.IGNORECASE | re.ASCII)),
    IocPattern("sha256", re.compile(r"\b[a-fA-F0-9]{64}\b", re.ASCII)),
    IocPattern("sha1", re.compile(r"\b[a-fA-F0-9]{40}\b", re.ASCII)),
    IocPattern("md5", re.compile(r"\b[a-fA-F0-9]{32}\b", re.ASCII)),
    IocPattern("ipv6", re.compile(IPV6_PATTERN_STR, re.ASCII)),
    IocPattern("ipv4", re.compile(IPV4_PATTERN_STR, re.ASCII)),
    IocPattern("domain", re.compile(DOMAIN_PATTERN_STR, re.IGNORECASE | re.ASCII)),
)

IOC_TYPE_LABELS: Dict[str, str] = {
    "ipv4": "IPv4",
    "ipv6": "IPv6",
    "domain": "Domain",
    "url": "URL",
    "email": "Email",
    "md5": "MD5",
    "sha1": "SHA1",
    "sha256": "SHA256",
    "cve": "CVE",
}

# Grouping order used by result listings; independent of extraction precedence
DISPLAY_ORDER = ("ipv4", "ipv6", "domain", "url", "email", "md5", "sha1", "sha256", "cve")


def get_ioc_type_label(ioc_type: str) -> str:
    return IOC_TYPE_LABELS.get(ioc_type, ioc_type)
