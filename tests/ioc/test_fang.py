import pytest
from intel_workbench.ioc.fang import defang, format_ioc, refang
from intel_workbench.ioc.patterns import get_ioc_type_label


@pytest.mark.parametrize("raw,expected", [
    ("evil[.]com", "evil.com"),
    ("hxxp://evil.com", "http://evil.com"),
    ("HXXP://evil.com", "http://evil.com"),
    ("http[:]//evil.com", "http://evil.com"),
    ("admin[at]evil.com", "admin@evil.com"),
    ("admin[AT]evil.com", "admin@evil.com"),
    ("http:/[/]evil.com", "http://evil.com"),
])
def test_refang(raw, expected):
    assert refang(raw) == expected


def test_refang_is_noop_on_live_text():
    assert refang("http://evil.com/a?b=c") == "http://evil.com/a?b=c"


@pytest.mark.parametrize("value,ioc_type,expected", [
    ("1.2.3.4", "ipv4", "1[.]2[.]3[.]4"),
    ("evil.com", "domain", "evil[.]com"),
    ("https://evil.com/x", "url", "hxxps[://]evil.com/x"),
    ("admin@evil.com", "email", "admin[at]evil[.]com"),
    ("d41d8cd98f00b204e9800998ecf8427e", "md5", "d41d8cd98f00b204e9800998ecf8427e"),
    ("CVE-2021-44228", "cve", "CVE-2021-44228"),
])
def test_defang(value, ioc_type, expected):
    assert defang(value, ioc_type) == expected


def test_format_ioc_preserves_case():
    assert format_ioc("EVIL.COM", "domain", False) == "EVIL.COM"
    assert format_ioc("EVIL.COM", "domain", True) == "EVIL[.]COM"


def test_format_ioc_normalises_partially_defanged_input():
    assert format_ioc("evil[.]com", "domain", True) == "evil[.]com"
    assert format_ioc("1[.]2.3[.]4", "ipv4", True) == "1[.]2[.]3[.]4"
    assert format_ioc("1[.]2.3[.]4", "ipv4", False) == "1.2.3.4"


def test_type_labels():
    assert get_ioc_type_label("sha256") == "SHA256"
    assert get_ioc_type_label("other") == "other"
