import pytest
from intel_workbench.ioc import extractor
from intel_workbench.ioc.extractor import IocExtractor
from intel_workbench.reports.models import ExtractedIOC


def _pairs(result):
    return [(i.type, i.value) for i in result.indicators]


def test_empty_input():
    result = extractor.extract("")
    assert result.indicators == []
    assert result.duplicate_count == 0


def test_text_without_indicators():
    result = extractor.extract("nothing to see here, move along.")
    assert result.indicators == []


def test_defanged_email_and_live_ipv4():
    result = extractor.extract("contact admin[at]evil[.]com or 1.2.3.4")
    assert _pairs(result) == [("email", "admin[at]evil[.]com"), ("ipv4", "1.2.3.4")]
    assert result.duplicate_count == 0


def test_extraction_is_idempotent():
    text = "contact admin[at]evil[.]com or 1.2.3.4"
    assert extractor.extract(text) == extractor.extract(text)


def test_url_claims_embedded_ipv4():
    result = extractor.extract("hxxp://1[.]2[.]3[.]4/path")
    assert _pairs(result) == [("url", "hxxp://1[.]2[.]3[.]4/path")]


def test_url_claims_embedded_domain():
    result = extractor.extract("beacon to https://cdn.evil.com/a.js today")
    assert _pairs(result) == [("url", "https://cdn.evil.com/a.js")]


def test_defang_styles_deduplicate():
    result = extractor.extract("evil.com and again evil[.]com")
    assert _pairs(result) == [("domain", "evil.com")]
    assert result.duplicate_count == 1


def test_dedup_ignores_case():
    result = extractor.extract("EVIL.COM evil.com")
    assert _pairs(result) == [("domain", "EVIL.COM")]
    assert result.duplicate_count == 1


def test_sha256_is_not_split_into_shorter_hashes():
    digest = "a" * 64
    result = extractor.extract(f"sample {digest} dropped")
    assert _pairs(result) == [("sha256", digest)]


@pytest.mark.parametrize("text,expected_type", [
    ("d41d8cd98f00b204e9800998ecf8427e", "md5"),
    ("da39a3ee5e6b4b0d3255bfef95601890afd80709", "sha1"),
    ("CVE-2021-44228", "cve"),
    ("cve-2017-0144", "cve"),
    ("2001:0db8:85a3:0000:0000:8a2e:0370:7334", "ipv6"),
    ("10[.]0[.]0[.]1", "ipv4"),
    ("update-server[.]ru", "domain"),
    ("ops@example.org", "email"),
    ("hxxps[:]//bad.site/x", "url"),
])
def test_single_indicator_types(text, expected_type):
    result = extractor.extract(f"seen: {text} ;")
    assert [i.type for i in result.indicators] == [expected_type]


def test_results_follow_registry_order():
    text = "1.2.3.4 then evil.com then CVE-2020-0601"
    result = extractor.extract(text)
    assert [i.type for i in result.indicators] == ["cve", "ipv4", "domain"]


def test_duplicates_do_not_claim_offsets():
    # the second URL is a duplicate, so its host can still be seen by later patterns
    result = extractor.extract("http://evil.com/ HTTP://EVIL.COM/")
    assert [i.type for i in result.indicators] == ["url", "domain"]
    assert result.duplicate_count == 1


def test_indicators_start_unselected():
    result = extractor.extract("1.2.3.4")
    assert all(not i.selected for i in result.indicators)


def test_custom_pattern_list():
    from intel_workbench.ioc.patterns import IOC_PATTERNS
    only_ipv4 = [p for p in IOC_PATTERNS if p.type == "ipv4"]
    result = IocExtractor(only_ipv4).extract("evil.com 8.8.8.8")
    assert _pairs(result) == [("ipv4", "8.8.8.8")]


def test_dedup_key():
    assert IocExtractor.dedup_key("domain", "Evil[.]COM") == "domain:evil.com"


def test_selection_helpers():
    iocs = extractor.extract("1.2.3.4 evil.com").indicators

    toggled = extractor.toggle_select(iocs, 1)
    assert [i.selected for i in toggled] == [False, True]
    assert [i.selected for i in iocs] == [False, False]

    assert extractor.selected(toggled) == [ExtractedIOC("evil.com", "domain", True)]
    assert all(i.selected for i in extractor.select_all(iocs))
    assert not any(i.selected for i in extractor.deselect_all(toggled))


def test_group_by_type_keeps_flat_indices():
    iocs = extractor.extract("CVE-2020-0601 evil.com 1.2.3.4").indicators
    groups = extractor.group_by_type(iocs)
    assert list(groups) == ["ipv4", "domain", "cve"]
    for ioc_type, members in groups.items():
        for index, ioc in members:
            assert iocs[index] is ioc
            assert ioc.type == ioc_type
