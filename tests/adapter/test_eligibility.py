import pytest

from core.eligibility import EligibilityGate, has_matching_media_type
from core.media_type import MediaType


def _media(subtype: str, type_: str = "application") -> MediaType:
    return MediaType(type=type_, subtype=subtype)


@pytest.mark.parametrize(
    "subtype",
    [
        "json",
        "JSON",
        "ld+json",
        "javascript",
        "x-javascript",
        "x-json",
        "x-www-form-urlencoded",
        "X-WWW-FORM-URLENCODED",
        "custom-x-www-form-urlencoded",
    ],
)
def test_json_like_subtypes_are_eligible(subtype):
    assert has_matching_media_type(_media(subtype)) is True


@pytest.mark.parametrize("subtype", ["xml", "html", "octet-stream"])
def test_other_subtypes_are_rejected(subtype):
    assert has_matching_media_type(_media(subtype)) is False


def test_missing_media_type_is_eligible():
    assert has_matching_media_type(None) is True


def test_full_wildcard_is_eligible():
    assert has_matching_media_type(MediaType.parse("*/*")) is True


@pytest.mark.parametrize(
    "subtype",
    [
        # Suffix checks are case-sensitive while the equality checks are not.
        "LD+JSON",
        "CUSTOM-X-WWW-FORM-URLENCODED",
        # javascript / x-javascript / x-json compare with exact case.
        "JavaScript",
        "X-JSON",
    ],
)
def test_case_sensitive_rules_reject_other_casings(subtype):
    assert has_matching_media_type(_media(subtype)) is False


def test_subtype_alone_drives_the_decision():
    assert has_matching_media_type(_media("json", type_="text")) is True
    assert has_matching_media_type(_media("xml", type_="application")) is False


class Base:
    pass


class Other:
    pass


class Child(Base):
    pass


def test_without_allow_list_any_type_is_valid():
    gate = EligibilityGate()
    for type_ in (Base, Child, dict, list, int, str, object):
        assert gate.is_valid_type(type_) is True


def test_none_type_is_never_valid():
    assert EligibilityGate().is_valid_type(None) is False
    assert EligibilityGate(allowed_types=[Base]).is_valid_type(None) is False


def test_allow_list_requires_exact_type():
    gate = EligibilityGate(allowed_types=[Base, Other])

    assert gate.is_valid_type(Base) is True
    assert gate.is_valid_type(Other) is True
    assert gate.is_valid_type(Child) is False
    assert gate.is_valid_type(dict) is False


def test_empty_allow_list_rejects_every_type():
    gate = EligibilityGate(allowed_types=[])
    assert gate.restricted is True
    for type_ in (Base, Child, dict, object):
        assert gate.is_valid_type(type_) is False
    assert gate.is_eligible(dict, MediaType.parse("application/json")) is False


def test_absent_allow_list_is_unrestricted():
    gate = EligibilityGate()
    assert gate.restricted is False
    assert gate.allowed_types == ()
    assert repr(gate) == "<EligibilityGate allowed=*>"


def test_allow_list_keeps_declared_order():
    gate = EligibilityGate(allowed_types=[Other, Base])
    assert gate.allowed_types == (Other, Base)


def test_eligibility_is_and_of_both_rules():
    gate = EligibilityGate(allowed_types=[Base])
    json_media = MediaType.parse("application/json")
    xml_media = MediaType.parse("application/xml")

    assert gate.is_eligible(Base, json_media) is True
    assert gate.is_eligible(Base, None) is True
    assert gate.is_eligible(Base, xml_media) is False
    assert gate.is_eligible(Child, json_media) is False
    assert gate.is_eligible(None, json_media) is False
