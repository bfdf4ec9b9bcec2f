from core.media_type import MediaType


def test_parse_splits_type_subtype_and_params():
    media = MediaType.parse('application/ld+json; charset="UTF-8"; profile=x')

    assert media.type == "application"
    assert media.subtype == "ld+json"
    assert media.charset == "UTF-8"
    assert media.params["profile"] == "x"


def test_parse_preserves_subtype_case():
    assert MediaType.parse("application/JSON").subtype == "JSON"


def test_parse_empty_values_return_none():
    assert MediaType.parse(None) is None
    assert MediaType.parse("") is None
    assert MediaType.parse("  ;charset=utf-8") is None


def test_parse_without_slash_is_a_subtype_wildcard():
    media = MediaType.parse("application")
    assert media.subtype == "*"
    assert not media.is_wildcard


def test_wildcard_detection_and_str():
    assert MediaType.parse("*/*").is_wildcard
    assert str(MediaType.parse("text/json;charset=utf-8")) == "text/json; charset=utf-8"


def test_equality_ignores_params():
    assert MediaType.parse("application/json") == MediaType.parse("application/json; charset=utf-8")
