"""Error hierarchy tests — codes, statuses and REST envelope shape."""

from pokedex.core.domain_types import LookupFailure
from pokedex.core.errors import (
    AbilityLookupError, DatasetFormatError, DatasetSourceNotFoundError,
    ErrorCategory, ErrorSeverity, InvalidInputError, InvalidSearchError,
    PokedexError, ResourceNotFoundError,
)


def test_all_errors_share_the_base_class():
    for err in (
        InvalidInputError("blank", "url"),
        InvalidSearchError(),
        ResourceNotFoundError("Pokemon", "9999"),
        DatasetSourceNotFoundError("data/x.json"),
        DatasetFormatError("data/x.json", "bad"),
        AbilityLookupError("https://x", LookupFailure.TIMEOUT),
    ):
        assert isinstance(err, PokedexError)


def test_input_errors_are_400():
    assert InvalidInputError("blank", "url").http_status == 400
    assert InvalidSearchError().http_status == 400
    assert InvalidSearchError().code == "INVALID_SEARCH"


def test_not_found_is_404_and_keeps_resource_id():
    err = ResourceNotFoundError("Pokemon", "9999")
    assert err.http_status == 404
    assert err.message == "Pokemon '9999' not found"
    assert err.to_response()["error"]["context"]["resource_id"] == "9999"


def test_dataset_errors_are_critical_and_distinguishable():
    missing = DatasetSourceNotFoundError("data/x.json")
    malformed = DatasetFormatError("data/x.json", "Expecting value")
    assert missing.code != malformed.code
    assert missing.category == malformed.category == ErrorCategory.DATASET
    assert missing.severity == ErrorSeverity.CRITICAL
    assert "data/x.json" in missing.message
    assert "Expecting value" in malformed.message


def test_ability_lookup_error_carries_failure_kind():
    err = AbilityLookupError("https://x", LookupFailure.HTTP_STATUS, "status 404")
    assert err.failure is LookupFailure.HTTP_STATUS
    assert err.message == "Ability lookup failed (http_status): status 404"


def test_to_response_envelope_shape():
    body = InvalidSearchError().to_response()["error"]
    assert set(body) == {
        "code", "message", "category", "severity", "timestamp", "context",
    }
    assert body["category"] == "validation"
    assert body["severity"] == "warning"
