from halcyon_client.errors import (
    HalcyonHTTPError,
    HalcyonResponseError,
    HalError,
    UnknownRelationError,
    classify_error,
)
from httpx import Response


def test_structured_error_with_field_errors():
    resp = Response(422)
    err = classify_error(resp, {"message": "bad", "errors": {"name": "required"}})

    assert isinstance(err, HalError)
    assert err.status_code == 422
    assert err.get_status_code() == 422
    assert err.message == "bad"
    assert str(err) == "bad"
    assert err.has_validation_errors()
    assert err.has_validation_error("name")
    assert err.get_validation_error("name") == "required"
    assert err.get_validation_error("missing") is None
    assert not err.has_validation_error("missing")


def test_structured_error_without_field_errors_never_raises():
    err = classify_error(Response(400), {"message": "nope"})
    assert isinstance(err, HalError)
    assert not err.has_validation_errors()
    assert err.get_validation_errors() is None
    assert err.get_validation_error("name") is None
    assert err.has_validation_error("name") is False


def test_generic_error_when_no_message():
    err = classify_error(Response(500), {"detail": "boom"})
    assert isinstance(err, HalcyonHTTPError)
    assert not isinstance(err, HalError)
    assert err.status_code == 500
    assert err.status_text == "Internal Server Error"
    assert "500 Internal Server Error" in str(err)


def test_generic_error_for_unparsed_body():
    err = classify_error(Response(404), None)
    assert isinstance(err, HalcyonHTTPError)
    assert isinstance(err, HalcyonResponseError)
    assert err.status_text == "Not Found"


def test_nested_key_helpers():
    assert HalError.add_key("", "name") == "name"
    assert HalError.add_key("Address", "street") == "Address.Street"
    assert HalError.add_index("Items", "", 2) == "Items[2]"


def test_unknown_relation_is_lookup_error():
    err = UnknownRelationError("next")
    assert isinstance(err, LookupError)
    assert err.rel == "next"
    assert str(err) == 'Cannot find ref "next".'


def test_field_reported_with_null_counts_as_present():
    err = classify_error(Response(400), {"message": "bad", "errors": {"name": None}})
    assert err.has_validation_error("name")
    assert err.get_validation_error("name") is None
    assert not err.has_validation_error("other")
