"""Tests for switchyard.errors — exception hierarchy and messages."""

import pytest

from switchyard.errors import (
    ConfigurationError,
    HTTPError,
    MalformedURL,
    NotFound,
    SwitchyardError,
)


class TestHierarchy:
    def test_http_error_is_switchyard_error(self) -> None:
        assert issubclass(HTTPError, SwitchyardError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_malformed_url_is_http_error(self) -> None:
        assert issubclass(MalformedURL, HTTPError)

    def test_configuration_error_is_switchyard_error(self) -> None:
        assert issubclass(ConfigurationError, SwitchyardError)


class TestHTTPError:
    def test_status_and_detail(self) -> None:
        err = HTTPError(status=409, detail="Conflict")
        assert err.status == 409
        assert str(err) == "409: Conflict"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_not_found_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"

    def test_malformed_url_mentions_value(self) -> None:
        err = MalformedURL("%zz")
        assert err.status == 400
        assert "'%zz'" in err.detail
