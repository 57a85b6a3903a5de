import pytest

from studyai.core.errors import (
    STATUS_BY_KIND,
    ErrorKind,
    GenerationFormatError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    ServiceUnavailableError,
)


def test_every_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


@pytest.mark.parametrize(
    "error_cls, status",
    [
        (NotFoundError, 404),
        (InvalidStateError, 400),
        (ServiceUnavailableError, 503),
        (GenerationFormatError, 502),
        (InternalError, 500),
    ],
)
def test_status_codes(error_cls, status):
    assert error_cls().status_code == status


def test_format_error_default_message_suggests_retry():
    assert "try generating again" in GenerationFormatError().message
