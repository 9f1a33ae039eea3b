import pytest

from core.errors import (
    Err,
    ErrorCode,
    Ok,
    external_service_error,
    file_error,
    from_exception,
    not_found,
    playback_failed,
    synthesis_unavailable,
)


@pytest.mark.parametrize(
    "code, status",
    [
        (ErrorCode.E1011_EXTERNAL_SERVICE_ERROR, 502),
        (ErrorCode.E2000_VALIDATION_GENERIC, 400),
        (ErrorCode.E4010_NOT_FOUND, 404),
        (ErrorCode.E6003_FILE_WRITE_ERROR, 500),
        (ErrorCode.E6020_PLAYBACK_FAILED, 502),
        (ErrorCode.E6022_SYNTHESIS_UNAVAILABLE, 501),
        (ErrorCode.E9001_UNEXPECTED_ERROR, 500),
    ],
)
def test_http_status_per_code(code, status):
    assert code.http_status == status


def test_ok_and_err_accessors():
    assert Ok(3).unwrap() == 3
    assert Ok(3).is_ok() and not Ok(3).is_err()

    err = not_found("Exercise", "practice-99", origin="api")
    assert isinstance(err, Err) and err.is_err()
    assert err.unwrap_err().message == "Exercise not found: practice-99"
    with pytest.raises(ValueError):
        err.unwrap()


def test_builders_drop_empty_metadata():
    error = playback_failed("/audio/vocab-v001.mp3", "device busy").error
    assert error.message == "Failed to play audio: /audio/vocab-v001.mp3 (device busy)"
    assert error.metadata == {"path": "/audio/vocab-v001.mp3"}

    assert file_error("disk full").error.metadata == {}
    assert file_error("disk full").error.code is ErrorCode.E6003_FILE_WRITE_ERROR
    assert external_service_error("google-tts", "quota").error.metadata == {"service": "google-tts"}
    assert synthesis_unavailable().error.message == "Speech synthesis not supported"


def test_to_dict_and_with_context():
    cause = RuntimeError("boom")
    error = from_exception(cause, origin="batch", key="vocab-v001.mp3").error
    assert error.cause is cause

    tagged = error.with_context(correlation_id="abc123", request_id="r1")
    body = tagged.to_dict()["error"]
    assert body["code"] == "E9001_UNEXPECTED_ERROR"
    assert body["category"] == "internal"
    assert body["correlation_id"] == "abc123"
    assert body["metadata"] == {"key": "vocab-v001.mp3"}
