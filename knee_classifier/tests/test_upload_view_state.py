"""Tests for the upload page state container."""

import pytest

from knee_classifier.api.routers.ui.state import (
    MISSING_LABEL,
    UNKNOWN_ERROR_MESSAGE,
    VALIDATION_MESSAGE,
    UploadViewState,
    format_confidence,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.954, "95.40%"),
        (0.87, "87.00%"),
        (1, "100.00%"),
        (0, "0.00%"),
        (None, None),
        ("0.9", None),
        (True, None),
    ],
)
def test_format_confidence(value, expected):
    assert format_confidence(value) == expected


def test_submit_without_file_sets_validation_error():
    state = UploadViewState()

    assert state.start_submit() is False
    assert state.error == VALIDATION_MESSAGE
    assert state.is_loading is False


def test_selecting_file_clears_previous_outcome():
    state = UploadViewState(result={"prediction": "Severe"}, error="old error")

    state.select_file("knee.png", "data:image/png;base64,AAAA")

    assert state.result is None
    assert state.error is None
    assert state.filename == "knee.png"
    assert state.preview_url == "data:image/png;base64,AAAA"


def test_clearing_selection_drops_preview():
    state = UploadViewState()
    state.select_file("knee.png", "data:image/png;base64,AAAA")

    state.select_file(None)

    assert state.filename is None
    assert state.preview_url is None


def test_busy_flag_blocks_second_submission():
    state = UploadViewState()
    state.select_file("knee.png")

    assert state.start_submit() is True
    assert state.is_loading is True
    assert state.start_submit() is False


def test_resolve_stores_result():
    state = UploadViewState()
    state.select_file("knee.png")
    state.start_submit()

    state.resolve({"prediction": "Normal", "confidence": 0.954})

    assert state.is_loading is False
    assert state.prediction == "Normal"
    assert state.confidence == "95.40%"


def test_reject_clears_stale_result():
    state = UploadViewState()
    state.select_file("knee.png")
    state.start_submit()
    state.resolve({"prediction": "Normal"})

    state.start_submit()
    state.reject("Error from classification API: Service Unavailable")

    assert state.result is None
    assert state.is_loading is False
    assert state.error == "Error from classification API: Service Unavailable"


def test_reject_without_message_uses_fallback():
    state = UploadViewState(filename="knee.png", is_loading=True)

    state.reject(None)

    assert state.error == UNKNOWN_ERROR_MESSAGE


def test_non_object_result_has_no_label_or_confidence():
    state = UploadViewState(result=["Normal", 0.9])

    assert state.prediction == MISSING_LABEL
    assert state.confidence is None
