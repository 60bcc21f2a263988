import pytest

from nyaymitra.core.errors import (
    ExtractionError,
    ExtractionErrorKind,
    InterpretationError,
    InterpretationErrorKind,
    PipelineError,
    RenderError,
    RenderErrorKind,
)


@pytest.mark.parametrize("kind", list(ExtractionErrorKind))
def test_extraction_error_defaults(kind):
    err = ExtractionError(kind)
    assert isinstance(err, PipelineError)
    assert err.kind == kind
    assert err.error_code == kind.value
    assert err.message
    assert err.stage is None
    assert str(err) == f"{kind.value}: {err.message}"


@pytest.mark.parametrize("kind", list(InterpretationErrorKind))
def test_interpretation_error_defaults(kind):
    err = InterpretationError(kind)
    assert err.error_code == kind.value
    assert err.message


def test_custom_message_and_stage():
    err = InterpretationError(InterpretationErrorKind.UPSTREAM_FAILURE, "Draft generation timed out after 180s")
    err.stage = "compose"
    assert str(err) == "upstream_failure: Draft generation timed out after 180s"
    assert err.stage == "compose"


def test_render_error_kinds():
    err = RenderError("no Devanagari font", RenderErrorKind.FONT_UNAVAILABLE)
    assert err.kind == RenderErrorKind.FONT_UNAVAILABLE
    assert str(err) == "font_unavailable: no Devanagari font"


def test_render_error():
    err = RenderError("disk full")
    assert err.error_code == "io_failure"
    assert err.message == "disk full"
    with pytest.raises(PipelineError):
        raise err
