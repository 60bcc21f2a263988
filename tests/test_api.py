import json
from io import BytesIO

import pytest
from conftest import SAMPLE_EXPLANATION, FakeLLM, FakeSpeech
from docx import Document
from fastapi.testclient import TestClient

from nyaymitra.main import app
from nyaymitra.services.llm_factory import get_pipeline

ORDER_TEXT = (
    "IN THE COURT OF THE CIVIL JUDGE (SENIOR DIVISION), LUCKNOW. Civil Suit No. 123/2024. "
    "Ram Prasad versus Shyam Lal. The defendant is directed to remove the encroachment within 30 days."
)


@pytest.fixture
def client_for(make_pipeline):
    def _client(**kwargs):
        pipeline = make_pipeline(**kwargs)
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()


def test_transcribe(client_for):
    client = client_for(
        llm=FakeLLM(json_text=json.dumps({"document_type": "affidavit", "applicant_name": "Sita Devi"})),
        speech=FakeSpeech(text="main shapath leti hoon", duration=9.0),
    )
    r = client.post(
        "/create/transcribe",
        files={"audio": ("dictation.webm", b"webm-bytes", "audio/webm")},
        data={"language": "hi"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["transcript"] == "main shapath leti hoon"
    assert body["audio_duration"] == 9.0
    assert body["metadata"]["document_type"] == "affidavit"
    assert body["metadata"]["applicant_name"] == "Sita Devi"


def test_transcribe_rejects_unsupported_audio(client_for):
    client = client_for()
    r = client.post("/create/transcribe", files={"audio": ("dictation.flac", b"x", "audio/flac")})
    assert r.status_code == 415
    assert r.json()["detail"]["code"] == "unsupported_format"


def test_transcribe_failure_maps_to_502(client_for):
    client = client_for(speech=FakeSpeech(error=RuntimeError("whisper down")))
    r = client.post("/create/transcribe", files={"audio": ("a.mp3", b"x", "audio/mpeg")})
    assert r.status_code == 502
    detail = r.json()["detail"]
    assert detail["code"] == "transcription_failed"
    assert detail["stage"] == "extract"


def test_draft_and_refine(client_for):
    client = client_for(llm=FakeLLM(text="DRAFT TEXT"))
    r = client.post("/create/draft", json={
        "transcript": "facts of the case",
        "document_type": "bail_application",
        "metadata": {"applicant_name": "Mohan"},
    })
    assert r.status_code == 200
    assert r.json() == {"draft": "DRAFT TEXT", "document_type": "bail_application", "tokens_used": 42}

    r = client.post("/create/refine", json={"current_draft": "DRAFT TEXT", "instructions": "add surety"})
    assert r.status_code == 200
    assert r.json() == {"draft": "DRAFT TEXT"}


def test_draft_requires_fields(client_for):
    client = client_for()
    r = client.post("/create/draft", json={"transcript": "  ", "document_type": "affidavit"})
    assert r.status_code == 400


def test_from_text(client_for):
    client = client_for(llm=FakeLLM(text="PETITION", json_text="{}"))
    r = client.post("/create/from-text", json={"text": "typed facts", "document_type": "court_petition"})
    assert r.status_code == 200
    body = r.json()
    assert body["draft"] == "PETITION"
    assert body["metadata"]["document_type"] == "court_petition"
    assert body["tokens_used"] == 84


def test_upstream_failure_maps_to_503(client_for):
    client = client_for(llm=FakeLLM(error=RuntimeError("connection refused")))
    r = client.post("/create/refine", json={"current_draft": "d", "instructions": "i"})
    assert r.status_code == 503
    assert r.json()["detail"]["stage"] == "compose"


def test_malformed_metadata_maps_to_502(client_for):
    client = client_for(llm=FakeLLM(json_text="[]"))
    r = client.post("/create/from-text", json={"text": "typed facts", "document_type": "affidavit"})
    assert r.status_code == 502
    assert r.json()["detail"]["code"] == "malformed_metadata"


def test_export_docx(client_for):
    client = client_for()
    r = client.post("/create/export", json={"draft": "AFFIDAVIT\n1. I am the deponent.", "title": "Affidavit"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )
    doc = Document(BytesIO(r.content))
    assert doc.paragraphs[0].text == "AFFIDAVIT"
    assert r.headers["content-disposition"].startswith("attachment; filename=")
    assert r.headers["content-disposition"].endswith('.docx"')


def test_export_pdf(client_for):
    client = client_for()
    r = client.post("/create/export", json={"draft": "PRAYER\nRelief.", "format": "pdf"})
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")


def test_export_rejects_empty_draft(client_for):
    r = client_for().post("/create/export", json={"draft": "   "})
    assert r.status_code == 400


def test_understand_upload(client_for):
    client = client_for(llm=FakeLLM(text=SAMPLE_EXPLANATION), text_layer=(ORDER_TEXT, 1))
    r = client.post(
        "/understand/upload",
        files={"document": ("order.pdf", b"%PDF-1.4", "application/pdf")},
        data={"language": "english"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["extraction_method"] == "text_layer"
    assert body["pages"] == 1
    assert body["extracted_text"] == ORDER_TEXT
    assert "Civil Judge" in body["sections"]["about"]
    assert set(body["sections"]) == {
        "about", "important_points", "directions", "deadlines", "next_steps", "disclaimer",
    }


def test_understand_upload_rejects_audio(client_for):
    r = client_for().post("/understand/upload", files={"document": ("a.mp3", b"x", "audio/mpeg")})
    assert r.status_code == 415


def test_understand_upload_insufficient_text(client_for):
    client = client_for(text_layer=("", 1))
    r = client.post("/understand/upload", files={"document": ("scan.pdf", b"%PDF", "application/pdf")})
    assert r.status_code == 422
    assert r.json()["detail"]["code"] == "insufficient_text"


def test_explain_text_too_short(client_for):
    r = client_for().post("/understand/explain-text", json={"text": "too short"})
    assert r.status_code == 400


def test_explain_text(client_for):
    client = client_for(llm=FakeLLM(text=SAMPLE_EXPLANATION))
    r = client.post("/understand/explain-text", json={"text": ORDER_TEXT, "language": "english"})
    assert r.status_code == 200
    assert r.json()["explanation"] == SAMPLE_EXPLANATION
    assert "Rs. 50,000" in r.json()["sections"]["directions"]


def test_explanation_export_defaults_to_pdf(client_for):
    r = client_for().post("/understand/export", json={"explanation": SAMPLE_EXPLANATION})
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")


def test_health(client_for):
    r = client_for().get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["app"] == "NyayMitra"
    assert "tesseract" in body["deps"]


def test_export_does_not_leave_files_behind(client_for, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    r = client_for().post("/understand/export", json={"explanation": SAMPLE_EXPLANATION, "format": "docx"})
    assert r.status_code == 200
    assert list(tmp_path.iterdir()) == []


def test_export_without_pdf_font_maps_to_500(client_for, monkeypatch):
    from nyaymitra.adapters.writer import pdf_writer
    from nyaymitra.core.config import settings

    monkeypatch.setattr(settings, "PDF_UNICODE_FONT_PATH", None)
    monkeypatch.setattr(pdf_writer, "SYSTEM_UNICODE_FONTS", ())
    r = client_for().post("/create/export", json={
        "draft": "शिकायत पत्र", "format": "pdf", "output_language": "hindi",
    })
    assert r.status_code == 500
    detail = r.json()["detail"]
    assert detail["code"] == "font_unavailable"
    assert detail["stage"] == "render"
    assert "PDF_UNICODE_FONT_PATH" in detail["error"]


def test_transcribe_rejects_empty_dictation(client_for):
    llm = FakeLLM(json_text="{}")
    client = client_for(llm=llm, speech=FakeSpeech(text=""))
    r = client.post("/create/transcribe", files={"audio": ("a.wav", b"RIFF", "audio/wav")})
    assert r.status_code == 422
    assert r.json()["detail"]["code"] == "insufficient_text"
    assert llm.calls == []
