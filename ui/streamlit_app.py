import os
from typing import Any, Dict

import requests
import streamlit as st


API_URL = os.getenv("NYAYMITRA_API_URL", "http://api:8000").rstrip("/")

DOCUMENT_TYPES = {
    "police_complaint": "Police Complaint / FIR",
    "court_petition": "Court Petition",
    "affidavit": "Affidavit",
    "adjournment_application": "Adjournment Application",
    "government_request": "Government Request Letter",
    "bail_application": "Bail Application",
    "written_statement": "Written Statement",
    "other": "Other",
}
SECTION_TITLES = {
    "about": "What this document is about",
    "important_points": "Important points",
    "directions": "Directions / orders",
    "deadlines": "Deadlines and dates",
    "next_steps": "Next procedural steps",
    "disclaimer": "Disclaimer",
}


def api_post(path: str, **kwargs):
    # Transcription and OCR can take minutes.
    return requests.post(f"{API_URL}{path}", timeout=600, **kwargs)


def _error_text(r: requests.Response) -> str:
    try:
        detail = r.json().get("detail")
    except ValueError:
        return r.text
    if isinstance(detail, dict):
        stage = detail.get("stage")
        return f"{detail.get('error')}" + (f" (stage: {stage})" if stage else "")
    return str(detail)


def post_json(path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    r = api_post(path, json=payload)
    if r.status_code >= 400:
        raise RuntimeError(_error_text(r))
    return r.json()


def post_file(path: str, field: str, uploaded, data: Dict[str, str]) -> Dict[str, Any]:
    files = {field: (uploaded.name, uploaded.getvalue(), uploaded.type or "application/octet-stream")}
    r = api_post(path, files=files, data=data)
    if r.status_code >= 400:
        raise RuntimeError(_error_text(r))
    return r.json()


def export_bytes(path: str, payload: Dict[str, Any]) -> bytes:
    r = api_post(path, json=payload)
    if r.status_code >= 400:
        raise RuntimeError(_error_text(r))
    return r.content


st.set_page_config(page_title="NyayMitra", page_icon="⚖️", layout="wide")

st.markdown("""
<style>
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}
.stDeployButton {display:none;}
</style>
""", unsafe_allow_html=True)

for key in ("transcript", "metadata", "draft", "explanation", "sections"):
    st.session_state.setdefault(key, None)

st.markdown("# ⚖️ NyayMitra")
st.caption("Dictate a legal draft, or upload a legal document to have it explained")

with st.sidebar:
    output_language = st.selectbox("Output language", ["english", "hindi"])
    source_language = st.selectbox("Dictation / document language", ["hi", "en"])

create_tab, understand_tab = st.tabs(["✍️ Create", "📖 Understand"])

with create_tab:
    audio = st.file_uploader("Dictation audio", type=["wav", "mp3", "m4a", "ogg", "webm"])
    if st.button("🎙️ Transcribe", disabled=audio is None):
        with st.spinner("Transcribing and reading the dictation..."):
            try:
                out = post_file("/create/transcribe", "audio", audio, {"language": source_language})
                st.session_state.transcript = out["transcript"]
                st.session_state.metadata = out["metadata"]
            except Exception as e:
                st.error(f"Transcription failed: {e}")

    transcript = st.text_area("Transcript / facts", value=st.session_state.transcript or "", height=180)
    detected = (st.session_state.metadata or {}).get("document_type") or "other"
    doc_type = st.selectbox(
        "Document type",
        list(DOCUMENT_TYPES),
        index=list(DOCUMENT_TYPES).index(detected) if detected in DOCUMENT_TYPES else 0,
        format_func=DOCUMENT_TYPES.get,
    )
    if st.session_state.metadata:
        with st.expander("Extracted details"):
            st.json(st.session_state.metadata)

    if st.button("📝 Generate draft", disabled=not transcript.strip()):
        with st.spinner("Drafting..."):
            try:
                if st.session_state.metadata:
                    out = post_json("/create/draft", {
                        "transcript": transcript,
                        "metadata": st.session_state.metadata,
                        "document_type": doc_type,
                        "output_language": output_language,
                    })
                else:
                    out = post_json("/create/from-text", {
                        "text": transcript,
                        "document_type": doc_type,
                        "output_language": output_language,
                    })
                    st.session_state.metadata = out.get("metadata")
                st.session_state.draft = out["draft"]
            except Exception as e:
                st.error(f"Draft generation failed: {e}")

    if st.session_state.draft:
        st.session_state.draft = st.text_area("Draft", value=st.session_state.draft, height=420)
        instructions = st.text_input("Ask for changes", placeholder="e.g. add the witness Ramesh to paragraph 4")
        if st.button("✏️ Refine", disabled=not instructions.strip()):
            with st.spinner("Applying changes..."):
                try:
                    out = post_json("/create/refine", {
                        "current_draft": st.session_state.draft,
                        "instructions": instructions,
                    })
                    st.session_state.draft = out["draft"]
                    st.rerun()
                except Exception as e:
                    st.error(f"Refinement failed: {e}")

        c1, c2 = st.columns(2)
        title = (st.session_state.metadata or {}).get("subject")
        for col, fmt in ((c1, "docx"), (c2, "pdf")):
            with col:
                try:
                    data = export_bytes("/create/export", {
                        "draft": st.session_state.draft,
                        "format": fmt,
                        "title": title,
                        "document_type": doc_type,
                        "output_language": output_language,
                    })
                    st.download_button(f"⬇️ Download {fmt.upper()}", data, file_name=f"draft.{fmt}",
                                       use_container_width=True)
                except Exception as e:
                    st.error(f"Export failed: {e}")

with understand_tab:
    document = st.file_uploader("Legal document", type=["pdf", "png", "jpg", "jpeg", "tiff"])
    pasted = st.text_area("...or paste the document text", height=160)

    if st.button("🔍 Explain", disabled=document is None and len(pasted.strip()) < 20):
        with st.spinner("Reading and explaining the document..."):
            try:
                if document is not None:
                    out = post_file("/understand/upload", "document", document,
                                    {"language": output_language, "source_language": source_language})
                    st.caption(f"Text extracted via {out.get('extraction_method')}"
                               + (f" (OCR confidence {out['ocr_confidence']:.0f}%)" if out.get("ocr_confidence") else ""))
                else:
                    out = post_json("/understand/explain-text", {"text": pasted, "language": output_language})
                st.session_state.explanation = out["explanation"]
                st.session_state.sections = out["sections"]
            except Exception as e:
                st.error(f"Explanation failed: {e}")

    if st.session_state.sections:
        for key, heading in SECTION_TITLES.items():
            body = st.session_state.sections.get(key)
            if body:
                st.markdown(f"### {heading}")
                st.markdown(body)
        try:
            data = export_bytes("/understand/export", {
                "explanation": st.session_state.explanation,
                "format": "pdf",
                "language": output_language,
            })
            st.download_button("⬇️ Download explanation (PDF)", data, file_name="explanation.pdf")
        except Exception as e:
            st.error(f"Export failed: {e}")
