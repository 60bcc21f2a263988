from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "NyayMitra"
    ENV: str = "local"

    # llm
    LLM_PROVIDER: str = "openai"  # openai|ollama
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TRANSCRIBE_MODEL: str = "whisper-1"
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.1"
    OLLAMA_KEEP_ALIVE: str = "30m"

    # generation knobs per operation
    METADATA_TEMPERATURE: float = 0.1
    METADATA_MAX_TOKENS: int = 1500
    EXPLAIN_TEMPERATURE: float = 0.2
    EXPLAIN_MAX_TOKENS: int = 3000
    DRAFT_TEMPERATURE: float = 0.3
    DRAFT_MAX_TOKENS: int = 4000
    REFINE_TEMPERATURE: float = 0.2
    REFINE_MAX_TOKENS: int = 4000

    # per-stage timeouts (seconds); transcription and OCR get the long ones
    TRANSCRIBE_TIMEOUT_S: float = 300
    OCR_TIMEOUT_S: float = 300
    METADATA_TIMEOUT_S: float = 60
    EXPLAIN_TIMEOUT_S: float = 180
    DRAFT_TIMEOUT_S: float = 180

    # extraction
    # Tesseract language set used when the input language has no known script mapping.
    OCR_LANGUAGES: str = "eng+hin"
    OCR_DPI: int = 300
    TESSERACT_CMD: str | None = None
    MIN_TEXT_LAYER_CHARS: int = 50
    MIN_EXTRACTED_CHARS: int = 20

    # rendering
    # Optional TTF family with Devanagari coverage, e.g. FreeSerif.ttf / FreeSerifBold.ttf.
    # Built-in PDF Times fonts only cover Latin text; without these an installed
    # system font is looked up when a document needs one.
    PDF_UNICODE_FONT_PATH: str | None = None
    PDF_UNICODE_BOLD_FONT_PATH: str | None = None
    PDF_UNICODE_ITALIC_FONT_PATH: str | None = None
    DOCX_COMPLEX_SCRIPT_FONT: str = "Mangal"

    # uploads
    MAX_AUDIO_BYTES: int = 25 * 1024 * 1024
    MAX_DOCUMENT_BYTES: int = 15 * 1024 * 1024

    # CORS (for browser-based UIs)
    # Comma-separated list of allowed origins.
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:8501,http://127.0.0.1:8501"

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
