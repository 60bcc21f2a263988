from fastapi import FastAPI
from nyaymitra.core.config import settings
from nyaymitra.core.logging import setup_logging

from nyaymitra.api.routes_create import router as create_router
from nyaymitra.api.routes_understand import router as understand_router

def create_app():
    setup_logging()

    app = FastAPI(title=settings.APP_NAME)

    # Allow browser-based UIs (React/Streamlit) to call the API from localhost
    from fastapi.middleware.cors import CORSMiddleware
    origins = [o.strip() for o in (settings.CORS_ORIGINS or "").split(",") if o.strip()]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(create_router)
    app.include_router(understand_router)

    @app.get("/health")
    async def health():
        import shutil
        import httpx
        checks = {"tesseract": shutil.which(settings.TESSERACT_CMD or "tesseract") is not None}
        if settings.LLM_PROVIDER == "ollama":
            checks["ollama"] = False
            try:
                async with httpx.AsyncClient(timeout=3.0) as c:
                    r = await c.get(f"{settings.OLLAMA_BASE_URL.rstrip('/')}/api/tags")
                    checks["ollama"] = r.status_code == 200
            except httpx.HTTPError:
                pass
        else:
            checks["openai_key"] = bool(settings.OPENAI_API_KEY)

        ok = all(checks.values())
        return {"ok": ok, "app": settings.APP_NAME, "env": settings.ENV, "llm": settings.LLM_PROVIDER, "deps": checks}

    return app

app = create_app()
