# datatips/api.py

from __future__ import annotations

from fastapi import FastAPI, HTTPException

from .schemas import (
    BatchTokenizeRequest,
    BatchTokenizeResponse,
    HealthResponse,
    TokenizeRequest,
    TokenizeResponse,
)
from .settings import settings
from .tokenize_cli import tokenize_single

app = FastAPI(
    title="Text Tokenizer API",
    version="1.0.0",
    description=(
        "Normalizes social-media style text (non-ASCII, case, mentions, "
        "hashtags, URLs, punctuation, whitespace) and splits it into tokens."
    ),
)


@app.get("/health", response_model=HealthResponse)
def health():
    """
    Runs the pipeline on a tiny dummy text so a broken pattern shows up
    here instead of on the first real request.
    """
    try:
        tokenize_single("healthcheck @probe #ok", "unchanged", " ")
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(status_code=500, detail=f"Pipeline broken: {exc}") from exc
    return HealthResponse(status="ok", service=settings.service_name, environment=settings.environment)


@app.post("/tokenize", response_model=TokenizeResponse)
def tokenize(req: TokenizeRequest):
    """
    Thin wrapper around tokenize_single(), so the CLI, tests, and API all
    share the same logic.
    """
    try:
        result = tokenize_single(req.text, req.case_mode.value, req.delimiter)
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(status_code=500, detail=f"Tokenization failed: {exc}") from exc
    return TokenizeResponse(**result)


@app.post("/tokenize/batch", response_model=BatchTokenizeResponse)
def tokenize_batch(req: BatchTokenizeRequest):
    try:
        results = [
            TokenizeResponse(**tokenize_single(t, req.case_mode.value, req.delimiter))
            for t in req.texts
        ]
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(status_code=500, detail=f"Tokenization failed: {exc}") from exc
    return BatchTokenizeResponse(case_mode=req.case_mode, results=results)
