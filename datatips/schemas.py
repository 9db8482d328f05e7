from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .settings import settings
from .text_preprocessing import CaseMode


class TokenizeRequest(BaseModel):
    text: str
    case_mode: CaseMode = Field(default=settings.case_mode)
    delimiter: str = Field(default=settings.delimiter)


class TokenizeResponse(BaseModel):
    case_mode: CaseMode
    cleaned_text: str
    tokens: List[str]
    n_tokens: int


class BatchTokenizeRequest(BaseModel):
    texts: List[str] = Field(..., min_length=1, max_length=200)
    case_mode: CaseMode = Field(default=settings.case_mode)
    delimiter: str = Field(default=settings.delimiter)


class BatchTokenizeResponse(BaseModel):
    case_mode: CaseMode
    results: List[TokenizeResponse]


class HealthResponse(BaseModel):
    status: str
    service: str
    environment: str
