# datatips/features.py

from __future__ import annotations

from typing import Any, Iterable, List, Tuple, Union

import numpy as np
import pandas as pd
from sklearn.feature_extraction.text import TfidfVectorizer

from .text_preprocessing import CaseMode, TextPipeline, build_pipeline


class PipelineAnalyzer:
    """
    Adapter so a TextPipeline can be the `analyzer` of a sklearn vectorizer.
    Empty tokens (from adjacent delimiters) are dropped. Must stay
    picklable, fitted vectorizers get dumped with joblib.
    """

    def __init__(self, pipeline: TextPipeline):
        self.pipeline = pipeline

    def __call__(self, doc: str) -> List[str]:
        return [tok for tok in self.pipeline.run(doc) if tok]


def build_vectorizer(
    case_mode: Union[CaseMode, str] = CaseMode.LOWER,
    delimiter: str = " ",
    min_df: Union[int, float] = 1,
    max_features: int = 20000,
) -> TfidfVectorizer:
    return TfidfVectorizer(
        analyzer=PipelineAnalyzer(build_pipeline(case_mode, delimiter)),
        min_df=min_df,
        max_features=max_features,
    )


def vectorize_texts(
    texts: Iterable[str],
    case_mode: Union[CaseMode, str] = CaseMode.LOWER,
) -> Tuple[TfidfVectorizer, Any]:
    """Fit a vectorizer on `texts`; returns (vectorizer, sparse TF-IDF matrix)."""
    vectorizer = build_vectorizer(case_mode)
    matrix = vectorizer.fit_transform(list(texts))
    return vectorizer, matrix


def top_terms(vectorizer: TfidfVectorizer, matrix: Any, n: int = 10) -> pd.DataFrame:
    """Terms ranked by mean TF-IDF weight across documents."""
    weights = np.asarray(matrix.mean(axis=0)).ravel()
    terms = vectorizer.get_feature_names_out()

    df = pd.DataFrame({"term": terms, "mean_tfidf": weights})
    return df.sort_values(["mean_tfidf", "term"], ascending=[False, True]).head(n).reset_index(drop=True)
