# tests/test_features.py

import pickle

from datatips.features import PipelineAnalyzer, build_vectorizer, top_terms, vectorize_texts
from datatips.text_preprocessing import TextPipeline, Tokenizer


def test_vectorizer_uses_pipeline_tokens():
    texts = ["@ann loves #Python http://x.co/a", "@bob says hello"]
    vectorizer, matrix = vectorize_texts(texts)

    vocab = set(vectorizer.vocabulary_)
    assert {"MENTION", "HASHTAG", "URL", "ann", "python", "hello"} <= vocab
    assert matrix.shape == (2, len(vocab))


def test_analyzer_drops_empty_tokens():
    analyzer = PipelineAnalyzer(TextPipeline([], Tokenizer(" ")))
    assert analyzer("a  b") == ["a", "b"]


def test_fitted_vectorizer_pickles():
    vectorizer = build_vectorizer()
    vectorizer.fit(["#one two", "three @four"])

    restored = pickle.loads(pickle.dumps(vectorizer))
    assert restored.transform(["two three"]).shape == (1, len(vectorizer.vocabulary_))


def test_top_terms_ranks_by_mean_weight():
    texts = ["@ann #python", "@bob #python", "@cat rocks"]
    vectorizer, matrix = vectorize_texts(texts)
    terms = top_terms(vectorizer, matrix, n=3)

    assert list(terms.columns) == ["term", "mean_tfidf"]
    assert len(terms) == 3
    assert terms["mean_tfidf"].is_monotonic_decreasing
    assert set(terms["term"]) <= set(vectorizer.vocabulary_)
