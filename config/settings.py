"""Configuration management for classification thresholds, report limits, and performance settings."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Page classification
    min_page_text_chars: int = Field(
        default=50,
        description="A page is text-bearing when its stripped text is longer than this many characters",
    )
    allowed_punctuation: str = Field(
        default=".,!?;:()-'\"/\\",
        description="Punctuation kept in normalized document text; everything else becomes a space",
    )

    # Tokenization / similarity
    min_word_length: int = Field(
        default=2,
        description="Words must be longer than this to enter the Jaccard word sets",
    )
    ngram_size: int = Field(
        default=3,
        description="Token count of the n-grams used for common phrase detection",
    )
    max_common_phrases: int = Field(
        default=10,
        description="Maximum number of common phrases reported",
    )
    significant_change_percent: float = Field(
        default=5.0,
        description="Change percentage above which a comparison reports significant changes",
    )

    # Report limits (presentation only, never applied to change counting)
    word_diff_limit: int = Field(default=50, description="Word diff segments kept in the result")
    sentence_diff_limit: int = Field(default=20, description="Sentence diff segments kept in the result")
    char_diff_limit: int = Field(default=500, description="Character diff segments kept in the result")

    # Performance
    max_levenshtein_chars: int = Field(
        default=20000,
        description="Skip Levenshtein similarity when the longer text exceeds this many characters",
    )
    parallel_classification: bool = Field(
        default=True,
        description="Classify both documents concurrently on a thread pool",
    )
    num_workers: int = Field(default=2, description="Worker threads used for document classification")
    log_level: str = Field(default="INFO", description="Level used by configure_logging when none is given")


def get_settings() -> Settings:
    """Return a cached settings instance."""
    return _get_settings()


@lru_cache()
def _get_settings() -> Settings:
    return Settings()


settings = get_settings()
