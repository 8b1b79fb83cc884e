"""Controlled vocabulary registry (modalities, anatomy, certifications)."""

from rtcatalog.vocabulary.registry import (
    DEFAULT_VOCABULARY,
    Vocabulary,
    VocabularyError,
    expand_certification,
    get_vocabulary,
    is_valid_anatomy,
    is_valid_certification,
    is_valid_modality,
    load_vocabulary,
)

__all__ = [
    "DEFAULT_VOCABULARY",
    "Vocabulary",
    "VocabularyError",
    "expand_certification",
    "get_vocabulary",
    "is_valid_anatomy",
    "is_valid_certification",
    "is_valid_modality",
    "load_vocabulary",
]
