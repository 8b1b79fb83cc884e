"""Controlled vocabularies for modality, anatomy and certification values."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)


class VocabularyError(Exception):
    """Raised when a vocabulary file exists but cannot be used."""


@dataclass(frozen=True)
class Vocabulary:
    """Immutable registry of legal tag values."""

    modalities: frozenset[str]
    anatomy: frozenset[str]
    # combined label (e.g. "CE & FDA") -> atomic labels ({"CE", "FDA"})
    certification_parts: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def certifications(self) -> frozenset[str]:
        return frozenset(self.certification_parts)

    def is_valid_modality(self, value: str) -> bool:
        return value in self.modalities

    def is_valid_anatomy(self, value: str) -> bool:
        return value in self.anatomy

    def is_valid_certification(self, value: str) -> bool:
        """Exact, case-sensitive match against the combined labels."""
        return value in self.certification_parts

    def expand_certification(self, label: str) -> frozenset[str]:
        return self.certification_parts.get(label, frozenset())


def _build(
    modalities: list[str] | tuple[str, ...],
    anatomy: list[str] | tuple[str, ...],
    certifications: Mapping[str, list[str] | tuple[str, ...]],
) -> Vocabulary:
    parts = {label: frozenset(atoms) for label, atoms in certifications.items()}
    return Vocabulary(
        modalities=frozenset(modalities),
        anatomy=frozenset(anatomy),
        certification_parts=MappingProxyType(parts),
    )


DEFAULT_VOCABULARY = _build(
    modalities=(
        "CT", "MRI", "CBCT", "PET", "SPECT", "X-ray", "Ultrasound",
        "RT Struct", "RT Plan", "RT Dose", "Real-time imaging",
    ),
    anatomy=(
        "Brain", "Head & Neck", "Thorax", "Breast", "Abdomen", "Pelvis",
        "Male Pelvis", "Female Pelvis", "Prostate", "Cervix", "Spine",
        "Extremities", "Whole body",
    ),
    certifications={
        "CE": ("CE",),
        "FDA": ("FDA",),
        "CE & FDA": ("CE", "FDA"),
        "CE Mark": ("CE",),
        "FDA Cleared": ("FDA",),
        "FDA 510(k)": ("FDA",),
        "CE Mark, FDA Cleared": ("CE", "FDA"),
        "MDR exempt": ("MDR exempt",),
        "NMPA": ("NMPA",),
    },
)


def load_vocabulary(path: Path | str | None = None) -> Vocabulary:
    """Load a vocabulary from YAML; a missing file yields the built-in registry.

    Expected layout::

        modalities: [CT, MRI]
        anatomy: [Brain, Pelvis]
        certifications:
          "CE & FDA": [CE, FDA]
    """
    if path is None:
        return DEFAULT_VOCABULARY
    path = Path(path)
    if not path.exists():
        logger.warning("Vocabulary file %s not found, using built-in registry", path)
        return DEFAULT_VOCABULARY
    try:
        with open(path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise VocabularyError(f"Could not parse vocabulary {path}: {e}") from e
    if not isinstance(data, dict):
        raise VocabularyError(f"Vocabulary {path} must be a mapping")

    certs = data.get("certifications", {})
    if isinstance(certs, list):
        # plain list: every label is its own atomic part
        certs = {label: [label] for label in certs}
    if not isinstance(certs, dict):
        raise VocabularyError(f"'certifications' in {path} must be a mapping or list")

    return _build(
        modalities=[str(v) for v in data.get("modalities", sorted(DEFAULT_VOCABULARY.modalities))],
        anatomy=[str(v) for v in data.get("anatomy", sorted(DEFAULT_VOCABULARY.anatomy))],
        certifications={
            str(label): [str(a) for a in (atoms or [label])] for label, atoms in certs.items()
        }
        or dict(DEFAULT_VOCABULARY.certification_parts),
    )


_vocabulary: Vocabulary | None = None


def get_vocabulary() -> Vocabulary:
    """Return the configured vocabulary (RTCAT_VOCABULARY_PATH or built-in)."""
    global _vocabulary
    if _vocabulary is None:
        from rtcatalog.config import get_settings

        _vocabulary = load_vocabulary(get_settings().vocabulary_path)
    return _vocabulary


def is_valid_modality(value: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    return vocabulary.is_valid_modality(value)


def is_valid_anatomy(value: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    return vocabulary.is_valid_anatomy(value)


def is_valid_certification(value: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    return vocabulary.is_valid_certification(value)


def expand_certification(label: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> frozenset[str]:
    return vocabulary.expand_certification(label)
