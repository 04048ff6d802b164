"""Skill taxonomy loaded from keywords.json.

The catalog knows every skill surface form (alias), which canonical skill each
alias belongs to, and which header variations identify each resume section.
It is built once per process and only exposes read-only views.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

RESOURCE_DIR = Path(__file__).parent / "resources"
KEYWORDS_PATH = RESOURCE_DIR / "keywords.json"

_MULTI_WORD_MARKERS = (" ", "-", "/", ".")


class CatalogLoadError(RuntimeError):
    """Raised when the keyword document cannot be read or parsed."""


def _is_multi_word(skill: str) -> bool:
    return any(marker in skill for marker in _MULTI_WORD_MARKERS)


class KeywordCatalog:
    def __init__(
        self,
        skill_categories: Mapping[str, list[str]] | None = None,
        synonym_map: Mapping[str, list[str]] | None = None,
        section_headers: Mapping[str, list[str]] | None = None,
    ):
        # lowercased alias -> preferred cased rendering
        self._display_forms: dict[str, str] = {}
        # lowercased alias -> canonical (only for synonym-map entries)
        self._synonym_to_canonical: dict[str, str] = {}
        # canonical -> lowercased aliases, canonical included
        self._canonical_forms: dict[str, set[str]] = {}
        self._multi_word: list[str] = []
        self._categories: dict[str, tuple[str, ...]] = {}
        self._section_headers: dict[str, tuple[str, ...]] = {}

        for category, skills in (skill_categories or {}).items():
            cleaned = tuple(s.strip() for s in skills)
            self._categories[category] = cleaned
            for skill in cleaned:
                self._register(skill)

        for canonical, synonyms in (synonym_map or {}).items():
            canonical = canonical.strip()
            self._register(canonical)
            self._synonym_to_canonical[canonical.lower()] = canonical
            forms = self._canonical_forms.setdefault(canonical, set())
            forms.add(canonical.lower())
            for synonym in synonyms:
                synonym = synonym.strip()
                self._synonym_to_canonical[synonym.lower()] = canonical
                forms.add(synonym.lower())
                self._register(synonym)

        for section, variations in (section_headers or {}).items():
            self._section_headers[section] = tuple(v.strip().lower() for v in variations)

        # Stable sort keeps registration order among equal lengths
        self._multi_word.sort(key=len, reverse=True)

        self._multi_word_view = tuple(self._multi_word)
        self._section_view = MappingProxyType(self._section_headers)
        self._category_view = MappingProxyType(self._categories)

    @classmethod
    def from_dict(cls, data: Mapping) -> "KeywordCatalog":
        return cls(
            skill_categories=data.get("skillCategories"),
            synonym_map=data.get("synonymMap"),
            section_headers=data.get("sectionHeaders"),
        )

    @classmethod
    def from_file(cls, path: Path | str = KEYWORDS_PATH) -> "KeywordCatalog":
        logger.info("Loading keyword catalog from %s", path)
        try:
            with open(path, encoding="utf-8") as fh:
                data = json.load(fh)
            catalog = cls.from_dict(data)
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.error("Failed to load keyword catalog: %s", e)
            raise CatalogLoadError(f"Could not load {path}: {e}") from e
        logger.info(
            "Keyword catalog loaded: %d skills, %d synonym groups, %d section types",
            len(catalog._display_forms),
            len(catalog._canonical_forms),
            len(catalog._section_headers),
        )
        return catalog

    def _register(self, skill: str) -> None:
        lower = skill.lower()
        existing = self._display_forms.get(lower)
        if existing is None:
            self._display_forms[lower] = skill
        elif skill != lower and existing == existing.lower():
            # A cased form upgrades an all-lowercase registration
            self._display_forms[lower] = skill

        if _is_multi_word(skill) and lower not in self._multi_word:
            self._multi_word.append(lower)

    # --- lookups ---

    def is_known_skill(self, text: str) -> bool:
        return text.lower() in self._display_forms

    def canonical_of(self, text: str) -> str | None:
        """Resolve any alias to its canonical skill, or None when unknown."""
        lower = text.lower()
        canonical = self._synonym_to_canonical.get(lower)
        if canonical is not None:
            return canonical
        return self._display_forms.get(lower)

    def display_form_of(self, text: str) -> str | None:
        """Registered casing for this exact alias, without synonym resolution."""
        return self._display_forms.get(text.lower())

    def all_forms_of(self, canonical: str) -> frozenset[str]:
        forms = self._canonical_forms.get(canonical)
        if forms is not None:
            return frozenset(forms)
        resolved = self._synonym_to_canonical.get(canonical.lower())
        if resolved is not None and resolved in self._canonical_forms:
            return frozenset(self._canonical_forms[resolved])
        return frozenset({canonical.lower()})

    def multi_word_skills(self) -> tuple[str, ...]:
        return self._multi_word_view

    def section_headers(self) -> Mapping[str, tuple[str, ...]]:
        return self._section_view

    def required_sections(self) -> tuple[str, ...]:
        return tuple(self._section_headers)

    def skill_categories(self) -> Mapping[str, tuple[str, ...]]:
        return self._category_view

    def aliases(self) -> frozenset[str]:
        return frozenset(self._display_forms)


@lru_cache(maxsize=1)
def get_catalog() -> KeywordCatalog:
    return KeywordCatalog.from_file()
