"""Industry-indexed resume content: summary templates, action verbs,
certifications, degree tables and section writing rules."""

import copy
import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from services.keyword_catalog import RESOURCE_DIR

logger = logging.getLogger(__name__)

CONTENT_PATH = RESOURCE_DIR / "ats_resume_content.json"


class ContentLoadError(RuntimeError):
    """Raised when the content document cannot be read or parsed."""


def _at(node: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _strings(node: Any) -> tuple[str, ...]:
    if not isinstance(node, list):
        return ()
    return tuple(str(item) for item in node)


class ContentLibrary:
    def __init__(self, content: Mapping[str, Any]):
        if not isinstance(content, Mapping):
            raise ContentLoadError("Content document must be a JSON object")
        self._content = copy.deepcopy(dict(content))

    @classmethod
    def from_file(cls, path: Path | str = CONTENT_PATH) -> "ContentLibrary":
        logger.info("Loading resume content library from %s", path)
        try:
            with open(path, encoding="utf-8") as fh:
                return cls(json.load(fh))
        except (OSError, ValueError) as e:
            logger.error("Failed to load content library: %s", e)
            raise ContentLoadError(f"Could not load {path}: {e}") from e

    def summary_templates(self, industry: str, is_fresher: bool) -> tuple[str, ...]:
        level = "fresher" if is_fresher else "experienced"
        return _strings(_at(self._content, "summaryTemplates", industry, level))

    def bullet_templates(self, industry: str, is_fresher: bool) -> tuple[str, ...]:
        kind = "fresher_projects" if is_fresher else "experienced_work"
        return _strings(_at(self._content, "bulletTemplates", industry, kind))

    def action_verb_groups(self, industry: str) -> Mapping[str, tuple[str, ...]]:
        groups = _at(self._content, "actionVerbsByIndustry", industry)
        if not isinstance(groups, dict):
            return MappingProxyType({})
        return MappingProxyType({name: _strings(verbs) for name, verbs in groups.items()})

    def action_verbs(self, industry: str) -> tuple[str, ...]:
        """All verbs for an industry, flattened in group order."""
        verbs: list[str] = []
        for group in self.action_verb_groups(industry).values():
            verbs.extend(group)
        return tuple(verbs)

    def certifications(self, industry: str) -> tuple[str, ...]:
        return _strings(_at(self._content, "certificationsByIndustry", industry))

    def degree_abbreviations(self) -> Mapping[str, str]:
        table = _at(self._content, "educationFormats", "degreeAbbreviations")
        if not isinstance(table, dict):
            return MappingProxyType({})
        return MappingProxyType({k: str(v) for k, v in table.items()})

    def full_degree_name(self, abbreviation: str) -> str:
        return self.degree_abbreviations().get(abbreviation, abbreviation)

    def relevant_coursework(self, industry: str) -> tuple[str, ...]:
        return _strings(_at(self._content, "educationFormats", "relevantCoursework", industry))

    def banned_summary_phrases(self) -> tuple[str, ...]:
        return _strings(_at(self._content, "sectionContentRules", "summary", "neverUse"))

    def summary_start_words(self) -> tuple[str, ...]:
        return _strings(_at(self._content, "sectionContentRules", "summary", "startWith"))

    def banned_bullet_starters(self) -> tuple[str, ...]:
        starters = _at(self._content, "sectionContentRules", "experience", "neverStartWith")
        return tuple(s.lower() for s in _strings(starters))

    def culturally_specific_fields(self) -> Mapping[str, str]:
        """Personal fields to strip, mapped to the reason shown to the user."""
        items = _at(self._content, "indianResumeSpecifics")
        if not isinstance(items, dict):
            return MappingProxyType({})
        return MappingProxyType({k: str(v) for k, v in items.items()})


@lru_cache(maxsize=1)
def get_content_library() -> ContentLibrary:
    return ContentLibrary.from_file()
