"""Expertise matching strategies shared by generation and optimization."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Sequence, Tuple

from batch_scheduler.config import DEFAULT_SYNONYM_GROUPS
from batch_scheduler.domain.models import Trainer


class ExpertiseMatcher(ABC):
    """
    Abstract base class for expertise matching.

    A matcher decides whether a trainer can teach a subject identified by a
    label. Generation passes the subject's display name; the optimizer only
    has the subject id.
    """

    strategy: str | None = None  # Override in subclasses

    @abstractmethod
    def matches(self, trainer: Trainer, subject_label: str) -> bool:
        """Return True when one of the trainer's expertise tags covers ``subject_label``."""
        pass

    def get_strategy_name(self) -> str:
        return self.strategy or "UNKNOWN"


class SynonymExpertiseMatcher(ExpertiseMatcher):
    """Case-insensitive equality or substring match, plus a fixed synonym table."""

    strategy = "synonym"

    def __init__(self, synonym_groups: Iterable[Sequence[str]] = DEFAULT_SYNONYM_GROUPS):
        self.synonym_groups: Tuple[frozenset, ...] = tuple(
            frozenset(term.lower() for term in group) for group in synonym_groups
        )

    def _synonyms(self, a: str, b: str) -> bool:
        return any(a in group and b in group for group in self.synonym_groups)

    def matches(self, trainer: Trainer, subject_label: str) -> bool:
        subject = subject_label.strip().lower()
        if not subject:
            return False
        for tag in trainer.expertise:
            tag = tag.strip().lower()
            if not tag:
                continue
            if tag == subject or tag in subject or subject in tag:
                return True
            if self._synonyms(tag, subject):
                return True
        return False


class SubstringExpertiseMatcher(ExpertiseMatcher):
    """Looser check: some expertise tag contains the subject label."""

    strategy = "substring"

    def matches(self, trainer: Trainer, subject_label: str) -> bool:
        subject = subject_label.strip().lower()
        if not subject:
            return False
        return any(subject in tag.lower() for tag in trainer.expertise)


def matcher_for(strategy: str, cfg=None) -> ExpertiseMatcher:
    """Build the matcher named by a configuration value."""
    strategy = (strategy or "").lower()
    if strategy == "synonym":
        groups = cfg.synonym_groups if cfg is not None else DEFAULT_SYNONYM_GROUPS
        return SynonymExpertiseMatcher(groups)
    if strategy == "substring":
        return SubstringExpertiseMatcher()
    raise ValueError(f"Unknown expertise strategy: {strategy!r}")
