"""
File-backed scoring configuration supply

Reads per-team ``ScoringConfig`` and rule lists from the scoring rules YAML
document. This sits outside the engine's never-raise boundary: unknown teams
and broken files raise ``NotFoundError`` / ``ConfigurationError``.
"""

import os
import threading
from pathlib import Path
from typing import Any, List, Optional

from core.exceptions import ConfigurationError, NotFoundError
from core.logging import get_logger

from .engine import ScoringEngine, get_engine
from .models import EvaluationResult
from .rules_schema import ScoringConfig, ScoringRule, ScoringRulesDocument, load_rules_document, resolve_rules_path

logger = get_logger(__name__, domain="lead_scoring")


class FileScoringSource:
    """
    Serves team configuration snapshots from a YAML file

    The loaded document is swapped atomically; readers always see either the
    previous or the new snapshot, never a partially loaded one.
    """

    def __init__(self, path: Optional[os.PathLike | str] = None, autoload: bool = True):
        self.path = Path(path) if path is not None else resolve_rules_path()
        self._document: Optional[ScoringRulesDocument] = None
        self._lock = threading.Lock()
        if autoload:
            self.load()

    def load(self) -> ScoringRulesDocument:
        """Load (or reload) the document; the previous snapshot survives a failure"""
        document = load_rules_document(self.path)
        with self._lock:
            self._document = document
        logger.info(
            "Scoring rules loaded",
            extra={"path": str(self.path), "teams": len(document.teams), "document_version": document.version},
        )
        return document

    @property
    def document(self) -> ScoringRulesDocument:
        with self._lock:
            document = self._document
        if document is None:
            raise ConfigurationError(f"Scoring rules not loaded from {self.path}", setting="scoring_rules_path")
        return document

    def team_ids(self) -> List[str]:
        return sorted(self.document.teams)

    def _team(self, team_id: Any):
        team = self.document.teams.get(str(team_id))
        if team is None:
            raise NotFoundError("Team scoring configuration", team_id)
        return team

    def get_config(self, team_id: Any) -> ScoringConfig:
        return self._team(team_id).config

    def get_rules(self, team_id: Any) -> List[ScoringRule]:
        """Full rule list for a team, disabled rules included, in file order"""
        return list(self._team(team_id).rules)

    def evaluate(self, team_id: Any, lead: Any, engine: Optional[ScoringEngine] = None) -> EvaluationResult:
        """Score a lead with the team's current configuration and rules"""
        team = self._team(team_id)
        return (engine or get_engine()).evaluate(lead, team.config, team.rules)
