from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

SEMESTRES = ("S1", "S2")


class DecisionUE(str, Enum):
    VALIDEE = "UV"
    NON_VALIDEE = "UNV"


class DecisionSemestre(str, Enum):
    VALIDE = "SV"
    NON_VALIDE = "SNV"


class CodeDecision(str, Enum):
    DISTINCTION = "D"
    SATISFACTION = "S"
    PASSABLE = "P"
    REUSSI = "R"
    ADMIS_AVEC_RATTRAPAGE = "AUE"
    AJOURNE = "A"


DECISIONS_ADMIS = (
    CodeDecision.DISTINCTION,
    CodeDecision.SATISFACTION,
    CodeDecision.PASSABLE,
    CodeDecision.REUSSI,
    CodeDecision.ADMIS_AVEC_RATTRAPAGE,
)

DECISION_LABELS: Dict[str, Dict[str, str]] = {
    "UV": {"label": "Unité Validée", "color": "#2ecc71"},
    "UNV": {"label": "Unité Non Validée", "color": "#e74c3c"},
    "SV": {"label": "Semestre Validé", "color": "#2ecc71"},
    "SNV": {"label": "Semestre Non Validé", "color": "#e74c3c"},
    "D": {"label": "Distinction", "color": "#1f5fbf"},
    "S": {"label": "Satisfaction", "color": "#3498db"},
    "P": {"label": "Passable", "color": "#2ecc71"},
    "R": {"label": "Réussi", "color": "#27ae60"},
    "A": {"label": "Ajourné", "color": "#e74c3c"},
    "AUE": {"label": "Admis avec UE à rattraper", "color": "#ffa425"},
}


@dataclass(frozen=True)
class NoteECUE:
    """Contribution d'une ECUE pour un étudiant. ``note=None`` : pas de note saisie."""

    note: Optional[float]
    credits: int


@dataclass(frozen=True)
class ResultatUE:
    moyenne: Optional[float]
    credits: int
    credits_valides: int
    decision: Optional[DecisionUE]


@dataclass(frozen=True)
class ResultatSemestre:
    moyenne: Optional[float]
    credits_valides: int
    credits_totaux: int
    decision: Optional[DecisionSemestre]


@dataclass(frozen=True)
class DecisionFinale:
    decision: Optional[CodeDecision]
    mention: Optional[str]


@dataclass(frozen=True)
class ResultatEtudiant:
    """Résultats complets d'un étudiant pour une session."""

    matricule: str
    ues: Dict[str, ResultatUE] = field(default_factory=dict)
    semestres: Dict[str, ResultatSemestre] = field(default_factory=dict)
    moyenne_annuelle: Optional[float] = None
    credits_valides: int = 0
    credits_totaux: int = 0
    finale: DecisionFinale = DecisionFinale(None, None)
