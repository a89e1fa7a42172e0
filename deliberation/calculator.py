from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from deliberation.models import (
    CodeDecision,
    DecisionFinale,
    DecisionSemestre,
    DecisionUE,
    NoteECUE,
    ResultatSemestre,
    ResultatUE,
)

SEUIL_VALIDATION = 10

# (seuil, code, mention) pour un étudiant ayant validé tous ses crédits
PALIERS_MENTION = [
    (16, CodeDecision.DISTINCTION, "Distinction"),
    (14, CodeDecision.SATISFACTION, "Satisfaction"),
    (12, CodeDecision.PASSABLE, "Passable"),
    (10, CodeDecision.REUSSI, "Réussi"),
]
MENTION_RATTRAPAGE = "Admis avec UE à rattraper"
MENTION_AJOURNE = "Ajourné"


def arrondi(valeur: float) -> float:
    # Demi vers le haut sur la valeur binaire exacte
    return float(Decimal(valeur).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class Calculator:
    @staticmethod
    def calculer_moyenne_ue(notes: Iterable[NoteECUE]) -> ResultatUE:
        """Moyenne pondérée d'une UE sur les ECUE notées.

        Les ECUE sans note sont ignorées pour la moyenne mais comptent dans les
        crédits de l'UE, y compris dans les crédits acquis si l'UE est validée.
        """
        notes = list(notes)
        credits_ue = sum(n.credits for n in notes)
        notees = [n for n in notes if n.note is not None]

        den = sum(n.credits for n in notees)
        if not notees or den == 0:
            return ResultatUE(moyenne=None, credits=credits_ue, credits_valides=0, decision=None)

        num = sum(n.note * n.credits for n in notees)
        moyenne = arrondi(num / den)
        decision = DecisionUE.VALIDEE if moyenne >= SEUIL_VALIDATION else DecisionUE.NON_VALIDEE
        credits_valides = credits_ue if decision is DecisionUE.VALIDEE else 0

        return ResultatUE(
            moyenne=moyenne,
            credits=credits_ue,
            credits_valides=credits_valides,
            decision=decision,
        )

    @staticmethod
    def calculer_moyenne_semestre(resultats_ue: Iterable[ResultatUE]) -> ResultatSemestre:
        """Moyenne du semestre pondérée par les crédits nominaux des UE notées."""
        resultats_ue = list(resultats_ue)
        credits_totaux = sum(r.credits for r in resultats_ue)
        avec_moyenne = [r for r in resultats_ue if r.moyenne is not None]

        den = sum(r.credits for r in avec_moyenne)
        if not avec_moyenne or den == 0:
            return ResultatSemestre(
                moyenne=None, credits_valides=0, credits_totaux=credits_totaux, decision=None
            )

        num = sum(r.moyenne * r.credits for r in avec_moyenne)
        moyenne = arrondi(num / den)
        # Crédits acquis déjà conditionnés par la décision de chaque UE
        credits_valides = sum(r.credits_valides for r in resultats_ue)
        decision = (
            DecisionSemestre.VALIDE if moyenne >= SEUIL_VALIDATION else DecisionSemestre.NON_VALIDE
        )

        return ResultatSemestre(
            moyenne=moyenne,
            credits_valides=credits_valides,
            credits_totaux=credits_totaux,
            decision=decision,
        )

    @staticmethod
    def calculer_moyenne_annuelle(moyenne_s1: Optional[float], moyenne_s2: Optional[float]) -> Optional[float]:
        if moyenne_s1 is None and moyenne_s2 is None:
            return None
        if moyenne_s1 is None:
            return moyenne_s2
        if moyenne_s2 is None:
            return moyenne_s1
        return arrondi((moyenne_s1 + moyenne_s2) / 2)

    @staticmethod
    def decision_finale(moyenne: Optional[float], credits_valides: int, credits_totaux: int) -> DecisionFinale:
        """Décision du jury et mention. Les seuils sont inclusifs."""
        if moyenne is None:
            return DecisionFinale(decision=None, mention=None)

        tous_credits = credits_valides >= credits_totaux
        if tous_credits:
            for seuil, code, mention in PALIERS_MENTION:
                if moyenne >= seuil:
                    return DecisionFinale(decision=code, mention=mention)

        if moyenne >= SEUIL_VALIDATION and not tous_credits:
            return DecisionFinale(decision=CodeDecision.ADMIS_AVEC_RATTRAPAGE, mention=MENTION_RATTRAPAGE)

        return DecisionFinale(decision=CodeDecision.AJOURNE, mention=MENTION_AJOURNE)
