"""
Procès-verbal de délibération : résultats par étudiant, tableau, classement
et statistiques du jury.

Tout est recalculé à partir des notes de la session à chaque appel.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from deliberation.calculator import Calculator
from deliberation.models import (
    DECISIONS_ADMIS,
    SEMESTRES,
    CodeDecision,
    NoteECUE,
    ResultatEtudiant,
)

COLONNES_IDENTITE = ["Matricule", "Nom", "Prénom"]
COLONNES_SYNTHESE = ["Moyenne", "Crédits", "Décision", "Mention", "Rang"]


def _code(decision):
    return decision.value if decision is not None else None


def notes_ue(session: Dict[str, Any], matricule: str, ue: Dict[str, Any]) -> List[NoteECUE]:
    notes = session.get("notes", {}).get(matricule, {})
    return [NoteECUE(note=notes.get(ecue["code"]), credits=ecue["credits"]) for ecue in ue["ecues"]]


def semestres_session(session: Dict[str, Any]) -> List[str]:
    presents = {ue.get("semestre", "S1") for ue in session["ues"]}
    return [s for s in SEMESTRES if s in presents]


def resultats_etudiant(session: Dict[str, Any], matricule: str) -> ResultatEtudiant:
    """UE -> semestres -> année -> décision finale pour un étudiant."""
    ues = {}
    par_semestre = {s: [] for s in SEMESTRES}
    for ue in session["ues"]:
        resultat = Calculator.calculer_moyenne_ue(notes_ue(session, matricule, ue))
        ues[ue["code"]] = resultat
        par_semestre[ue.get("semestre", "S1")].append(resultat)

    semestres = {s: Calculator.calculer_moyenne_semestre(r) for s, r in par_semestre.items() if r}

    s1, s2 = semestres.get("S1"), semestres.get("S2")
    moyenne_annuelle = Calculator.calculer_moyenne_annuelle(
        s1.moyenne if s1 else None,
        s2.moyenne if s2 else None,
    )
    credits_valides = sum(s.credits_valides for s in semestres.values())
    credits_totaux = sum(s.credits_totaux for s in semestres.values())

    return ResultatEtudiant(
        matricule=matricule,
        ues=ues,
        semestres=semestres,
        moyenne_annuelle=moyenne_annuelle,
        credits_valides=credits_valides,
        credits_totaux=credits_totaux,
        finale=Calculator.decision_finale(moyenne_annuelle, credits_valides, credits_totaux),
    )


def colonnes_tableau(session: Dict[str, Any]) -> List[str]:
    colonnes = list(COLONNES_IDENTITE)
    for ue in session["ues"]:
        colonnes += [f"{ue['code']} Moy", f"{ue['code']} Déc"]
    for s in semestres_session(session):
        colonnes += [f"{s} Moy", f"{s} Crédits", f"{s} Déc"]
    return colonnes + COLONNES_SYNTHESE


def classement(moyennes: pd.Series) -> pd.Series:
    """Rang par moyenne décroissante ; ex aequo au meilleur rang, pas de rang sans moyenne."""
    return pd.to_numeric(moyennes, errors="coerce").rank(method="min", ascending=False).astype("Int64")


def tableau_deliberation(session: Dict[str, Any]) -> pd.DataFrame:
    semestres = semestres_session(session)
    lignes = []
    for etudiant in session["etudiants"]:
        res = resultats_etudiant(session, etudiant["matricule"])
        ligne = {
            "Matricule": etudiant["matricule"],
            "Nom": etudiant["nom"],
            "Prénom": etudiant["prenom"],
        }
        for ue in session["ues"]:
            r = res.ues[ue["code"]]
            ligne[f"{ue['code']} Moy"] = r.moyenne
            ligne[f"{ue['code']} Déc"] = _code(r.decision)
        for s in semestres:
            r = res.semestres[s]
            ligne[f"{s} Moy"] = r.moyenne
            ligne[f"{s} Crédits"] = f"{r.credits_valides}/{r.credits_totaux}"
            ligne[f"{s} Déc"] = _code(r.decision)
        ligne["Moyenne"] = res.moyenne_annuelle
        ligne["Crédits"] = f"{res.credits_valides}/{res.credits_totaux}"
        ligne["Décision"] = _code(res.finale.decision)
        ligne["Mention"] = res.finale.mention
        lignes.append(ligne)

    df = pd.DataFrame(lignes, columns=colonnes_tableau(session))
    if not df.empty:
        df["Rang"] = classement(df["Moyenne"])
    return df


def statistiques(tableau: pd.DataFrame) -> Dict[str, Any]:
    total = len(tableau)
    decisions = tableau["Décision"] if total else pd.Series(dtype=object)
    admis = int(decisions.isin([d.value for d in DECISIONS_ADMIS]).sum())

    return {
        "total": total,
        "admis": admis,
        "ajournes": int((decisions == CodeDecision.AJOURNE.value).sum()),
        "distinctions": int((decisions == CodeDecision.DISTINCTION.value).sum()),
        "satisfactions": int((decisions == CodeDecision.SATISFACTION.value).sum()),
        "sans_note": int(decisions.isna().sum()),
        "taux_reussite": round(admis / total * 100, 1) if total else 0.0,
    }
