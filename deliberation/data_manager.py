import streamlit as st
import pandas as pd
import glob
import importlib.util
import json
import logging
import math
import numbers
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from deliberation.exceptions import ElementDuplique, ElementIntrouvable, NoteInvalide, ValidationError
from deliberation.models import SEMESTRES
from deliberation.settings import settings

logger = logging.getLogger(__name__)

CHAMPS_SESSION = ("annee_academique", "semestre", "filiere", "niveau", "date_deliberation")
COLONNES_IMPORT = ("matricule", "nom", "prenom")
LIBELLES_IMPORT = {"matricule": "Matricule", "nom": "Nom", "prenom": "Prénom"}
NOTE_MIN, NOTE_MAX = 0.0, 20.0


@dataclass
class RapportImport:
    acceptes: List[Dict[str, Any]] = field(default_factory=list)
    rejets: List[Dict[str, Any]] = field(default_factory=list)


def _texte(valeur):
    if valeur is None or (isinstance(valeur, float) and math.isnan(valeur)):
        return ""
    return str(valeur).strip()


def _texte_requis(valeur, libelle):
    texte = _texte(valeur)
    if not texte:
        raise ValidationError(f"{libelle} manquant", code="champ_manquant", details={"champ": libelle})
    return texte


def _semestre(valeur):
    if valeur is None or valeur == "":
        return "S1"
    texte = str(valeur).strip().upper()
    if texte in ("1", "2"):
        texte = "S" + texte
    if texte not in SEMESTRES:
        raise ValidationError(f"Semestre inconnu : {valeur!r}", code="semestre_invalide")
    return texte


class DataManager:
    @staticmethod
    def session_vide(**infos):
        """Session sans UE, sans étudiant et sans note."""
        return {
            "session": {champ: infos.get(champ) for champ in CHAMPS_SESSION},
            "ues": [],
            "etudiants": [],
            "notes": {},
        }

    @staticmethod
    def init_state():
        """Initialise la session si elle n'existe pas."""
        if "deliberation" not in st.session_state:
            st.session_state.deliberation = DataManager.session_vide()

    # ---------- Validation ----------

    @staticmethod
    def valider_note(valeur) -> Optional[float]:
        """Note sur 20 ou None si aucune note n'est saisie.

        Accepte la virgule décimale. Lève NoteInvalide hors de [0, 20].
        """
        if valeur is None or valeur is pd.NA:
            return None
        if isinstance(valeur, str):
            texte = valeur.strip().replace(",", ".")
            if not texte:
                return None
            try:
                valeur = float(texte)
            except ValueError as exc:
                raise NoteInvalide(
                    f"Note non numérique : {valeur!r}", code="note_non_numerique", details={"valeur": valeur}
                ) from exc
        if isinstance(valeur, bool) or not isinstance(valeur, numbers.Real):
            raise NoteInvalide(f"Note non numérique : {valeur!r}", code="note_non_numerique", details={"valeur": valeur})

        note = float(valeur)
        if math.isnan(note):
            return None
        if not NOTE_MIN <= note <= NOTE_MAX:
            raise NoteInvalide("La note doit être entre 0 et 20", code="note_hors_bornes", details={"valeur": note})
        return note

    @staticmethod
    def valider_credits(valeur) -> int:
        if isinstance(valeur, bool):
            raise ValidationError(f"Crédits invalides : {valeur!r}", code="credits_invalides")
        try:
            credits = float(valeur)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Crédits invalides : {valeur!r}", code="credits_invalides") from exc
        if not math.isfinite(credits) or credits < 1 or credits != int(credits):
            raise ValidationError(
                "Les crédits doivent être un entier supérieur ou égal à 1", code="credits_invalides", details={"valeur": valeur}
            )
        return int(credits)

    # ---------- Maquette & étudiants ----------

    @staticmethod
    def trouver_ue(session, code):
        for ue in session["ues"]:
            if ue["code"] == code:
                return ue
        raise ElementIntrouvable(f"UE inconnue : {code}", code="ue_introuvable")

    @staticmethod
    def trouver_ecue(session, code):
        for ue in session["ues"]:
            for ecue in ue["ecues"]:
                if ecue["code"] == code:
                    return ue, ecue
        raise ElementIntrouvable(f"ECUE inconnue : {code}", code="ecue_introuvable")

    @staticmethod
    def trouver_etudiant(session, matricule):
        for etudiant in session["etudiants"]:
            if etudiant["matricule"] == matricule:
                return etudiant
        raise ElementIntrouvable(f"Étudiant inconnu : {matricule}", code="etudiant_introuvable")

    @staticmethod
    def ajouter_ue(session, code, nom=None, semestre="S1"):
        code = _texte_requis(code, "Code UE")
        if any(ue["code"] == code for ue in session["ues"]):
            raise ElementDuplique(f"L'UE {code} existe déjà", code="ue_dupliquee")
        ue = {"code": code, "nom": _texte(nom) or code, "semestre": _semestre(semestre), "ecues": []}
        session["ues"].append(ue)
        return ue

    @staticmethod
    def ajouter_ecue(session, ue_code, code, nom=None, credits=1):
        ue = DataManager.trouver_ue(session, ue_code)
        code = _texte_requis(code, "Code ECUE")
        if any(e["code"] == code for u in session["ues"] for e in u["ecues"]):
            raise ElementDuplique(f"L'ECUE {code} existe déjà", code="ecue_dupliquee")
        ecue = {"code": code, "nom": _texte(nom) or code, "credits": DataManager.valider_credits(credits)}
        ue["ecues"].append(ecue)
        return ecue

    @staticmethod
    def ajouter_etudiant(session, matricule, nom, prenom, date_naissance=None, lieu_naissance=None):
        etudiant = {
            "matricule": _texte_requis(matricule, "Matricule"),
            "nom": _texte_requis(nom, "Nom"),
            "prenom": _texte_requis(prenom, "Prénom"),
            "date_naissance": _texte(date_naissance) or None,
            "lieu_naissance": _texte(lieu_naissance) or None,
        }
        if any(e["matricule"] == etudiant["matricule"] for e in session["etudiants"]):
            raise ElementDuplique(f"Le matricule {etudiant['matricule']} existe déjà", code="matricule_duplique")
        session["etudiants"].append(etudiant)
        session["notes"].setdefault(etudiant["matricule"], {})
        return etudiant

    @staticmethod
    def supprimer_etudiant(session, matricule):
        etudiant = DataManager.trouver_etudiant(session, matricule)
        session["etudiants"].remove(etudiant)
        session["notes"].pop(matricule, None)
        logger.info("Étudiant %s supprimé", matricule)

    @staticmethod
    def supprimer_ecue(session, code):
        """Retire l'ECUE et les notes saisies pour elle."""
        ue, ecue = DataManager.trouver_ecue(session, code)
        ue["ecues"].remove(ecue)
        for notes in session["notes"].values():
            notes.pop(code, None)
        logger.info("ECUE %s supprimée de l'UE %s", code, ue["code"])

    @staticmethod
    def supprimer_ue(session, code):
        """Retire l'UE, ses ECUE et toutes les notes associées."""
        ue = DataManager.trouver_ue(session, code)
        for ecue in list(ue["ecues"]):
            DataManager.supprimer_ecue(session, ecue["code"])
        session["ues"].remove(ue)
        logger.info("UE %s supprimée", code)

    @staticmethod
    def enregistrer_note(session, matricule, ecue_code, valeur):
        """Valide puis enregistre la note d'un étudiant pour une ECUE."""
        DataManager.trouver_etudiant(session, matricule)
        DataManager.trouver_ecue(session, ecue_code)
        note = DataManager.valider_note(valeur)
        session["notes"].setdefault(matricule, {})[ecue_code] = note
        return note

    # ---------- Chargement / sauvegarde ----------

    @staticmethod
    def normaliser_donnees(data_raw):
        """Nettoie et valide des données brutes (fichier local ou JSON)."""
        data = DataManager.session_vide(**(data_raw.get("session") or {}))

        for ue in data_raw.get("ues", []):
            ue_code = DataManager.ajouter_ue(data, ue.get("code"), ue.get("nom"), ue.get("semestre"))["code"]
            for e in ue.get("ecues", []):
                if isinstance(e, (list, tuple)) and len(e) >= 3:
                    code, nom, credits = e[0], e[1], e[2]
                elif isinstance(e, dict):
                    code, nom, credits = e.get("code"), e.get("nom"), e.get("credits")
                else:
                    raise ValidationError(f"ECUE illisible dans l'UE {ue_code} : {e!r}", code="ecue_illisible")
                DataManager.ajouter_ecue(data, ue_code, code, nom, credits)

        for etudiant in data_raw.get("etudiants", []):
            DataManager.ajouter_etudiant(
                data,
                etudiant.get("matricule"),
                etudiant.get("nom"),
                etudiant.get("prenom"),
                etudiant.get("date_naissance"),
                etudiant.get("lieu_naissance"),
            )

        for matricule, notes in (data_raw.get("notes") or {}).items():
            for ecue_code, valeur in notes.items():
                DataManager.enregistrer_note(data, matricule, ecue_code, valeur)

        return data

    @staticmethod
    def exporter_json(session) -> str:
        return json.dumps(session, indent=4, ensure_ascii=False)

    @staticmethod
    def importer_json(texte):
        try:
            data_raw = json.loads(texte)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"JSON illisible : {exc.msg}", code="json_invalide") from exc
        if not isinstance(data_raw, dict):
            raise ValidationError("Le JSON doit contenir un objet session", code="json_invalide")
        return DataManager.normaliser_donnees(data_raw)

    @staticmethod
    def scanner_fichiers_locaux(dossier=None, motif=None):
        """Trouve les variables ue_data_* des fichiers de données locaux."""
        dossier = dossier or settings.datasets_dir
        motif = motif or settings.dataset_pattern
        datasets = {}
        for filepath in sorted(glob.glob(os.path.join(dossier, motif))):
            try:
                spec = importlib.util.spec_from_file_location("module", filepath)
                module = importlib.util.module_from_spec(spec)
                spec.loader.exec_module(module)
            except Exception:
                logger.exception("Erreur chargement %s", filepath)
                continue
            vars_module = {k: v for k, v in vars(module).items() if k.startswith("ue_data_")}
            if vars_module:
                datasets[os.path.basename(filepath)] = vars_module
        return datasets

    # ---------- Import des étudiants ----------

    @staticmethod
    def lire_fichier_etudiants(fichier):
        """Lit un fichier d'étudiants : Excel (.xlsx, .xls) ou CSV (séparateur détecté)."""
        nom = str(getattr(fichier, "name", fichier)).lower()
        if nom.endswith((".xlsx", ".xls")):
            return pd.read_excel(fichier, dtype=str, keep_default_na=False)
        return pd.read_csv(fichier, sep=None, engine="python", dtype=str, keep_default_na=False)

    @staticmethod
    def importer_etudiants(session, df) -> RapportImport:
        """Ajoute les étudiants valides ; les lignes fautives sont rapportées, pas bloquantes."""
        df = df.rename(columns=lambda c: str(c).strip().lower().replace("é", "e"))
        manquantes = [c for c in COLONNES_IMPORT if c not in df.columns]
        if manquantes:
            raise ValidationError(
                f"Colonnes manquantes : {', '.join(manquantes)}",
                code="colonnes_manquantes",
                details={"colonnes": manquantes},
            )

        rapport = RapportImport()
        # ligne 1 = en-tête
        for numero, ligne in enumerate(df.to_dict("records"), start=2):
            valeurs = {c: _texte(ligne.get(c)) for c in COLONNES_IMPORT}
            if not any(valeurs.values()):
                continue

            erreurs = [f"{LIBELLES_IMPORT[c]} manquant" for c in COLONNES_IMPORT if not valeurs[c]]
            if erreurs:
                rapport.rejets.append({"ligne": numero, "matricule": valeurs["matricule"], "erreur": ", ".join(erreurs)})
                continue

            try:
                etudiant = DataManager.ajouter_etudiant(
                    session,
                    valeurs["matricule"],
                    valeurs["nom"],
                    valeurs["prenom"],
                    ligne.get("date_naissance"),
                    ligne.get("lieu_naissance"),
                )
            except ElementDuplique as exc:
                rapport.rejets.append({"ligne": numero, "matricule": valeurs["matricule"], "erreur": exc.message})
                continue
            rapport.acceptes.append(etudiant)

        logger.info("Import étudiants : %d acceptés, %d rejetés", len(rapport.acceptes), len(rapport.rejets))
        return rapport
