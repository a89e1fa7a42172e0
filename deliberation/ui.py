import streamlit as st
import pandas as pd
import plotly.express as px
import logging
from datetime import date

from deliberation.data_manager import DataManager
from deliberation.exceptions import DeliberationError, NoteInvalide
from deliberation.models import DECISION_LABELS, SEMESTRES
from deliberation.proces_verbal import resultats_etudiant, statistiques, tableau_deliberation
from deliberation.settings import settings
from deliberation.utils import badge_decision, format_note

logger = logging.getLogger(__name__)

CHOIX_SEMESTRE_SESSION = ["S1", "S2", "Annuel"]


def _data():
    return st.session_state.deliberation


def ui_sidebar():
    DataManager.init_state()
    data = _data()
    with st.sidebar:
        st.header("⚙️ Session")
        infos = data["session"]
        infos["annee_academique"] = st.text_input("Année académique", infos.get("annee_academique") or "")
        sem = infos.get("semestre")
        infos["semestre"] = st.selectbox(
            "Semestre", CHOIX_SEMESTRE_SESSION,
            index=CHOIX_SEMESTRE_SESSION.index(sem) if sem in CHOIX_SEMESTRE_SESSION else 0,
        )
        infos["filiere"] = st.text_input("Filière", infos.get("filiere") or "")
        infos["niveau"] = st.text_input("Niveau", infos.get("niveau") or "")
        jour = infos.get("date_deliberation")
        choisi = st.date_input("Date de délibération", value=date.fromisoformat(jour) if jour else None)
        infos["date_deliberation"] = choisi.isoformat() if choisi else None

        st.divider()

        # Gestion Fichiers Locaux
        datasets = DataManager.scanner_fichiers_locaux()
        if datasets:
            f_choisi = st.selectbox("Fichier", list(datasets.keys()))
            if f_choisi:
                d_choisi = st.selectbox("Dataset", list(datasets[f_choisi].keys()))
                if st.button("Charger"):
                    try:
                        st.session_state.deliberation = DataManager.normaliser_donnees(datasets[f_choisi][d_choisi])
                    except DeliberationError as exc:
                        st.error(f"{d_choisi} : {exc.message}")
                    else:
                        st.rerun()
        else:
            st.caption(f"Aucun fichier '{settings.dataset_pattern}' trouvé.")

        st.divider()
        st.download_button("💾 Export JSON", DataManager.exporter_json(data), settings.export_filename)
        uploaded = st.file_uploader("📂 Import JSON", type="json")
        if uploaded and st.button("Importer le JSON"):
            try:
                st.session_state.deliberation = DataManager.importer_json(uploaded.getvalue().decode("utf-8"))
            except DeliberationError as exc:
                st.error(exc.message)
            else:
                st.rerun()

        if st.button("🗑️ Reset", type="primary"):
            st.session_state.deliberation = DataManager.session_vide()
            st.rerun()


def ui_dashboard():
    st.header("📊 Tableau de bord")
    data = _data()
    if not data["etudiants"] or not data["ues"]:
        st.info("Ajoutez des UE et des étudiants ou chargez un fichier.")
        return

    tableau = tableau_deliberation(data)
    stats = statistiques(tableau)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Étudiants", stats["total"])
    c2.metric("Admis", stats["admis"], help="Distinction, Satisfaction, Passable, Réussi et admis avec UE à rattraper")
    c3.metric("Taux de réussite", f"{stats['taux_reussite']:.1f} %")
    c4.metric("Ajournés", stats["ajournes"])

    c_dec, c_moy = st.columns(2)
    with c_dec:
        repartition = tableau["Décision"].dropna().value_counts().rename_axis("Décision").reset_index(name="Effectif")
        if not repartition.empty:
            repartition["Libellé"] = repartition["Décision"].map(lambda d: DECISION_LABELS[d]["label"])
            fig = px.pie(
                repartition, names="Libellé", values="Effectif", title="Décisions du jury",
                color="Décision", color_discrete_map={k: v["color"] for k, v in DECISION_LABELS.items()},
            )
            st.plotly_chart(fig, use_container_width=True)
    with c_moy:
        moyennes = tableau.dropna(subset=["Moyenne"])
        if not moyennes.empty:
            fig = px.histogram(moyennes, x="Moyenne", nbins=20, range_x=[0, 20], title="Distribution des moyennes")
            fig.add_vline(x=10, line_dash="dash", line_color="red")
            st.plotly_chart(fig, use_container_width=True)

    # Moyenne de promotion par UE
    ues = pd.DataFrame([
        {"UE": ue["code"], "Moyenne": tableau[f"{ue['code']} Moy"].mean(), "Semestre": ue["semestre"]}
        for ue in data["ues"]
    ]).dropna(subset=["Moyenne"])
    if not ues.empty:
        fig = px.bar(ues, x="UE", y="Moyenne", color="Semestre", text_auto=".2f",
                     color_discrete_map={"S1": "#3498db", "S2": "#9b59b6"}, title="Moyenne de promotion par UE")
        fig.add_hline(y=10, line_dash="dash")
        st.plotly_chart(fig, use_container_width=True)


def ui_maquette():
    st.header("🧱 Unités d'enseignement")
    data = _data()
    c_ue, c_ecue = st.columns(2)

    with c_ue:
        st.subheader("Ajouter UE")
        with st.form("new_ue", clear_on_submit=True):
            code = st.text_input("Code")
            nom = st.text_input("Nom")
            sem = st.radio("Semestre", list(SEMESTRES), horizontal=True)
            if st.form_submit_button("Créer"):
                try:
                    DataManager.ajouter_ue(data, code, nom, sem)
                except DeliberationError as exc:
                    st.error(exc.message)
                else:
                    st.rerun()

    with c_ecue:
        st.subheader("Ajouter ECUE")
        if not data["ues"]:
            st.caption("Créez d'abord une UE.")
        else:
            with st.form("new_ecue", clear_on_submit=True):
                ue_code = st.selectbox("UE", [ue["code"] for ue in data["ues"]])
                code = st.text_input("Code ECUE")
                nom = st.text_input("Nom ECUE")
                credits = st.number_input("Crédits", min_value=1, max_value=30, value=3, step=1)
                if st.form_submit_button("Ajouter"):
                    try:
                        DataManager.ajouter_ecue(data, ue_code, code, nom, credits)
                    except DeliberationError as exc:
                        st.error(exc.message)
                    else:
                        st.rerun()

    for ue in data["ues"]:
        total = sum(e["credits"] for e in ue["ecues"])
        with st.expander(f"{ue['code']} - {ue['nom']} ({ue['semestre']}, {total} crédits)"):
            if ue["ecues"]:
                st.dataframe(pd.DataFrame(ue["ecues"]), hide_index=True, use_container_width=True)
                c_sel, c_btn = st.columns([3, 1])
                ecue_code = c_sel.selectbox("ECUE", [e["code"] for e in ue["ecues"]], key=f"sel_ecue_{ue['code']}")
                if c_btn.button("🗑️ Supprimer l'ECUE", key=f"del_ecue_{ue['code']}"):
                    DataManager.supprimer_ecue(data, ecue_code)
                    st.rerun()
            else:
                st.caption("Aucune ECUE.")
            if st.button("🗑️ Supprimer l'UE et ses notes", key=f"del_ue_{ue['code']}", type="primary"):
                DataManager.supprimer_ue(data, ue["code"])
                st.rerun()


def ui_etudiants():
    st.header("👥 Étudiants")
    data = _data()
    c_add, c_imp = st.columns(2)

    with c_add:
        st.subheader("Ajouter")
        with st.form("new_etudiant", clear_on_submit=True):
            matricule = st.text_input("Matricule")
            nom = st.text_input("Nom")
            prenom = st.text_input("Prénom")
            if st.form_submit_button("Ajouter"):
                try:
                    DataManager.ajouter_etudiant(data, matricule, nom, prenom)
                except DeliberationError as exc:
                    st.error(exc.message)
                else:
                    st.rerun()

    with c_imp:
        st.subheader("Importer (CSV, Excel)")
        st.caption("Colonnes requises : matricule, nom, prenom.")
        fichier = st.file_uploader("Fichier CSV ou Excel", type=["csv", "xlsx", "xls"])
        if fichier and st.button("Importer"):
            try:
                rapport = DataManager.importer_etudiants(data, DataManager.lire_fichier_etudiants(fichier))
            except DeliberationError as exc:
                st.error(exc.message)
            else:
                st.success(f"{len(rapport.acceptes)} étudiant(s) importé(s)")
                if rapport.rejets:
                    st.warning(f"{len(rapport.rejets)} ligne(s) rejetée(s)")
                    st.dataframe(pd.DataFrame(rapport.rejets), hide_index=True)

    if data["etudiants"]:
        st.dataframe(pd.DataFrame(data["etudiants"]), hide_index=True, use_container_width=True)
        c_sel, c_btn = st.columns([3, 1])
        a_supprimer = c_sel.selectbox("Supprimer", [e["matricule"] for e in data["etudiants"]])
        if c_btn.button("🗑️ Supprimer"):
            DataManager.supprimer_etudiant(data, a_supprimer)
            st.rerun()


def ui_notes():
    st.header("📝 Saisie des notes")
    data = _data()
    if not data["etudiants"] or not any(ue["ecues"] for ue in data["ues"]):
        st.info("Ajoutez d'abord des étudiants et des ECUE.")
        return

    ues = [ue for ue in data["ues"] if ue["ecues"]]
    ue_code = st.selectbox("UE", [ue["code"] for ue in ues], format_func=lambda c: f"{c} - {DataManager.trouver_ue(data, c)['nom']}")
    ue = DataManager.trouver_ue(data, ue_code)

    lignes = []
    for etudiant in data["etudiants"]:
        notes = data["notes"].get(etudiant["matricule"], {})
        ligne = {"Matricule": etudiant["matricule"], "Étudiant": f"{etudiant['nom']} {etudiant['prenom']}"}
        for ecue in ue["ecues"]:
            ligne[ecue["code"]] = notes.get(ecue["code"])
        lignes.append(ligne)
    df = pd.DataFrame(lignes)
    codes = [ecue["code"] for ecue in ue["ecues"]]
    df[codes] = df[codes].astype(float)

    column_config = {
        ecue["code"]: st.column_config.NumberColumn(
            f"{ecue['code']} ({ecue['credits']} cr)", min_value=0.0, max_value=20.0, step=0.25,
            help="Laissez vide si la note n'est pas encore saisie.",
        )
        for ecue in ue["ecues"]
    }
    edited = st.data_editor(df, column_config=column_config, disabled=["Matricule", "Étudiant"],
                            hide_index=True, key=f"notes_{ue_code}")

    if st.button("💾 Sauvegarder"):
        erreurs = []
        for ligne in edited.to_dict("records"):
            for ecue in ue["ecues"]:
                try:
                    DataManager.enregistrer_note(data, ligne["Matricule"], ecue["code"], ligne[ecue["code"]])
                except NoteInvalide as exc:
                    erreurs.append(f"{ligne['Matricule']} / {ecue['code']} : {exc.message}")
        if erreurs:
            logger.warning("%d note(s) rejetée(s) pour %s", len(erreurs), ue_code)
            st.error("\n".join(erreurs))
        else:
            st.toast("Sauvegardé !")
            st.rerun()

    st.subheader("Résultats de l'UE")
    resultats = []
    for etudiant in data["etudiants"]:
        r = resultats_etudiant(data, etudiant["matricule"]).ues[ue_code]
        resultats.append({
            "Matricule": etudiant["matricule"],
            "Moyenne": format_note(r.moyenne),
            "Crédits": f"{r.credits_valides}/{r.credits}",
            "Décision": DECISION_LABELS[r.decision.value]["label"] if r.decision else "—",
        })
    st.dataframe(pd.DataFrame(resultats), hide_index=True, use_container_width=True)


def ui_deliberation():
    st.header("📋 Procès-verbal de délibération")
    data = _data()
    if not data["etudiants"]:
        st.info("Aucun étudiant dans la session.")
        return

    tableau = tableau_deliberation(data)
    vue = st.radio("Affichage", ["Liste", "Classement"], horizontal=True)
    if vue == "Classement":
        tableau = tableau.sort_values("Rang", na_position="last")
    st.dataframe(tableau, hide_index=True, use_container_width=True)

    infos = data["session"]
    nom_fichier = "_".join(str(v) for v in (infos.get("filiere"), infos.get("niveau"), infos.get("annee_academique")) if v)
    st.download_button("⬇️ Export CSV", tableau.to_csv(index=False).encode("utf-8"), f"pv_{nom_fichier or 'session'}.csv", "text/csv")

    st.subheader("Détail étudiant")
    matricule = st.selectbox("Étudiant", tableau["Matricule"].tolist())
    res = resultats_etudiant(data, matricule)
    for ue in data["ues"]:
        r = res.ues[ue["code"]]
        st.markdown(
            f"**{ue['code']}** {ue['nom']} : {format_note(r.moyenne)} "
            f"({r.credits_valides}/{r.credits} cr) {badge_decision(r.decision.value if r.decision else None)}",
            unsafe_allow_html=True,
        )
    for s, r in res.semestres.items():
        st.markdown(
            f"**{s}** : {format_note(r.moyenne)} ({r.credits_valides}/{r.credits_totaux} cr) "
            f"{badge_decision(r.decision.value if r.decision else None)}",
            unsafe_allow_html=True,
        )

    if res.finale.decision is None:
        st.markdown('<div class="warning-box">Aucune note saisie.</div>', unsafe_allow_html=True)
    else:
        box = "warning-box" if res.finale.decision.value == "A" else "success-box"
        st.markdown(
            f'<div class="{box}">Moyenne annuelle : <b>{format_note(res.moyenne_annuelle)}/20</b> '
            f'({res.credits_valides}/{res.credits_totaux} crédits) : <b>{res.finale.mention}</b></div>',
            unsafe_allow_html=True,
        )
