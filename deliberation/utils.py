import streamlit as st
import logging
import math

from deliberation.models import DECISION_LABELS


def inject_css():
    """Injecte le CSS personnalisé."""
    st.markdown("""
        <style>
        .success-box { padding: 10px; border-radius: 5px; background-color: #d4edda; color: #155724; border: 1px solid #c3e6cb; }
        .warning-box { padding: 10px; border-radius: 5px; background-color: #fff3cd; color: #856404; border: 1px solid #ffeeba; }
        .badge { padding: 2px 8px; border-radius: 8px; color: white; font-weight: 600; font-size: 0.85em; }
        </style>
    """, unsafe_allow_html=True)


def configurer_logging(level="INFO"):
    """Handler console unique ; Streamlit ré-exécute le script à chaque interaction."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_note(valeur):
    if valeur is None or (isinstance(valeur, float) and math.isnan(valeur)):
        return "—"
    return f"{valeur:.2f}"


def badge_decision(code):
    if not code:
        return "—"
    infos = DECISION_LABELS.get(code, {"label": code, "color": "#7f8c8d"})
    return f'<span class="badge" style="background-color:{infos["color"]}">{infos["label"]}</span>'
