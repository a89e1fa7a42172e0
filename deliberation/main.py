import streamlit as st
from deliberation.settings import settings
from deliberation.utils import configurer_logging, inject_css
from deliberation.ui import ui_sidebar, ui_dashboard, ui_maquette, ui_etudiants, ui_notes, ui_deliberation

# 1. Config & Utils
st.set_page_config(page_title=settings.page_title, layout="wide", page_icon="🎓")
configurer_logging(settings.log_level)
inject_css()

# 2. Interface
def main():
    ui_sidebar()

    st.title("🎓 Délibération")

    tabs = st.tabs(["📊 Tableau de bord", "🧱 UE & ECUE", "👥 Étudiants", "📝 Notes", "📋 Délibération"])

    with tabs[0]:
        ui_dashboard()
    with tabs[1]:
        ui_maquette()
    with tabs[2]:
        ui_etudiants()
    with tabs[3]:
        ui_notes()
    with tabs[4]:
        ui_deliberation()

if __name__ == "__main__":
    main()
