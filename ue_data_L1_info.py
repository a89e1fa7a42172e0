# ue_data_L1_info.py

ue_data_l1_info = {
    "session": {
        "annee_academique": "2024-2025",
        "semestre": "Annuel",
        "filiere": "Informatique",
        "niveau": "L1",
        "date_deliberation": "2025-07-04",
    },
    "ues": [
        {
            "code": "INF101",
            "nom": "Algorithmique et programmation",
            "semestre": "S1",
            "ecues": [("INF1011", "Algorithmique", 4), ("INF1012", "Programmation Python", 3)],  # (code, nom, crédits)
        },
        {
            "code": "MAT101",
            "nom": "Mathématiques",
            "semestre": "S1",
            "ecues": [("MAT1011", "Analyse", 3), ("MAT1012", "Algèbre", 3)],
        },
        {
            "code": "LAN101",
            "nom": "Langues",
            "semestre": "S1",
            "ecues": [("LAN1011", "Anglais", 2)],
        },
        {
            "code": "INF201",
            "nom": "Systèmes",
            "semestre": "S2",
            "ecues": [("INF2011", "Architecture des ordinateurs", 3), ("INF2012", "Systèmes d'exploitation", 3)],
        },
        {
            "code": "INF202",
            "nom": "Bases de données",
            "semestre": "S2",
            "ecues": [("INF2021", "Modèle relationnel", 3), ("INF2022", "SQL", 3)],
        },
        {
            "code": "MAT201",
            "nom": "Probabilités",
            "semestre": "S2",
            "ecues": [("MAT2011", "Probabilités", 3)],
        },
    ],
    "etudiants": [
        {"matricule": "L1-001", "nom": "KOUASSI", "prenom": "Aya"},
        {"matricule": "L1-002", "nom": "TRAORE", "prenom": "Moussa"},
        {"matricule": "L1-003", "nom": "N'GUESSAN", "prenom": "Ange"},
        {"matricule": "L1-004", "nom": "DIALLO", "prenom": "Fatou"},
        {"matricule": "L1-005", "nom": "BAMBA", "prenom": "Yao"},
    ],
    "notes": {
        "L1-001": {
            "INF1011": 17.5, "INF1012": 16, "MAT1011": 15.5, "MAT1012": 18, "LAN1011": 16,
            "INF2011": 16.5, "INF2012": 17, "INF2021": 15, "INF2022": 18, "MAT2011": 16,
        },
        "L1-002": {
            "INF1011": 12, "INF1012": 13.5, "MAT1011": 8, "MAT1012": 9.5, "LAN1011": 14,
            "INF2011": 11, "INF2012": 12.5, "INF2021": 13, "INF2022": 14, "MAT2011": 10.5,
        },
        "L1-003": {
            "INF1011": 14, "INF1012": 15, "MAT1011": 13, "MAT1012": 12.5, "LAN1011": 11,
            "INF2011": 12, "INF2012": 13, "INF2021": 14.5, "INF2022": 15, "MAT2011": 12,
        },
        "L1-004": {
            "INF1011": 6, "INF1012": 8.5, "MAT1011": 7, "MAT1012": 5.5, "LAN1011": 10,
            "INF2011": 9, "INF2012": 7.5, "INF2021": 8, "INF2022": 11, "MAT2011": 6,
        },
        "L1-005": {
            "INF1011": 11, "INF1012": None, "MAT1011": 10, "MAT1012": 10.5, "LAN1011": "12,5",  # notes du S2 pas encore saisies
        },
    },
}
