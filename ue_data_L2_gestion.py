# ue_data_L2_gestion.py

ue_data_l2_gestion_s1 = {
    "session": {
        "annee_academique": "2024-2025",
        "semestre": "S1",
        "filiere": "Gestion",
        "niveau": "L2",
    },
    "ues": [
        {"code": "GES301", "nom": "Comptabilité", "ecues": [("GES3011", "Comptabilité générale", 4), ("GES3012", "Comptabilité analytique", 2)]},
        {"code": "GES302", "nom": "Économie", "ecues": [("GES3021", "Microéconomie", 3), ("GES3022", "Macroéconomie", 3)]},
        {"code": "GES303", "nom": "Outils", "ecues": [("GES3031", "Statistiques", 3), ("GES3032", "Tableur", 1)]},
    ],
    "etudiants": [
        {"matricule": "G2-101", "nom": "KONE", "prenom": "Awa"},
        {"matricule": "G2-102", "nom": "OUATTARA", "prenom": "Ibrahim"},
        {"matricule": "G2-103", "nom": "YAO", "prenom": "Koffi"},
    ],
    "notes": {
        "G2-101": {"GES3011": 14, "GES3012": 13, "GES3021": 15, "GES3022": 14.5, "GES3031": 13.5, "GES3032": 16},
        "G2-102": {"GES3011": 9, "GES3012": 8, "GES3021": 12, "GES3022": 13, "GES3031": 14, "GES3032": 15},
        "G2-103": {"GES3011": 10, "GES3012": 11.5, "GES3021": "", "GES3022": 10, "GES3031": 12},
    },
}
