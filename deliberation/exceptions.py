"""
Exceptions de la couche de saisie. Le moteur de calcul n'en lève aucune.
"""

from typing import Any, Dict, Optional


class DeliberationError(Exception):
    """Base de toutes les erreurs de l'application."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ValidationError(DeliberationError):
    """Donnée saisie ou importée invalide."""
    pass


class NoteInvalide(ValidationError):
    """Note non numérique ou hors de l'intervalle [0, 20]."""
    pass


class ElementDuplique(DeliberationError):
    """UE, ECUE ou étudiant déjà présent dans la session."""
    pass


class ElementIntrouvable(DeliberationError):
    """Référence à une UE, ECUE ou un étudiant inexistant."""
    pass
