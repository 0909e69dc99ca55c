"""
Erreurs métier partagées par les services et les backends.

- validation : ValueError (y compris pydantic.ValidationError)
- introuvable : NotFoundError (LookupError)
- conflit : ConflictError et ses sous-classes
"""


class NotFoundError(LookupError):
    """L'identifiant est valide mais rien n'existe derrière."""


class ConflictError(Exception):
    """Conflit métier (joueur déjà terminé, code déjà pris...)."""


class DuplicatePlayerError(ConflictError):
    """Contrainte unique (name, phone, game_id) violée au moment de l'insert."""


class DuplicateAnswerError(ConflictError):
    """Contrainte unique (player_id, question_id) violée au moment de l'insert."""
