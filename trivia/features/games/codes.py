import logging
import secrets
import time
from typing import Callable

logger = logging.getLogger(__name__)

# 32 caractères sans ambiguïté visuelle : ni 0/O ni 1/I
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 6
MAX_ATTEMPTS = 10


class CodeGenerator:
    """
    Génère les codes de partie (6 caractères, tirage uniforme avec remise).

    generate_unique() refait au plus `max_attempts` tirages contre `exists`.
    Au-delà (espace de 32^6 ≈ 1,07e9 codes, quasi impossible en pratique),
    repli volontaire : les 2 derniers caractères d'un code frais sont remplacés
    par l'horodatage courant encodé dans le même alphabet. Le code garde sa
    longueur et son alphabet, mais son unicité n'est plus garantie : c'est un
    point faible connu et accepté, la contrainte unique du stockage refusera
    alors l'insert (ConflictError) plutôt que de dupliquer.
    """

    def __init__(
        self,
        *,
        alphabet: str = CODE_ALPHABET,
        length: int = CODE_LENGTH,
        max_attempts: int = MAX_ATTEMPTS,
        choice: Callable[[str], str] = secrets.choice,
        clock: Callable[[], float] = time.time,
    ):
        self.alphabet = alphabet
        self.length = length
        self.max_attempts = max_attempts
        self._choice = choice
        self._clock = clock

    def generate(self) -> str:
        return "".join(self._choice(self.alphabet) for _ in range(self.length))

    def generate_unique(self, exists: Callable[[str], bool]) -> str:
        for _ in range(self.max_attempts):
            code = self.generate()
            if not exists(code):
                return code

        code = self.generate()
        fallback = code[:-2] + self._timestamp_suffix()
        logger.warning(
            "Game code generation collided %s times, falling back to %s",
            self.max_attempts,
            fallback,
        )
        return fallback

    def _timestamp_suffix(self, size: int = 2) -> str:
        base = len(self.alphabet)
        value = int(self._clock() * 1000)
        chars = []
        for _ in range(size):
            value, idx = divmod(value, base)
            chars.append(self.alphabet[idx])
        return "".join(reversed(chars))
