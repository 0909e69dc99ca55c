"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel.

Représente les objets persistés. Ici on représente les propriétés communes de toutes les tables.

Chaque champ = une colonne SQL (avec type, index, clé primaire...).
"""

from typing import Optional

from sqlmodel import SQLModel, Field


class BaseModelDB(SQLModel, table=False):
    # id auto-incrémenté : sert aussi d'ordre d'insertion
    id: Optional[int] = Field(default=None, primary_key=True)
