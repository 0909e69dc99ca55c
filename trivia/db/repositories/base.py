from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlmodel import SQLModel, Session, select

# Type générique pour la table (GameRow, PlayerRow, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD sur les lignes.

    👉 Ne contient aucune logique métier.
    👉 Manipule des lignes SQLModel ; les repositories concrets convertissent
       en entités métier (trivia.db.mappers) avant de retourner quoi que ce soit.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def _all(self) -> Sequence[ModelT]:
        return self.session.exec(select(self.model).order_by(self.model.id)).all()

    def _get(self, id_: Any) -> Optional[ModelT]:
        return self.session.get(self.model, id_)

    # ---------- CREATE ----------

    def _create(self, *, commit: bool = True, **fields) -> ModelT:
        """
        Crée et persiste une nouvelle ligne.
        commit=False permet d'orchestrer une transaction globale.
        """
        entity = self.model(**fields)
        self.session.add(entity)
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            # flush pour obtenir l'ID sans commit (utile pour FKs)
            self.session.flush()
        return entity

    # ---------- UPDATE ----------

    def _update(self, entity: ModelT, *, commit: bool = True, **changes) -> ModelT:
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            self.session.flush()
        return entity

    # ---------- DELETE ----------

    def _delete(self, entity: ModelT, *, commit: bool = True) -> None:
        self.session.delete(entity)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
