"""
CRUD over the slug-addressed catalogs (medications and treatment options).

Both tables share the same shape, so every function takes the model class.
Default reads only see active rows (deleted_at IS NULL).
"""
import logging
from typing import Iterable, TypeVar

from sqlmodel import Session, select

from ..core.exceptions import AlreadyExists, NotFound
from ..models.Base import utcnow
from ..models.Catalog import CatalogEntryCreate, CatalogEntryUpdate, Medication, TreatmentOption

logger = logging.getLogger(__name__)

CatalogModel = TypeVar("CatalogModel", Medication, TreatmentOption)

ENTITY_NAMES = {
    Medication: "Medication",
    TreatmentOption: "Treatment option",
}


def find_active_by_slugs(session: Session, model: type[CatalogModel], slugs: Iterable[str]) -> list[CatalogModel]:
    slugs = list(slugs)
    if not slugs:
        return []
    statement = select(model).where(model.slug.in_(slugs), model.deleted_at == None)
    return session.exec(statement).all()

def _slug_in_use(session: Session, model: type[CatalogModel], slug: str) -> bool:
    return bool(find_active_by_slugs(session, model, [slug]))

def create_entry(session: Session, model: type[CatalogModel], entry: CatalogEntryCreate) -> CatalogModel:
    if _slug_in_use(session, model, entry.slug):
        raise AlreadyExists(f"{ENTITY_NAMES[model]} with slug {entry.slug} already exists")

    db_entry = model.model_validate(entry.model_dump())
    session.add(db_entry)
    session.commit()
    session.refresh(db_entry)
    logger.info("Created %s %s", model.__tablename__, db_entry.slug)
    return db_entry

def list_active(session: Session, model: type[CatalogModel]) -> list[CatalogModel]:
    statement = select(model).where(model.deleted_at == None).order_by(model.name)
    return session.exec(statement).all()

def search_active(session: Session, model: type[CatalogModel], query: str | None = None) -> list[CatalogModel]:
    statement = select(model).where(model.deleted_at == None)
    if query:
        # case-insensitive "contains"
        statement = statement.where(model.name.ilike(f"%{query}%"))
    return session.exec(statement.order_by(model.name)).all()

def list_all(session: Session, model: type[CatalogModel], include_deleted: bool = False) -> list[CatalogModel]:
    if not include_deleted:
        return list_active(session, model)
    # Active rows first, then deleted ones
    statement = select(model).order_by(model.deleted_at.is_not(None), model.deleted_at, model.name)
    return session.exec(statement).all()

def get_entry(session: Session, model: type[CatalogModel], entry_id: str) -> CatalogModel:
    """Resolves an entry by id, soft-deleted or not."""
    entry = session.get(model, entry_id)
    if not entry:
        raise NotFound(ENTITY_NAMES[model], entry_id)
    return entry

def _get_active_entry(session: Session, model: type[CatalogModel], entry_id: str) -> CatalogModel:
    entry = session.get(model, entry_id)
    if not entry or entry.deleted_at is not None:
        raise NotFound(ENTITY_NAMES[model], entry_id)
    return entry

def update_entry(session: Session, model: type[CatalogModel], entry_id: str, update_data: CatalogEntryUpdate) -> CatalogModel:
    entry = _get_active_entry(session, model, entry_id)

    if update_data.name is not None:
        entry.name = update_data.name

    if update_data.slug is not None and update_data.slug != entry.slug:
        if _slug_in_use(session, model, update_data.slug):
            raise AlreadyExists(f"{ENTITY_NAMES[model]} with slug {update_data.slug} already exists")
        # Treatments keep the old slug; they are not rewritten
        entry.slug = update_data.slug

    entry.updated_at = utcnow()
    session.add(entry)
    session.commit()
    session.refresh(entry)
    return entry

def delete_entry(session: Session, model: type[CatalogModel], entry_id: str) -> CatalogModel:
    entry = _get_active_entry(session, model, entry_id)
    entry.deleted_at = utcnow()
    session.add(entry)
    session.commit()
    session.refresh(entry)
    logger.info("Soft-deleted %s %s", model.__tablename__, entry.slug)
    return entry
