from sqlmodel import Session

from ..catalog.service import find_active_by_slugs
from ..core.exceptions import ReferenceNotFound
from ..models.Catalog import Medication, TreatmentOption


def validate_treatment_references(
    session: Session,
    treatment_option_slugs: list[str] | None,
    medication_slugs: list[str] | None,
) -> None:
    """
    Checks that every referenced slug belongs to an active catalog entry.

    A single unknown or soft-deleted slug rejects the whole write. Passing
    None for a collection skips it (an update that leaves it untouched).
    The error names the collection, never the offending slug. Slugs are
    compared as sets: every requested slug must appear among the active rows.

    The check is not atomic with the write that follows: an entry deleted in
    between can still end up referenced.
    """
    if treatment_option_slugs is not None:
        found = {entry.slug for entry in find_active_by_slugs(session, TreatmentOption, treatment_option_slugs)}
        if not set(treatment_option_slugs) <= found:
            raise ReferenceNotFound("treatment options")

    if medication_slugs is not None:
        found = {entry.slug for entry in find_active_by_slugs(session, Medication, medication_slugs)}
        if not set(medication_slugs) <= found:
            raise ReferenceNotFound("medications")
