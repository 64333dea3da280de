import logging

from sqlmodel import Session, select

from ..core.exceptions import NotFound
from ..models.AuthToken import Identity
from ..models.Base import utcnow
from ..models.Treatment import Treatment, TreatmentCreate, TreatmentUpdate
from ..patients.service import get_patient
from .validation import validate_treatment_references

logger = logging.getLogger(__name__)


def create_treatment(session: Session, treatment: TreatmentCreate, issuer: Identity) -> Treatment:
    # 1. Every slug must resolve to an active catalog entry
    validate_treatment_references(session, treatment.treatment_options, treatment.medications)

    # 2. The patient must exist and not be deleted
    get_patient(session, treatment.patient_id)

    # 3. Write
    db_treatment = Treatment(
        date=treatment.date,
        treatment_options=treatment.treatment_options,
        medications=treatment.medications,
        cost_of_treatment=treatment.cost_of_treatment,
        patient_id=treatment.patient_id,
        user_id=issuer.id,
    )
    session.add(db_treatment)
    session.commit()
    session.refresh(db_treatment)
    logger.info("User %s created treatment %s for patient %s", issuer.id, db_treatment.id, db_treatment.patient_id)
    return db_treatment

def get_all_treatments(session: Session) -> list[Treatment]:
    statement = select(Treatment).where(Treatment.deleted_at == None).order_by(Treatment.date.desc())
    return session.exec(statement).all()

def get_treatment(session: Session, treatment_id: str) -> Treatment:
    statement = select(Treatment).where(Treatment.id == treatment_id, Treatment.deleted_at == None)
    treatment = session.exec(statement).first()
    if not treatment:
        raise NotFound("Treatment", treatment_id)
    return treatment

def get_treatments_for_patient(session: Session, patient_id: str) -> list[Treatment]:
    statement = (
        select(Treatment)
        .where(Treatment.patient_id == patient_id, Treatment.deleted_at == None)
        .order_by(Treatment.date.desc())
    )
    return session.exec(statement).all()

def update_treatment(session: Session, treatment_id: str, update_data: TreatmentUpdate) -> Treatment:
    treatment = get_treatment(session, treatment_id)

    # Only the slug lists that were sent are checked
    validate_treatment_references(session, update_data.treatment_options, update_data.medications)

    if update_data.patient_id is not None:
        get_patient(session, update_data.patient_id)
        treatment.patient_id = update_data.patient_id

    if update_data.date is not None:
        treatment.date = update_data.date
    if update_data.treatment_options is not None:
        treatment.treatment_options = update_data.treatment_options
    if update_data.medications is not None:
        treatment.medications = update_data.medications
    if update_data.cost_of_treatment is not None:
        treatment.cost_of_treatment = update_data.cost_of_treatment

    treatment.updated_at = utcnow()
    session.add(treatment)
    session.commit()
    session.refresh(treatment)
    logger.info("Updated treatment %s", treatment_id)
    return treatment

def delete_treatment(session: Session, treatment_id: str) -> Treatment:
    treatment = get_treatment(session, treatment_id)
    treatment.deleted_at = utcnow()
    session.add(treatment)
    session.commit()
    session.refresh(treatment)
    logger.info("Soft-deleted treatment %s", treatment_id)
    return treatment
