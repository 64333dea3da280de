import logging

from sqlmodel import Session, select

from ..core.exceptions import AlreadyExists, NotFound
from ..models.Base import utcnow
from ..models.Patient import Patient, PatientCreate, PatientUpdate

logger = logging.getLogger(__name__)


def _code_taken(session: Session, patient_code: str) -> bool:
    statement = select(Patient).where(Patient.patient_id == patient_code)
    return session.exec(statement).first() is not None

def create_patient(session: Session, patient: PatientCreate) -> Patient:
    if _code_taken(session, patient.patient_id):
        raise AlreadyExists("Patient ID already exists")

    db_patient = Patient.model_validate(patient.model_dump())
    session.add(db_patient)
    session.commit()
    session.refresh(db_patient)
    logger.info("Created patient %s", db_patient.id)
    return db_patient

def get_all_patients(session: Session) -> list[Patient]:
    statement = select(Patient).where(Patient.deleted_at == None).order_by(Patient.name)
    return session.exec(statement).all()

def get_patient(session: Session, patient_id: str) -> Patient:
    statement = select(Patient).where(Patient.id == patient_id, Patient.deleted_at == None)
    patient = session.exec(statement).first()
    if not patient:
        raise NotFound("Patient", patient_id)
    return patient

def get_patient_by_code(session: Session, patient_code: str) -> Patient:
    statement = select(Patient).where(Patient.patient_id == patient_code, Patient.deleted_at == None)
    patient = session.exec(statement).first()
    if not patient:
        raise NotFound("Patient", patient_code)
    return patient

def update_patient(session: Session, patient_id: str, update_data: PatientUpdate) -> Patient:
    patient = get_patient(session, patient_id)

    if update_data.name is not None:
        patient.name = update_data.name

    if update_data.patient_id is not None and update_data.patient_id != patient.patient_id:
        if _code_taken(session, update_data.patient_id):
            raise AlreadyExists("Patient ID already exists")
        patient.patient_id = update_data.patient_id

    patient.updated_at = utcnow()
    session.add(patient)
    session.commit()
    session.refresh(patient)
    return patient

def delete_patient(session: Session, patient_id: str) -> Patient:
    patient = get_patient(session, patient_id)
    patient.deleted_at = utcnow()
    session.add(patient)
    session.commit()
    session.refresh(patient)
    logger.info("Soft-deleted patient %s", patient_id)
    return patient
