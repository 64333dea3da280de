"""
Fills a database with the default catalog, one demo user per role and a few
demo patients with random treatments.

Run with `python -m clinic.core.seed`. Rows that already exist (same slug,
email or patient ID) are left alone.
"""
import logging
import random
import string
from datetime import datetime, timedelta, timezone

from sqlmodel import Session, select

from .database import create_db_and_tables, engine
from ..catalog.service import find_active_by_slugs
from ..models.Catalog import Medication, TreatmentOption
from ..models.Patient import Patient
from ..models.Role import Role
from ..models.Treatment import Treatment
from ..models.User import User, UserCreate
from ..users.service import create_user, find_user_by_email

logger = logging.getLogger(__name__)

TREATMENT_OPTIONS = [
    ("Blood Test", "blood-test"),
    ("X-Ray", "x-ray"),
    ("Ultrasound", "ultrasound"),
    ("CT Scan", "ct-scan"),
    ("MRI", "mri"),
    ("Physical Therapy", "physical-therapy"),
    ("Dental Checkup", "dental-checkup"),
    ("Eye Examination", "eye-examination"),
    ("Vaccination", "vaccination"),
    ("Surgery", "surgery"),
]

MEDICATIONS = [
    ("Paracetamol", "paracetamol"),
    ("Amoxicillin", "amoxicillin"),
    ("Ibuprofen", "ibuprofen"),
    ("Aspirin", "aspirin"),
    ("Omeprazole", "omeprazole"),
    ("Metformin", "metformin"),
    ("Lisinopril", "lisinopril"),
    ("Amlodipine", "amlodipine"),
    ("Atorvastatin", "atorvastatin"),
    ("Metronidazole", "metronidazole"),
]

DEMO_USERS = [
    ("Admin User", "admin@example.com", "admin123", Role.ADMIN),
    ("Dr. John Smith", "doctor@example.com", "doctor123", Role.DOCTOR),
    ("Nurse Sarah", "nurse@example.com", "nurse123", Role.NURSE),
    ("Staff Member", "staff@example.com", "staff123", Role.STAFF),
]

DEMO_PATIENTS = [
    "John Doe", "Jane Smith", "Robert Johnson", "Mary Williams", "David Brown",
    "Sarah Davis", "Michael Wilson", "Lisa Anderson", "James Taylor", "Jennifer Martinez",
]


def generate_patient_code(rng: random.Random) -> str:
    return "P" + "".join(rng.choices(string.ascii_uppercase + string.digits, k=6))


def seed_catalog(session: Session, model, entries) -> int:
    created = 0
    for name, slug in entries:
        if find_active_by_slugs(session, model, [slug]):
            continue
        session.add(model(name=name, slug=slug))
        created += 1
    session.commit()
    return created


def seed_users(session: Session) -> int:
    created = 0
    for name, email, password, role in DEMO_USERS:
        if find_user_by_email(session, email, include_deleted=True):
            continue
        create_user(session, UserCreate(name=name, email=email, password=password, role=role))
        created += 1
    return created


def seed_patients(session: Session, rng: random.Random) -> int:
    doctor = session.exec(select(User).where(User.role == Role.DOCTOR, User.deleted_at == None)).first()
    if doctor is None:
        logger.warning("No doctor account, skipping demo patients")
        return 0

    option_slugs = [slug for _, slug in TREATMENT_OPTIONS]
    medication_slugs = [slug for _, slug in MEDICATIONS]
    now = datetime.now(timezone.utc)

    created = 0
    for name in DEMO_PATIENTS:
        if session.exec(select(Patient).where(Patient.name == name)).first():
            continue
        patient = Patient(name=name, patient_id=generate_patient_code(rng))
        session.add(patient)
        session.flush()

        for _ in range(rng.randint(1, 3)):
            session.add(Treatment(
                date=now - timedelta(days=rng.randint(0, 29)),
                treatment_options=rng.sample(option_slugs, rng.randint(1, 3)),
                medications=rng.sample(medication_slugs, rng.randint(1, 3)),
                cost_of_treatment=float(rng.randint(100, 1099)),
                patient_id=patient.id,
                user_id=doctor.id,
            ))
        created += 1
    session.commit()
    return created


def seed(session: Session, rng: random.Random | None = None) -> dict[str, int]:
    rng = rng or random.Random()
    return {
        "treatment_options": seed_catalog(session, TreatmentOption, TREATMENT_OPTIONS),
        "medications": seed_catalog(session, Medication, MEDICATIONS),
        "users": seed_users(session),
        "patients": seed_patients(session, rng),
    }


def main():
    logging.basicConfig(level=logging.INFO)
    create_db_and_tables()
    with Session(engine) as session:
        counts = seed(session)
    logger.info("Seed data created successfully: %s", counts)


if __name__ == "__main__":
    main()
