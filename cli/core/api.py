import requests
from typing import Optional, List

from .config import BASE_URL, TIMEOUT


class ApiError(Exception):
    """
    Raised when the API answers with an error status or cannot be reached.
    """
    def __init__(self, status_code: Optional[int], detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def _request(method: str, path: str, token: Optional[str] = None, **kwargs):
    headers = kwargs.pop("headers", {})
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        resp = requests.request(method, f"{BASE_URL}{path}", headers=headers, timeout=TIMEOUT, **kwargs)
    except requests.RequestException as e:
        raise ApiError(None, f"Could not reach {BASE_URL}: {e}")

    if resp.status_code >= 400:
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        raise ApiError(resp.status_code, str(detail))

    if resp.status_code == 204 or not resp.content:
        return None
    return resp.json()

# ==========================================
# Auth
# ==========================================
def api_register(name: str, email: str, password: str, role: Optional[str] = None) -> dict:
    data = {"name": name, "email": email, "password": password}
    if role:
        data["role"] = role
    return _request("POST", "/auth/register", json=data)

def api_login(email: str, password: str) -> dict:
    """
    Logs in and returns {id, email, name, role, token}.
    """
    return _request("POST", "/auth/login", json={"email": email, "password": password})

def api_get_me(token: str) -> dict:
    return _request("GET", "/auth/me", token)

# ==========================================
# Patients
# ==========================================
def api_list_patients(token: str) -> List[dict]:
    return _request("GET", "/patients", token)

def api_create_patient(token: str, name: str, patient_code: str) -> dict:
    return _request("POST", "/patients", token, json={"name": name, "patientId": patient_code})

def api_delete_patient(token: str, patient_id: str) -> dict:
    return _request("DELETE", f"/patients/{patient_id}", token)

# ==========================================
# Medications
# ==========================================
def api_list_medications(token: str, include_deleted: bool = False) -> List[dict]:
    if include_deleted:
        return _request("GET", "/medications/all", token, params={"includeDeleted": "true"})
    return _request("GET", "/medications", token)

def api_search_medications(token: str, query: str) -> List[dict]:
    return _request("GET", "/medications/search", token, params={"query": query})

def api_create_medication(token: str, name: str, slug: str) -> dict:
    return _request("POST", "/medications", token, json={"name": name, "slug": slug})

def api_delete_medication(token: str, medication_id: str) -> dict:
    return _request("DELETE", f"/medications/{medication_id}", token)

# ==========================================
# Treatments
# ==========================================
def api_list_treatments(token: str, patient_id: Optional[str] = None) -> List[dict]:
    if patient_id:
        return _request("GET", f"/treatments/patient/{patient_id}", token)
    return _request("GET", "/treatments", token)

def api_create_treatment(token: str, treatment_data: dict) -> dict:
    return _request("POST", "/treatments", token, json=treatment_data)
