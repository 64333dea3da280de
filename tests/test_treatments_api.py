import unittest

from api_case import ApiTestCase


class TestTreatmentsApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.admin = self.token_for("ADMIN")
        self.doctor = self.token_for("DOCTOR")
        self.nurse = self.token_for("NURSE")

        self.create_option(self.admin, "X-Ray", "x-ray")
        self.create_option(self.admin, "MRI", "mri")
        self.create_medication(self.admin, "Paracetamol", "paracetamol")
        self.create_medication(self.admin, "Ibuprofen", "ibuprofen")
        self.patient = self.create_patient(self.doctor)

    def post_treatment(self, token, body):
        return self.client.post("/treatments", json=body, headers=self.headers(token))

    def list_treatments(self, token=None):
        resp = self.client.get("/treatments", headers=self.headers(token or self.admin))
        self.assertEqual(resp.status_code, 200)
        return resp.json()

    def test_doctor_creates_treatment(self):
        resp = self.post_treatment(self.doctor, self.treatment_body(
            self.patient["id"], ["x-ray"], ["paracetamol"],
        ))
        self.assertEqual(resp.status_code, 201, resp.text)

        body = resp.json()
        self.assertEqual(body["treatmentOptions"], ["x-ray"])
        self.assertEqual(body["medications"], ["paracetamol"])
        self.assertEqual(body["costOfTreatment"], 150.0)
        self.assertEqual(body["patientId"], self.patient["id"])

        me = self.client.get("/auth/me", headers=self.headers(self.doctor)).json()
        self.assertEqual(body["userId"], me["id"])

        self.assertEqual(body["patient"]["id"], self.patient["id"])
        self.assertEqual(body["patient"]["name"], "John Doe")
        self.assertEqual(body["patient"]["patientId"], "P123456")

    def test_reads_embed_the_patient(self):
        created = self.post_treatment(self.doctor, self.treatment_body(self.patient["id"], ["x-ray"])).json()
        other = self.create_patient(self.doctor, name="Jane Roe", code="P654321")

        resp = self.client.get(f"/treatments/{created['id']}", headers=self.headers(self.nurse))
        self.assertEqual(resp.json()["patient"]["patientId"], "P123456")

        listed = self.list_treatments(self.nurse)
        self.assertEqual([t["patient"]["name"] for t in listed], ["John Doe"])

        resp = self.client.patch(f"/treatments/{created['id']}", json={"patientId": other["id"]},
                                 headers=self.headers(self.doctor))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["patient"]["name"], "Jane Roe")

        # Still embedded after the patient is soft-deleted
        self.client.delete(f"/patients/{other['id']}", headers=self.headers(self.admin))
        resp = self.client.get(f"/treatments/patient/{other['id']}", headers=self.headers(self.nurse))
        self.assertEqual(resp.json()[0]["patient"]["id"], other["id"])

    def test_nurse_cannot_create_but_can_read(self):
        resp = self.post_treatment(self.nurse, self.treatment_body(self.patient["id"], ["x-ray"]))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.list_treatments(self.nurse), [])

    def test_unknown_option_rejects_whole_write(self):
        resp = self.post_treatment(self.doctor, self.treatment_body(
            self.patient["id"], ["x-ray", "blood-test"], ["paracetamol"],
        ))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "One or more treatment options not found")
        self.assertEqual(self.list_treatments(), [])

    def test_unknown_medication(self):
        resp = self.post_treatment(self.doctor, self.treatment_body(
            self.patient["id"], ["x-ray"], ["paracetamol", "ct-scan"],
        ))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "One or more medications not found")

    def test_options_are_checked_before_medications(self):
        resp = self.post_treatment(self.doctor, self.treatment_body(
            self.patient["id"], ["blood-test"], ["ct-scan"],
        ))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "One or more treatment options not found")

    def test_deleted_catalog_entry_cannot_be_referenced(self):
        options = self.client.get("/treatments/options", headers=self.headers(self.admin)).json()
        mri = next(o for o in options if o["slug"] == "mri")
        self.client.delete(f"/treatments/options/{mri['id']}", headers=self.headers(self.admin))

        resp = self.post_treatment(self.doctor, self.treatment_body(self.patient["id"], ["mri"]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "One or more treatment options not found")

    def test_empty_lists_are_allowed(self):
        resp = self.post_treatment(self.doctor, self.treatment_body(self.patient["id"]))
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["treatmentOptions"], [])

    def test_repeated_slugs_are_stored_once(self):
        resp = self.post_treatment(self.doctor, self.treatment_body(
            self.patient["id"], ["x-ray", "mri", "x-ray"], ["ibuprofen", "ibuprofen"],
        ))
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["treatmentOptions"], ["x-ray", "mri"])
        self.assertEqual(resp.json()["medications"], ["ibuprofen"])

    def test_missing_patient(self):
        resp = self.post_treatment(self.doctor, self.treatment_body("no-such-patient", ["x-ray"]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Patient with ID no-such-patient not found")

    def test_negative_cost(self):
        resp = self.post_treatment(self.doctor, self.treatment_body(self.patient["id"], cost=-1))
        self.assertEqual(resp.status_code, 422)

    def test_existing_treatment_survives_catalog_delete(self):
        created = self.post_treatment(self.doctor, self.treatment_body(
            self.patient["id"], ["x-ray"], ["paracetamol"],
        )).json()

        meds = self.client.get("/medications", headers=self.headers(self.admin)).json()
        paracetamol = next(m for m in meds if m["slug"] == "paracetamol")
        self.client.delete(f"/medications/{paracetamol['id']}", headers=self.headers(self.admin))

        resp = self.client.get(f"/treatments/{created['id']}", headers=self.headers(self.nurse))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["medications"], ["paracetamol"])

    def test_update_checks_only_sent_lists(self):
        created = self.post_treatment(self.doctor, self.treatment_body(
            self.patient["id"], ["x-ray"], ["paracetamol"],
        )).json()

        resp = self.client.patch(f"/treatments/{created['id']}", json={"costOfTreatment": 99.5},
                                 headers=self.headers(self.doctor))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["costOfTreatment"], 99.5)
        self.assertEqual(resp.json()["treatmentOptions"], ["x-ray"])

        resp = self.client.patch(f"/treatments/{created['id']}", json={"medications": ["aspirin"]},
                                 headers=self.headers(self.doctor))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "One or more medications not found")

        resp = self.client.patch(f"/treatments/{created['id']}", json={"treatmentOptions": ["mri"]},
                                 headers=self.headers(self.doctor))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["treatmentOptions"], ["mri"])
        self.assertEqual(resp.json()["medications"], ["paracetamol"])

    def test_update_missing_treatment(self):
        resp = self.client.patch("/treatments/missing", json={"medications": ["aspirin"]},
                                 headers=self.headers(self.doctor))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Treatment with ID missing not found")

    def test_only_admin_deletes(self):
        created = self.post_treatment(self.doctor, self.treatment_body(self.patient["id"], ["x-ray"])).json()

        resp = self.client.delete(f"/treatments/{created['id']}", headers=self.headers(self.doctor))
        self.assertEqual(resp.status_code, 403)

        resp = self.client.delete(f"/treatments/{created['id']}", headers=self.headers(self.admin))
        self.assertEqual(resp.status_code, 200)

        self.assertEqual(self.list_treatments(), [])
        resp = self.client.get(f"/treatments/{created['id']}", headers=self.headers(self.admin))
        self.assertEqual(resp.status_code, 404)

    def test_list_by_patient(self):
        other = self.create_patient(self.doctor, name="Jane Roe", code="P654321")
        self.post_treatment(self.doctor, self.treatment_body(self.patient["id"], ["x-ray"]))
        self.post_treatment(self.doctor, self.treatment_body(other["id"], ["mri"]))

        resp = self.client.get(f"/treatments/patient/{other['id']}", headers=self.headers(self.nurse))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([t["treatmentOptions"] for t in resp.json()], [["mri"]])
        self.assertEqual(len(self.list_treatments()), 2)


class TestClinicScenario(ApiTestCase):

    def test_admin_doctor_nurse_walkthrough(self):
        admin = self.token_for("ADMIN")
        self.create_option(admin, "X-Ray", "x-ray")
        self.create_medication(admin, "Paracetamol", "paracetamol")

        doctor = self.token_for("DOCTOR")
        patient = self.create_patient(doctor)
        resp = self.client.post("/treatments", json=self.treatment_body(
            patient["id"], ["x-ray"], ["paracetamol"],
        ), headers=self.headers(doctor))
        self.assertEqual(resp.status_code, 201)

        nurse = self.token_for("NURSE")
        resp = self.client.get(f"/treatments/patient/{patient['id']}", headers=self.headers(nurse))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 1)

        resp = self.client.post("/medications", json={"name": "Aspirin", "slug": "aspirin"}, headers=self.headers(nurse))
        self.assertEqual(resp.status_code, 403)


if __name__ == "__main__":
    unittest.main()
