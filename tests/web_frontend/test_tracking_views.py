"""Tests for appointment and medication tracking."""
import datetime

import pytest
from django.utils import timezone

from frontend.frontend_app.models import Appointment, Medication

pytestmark = pytest.mark.django_db


@pytest.fixture
def appointment(user):
    return Appointment.objects.create(
        user=user,
        doctor_name="Dr. Rao",
        specialty="Cardiology",
        scheduled_for=timezone.now() + datetime.timedelta(days=3),
    )


@pytest.fixture
def medication(user):
    return Medication.objects.create(
        user=user, name="Metformin", dosage="500mg", frequency="Twice daily",
        start_date=datetime.date(2026, 10, 1),
    )


class TestAppointments:

    def test_create_defaults_to_upcoming(self, auth_client, user):
        response = auth_client.post("/api/appointments", {
            "doctorName": "Dr. Okafor",
            "specialty": "Dermatology",
            "scheduledFor": "2026-11-01T10:00:00Z",
        }, content_type="application/json")

        assert response.status_code == 201
        data = response.json()
        assert data["doctorName"] == "Dr. Okafor"
        assert data["status"] == "upcoming"
        assert data["scheduledFor"].startswith("2026-11-01T10:00:00")
        assert Appointment.objects.get(pk=data["id"]).user == user

    def test_create_requires_doctor_and_date(self, auth_client):
        response = auth_client.post("/api/appointments", {"specialty": "GP"},
                                    content_type="application/json")

        assert response.status_code == 400
        details = response.json()["details"]
        assert "doctor_name" in details
        assert "scheduled_for" in details

    def test_list_is_scoped_and_filterable(self, auth_client, appointment, other_user):
        Appointment.objects.create(user=other_user, doctor_name="Dr. X", scheduled_for=timezone.now())
        Appointment.objects.create(user=appointment.user, doctor_name="Dr. Y",
                                   scheduled_for=timezone.now(), status="completed")

        everything = auth_client.get("/api/appointments").json()
        upcoming = auth_client.get("/api/appointments", {"status": "upcoming"}).json()

        assert {a["doctorName"] for a in everything} == {"Dr. Rao", "Dr. Y"}
        assert [a["id"] for a in upcoming] == [appointment.pk]

    def test_partial_update(self, auth_client, appointment):
        response = auth_client.put(f"/api/appointments/{appointment.pk}", {"status": "completed"},
                                   content_type="application/json")

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert response.json()["doctorName"] == "Dr. Rao"

    def test_invalid_status(self, auth_client, appointment):
        response = auth_client.put(f"/api/appointments/{appointment.pk}", {"status": "someday"},
                                   content_type="application/json")

        assert response.status_code == 400

    def test_delete(self, auth_client, appointment):
        response = auth_client.delete(f"/api/appointments/{appointment.pk}")

        assert response.status_code == 204
        assert not Appointment.objects.filter(pk=appointment.pk).exists()

    def test_other_users_appointment(self, client, other_user, appointment):
        client.force_login(other_user)

        assert client.put(f"/api/appointments/{appointment.pk}", {"status": "cancelled"},
                          content_type="application/json").status_code == 404
        assert client.delete(f"/api/appointments/{appointment.pk}").status_code == 404
        assert Appointment.objects.filter(pk=appointment.pk).exists()

    def test_requires_login(self, client):
        assert client.get("/api/appointments").status_code == 401


class TestMedications:

    def test_create(self, auth_client):
        response = auth_client.post("/api/medications", {
            "name": "Lisinopril",
            "dosage": "10mg",
            "frequency": "Once daily",
            "timeOfDay": "Morning",
            "startDate": "2026-10-01",
        }, content_type="application/json")

        assert response.status_code == 201
        data = response.json()
        assert data["timeOfDay"] == "Morning"
        assert data["startDate"] == "2026-10-01"
        assert data["endDate"] is None
        assert data["refillsLeft"] == 0

    def test_end_before_start_rejected(self, auth_client):
        response = auth_client.post("/api/medications", {
            "name": "Amoxicillin",
            "dosage": "250mg",
            "frequency": "Three times daily",
            "startDate": "2026-10-10",
            "endDate": "2026-10-01",
        }, content_type="application/json")

        assert response.status_code == 400
        assert response.json()["error"] == "End date cannot be before start date."
        assert Medication.objects.count() == 0

    def test_list_is_scoped(self, auth_client, medication, other_user):
        Medication.objects.create(user=other_user, name="Aspirin", dosage="75mg", frequency="Daily")

        data = auth_client.get("/api/medications").json()

        assert [m["name"] for m in data] == ["Metformin"]

    def test_partial_update(self, auth_client, medication):
        response = auth_client.put(f"/api/medications/{medication.pk}", {"refillsLeft": 2},
                                   content_type="application/json")

        assert response.status_code == 200
        assert response.json()["refillsLeft"] == 2
        assert response.json()["startDate"] == "2026-10-01"

    def test_delete(self, auth_client, medication):
        assert auth_client.delete(f"/api/medications/{medication.pk}").status_code == 204
        assert not Medication.objects.filter(pk=medication.pk).exists()

    def test_other_users_medication(self, client, other_user, medication):
        client.force_login(other_user)

        assert client.delete(f"/api/medications/{medication.pk}").status_code == 404
