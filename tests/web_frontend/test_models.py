"""Tests for the user-owned data model."""
import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from frontend.frontend_app.models import DiseasePrediction, SymptomEntry

from payloads import make_prediction

pytestmark = pytest.mark.django_db


class TestSymptomEntry:

    def test_entry_with_predictions(self, user):
        entry = SymptomEntry.objects.create_with_predictions(
            user, ["fever", "cough"], [make_prediction("Flu", 70.0), make_prediction("Cold", 30.0)]
        )

        assert entry.symptoms == ["fever", "cough"]
        assert [p.disease_name for p in entry.predictions.all()] == ["Flu", "Cold"]
        assert entry.predictions.first().ai_insights["severity"] == "Mild"

    def test_repeated_disease_keeps_first(self, user):
        entry = SymptomEntry.objects.create_with_predictions(
            user, ["fever"], [make_prediction("Flu", 70.0), make_prediction("Flu", 20.0)]
        )

        assert entry.predictions.count() == 1
        assert entry.predictions.get().probability == 70.0

    def test_predictions_keep_backend_rank(self, user):
        entry = SymptomEntry.objects.create_with_predictions(
            user,
            ["fever"],
            [make_prediction("apple flu", 50.0), make_prediction("Banana fever", 50.0), make_prediction("Zika", 10.0)],
        )

        assert [p.disease_name for p in entry.predictions.all()] == ["apple flu", "Banana fever", "Zika"]
        assert [p.rank for p in entry.predictions.all()] == [0, 1, 2]

    def test_rank_skips_repeated_names(self, user):
        entry = SymptomEntry.objects.create_with_predictions(
            user,
            ["fever"],
            [make_prediction("Flu", 70.0), make_prediction("Flu", 20.0), make_prediction("Cold", 10.0)],
        )

        assert [(p.disease_name, p.rank) for p in entry.predictions.all()] == [("Flu", 0), ("Cold", 1)]

    def test_entry_requires_a_symptom(self, user):
        with pytest.raises(ValidationError):
            SymptomEntry(user=user, symptoms=[]).full_clean()

    def test_delete_entry_cascades_to_predictions(self, user, entry_factory):
        entry = entry_factory(user)
        assert DiseasePrediction.objects.filter(entry_id=entry.pk).count() == 2

        entry.delete()

        assert DiseasePrediction.objects.filter(entry_id=entry.pk).count() == 0

    def test_delete_user_cascades_to_entries(self, user, entry_factory):
        entry_factory(user)
        user.delete()

        assert SymptomEntry.objects.count() == 0
        assert DiseasePrediction.objects.count() == 0

    def test_to_dict_uses_wire_names(self, user, entry_factory):
        data = entry_factory(user).to_dict()

        assert data["userId"] == user.pk
        assert data["predictions"][0]["diseaseName"] == "Flu"
        assert data["predictions"][0]["symptomEntryId"] == data["id"]


class TestDiseasePredictionConstraints:

    def test_disease_unique_per_entry(self, user, entry_factory):
        entry = entry_factory(user)

        with pytest.raises(IntegrityError), transaction.atomic():
            DiseasePrediction.objects.create(entry=entry, disease_name="Flu", probability=10.0)

    def test_probability_must_be_percentage(self, user, entry_factory):
        entry = entry_factory(user)

        with pytest.raises(IntegrityError), transaction.atomic():
            DiseasePrediction.objects.create(entry=entry, disease_name="Measles", probability=150.0)

    def test_failed_prediction_rolls_back_entry(self, user):
        bad = make_prediction("Flu", 70.0)
        bad["probability"] = 250.0

        with pytest.raises(IntegrityError):
            SymptomEntry.objects.create_with_predictions(user, ["fever"], [bad])

        assert SymptomEntry.objects.count() == 0
