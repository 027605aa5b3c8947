from django import forms
from django.conf import settings

from .models import Appointment, Medication, UserPreferences

LANGUAGE_CHOICES = [
    ("en", "English"),
    ("hi", "Hindi"),
    ("ta", "Tamil"),
    ("te", "Telugu"),
    ("bn", "Bengali"),
    ("ml", "Malayalam"),
    ("gu", "Gujarati"),
    ("kn", "Kannada"),
    ("mr", "Marathi"),
    ("pa", "Punjabi"),
]


class SymptomListField(forms.Field):
    """A JSON list of symptom names: lower-cased, trimmed, de-duplicated, at most ``settings.MAX_SYMPTOMS`` items."""

    default_error_messages = {
        "required": "Please provide at least one symptom",
        "invalid": "Symptoms must be a list of strings",
        "too_many": "Maximum %(max)s symptoms allowed",
    }

    def __init__(self, *, max_symptoms=None, **kwargs):
        self.max_symptoms = max_symptoms
        super().__init__(**kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if not isinstance(value, (list, tuple)) or not all(isinstance(s, str) for s in value):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        limit = self.max_symptoms or settings.MAX_SYMPTOMS
        if len(value) > limit:
            raise forms.ValidationError(
                self.error_messages["too_many"], code="too_many", params={"max": limit}
            )
        cleaned = []
        for symptom in value:
            symptom = symptom.strip().lower()
            if symptom and symptom not in cleaned:
                cleaned.append(symptom)
        return cleaned


class SymptomForm(forms.Form):
    symptoms = SymptomListField()


class ChatForm(forms.Form):
    message = forms.CharField(strip=True)


class RecipeSearchForm(forms.Form):
    query = forms.CharField(strip=True)


class DoctorSearchForm(forms.Form):
    lat = forms.FloatField(min_value=-90, max_value=90)
    lon = forms.FloatField(min_value=-180, max_value=180)
    term = forms.CharField(required=False)
    radius = forms.IntegerField(required=False, min_value=1, max_value=50000)
    limit = forms.IntegerField(required=False, min_value=1, max_value=100)


class PreferencesForm(forms.ModelForm):
    language = forms.ChoiceField(choices=LANGUAGE_CHOICES)

    class Meta:
        model = UserPreferences
        fields = [
            "email_notifications",
            "push_notifications",
            "reminder_notifications",
            "theme",
            "language",
            "font_size",
            "share_data",
            "anonymous_analytics",
        ]


class AppointmentForm(forms.ModelForm):
    class Meta:
        model = Appointment
        fields = ["doctor_name", "specialty", "location", "scheduled_for", "notes", "status"]


class MedicationForm(forms.ModelForm):
    class Meta:
        model = Medication
        fields = [
            "name",
            "dosage",
            "frequency",
            "time_of_day",
            "purpose",
            "instructions",
            "start_date",
            "end_date",
            "refill_date",
            "refills_left",
        ]

    def clean(self):
        cleaned_data = super().clean()
        start, end = cleaned_data.get("start_date"), cleaned_data.get("end_date")
        if start and end and end < start:
            self.add_error("end_date", "End date cannot be before start date.")
        return cleaned_data
