from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction


def _iso(value):
    return value.isoformat() if value else None


class UserProfile(models.Model):
    GENDER_CHOICES = [
        ("male", "Male"),
        ("female", "Female"),
        ("other", "Other"),
        ("unspecified", "Prefer not to say"),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    age = models.PositiveSmallIntegerField(blank=True, null=True)
    gender = models.CharField(max_length=20, choices=GENDER_CHOICES, blank=True)
    family_history = models.TextField(blank=True, null=True)

    def to_dict(self):
        return {
            "name": self.user.get_full_name() or self.user.username,
            "email": self.user.email,
            "age": self.age,
            "gender": self.gender or None,
            "familyHistory": self.family_history or "",
        }


class UserPreferences(models.Model):
    THEME_CHOICES = [("light", "Light"), ("dark", "Dark"), ("system", "System")]
    FONT_SIZE_CHOICES = [("small", "Small"), ("medium", "Medium"), ("large", "Large")]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="preferences")
    email_notifications = models.BooleanField(default=True)
    push_notifications = models.BooleanField(default=True)
    reminder_notifications = models.BooleanField(default=True)
    theme = models.CharField(max_length=10, choices=THEME_CHOICES, default="system")
    language = models.CharField(max_length=10, default="en")
    font_size = models.CharField(max_length=10, choices=FONT_SIZE_CHOICES, default="medium")
    share_data = models.BooleanField(default=False)
    anonymous_analytics = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "user preferences"

    def to_dict(self):
        return {
            "emailNotifications": self.email_notifications,
            "pushNotifications": self.push_notifications,
            "reminderNotifications": self.reminder_notifications,
            "theme": self.theme,
            "language": self.language,
            "fontSize": self.font_size,
            "shareData": self.share_data,
            "anonymousAnalytics": self.anonymous_analytics,
            "updatedAt": _iso(self.updated_at),
        }


class SymptomEntryManager(models.Manager):
    def create_with_predictions(self, user, symptoms, predictions):
        """Store one entry and its predictions in a single transaction.

        ``predictions`` are backend ``diseasePredictions`` dicts, already ranked.
        Their order is stored as ``rank`` so reads return the backend ranking.
        A repeated disease name keeps its first (highest-ranked) occurrence.
        """
        with transaction.atomic():
            entry = self.create(user=user, symptoms=list(symptoms))
            rows, seen = [], set()
            for item in predictions:
                name = item["diseaseName"]
                if name in seen:
                    continue
                seen.add(name)
                rows.append(DiseasePrediction(
                    entry=entry,
                    rank=len(rows),
                    disease_name=name,
                    probability=item["probability"],
                    description=item.get("description", ""),
                    precautions=item.get("precautions", []),
                    medications=item.get("medications", []),
                    workouts=item.get("workouts", []),
                    diets=item.get("diets", []),
                    ai_insights=item.get("aiInsights"),
                ))
            DiseasePrediction.objects.bulk_create(rows)
        return entry


class SymptomEntry(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="symptom_entries")
    symptoms = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = SymptomEntryManager()

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "symptom entries"

    def __str__(self):
        return f"{self.user}: {', '.join(self.symptoms)}"

    def clean(self):
        if not self.symptoms:
            raise ValidationError({"symptoms": "A symptom entry needs at least one symptom."})

    def to_dict(self, predictions=None):
        if predictions is None:
            predictions = self.predictions.all()
        return {
            "id": self.pk,
            "userId": self.user_id,
            "symptoms": self.symptoms,
            "createdAt": _iso(self.created_at),
            "predictions": [p.to_dict() for p in predictions],
        }


class DiseasePrediction(models.Model):
    entry = models.ForeignKey(SymptomEntry, on_delete=models.CASCADE, related_name="predictions")
    rank = models.PositiveSmallIntegerField(default=0)
    disease_name = models.CharField(max_length=255)
    probability = models.FloatField(validators=[MinValueValidator(0), MaxValueValidator(100)])
    description = models.TextField(blank=True)
    precautions = models.JSONField(default=list)
    medications = models.JSONField(default=list)
    workouts = models.JSONField(default=list)
    diets = models.JSONField(default=list)
    ai_insights = models.JSONField(blank=True, null=True)

    class Meta:
        ordering = ["rank", "id"]
        constraints = [
            models.UniqueConstraint(fields=["entry", "disease_name"], name="unique_disease_per_entry"),
            models.CheckConstraint(
                condition=models.Q(probability__gte=0) & models.Q(probability__lte=100),
                name="probability_is_percentage",
            ),
        ]

    def __str__(self):
        return f"{self.disease_name} ({self.probability:.1f}%)"

    def to_dict(self):
        return {
            "id": self.pk,
            "symptomEntryId": self.entry_id,
            "diseaseName": self.disease_name,
            "probability": self.probability,
            "description": self.description,
            "precautions": self.precautions,
            "medications": self.medications,
            "workouts": self.workouts,
            "diets": self.diets,
            "aiInsights": self.ai_insights,
        }


class Appointment(models.Model):
    STATUS_CHOICES = [("upcoming", "Upcoming"), ("completed", "Completed"), ("cancelled", "Cancelled")]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="appointments")
    doctor_name = models.CharField(max_length=255)
    specialty = models.CharField(max_length=255, blank=True)
    location = models.CharField(max_length=255, blank=True)
    scheduled_for = models.DateTimeField()
    notes = models.TextField(blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="upcoming")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["scheduled_for"]

    def to_dict(self):
        return {
            "id": self.pk,
            "doctorName": self.doctor_name,
            "specialty": self.specialty,
            "location": self.location,
            "scheduledFor": _iso(self.scheduled_for),
            "notes": self.notes,
            "status": self.status,
            "createdAt": _iso(self.created_at),
        }


class Medication(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="medications")
    name = models.CharField(max_length=255)
    dosage = models.CharField(max_length=100)
    frequency = models.CharField(max_length=100)
    time_of_day = models.CharField(max_length=100, blank=True)
    purpose = models.CharField(max_length=255, blank=True)
    instructions = models.TextField(blank=True)
    start_date = models.DateField(blank=True, null=True)
    end_date = models.DateField(blank=True, null=True)
    refill_date = models.DateField(blank=True, null=True)
    refills_left = models.PositiveSmallIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def to_dict(self):
        return {
            "id": self.pk,
            "name": self.name,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "timeOfDay": self.time_of_day,
            "purpose": self.purpose,
            "instructions": self.instructions,
            "startDate": _iso(self.start_date),
            "endDate": _iso(self.end_date),
            "refillDate": _iso(self.refill_date),
            "refillsLeft": self.refills_left,
        }
