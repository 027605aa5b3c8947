from django.contrib import admin
from .models import (
    Appointment,
    DiseasePrediction,
    Medication,
    SymptomEntry,
    UserPreferences,
    UserProfile,
)


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "age", "gender")
    search_fields = ("user__username", "family_history")


@admin.register(UserPreferences)
class UserPreferencesAdmin(admin.ModelAdmin):
    list_display = ("user", "theme", "language", "email_notifications")


class DiseasePredictionInline(admin.TabularInline):
    model = DiseasePrediction
    extra = 0
    fields = ("disease_name", "probability", "description")


@admin.register(SymptomEntry)
class SymptomEntryAdmin(admin.ModelAdmin):
    list_display = ("user", "created_at")
    search_fields = ("user__username", "symptoms")
    list_filter = ("created_at",)
    inlines = [DiseasePredictionInline]


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ("user", "doctor_name", "scheduled_for", "status")
    list_filter = ("status",)


@admin.register(Medication)
class MedicationAdmin(admin.ModelAdmin):
    list_display = ("user", "name", "dosage", "frequency")
    search_fields = ("user__username", "name")
