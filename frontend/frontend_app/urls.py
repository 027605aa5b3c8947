from django.urls import path

from . import user_views, views

app_name = "frontend_app"

urlpatterns = [
    # Authentication
    path("auth/csrf", user_views.csrf_view, name="csrf"),
    path("auth/signup", user_views.signup_view, name="signup"),
    path("auth/login", user_views.login_view, name="login"),
    path("auth/logout", user_views.logout_view, name="logout"),

    # Account
    path("user", user_views.user_view, name="user"),
    path("user/profile", user_views.profile_view, name="profile"),
    path("user/preferences", user_views.preferences_view, name="preferences"),
    path("user/change-password", user_views.change_password_view, name="change_password"),
    path("user/delete-account", user_views.delete_account_view, name="delete_account"),

    # Symptom analysis and history
    path("free-symptoms", views.free_symptoms, name="free_symptoms"),
    path("disease-prediction", views.disease_prediction, name="disease_prediction"),
    path("predict", views.predict, name="predict"),
    path("symptoms", views.symptoms, name="symptoms"),
    path("symptoms/<int:entry_id>", views.symptom_detail, name="symptom_detail"),
    path("chat", views.chat, name="chat"),

    # Third-party search
    path("recipes", views.recipes, name="recipes"),
    path("recipes/<int:recipe_id>", views.recipe_detail, name="recipe_detail"),
    path("doctors", views.doctors, name="doctors"),

    # Tracking
    path("appointments", views.appointments, name="appointments"),
    path("appointments/<int:appointment_id>", views.appointment_detail, name="appointment_detail"),
    path("medications", views.medications, name="medications"),
    path("medications/<int:medication_id>", views.medication_detail, name="medication_detail"),
]
