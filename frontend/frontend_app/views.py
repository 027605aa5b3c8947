import logging

from django.forms.models import model_to_dict
from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from . import backend_client
from .backend_client import BackendError
from .forms import (
    AppointmentForm,
    ChatForm,
    DoctorSearchForm,
    MedicationForm,
    RecipeSearchForm,
    SymptomForm,
)
from .jsonapi import ApiError, json_api, parse_json_body, snake_case_keys, validated
from .models import Appointment, Medication, SymptomEntry
from .session_cache import api_login_required, get_cached_user

logger = logging.getLogger(__name__)

RECENT_HISTORY_SIZE = 5


# ---- Symptom analysis ----

def _analyze(request):
    """Validate the posted symptoms and run them through the AI backend.

    Raises ``ApiError`` before any backend call when the symptoms are invalid.
    """
    body = parse_json_body(request)
    symptoms = validated(SymptomForm(data={"symptoms": body.get("symptoms")}))["symptoms"]
    try:
        payload = backend_client.request_predictions(symptoms)
    except BackendError as e:
        logger.error(f"Prediction failed for {symptoms}: {e}")
        raise ApiError("Failed to get predictions", status=500) from e
    if not payload.get("diseasePredictions"):
        logger.error(f"Backend returned no predictions for {symptoms}")
        raise ApiError("Failed to get predictions", status=500)
    return symptoms, payload


def _analyze_and_store(request):
    symptoms, payload = _analyze(request)
    entry = SymptomEntry.objects.create_with_predictions(
        request.user, symptoms, payload["diseasePredictions"]
    )
    return entry, payload


def _disease_prediction_response(request):
    entry, payload = _analyze_and_store(request)
    return JsonResponse({
        **payload,
        "symptomEntryId": entry.pk,
        "diseasePredictions": [p.to_dict() for p in entry.predictions.all()],
    })


@require_POST
@json_api
def free_symptoms(request):
    """Public analysis: nothing is stored."""
    _, payload = _analyze(request)
    return JsonResponse(payload)


@require_POST
@api_login_required
@json_api
def disease_prediction(request):
    return _disease_prediction_response(request)


@require_POST
@api_login_required
@json_api
def predict(request):
    """Stores the full analysis but answers with the top-ranked disease only."""
    entry, _ = _analyze_and_store(request)
    top = entry.predictions.first()
    return JsonResponse({
        "disease": top.disease_name,
        "probability": top.probability,
        "description": top.description,
        "precautions": top.precautions,
        "medications": top.medications,
        "workout": top.workouts,
        "diet": top.diets,
        "id": entry.pk,
        "createdAt": entry.created_at.isoformat(),
    })


# ---- Symptom history ----

@require_http_methods(["GET", "POST", "DELETE"])
@api_login_required
@json_api
def symptoms(request):
    if request.method == "POST":
        return _disease_prediction_response(request)

    entries = request.user.symptom_entries.all()
    if request.method == "DELETE":
        entries.delete()
        return HttpResponse(status=204)

    entries = entries.prefetch_related("predictions")
    return JsonResponse([entry.to_dict() for entry in entries], safe=False)


@require_http_methods(["GET", "DELETE"])
@api_login_required
@json_api
def symptom_detail(request, entry_id):
    try:
        entry = request.user.symptom_entries.get(pk=entry_id)
    except SymptomEntry.DoesNotExist:
        raise ApiError("Not found", status=404)

    if request.method == "DELETE":
        entry.delete()
        return HttpResponse(status=204)
    return JsonResponse(entry.to_dict())


# ---- Chat ----

def _recent_history(user):
    entries = user.symptom_entries.prefetch_related("predictions")[:RECENT_HISTORY_SIZE]
    recent = []
    for entry in entries:
        predictions = list(entry.predictions.all())
        top = predictions[0] if predictions else None
        recent.append({
            "createdAt": entry.created_at.date().isoformat(),
            "disease": top.disease_name if top else None,
            "symptoms": entry.symptoms,
            "description": top.description if top else None,
            "precautions": top.precautions if top else [],
            "medications": top.medications if top else [],
            "workouts": top.workouts if top else [],
            "diets": top.diets if top else [],
        })
    return recent


def _chat_history(raw):
    if not isinstance(raw, list):
        return []
    return [
        {"role": str(item["role"]), "content": str(item["content"])}
        for item in raw
        if isinstance(item, dict) and "role" in item and "content" in item
    ]


@require_POST
@json_api
def chat(request):
    body = parse_json_body(request)
    message = validated(ChatForm(data={"message": body.get("message")}))["message"]
    user = get_cached_user(request)
    recent = _recent_history(user) if user is not None else []
    try:
        reply = backend_client.request_chat(message, _chat_history(body.get("history")), recent)
    except BackendError as e:
        raise ApiError("Failed to process chat message", status=500) from e
    return JsonResponse(reply)


# ---- Third-party proxies ----

@require_GET
@json_api
def recipes(request):
    form = RecipeSearchForm(data=request.GET)
    if not form.is_valid():
        raise ApiError("Query parameter is required")
    try:
        return JsonResponse(backend_client.search_recipes(form.cleaned_data["query"]))
    except BackendError as e:
        raise ApiError("Failed to fetch recipes", status=500) from e


@require_GET
@json_api
def recipe_detail(request, recipe_id):
    try:
        return JsonResponse(backend_client.get_recipe(recipe_id))
    except BackendError as e:
        raise ApiError("Failed to fetch recipe", status=500) from e


@require_GET
@json_api
def doctors(request):
    params = validated(DoctorSearchForm(data=request.GET))
    try:
        return JsonResponse(backend_client.search_doctors(**params))
    except BackendError as e:
        raise ApiError("Failed to fetch doctors", status=500) from e


# ---- Appointments & medications ----

def _create_owned(request, form_class, defaults=None):
    data = {**(defaults or {}), **snake_case_keys(parse_json_body(request))}
    form = form_class(data=data)
    validated(form)
    obj = form.save(commit=False)
    obj.user = request.user
    obj.save()
    return JsonResponse(obj.to_dict(), status=201)


def _update_or_delete_owned(request, form_class, obj):
    if request.method == "DELETE":
        obj.delete()
        return HttpResponse(status=204)
    data = {
        **model_to_dict(obj, fields=form_class._meta.fields),
        **snake_case_keys(parse_json_body(request)),
    }
    form = form_class(data=data, instance=obj)
    validated(form)
    return JsonResponse(form.save().to_dict())


@require_http_methods(["GET", "POST"])
@api_login_required
@json_api
def appointments(request):
    if request.method == "POST":
        return _create_owned(request, AppointmentForm, defaults={"status": "upcoming"})
    items = request.user.appointments.all()
    status = request.GET.get("status")
    if status:
        items = items.filter(status=status)
    return JsonResponse([a.to_dict() for a in items], safe=False)


@require_http_methods(["PUT", "DELETE"])
@api_login_required
@json_api
def appointment_detail(request, appointment_id):
    try:
        appointment = request.user.appointments.get(pk=appointment_id)
    except Appointment.DoesNotExist:
        raise ApiError("Not found", status=404)
    return _update_or_delete_owned(request, AppointmentForm, appointment)


@require_http_methods(["GET", "POST"])
@api_login_required
@json_api
def medications(request):
    if request.method == "POST":
        return _create_owned(request, MedicationForm, defaults={"refills_left": 0})
    return JsonResponse([m.to_dict() for m in request.user.medications.all()], safe=False)


@require_http_methods(["PUT", "DELETE"])
@api_login_required
@json_api
def medication_detail(request, medication_id):
    try:
        medication = request.user.medications.get(pk=medication_id)
    except Medication.DoesNotExist:
        raise ApiError("Not found", status=404)
    return _update_or_delete_owned(request, MedicationForm, medication)
