from django.contrib.auth import login, logout, update_session_auth_hash
from django.contrib.auth.forms import PasswordChangeForm
from django.forms.models import model_to_dict
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from .forms import PreferencesForm
from .jsonapi import ApiError, json_api, parse_json_body, snake_case_keys, validated
from .models import UserPreferences, UserProfile
from .session_cache import api_login_required, invalidate_cached_user
from .user_forms import DeleteAccountForm, LoginForm, ProfileForm, SignUpForm


def _user_summary(user):
    return {
        "id": user.pk,
        "username": user.username,
        "name": user.get_full_name() or user.username,
        "email": user.email,
    }


@require_GET
@ensure_csrf_cookie
def csrf_view(request):
    return JsonResponse({"csrfToken": get_token(request)})


@require_POST
@json_api
def signup_view(request):
    body = parse_json_body(request)
    password = body.get("password") or body.get("password1")
    form = SignUpForm(data={
        "username": body.get("username"),
        "email": body.get("email"),
        "password1": password,
        "password2": body.get("confirmPassword") or body.get("password2") or password,
    })
    validated(form)
    user = form.save()
    UserProfile.objects.get_or_create(user=user)
    UserPreferences.objects.get_or_create(user=user)
    login(request, user)
    return JsonResponse({"user": _user_summary(user)}, status=201)


@require_POST
@json_api
def login_view(request):
    body = parse_json_body(request)
    form = LoginForm(request, data={"username": body.get("username"), "password": body.get("password")})
    if not form.is_valid():
        raise ApiError("Invalid username or password.", status=401)
    user = form.get_user()
    login(request, user)
    return JsonResponse({"user": _user_summary(user)})


@require_POST
def logout_view(request):
    invalidate_cached_user(request.user.pk)
    logout(request)
    return JsonResponse({"message": "Logged out"})


@require_GET
@api_login_required
def user_view(request):
    user = request.user
    profile, _ = UserProfile.objects.get_or_create(user=user)
    preferences, _ = UserPreferences.objects.get_or_create(user=user)
    return JsonResponse({
        **_user_summary(user),
        "age": profile.age,
        "gender": profile.gender or None,
        "preferences": preferences.to_dict(),
    })


@require_http_methods(["GET", "PUT"])
@api_login_required
@json_api
def profile_view(request):
    user_profile, _ = UserProfile.objects.get_or_create(user=request.user)
    if request.method == "PUT":
        data = {
            **model_to_dict(user_profile, fields=ProfileForm._meta.fields),
            **snake_case_keys(parse_json_body(request)),
        }
        form = ProfileForm(data=data, instance=user_profile)
        validated(form)
        user_profile = form.save()
        invalidate_cached_user(request.user.pk)
    return JsonResponse(user_profile.to_dict())


@require_http_methods(["GET", "PUT"])
@api_login_required
@json_api
def preferences_view(request):
    # Defaults are created on first access.
    preferences, _ = UserPreferences.objects.get_or_create(user=request.user)
    if request.method == "PUT":
        data = {
            **model_to_dict(preferences, fields=PreferencesForm._meta.fields),
            **snake_case_keys(parse_json_body(request)),
        }
        form = PreferencesForm(data=data, instance=preferences)
        validated(form)
        preferences = form.save()
    return JsonResponse(preferences.to_dict())


@require_POST
@api_login_required
@json_api
def change_password_view(request):
    body = parse_json_body(request)
    current, new = body.get("currentPassword"), body.get("newPassword")
    if not current or not new:
        raise ApiError("Missing required fields")
    form = PasswordChangeForm(request.user, data={
        "old_password": current,
        "new_password1": new,
        "new_password2": body.get("confirmPassword") or new,
    })
    validated(form)
    user = form.save()
    invalidate_cached_user(user.pk)
    update_session_auth_hash(request, user)
    return JsonResponse({"message": "Password updated successfully"})


@require_POST
@api_login_required
@json_api
def delete_account_view(request):
    body = parse_json_body(request)
    if not body.get("password"):
        raise ApiError("Password is required")
    user = request.user
    validated(DeleteAccountForm(user, data={"password": body["password"]}))
    user_id = user.pk
    logout(request)
    # Cascades to profile, preferences, symptom entries, appointments and medications.
    user.delete()
    invalidate_cached_user(user_id)
    return JsonResponse({"message": "Account deleted successfully", "shouldSignOut": True})
