from django import forms
from django.contrib.auth.forms import UserCreationForm, AuthenticationForm
from django.contrib.auth.models import User
from .models import UserProfile


class SignUpForm(UserCreationForm):
    email = forms.EmailField(required=True)

    class Meta:
        model = User
        fields = ("username", "email", "password1", "password2")


class LoginForm(AuthenticationForm):
    error_messages = {
        **AuthenticationForm.error_messages,
        "invalid_login": "Invalid username or password.",
    }


class ProfileForm(forms.ModelForm):
    name = forms.CharField(max_length=150, required=False)
    email = forms.EmailField(required=False)

    class Meta:
        model = UserProfile
        fields = ["age", "gender", "family_history"]

    def save(self, commit=True):
        profile = super().save(commit=False)
        user = profile.user
        name = self.cleaned_data.get("name")
        if name:
            first, _, last = name.partition(" ")
            user.first_name, user.last_name = first, last
        if self.cleaned_data.get("email"):
            user.email = self.cleaned_data["email"]
        if commit:
            user.save()
            profile.save()
        return profile


class DeleteAccountForm(forms.Form):
    password = forms.CharField(strip=False)

    def __init__(self, user, *args, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_password(self):
        password = self.cleaned_data["password"]
        if not self.user.check_password(password):
            raise forms.ValidationError("Password is incorrect")
        return password
