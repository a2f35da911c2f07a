"""Forms for the authentication pages (register, login)."""

from django import forms
from django.contrib.auth import get_user_model, password_validation
from django.contrib.auth.forms import AuthenticationForm

User = get_user_model()


class EmailAuthenticationForm(AuthenticationForm):
    """Login form labelled for email; verification goes through bcrypt in User.check_password."""

    username = forms.EmailField(label="Email", widget=forms.EmailInput(attrs={"autofocus": True}))


class RegisterForm(forms.Form):
    """Validate and create an author account."""

    email = forms.EmailField()
    first_name = forms.CharField(max_length=150)
    last_name = forms.CharField(max_length=150, required=False)
    password = forms.CharField(widget=forms.PasswordInput, min_length=8)
    repeat_password = forms.CharField(widget=forms.PasswordInput, min_length=8)

    def clean_email(self):
        """Ensure email is unique before creation."""
        email = User.objects.normalize_email(self.cleaned_data["email"])
        if User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("Email already in use")
        return email

    def clean(self):
        """Ensure provided passwords match and satisfy the password validators."""
        cleaned_data = super().clean()
        password = cleaned_data.get("password")
        if password and password != cleaned_data.get("repeat_password"):
            self.add_error("repeat_password", "Passwords do not match")
        elif password:
            candidate = User(
                email=cleaned_data.get("email", ""),
                first_name=cleaned_data.get("first_name", ""),
                last_name=cleaned_data.get("last_name", ""),
            )
            try:
                password_validation.validate_password(password, candidate)
            except forms.ValidationError as exc:
                self.add_error("password", exc)
        return cleaned_data

    def save(self):
        """Create the user with a hashed password."""
        data = self.cleaned_data
        return User.objects.create_user(
            email=data["email"],
            password=data["password"],
            first_name=data["first_name"],
            last_name=data.get("last_name", ""),
        )


__all__ = ["EmailAuthenticationForm", "RegisterForm"]
