from django import forms
from django.contrib import admin
from django.contrib.auth import password_validation
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User


class UserCreationAdminForm(forms.ModelForm):
	password1 = forms.CharField(label="Password", strip=False, widget=forms.PasswordInput)
	password2 = forms.CharField(label="Password confirmation", strip=False, widget=forms.PasswordInput)

	class Meta:
		model = User
		fields = ("email", "full_name", "phone", "role", "is_active", "is_staff")

	def clean_email(self):
		email = (self.cleaned_data.get("email") or "").strip().lower()
		if User.objects.filter(email=email).exists():
			raise forms.ValidationError("A user with that email already exists.")
		return email

	def clean(self):
		cleaned = super().clean()
		if cleaned.get("password1") != cleaned.get("password2"):
			raise forms.ValidationError("Passwords do not match.")
		if cleaned.get("password1"):
			password_validation.validate_password(cleaned["password1"], self.instance)
		return cleaned

	def save(self, commit=True):
		user = super().save(commit=False)
		user.set_password(self.cleaned_data["password1"])
		if commit:
			user.save()
			self.save_m2m()
		return user


class UserChangeAdminForm(forms.ModelForm):
	class Meta:
		model = User
		fields = ("email", "full_name", "phone", "role", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
	add_form = UserCreationAdminForm
	form = UserChangeAdminForm
	model = User

	ordering = ("email",)
	list_display = ("email", "full_name", "role", "is_active", "is_staff")
	list_filter = ("role", "is_active", "is_staff", "is_superuser")
	search_fields = ("email", "full_name", "phone")
	readonly_fields = ("last_login", "date_joined")

	fieldsets = (
		(None, {"fields": ("email",)}),
		("Profile", {"fields": ("full_name", "phone", "role")}),
		("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
		("Important dates", {"fields": ("last_login", "date_joined")}),
	)
	add_fieldsets = (
		(
			None,
			{
				"classes": ("wide",),
				"fields": ("email", "full_name", "phone", "role", "is_active", "is_staff", "password1", "password2"),
			},
		),
	)
