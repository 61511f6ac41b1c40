from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
	"""Users sign in with their e-mail address, stored lower-cased."""

	def _create_user(self, email, password, **extra_fields):
		if not email:
			raise ValueError("An e-mail address is required")
		user = self.model(email=self.normalize_email(email).lower(), **extra_fields)
		user.set_password(password)
		user.save(using=self._db)
		return user

	def create_user(self, email, password=None, **extra_fields):
		extra_fields.setdefault("is_staff", False)
		extra_fields.setdefault("is_superuser", False)
		return self._create_user(email, password, **extra_fields)

	def create_superuser(self, email, password=None, **extra_fields):
		for flag in ("is_staff", "is_superuser"):
			if extra_fields.setdefault(flag, True) is not True:
				raise ValueError(f"Superuser must have {flag}=True")
		extra_fields.setdefault("role", User.Role.OWNER)
		return self._create_user(email, password, **extra_fields)

	def approvers(self):
		return self.filter(is_active=True).filter(models.Q(is_superuser=True) | models.Q(role__in=User.APPROVER_ROLES))


class User(AbstractBaseUser, PermissionsMixin):
	class Role(models.TextChoices):
		OWNER = "owner", "Owner"
		ADMIN = "admin", "Admin"
		EXECUTIVE = "executive", "Export Executive"
		VIEWER = "viewer", "Viewer"

	# Roles allowed to approve or reject documents awaiting internal sign-off.
	APPROVER_ROLES = frozenset({Role.OWNER, Role.ADMIN})

	email = models.EmailField(unique=True)
	full_name = models.CharField(max_length=255, blank=True)
	phone = models.CharField(max_length=50, blank=True)

	role = models.CharField(max_length=20, choices=Role.choices, default=Role.EXECUTIVE)

	is_active = models.BooleanField(default=True)
	is_staff = models.BooleanField(default=False)
	date_joined = models.DateTimeField(default=timezone.now)

	objects = UserManager()

	USERNAME_FIELD = "email"
	REQUIRED_FIELDS = []

	def __str__(self):
		return self.email

	def get_full_name(self):
		return self.full_name or self.email

	@property
	def can_approve(self) -> bool:
		return self.is_superuser or self.role in self.APPROVER_ROLES
