import re

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models

from apps.common.constants import UserRole
from apps.common.models import BaseModel


class UserManager(BaseUserManager):
    def create_user(self, name, pin=None, **extra_fields):
        if not name:
            raise ValueError("The Name field must be set")
        # createsuperuser passes the PIN as ``password``
        password = extra_fields.pop("password", None)
        pin = pin if pin is not None else password
        extra_fields.setdefault("email", default_email_for(name))
        extra_fields["email"] = self.normalize_email(extra_fields["email"])
        user = self.model(name=name, **extra_fields)
        user.set_password(pin)
        user.save(using=self._db)
        return user

    def create_superuser(self, name, pin=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", UserRole.SUPERADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(name, pin, **extra_fields)


def default_email_for(name: str) -> str:
    local_part = re.sub(r"\s+", "", name).lower()
    return f"{local_part}@pos.local"


class User(AbstractBaseUser, PermissionsMixin, BaseModel):
    # The PIN is stored through AbstractBaseUser.password (hashed by Django's hashers)
    name = models.CharField(max_length=80, unique=True)
    email = models.EmailField(blank=True)
    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.WAITER)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    objects = UserManager()

    USERNAME_FIELD = "name"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        db_table = "user"
        ordering = ["name"]
        indexes = [models.Index(fields=["role"], name="user_role_idx")]

    def save(self, *args, **kwargs):
        # Administrators get access to the admin site
        self.is_staff = self.is_superuser or self.role in UserRole.managers()
        super().save(*args, **kwargs)

    def set_pin(self, pin: str):
        self.set_password(pin)

    def check_pin(self, pin: str) -> bool:
        return self.check_password(pin)

    def __str__(self):
        return f"{self.name} ({self.get_role_display()})"
