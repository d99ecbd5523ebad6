"""
accounts.models

The project's AUTH_USER_MODEL. `login` is the natural key; passwords are stored
through Django's salted hashers (set_password / check_password).
"""
from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models
from django.utils import timezone


ROLE_CUSTOMER = "customer"
ROLE_DRIVER = "driver"
ROLE_MANAGER = "manager"
ROLE_CHOICES = [
    (ROLE_CUSTOMER, "Customer"),
    (ROLE_DRIVER, "Driver"),
    (ROLE_MANAGER, "Manager"),
]
ROLES = tuple(value for value, _ in ROLE_CHOICES)


class UserManager(BaseUserManager):

    def create_user(self, login, password=None, **extra_fields):
        if not login:
            raise ValueError("Users must have a login")
        extra_fields.setdefault("role", ROLE_CUSTOMER)
        user = self.model(login=login, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, login, password=None, **extra_fields):
        extra_fields["role"] = ROLE_MANAGER
        return self.create_user(login, password, **extra_fields)


class User(AbstractBaseUser):
    login = models.CharField(max_length=50, unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER, db_index=True)
    favorite_item = models.ForeignKey(
        "catalog.Item",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="favorited_by",
    )
    phone_number = models.CharField(max_length=20, blank=True, default="")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    objects = UserManager()

    USERNAME_FIELD = "login"
    REQUIRED_FIELDS = ["phone_number"]

    class Meta:
        ordering = ["login"]

    def __str__(self) -> str:
        return f"{self.login} ({self.role})"

    @property
    def is_manager(self) -> bool:
        return self.role == ROLE_MANAGER

    # Django admin access: managers only.
    @property
    def is_staff(self) -> bool:
        return self.is_active and self.is_manager

    def has_perm(self, perm, obj=None) -> bool:
        return self.is_staff

    def has_module_perms(self, app_label) -> bool:
        return self.is_staff
