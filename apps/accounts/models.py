from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class Role(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    ROOT = 'root', 'Root'


class UserManager(BaseUserManager):
    """Custom user manager for username-based authentication."""

    def create_user(self, username, password=None, role=Role.ADMIN, **extra_fields):
        if not username:
            raise ValueError('Username is required')

        user = self.model(username=username, role=role, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(username, password, role=Role.ROOT, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Ledger operator with a privilege tier and an optional super-root capability."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(unique=True, max_length=150, db_index=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.ADMIN)

    # Capability flag, orthogonal to role
    is_super_root = models.BooleanField(default=False)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        ordering = ['username']

    def __str__(self):
        return self.username

    def save(self, *args, **kwargs):
        """The configured super-root username is always root with the capability."""
        if self.username == settings.SUPER_ROOT_USERNAME:
            self.role = Role.ROOT
            self.is_super_root = True
            update_fields = kwargs.get('update_fields')
            if update_fields is not None:
                kwargs['update_fields'] = set(update_fields) | {'role', 'is_super_root'}
        super().save(*args, **kwargs)

    @property
    def is_root(self):
        return self.role == Role.ROOT
