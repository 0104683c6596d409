from django.contrib.auth.hashers import check_password, make_password
from django.db import models


class AdminUserManager(models.Manager):
    def create_admin(self, username, password, role="admin"):
        if not username:
            raise ValueError("The username field must be set")
        if not password:
            raise ValueError("The password field must be set")

        admin = self.model(username=username, role=role)
        admin.set_password(password)
        admin.save(using=self._db)
        return admin


class AdminUser(models.Model):
    ROLE_ADMIN = "admin"
    ROLE_PRODUCT_ADMIN = "product_admin"
    ROLE_CHOICES = (
        (ROLE_ADMIN, "Administrador"),
        (ROLE_PRODUCT_ADMIN, "Administrador de produtos"),
    )

    username = models.CharField(max_length=150, unique=True)
    password_hash = models.CharField(max_length=255)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_ADMIN)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AdminUserManager()

    def __str__(self):
        return f"{self.username} ({self.role})"

    def set_password(self, raw_password):
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password_hash)

    @property
    def can_view_financial_data(self):
        return self.role == self.ROLE_ADMIN
