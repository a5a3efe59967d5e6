"""
Account model.

Authentication and session issuance are handled by the identity provider;
SeaVitae only needs a stable account id and the account's role.
"""

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils.translation import gettext_lazy as _


class CustomUser(AbstractUser):
    """
    Platform account.

    Every account has exactly one role which decides whether it may own a
    jobseeker profile, an employer profile, or review employers.
    """

    class Role(models.TextChoices):
        JOBSEEKER = 'jobseeker', _('Jobseeker')
        EMPLOYER = 'employer', _('Employer')
        ADMIN = 'admin', _('Admin')

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        help_text=_('Global unique identifier for this user')
    )

    email = models.EmailField(
        unique=True,
        help_text=_('Email address, also used for notifications')
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.JOBSEEKER,
        db_index=True,
    )

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')

    def __str__(self):
        return self.email

    @property
    def is_jobseeker(self) -> bool:
        return self.role == self.Role.JOBSEEKER

    @property
    def is_employer(self) -> bool:
        return self.role == self.Role.EMPLOYER

    @property
    def is_admin_role(self) -> bool:
        return self.role == self.Role.ADMIN
