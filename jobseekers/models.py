"""
Jobseeker Models - profile store for CVs

Models:
- JobSeekerProfile: identity and display fields of a jobseeker, plus the
  single authoritative publication state
- CVDocument: the CV owned 1:1 by a profile, carrying the version marker
- CVSection: one typed, schema-validated payload per section type

The CV lock is not stored. ``CVDocument.is_locked`` is derived from the
owning profile's publication state, so a published profile always has a
locked CV and a draft profile always has an editable one.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampedModel, UUIDModel

from .sections import SectionType


class JobSeekerProfile(UUIDModel):
    """
    Jobseeker profile.

    ``age`` and ``phone`` are private: age is only used as a search filter,
    phone is only disclosed to an employer through an accepted interview.
    """

    class PublicationState(models.TextChoices):
        DRAFT = 'draft', _('Draft')
        PUBLISHED = 'published', _('Published')

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='jobseeker_profile',
    )

    full_name = models.CharField(max_length=200)
    city = models.CharField(max_length=100, blank=True)
    preferred_role = models.CharField(max_length=200, blank=True)
    years_experience = models.PositiveSmallIntegerField(default=0)

    # Private fields
    age = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        help_text=_('Used for search filtering only, never shown to employers')
    )
    phone = models.CharField(
        max_length=30,
        blank=True,
        help_text=_('Disclosed only to employers with an accepted interview')
    )

    publication_state = models.CharField(
        max_length=20,
        choices=PublicationState.choices,
        default=PublicationState.DRAFT,
        db_index=True,
    )
    published_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Jobseeker Profile')
        verbose_name_plural = _('Jobseeker Profiles')
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['publication_state', 'city'], name='idx_jobseeker_state_city'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.get_publication_state_display()})"

    @property
    def is_visible(self) -> bool:
        return self.publication_state == self.PublicationState.PUBLISHED

    @property
    def profile_completeness(self) -> int:
        """Percentage of publication rules currently satisfied."""
        from .services import CompletenessPolicy
        return CompletenessPolicy.score(self.cv)


class CVDocument(UUIDModel):
    """
    CV owned by a jobseeker profile.

    ``version`` increases by one on every logical save and identifies the
    content captured by employer snapshots.
    """

    profile = models.OneToOneField(
        JobSeekerProfile,
        on_delete=models.CASCADE,
        related_name='cv',
    )
    version = models.PositiveIntegerField(default=1)

    class Meta:
        verbose_name = _('CV Document')
        verbose_name_plural = _('CV Documents')

    def __str__(self):
        return f"CV of {self.profile.full_name} v{self.version}"

    @property
    def is_locked(self) -> bool:
        return self.profile.is_visible

    def sections_by_type(self):
        """Return ``{section_type: CVSection}`` using prefetched rows when available."""
        return {section.section_type: section for section in self.sections.all()}


class CVSection(TimestampedModel):
    """A single CV section. One row per (cv, section_type)."""

    cv = models.ForeignKey(
        CVDocument,
        on_delete=models.CASCADE,
        related_name='sections',
    )
    section_type = models.CharField(max_length=20, choices=SectionType.choices)
    content = models.JSONField(default=dict)
    position = models.PositiveSmallIntegerField(default=0)
    search_text = models.TextField(
        blank=True,
        help_text=_('Lower-cased flattening of the payload, used by search')
    )

    class Meta:
        verbose_name = _('CV Section')
        verbose_name_plural = _('CV Sections')
        ordering = ['position', 'section_type']
        constraints = [
            models.UniqueConstraint(fields=['cv', 'section_type'], name='uq_cv_section_type'),
        ]

    def __str__(self):
        return f"{self.get_section_type_display()} ({self.cv_id})"
