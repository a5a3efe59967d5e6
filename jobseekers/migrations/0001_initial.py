import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='JobSeekerProfile',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('full_name', models.CharField(max_length=200)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('preferred_role', models.CharField(blank=True, max_length=200)),
                ('years_experience', models.PositiveSmallIntegerField(default=0)),
                ('age', models.PositiveSmallIntegerField(blank=True, help_text='Used for search filtering only, never shown to employers', null=True)),
                ('phone', models.CharField(blank=True, help_text='Disclosed only to employers with an accepted interview', max_length=30)),
                ('publication_state', models.CharField(choices=[('draft', 'Draft'), ('published', 'Published')], db_index=True, default='draft', max_length=20)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='jobseeker_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Jobseeker Profile',
                'verbose_name_plural': 'Jobseeker Profiles',
                'ordering': ['-updated_at'],
                'indexes': [models.Index(fields=['publication_state', 'city'], name='idx_jobseeker_state_city')],
            },
        ),
        migrations.CreateModel(
            name='CVDocument',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('version', models.PositiveIntegerField(default=1)),
                ('profile', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='cv', to='jobseekers.jobseekerprofile')),
            ],
            options={
                'verbose_name': 'CV Document',
                'verbose_name_plural': 'CV Documents',
            },
        ),
        migrations.CreateModel(
            name='CVSection',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated')),
                ('section_type', models.CharField(choices=[('summary', 'Professional Summary'), ('experience', 'Experience'), ('education', 'Education'), ('skills', 'Skills'), ('languages', 'Languages'), ('certifications', 'Certifications'), ('projects', 'Projects'), ('publications', 'Publications')], max_length=20)),
                ('content', models.JSONField(default=dict)),
                ('position', models.PositiveSmallIntegerField(default=0)),
                ('search_text', models.TextField(blank=True, help_text='Lower-cased flattening of the payload, used by search')),
                ('cv', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sections', to='jobseekers.cvdocument')),
            ],
            options={
                'verbose_name': 'CV Section',
                'verbose_name_plural': 'CV Sections',
                'ordering': ['position', 'section_type'],
                'constraints': [models.UniqueConstraint(fields=('cv', 'section_type'), name='uq_cv_section_type')],
            },
        ),
    ]
