import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('jobseekers', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='EmployerProfile',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('employer_type', models.CharField(choices=[('individual', 'Individual'), ('company', 'Company')], max_length=20)),
                ('display_name', models.CharField(max_length=200)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('website', models.URLField(blank=True)),
                ('linkedin', models.URLField(blank=True)),
                ('contact_person_name', models.CharField(blank=True, max_length=200)),
                ('contact_person_role', models.CharField(blank=True, max_length=200)),
                ('company_name', models.CharField(blank=True, max_length=200)),
                ('registration_number', models.CharField(blank=True, max_length=100)),
                ('national_id', models.CharField(blank=True, max_length=100)),
                ('verification_document_id', models.CharField(blank=True, help_text='Opaque reference to the uploaded identity document', max_length=255)),
                ('verification_status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], db_index=True, default='pending', max_length=20)),
                ('verification_notes', models.TextField(blank=True)),
                ('verification_date', models.DateTimeField(blank=True, null=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='employer_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Employer Profile',
                'verbose_name_plural': 'Employer Profiles',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='VerificationDecision',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('approve', 'Approve'), ('reject', 'Reject'), ('reset', 'Reset to pending'), ('resubmit', 'Resubmitted by employer')], max_length=20)),
                ('from_status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], max_length=20)),
                ('to_status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('employer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='verification_decisions', to='employers.employerprofile')),
                ('reviewer', models.ForeignKey(blank=True, help_text='Empty for automatic resubmission', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='verification_decisions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Verification Decision',
                'verbose_name_plural': 'Verification Decisions',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='EmployerSavedSnapshot',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('snapshot_version', models.PositiveIntegerField()),
                ('data', models.JSONField()),
                ('saved_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('cv', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='employer_snapshots', to='jobseekers.cvdocument')),
                ('employer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='saved_snapshots', to='employers.employerprofile')),
                ('jobseeker', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='employer_snapshots', to='jobseekers.jobseekerprofile')),
            ],
            options={
                'verbose_name': 'Saved CV Snapshot',
                'verbose_name_plural': 'Saved CV Snapshots',
                'ordering': ['-saved_at'],
                'constraints': [models.UniqueConstraint(fields=('employer', 'cv', 'snapshot_version'), name='uq_snapshot_employer_cv_version')],
            },
        ),
    ]
