import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('employers', '0001_initial'),
        ('jobseekers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='InterviewRequest',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('declined', 'Declined'), ('cancelled', 'Cancelled'), ('completed', 'Completed')], db_index=True, default='pending', max_length=20)),
                ('interview_type', models.CharField(choices=[('video', 'Video call'), ('phone', 'Phone call'), ('in_person', 'In person')], max_length=20)),
                ('proposed_at', models.DateTimeField(blank=True, null=True)),
                ('location', models.CharField(blank=True, max_length=300)),
                ('meeting_link', models.URLField(blank=True)),
                ('employer_message', models.TextField(blank=True)),
                ('response_message', models.TextField(blank=True)),
                ('responded_at', models.DateTimeField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('employer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interview_requests', to='employers.employerprofile')),
                ('jobseeker', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interview_requests', to='jobseekers.jobseekerprofile')),
            ],
            options={
                'verbose_name': 'Interview Request',
                'verbose_name_plural': 'Interview Requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['jobseeker', 'status'], name='idx_interview_jobseeker_status'),
                    models.Index(fields=['employer', 'status'], name='idx_interview_employer_status'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status__in', ['pending', 'accepted'])), fields=('employer', 'jobseeker'), name='uq_interview_in_flight_pair'),
                ],
            },
        ),
    ]
