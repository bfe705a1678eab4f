# Generated manually on 2026-10-18

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='BankHoliday',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('company_id', models.PositiveBigIntegerField(db_index=True)),
                ('name', models.CharField(max_length=100)),
                ('date', models.DateField()),
                ('is_recurring', models.BooleanField(default=False, help_text='Repeats on the same day and month every year')),
                ('source', models.CharField(choices=[('gov_uk', 'GOV.UK bank holidays'), ('manual', 'Added locally')], default='manual', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Bank Holiday',
                'verbose_name_plural': 'Bank Holidays',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['company_id', 'date'], name='bank_holiday_company_date_idx')],
            },
        ),
    ]
