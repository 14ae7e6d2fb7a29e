"""
Initial migration for parties app.

Creates Agent, Vendor, Lawyer and OutsideBroker.
"""
import django.core.validators
from django.db import migrations, models

FEE_PLAN_CHOICES = [
    ("", "None"),
    ("flatFee", "Flat Fee"),
    ("garnishment", "Garnishment"),
    ("plan250", "Plan 250"),
    ("plan500", "Plan 500"),
    ("plan9010", "Plan 90/10"),
    ("plan955", "Plan 95/5"),
    ("plan8515", "Plan 85/15"),
    ("plan5050", "Plan 50/50"),
    ("plan8020", "Plan 80/20"),
    ("plan150", "Plan 150"),
    ("buyerRebate", "Buyer Rebate"),
    ("noFee", "No Fee"),
    ("flexible", "Flexible"),
]

TRADE_END_CHOICES = [("Listing End", "Listing End"), ("Selling End", "Selling End")]
YES_NO_CHOICES = [("Yes", "Yes"), ("No", "No")]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Agent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "employee_no",
                    models.PositiveIntegerField(
                        unique=True,
                        validators=[django.core.validators.MinValueValidator(100)],
                    ),
                ),
                ("first_name", models.CharField(max_length=100)),
                ("middle_name", models.CharField(blank=True, default="", max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("legal_name", models.CharField(blank=True, default="", max_length=200)),
                ("nickname", models.CharField(blank=True, default="", max_length=100)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=30)),
                ("cell_phone", models.CharField(blank=True, default="", max_length=30)),
                ("street_number", models.CharField(blank=True, default="", max_length=20)),
                ("street_name", models.CharField(blank=True, default="", max_length=200)),
                ("unit_number", models.CharField(blank=True, default="", max_length=20)),
                ("city", models.CharField(blank=True, default="", max_length=100)),
                ("province", models.CharField(blank=True, default="", max_length=50)),
                ("postal_code", models.CharField(blank=True, default="", max_length=20)),
                ("hst_number", models.CharField(blank=True, default="", max_length=30)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("status", models.CharField(default="Active", max_length=20)),
                ("licenses", models.JSONField(blank=True, default=list)),
                ("fee_plan", models.CharField(blank=True, choices=FEE_PLAN_CHOICES, default="", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["employee_no"],
            },
        ),
        migrations.CreateModel(
            name="Vendor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("vendor_number", models.PositiveIntegerField(unique=True)),
                ("first_name", models.CharField(blank=True, default="", max_length=100)),
                ("last_name", models.CharField(blank=True, default="", max_length=100)),
                ("company_name", models.CharField(blank=True, default="", max_length=200)),
                ("street_number", models.CharField(max_length=20)),
                ("street_name", models.CharField(max_length=200)),
                ("unit", models.CharField(blank=True, default="", max_length=20)),
                ("postal_code", models.CharField(max_length=20)),
                ("city", models.CharField(max_length=100)),
                ("province", models.CharField(max_length=50)),
                ("phone_number", models.CharField(max_length=30)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["vendor_number"],
            },
        ),
        migrations.CreateModel(
            name="Lawyer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("Tenant", "Tenant"),
                            ("Landlord", "Landlord"),
                            ("Seller", "Seller"),
                            ("Buyer", "Buyer"),
                            ("Seller Lawyer", "Seller Lawyer"),
                            ("Buyer Lawyer", "Buyer Lawyer"),
                        ],
                        max_length=20,
                    ),
                ),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("company_name", models.CharField(blank=True, default="", max_length=200)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("end", models.CharField(choices=TRADE_END_CHOICES, max_length=20)),
                ("primary_phone", models.CharField(blank=True, default="", max_length=30)),
                ("cell_phone", models.CharField(blank=True, default="", max_length=30)),
                ("address", models.CharField(blank=True, default="", max_length=300)),
                ("trade_number", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["last_name", "first_name"],
            },
        ),
        migrations.CreateModel(
            name="OutsideBroker",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type",
                    models.CharField(
                        choices=[("Listing Broker", "Listing Broker"), ("Cooperating Broker", "Cooperating Broker")],
                        max_length=20,
                    ),
                ),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("company", models.CharField(blank=True, default="", max_length=200)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("pay_broker", models.CharField(choices=YES_NO_CHOICES, default="No", max_length=3)),
                ("end", models.CharField(choices=TRADE_END_CHOICES, max_length=20)),
                ("primary_phone", models.CharField(blank=True, default="", max_length=30)),
                ("charged_hst", models.CharField(choices=YES_NO_CHOICES, default="Yes", max_length=3)),
                ("address", models.CharField(blank=True, default="", max_length=300)),
                ("trade_number", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["company", "last_name"],
            },
        ),
    ]
