from django.contrib import admin

from .models import BankHoliday


@admin.register(BankHoliday)
class BankHolidayAdmin(admin.ModelAdmin):
    """
    Admin configuration for BankHoliday.

    Imported rows can be edited like local ones; the next sync will not
    overwrite them because it only inserts dates that are not yet covered.
    """

    list_display = ("date", "name", "company_id", "is_recurring", "source")
    list_filter = ("source", "is_recurring", "date")
    search_fields = ("name",)
    ordering = ("-date",)
    date_hierarchy = "date"
    readonly_fields = ("created_at",)

    fieldsets = (
        (None, {"fields": ("company_id", "date", "name")}),
        ("Type", {"fields": ("is_recurring", "source")}),
        ("Audit", {"fields": ("created_at",), "classes": ("collapse",)}),
    )
