from django.urls import path

from .views import calculate_shift_wages, shift_wage_calculation

urlpatterns = [
    path(
        "wages/calculate/<int:shift_id>/",
        calculate_shift_wages,
        name="wage-calculate",
    ),
    path("wages/<int:shift_id>/", shift_wage_calculation, name="wage-detail"),
]
