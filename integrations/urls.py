from rest_framework.routers import DefaultRouter

from django.urls import include, path

from .views import BankHolidayViewSet

router = DefaultRouter()
router.register(r"bank-holidays", BankHolidayViewSet)

urlpatterns = [
    path("", include(router.urls)),
]
