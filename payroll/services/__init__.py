# Wage calculation services package

from .calculation_store import CalculationStore
from .minute_classifier import MinuteClassifier
from .overtime import OvertimeCalculator
from .rate_resolver import RateResolver, initialize_default_pay_rates
from .wage_calculation_service import (
    WageCalculationService,
    calculate_wages,
    get_wage_calculation,
)
from .wage_composer import WageComposer

__all__ = [
    "CalculationStore",
    "MinuteClassifier",
    "OvertimeCalculator",
    "RateResolver",
    "WageCalculationService",
    "WageComposer",
    "calculate_wages",
    "get_wage_calculation",
    "initialize_default_pay_rates",
]
