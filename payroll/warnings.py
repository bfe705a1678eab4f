"""
Custom warning classes for payroll system.
"""


class PayRateOrderingWarning(UserWarning):
    """
    Night rate is lower than the weekend rate.

    Night outranks weekend when both apply to a minute, so with this
    configuration a weekend night pays less than a weekend day. The priority
    order is not changed; the warning only surfaces the configuration.
    """
    pass
