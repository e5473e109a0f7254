# Import all models here so Base.metadata knows every table
from leadintake.models.intake import IntakeStatusEnum, WaitlistEntry, CourierApplication
from leadintake.models.user import User

__all__ = [
    "IntakeStatusEnum",
    "WaitlistEntry",
    "CourierApplication",
    "User",
]
