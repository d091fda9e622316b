# Domain Cards Package
from .models import CardState, LearnerSettings, StoreSnapshot
from .ports import CardRepository

__all__ = ["CardState", "LearnerSettings", "StoreSnapshot", "CardRepository"]
