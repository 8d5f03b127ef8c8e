### models/__init__.py
from .car import Car, Place, CAR_FIELDS, PLACE_FIELDS, MISSING
