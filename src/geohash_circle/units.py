"""Distance unit conversions. Everything else in the package works in kilometers."""

KM_TO_MILES = 0.6214
MILES_TO_KM = 1.609344


def km_to_miles(kilometers: float) -> float:
    return kilometers * KM_TO_MILES


def miles_to_km(miles: float) -> float:
    return miles * MILES_TO_KM
