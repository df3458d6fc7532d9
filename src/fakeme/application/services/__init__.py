"""Application services."""

from fakeme.application.services.delivery_pacer import DeliveryPacer, clean_response

__all__ = [
    "DeliveryPacer",
    "clean_response",
]
