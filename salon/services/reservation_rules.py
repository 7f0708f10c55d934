from typing import Optional

from salon.schemas.reservation import ReservationCreate
from salon.services.errors import (
    MISSING_CUSTOMER_MESSAGE,
    UNKNOWN_SERVICE_MESSAGE,
    ReservationValidationError,
)


def prepare_reservation(data: ReservationCreate,
                        service_options: list[str],
                        current_service_type: Optional[str] = None
) -> ReservationCreate:
    """
    Form-level checks done before any store call. A reservation needs a name
    or a phone number; a missing service type falls back to the first option.
    On an edit the reservation's saved service type stays valid even when it
    is no longer offered.
    """
    if not data.customer_name.strip() and not data.customer_phone.strip():
        raise ReservationValidationError(MISSING_CUSTOMER_MESSAGE)

    if not data.service_type:
        if not service_options:
            raise ReservationValidationError(UNKNOWN_SERVICE_MESSAGE)
        return data.model_copy(update={"service_type": service_options[0]})

    if data.service_type not in service_options and data.service_type != current_service_type:
        raise ReservationValidationError(UNKNOWN_SERVICE_MESSAGE)
    return data
