from salon.models.reservation import Reservation
from salon.models.service_type import ServiceType
