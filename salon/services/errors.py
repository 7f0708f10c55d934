class StoreError(Exception):
    """A store operation failed; local state must be left as it was."""


class ReservationNotFound(StoreError):
    def __init__(self, reservation_id: str):
        super().__init__(f"Reservation {reservation_id} not found")
        self.reservation_id = reservation_id


class ReservationValidationError(ValueError):
    """Rejected before any store call; the message is shown inline in the form."""


MISSING_CUSTOMER_MESSAGE = "고객명 또는 전화번호 중 하나는 반드시 입력해야 합니다."
UNKNOWN_SERVICE_MESSAGE = "등록되지 않은 시술 종류입니다."
SAVE_FAILED_MESSAGE = "저장 실패"
DELETE_FAILED_MESSAGE = "삭제 실패"
LOAD_FAILED_MESSAGE = "불러오기 실패"
