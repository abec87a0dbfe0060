"""
UpdateRequest repository.

The only table this service writes. The duplicate check and the insert are two
separate statements; two concurrent callers can both pass the check. A unique
partial index on (type, requested_id) in the store would close that window.
"""

from typing import Optional

from sqlalchemy.orm import Session

from ..model.update_request import UpdateRequest


class UpdateRequestRepository:

    def __init__(self, db: Session):
        self.db = db

    def find_pending(self, request_type: str, requested_id: int) -> Optional[UpdateRequest]:
        return self.db.query(UpdateRequest).filter(
            UpdateRequest.type == request_type,
            UpdateRequest.requested_id == requested_id,
        ).first()

    def create(self, request: UpdateRequest) -> UpdateRequest:
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)
        return request
