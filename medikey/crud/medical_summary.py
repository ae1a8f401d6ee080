from typing import Any, Optional
from sqlalchemy.orm import Session

from medikey.crud.base import CRUDBase
from medikey.models.medical_summary import MedicalSummary
from medikey.utils.timezone import utcnow


class CRUDMedicalSummary(CRUDBase[MedicalSummary, Any, Any]):
    def get_by_user(self, db: Session, *, user_id: int) -> Optional[MedicalSummary]:
        return db.query(MedicalSummary).filter(MedicalSummary.user_id == user_id).first()

    def upsert(self, db: Session, *, user_id: int, summary: str) -> MedicalSummary:
        db_obj = self.get_by_user(db, user_id=user_id)
        if db_obj is None:
            db_obj = MedicalSummary(user_id=user_id)
        db_obj.summary = summary
        db_obj.last_updated = utcnow()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


medical_summary = CRUDMedicalSummary(MedicalSummary)
