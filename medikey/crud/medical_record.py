from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session

from medikey.crud.base import CRUDBase
from medikey.models.medical_record import MedicalRecord

RECENT_PER_PAGE = 3


class CRUDMedicalRecord(CRUDBase[MedicalRecord, Any, Any]):
    def create_with_owner(self, db: Session, *, obj_in: Dict[str, Any], user_id: int) -> MedicalRecord:
        db_obj = MedicalRecord(**obj_in, user_id=user_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_user(
        self,
        db: Session,
        *,
        user_id: int,
        record_type: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[MedicalRecord]:
        query = db.query(MedicalRecord).filter(MedicalRecord.user_id == user_id)
        if record_type:
            query = query.filter(MedicalRecord.record_type == record_type)
        records = query.order_by(MedicalRecord.record_date.desc(), MedicalRecord.id.desc()).all()
        # Tags live in a JSON column; filter in Python so SQLite and PostgreSQL behave alike
        if tag:
            records = [r for r in records if tag in (r.tags or [])]
        return records

    def get_recent(
        self, db: Session, *, user_id: int, page: int = 1, per_page: int = RECENT_PER_PAGE
    ) -> Tuple[List[MedicalRecord], int]:
        page = max(page, 1)
        query = db.query(MedicalRecord).filter(MedicalRecord.user_id == user_id)
        total = query.count()
        records = (
            query.order_by(MedicalRecord.record_date.desc(), MedicalRecord.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return records, total

    def latest_created_at(self, db: Session, *, user_id: int):
        latest = (
            db.query(MedicalRecord.created_at)
            .filter(MedicalRecord.user_id == user_id)
            .order_by(MedicalRecord.created_at.desc())
            .first()
        )
        return latest[0] if latest else None

    def set_summary(self, db: Session, *, db_obj: MedicalRecord, summary: str) -> MedicalRecord:
        db_obj.ai_summary = summary
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


medical_record = CRUDMedicalRecord(MedicalRecord)
