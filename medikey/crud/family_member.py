from typing import List
from sqlalchemy.orm import Session

from medikey.crud.base import CRUDBase
from medikey.models.family_member import FamilyMember
from medikey.schemas.family_member import FamilyMemberCreate, FamilyMemberUpdate


class CRUDFamilyMember(CRUDBase[FamilyMember, FamilyMemberCreate, FamilyMemberUpdate]):
    def get_by_user(self, db: Session, *, user_id: int) -> List[FamilyMember]:
        return (
            db.query(FamilyMember)
            .filter(FamilyMember.user_id == user_id)
            .order_by(FamilyMember.id.asc())
            .all()
        )


family_member = CRUDFamilyMember(FamilyMember)
