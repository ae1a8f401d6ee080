from typing import Any, List, Optional
from sqlalchemy.orm import Session

from medikey.crud.base import CRUDBase
from medikey.models.smartwatch_device import SmartwatchDevice
from medikey.utils.timezone import utcnow


class CRUDSmartwatchDevice(CRUDBase[SmartwatchDevice, Any, Any]):
    def get_by_device_id(self, db: Session, *, user_id: int, device_id: str) -> Optional[SmartwatchDevice]:
        return (
            db.query(SmartwatchDevice)
            .filter(SmartwatchDevice.user_id == user_id, SmartwatchDevice.device_id == device_id)
            .first()
        )

    def get_by_user(self, db: Session, *, user_id: int) -> List[SmartwatchDevice]:
        return (
            db.query(SmartwatchDevice)
            .filter(SmartwatchDevice.user_id == user_id)
            .order_by(SmartwatchDevice.connected_at.desc(), SmartwatchDevice.id.desc())
            .all()
        )

    def register_connection(
        self, db: Session, *, user_id: int, device_id: str, device_type: str
    ) -> SmartwatchDevice:
        """Insert the device on first contact, otherwise mark it active again"""
        now = utcnow()
        db_obj = self.get_by_device_id(db, user_id=user_id, device_id=device_id)
        if db_obj is None:
            db_obj = SmartwatchDevice(
                user_id=user_id,
                device_id=device_id,
                device_type=device_type,
                device_name=f"{device_type} ({device_id})",
                connected_at=now,
            )
        else:
            db_obj.device_type = device_type
            db_obj.connected_at = now
        db_obj.status = "active"
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def touch(self, db: Session, *, user_id: int, device_id: str) -> None:
        db_obj = self.get_by_device_id(db, user_id=user_id, device_id=device_id)
        if db_obj is not None:
            db_obj.last_sync = utcnow()
            db.add(db_obj)
            db.commit()

    def mark_disconnected(self, db: Session, *, user_id: int, device_id: str) -> None:
        db_obj = self.get_by_device_id(db, user_id=user_id, device_id=device_id)
        if db_obj is not None:
            db_obj.status = "disconnected"
            db.add(db_obj)
            db.commit()


smartwatch_device = CRUDSmartwatchDevice(SmartwatchDevice)
