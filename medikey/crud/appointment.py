from typing import List
from sqlalchemy.orm import Session

from medikey.crud.base import CRUDBase
from medikey.models.appointment import Appointment
from medikey.schemas.appointment import AppointmentCreate, AppointmentUpdate
from medikey.utils.timezone import utcnow, to_utc_naive

UPCOMING_LIMIT = 3


class CRUDAppointment(CRUDBase[Appointment, AppointmentCreate, AppointmentUpdate]):
    def create_with_owner(self, db: Session, *, obj_in: AppointmentCreate, user_id: int) -> Appointment:
        obj_in_data = obj_in.model_dump()
        obj_in_data["appointment_date"] = to_utc_naive(obj_in_data["appointment_date"])
        obj_in_data["reminder_time"] = to_utc_naive(obj_in_data.get("reminder_time"))
        obj_in_data["user_id"] = user_id
        obj_in_data["status"] = "scheduled"
        db_obj = Appointment(**obj_in_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_user(self, db: Session, *, user_id: int) -> List[Appointment]:
        return (
            db.query(Appointment)
            .filter(Appointment.user_id == user_id)
            .order_by(Appointment.appointment_date.asc())
            .all()
        )

    def get_upcoming(self, db: Session, *, user_id: int, limit: int = UPCOMING_LIMIT) -> List[Appointment]:
        return (
            db.query(Appointment)
            .filter(Appointment.user_id == user_id, Appointment.appointment_date > utcnow())
            .order_by(Appointment.appointment_date.asc())
            .limit(limit)
            .all()
        )

    def update(self, db: Session, *, db_obj: Appointment, obj_in: AppointmentUpdate) -> Appointment:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field in ("appointment_date", "reminder_time"):
            if update_data.get(field) is not None:
                update_data[field] = to_utc_naive(update_data[field])
        if update_data.get("status") is not None:
            update_data["status"] = update_data["status"].value
        return super().update(db, db_obj=db_obj, obj_in=update_data)


appointment = CRUDAppointment(Appointment)
