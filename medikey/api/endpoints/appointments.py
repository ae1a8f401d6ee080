from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps

router = APIRouter()


@router.get("/", response_model=List[schemas.Appointment])
def read_appointments(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    Retrieve the current user's appointments, earliest first.
    """
    return crud.appointment.get_by_user(db, user_id=current_user.id)


@router.get("/upcoming", response_model=List[schemas.Appointment])
def read_upcoming_appointments(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    The next three appointments after now.
    """
    return crud.appointment.get_upcoming(db, user_id=current_user.id)


@router.post("/", response_model=schemas.Appointment, status_code=status.HTTP_201_CREATED)
def create_appointment(
    *,
    db: Session = Depends(deps.get_db),
    appointment_in: schemas.AppointmentCreate,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return crud.appointment.create_with_owner(db, obj_in=appointment_in, user_id=current_user.id)


@router.get("/{appointment_id}", response_model=schemas.Appointment)
def read_appointment(
    *,
    db: Session = Depends(deps.get_db),
    appointment_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return deps.ensure_owner(crud.appointment.get(db, id=appointment_id), current_user, "Appointment")


@router.patch("/{appointment_id}", response_model=schemas.Appointment)
def update_appointment(
    *,
    db: Session = Depends(deps.get_db),
    appointment_id: int,
    appointment_in: schemas.AppointmentUpdate,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    appointment = deps.ensure_owner(crud.appointment.get(db, id=appointment_id), current_user, "Appointment")
    return crud.appointment.update(db, db_obj=appointment, obj_in=appointment_in)


@router.patch("/{appointment_id}/status", response_model=schemas.Appointment)
def update_appointment_status(
    *,
    db: Session = Depends(deps.get_db),
    appointment_id: int,
    status_in: schemas.AppointmentStatusUpdate,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    appointment = deps.ensure_owner(crud.appointment.get(db, id=appointment_id), current_user, "Appointment")
    return crud.appointment.update(
        db, db_obj=appointment, obj_in=schemas.AppointmentUpdate(status=status_in.status)
    )


@router.delete("/{appointment_id}", response_model=schemas.Message)
def delete_appointment(
    *,
    db: Session = Depends(deps.get_db),
    appointment_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    appointment = deps.ensure_owner(crud.appointment.get(db, id=appointment_id), current_user, "Appointment")
    crud.appointment.remove(db, db_obj=appointment)
    return {"message": "Appointment deleted successfully"}
