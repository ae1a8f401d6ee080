from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps

router = APIRouter()


@router.get("/", response_model=List[schemas.FamilyMember])
def read_family_members(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return crud.family_member.get_by_user(db, user_id=current_user.id)


@router.post("/", response_model=schemas.FamilyMember, status_code=status.HTTP_201_CREATED)
def create_family_member(
    *,
    db: Session = Depends(deps.get_db),
    member_in: schemas.FamilyMemberCreate,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return crud.family_member.create_with_owner(db, obj_in=member_in, user_id=current_user.id)


@router.get("/{member_id}", response_model=schemas.FamilyMember)
def read_family_member(
    *,
    db: Session = Depends(deps.get_db),
    member_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return deps.ensure_owner(crud.family_member.get(db, id=member_id), current_user, "Family member")


@router.patch("/{member_id}", response_model=schemas.FamilyMember)
def update_family_member(
    *,
    db: Session = Depends(deps.get_db),
    member_id: int,
    member_in: schemas.FamilyMemberUpdate,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    member = deps.ensure_owner(crud.family_member.get(db, id=member_id), current_user, "Family member")
    return crud.family_member.update(db, db_obj=member, obj_in=member_in)


@router.delete("/{member_id}", response_model=schemas.Message)
def delete_family_member(
    *,
    db: Session = Depends(deps.get_db),
    member_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    member = deps.ensure_owner(crud.family_member.get(db, id=member_id), current_user, "Family member")
    crud.family_member.remove(db, db_obj=member)
    return {"message": "Family member deleted successfully"}
