# gym_classes/api/v1/endpoints/class_types.py
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from gym_classes.api import deps
from gym_classes.schemas.class_type import ClassType, ClassTypeCreate, ClassTypeUpdate
from gym_classes.schemas.token import TokenPayload
from gym_classes.services.class_catalog import class_catalog

router = APIRouter(prefix="/class-types", tags=["Class Types"])


@router.get("", response_model=List[ClassType])
def list_class_types(
    include_inactive: bool = True,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return class_catalog.list_class_types(db, include_inactive=include_inactive)


@router.post("", response_model=ClassType, status_code=status.HTTP_201_CREATED)
def create_class_type(
    type_in: ClassTypeCreate,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return class_catalog.create_class_type(db, type_in=type_in)


@router.get("/{class_type_id}", response_model=ClassType)
def get_class_type(
    class_type_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return class_catalog.get_class_type(db, class_type_id)


@router.patch("/{class_type_id}", response_model=ClassType)
def update_class_type(
    class_type_id: str,
    type_in: ClassTypeUpdate,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return class_catalog.update_class_type(db, class_type_id=class_type_id, type_in=type_in)


@router.delete("/{class_type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_class_type(
    class_type_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """
    Delete a class type.

    **Errors**:
    - 404: Class type not found
    - 409: Still used by a schedule or session (deactivate it instead)
    """
    class_catalog.delete_class_type(db, class_type_id=class_type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
