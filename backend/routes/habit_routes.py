from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session
from typing import Optional

from database import get_db
from exceptions import ValidationError, NotFoundError, StoreError
from services.habit_service import HabitService

router = APIRouter(prefix="/api/habits", tags=["Habits"])

class HabitCreate(BaseModel):
    # name is checked by the service so a missing one gets the 400 message
    name: Optional[str] = None
    color: Optional[str] = None

class HabitUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None

class ActivityReplace(BaseModel):
    activityData: list


def _raise_http(e: Exception):
    if isinstance(e, ValidationError):
        raise HTTPException(status_code=400, detail=str(e))
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, StoreError):
        raise HTTPException(status_code=500, detail=str(e))
    raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.get("")
def list_habits(db: Session = Depends(get_db)):
    """Every habit with its activity log, ordered by id."""
    try:
        return HabitService.get_all(db)
    except Exception as e:
        _raise_http(e)

@router.post("", status_code=201)
def create_habit(habit_data: HabitCreate, db: Session = Depends(get_db)):
    try:
        return HabitService.create(db, habit_data.model_dump())
    except Exception as e:
        _raise_http(e)

@router.patch("/{habit_id}")
def update_habit(habit_id: str, habit_data: HabitUpdate, db: Session = Depends(get_db)):
    try:
        # Only the fields the client actually sent are updated
        return HabitService.update(db, habit_id, habit_data.model_dump(exclude_unset=True))
    except Exception as e:
        _raise_http(e)

@router.patch("/{habit_id}/activity")
def replace_activity(habit_id: str, body: ActivityReplace, db: Session = Depends(get_db)):
    """Replace the habit's whole activity log with body.activityData."""
    try:
        return HabitService.replace_activity_log(db, habit_id, body.activityData)
    except Exception as e:
        _raise_http(e)

@router.delete("/{habit_id}")
def delete_habit(habit_id: str, db: Session = Depends(get_db)):
    try:
        return HabitService.delete(db, habit_id)
    except Exception as e:
        _raise_http(e)
