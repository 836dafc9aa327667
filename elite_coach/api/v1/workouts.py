import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from elite_coach.core.dependencies import get_current_user, get_workout_repository
from elite_coach.models.profile import Profile
from elite_coach.models.workout import Workout, Exercise
from elite_coach.repositories.workout_repository import WorkoutRepository
from elite_coach.schemas.workout import WorkoutCreate, WorkoutRead, ExerciseInput

logger = logging.getLogger(__name__)

router = APIRouter(tags=["workouts"])


def build_exercises(items: List[ExerciseInput]) -> List[Exercise]:
    return [
        Exercise(
            exercise_name=item.exercise_name.strip(),
            sets=item.sets,
            reps=item.reps,
            weight_kg=item.weight_kg,
        )
        for item in items
    ]


@router.get("", response_model=List[WorkoutRead])
async def list_workouts(
    current_user: Profile = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    """Own workouts, newest first."""
    return await repo.list_for_user(current_user.id)


@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
async def create_workout(
    data: WorkoutCreate,
    current_user: Profile = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    user_id = current_user.id
    workout = Workout(
        user_id=user_id,
        workout_name=data.workout_name.strip(),
        workout_date=data.workout_date,
        duration_minutes=data.duration_minutes,
        notes=data.notes,
        exercises=build_exercises(data.exercises),
    )
    try:
        await repo.add(workout)
        await repo.commit()
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error saving workout for profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save workout. Please try again.")

    return await repo.reload(workout.id, user_id)


@router.put("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: int,
    data: WorkoutCreate,
    current_user: Profile = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    """Replace the workout fields and its whole exercise list."""
    user_id = current_user.id
    workout = await repo.get_for_user(workout_id, user_id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")

    workout.workout_name = data.workout_name.strip()
    workout.workout_date = data.workout_date
    workout.duration_minutes = data.duration_minutes
    workout.notes = data.notes

    try:
        await repo.replace_exercises(workout, build_exercises(data.exercises))
        await repo.commit()
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error updating workout {workout_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update workout. Please try again.")

    return await repo.reload(workout_id, user_id)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
    workout_id: int,
    current_user: Profile = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    workout = await repo.get_for_user(workout_id, current_user.id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")

    try:
        await repo.delete(workout)
        await repo.commit()
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error deleting workout {workout_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete workout. Please try again.")
