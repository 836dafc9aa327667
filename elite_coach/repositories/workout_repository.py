from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete
from sqlalchemy.orm import selectinload

from elite_coach.models.workout import Workout, Exercise


class WorkoutRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: int) -> List[Workout]:
        result = await self.db.execute(
            select(Workout)
            .options(selectinload(Workout.exercises))
            .where(Workout.user_id == user_id)
            .order_by(Workout.workout_date.desc(), Workout.id.desc())
        )
        return list(result.scalars().all())

    async def get_for_user(self, workout_id: int, user_id: int) -> Optional[Workout]:
        result = await self.db.execute(
            select(Workout)
            .options(selectinload(Workout.exercises))
            .where(Workout.id == workout_id, Workout.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def count_for_user(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Workout.id)).where(Workout.user_id == user_id)
        )
        return result.scalar_one()

    async def dates_between(self, user_id: int, start: date, end: date) -> List[date]:
        result = await self.db.execute(
            select(Workout.workout_date).where(
                Workout.user_id == user_id,
                Workout.workout_date >= start,
                Workout.workout_date <= end,
            )
        )
        return list(result.scalars().all())

    async def add(self, workout: Workout) -> Workout:
        self.db.add(workout)
        await self.db.flush()
        return workout

    async def replace_exercises(self, workout: Workout, exercises: List[Exercise]) -> None:
        """Delete every exercise of the workout and insert the given ones."""
        await self.db.execute(delete(Exercise).where(Exercise.workout_id == workout.id))
        for exercise in exercises:
            exercise.workout_id = workout.id
        self.db.add_all(exercises)
        await self.db.flush()

    async def delete(self, workout: Workout) -> None:
        await self.db.delete(workout)

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def reload(self, workout_id: int, user_id: int) -> Optional[Workout]:
        self.db.expire_all()
        return await self.get_for_user(workout_id, user_id)
