import logging
from typing import List

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, status
from sqlalchemy.exc import SQLAlchemyError

from elite_coach.core.dependencies import get_current_user, get_progress_repository
from elite_coach.models.attachment import Attachment
from elite_coach.models.profile import Profile, RoleEnum
from elite_coach.models.progress import Progress
from elite_coach.repositories.progress_repository import ProgressRepository
from elite_coach.schemas.progress import (
    ProgressCreate,
    ProgressRead,
    ProgressChartPoint,
    ProgressChanges,
    ProgressLatest,
    ProgressHistoryResponse,
    PhotoRead,
)
from elite_coach.services import s3_service, stats_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["progress"])


def build_history(records: List[Progress]) -> ProgressHistoryResponse:
    """History in date order plus latest values and the change against the record before it."""
    latest = records[-1] if records else None
    previous = records[-2] if len(records) > 1 else None

    changes = ProgressChanges()
    if latest is not None and previous is not None:
        changes = ProgressChanges(
            weight_kg=stats_service.metric_change(latest.weight_kg, previous.weight_kg),
            body_fat_percentage=stats_service.metric_change(
                latest.body_fat_percentage, previous.body_fat_percentage
            ),
            muscle_mass_kg=stats_service.metric_change(latest.muscle_mass_kg, previous.muscle_mass_kg),
        )

    return ProgressHistoryResponse(
        records=[ProgressRead.model_validate(r) for r in records],
        latest=ProgressLatest(
            record_date=latest.record_date.isoformat(),
            weight_kg=stats_service.display_value(latest.weight_kg),
            body_fat_percentage=stats_service.display_value(latest.body_fat_percentage),
            muscle_mass_kg=stats_service.display_value(latest.muscle_mass_kg),
        ) if latest is not None else None,
        changes=changes,
        chart=[
            ProgressChartPoint(
                date=stats_service.chart_label(r.record_date),
                weight=r.weight_kg,
                body_fat=r.body_fat_percentage,
                muscle=r.muscle_mass_kg,
            )
            for r in records
        ],
    )


async def get_owned_record(repo: ProgressRepository, progress_id: int, user: Profile) -> Progress:
    record = await repo.get_by_id(progress_id)
    if record is None or record.user_id != user.id:
        raise HTTPException(status_code=404, detail="Progress record not found")
    return record


def can_access(photo: Attachment, user: Profile) -> bool:
    return photo.user_id == user.id or user.role == RoleEnum.coach


async def discard_objects(s3_keys: List[str]) -> None:
    """Best-effort removal of stored objects whose rows are already gone."""
    for s3_key in s3_keys:
        try:
            await s3_service.delete_file(s3_key)
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Could not remove stored object {s3_key}: {e}")


@router.get("", response_model=ProgressHistoryResponse)
async def progress_history(
    current_user: Profile = Depends(get_current_user),
    repo: ProgressRepository = Depends(get_progress_repository),
):
    return build_history(await repo.history(current_user.id))


@router.post("", response_model=ProgressRead, status_code=status.HTTP_201_CREATED)
async def add_progress(
    data: ProgressCreate,
    current_user: Profile = Depends(get_current_user),
    repo: ProgressRepository = Depends(get_progress_repository),
):
    user_id = current_user.id
    record = Progress(
        user_id=user_id,
        record_date=data.record_date,
        weight_kg=data.weight_kg,
        body_fat_percentage=data.body_fat_percentage,
        muscle_mass_kg=data.muscle_mass_kg,
        notes=data.notes,
    )
    try:
        return await repo.create(record)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error saving progress for profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save progress. Please try again.")


@router.delete("/{progress_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_progress(
    progress_id: int,
    current_user: Profile = Depends(get_current_user),
    repo: ProgressRepository = Depends(get_progress_repository),
):
    record = await get_owned_record(repo, progress_id, current_user)
    s3_keys = [photo.s3_key for photo in await repo.list_photos(record.id)]

    try:
        await repo.delete(record)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error deleting progress {progress_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete progress. Please try again.")

    # rows are gone through the FK cascade, the objects are not
    await discard_objects(s3_keys)


# ==========================
# PHOTOS
# ==========================

@router.post("/{progress_id}/photos", response_model=PhotoRead, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    progress_id: int,
    file: UploadFile = File(...),
    current_user: Profile = Depends(get_current_user),
    repo: ProgressRepository = Depends(get_progress_repository),
):
    record = await get_owned_record(repo, progress_id, current_user)
    user_id = current_user.id
    record_id = record.id

    try:
        s3_key, content_type, size = await s3_service.upload_photo(file, user_id, record_id)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Error storing photo for progress {progress_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to upload photo. Please try again.")

    photo = Attachment(
        user_id=user_id,
        progress_id=record_id,
        filename=file.filename or "photo",
        s3_key=s3_key,
        content_type=content_type,
        size=size,
    )
    try:
        return await repo.add_photo(photo)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error saving photo for progress {progress_id}: {e}")
        await discard_objects([s3_key])
        raise HTTPException(status_code=500, detail="Failed to upload photo. Please try again.")


@router.get("/{progress_id}/photos", response_model=List[PhotoRead])
async def list_photos(
    progress_id: int,
    current_user: Profile = Depends(get_current_user),
    repo: ProgressRepository = Depends(get_progress_repository),
):
    record = await repo.get_by_id(progress_id)
    if record is None or (record.user_id != current_user.id and current_user.role != RoleEnum.coach):
        raise HTTPException(status_code=404, detail="Progress record not found")
    return await repo.list_photos(record.id)


@router.get("/photos/{photo_id}/url")
async def photo_url(
    photo_id: int,
    current_user: Profile = Depends(get_current_user),
    repo: ProgressRepository = Depends(get_progress_repository),
):
    photo = await repo.get_photo(photo_id)
    if photo is None:
        raise HTTPException(status_code=404, detail="Photo not found")
    if not can_access(photo, current_user):
        raise HTTPException(status_code=403, detail="Access denied")

    url = await s3_service.generate_presigned_url(photo.s3_key)
    return {
        "url": url,
        "expires_in": s3_service.PRESIGNED_URL_EXPIRES,
        "filename": photo.filename,
    }


@router.delete("/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_photo(
    photo_id: int,
    current_user: Profile = Depends(get_current_user),
    repo: ProgressRepository = Depends(get_progress_repository),
):
    photo = await repo.get_photo(photo_id)
    if photo is None:
        raise HTTPException(status_code=404, detail="Photo not found")
    if not can_access(photo, current_user):
        raise HTTPException(status_code=403, detail="Access denied")

    s3_key = photo.s3_key
    try:
        await repo.delete_photo(photo)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error deleting photo {photo_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete photo. Please try again.")

    await discard_objects([s3_key])
