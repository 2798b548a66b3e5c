from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from settracker.constants import WorkoutType
from settracker.db import get_db
from settracker.repositories.set_repo import SetRepository
from settracker.stats import (
    DateRange,
    build_daily_counts,
    build_max_weight_trend,
    build_volume_by_workout_type,
    filter_sets_by_range,
)

router = APIRouter(prefix="/api/trends", tags=["trends"])

@router.get("")
def trends(
    db: Session = Depends(get_db),
    start: date | None = Query(None, alias="from"),
    end: date | None = Query(None, alias="to"),
    workout_type: WorkoutType = Query("bench press", alias="workoutType"),
):
    sets = SetRepository(db).list()
    date_range = DateRange(start=start, end=end)
    in_range = filter_sets_by_range(sets, date_range)
    return {
        "dailyCounts": build_daily_counts(in_range, date_range),
        "volumeByWorkoutType": build_volume_by_workout_type(in_range),
        "maxWeightTrend": build_max_weight_trend(in_range, date_range, workout_type),
    }
