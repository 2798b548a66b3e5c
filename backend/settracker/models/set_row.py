from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Float, Integer, String, false
from settracker.constants import SHARED_TENANT
from settracker.db import Base

class SetRow(Base):
    __tablename__ = "sets"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    device_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True, default=SHARED_TENANT)
    workout_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    weight_lb: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_is_bodyweight: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    performed_at_iso: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at_iso: Mapped[str] = mapped_column(String(32), nullable=False)
    updated_at_iso: Mapped[str] = mapped_column(String(32), nullable=False)
