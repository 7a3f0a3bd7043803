"""Documents returned by the /v2/usercollection endpoints.

Only the fields the CLI renders are modelled; everything is optional so a
sparse document still parses. JSON mode never goes through these models.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class DocumentPage(BaseModel, Generic[T]):
    """A multi-document response with its pagination cursor."""
    data: list[T] = Field(default_factory=list)
    next_token: str | None = None


class PersonalInfo(BaseModel):
    id: str = ""
    email: str | None = None
    age: Any = None
    biological_sex: str | None = None
    height: Any = None
    weight: Any = None


class Tag(BaseModel):
    id: str = ""
    day: str = ""
    timestamp: str | None = None
    text: str | None = None
    tags: list[str] = Field(default_factory=list)


class EnhancedTag(BaseModel):
    id: str = ""
    tag_type_code: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    start_day: str | None = None
    end_day: str | None = None
    comment: str | None = None
    custom_name: str | None = None


class Session(BaseModel):
    id: str = ""
    day: str = ""
    start_datetime: str | None = None
    end_datetime: str | None = None
    type: str | None = None
    mood: str | None = None


class Sleep(BaseModel):
    day: str = ""
    type: str = ""
    bedtime_start: str | None = None
    bedtime_end: str | None = None
    total_sleep_duration: int | None = None
    time_in_bed: int | None = None
    efficiency: int | None = None
    deep_sleep_duration: int | None = None
    light_sleep_duration: int | None = None
    rem_sleep_duration: int | None = None
    awake_time: int | None = None
    latency: int | None = None
    lowest_heart_rate: int | None = None
    average_heart_rate: float | None = None
    average_hrv: int | None = None
    average_breath: float | None = None
    restless_periods: int | None = None


class SleepContributors(BaseModel):
    deep_sleep: int | None = None
    efficiency: int | None = None
    latency: int | None = None
    rem_sleep: int | None = None
    restfulness: int | None = None
    timing: int | None = None
    total_sleep: int | None = None


class DailySleep(BaseModel):
    day: str = ""
    score: int | None = None
    contributors: SleepContributors = Field(default_factory=SleepContributors)


class ReadinessContributors(BaseModel):
    activity_balance: int | None = None
    body_temperature: int | None = None
    hrv_balance: int | None = None
    previous_day_activity: int | None = None
    previous_night: int | None = None
    recovery_index: int | None = None
    resting_heart_rate: int | None = None
    sleep_balance: int | None = None
    sleep_regularity: int | None = None


class DailyReadiness(BaseModel):
    day: str = ""
    score: int | None = None
    temperature_deviation: float | None = None
    temperature_trend_deviation: float | None = None
    contributors: ReadinessContributors = Field(default_factory=ReadinessContributors)


class DailyActivity(BaseModel):
    day: str = ""
    score: int | None = None
    steps: int = 0
    active_calories: int = 0
    total_calories: int = 0
    target_calories: int = 0
    equivalent_walking_distance: int = 0
    high_activity_time: int = 0
    medium_activity_time: int = 0
    low_activity_time: int = 0
    sedentary_time: int = 0
    resting_time: int = 0


class HeartRate(BaseModel):
    timestamp: str = ""
    bpm: int
    source: str = ""


class DailyStress(BaseModel):
    day: str = ""
    stress_high: int | None = None
    recovery_high: int | None = None
    day_summary: str | None = None


class SpO2Percentage(BaseModel):
    average: float | None = None


class DailySpO2(BaseModel):
    day: str = ""
    spo2_percentage: SpO2Percentage | None = None
    breathing_disturbance_index: float | None = None


class ResilienceContributors(BaseModel):
    sleep_recovery: float | None = None
    daytime_recovery: float | None = None
    stress: float | None = None


class DailyResilience(BaseModel):
    day: str = ""
    level: str | None = None
    contributors: ResilienceContributors = Field(default_factory=ResilienceContributors)


class VO2Max(BaseModel):
    day: str = ""
    vo2_max: float | None = None


class Workout(BaseModel):
    day: str = ""
    activity: str = ""
    calories: float | None = None
    distance: float | None = None
    start_datetime: str | None = None
    end_datetime: str | None = None
    intensity: str | None = None
    label: str | None = None
    source: str | None = None
