"""Date commands: today, all, sleep, activity, readiness, heartrate, hrv,
stress, spo2, resilience, vo2, workout.

Each takes an optional YYYY-MM-DD date. With --json the raw API bodies
are wrapped in one report object; otherwise a summary is printed.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable

from oura_cli.models.usercollection import (
    DailyActivity,
    DailyReadiness,
    DailyResilience,
    DailySleep,
    DailySpO2,
    DailyStress,
    HeartRate,
    Sleep,
    VO2Max,
    Workout,
)
from oura_cli.parser import ParsedInvocation
from oura_cli.services.daily import DailyService
from oura_cli.utils.dates import (
    DATE_FORMAT,
    date_arg,
    format_clock,
    format_duration,
    seconds_between,
)
from oura_cli.utils.output import print_endpoints_json, print_fields, print_heading, print_line

if TYPE_CHECKING:
    from oura_cli.router import AppContext


def run_date_command(command: str, invocation: ParsedInvocation, ctx: AppContext) -> None:
    day = date_arg(invocation.positional)
    service = DailyService(ctx.client)

    if invocation.options.json_output:
        print_endpoints_json(service.report(command, day))
        return

    RENDERERS[command](service, day)


def _label(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def _sleep_label(record: Sleep) -> str:
    return "Main Sleep" if record.type == "long_sleep" else "Nap"


def show_sleep(service: DailyService, day: date) -> None:
    # The daily score is optional; the sleep periods are not
    try:
        daily = service.fetch_day("/daily_sleep", DailySleep, day, 1)
    except RuntimeError:
        daily = []
    periods = service.fetch_day("/sleep", Sleep, day, 1)

    if not periods and not daily:
        print_line(f"No sleep data for {_label(day)}")
        return

    print_heading(f"Sleep - {_label(day)}")
    if daily:
        score = daily[0]
        c = score.contributors
        print_fields([("Score", score.score)])
        print_line()
        print_line("Contributors:")
        print_fields([
            ("Total Sleep", c.total_sleep),
            ("Efficiency", c.efficiency),
            ("Restfulness", c.restfulness),
            ("REM Sleep", c.rem_sleep),
            ("Deep Sleep", c.deep_sleep),
            ("Latency", c.latency),
            ("Timing", c.timing),
        ], indent=2)
        print_line()

    for i, s in enumerate(periods):
        if i > 0:
            print_line()
            print_line("─" * 40)
        print_line(_sleep_label(s))
        print_fields([
            ("Time", f"{format_clock(s.bedtime_start)} → {format_clock(s.bedtime_end)}"),
            ("Total Sleep", format_duration(s.total_sleep_duration)),
            ("Time in Bed", format_duration(s.time_in_bed)),
            ("Efficiency", f"{s.efficiency}%" if s.efficiency is not None else None),
            ("Deep Sleep", format_duration(s.deep_sleep_duration)),
            ("Light Sleep", format_duration(s.light_sleep_duration)),
            ("REM Sleep", format_duration(s.rem_sleep_duration)),
            ("Awake", format_duration(s.awake_time)),
            ("Latency", format_duration(s.latency)),
            ("Lowest HR", f"{s.lowest_heart_rate} bpm" if s.lowest_heart_rate is not None else None),
            ("Average HR", f"{s.average_heart_rate:.0f} bpm" if s.average_heart_rate is not None else None),
            ("Average HRV", f"{s.average_hrv} ms" if s.average_hrv is not None else None),
            ("Breath Rate", f"{s.average_breath:.1f} /min" if s.average_breath is not None else None),
            ("Restlessness", f"{s.restless_periods} periods" if s.restless_periods is not None else None),
        ])


def show_hrv(service: DailyService, day: date) -> None:
    periods = service.fetch_day("/sleep", Sleep, day, 1)
    if not periods:
        print_line(f"No HRV data for {_label(day)}")
        return

    print_heading(f"HRV - {_label(day)}")
    for i, s in enumerate(periods):
        if i > 0:
            print_line()
        hrv = f"{s.average_hrv} ms" if s.average_hrv else "n/a"
        print_line(f"{_sleep_label(s)} ({format_clock(s.bedtime_start)} → {format_clock(s.bedtime_end)})")
        print_fields([
            ("Average HRV", hrv),
            ("Average HR", f"{s.average_heart_rate:.0f} bpm" if s.average_heart_rate is not None else None),
            ("Lowest HR", f"{s.lowest_heart_rate} bpm" if s.lowest_heart_rate is not None else None),
        ])


def show_readiness(service: DailyService, day: date) -> None:
    records = service.fetch_day("/daily_readiness", DailyReadiness, day, 1)
    if not records:
        print_line(f"No readiness data for {_label(day)}")
        return

    r = records[0]
    c = r.contributors
    print_heading(f"Readiness - {r.day}")
    print_fields([
        ("Score", r.score),
        ("Temp Deviation", f"{r.temperature_deviation:+.2f}°C" if r.temperature_deviation is not None else None),
    ])
    print_line()
    print_line("Contributors:")
    print_fields([
        ("Resting HR", c.resting_heart_rate),
        ("HRV Balance", c.hrv_balance),
        ("Body Temp", c.body_temperature),
        ("Recovery Index", c.recovery_index),
        ("Previous Night", c.previous_night),
        ("Prev Day Activity", c.previous_day_activity),
        ("Activity Balance", c.activity_balance),
        ("Sleep Balance", c.sleep_balance),
        ("Sleep Regularity", c.sleep_regularity),
    ], indent=2)


def show_activity(service: DailyService, day: date) -> None:
    records = service.fetch_day("/daily_activity", DailyActivity, day, 1)
    if not records:
        print_line(f"No activity data for {_label(day)}")
        return

    a = records[0]
    print_heading(f"Activity - {a.day}")
    print_fields([
        ("Score", a.score),
        ("Steps", a.steps),
        ("Distance", f"{a.equivalent_walking_distance / 1000:.1f} km"),
        ("Active Cal", a.active_calories),
        ("Total Cal", a.total_calories),
        ("Target Cal", a.target_calories),
        ("High Activity", format_duration(a.high_activity_time)),
        ("Med Activity", format_duration(a.medium_activity_time)),
        ("Low Activity", format_duration(a.low_activity_time)),
        ("Sedentary", format_duration(a.sedentary_time)),
        ("Resting", format_duration(a.resting_time)),
    ])


def show_heartrate(service: DailyService, day: date) -> None:
    page = service.fetch("/heartrate", HeartRate, _label(day), _label(day))
    if not page.data:
        print_line(f"No heart rate data for {_label(day)}")
        return

    readings = [hr.bpm for hr in page.data]
    print_heading(f"Heart Rate - {_label(day)}")
    print_fields([
        ("Readings", len(readings)),
        ("Min", f"{min(readings)} bpm"),
        ("Max", f"{max(readings)} bpm"),
        ("Average", f"{sum(readings) // len(readings)} bpm"),
    ])


def show_stress(service: DailyService, day: date) -> None:
    records = service.fetch_day("/daily_stress", DailyStress, day, 0)
    if not records:
        print_line(f"No stress data for {_label(day)}")
        return

    s = records[0]
    print_heading(f"Stress - {s.day}")
    print_fields([
        ("Stress High", f"{(s.stress_high or 0) // 60} min"),
        ("Recovery High", f"{(s.recovery_high or 0) // 60} min"),
        ("Day Summary", s.day_summary),
    ])


def show_spo2(service: DailyService, day: date) -> None:
    records = service.fetch_day("/daily_spo2", DailySpO2, day, 0)
    if not records:
        print_line(f"No SpO2 data for {_label(day)}")
        return

    s = records[0]
    average = s.spo2_percentage.average if s.spo2_percentage else None
    print_heading(f"Blood Oxygen - {s.day}")
    print_fields([
        ("Average SpO2", f"{average:.1f}%" if average is not None else None),
        ("Breathing Index", f"{s.breathing_disturbance_index:.2f}" if s.breathing_disturbance_index is not None else None),
    ])


def show_resilience(service: DailyService, day: date) -> None:
    records = service.fetch_day("/daily_resilience", DailyResilience, day, 0)
    if not records:
        print_line(f"No resilience data for {_label(day)}")
        return

    r = records[0]
    c = r.contributors
    print_heading(f"Resilience - {r.day}")
    print_fields([
        ("Level", r.level),
        ("Sleep Recovery", f"{c.sleep_recovery:.0f}" if c.sleep_recovery is not None else None),
        ("Daytime Recovery", f"{c.daytime_recovery:.0f}" if c.daytime_recovery is not None else None),
        ("Stress", f"{c.stress:.0f}" if c.stress is not None else None),
    ])


def show_vo2(service: DailyService, day: date) -> None:
    records = service.fetch_day("/vO2_max", VO2Max, day, 0)
    if not records:
        print_line(f"No VO2 max data for {_label(day)}")
        return

    v = records[0]
    print_heading(f"VO2 Max - {v.day}")
    print_fields([("VO2 Max", f"{v.vo2_max:.1f} ml/kg/min" if v.vo2_max is not None else None)])


def show_workouts(service: DailyService, day: date) -> None:
    workouts = service.fetch_day("/workout", Workout, day, 0)
    if not workouts:
        print_line(f"No workout data for {_label(day)}")
        return

    print_heading(f"Workouts - {_label(day)}")
    for i, w in enumerate(workouts):
        if i > 0:
            print_line()
        duration = format_duration(seconds_between(w.start_datetime, w.end_datetime))
        print_fields([
            ("Activity", w.label or w.activity),
            ("Time", f"{format_clock(w.start_datetime)} ({duration})"),
            ("Calories", f"{w.calories:.0f}" if w.calories is not None else None),
            ("Distance", f"{w.distance / 1000:.2f} km" if w.distance else None),
            ("Intensity", w.intensity),
            ("Source", w.source),
        ])


def show_all(service: DailyService, day: date) -> None:
    print_line("╔" + "═" * 38 + "╗")
    print_line(f"║      OURA METRICS - {_label(day):<10}       ║")
    print_line("╚" + "═" * 38 + "╝")
    print_line()

    sections = [show_readiness, show_sleep, show_activity, show_stress, show_heartrate]
    for i, section in enumerate(sections):
        if i > 0:
            print_line()
        section(service, day)


RENDERERS: dict[str, Callable[[DailyService, date], None]] = {
    "sleep": show_sleep,
    "activity": show_activity,
    "readiness": show_readiness,
    "heartrate": show_heartrate,
    "hrv": show_hrv,
    "stress": show_stress,
    "spo2": show_spo2,
    "resilience": show_resilience,
    "vo2": show_vo2,
    "workout": show_workouts,
    "all": show_all,
    "today": show_all,
}
