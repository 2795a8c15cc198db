from datetime import date, time, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from flight_dispatch.models.job import Job, JobStatus, RecurrenceFrequency
from flight_dispatch.schemas.job import JobCreate, JobUpdate
from flight_dispatch.services import job_service
from flight_dispatch.services.job_service import JobStateError

from conftest import make_driver, make_job

ORIGIN = date(2025, 6, 2)


def job_create(**overrides) -> JobCreate:
    data = dict(
        pickup_date=ORIGIN,
        pickup_time=time(7, 45),
        flight_number="ba100",
        pickup_location="Airport Terminal 2",
        dropoff_location="Crew Quarters",
        number_of_passengers=3,
    )
    data.update(overrides)
    return JobCreate(**data)


def test_single_job_keeps_driver(db):
    driver = make_driver(db)

    created = job_service.create_job(db, job_create(driver_id=driver.id))

    assert len(created) == 1
    job = created[0]
    assert job.flight_number == "BA100"
    assert job.driver_id == driver.id
    assert job.status == JobStatus.assigned
    assert job.is_recurring is False
    assert job.recurrence_count is None


def test_recurring_job_fans_out_unassigned_instances(db):
    driver = make_driver(db)

    created = job_service.create_job(
        db,
        job_create(
            driver_id=driver.id,
            is_recurring=True,
            recurrence_frequency=RecurrenceFrequency.weekly,
            recurrence_count=5,
        ),
    )

    assert len(created) == 6
    assert db.query(Job).count() == 6

    origin, *future = created
    assert origin.pickup_date == ORIGIN
    assert origin.driver_id == driver.id
    assert origin.status == JobStatus.assigned

    assert [job.pickup_date for job in future] == [ORIGIN + timedelta(weeks=i) for i in range(1, 6)]
    for job in future:
        assert job.driver_id is None
        assert job.status == JobStatus.unassigned
        assert job.flight_number == origin.flight_number
        assert job.pickup_location == origin.pickup_location
        assert job.dropoff_location == origin.dropoff_location
        assert job.number_of_passengers == 3
        assert job.is_recurring is True
        assert job.recurrence_frequency == RecurrenceFrequency.weekly
        assert job.recurrence_count == 5


def test_recurring_job_uses_default_count(db):
    created = job_service.create_job(
        db,
        job_create(is_recurring=True, recurrence_frequency="daily"),
        default_recurrence_count=12,
    )

    assert len(created) == 13
    assert created[-1].pickup_date == ORIGIN + timedelta(days=12)


def test_recurring_flag_without_frequency_creates_one_row(db):
    created = job_service.create_job(db, job_create(is_recurring=True, recurrence_count=4))

    assert len(created) == 1
    assert db.query(Job).count() == 1


def test_failed_fan_out_rolls_back_the_whole_series(db, monkeypatch):
    # The second occurrence violates NOT NULL on pickup_date
    monkeypatch.setattr(
        job_service,
        "expand_dates",
        lambda origin, frequency, count: [origin + timedelta(days=1), None, origin + timedelta(days=3)],
    )

    with pytest.raises(IntegrityError):
        job_service.create_job(
            db,
            job_create(is_recurring=True, recurrence_frequency="daily", recurrence_count=3),
        )

    assert db.query(Job).count() == 0


def test_status_follows_driver_on_direct_writes(db):
    driver = make_driver(db)
    job = make_job(db)
    assert job.status == JobStatus.unassigned

    job.driver_id = driver.id
    db.commit()
    db.refresh(job)
    assert job.status == JobStatus.assigned

    job.driver_id = None
    db.commit()
    db.refresh(job)
    assert job.status == JobStatus.unassigned


def test_update_assigns_and_unassigns(db):
    driver = make_driver(db)
    job = make_job(db)

    job = job_service.update_job(db, job, JobUpdate(driver_id=driver.id))
    assert job.status == JobStatus.assigned

    job = job_service.update_job(db, job, JobUpdate(driver_id=None))
    assert job.driver_id is None
    assert job.status == JobStatus.unassigned


def test_update_without_driver_field_keeps_assignment(db):
    driver = make_driver(db)
    job = make_job(db, driver_id=driver.id)

    job = job_service.update_job(db, job, JobUpdate(pickup_location="Airport Terminal 2"))

    assert job.driver_id == driver.id
    assert job.status == JobStatus.assigned
    assert job.pickup_location == "Airport Terminal 2"


def test_update_rejects_status_that_contradicts_driver(db):
    job = make_job(db)

    with pytest.raises(JobStateError):
        job_service.update_job(db, job, JobUpdate(status=JobStatus.assigned))

    db.refresh(job)
    assert job.status == JobStatus.unassigned


def test_update_accepts_consistent_status(db):
    driver = make_driver(db)
    job = make_job(db)

    job = job_service.update_job(db, job, JobUpdate(driver_id=driver.id, status=JobStatus.assigned))

    assert job.status == JobStatus.assigned


def test_second_pickup_overwrites_timestamp(db):
    driver = make_driver(db)
    job = make_job(db, driver_id=driver.id)

    job = job_service.mark_pickup(db, job)
    first = job.driver_picked_up_at
    job = job_service.mark_pickup(db, job)

    assert first is not None
    assert job.driver_picked_up_at >= first


def test_dropoff_requires_pickup(db):
    driver = make_driver(db)
    job = make_job(db, driver_id=driver.id)

    with pytest.raises(JobStateError):
        job_service.mark_dropoff(db, job)

    job = job_service.mark_pickup(db, job)
    job = job_service.mark_dropoff(db, job)
    assert job.driver_dropped_off_at >= job.driver_picked_up_at


def test_pickup_rejected_after_dropoff(db):
    driver = make_driver(db)
    job = make_job(db, driver_id=driver.id)
    job = job_service.mark_pickup(db, job)
    job = job_service.mark_dropoff(db, job)

    with pytest.raises(JobStateError):
        job_service.mark_pickup(db, job)


def test_delete_job(db):
    job = make_job(db)

    assert job_service.delete_job(db, job.id) is True
    assert job_service.delete_job(db, job.id) is False
