from .conftest import NEXT_MONDAY, NEXT_TUESDAY, TODAY, YESTERDAY


def book(client, meeting, participant, date=NEXT_MONDAY, time="09:00"):
    return client.post(
        f"/meetings/public/{meeting.shareable_link}/book",
        json={"date": date.isoformat(), "time": time, "participant_id": participant.id},
    )


def test_public_availability(client, make_meeting) -> None:
    meeting = make_meeting()

    response = client.get(
        f"/meetings/public/{meeting.shareable_link}/availability",
        params={"date": NEXT_MONDAY.isoformat()},
    )

    assert response.status_code == 200
    assert response.json() == {
        "date": NEXT_MONDAY.isoformat(),
        "duration": 30,
        "slots": ["09:00", "09:30"],
    }


def test_availability_requires_a_valid_date(client, make_meeting) -> None:
    meeting = make_meeting()

    response = client.get(
        f"/meetings/public/{meeting.shareable_link}/availability", params={"date": "14-01-2030"}
    )

    assert response.status_code == 400


def test_available_dates(client, make_meeting) -> None:
    meeting = make_meeting(weekdays=("monday", "tuesday"))

    response = client.get(
        f"/meetings/public/{meeting.shareable_link}/available-dates",
        params={"start": TODAY.isoformat(), "days": 9},
    )

    assert response.status_code == 200
    assert response.json()["dates"] == [
        "2030-01-08",
        NEXT_MONDAY.isoformat(),
        NEXT_TUESDAY.isoformat(),
    ]


def test_available_dates_range_limit(client, make_meeting) -> None:
    meeting = make_meeting()

    response = client.get(
        f"/meetings/public/{meeting.shareable_link}/available-dates", params={"days": 1000}
    )

    assert response.status_code == 400


def test_available_dates_at_the_last_calendar_day(client, make_meeting) -> None:
    meeting = make_meeting()

    response = client.get(
        f"/meetings/public/{meeting.shareable_link}/available-dates",
        params={"start": "9999-12-31", "days": 2},
    )

    assert response.status_code == 200
    assert response.json()["start"] == "9999-12-31"
    assert response.json()["dates"] == []


def test_book_then_conflict(client, make_meeting, make_participant, recorder) -> None:
    meeting = make_meeting()

    response = book(client, meeting, make_participant())

    assert response.status_code == 201
    booking = response.json()["booking"]
    assert booking["time"] == "09:00"
    assert booking["status"] == "pending"
    assert booking["needs_decision"] is False
    assert booking["participant"]["full_name"] == "Dana Levi"

    conflict = book(client, meeting, make_participant())
    assert conflict.status_code == 409
    assert conflict.json()["time"] == "09:00"

    slots = client.get(
        f"/meetings/public/{meeting.shareable_link}/availability",
        params={"date": NEXT_MONDAY.isoformat()},
    ).json()["slots"]
    assert slots == ["09:30"]
    assert recorder.types() == ["booking.created"]


def test_booking_errors_map_to_status_codes(client, make_meeting, make_participant) -> None:
    meeting = make_meeting()
    participant = make_participant()

    assert book(client, meeting, participant, date=YESTERDAY).status_code == 400
    assert book(client, meeting, participant, time="09:10").status_code == 400
    assert book(client, meeting, participant, time="9am").status_code == 400

    unknown = client.post(
        "/meetings/public/does-not-exist/book",
        json={"date": NEXT_MONDAY.isoformat(), "time": "09:00", "participant_id": participant.id},
    )
    assert unknown.status_code == 404

    no_participant = client.post(
        f"/meetings/public/{meeting.shareable_link}/book",
        json={"date": NEXT_MONDAY.isoformat(), "time": "09:00", "participant_id": 424242},
    )
    assert no_participant.status_code == 400


def test_legacy_participant_field_name(client, make_meeting, make_participant) -> None:
    meeting = make_meeting()
    participant = make_participant()

    response = client.post(
        f"/meetings/public/{meeting.shareable_link}/book",
        json={"date": NEXT_MONDAY.isoformat(), "time": "09:30", "participant": participant.id},
    )

    assert response.status_code == 201


def test_host_booking_management(client, auth_headers, make_meeting, make_participant) -> None:
    meeting = make_meeting(weekdays=("monday", "tuesday"))
    booking_id = book(client, meeting, make_participant()).json()["booking"]["id"]
    base = f"/meetings/{meeting.id}/bookings"

    listed = client.get(base, headers=auth_headers).json()
    assert [b["id"] for b in listed] == [booking_id]
    assert client.get(base, params={"date": NEXT_TUESDAY.isoformat()}, headers=auth_headers).json() == []

    moved = client.patch(
        f"{base}/{booking_id}",
        json={"date": NEXT_TUESDAY.isoformat(), "time": "09:30"},
        headers=auth_headers,
    )
    assert moved.status_code == 200
    assert (moved.json()["date"], moved.json()["time"]) == (NEXT_TUESDAY.isoformat(), "09:30")

    cancelled = client.patch(
        f"{base}/{booking_id}/status", json={"status": "cancelled"}, headers=auth_headers
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    invalid = client.patch(
        f"{base}/{booking_id}/status", json={"status": "completed"}, headers=auth_headers
    )
    assert invalid.status_code == 400

    assert client.delete(f"{base}/{booking_id}", headers=auth_headers).status_code == 200
    assert client.delete(f"{base}/{booking_id}", headers=auth_headers).status_code == 404


def test_booking_management_requires_owner(
    client, auth_headers, other_host_headers, make_meeting, make_participant
) -> None:
    meeting = make_meeting()
    booking_id = book(client, meeting, make_participant()).json()["booking"]["id"]

    assert client.get(f"/meetings/{meeting.id}/bookings").status_code in (401, 403)
    assert (
        client.patch(
            f"/meetings/{meeting.id}/bookings/{booking_id}/status",
            json={"status": "cancelled"},
            headers=other_host_headers,
        ).status_code
        == 404
    )


def test_reconcile_endpoint(client, auth_headers, make_meeting, make_participant, add_booking) -> None:
    meeting = make_meeting()
    elapsed = add_booking(meeting, make_participant(), YESTERDAY, "09:00")

    listed = client.get(f"/meetings/{meeting.id}/bookings", headers=auth_headers).json()
    assert listed[0]["needs_decision"] is True

    response = client.post(f"/meetings/{meeting.id}/reconcile", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "meeting_id": meeting.id,
        "completed": 1,
        "booking_ids": [elapsed.public_id],
    }

    again = client.post(f"/meetings/{meeting.id}/reconcile", headers=auth_headers)
    assert again.json()["completed"] == 0
