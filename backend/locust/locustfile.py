"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Test overbooking
  locust -f locustfile.py --tags throughput   # Test cache
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests
"""

import random
import string
from datetime import datetime, timedelta, timezone

from locust import HttpUser, between, events, tag, task

PASSWORD = "LoadTest123!"

# Shared state
EVENT_IDS = []
CONCURRENCY_EVENT_ID = None


def random_email():
    return f"load_{random.randint(10000, 99999)}_{random.randint(0, 999)}@test.com"


def random_username():
    return "u_" + "".join(random.choices(string.ascii_lowercase, k=8))


def future_date(days: int = 30) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def sign_up(client) -> dict:
    """Register a throwaway account and return auth headers ({} on failure)."""
    email = random_email()
    client.post("/api/Auth/Register", json={
        "firstName": "Load",
        "lastName": "Tester",
        "email": email,
        "username": random_username(),
        "password": PASSWORD,
    })
    resp = client.post("/api/Auth/Login", json={"email": email, "password": PASSWORD})
    if resp.status_code != 200:
        return {}
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: first ConcurrencyUser creates a 10-seat event")
    print("=" * 60)


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - 100 users -> 10 seats

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify:
      SELECT current_attendees FROM events WHERE id = X;
      SELECT SUM(number_of_tickets) FROM bookings WHERE event_id = X AND status <> 'Cancelled';
    Both should be <= 10
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.headers = sign_up(self.client)
        if self.headers and not CONCURRENCY_EVENT_ID:
            resp = self.client.post(
                "/api/Event",
                json={
                    "title": "Concurrency Test Event",
                    "description": "10 seats only",
                    "date": future_date(),
                    "location": "Test",
                    "maxAttendees": 10,
                    "category": "Workshop",
                },
                headers=self.headers,
            )
            if resp.status_code == 201:
                globals()["CONCURRENCY_EVENT_ID"] = resp.json()["id"]
                print(f"\nCreated event {CONCURRENCY_EVENT_ID} with 10 seats\n")

    @tag("concurrency")
    @task
    def book_limited_seats(self):
        """All users fight for the same 10 seats."""
        if not CONCURRENCY_EVENT_ID or not self.headers:
            return

        with self.client.post(
            "/api/Bookings",
            json={"eventId": CONCURRENCY_EVENT_ID, "numberOfTickets": 1},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif resp.status_code == 400:
                resp.success()  # Expected: sold out or already booked
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - Cache effectiveness

    Run twice:
      1. With Redis: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. Without Redis: REDIS_ENABLED=false, run again

    Compare:
      - Avg response time
      - Requests/sec
      - P95/P99 latency
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_events_cached(self):
        """Hammer the cached endpoint."""
        category = random.choice(["", "Conference", "Meetup", "Concert"])
        params = {"category": category} if category else {}
        resp = self.client.get("/api/Event", params=params, name="/api/Event [cached]")
        if resp.status_code == 200:
            for event in resp.json():
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("throughput", "read")
    @task(3)
    def get_event_detail(self):
        if EVENT_IDS:
            self.client.get(f"/api/Event/{random.choice(EVENT_IDS)}", name="/api/Event/{id}")

    @tag("throughput", "read")
    @task(2)
    def search(self):
        with self.client.get(
            "/api/Search",
            params={"term": random.choice(["tech", "music", "meetup", "zzz"])},
            name="/api/Search",
            catch_response=True,
        ) as resp:
            if resp.status_code in [200, 404]:
                resp.success()

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = sign_up(self.client)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def invalid_event_id(self):
        with self.client.post(
            "/api/Bookings",
            json={"eventId": 999999, "numberOfTickets": 1},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def negative_tickets(self):
        with self.client.post(
            "/api/Bookings",
            json={"eventId": 1, "numberOfTickets": -5},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def huge_ticket_count(self):
        with self.client.post(
            "/api/Bookings",
            json={"eventId": 1, "numberOfTickets": 999999},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def overpayment(self):
        with self.client.post(
            "/api/Bookings/1/payment",
            json={"bookingId": 1, "amount": 999999.99, "paymentMethod": "card"},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [400, 403, 404])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post(
            "/api/Bookings",
            data="not json at all",
            headers={**self.headers, "Content-Type": "application/json"},
            catch_response=True,
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.post(
            "/api/Bookings",
            json={"eventId": 1, "numberOfTickets": 1},
            catch_response=True,
        ) as resp:
            self._expect(resp, [401])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Simulates real traffic:
      - Mostly browsing
      - Some bookings and RSVPs
      - Rare creates
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.headers = sign_up(self.client)

    @task(50)
    def browse_events(self):
        resp = self.client.get("/api/Event", params={"upcoming": "true"})
        if resp.status_code == 200:
            for event in resp.json():
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @task(20)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/api/Event/{random.choice(EVENT_IDS)}", name="/api/Event/{id}", headers=self.headers)

    @task(10)
    def book_tickets(self):
        if EVENT_IDS and self.headers:
            with self.client.post(
                "/api/Bookings",
                json={"eventId": random.choice(EVENT_IDS), "numberOfTickets": random.randint(1, 3)},
                headers=self.headers,
                catch_response=True,
            ) as resp:
                if resp.status_code in [201, 400]:
                    resp.success()

    @task(5)
    def register_for_event(self):
        if EVENT_IDS and self.headers:
            with self.client.post(
                "/api/EventAttendees/register",
                json={"eventId": random.choice(EVENT_IDS)},
                headers=self.headers,
                catch_response=True,
            ) as resp:
                if resp.status_code in [201, 400]:
                    resp.success()

    @task(3)
    def my_bookings(self):
        if self.headers:
            self.client.get("/api/Bookings/my-bookings", headers=self.headers)

    @task(3)
    def create_event(self):
        if self.headers:
            resp = self.client.post(
                "/api/Event",
                json={
                    "title": f"Event {random.randint(1, 10000)}",
                    "description": "Test event",
                    "date": future_date(random.randint(1, 90)),
                    "location": "Venue",
                    "maxAttendees": random.randint(10, 500),
                },
                headers=self.headers,
            )
            if resp.status_code == 201:
                EVENT_IDS.append(resp.json()["id"])
