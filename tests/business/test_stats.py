"""Pure statistics function tests.

Covers revenue, averages with half-up rounding, upcoming bookings
(strictly after now, ascending, stable), recent galleries (newest first,
stable), image and download totals, and client/package aggregates.
"""
from datetime import datetime

import pytest

from business import stats


# ============================================================
# rounding
# ============================================================
class TestRoundHalfUp:
    """Tests for round_half_up."""

    @pytest.mark.parametrize("value, expected", [
        (1474.5, 1475),
        (2.5, 3),
        (3.5, 4),
        (2.4999, 2),
        (0, 0),
    ])
    def test_values(self, value, expected):
        assert stats.round_half_up(value) == expected


# ============================================================
# bookings
# ============================================================
class TestBookingStats:
    """Tests for booking aggregates."""

    def test_revenue_and_average(self, make_booking):
        bookings = [make_booking(1, price=2500), make_booking(2, price=450)]

        assert stats.total_revenue(bookings) == 2950
        assert stats.average_booking_value(bookings) == 1475

    def test_empty_bookings(self):
        assert stats.total_revenue([]) == 0
        assert stats.average_booking_value([]) == 0
        assert stats.upcoming_bookings([]) == []

    def test_average_rounds_half_up(self, make_booking):
        bookings = [make_booking(1, price=1), make_booking(2, price=2)]
        assert stats.average_booking_value(bookings) == 2

    def test_upcoming_excludes_past_and_now(self, make_booking, now):
        bookings = [
            make_booking(1, date=datetime(2024, 3, 20)),
            make_booking(2, date=now),
            make_booking(3, date=datetime(2024, 6, 15)),
            make_booking(4, date=None),
        ]

        upcoming = stats.upcoming_bookings(bookings, now=now)

        assert [b.id for b in upcoming] == [3]
        assert stats.upcoming_booking_count(bookings, now=now) == 1

    def test_upcoming_sorted_ascending_and_stable(self, make_booking, now):
        bookings = [
            make_booking(1, date=datetime(2024, 8, 1)),
            make_booking(2, date=datetime(2024, 6, 1)),
            make_booking(3, date=datetime(2024, 8, 1)),
            make_booking(4, date=datetime(2024, 7, 1)),
        ]

        upcoming = stats.upcoming_bookings(bookings, now=now)

        assert [b.id for b in upcoming] == [2, 4, 1, 3]

    def test_upcoming_limit(self, make_booking, now):
        bookings = [
            make_booking(i, date=datetime(2024, 6, i)) for i in range(1, 6)
        ]
        assert [b.id for b in stats.upcoming_bookings(bookings, now, 3)] == \
            [1, 2, 3]

    def test_upcoming_does_not_mutate_input(self, make_booking, now):
        bookings = [
            make_booking(1, date=datetime(2024, 8, 1)),
            make_booking(2, date=datetime(2024, 6, 1)),
        ]
        stats.upcoming_bookings(bookings, now=now)
        assert [b.id for b in bookings] == [1, 2]


# ============================================================
# galleries
# ============================================================
class TestGalleryStats:
    """Tests for gallery aggregates."""

    def test_recent_newest_first(self, make_gallery):
        galleries = [
            make_gallery(1, created_at=datetime(2024, 1, 1)),
            make_gallery(2, created_at=datetime(2024, 3, 1)),
            make_gallery(3, created_at=datetime(2024, 2, 1)),
        ]
        assert [g.id for g in stats.recent_galleries(galleries)] == [2, 3, 1]

    def test_recent_ties_keep_order(self, make_gallery):
        same = datetime(2024, 3, 21)
        galleries = [
            make_gallery(1, created_at=same),
            make_gallery(2, created_at=same),
            make_gallery(3, created_at=datetime(2024, 4, 1)),
        ]
        assert [g.id for g in stats.recent_galleries(galleries, limit=3)] == \
            [3, 1, 2]

    def test_recent_limit(self, make_gallery):
        galleries = [
            make_gallery(i, created_at=datetime(2024, i, 1))
            for i in range(1, 6)
        ]
        assert [g.id for g in stats.recent_galleries(galleries, 2)] == [5, 4]

    def test_image_and_download_totals(self, make_gallery):
        galleries = [
            make_gallery(1, images=[
                {"id": "a", "download_count": 3},
                {"id": "b", "download_count": 1},
            ]),
            make_gallery(2),
            make_gallery(3, images=[{"id": "c"}], is_public=True),
        ]

        assert stats.total_images(galleries) == 3
        assert stats.total_downloads(galleries) == 4
        assert stats.public_gallery_count(galleries) == 1

    def test_empty_galleries(self):
        assert stats.total_images([]) == 0
        assert stats.total_downloads([]) == 0
        assert stats.recent_galleries([]) == []


# ============================================================
# clients and packages
# ============================================================
class TestClientAndPackageStats:
    """Tests for client and package aggregates."""

    def test_client_counts(self, make_client):
        clients = [
            make_client(1, total_spent=2500),
            make_client(2, total_spent=1800, status="inactive"),
            make_client(3, total_spent=3200),
        ]
        assert stats.active_client_count(clients) == 2
        assert stats.total_client_spend(clients) == 7500

    def test_package_counts(self, make_package):
        packages = [
            make_package(1, price=2500),
            make_package(2, price=450, is_active=False),
            make_package(3, price=800),
        ]
        assert stats.active_package_count(packages) == 2
        assert stats.average_package_price(packages) == 1250
        assert stats.average_package_price([]) == 0
