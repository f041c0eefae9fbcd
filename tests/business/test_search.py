"""Search and filter tests.

Matching is a case-insensitive substring test; bookings and galleries also
match on the linked client's name, which is looked up, not stored.
"""
from business import search


class TestSearchClients:
    """Tests for search_clients."""

    def test_name_or_email(self, make_client):
        clients = [
            make_client(1, "Sarah & James Wilson",
                        email="sarah.wilson@email.com"),
            make_client(2, "Emily Chen", email="emily.chen@email.com"),
        ]

        assert [c.id for c in search.search_clients(clients, "WILSON")] == [1]
        assert [c.id for c in search.search_clients(clients, "chen@")] == [2]
        assert search.search_clients(clients, "nobody") == []

    def test_empty_query_matches_all(self, make_client):
        clients = [make_client(1), make_client(2)]
        assert search.search_clients(clients, "") == clients


class TestSearchBookingsAndGalleries:
    """Tests for search_bookings and search_galleries."""

    def test_booking_title_and_client_name(self, make_client, make_booking):
        clients = [make_client(1, "Sarah & James Wilson"),
                   make_client(2, "Emily Chen")]
        bookings = [
            make_booking(1, client_id=1, title="Sarah & James Wedding"),
            make_booking(2, client_id=2, title="Portrait Session"),
            make_booking(3, client_id=1, title="Anniversary Shoot"),
        ]

        matched = search.search_bookings(bookings, clients, "sarah")

        assert [b.id for b in matched] == [1, 3]

    def test_dangling_client_is_safe(self, make_client, make_booking):
        bookings = [
            make_booking(1, client_id=42, title="Orphan"),
            make_booking(2, client_id=None, title="No client"),
        ]

        assert search.search_bookings(bookings, [], "emily") == []
        assert [b.id for b in search.search_bookings(bookings, [], "orph")] \
            == [1]

    def test_gallery_title_and_client_name(self, make_client, make_gallery):
        clients = [make_client(2, "Emily Chen")]
        galleries = [
            make_gallery(1, client_id=2, title="Headshots"),
            make_gallery(2, client_id=3, title="Family Day"),
        ]

        assert [g.id for g in search.search_galleries(galleries, clients,
                                                       "emily")] == [1]
        assert [g.id for g in search.search_galleries(galleries, clients,
                                                       "family")] == [2]

    def test_empty_query_matches_all(self, make_booking, make_gallery):
        bookings = [make_booking(1, title=None), make_booking(2)]
        galleries = [make_gallery(1)]
        assert search.search_bookings(bookings, [], "") == bookings
        assert search.search_galleries(galleries, [], "") == galleries


class TestSearchReferralClients:
    """Tests for search_referral_clients."""

    def test_only_clients_in_referrals(self, make_client):
        clients = [
            make_client(1, "Sarah", referrals=[2]),
            make_client(2, "Sara Lee", referred_by=1),
            make_client(3, "Sarah Solo"),
        ]

        matched = search.search_referral_clients(clients, "sar")

        assert [c.id for c in matched] == [1, 2]
