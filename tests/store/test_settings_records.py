"""Singleton configuration record tests.

Covers:
- defaults present on a fresh store
- shallow merge: only given top-level fields change
- nested objects are replaced wholesale, not deep-merged
- unknown fields ignored, id never changes
"""


class TestDefaults:
    """Tests for default singleton records."""

    def test_fresh_store_has_all_records(self, store):
        assert store.get_user_profile().id == 1
        assert store.get_business_settings().currency == "USD"
        assert store.get_notification_settings() \
            .email_notifications["booking_reminder"] is True
        assert store.get_system_settings().theme == "system"

    def test_default_working_hours(self, store):
        hours = store.get_business_settings().working_hours
        assert hours["start"] == "09:00"
        assert hours["end"] == "18:00"
        assert "Monday" in hours["days"]

    def test_ensure_defaults_is_idempotent(self, store):
        store.update_user_profile(name="Jane")
        store.config_records.ensure_defaults()
        assert store.get_user_profile().name == "Jane"


class TestShallowMerge:
    """Tests for singleton updates."""

    def test_only_given_fields_change(self, store):
        before = store.get_business_settings()

        store.update_business_settings(tax_rate=8.5)

        after = store.get_business_settings()
        assert after.tax_rate == 8.5
        assert after.currency == before.currency
        assert after.invoice_prefix == before.invoice_prefix
        assert after.working_hours == before.working_hours

    def test_nested_object_replaced_wholesale(self, store):
        store.update_business_settings(working_hours={"start": "10:00"})

        assert store.get_business_settings().working_hours == \
            {"start": "10:00"}

    def test_notification_channels_replaced_wholesale(self, store):
        store.update_notification_settings(
            sms_notifications={"booking_reminder": True}
        )
        settings = store.get_notification_settings()
        assert settings.sms_notifications == {"booking_reminder": True}
        assert settings.email_notifications["new_booking"] is True

    def test_system_settings_update(self, store):
        store.update_system_settings(
            theme="dark",
            watermark_settings={"enabled": True, "text": "JD"},
        )
        settings = store.get_system_settings()
        assert settings.theme == "dark"
        assert settings.watermark_settings == {"enabled": True, "text": "JD"}
        assert settings.session_timeout == 60

    def test_unknown_fields_and_id_ignored(self, store):
        store.update_user_profile(id=7, name="Jane", favourite_lens="50mm")

        profile = store.get_user_profile()
        assert profile.id == 1
        assert profile.name == "Jane"
        assert not hasattr(profile, "favourite_lens")

    def test_snapshot_is_detached(self, store):
        snapshot = store.get_business_settings()
        snapshot.working_hours["start"] = "05:00"

        assert store.get_business_settings().working_hours["start"] == "09:00"
