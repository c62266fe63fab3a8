"""Tests for the ordered category and type rules."""

from classifier import categorize, type_of


class TestCategorize:
    """Test category rules in priority order."""

    def test_high_urgency_is_emergency(self, make_notification):
        n = make_notification("hello")
        assert categorize(n, 26, 0) == "emergency"
        assert categorize(n, 25, 0) == "administrative"

    def test_emergency_and_critical_text(self, make_notification):
        assert categorize(make_notification("Critical potassium"), 0, 0) == "emergency"
        assert categorize(make_notification("", "emergency in bay 4"), 0, 0) == "emergency"

    def test_medical_relevance_threshold(self, make_notification):
        n = make_notification("hello")
        assert categorize(n, 0, 16) == "medical"
        assert categorize(n, 0, 15) == "administrative"

    def test_medical_metadata_and_text(self, make_notification):
        assert categorize(make_notification("hello", metadata={"patient_id": "P-1"}), 0, 0) == "medical"
        assert categorize(make_notification("hello", metadata={"lab_result_id": "L-1"}), 0, 0) == "medical"
        assert categorize(make_notification("New patient admitted"), 0, 0) == "medical"
        assert categorize(make_notification("Medical records request"), 0, 0) == "medical"

    def test_doctor_id_alone_is_not_medical(self, make_notification):
        n = make_notification("hello", metadata={"doctor_id": "D-1"})
        assert categorize(n, 0, 0) == "administrative"

    def test_appointment(self, make_notification):
        assert categorize(make_notification("Appointment moved"), 0, 0) == "appointment"
        assert categorize(make_notification("Clinic rescheduled"), 0, 0) == "appointment"
        assert categorize(make_notification("Online booking open"), 0, 0) == "appointment"
        assert categorize(make_notification("hello", metadata={"appointment_id": "A-1"}), 0, 0) == "appointment"

    def test_reminder(self, make_notification):
        assert categorize(make_notification("Reminder: staff meeting"), 0, 0) == "reminder"
        assert categorize(make_notification("Invoice due Friday"), 0, 0) == "reminder"
        assert categorize(make_notification("Upcoming training"), 0, 0) == "reminder"

    def test_default_is_administrative(self, make_notification):
        assert categorize(make_notification("Parking lot closed"), 0, 0) == "administrative"

    def test_first_matching_rule_wins(self, make_notification):
        assert categorize(make_notification("Emergency appointment"), 0, 0) == "emergency"
        assert categorize(make_notification("Patient appointment"), 0, 0) == "medical"
        assert categorize(make_notification("Appointment reminder"), 0, 0) == "appointment"


class TestTypeOf:
    """Test type rules in priority order."""

    def test_emergency_category_is_always_critical(self):
        assert type_of(0, 0, "emergency") == "critical"

    def test_high_urgency_is_critical(self):
        assert type_of(31, 0, "administrative") == "critical"
        assert type_of(30, 0, "administrative") == "urgent"

    def test_urgent_thresholds(self):
        assert type_of(21, 0, "reminder") == "urgent"
        assert type_of(20, 0, "reminder") == "routine"
        assert type_of(0, 21, "appointment") == "urgent"
        assert type_of(0, 20, "appointment") == "routine"

    def test_medical_category_lowers_urgent_threshold(self):
        assert type_of(16, 0, "medical") == "urgent"
        assert type_of(15, 0, "medical") == "routine"
        assert type_of(16, 0, "appointment") == "routine"

    def test_quiet_administrative_is_system(self):
        assert type_of(4, 0, "administrative") == "system"
        assert type_of(5, 0, "administrative") == "routine"

    def test_default_is_routine(self):
        assert type_of(0, 0, "reminder") == "routine"
