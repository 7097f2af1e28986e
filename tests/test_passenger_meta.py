"""
Tests for passenger enrichment
"""

import pytest
from datetime import date

from gds_air_service.services.passenger_meta import add_months, add_passenger_meta, child_age_category

TODAY = date(2024, 1, 15)


class TestAddMonths:

    def test_same_day(self):
        """Test same day"""
        assert add_months(date(2024, 1, 15), 12) == date(2025, 1, 15)

    def test_clamps_to_month_end(self):
        """Test clamps to month end"""
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_crosses_year(self):
        """Test crosses year"""
        assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)


class TestChildAgeCategory:

    @pytest.mark.parametrize("age,expected", [(2, "C02"), (9, "C09"), (10, "C10"), (11, "C11")])
    def test_category(self, age, expected):
        """Test age coded child category"""
        assert child_age_category(age) == expected


class TestAddPassengerMeta:

    def test_adult_with_passport(self):
        """Test adult with passport"""
        params = {"rule": "SIP", "passengers": [{
            "first_name": "JOHN",
            "last_name": "SMITH",
            "age_category": "ADT",
            "gender": "M",
            "birth_date": "1990-03-05",
            "pass_number": "AB123456",
            "pass_country": "UA",
        }]}

        result = add_passenger_meta(params, today=TODAY)

        passenger = result["passengers"][0]
        assert result["rule"] == "SIP"
        assert passenger["dob"] == "1990-03-05"
        assert passenger["ssr"] == {
            "type": "DOCS",
            "text": "P/UA/AB123456/UA/05MAR90/M/15JAN25/SMITH/JOHN",
        }
        assert "is_child" not in passenger

    @pytest.mark.parametrize("birth_date", ["1990-03-05T00:00:00", "1990-03-05T00:00:00+02:00", " 1990-03-05 "])
    def test_birth_date_with_time_suffix(self, birth_date):
        """Test only the leading date of a birth date is used"""
        params = {"passengers": [{
            "first_name": "JOHN",
            "last_name": "SMITH",
            "gender": "M",
            "birth_date": birth_date,
            "pass_number": "AB123456",
            "pass_country": "UA",
        }]}

        passenger = add_passenger_meta(params, today=TODAY)["passengers"][0]

        assert passenger["dob"] == "1990-03-05"
        assert passenger["ssr"]["text"] == "P/UA/AB123456/UA/05MAR90/M/15JAN25/SMITH/JOHN"

    def test_child(self):
        """Test child passenger gets age coded category"""
        params = {"passengers": [{"first_name": "ANNA", "last_name": "SMITH", "age_category": "CNN", "age": 5}]}

        passenger = add_passenger_meta(params, today=TODAY)["passengers"][0]

        assert passenger["is_child"] is True
        assert passenger["age_category"] == "C05"
        assert "ssr" not in passenger

    def test_does_not_mutate_input(self):
        """Test does not mutate input"""
        original = {"first_name": "ANNA", "age_category": "CNN", "age": 11}
        params = {"passengers": [original]}

        add_passenger_meta(params, today=TODAY)

        assert original == {"first_name": "ANNA", "age_category": "CNN", "age": 11}

    def test_without_passengers(self):
        """Test without passengers"""
        assert add_passenger_meta({"rule": "SIP"}, today=TODAY) == {"rule": "SIP"}
