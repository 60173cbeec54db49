"""Tests for source and field-prediction data models."""

from dataclasses import FrozenInstanceError

import pytest
from models.sources import AreaSource, FieldPrediction, Influence, PointSource, TimeSlot


class TestPointSource:
    def test_emission_location_defaults_to_location(self):
        src = PointSource(name="A", location=(43.0, 6.0), base_concentration=1.0)
        assert src.emission_location == (43.0, 6.0)

    def test_emission_location_uses_outlet(self):
        src = PointSource(name="A", location=(43.1, 6.1), base_concentration=1.0, outlet=(43.0, 6.2))
        assert src.emission_location == (43.0, 6.2)

    def test_defaults(self):
        src = PointSource(name="A", location=(43.0, 6.0), base_concentration=1.0)
        assert src.temporal_multiplier == 1.0
        assert src.level == "medium"

    @pytest.mark.parametrize("conc", [0.0, -1.0])
    def test_rejects_non_positive_concentration(self, conc):
        with pytest.raises(ValueError, match="base_concentration"):
            PointSource(name="A", location=(43.0, 6.0), base_concentration=conc)

    def test_rejects_non_positive_multiplier(self):
        with pytest.raises(ValueError, match="temporal_multiplier"):
            PointSource(name="A", location=(43.0, 6.0), base_concentration=1.0, temporal_multiplier=0.0)

    def test_rejects_bad_location(self):
        with pytest.raises(ValueError, match="location"):
            PointSource(name="A", location=(43.0,), base_concentration=1.0)

    def test_frozen(self):
        src = PointSource(name="A", location=(43.0, 6.0), base_concentration=1.0)
        with pytest.raises(FrozenInstanceError):
            src.base_concentration = 2.0


class TestAreaSource:
    def test_requires_all_levels(self):
        with pytest.raises(ValueError, match="missing levels"):
            AreaSource(name="Z", center=(43.0, 6.0), radius=100.0,
                       level_concentrations={"low": 1.0, "medium": 2.0})

    def test_rejects_non_positive_radius(self):
        with pytest.raises(ValueError, match="radius"):
            AreaSource(name="Z", center=(43.0, 6.0), radius=0.0,
                       level_concentrations={"low": 1.0, "medium": 2.0, "high": 3.0})


class TestTimeSlot:
    def test_valid(self):
        slot = TimeSlot("2024-01", "January 2024", 0.3, wind_speed=15.0, wind_direction=45.0,
                        concentration_level="low")
        assert slot.multiplier == 0.3

    def test_rejects_bad_level(self):
        with pytest.raises(ValueError, match="Invalid concentration level"):
            TimeSlot("x", "X", 1.0, wind_speed=1.0, wind_direction=0.0, concentration_level="extreme")

    def test_rejects_negative_wind(self):
        with pytest.raises(ValueError, match="wind_speed"):
            TimeSlot("x", "X", 1.0, wind_speed=-1.0, wind_direction=0.0)

    def test_rejects_non_positive_multiplier(self):
        with pytest.raises(ValueError, match="multiplier"):
            TimeSlot("x", "X", 0.0, wind_speed=1.0, wind_direction=0.0)


class TestFieldPrediction:
    def test_to_dict(self):
        fp = FieldPrediction(
            total_concentration=1.5,
            influences=[Influence("A", 120, 1.4, "high", 45.0)],
        )
        assert fp.to_dict() == {
            "totalConcentration": 1.5,
            "influences": [
                {"source": "A", "distance": 120, "influence": 1.4, "level": "high", "contribution": 45.0}
            ],
        }
