"""End-to-end tests: mock data through the models to the CLI report."""

import sys

import numpy as np
import pytest

from data.interfaces import MockDataProvider
from models.diffusion import EnvironmentalVector, predict
from models.field import apply_time_slot, predict_at
from models.risk import assess_risk
from experiments.run_distance_profile import main, print_distance_profile, print_field_prediction


class TestSinglePointPipeline:
    def test_risk_decreases_downstream(self, base_conditions):
        """Moving away from a strong source never raises the risk level."""
        levels = []
        for distance in [0.0, 2.0, 5.0, 10.0, 20.0, 40.0]:
            prediction = predict(EnvironmentalVector(distance=distance, **base_conditions))
            levels.append(assess_risk(prediction, 10.0).risk_level)
        assert levels == sorted(levels, reverse=True)
        assert levels[0] == 5
        assert levels[-1] == 1


class TestToulonField:
    def test_every_outfall_dominates_at_its_outlet(self, mock_provider):
        slot = mock_provider.get_time_slot("2024-10")
        sources = apply_time_slot(mock_provider.get_point_sources(), slot)
        for source in sources:
            result = predict_at(source.emission_location, sources, slot.wind_speed,
                                rng=np.random.default_rng(0))
            assert result.influences[0].source == source.name

    def test_arsenal_zone_reported_in_harbour(self, mock_provider):
        slot = mock_provider.get_time_slot("2024-12")
        result = predict_at(
            (43.1167, 5.9289),
            apply_time_slot(mock_provider.get_point_sources(), slot),
            slot.wind_speed,
            zones=apply_time_slot(mock_provider.get_area_sources(), slot),
            zone_level="high",
            rng=np.random.default_rng(0),
        )
        arsenal = next(i for i in result.influences if i.source == "Toulon Arsenal")
        assert arsenal.influence == pytest.approx(4.5 * 1.6)
        assert arsenal.level == "high"


class TestDistanceProfileReport:
    def test_prints_one_row_per_distance(self, base_conditions, capsys):
        results = print_distance_profile(base_conditions, [5.0, 10.0, 25.0], 10.0)
        out = capsys.readouterr().out
        assert [r.distance for r in results] == [5.0, 10.0, 25.0]
        assert "Distance profile" in out
        assert "Critical" in out or "High" in out or "Low" in out

    def test_field_report(self, capsys):
        prediction = print_field_prediction(43.0989, 6.1534, "2024-07", seed=42)
        out = capsys.readouterr().out
        assert "July 2024" in out
        assert prediction.influences[0].source in out

    def test_unknown_slot_is_a_usage_error(self, monkeypatch, capsys):
        monkeypatch.setattr(
            sys, "argv",
            ["run_distance_profile.py", "--point", "43.1", "5.95", "--slot", "1999-01"],
        )
        with pytest.raises(SystemExit) as excinfo:
            main()
        assert excinfo.value.code == 2
        err = capsys.readouterr().err
        assert "unknown --slot '1999-01'" in err
        assert "2024-12" in err

    def test_main_prints_field_for_known_slot(self, monkeypatch, capsys):
        monkeypatch.setattr(
            sys, "argv",
            ["run_distance_profile.py", "--point", "43.1", "5.95", "--slot", "2024-01",
             "--seed", "7"],
        )
        main()
        out = capsys.readouterr().out
        assert "Distance profile" in out
        assert "January 2024" in out
