"""Tests for the contaminant diffusion model."""

import math
from dataclasses import FrozenInstanceError

import numpy as np
import pytest
from models.diffusion import (
    EnvironmentalVector,
    DistancePrediction,
    analyze_factors,
    predict,
    predict_multiple_distances,
    concentration_profile,
)


def _expected(v: EnvironmentalVector) -> float:
    """Direct evaluation of the attenuation formula."""
    ph_effect = 1.0 if abs(v.ph - 7.0) < 1.0 else 0.8
    c = (
        v.source_concentration
        * math.exp(-v.distance / 15.0)
        * (1.0 + (v.temperature - 20.0) * 0.02)
        * ph_effect
        * (1.0 + v.current_speed * 0.3)
        * math.exp(-v.depth / 10.0)
    )
    return max(0.001, c)


def _vector(base, **overrides):
    values = dict(base, distance=5.0)
    values.update(overrides)
    return EnvironmentalVector(**values)


class TestPredict:
    """Tests for single-point prediction."""

    def test_worked_example(self, example_vector):
        """15 ug/L at 5 km, 22 C, pH 6.8, 1.2 m/s, 5 m depth is about 9.22."""
        result = predict(example_vector)
        np.testing.assert_allclose(result.predicted_concentration, _expected(example_vector), rtol=1e-12)
        assert result.predicted_concentration == pytest.approx(9.22, abs=0.01)

    def test_confidence_is_fixed(self, base_conditions):
        """The physics estimator always reports 0.7."""
        for distance in [0.0, 5.0, 40.0]:
            assert predict(_vector(base_conditions, distance=distance)).confidence == 0.7

    def test_returns_python_float(self, example_vector):
        assert isinstance(predict(example_vector).predicted_concentration, float)

    def test_monotonic_decay_with_distance(self, base_conditions):
        """Concentration never increases as distance grows."""
        distances = [0.0, 0.5, 1.0, 5.0, 10.0, 25.0, 50.0]
        concs = [predict(_vector(base_conditions, distance=d)).predicted_concentration
                 for d in distances]
        assert all(a >= b for a, b in zip(concs, concs[1:]))
        assert concs[0] > concs[3]

    def test_floor_applies_far_from_source(self, base_conditions):
        """Very distant points are floored at 0.001, never zero."""
        result = predict(_vector(base_conditions, distance=500.0))
        assert result.predicted_concentration == 0.001

    def test_floor_applies_to_negative_product(self, base_conditions):
        """A negative temperature effect still yields the floor."""
        result = predict(_vector(base_conditions, temperature=-40.0))
        assert result.predicted_concentration == 0.001

    def test_floor_holds_across_inputs(self, base_conditions):
        rng = np.random.default_rng(7)
        for _ in range(200):
            v = _vector(
                base_conditions,
                source_concentration=float(rng.uniform(0.01, 50)),
                distance=float(rng.uniform(0, 100)),
                temperature=float(rng.uniform(-5, 40)),
                ph=float(rng.uniform(0, 14)),
                current_speed=float(rng.uniform(0, 3)),
                depth=float(rng.uniform(0, 100)),
            )
            assert predict(v).predicted_concentration >= 0.001

    def test_ph_band_is_strict(self, base_conditions):
        """|pH - 7| == 1 is outside the near-neutral band."""
        inside = predict(_vector(base_conditions, ph=7.99)).predicted_concentration
        edge = predict(_vector(base_conditions, ph=8.0)).predicted_concentration
        np.testing.assert_allclose(edge / inside, 0.8, rtol=1e-12)

    def test_ph_penalty_symmetric(self, base_conditions):
        acid = predict(_vector(base_conditions, ph=5.5)).predicted_concentration
        alkaline = predict(_vector(base_conditions, ph=8.5)).predicted_concentration
        np.testing.assert_allclose(acid, alkaline, rtol=1e-12)

    def test_current_increases_concentration(self, base_conditions):
        """More current means a higher apparent concentration."""
        still = predict(_vector(base_conditions, current_speed=0.0)).predicted_concentration
        fast = predict(_vector(base_conditions, current_speed=2.0)).predicted_concentration
        np.testing.assert_allclose(fast / still, 1.6, rtol=1e-12)

    def test_depth_decay(self, base_conditions):
        surface = predict(_vector(base_conditions, depth=0.0)).predicted_concentration
        deep = predict(_vector(base_conditions, depth=10.0)).predicted_concentration
        np.testing.assert_allclose(deep / surface, math.exp(-1.0), rtol=1e-12)

    def test_salinity_and_wind_do_not_change_concentration(self, base_conditions):
        a = predict(_vector(base_conditions, salinity=5.0, wind_speed=0.0))
        b = predict(_vector(base_conditions, salinity=40.0, wind_speed=25.0))
        assert a.predicted_concentration == b.predicted_concentration

    def test_atypical_input_still_computes(self, base_conditions):
        """Negative distance and pH outside 0-14 are not rejected."""
        result = predict(_vector(base_conditions, distance=-3.0, ph=20.0))
        assert math.isfinite(result.predicted_concentration)
        np.testing.assert_allclose(
            result.predicted_concentration,
            _expected(_vector(base_conditions, distance=-3.0, ph=20.0)),
            rtol=1e-12,
        )

    def test_vector_is_immutable(self, example_vector):
        with pytest.raises(FrozenInstanceError):
            example_vector.distance = 1.0

    def test_vector_requires_all_fields(self):
        with pytest.raises(TypeError):
            EnvironmentalVector(source_concentration=1.0, distance=1.0)

    def test_to_dict_shape(self, example_vector):
        d = predict(example_vector).to_dict()
        assert set(d) == {"predictedConcentration", "confidence", "factors"}
        assert set(d["factors"]) == {"distance", "temperature", "hydrodynamics", "chemical"}


class TestAnalyzeFactors:
    """Tests for the diagnostic factor breakdown."""

    def test_example_factors(self, example_vector):
        f = analyze_factors(example_vector)
        np.testing.assert_allclose(f.distance, math.exp(-5.0 / 15.0), rtol=1e-12)
        np.testing.assert_allclose(f.temperature, 0.9, rtol=1e-12)
        np.testing.assert_allclose(f.hydrodynamics, (1.2 + 1.0) / 3.0, rtol=1e-12)
        assert f.chemical == 1.0

    def test_chemical_factor_off_neutral(self, base_conditions):
        assert analyze_factors(_vector(base_conditions, ph=8.1)).chemical == 0.5

    def test_temperature_factor_peaks_at_reference(self, base_conditions):
        assert analyze_factors(_vector(base_conditions, temperature=20.0)).temperature == 1.0
        assert analyze_factors(_vector(base_conditions, temperature=30.0)).temperature == 0.5
        assert analyze_factors(_vector(base_conditions, temperature=10.0)).temperature == 0.5

    def test_factors_attached_to_prediction(self, example_vector):
        assert predict(example_vector).factors == analyze_factors(example_vector)


class TestPredictMultipleDistances:
    """Tests for batch prediction over distances."""

    def test_order_preserved(self, base_conditions):
        results = predict_multiple_distances(base_conditions, [5, 10, 25])
        assert [r.distance for r in results] == [5, 10, 25]

    def test_matches_direct_predict(self, base_conditions):
        distances = [25.0, 5.0, 10.0]
        results = predict_multiple_distances(base_conditions, distances)
        for r, d in zip(results, distances):
            direct = predict(_vector(base_conditions, distance=d))
            assert r.predicted_concentration == direct.predicted_concentration
            assert r.factors == direct.factors
            assert r.confidence == direct.confidence

    def test_no_dedup_or_sort(self, base_conditions):
        results = predict_multiple_distances(base_conditions, [10.0, 2.0, 10.0])
        assert [r.distance for r in results] == [10.0, 2.0, 10.0]
        assert results[0].predicted_concentration == results[2].predicted_concentration

    def test_empty_distances(self, base_conditions):
        assert predict_multiple_distances(base_conditions, []) == []

    def test_result_type(self, base_conditions):
        (result,) = predict_multiple_distances(base_conditions, [3.0])
        assert isinstance(result, DistancePrediction)
        assert result.to_dict()["distance"] == 3.0

    def test_base_distance_is_overridden(self, base_conditions):
        base = dict(base_conditions, distance=99.0)
        (result,) = predict_multiple_distances(base, [1.0])
        assert result.distance == 1.0
        assert result.predicted_concentration == predict(_vector(base_conditions, distance=1.0)).predicted_concentration


class TestConcentrationProfile:
    """Tests for the vectorised distance curve."""

    def test_matches_batch_prediction(self, base_conditions):
        distances = np.array([0.0, 1.0, 5.0, 10.0, 25.0, 200.0])
        profile = concentration_profile(base_conditions, distances)
        batch = predict_multiple_distances(base_conditions, distances.tolist())
        np.testing.assert_allclose(profile, [r.predicted_concentration for r in batch], rtol=1e-12)

    def test_preserves_shape(self, base_conditions):
        distances = np.linspace(0, 30, 12).reshape(3, 4)
        assert concentration_profile(base_conditions, distances).shape == (3, 4)

    def test_missing_field_raises(self, base_conditions):
        base = dict(base_conditions)
        del base["depth"]
        with pytest.raises(ValueError, match="missing fields"):
            concentration_profile(base, np.array([1.0]))
