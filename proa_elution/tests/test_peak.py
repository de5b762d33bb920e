"""Tests for peak detection and FWHM."""

import pytest

from proa_elution.core import ElutionPoint, PeakInfo
from proa_elution.results import find_peak


def _profile(intensities, dt=1.0, start_ph=7.0, dph=0.1):
    """Build an elution profile with evenly spaced time and pH."""
    return [
        ElutionPoint(
            time=round(i * dt, 2),
            ph=round(start_ph - i * dph, 2),
            intensity=value,
            binding_strength=0.2,
        )
        for i, value in enumerate(intensities)
    ]


class TestDefaultPeak:

    def test_empty_profile(self):
        assert find_peak([]) == PeakInfo(
            time=0.0, ph=7.0, intensity=0.0, peak_width=0.0, binding_strength=None
        )

    def test_all_zero_profile(self):
        peak = find_peak(_profile([0.0] * 20))

        assert peak.time == 0.0
        assert peak.ph == 7.0
        assert peak.intensity == 0.0
        assert peak.peak_width == 0.0
        assert peak.binding_strength is None


class TestPeakSelection:

    def test_maximum_point(self):
        peak = find_peak(_profile([0.0, 2.0, 9.0, 4.0, 0.0]))

        assert peak.time == 2.0
        assert peak.ph == 6.8
        assert peak.intensity == 9.0
        assert peak.binding_strength == 0.2

    def test_first_maximum_wins_ties(self):
        peak = find_peak(_profile([0.0, 10.0, 3.0, 10.0, 0.0]))
        assert peak.time == 1.0


class TestPeakWidth:

    def test_symmetric_peak(self):
        peak = find_peak(_profile([0.0, 6.0, 10.0, 6.0, 0.0]))
        assert peak.peak_width == 2.0

    def test_half_maximum_is_inclusive(self):
        peak = find_peak(_profile([0.0, 5.0, 10.0, 5.0, 0.0]))
        assert peak.peak_width == 2.0

    def test_no_interpolation(self):
        peak = find_peak(_profile([0.0, 4.9, 10.0, 4.9, 0.0]))
        assert peak.peak_width == 0.0

    def test_uses_first_point_after_peak(self):
        peak = find_peak(_profile([0.0, 10.0, 8.0, 7.0, 6.0, 0.0]))
        assert peak.peak_width == 1.0

    def test_start_is_last_qualifying_point_before_peak(self):
        # non-contiguous: the scan keeps the last qualifying time before the peak
        peak = find_peak(_profile([6.0, 0.0, 7.0, 10.0, 0.0, 0.0]))
        assert peak.peak_width == 1.0

    def test_one_sided_peak(self):
        peak = find_peak(_profile([10.0, 0.0, 0.0]))
        assert peak.peak_width == 0.0

    def test_width_spans_whole_profile(self):
        peak = find_peak(_profile([8.0] + [10.0] + [0.0] * 8 + [9.0], dt=0.5))

        assert peak.time == 0.5
        assert peak.peak_width == pytest.approx(5.0)

    def test_width_is_rounded(self):
        peak = find_peak(_profile([0.0, 6.0, 10.0, 6.0], dt=0.333))
        assert peak.peak_width == 0.67
