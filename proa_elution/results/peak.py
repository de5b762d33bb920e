"""Peak detection on a simulated elution profile."""

from ..core.dataclasses import ElutionPoint, PeakInfo

DEFAULT_PEAK_TIME = 0.0
DEFAULT_PEAK_PH = 7.0


def find_peak(profile: list[ElutionPoint]) -> PeakInfo:
    """Find the maximum-intensity point and its full width at half maximum.

    The first point with the highest intensity wins ties. The width is the
    time between the nearest point before the peak and the first point after
    it whose intensity reaches half the maximum; points are not interpolated.
    A side without such a point contributes the peak time itself.

    An empty or all-zero profile yields the default peak
    (time 0, pH 7.0, intensity 0, width 0) instead of raising.

    Parameters
    ----------
    profile : list[ElutionPoint]
        Elution profile ordered by time

    Returns
    -------
    PeakInfo
        Peak point annotated with peak_width in minutes
    """
    max_intensity = 0.0
    peak: ElutionPoint | None = None

    for point in profile:
        if point.intensity > max_intensity:
            max_intensity = point.intensity
            peak = point

    if peak is None:
        return PeakInfo(
            time=DEFAULT_PEAK_TIME,
            ph=DEFAULT_PEAK_PH,
            intensity=0.0,
            peak_width=0.0,
        )

    half_max = max_intensity / 2
    peak_start = peak.time
    peak_end = peak.time

    for point in profile:
        if point.intensity >= half_max:
            if point.time < peak.time:
                peak_start = point.time
            if point.time > peak.time:
                peak_end = point.time
                break

    return PeakInfo(
        time=peak.time,
        ph=peak.ph,
        intensity=peak.intensity,
        peak_width=round(peak_end - peak_start, 2),
        binding_strength=peak.binding_strength,
    )
