"""
FOV matching engine tests.
"""

import math

import pytest

from scoutcam.optics.calibration import CalibrationStore
from scoutcam.optics.fov_math import degrees_to_radians, horizontal_fov, radians_to_degrees
from scoutcam.optics.matching import (
    build_match_report,
    display_name,
    match_module,
    order_modules,
    order_roles,
    resolve_capture_target,
)
from scoutcam.optics.models import DeviceCameraModule, FOVMatchResult


def module(role, hfov, min_zoom=1.0, max_zoom=1.0):
    return DeviceCameraModule(role=role, native_hfov_degrees=hfov, min_zoom=min_zoom, max_zoom=max_zoom)


class TestMatchModule:

    def test_exact_native_match_gives_unit_zoom(self):
        target = degrees_to_radians(60.0)
        result = match_module(target, [module("main", 60.0, 0.5, 4.0)])

        assert result == FOVMatchResult(role="main", zoom_factor=1.0, error_radians=0.0)

    def test_exact_calibrated_match_gives_unit_zoom(self):
        target = degrees_to_radians(50.0 * 1.02)
        result = match_module(target, [module("tele", 50.0, 1.0, 5.0)], {"tele": 1.02})

        assert result.role == "tele"
        assert result.zoom_factor == 1.0
        assert result.error_radians == 0.0

    def test_super35_32mm_picks_main(self, iphone_modules):
        target = horizontal_fov(24.88, 32.0)
        result = match_module(target, iphone_modules)

        assert result.role == "main"
        assert result.zoom_factor == pytest.approx(73.7 / radians_to_degrees(target))
        assert result.error_radians == pytest.approx(0.0, abs=1e-12)

    def test_long_lens_clamps_tele_zoom(self, iphone_modules):
        target = horizontal_fov(24.88, 300.0)
        result = match_module(target, iphone_modules)

        assert result.role == "tele"
        assert result.zoom_factor == 5.0
        expected_error = abs(degrees_to_radians(26.3) / 5.0 - target)
        assert result.error_radians == pytest.approx(expected_error)

    def test_wider_than_ultra_clamps_to_min_zoom(self, iphone_modules):
        target = horizontal_fov(36.7, 12.0)
        result = match_module(target, iphone_modules)

        assert result.role == "ultra"
        assert result.zoom_factor == 1.0
        assert result.error_radians == pytest.approx(target - degrees_to_radians(108.3))

    def test_zoom_always_within_module_range(self, iphone_modules):
        ranges = {m.role: (m.min_zoom, m.max_zoom) for m in iphone_modules}
        for focal in [8, 12, 18, 24, 35, 50, 85, 135, 200, 400, 800]:
            result = match_module(horizontal_fov(24.88, focal), iphone_modules)
            low, high = ranges[result.role]
            assert low <= result.zoom_factor <= high

    def test_tie_keeps_first_candidate(self):
        target = degrees_to_radians(40.0)
        a, b = module("alpha", 60.0), module("beta", 60.0)

        assert match_module(target, [a, b]).role == "alpha"
        assert match_module(target, [b, a]).role == "beta"

    def test_strictly_smaller_error_replaces_earlier(self):
        target = degrees_to_radians(40.0)
        result = match_module(target, [module("far", 90.0), module("near", 41.0)])
        assert result.role == "near"

    @pytest.mark.parametrize("target", [0.0, -1.0, 0.5, math.pi, float("inf")])
    def test_empty_candidates_returns_none(self, target):
        assert match_module(target, []) is None

    @pytest.mark.parametrize("target", [0.0, -0.1, -math.pi, float("nan")])
    def test_non_positive_target_skips_every_module(self, iphone_modules, target):
        assert match_module(target, iphone_modules) is None

    def test_accepts_generator(self, iphone_modules):
        result = match_module(horizontal_fov(24.88, 32.0), (m for m in iphone_modules))
        assert result.role == "main"

    def test_malformed_range_does_not_raise(self):
        # min > max is a catalog problem; the engine just clamps
        result = match_module(degrees_to_radians(30.0), [module("bad", 60.0, 3.0, 1.5)])
        assert result.zoom_factor == 1.5

    @pytest.mark.parametrize("native,min_zoom", [(0.0, 0.0), (60.0, -1.0), (0.0, -2.0)])
    def test_zero_zoom_candidate_is_skipped(self, native, min_zoom):
        target = degrees_to_radians(30.0)
        result = match_module(target, [module("broken", native, min_zoom, 0.0), module("main", 60.0, 1.0, 4.0)])

        assert result.role == "main"
        assert result.zoom_factor == pytest.approx(2.0)

    def test_only_unusable_candidates_gives_none(self):
        assert match_module(degrees_to_radians(30.0), [module("broken", 0.0, 0.0, 0.0)]) is None


class TestCalibration:

    def test_missing_role_defaults_to_nominal(self, iphone_modules):
        target = horizontal_fov(24.88, 32.0)
        assert match_module(target, iphone_modules, {"ultra": 1.03}) == match_module(target, iphone_modules)

    def test_multiplier_monotonically_increases_zoom(self):
        target = horizontal_fov(24.88, 32.0)
        main = module("main", 73.7, 1.0, 6.0)
        zooms = [
            match_module(target, [main], {"main": m}).zoom_factor
            for m in [0.95, 0.97, 0.99, 1.0, 1.01, 1.03, 1.05]
        ]
        assert all(z > 0 for z in zooms)
        assert all(a < b for a, b in zip(zooms, zooms[1:]))

    def test_calibration_can_change_winner(self):
        target = degrees_to_radians(62.0)
        modules = [module("a", 60.0), module("b", 64.5)]

        assert match_module(target, modules).role == "a"
        assert match_module(target, modules, {"a": 0.95}).role == "b"

    def test_store_is_read_as_snapshot(self, calibration_store):
        target = degrees_to_radians(50.0 * 1.04)
        calibration_store.set_multiplier(1.04, "tele")

        result = match_module(target, [module("tele", 50.0, 1.0, 5.0)], calibration_store)
        assert result.zoom_factor == 1.0

    def test_engine_does_not_revalidate_stored_values(self):
        # Values outside the UI range are applied as stored
        target = degrees_to_radians(50.0)
        result = match_module(target, [module("main", 50.0, 0.5, 5.0)], {"main": 1.2})
        assert result.zoom_factor == pytest.approx(1.2)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), 0.0])
    def test_unusable_multiplier_never_wins(self, bad):
        target = degrees_to_radians(60.0)
        modules = [module("ultra", 108.0, 1.0, 1.0), module("main", 60.0, 1.0, 6.0)]

        result = match_module(target, modules, {"ultra": bad})
        assert result == FOVMatchResult(role="main", zoom_factor=1.0, error_radians=0.0)


class TestFallbackAndOrdering:

    def test_fallback_without_match(self):
        assert resolve_capture_target(None) == ("main", 1.0)

    def test_passthrough_with_match(self):
        match = FOVMatchResult(role="tele", zoom_factor=2.5, error_radians=0.01)
        assert resolve_capture_target(match) == ("tele", 2.5)

    def test_order_roles(self):
        roles = ["wide2", "tele", "main", "macro", "ultra", "main"]
        assert order_roles(roles) == ["ultra", "main", "tele", "macro", "wide2"]

    def test_order_roles_missing_preferred(self):
        assert order_roles(["tele", "periscope"]) == ["tele", "periscope"]

    def test_order_modules(self, iphone_modules):
        shuffled = [iphone_modules[2], iphone_modules[0], iphone_modules[1]]
        assert [m.role for m in order_modules(shuffled)] == ["ultra", "main", "tele"]

    def test_order_modules_custom_preference(self, iphone_modules):
        ordered = order_modules(iphone_modules, preferred=["tele", "main"])
        assert [m.role for m in ordered] == ["tele", "main", "ultra"]

    @pytest.mark.parametrize("role,name", [
        ("ultra", "Ultra"), ("main", "Main"), ("tele", "Tele"), ("periscope", "Periscope"),
    ])
    def test_display_name(self, role, name):
        assert display_name(role) == name


class TestMatchReport:

    def test_none_without_match(self, iphone_modules):
        assert build_match_report(0.5, 35.0, None, iphone_modules) is None

    def test_report_in_degrees(self, iphone_modules):
        target = horizontal_fov(24.88, 300.0)
        match = match_module(target, iphone_modules, {"tele": 1.02})
        report = build_match_report(target, 300.0, match, iphone_modules, {"tele": 1.02})

        assert report.role == "tele"
        assert report.target_hfov_degrees == pytest.approx(radians_to_degrees(target))
        assert report.achieved_hfov_degrees == pytest.approx(26.3 * 1.02 / 5.0)
        assert report.error_degrees == pytest.approx(radians_to_degrees(match.error_radians))
        assert report.calibration_multiplier == 1.02
        assert "tele @ 5.00x" in report.summary()
