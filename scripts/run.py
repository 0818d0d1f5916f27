"""
CLI Entrypoint for scoutcam

Usage:
    python -m scripts.run match --camera-mode alexa35-open-gate --lens cooke-s4i-32
    python -m scripts.run match --camera-mode mini-lf-uhd --lens angenieux-optimo-24-290 --focal 85
    python -m scripts.run sun --lat 51.5 --lon -0.12 --date 2025-06-21 --utc-offset 1
    python -m scripts.run calibrate --device iPhone16,1 --role ultra --set 1.02
    python -m scripts.run catalog
"""

import argparse
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from scoutcam.catalog import Catalog, load_catalog
from scoutcam.config import ScoutConfig, load_config
from scoutcam.core.exceptions import ScoutError
from scoutcam.optics.calibration import CalibrationFile
from scoutcam.optics.fov_math import target_hfov
from scoutcam.optics.matching import (
    build_match_report,
    display_name,
    match_module,
    order_modules,
    resolve_capture_target,
)
from scoutcam.sun.ephemeris import sun_data
from scoutcam.sun.models import GeoCoordinate
from scoutcam.utils.logging import TimedBlock, get_logger, parse_level, setup_logging

logger = get_logger("cli")


def _calibration_file(config: ScoutConfig, path: Optional[str]) -> CalibrationFile:
    return CalibrationFile(
        path or config.calibration.path,
        config.calibration.min_multiplier,
        config.calibration.max_multiplier,
    )


def _resolve_device(catalog: Catalog, requested: Optional[str], config: ScoutConfig) -> str:
    device = requested or config.matching.device
    if device:
        return device
    devices = catalog.devices()
    if not devices:
        raise ScoutError("Catalog has no device modules.")
    return devices[0]


def cmd_match(args, config: ScoutConfig) -> int:
    catalog = load_catalog(args.catalog or config.catalog_path)
    mode = catalog.camera_mode(args.camera_mode)
    lens = catalog.lens(args.lens)
    device = _resolve_device(catalog, args.device, config)
    modules = order_modules(catalog.modules_for(device), config.matching.preferred_roles)
    store = _calibration_file(config, args.calibration).load(device)

    focal = lens.active_focal_length(args.focal)
    target = target_hfov(mode, lens, focal)
    multipliers = store.snapshot()

    with TimedBlock("match", logger):
        match = match_module(target, modules, multipliers)

    print(f"Camera:  {catalog.camera(mode.camera_id).name} / {mode.name}")
    print(f"Lens:    {lens.name} {lens.focal_label(focal)} ({lens.squeeze_label()})")
    print(f"Device:  {device}")

    report = build_match_report(target, focal, match, modules, multipliers)
    if report is None:
        role, zoom = resolve_capture_target(match)
        print(f"No usable module; falling back to {display_name(role)} @ {zoom:.2f}x")
        return 0

    print(report.summary())
    return 0


def cmd_sun(args, config: ScoutConfig) -> int:
    tz = timezone(timedelta(hours=args.utc_offset))
    day = date.fromisoformat(args.date) if args.date else datetime.now(tz).date()
    interval = args.interval if args.interval is not None else config.sun.interval_minutes
    coordinate = GeoCoordinate(latitude=args.lat, longitude=args.lon)

    data = sun_data(coordinate, day, tz, interval_minutes=interval)
    print(f"Location: {coordinate.latitude:.4f}, {coordinate.longitude:.4f}  Date: {day.isoformat()}")
    if data is None:
        print("The sun does not rise or set on this day.")
        return 0

    print(f"Sunrise:    {data.sunrise.astimezone(tz):%H:%M:%S}")
    print(f"Solar noon: {data.solar_noon.astimezone(tz):%H:%M:%S}")
    print(f"Sunset:     {data.sunset.astimezone(tz):%H:%M:%S}")
    if not args.no_path:
        print("Time      Azimuth  Altitude")
        for sample in data.path:
            print(f"{sample.time.astimezone(tz):%H:%M}    {sample.azimuth_degrees:7.2f}  "
                  f"{sample.altitude_degrees:8.2f}")
    return 0


def cmd_calibrate(args, config: ScoutConfig) -> int:
    calibration = _calibration_file(config, args.calibration)
    store = calibration.load(args.device)

    if args.reset_all:
        roles = set(store.snapshot())
        catalog = load_catalog(args.catalog or config.catalog_path)
        if args.device in catalog.devices():
            roles.update(m.role for m in catalog.modules_for(args.device))
        store.reset_all(roles)
    elif not args.role:
        raise ScoutError("--role is required with --set / --reset")
    elif args.reset:
        store.reset_multiplier(args.role)
    else:
        store.set_multiplier(args.set, args.role)

    calibration.save(store, args.device)
    values = store.snapshot()
    if not values:
        print(f"{args.device}: all modules at nominal FOV")
    for role, value in sorted(values.items()):
        print(f"{args.device} {display_name(role)}: x{value:.3f}")
    return 0


def cmd_catalog(args, config: ScoutConfig) -> int:
    catalog = load_catalog(args.catalog or config.catalog_path)
    print("Cameras:")
    for camera in catalog.cameras:
        for mode in camera.modes:
            print(f"  {mode.mode_id:<24} {camera.name} / {mode.name} "
                  f"({mode.sensor.width_mm:.2f} x {mode.sensor.height_mm:.2f} mm)")
    print("Lenses:")
    for lens in catalog.lenses:
        print(f"  {lens.lens_id:<24} {lens.name} {lens.focal_label()} T{lens.max_t_stop:g} "
              f"{lens.squeeze_label()}")
    print("Devices:")
    for device in catalog.devices():
        roles = ", ".join(f"{display_name(m.role)} {m.native_hfov_degrees:g}°"
                          for m in catalog.modules_for(device))
        print(f"  {device:<24} {roles}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Scout camera FOV matching and sun planning')
    parser.add_argument('--config', '-c', type=str, default=None,
                        help='Configuration YAML file')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Log level (DEBUG, INFO, WARNING, ...)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Write full debug log to this file')
    sub = parser.add_subparsers(dest='command', required=True)

    match = sub.add_parser('match', help='Match a camera + lens FOV to a phone module')
    match.add_argument('--camera-mode', required=True, help='Camera mode id')
    match.add_argument('--lens', required=True, help='Lens id')
    match.add_argument('--focal', type=float, default=None,
                       help='Focal length (mm) for zoom lenses')
    match.add_argument('--device', type=str, default=None, help='Device hardware id')
    match.add_argument('--catalog', type=str, default=None, help='Catalog YAML file')
    match.add_argument('--calibration', type=str, default=None, help='Calibration YAML file')
    match.set_defaults(func=cmd_match)

    sun = sub.add_parser('sun', help='Sunrise, sunset and sun path for a location')
    sun.add_argument('--lat', type=float, required=True, help='Latitude (degrees)')
    sun.add_argument('--lon', type=float, required=True, help='Longitude (degrees, east positive)')
    sun.add_argument('--date', type=str, default=None, help='Local date YYYY-MM-DD (default today)')
    sun.add_argument('--utc-offset', type=float, default=0.0, help='Local UTC offset in hours')
    sun.add_argument('--interval', type=int, default=None, help='Path interval in minutes')
    sun.add_argument('--no-path', action='store_true', help='Only print rise / noon / set')
    sun.set_defaults(func=cmd_sun)

    cal = sub.add_parser('calibrate', help='Set or reset FOV calibration multipliers')
    cal.add_argument('--device', required=True, help='Device hardware id')
    cal.add_argument('--role', type=str, default=None, help='Module role (ultra, main, tele, ...)')
    action = cal.add_mutually_exclusive_group(required=True)
    action.add_argument('--set', type=float, help='Multiplier (0.95 - 1.05)')
    action.add_argument('--reset', action='store_true', help='Reset one module to 1.0')
    action.add_argument('--reset-all', action='store_true', help='Reset every module to 1.0')
    cal.add_argument('--catalog', type=str, default=None, help='Catalog YAML file')
    cal.add_argument('--calibration', type=str, default=None, help='Calibration YAML file')
    cal.set_defaults(func=cmd_calibrate)

    cat = sub.add_parser('catalog', help='List catalog contents')
    cat.add_argument('--catalog', type=str, default=None, help='Catalog YAML file')
    cat.set_defaults(func=cmd_catalog)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(
            level=parse_level(args.log_level or config.log_level),
            log_file=args.log_file or config.log_file,
        )
        return args.func(args, config)
    except (ScoutError, ValueError) as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
