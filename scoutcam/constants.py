"""
Scout Camera Constants

Centralized values for the optics and sun calculations.
These replace hardcoded magic numbers throughout the codebase.
"""

# === Device Camera Modules ===
PREFERRED_ROLE_ORDER = ("ultra", "main", "tele")
FALLBACK_ROLE = "main"              # used when no module matches
FALLBACK_ZOOM = 1.0

# === Calibration ===
DEFAULT_MULTIPLIER = 1.0
MIN_MULTIPLIER = 0.95               # -5% of nominal native HFOV
MAX_MULTIPLIER = 1.05               # +5% of nominal native HFOV

# === Lenses ===
SPHERICAL_SQUEEZE = 1.0

# === Time ===
SECONDS_PER_DAY = 86400.0
JULIAN_1970 = 2440587.5             # Julian date of the Unix epoch
JULIAN_2000 = 2451545.0             # J2000.0

# === Solar Model ===
OBLIQUITY_DEG = 23.4397             # mean obliquity of the ecliptic
PERIHELION_DEG = 102.9372           # argument of perihelion
MEAN_ANOMALY_DEG = 357.5291
MEAN_ANOMALY_RATE = 0.98560028      # degrees per day
SIDEREAL_DEG = 280.16
SIDEREAL_RATE = 360.9856235         # degrees per day
TRANSIT_J0 = 0.0009                 # mean solar transit correction (days)
SUNRISE_ALTITUDE_DEG = -0.833       # refraction + solar radius
DEFAULT_PATH_INTERVAL_MINUTES = 30
