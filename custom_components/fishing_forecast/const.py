DOMAIN = "fishing_forecast"
DEFAULT_NAME = "Fishing Forecast"

# ============================================================================
# CONFIGURATION KEYS
# ============================================================================

CONF_NAME = "name"
CONF_SPECIES = "species"
CONF_ALGORITHM = "algorithm"
CONF_TIME_ZONE = "time_zone"
CONF_MAX_DAYS = "max_days"

# Scoring strategy names (selected explicitly through CONF_ALGORITHM)
ALGORITHM_LEGACY = "legacy"
ALGORITHM_ENHANCED = "enhanced"
ALGORITHM_SPECIES = "species"
ALGORITHM_SPECIES_V2 = "species_v2"

ALGORITHMS = [ALGORITHM_LEGACY, ALGORITHM_ENHANCED, ALGORITHM_SPECIES, ALGORITHM_SPECIES_V2]
DEFAULT_ALGORITHM = ALGORITHM_SPECIES

# Aggregation limits
DEFAULT_MAX_DAYS = 14
SAMPLE_INTERVAL_SECONDS = 15 * 60
SAMPLES_PER_BLOCK = 8  # 2 hours of 15-minute samples
MIN_SAMPLES_PER_BLOCK = SAMPLES_PER_BLOCK // 2

# ============================================================================
# SPECIES CATALOG
# ============================================================================

SPECIES_CHINOOK = "chinook-salmon"
SPECIES_COHO = "coho-salmon"
SPECIES_CHUM = "chum-salmon"
SPECIES_PINK = "pink-salmon"
SPECIES_SOCKEYE = "sockeye-salmon"
SPECIES_HALIBUT = "halibut"
SPECIES_LINGCOD = "lingcod"
SPECIES_ROCKFISH = "rockfish"
SPECIES_CRAB = "crab"
SPECIES_SPOT_PRAWN = "spot-prawn"

SPECIES_IDS = [
    SPECIES_CHINOOK,
    SPECIES_COHO,
    SPECIES_CHUM,
    SPECIES_PINK,
    SPECIES_SOCKEYE,
    SPECIES_HALIBUT,
    SPECIES_LINGCOD,
    SPECIES_ROCKFISH,
    SPECIES_CRAB,
    SPECIES_SPOT_PRAWN,
]

# ============================================================================
# NORMALIZER DEFAULTS (unknown is treated as moderate, not zero)
# ============================================================================

DEFAULT_SAMPLE_VALUES = {
    "temp": 12.0,  # °C
    "humidity": 60.0,  # %
    "dew_point": 8.0,  # °C
    "pressure": 1013.25,  # hPa
    "precipitation": 0.0,  # mm/h
    "cloud_cover": 50.0,  # %
    "wind_speed": 10.0,  # km/h
    "wind_direction": 0.0,  # degrees
    "visibility": 10000.0,  # meters
    "sunshine_duration": 0.0,  # seconds per 15 min
    "lightning_potential": 0.0,  # J/kg
    "cape": 0.0,  # J/kg
}

NEUTRAL_SCORE = 5.0
MAX_ADJUSTED_FACTOR = 12.0

# ============================================================================
# GENERAL (ENHANCED) ALGORITHM WEIGHTS
# ============================================================================

FACTOR_PRESSURE = "pressure"
FACTOR_WIND = "wind"
FACTOR_TEMPERATURE = "temperature"
FACTOR_WATER_TEMPERATURE = "water_temperature"
FACTOR_PRECIPITATION = "precipitation"
FACTOR_TIDE = "tide"
FACTOR_CURRENT_SPEED = "current_speed"
FACTOR_CURRENT_DIRECTION = "current_direction"
FACTOR_CLOUD_COVER = "cloud_cover"
FACTOR_VISIBILITY = "visibility"
FACTOR_SUNSHINE = "sunshine"
FACTOR_LIGHTNING = "lightning"
FACTOR_ATMOSPHERIC_STABILITY = "atmospheric_stability"
FACTOR_COMFORT = "comfort"
FACTOR_TIME_OF_DAY = "time_of_day"
FACTOR_SPECIES = "species"

WEIGHTS_WITH_TIDE = {
    FACTOR_PRESSURE: 0.13,
    FACTOR_WIND: 0.12,
    FACTOR_TEMPERATURE: 0.09,
    FACTOR_WATER_TEMPERATURE: 0.05,
    FACTOR_PRECIPITATION: 0.10,
    FACTOR_TIDE: 0.08,
    FACTOR_CURRENT_SPEED: 0.04,
    FACTOR_CURRENT_DIRECTION: 0.02,
    FACTOR_CLOUD_COVER: 0.06,
    FACTOR_VISIBILITY: 0.06,
    FACTOR_SUNSHINE: 0.05,
    FACTOR_LIGHTNING: 0.05,
    FACTOR_ATMOSPHERIC_STABILITY: 0.04,
    FACTOR_COMFORT: 0.04,
    FACTOR_TIME_OF_DAY: 0.04,
    FACTOR_SPECIES: 0.03,
}

WEIGHTS_WITHOUT_TIDE = {
    FACTOR_PRESSURE: 0.14,
    FACTOR_WIND: 0.13,
    FACTOR_TEMPERATURE: 0.11,
    FACTOR_WATER_TEMPERATURE: 0.0,
    FACTOR_PRECIPITATION: 0.11,
    FACTOR_TIDE: 0.11,
    FACTOR_CURRENT_SPEED: 0.0,
    FACTOR_CURRENT_DIRECTION: 0.0,
    FACTOR_CLOUD_COVER: 0.06,
    FACTOR_VISIBILITY: 0.06,
    FACTOR_SUNSHINE: 0.05,
    FACTOR_LIGHTNING: 0.05,
    FACTOR_ATMOSPHERIC_STABILITY: 0.04,
    FACTOR_COMFORT: 0.04,
    FACTOR_TIME_OF_DAY: 0.04,
    FACTOR_SPECIES: 0.06,
}

# Legacy six-factor model
LEGACY_WEIGHTS = {
    FACTOR_PRESSURE: 0.25,
    FACTOR_WIND: 0.20,
    FACTOR_TEMPERATURE: 0.20,
    FACTOR_PRECIPITATION: 0.15,
    FACTOR_CLOUD_COVER: 0.10,
    FACTOR_TIME_OF_DAY: 0.10,
}

# ============================================================================
# TIDE / LIGHT CONSTANTS
# ============================================================================

TIDE_TYPE_SPRING = "spring"
TIDE_TYPE_NEAP = "neap"
TIDE_TYPE_NORMAL = "normal"

CURRENT_PREFERENCE_SLACK = "slack"
CURRENT_PREFERENCE_MODERATE = "moderate"
CURRENT_PREFERENCE_STRONG = "strong"

SEASON_SPRING = "spring"
SEASON_SUMMER = "summer"
SEASON_FALL = "fall"
SEASON_WINTER = "winter"

ACTIVITY_DAWN = "dawn"
ACTIVITY_DUSK = "dusk"
ACTIVITY_MIDDAY = "midday"
ACTIVITY_NIGHT = "night"

# Unit conversion factors
KMH_TO_KNOTS = 0.539957
KMH_TO_M_S = 1 / 3.6
M_S_TO_KNOTS = 1.943844
