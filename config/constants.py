"""
BirthWindow - Constants and Scientific Thresholds

Reference tables behind the optimality models:
- Lowell & Davis (2008) Solar cycle effects on human lifespan
- Disanto et al. (2012) Seasonal birth effects on disease risk
- Haggarty et al. (2004) Vitamin D deficiency and birth timing
- Bedard & Dhuey (2006) Relative age effects in education
"""

# =============================================================================
# Historical Solar Cycles (simplified, NOAA SWPC cycle summaries)
# =============================================================================
SOLAR_CYCLES = [
    {"cycle_number": 20, "start_year": 1964, "peak_year": 1968, "end_year": 1976, "max_sunspots": 156, "phase": "minimum"},
    {"cycle_number": 21, "start_year": 1976, "peak_year": 1979, "end_year": 1986, "max_sunspots": 232, "phase": "minimum"},
    {"cycle_number": 22, "start_year": 1986, "peak_year": 1989, "end_year": 1996, "max_sunspots": 212, "phase": "minimum"},
    {"cycle_number": 23, "start_year": 1996, "peak_year": 2000, "end_year": 2008, "max_sunspots": 180, "phase": "minimum"},
    {"cycle_number": 24, "start_year": 2008, "peak_year": 2012, "end_year": 2019, "max_sunspots": 146, "phase": "minimum"},
    {"cycle_number": 25, "start_year": 2019, "peak_year": 2024, "end_year": 2030, "max_sunspots": 137, "phase": "ascending"},
]

# Extrapolation rule for cycles beyond the table
FUTURE_CYCLE = {
    "length_years": 11,
    "peak_offset_years": 4,
    "max_sunspots": 140,     # Average of recent cycles
    "phase": "minimum",
}

# Synthetic waveform parameters
SUNSPOT_MODEL = {
    "sine_weight": 0.7,
    "peak_weight": 0.8,
    "peak_position": 0.36,   # Activity peak ~36% into the cycle
    "peak_sharpness": 8.0,
    "noise_amplitude": 10.0, # Uniform ±10 natural variation
}

# Cycle phase by fraction of the cycle elapsed
CYCLE_PHASE_BOUNDS = [
    (0.2, "minimum"),
    (0.5, "ascending"),
    (0.7, "maximum"),
]

SOLAR_RISK_THRESHOLDS = {
    "low": 50,               # sunspots below → LOW
    "medium": 100,           # sunspots below → MEDIUM, else HIGH
}

MENTAL_HEALTH = {
    "sunspot_threshold": 90,
    "solar_max_multiplier": 1.3,
    "baseline": 1.0,
}

# Piecewise-linear lifespan impact (years) vs sunspot number
LIFESPAN_IMPACT = {
    "sunspot_cap": 200,
    "minimum_max": 30,       # Solar minimum: slight benefit from reduced UV
    "moderate_max": 120,     # Moderate activity: gradual decline
    "month_step": 0.1,       # Per-month perturbation around mid-year
}

SOLAR_UV = {
    "base": 5.0,
    "sunspot_scale": 200.0,
    "gain": 0.3,
    "max": 11.0,
}

# =============================================================================
# Geographic UV Model
# =============================================================================
UV_LATITUDE = {
    "equator_intensity": 10.0,
    "seasonal_amplitude": 0.3,
    "northern_peak_month": 6,
    "southern_peak_month": 12,
    "max": 11.0,
}

# =============================================================================
# Seasonal Disease Risk by Birth Month (Northern Hemisphere reference)
# Source: Disanto et al. (2012), Boland et al. (2015)
# =============================================================================
DISEASE_RISK_BY_MONTH = {
    1:  {"cardiovascular": 1.06, "mental_health": 1.08, "autoimmune": 0.94, "respiratory": 1.12, "infectious": 1.15},
    2:  {"cardiovascular": 1.05, "mental_health": 1.06, "autoimmune": 0.96, "respiratory": 1.10, "infectious": 1.12},
    3:  {"cardiovascular": 1.02, "mental_health": 1.02, "autoimmune": 0.98, "respiratory": 1.05, "infectious": 1.08},
    4:  {"cardiovascular": 0.98, "mental_health": 0.96, "autoimmune": 1.02, "respiratory": 0.98, "infectious": 1.02},
    5:  {"cardiovascular": 0.95, "mental_health": 0.92, "autoimmune": 1.05, "respiratory": 0.92, "infectious": 0.95},
    6:  {"cardiovascular": 0.92, "mental_health": 0.88, "autoimmune": 1.08, "respiratory": 0.88, "infectious": 0.88},
    7:  {"cardiovascular": 0.90, "mental_health": 0.85, "autoimmune": 1.10, "respiratory": 0.85, "infectious": 0.82},
    8:  {"cardiovascular": 0.92, "mental_health": 0.88, "autoimmune": 1.08, "respiratory": 0.88, "infectious": 0.85},
    9:  {"cardiovascular": 0.95, "mental_health": 0.92, "autoimmune": 1.05, "respiratory": 0.92, "infectious": 0.90},
    10: {"cardiovascular": 0.98, "mental_health": 0.96, "autoimmune": 1.02, "respiratory": 0.98, "infectious": 0.95},
    11: {"cardiovascular": 1.02, "mental_health": 1.02, "autoimmune": 0.98, "respiratory": 1.05, "infectious": 1.02},
    12: {"cardiovascular": 1.05, "mental_health": 1.06, "autoimmune": 0.96, "respiratory": 1.10, "infectious": 1.10},
}

# Rescaling of raw multipliers onto 0-100 (lower is better)
DISEASE_NORMALIZATION = {
    "infectious":     {"baseline": 0.80, "scale": 500.0},
    "cardiovascular": {"baseline": 0.90, "scale": 500.0},
    "mental_health":  {"baseline": 0.85, "scale": 400.0},
    "autoimmune":     {"baseline": 1.00, "scale": 1000.0},  # absolute deviation
}

SEASONAL_WEIGHTS = {
    "vitamin_d": 0.30,
    "infectious": 0.25,
    "relative_age": 0.15,
    "cardiovascular": 0.15,
    "mental_health": 0.10,
    "autoimmune": 0.05,
}

# Seasonal score → risk level (higher score = lower risk)
SEASONAL_RISK_LEVELS = {
    "low": 70,
    "medium": 50,
}

VITAMIN_D_CRITICAL_MONTHS = 6

# =============================================================================
# School Year Cutoff Month by Country
# Source: Bedard & Dhuey (2006)
# =============================================================================
SCHOOL_YEAR_CUTOFFS = {
    "US": 9,
    "UK": 9,
    "Canada": 9,
    "Australia": 1,
    "Germany": 6,
    "France": 9,
    "Japan": 4,
    "default": 9,
}

# Full country names as returned by geocoders
COUNTRY_ALIASES = {
    "united states": "US",
    "united states of america": "US",
    "usa": "US",
    "united kingdom": "UK",
    "united kingdom of great britain and northern ireland": "UK",
    "great britain": "UK",
}

RELATIVE_AGE_POINTS_PER_MONTH = 8.33

# =============================================================================
# Optimal Timing Engine
# =============================================================================
CATEGORY_WEIGHTS = {
    "solar": 0.40,           # Solar cycle impact (most significant)
    "seasonal": 0.35,        # Seasonal birth effects
    "geographic": 0.15,      # UV / latitude effects
    "environmental": 0.10,   # Air quality, etc.
}

ENVIRONMENTAL_PLACEHOLDER_SCORE = 75.0
SOLAR_SCORE_PER_YEAR = 15.0
REFERENCE_LATITUDE = 35.0

CONFIDENCE_THRESHOLDS = {
    "high": 80,
    "medium": 60,
}

# Environmental factor by season of the target month
SEASONAL_ENVIRONMENT = {
    "spring": {"impact": -12, "name": "Spring Allergen Exposure",
               "description": "High pollen counts during birth period"},
    "summer": {"impact": 8, "name": "Summer Air Quality",
               "description": "Generally better air quality and outdoor conditions"},
    "fall":   {"impact": 5, "name": "Fall Transition Period",
               "description": "Moderate environmental conditions"},
    "winter": {"impact": -18, "name": "Winter Environmental Risk",
               "description": "Indoor pollution and respiratory illness risk"},
}

MONTH_TO_SEASON = {
    1: "winter", 2: "winter", 3: "winter",
    4: "spring", 5: "spring", 6: "spring",
    7: "summer", 8: "summer", 9: "summer",
    10: "fall", 11: "fall", 12: "fall",
}

OPTIMAL_WINDOW_FRACTION = 0.25
YEARLY_TREND_MARGIN = 5.0
MONTHLY_TREND_MARGIN = 5.0

# Life expectancy chart baseline
LIFESPAN_BASELINE_YEARS = 78.0
LIFESPAN_YEARS_PER_POINT = 0.1

SCIENTIFIC_BASIS = [
    "Solar cycle effects on human lifespan: Lowell & Davis (2008), Solar Physics",
    "Seasonal birth effects on disease risk: Disanto et al. (2012), PLoS ONE",
    "Vitamin D deficiency and birth timing: Haggarty et al. (2004), British Journal of Nutrition",
    "Relative age effects in education: Bedard & Dhuey (2006), Quarterly Journal of Economics",
    "UV radiation and folate metabolism: Jablonski & Chaplin (2010), Annual Review of Anthropology",
]

# =============================================================================
# Score Classification (UI)
# =============================================================================
SCORE_LEVELS = {
    "OPTIMAL": {"min": 80, "label": "Optimal", "color": "#10b981"},
    "GOOD":    {"min": 60, "label": "Good",    "color": "#f59e0b"},
    "FAIR":    {"min": 40, "label": "Fair",    "color": "#ef4444"},
    "POOR":    {"min": 0,  "label": "Poor",    "color": "#ef4444"},
}

SCORE_DESCRIPTIONS = [
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Fair"),
    (50, "Below Average"),
    (0,  "Poor"),
]

CATEGORY_COLORS = {
    "solar": "#f59e0b",
    "seasonal": "#10b981",
    "geographic": "#3b82f6",
    "environmental": "#8b5cf6",
}

SEVERITY_COLORS = {
    "LOW": "#10b981",
    "MEDIUM": "#f59e0b",
    "HIGH": "#ef4444",
}

# =============================================================================
# API Endpoints
# =============================================================================
NOMINATIM_SEARCH = "https://nominatim.openstreetmap.org/search"
BIGDATACLOUD_REVERSE = "https://api.bigdatacloud.net/data/reverse-geocode-client"
