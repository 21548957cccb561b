# Seat fairness (4-player pods)
NUM_SEATS = 4
SEAT_DEGREES_OF_FREEDOM = NUM_SEATS - 1
EXPECTED_SEAT_WIN_RATE = 1 / NUM_SEATS

# Cohen's w bands, checked from largest threshold down
EFFECT_SIZE_THRESHOLDS = (
    ("large", 0.3),
    ("medium", 0.1),
)
EFFECT_SIZE_DEFAULT = "small"

# Upper 5% point of chi-square with 3 df, as tabulated (NIST/SEMATECH
# e-Handbook 1.3.6.7.4; scipy.stats.chi2.ppf(0.95, 3) = 7.8147), rounded
# to three decimals
CHI_SQUARE_CRITICAL_DF3 = 7.815

# Significance testing
SIGNIFICANCE_LEVEL = 0.05
Z_CRITICAL_95 = 1.96

# Abramowitz-Stegun 7.1.26 erf approximation
ERF_P = 0.3275911
ERF_COEFFICIENTS = (
    0.254829592,    # a1
    -0.284496736,   # a2
    1.421413741,    # a3
    -1.453152027,   # a4
    1.061405429,    # a5
)

# Card inclusion tiers, checked in order (lower bound inclusive)
TIER_THRESHOLDS = (
    ("core", 0.80),
    ("essential", 0.60),
    ("common", 0.30),
    ("flex", 0.10),
)
TIER_DEFAULT = "spice"
CARD_TIERS = tuple(name for name, _ in TIER_THRESHOLDS) + (TIER_DEFAULT,)

SPICE_MAX_INCLUSION = 0.10

# Survival milestones
MEDIAN_SURVIVAL_THRESHOLD = 0.5
PERCENTILE_75_DROP_THRESHOLD = 0.25
