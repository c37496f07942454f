# Lumber unit-of-measure constants. Board foot is the inventory unit; every other code is a selling unit

# Unit codes (stable, case-sensitive)
UOM_CODES = {
    "BOARD_FEET": "BF",
    "LINEAR_FEET": "LF",
    "SQUARE_FEET": "SF",
    "MBF": "MBF",           # thousand board feet
    "MSF": "MSF",           # thousand square feet
    "EACH": "EACH",
    "BUNDLE": "BUNDLE",
}

BF = UOM_CODES["BOARD_FEET"]
LF = UOM_CODES["LINEAR_FEET"]
SF = UOM_CODES["SQUARE_FEET"]
MBF = UOM_CODES["MBF"]
MSF = UOM_CODES["MSF"]
EACH = UOM_CODES["EACH"]
BUNDLE = UOM_CODES["BUNDLE"]

UOM_LABELS = {
    BF: "Board Feet",
    LF: "Linear Feet",
    SF: "Square Feet",
    MBF: "Thousand Board Feet",
    MSF: "Thousand Square Feet",
    EACH: "Each",
    BUNDLE: "Bundle",
}

# Decimal places per value kind
PRECISION = {
    "BF": 4,
    "PERCENTAGE": 2,
    "CURRENCY": 2,
    "FACTOR": 6,
    "DIMENSION": 3,
}

# Board foot = 144 in³. Length in feet → divide by 12, length in inches → divide by 144.
BF_DIVISOR_FEET = 12.0
BF_DIVISOR_INCHES = 144.0
THOUSAND = 1000.0

# System defaults when nothing else is configured
DEFAULTS = {
    "YIELD_PCT": 95.0,
    "WASTE_PCT": 5.0,
    "BF_PRECISION": 4,
    "THICKNESS": 1.0,   # inches
    "WIDTH": 12.0,      # inches
    "LENGTH": 8.0,      # feet
    "PIECES_PER_BUNDLE": 1,
}

# Typical upper bounds used for data-entry warnings (not hard limits)
TYPICAL_MAX = {
    "thickness": 12.0,
    "width": 48.0,
    "length": 40.0,
}

# Tally sheet lifecycle
TALLY_STATUS = {
    "OPEN": "1",
    "ALLOCATED": "2",
    "CONSUMED": "3",
    "CLOSED": "4",
}

TALLY_STATUS_LABELS = {
    "1": "Open",
    "2": "Allocated",
    "3": "Consumed",
    "4": "Closed",
}

# Repack / work order yield grading
YIELD_THRESHOLDS = {
    "EXCELLENT": 90.0,
    "GOOD": 80.0,
    "ACCEPTABLE": 70.0,
    "POOR": 60.0,
}

# Points below expected yield still considered on target
YIELD_TOLERANCE_PCT = 5.0

ERRORS = {
    "MISSING_DIMENSIONS": "Dimensions (thickness, width, length) are required for BF calculation.",
    "INVALID_UOM": "Invalid or unsupported Unit of Measure code.",
    "INVALID_YIELD": "Yield percentage must be between 0 and 100.",
    "INVALID_WASTE": "Waste percentage must be between 0 and 100.",
    "INSUFFICIENT_TALLY": "Insufficient BF available in tally sheets for allocation.",
    "NO_TALLIES": "No available tally sheets found",
    "CONVERSION_FAILED": "UOM conversion failed. Please verify dimensions.",
}
