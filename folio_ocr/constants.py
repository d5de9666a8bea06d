# --- Detect agency ---
# Specific strategies are keyed on these; the generic strategy needs none.
AGENCY_PATTERNS = {
    "HORIZON": [
        r"\bhorizon\s+housing\b", r"\bhorizon\s+housing\s+realty\b",
    ],
}

HORIZON_AGENCY_NAME = "Horizon Housing Realty Ltd"

# --- Reconciliation ---
ABS_TOL = 0.05          # in - out = balance tolerance (OCR rounding noise)

# --- Scan windows ---
AGENCY_NAME_WINDOW = 5   # agency name must be one of the first N lines
EARLY_ADDRESS_WINDOW = 10  # bare addresses this early are agency contact details

UNCATEGORIZED = "General / Uncategorized"
