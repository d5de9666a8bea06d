import re

# --- Summary lines ---
SUMMARY_KEYWORDS = ["total", "subtotal", "folio summary", "balance carried"]
GLOBAL_SUMMARY_KEYWORDS = ["grand total", "total amount", "net amount"]
TAX_KEYWORDS = ["tax", "gst", "taxon"]   # "taxon" = OCR'd "Tax on"

# --- Income / expense context ---
# summary lines (single amount)
SUMMARY_INCOME_RE = re.compile(r"\b(?:in|income|rent(?:al|s)?|credits?)\b", re.I)
# line items
ITEM_INCOME_RE = re.compile(r"\b(?:rent(?:al|s)?|income|credits?|deposits?)\b", re.I)

# --- Header labels ---
FOLIO_LABELS = ["folio", "fol:", "reference", "ref:"]

# --- Property markers ---
EXPLICIT_PROPERTY_MARKERS = ["property:", "purchase of", "re:"]
HORIZON_PROPERTY_MARKERS = ["property:", "purchase"]
CONTACT_MARKERS = ["ph:", "email:", "box"]

STREET_TYPES = [
    "Street", "St", "Road", "Rd", "Parade", "Crescent", "Ave", "Avenue",
    "Place", "Pl", "Circuit", "Ct", "Square", "Sq", "Dr", "Drive",
]

# --- Dates ---
MONTH_NAMES = [
    "Jan(?:uary)?", "Feb(?:ruary)?", "Mar(?:ch)?", "Apr(?:il)?", "May", "Jun(?:e)?",
    "Jul(?:y)?", "Aug(?:ust)?", "Sep(?:t(?:ember)?)?", "Oct(?:ober)?", "Nov(?:ember)?", "Dec(?:ember)?",
]

# --- Expense categories (first match wins) ---
CATEGORY_KEYWORDS = {
    "management fee": "Management Fees",
    "rent": "Rent",
    "repair": "Repairs & Maintenance",
    "plumbing": "Repairs & Maintenance",
    "electrical": "Repairs & Maintenance",
    "council rates": "Council Rates",
    "water": "Water Charges",
    "insurance": "Insurance",
    "interest": "Loan Interest",
}
