"""Global default values and constants.

All numeric constants and user-facing strings used throughout the
solar_sizing_model package must be defined here rather than as inline
literals. Import from this module wherever a constant is needed to ensure a
single source of truth and full traceability.
"""

# ---------------------------------------------------------------------------
# Sizing assumptions (Thailand averages)
# ---------------------------------------------------------------------------

ELECTRICITY_RATE_THB_PER_KWH: float = 4.5
"""Average grid electricity tariff in THB per kWh."""

SOLAR_COST_THB_PER_KW: float = 45_000.0
"""Installed system cost in THB per kW of capacity."""

PEAK_SUN_HOURS: float = 4.5
"""Average peak sun hours per day."""

SYSTEM_EFFICIENCY: float = 0.85
"""Fraction of theoretical generation delivered after inverter and wiring losses."""

DAYS_PER_MONTH: int = 30
"""Fixed month length used to convert monthly to daily consumption."""

MONTHS_PER_YEAR: int = 12
"""Months per year, used to annualise monthly savings."""

LOCATION_MULTIPLIERS: dict[str, float] = {
    "residential": 1.0,
    "commercial": 1.2,
    "industrial": 1.5,
}
"""Capacity margin factor per installation category."""

CAPACITY_STEP_DECIMALS: int = 1
"""Recommended capacity is rounded up to this many decimals (0.1 kW steps)."""

CEILING_NOISE_ULPS: int = 8
"""A scaled value this many ulps or fewer above a whole step stays on that step."""

# ---------------------------------------------------------------------------
# Input limits
# ---------------------------------------------------------------------------

MAX_MONTHLY_BILL_THB: float = 1_000_000.0
"""Upper sanity bound for the monthly bill (catches unit-entry mistakes)."""

DAY_RATIO_MIN_PCT: float = 0.0
"""Lowest accepted daytime usage share in percent."""

DAY_RATIO_MAX_PCT: float = 100.0
"""Highest accepted daytime usage share in percent."""

# ---------------------------------------------------------------------------
# Wire field names
# ---------------------------------------------------------------------------

FIELD_LOCATION_TYPE: str = "locationType"
FIELD_MONTHLY_BILL: str = "monthlyBill"
FIELD_ELECTRIC_SYSTEM: str = "electricSystem"
FIELD_DAY_NIGHT_RATIO: str = "dayNightRatio"

REQUIRED_CALCULATOR_FIELDS: tuple[str, ...] = (
    FIELD_LOCATION_TYPE,
    FIELD_MONTHLY_BILL,
    FIELD_ELECTRIC_SYSTEM,
    FIELD_DAY_NIGHT_RATIO,
)
"""Keys every calculator request body must carry, in display order."""

FIELD_FULL_NAME: str = "fullName"
FIELD_PHONE: str = "phone"
FIELD_EMAIL: str = "email"

REQUIRED_LEAD_FIELDS: tuple[str, ...] = (FIELD_FULL_NAME, FIELD_PHONE, FIELD_EMAIL)
"""Keys every lead request body must carry."""

# ---------------------------------------------------------------------------
# Lead form limits
# ---------------------------------------------------------------------------

LEAD_NAME_MIN_LENGTH: int = 2
LEAD_NAME_MAX_LENGTH: int = 100
LEAD_EMAIL_MAX_LENGTH: int = 255

LEAD_PHONE_PATTERN: str = r"^[0-9]{9,10}$"
"""Thai phone numbers: 9 or 10 digits once formatting is stripped."""

LEAD_EMAIL_PATTERN: str = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

PHONE_FORMATTING_PATTERN: str = r"[\s\-()]"
"""Characters removed from phone numbers before validation and submission."""

# ---------------------------------------------------------------------------
# User-facing messages (Thai)
# ---------------------------------------------------------------------------

CALCULATOR_MESSAGES: dict[str, str] = {
    "monthly_bill_not_number": "กรุณากรอกค่าไฟฟ้าเป็นตัวเลข",
    "monthly_bill_min": "กรุณากรอกค่าไฟฟ้าที่มากกว่า 0",
    "monthly_bill_max": "ค่าไฟฟ้าสูงเกินไป กรุณาตรวจสอบอีกครั้ง",
    "day_night_ratio": "สัดส่วนการใช้ไฟต้องอยู่ระหว่าง 0-100%",
    "location_type": "กรุณาเลือกประเภทสถานที่ติดตั้ง",
    "electric_system": "กรุณาเลือกระบบไฟฟ้า",
}

LEAD_MESSAGES: dict[str, str] = {
    "full_name_required": "กรุณากรอกชื่อ-นามสกุล",
    "full_name_min_length": "กรุณากรอกชื่อ-นามสกุล (อย่างน้อย 2 ตัวอักษร)",
    "full_name_max_length": "ชื่อ-นามสกุลต้องไม่เกิน 100 ตัวอักษร",
    "phone_required": "กรุณากรอกเบอร์โทรศัพท์",
    "phone_invalid": "กรุณากรอกเบอร์โทรศัพท์ที่ถูกต้อง (9-10 หลัก)",
    "email_required": "กรุณากรอกอีเมล",
    "email_invalid": "กรุณากรอกอีเมลที่ถูกต้อง",
}

API_MESSAGES: dict[str, str] = {
    "missing_fields": "กรุณากรอกข้อมูลให้ครบถ้วน",
    "validation_failed": "ข้อมูลที่กรอกไม่ถูกต้อง",
    "calculation_failed": "เกิดข้อผิดพลาดในการคำนวณ กรุณาลองใหม่อีกครั้ง",
    "lead_submitted": "ส่งข้อมูลเรียบร้อยแล้ว เราจะติดต่อกลับโดยเร็วที่สุด",
    "lead_submit_failed": "ไม่สามารถส่งข้อมูลได้ กรุณาลองใหม่อีกครั้ง",
    "invalid_json": "รูปแบบข้อมูลไม่ถูกต้อง",
}

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

CURRENCY_SYMBOL: str = "฿"
"""Thai Baht sign prefixed to formatted amounts."""

CAPACITY_UNIT: str = "kW"

YEARS_LABEL: str = "ปี"
"""Localised unit label for payback periods."""

NOT_APPLICABLE_LABEL: str = "-"
"""Shown when a payback period does not exist (no daytime usage)."""

# ---------------------------------------------------------------------------
# HTTP service
# ---------------------------------------------------------------------------

CALCULATOR_ENDPOINT: str = "/api/calculator"
LEADS_ENDPOINT: str = "/api/leads"

DEFAULT_HTTP_HOST: str = "127.0.0.1"
DEFAULT_HTTP_PORT: int = 8000

# ---------------------------------------------------------------------------
# CMS (Payload) API
# ---------------------------------------------------------------------------

PAYLOAD_API_URL_ENV: str = "PAYLOAD_API_URL"
"""Environment variable holding the CMS base URL."""

PAYLOAD_LEADS_ENDPOINT: str = "api/leads"

PAYLOAD_REQUEST_TIMEOUT_S: int = 10
"""HTTP request timeout in seconds for CMS API calls."""

PAYLOAD_RETRY_MAX: int = 3
"""Maximum number of HTTP attempts for CMS API calls."""

PAYLOAD_RETRY_BACKOFF_FACTOR: float = 0.5
"""Exponential backoff factor (seconds) between CMS retries."""

# ---------------------------------------------------------------------------
# Batch / output defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_DIR: str = "output"
"""Default directory for batch quote result files."""

QUOTES_CSV_FILENAME: str = "quotes.csv"

CSV_DELIMITER: str = ","
"""Delimiter used in all input and output CSV files."""

FLOAT_PRECISION: int = 1
"""Decimal places for capacities and payback periods in output CSVs."""

ERROR_JOIN_SEPARATOR: str = "; "
"""Separator for multiple field errors in a single CSV cell."""
