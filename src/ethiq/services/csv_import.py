"""Bulk user import from CSV.

Expected header (case-insensitive, any column order):

    Company Relationship,Name,Email,User Type

User Type must be Advisor or Company. Bad rows are skipped with an error
message and the remaining rows are still processed.
"""

import csv
import io
import logging
from dataclasses import dataclass, field

from .auth_provider import find_user_by_email
from .credentials import is_valid_email
from .errors import EthiqError, ValidationError
from .user_provisioning import add_user

logger = logging.getLogger(__name__)

MAX_CSV_BYTES = 5 * 1024 * 1024
EXPECTED_COLUMNS = ("company relationship", "name", "email", "user type")
ALLOWED_USER_TYPES = ("advisor", "company")

SAMPLE_CSV = "\n".join([
    "Company Relationship,Name,Email,User Type",
    "Acme Corp,John Doe,john.doe@example.com,Advisor",
    "TechStart Inc,Jane Smith,jane.smith@example.com,Company",
    "Global Solutions,Mike Johnson,mike.j@example.com,Advisor",
])


@dataclass
class CSVUserRow:
    company_relationship: str
    name: str
    email: str
    user_type: str


@dataclass
class CSVParseResult:
    rows: list[CSVUserRow] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class BulkImportResult:
    created: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        msg = f"Successfully added {self.created} user(s)."
        if self.skipped:
            msg += f" Skipped {self.skipped} duplicate(s)."
        return msg


class CSVImportError(ValidationError):
    """The file as a whole could not be used; carries every error found."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(errors[0])


def _decode(content: bytes | str) -> str:
    if isinstance(content, str):
        return content
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise CSVImportError(["Failed to read file content."]) from None


def parse_user_csv(filename: str, content: bytes | str, max_bytes: int = MAX_CSV_BYTES) -> CSVParseResult:
    """Parse and validate an uploaded CSV.

    Raises:
        CSVImportError: wrong file type, too large, empty, missing columns,
            or no valid rows at all
    """
    if not (filename or "").lower().endswith(".csv"):
        raise CSVImportError(["Invalid file type. Please upload a CSV file."])

    size = len(content.encode("utf-8") if isinstance(content, str) else content)
    if size > max_bytes:
        raise CSVImportError([f"File size exceeds {max_bytes // (1024 * 1024)}MB limit."])

    text = _decode(content)
    lines = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    if not lines:
        raise CSVImportError(["CSV file is empty."])

    headers = [h.strip().lower() for h in lines[0]]
    missing = [col for col in EXPECTED_COLUMNS if col not in headers]
    if missing:
        raise CSVImportError([
            f"Missing required columns: {', '.join(missing)}",
            "Expected columns: Company Relationship, Name, Email, User Type",
        ])

    idx = {col: headers.index(col) for col in EXPECTED_COLUMNS}
    result = CSVParseResult()

    for row_number, values in enumerate(lines[1:], start=2):
        values = [v.strip() for v in values]
        if len(values) < len(EXPECTED_COLUMNS):
            result.errors.append(f"Row {row_number}: Incomplete data (expected 4 columns)")
            continue

        def cell(col: str) -> str:
            i = idx[col]
            return values[i] if i < len(values) else ""

        company = cell("company relationship")
        name = cell("name")
        email = cell("email")
        user_type = cell("user type").lower()

        if not company:
            result.errors.append(f"Row {row_number}: Company Relationship is required")
            continue
        if not name:
            result.errors.append(f"Row {row_number}: Name is required")
            continue
        if not email:
            result.errors.append(f"Row {row_number}: Email is required")
            continue
        if not is_valid_email(email):
            result.errors.append(f"Row {row_number}: Invalid email format ({email})")
            continue
        if user_type not in ALLOWED_USER_TYPES:
            result.errors.append(
                f'Row {row_number}: Invalid user type ({user_type}). Must be "Advisor" or "Company"'
            )
            continue

        result.rows.append(CSVUserRow(
            company_relationship=company, name=name, email=email, user_type=user_type,
        ))

    if not result.rows and result.errors:
        raise CSVImportError(["No valid rows found in CSV.", *result.errors])

    return result


def import_users(parsed: CSVParseResult, send_invites: bool = True) -> BulkImportResult:
    """Create an account for every parsed row.

    Existing emails are skipped, per-row failures are recorded, and the
    loop always runs to the end. Row-level parse errors are carried over
    into the result.
    """
    result = BulkImportResult(errors=list(parsed.errors))

    for row in parsed.rows:
        if find_user_by_email(row.email) is not None:
            result.skipped += 1
            result.errors.append(f"Skipped {row.email} - already exists")
            continue

        try:
            add_user(
                email=row.email,
                name=row.name,
                user_type=row.user_type,
                company_relationship=row.company_relationship,
                send_invite=send_invites,
            )
        except EthiqError as e:
            result.errors.append(f"Failed to add {row.email}: {e.message}")
            continue

        result.created += 1

    logger.info(
        f"Bulk import finished: {result.created} created, {result.skipped} skipped, "
        f"{len(result.errors)} error(s)"
    )
    return result
