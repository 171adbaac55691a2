"""
Import Service
Merges third-party CSV exports (GolfNow, ClubEssential, generic) into customers

Rows are matched with the same identity policy as live captures. Each row is
its own transaction so one bad line never loses the rest of the file.
"""

import csv
import io
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from golfcapture.exceptions import NotFoundError, ValidationError
from golfcapture.models.customer import BookingSource, PlayFrequency
from golfcapture.models.import_batch import ImportBatch, ImportRow, ImportRowAction, ImportSource, ImportStatus
from golfcapture.services.identity import create_customer, fill_blank_fields, match_customer
from golfcapture.services.scoring import apply_membership_score
from golfcapture.utils.contact import normalize_email, normalize_phone

logger = logging.getLogger(__name__)

# Ordered header aliases per source; the first non-empty column wins
FIELD_ALIASES: Dict[str, Dict[str, List[str]]] = {
    ImportSource.GOLFNOW.value: {
        "first_name": ["First Name", "first_name", "FirstName"],
        "last_name": ["Last Name", "last_name", "LastName"],
        "email": ["Email", "email", "E-mail"],
        "phone": ["Phone", "phone", "Phone Number"],
        "zip": ["Zip", "zip", "Postal Code"],
    },
    ImportSource.CLUBESSENTIAL.value: {
        "first_name": ["FirstName", "First Name", "first_name"],
        "last_name": ["LastName", "Last Name", "last_name"],
        "email": ["Email", "email", "EmailAddress"],
        "phone": ["Phone", "phone", "MobilePhone", "HomePhone"],
        "zip": ["Zip", "zip", "PostalCode"],
    },
    ImportSource.GENERIC.value: {
        "first_name": ["first_name", "firstName", "First Name"],
        "last_name": ["last_name", "lastName", "Last Name"],
        "email": ["email", "Email"],
        "phone": ["phone", "Phone"],
        "zip": ["zip", "Zip"],
        "booking_source": ["booking_source"],
        "is_local": ["is_local"],
        "play_frequency": ["play_frequency"],
        "member_elsewhere": ["member_elsewhere"],
    },
}

SOURCE_ID_ALIASES = ["id", "ID"]

TRUE_VALUES = {"true", "t", "yes", "y", "1"}
FALSE_VALUES = {"false", "f", "no", "n", "0"}

BOOKING_SOURCES = {source.value for source in BookingSource}
PLAY_FREQUENCIES = {frequency.value for frequency in PlayFrequency}


def parse_csv(content: Union[bytes, str]) -> List[Dict[str, str]]:
    """
    Parse CSV text with a header row

    UTF-8 with an optional BOM; headers and values are trimmed and rows with
    no values at all are dropped.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise ValidationError("CSV file must be UTF-8 encoded", field="file")
    elif content.startswith("\ufeff"):
        content = content[1:]

    reader = csv.DictReader(io.StringIO(content))
    rows = []
    for record in reader:
        row = {
            (key or "").strip(): (value or "").strip() if isinstance(value, str) else ""
            for key, value in record.items()
            if key is not None
        }
        if any(row.values()):
            rows.append(row)
    return rows


def pick(row: Dict[str, str], aliases: Iterable[str]) -> Optional[str]:
    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return None


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


def map_row(source: str, row: Dict[str, str]) -> Dict[str, Any]:
    """Apply the source's alias table; unrecognised enum values become None"""
    aliases = FIELD_ALIASES[source]
    mapped: Dict[str, Any] = {field: pick(row, names) for field, names in aliases.items()}

    if "is_local" in mapped:
        mapped["is_local"] = parse_bool(mapped["is_local"])
    if "member_elsewhere" in mapped:
        mapped["member_elsewhere"] = parse_bool(mapped["member_elsewhere"])
    if mapped.get("booking_source"):
        value = mapped["booking_source"].lower()
        mapped["booking_source"] = value if value in BOOKING_SOURCES else None
    if mapped.get("play_frequency"):
        value = mapped["play_frequency"].lower()
        mapped["play_frequency"] = value if value in PLAY_FREQUENCIES else None

    mapped["source_id"] = pick(row, SOURCE_ID_ALIASES)
    return mapped


def _validate_source(source: str) -> str:
    source = (source or "").strip().lower()
    if source not in FIELD_ALIASES:
        raise ValidationError(
            f"Unknown import source '{source}'. Expected one of: {', '.join(sorted(FIELD_ALIASES))}",
            field="source",
        )
    return source


def _merge_row(db: Session, batch: ImportBatch, source: str, row_number: int, row: Dict[str, str]) -> ImportRow:
    """Match or create the customer for one row and append its audit entry (no commit)"""
    mapped = map_row(source, row)
    email = normalize_email(mapped.pop("email"))
    phone = normalize_phone(mapped.pop("phone"))
    source_id = mapped.pop("source_id")

    if not email and not phone:
        audit = ImportRow(
            import_id=batch.id,
            row_number=row_number,
            raw_data=row,
            action=ImportRowAction.SKIPPED,
            error_message="No email or phone",
        )
        db.add(audit)
        return audit

    customer, match_type = match_customer(db, batch.course_id, email, phone)

    if customer is not None:
        fill_blank_fields(db, customer, email, phone, mapped)
        apply_membership_score(customer)
        action = ImportRowAction.MATCHED
    else:
        customer = create_customer(
            db,
            batch.course_id,
            email,
            phone,
            mapped,
            source=f"{source}_import",
            source_id=source_id,
            visit_count=0,
        )
        action = ImportRowAction.CREATED

    audit = ImportRow(
        import_id=batch.id,
        customer_id=customer.id,
        row_number=row_number,
        raw_data=row,
        action=action,
        match_type=match_type,
    )
    db.add(audit)
    return audit


def import_rows(
    db: Session,
    course_id: UUID,
    source: str,
    rows: List[Dict[str, str]],
    filename: Optional[str] = None,
    file_size: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Merge parsed CSV rows into the course's customers

    Args:
        db: Database session
        course_id: Course to import into
        source: golfnow, clubessential or generic
        rows: Parsed rows (header -> value)
        filename: Original upload name, for the audit trail
        file_size: Upload size in bytes

    Returns:
        {import_id, total_rows, created, matched, skipped, error_count}

    Raises:
        ValidationError: Unknown source (nothing written)
    """
    source = _validate_source(source)

    batch = ImportBatch(
        course_id=course_id,
        source=source,
        filename=filename,
        file_size=file_size,
        total_rows=len(rows),
        status=ImportStatus.PROCESSING,
        started_at=datetime.utcnow(),
        errors=[],
    )
    db.add(batch)
    db.commit()
    db.refresh(batch)

    counts = {
        ImportRowAction.CREATED: 0,
        ImportRowAction.MATCHED: 0,
        ImportRowAction.SKIPPED: 0,
        ImportRowAction.ERROR: 0,
    }
    errors: List[Dict[str, Any]] = []

    try:
        for index, row in enumerate(rows, start=1):
            try:
                audit = _merge_row(db, batch, source, index, row)
                db.commit()
                counts[audit.action] += 1

            except Exception as e:
                db.rollback()
                logger.warning(f"Import {batch.id} row {index} failed: {str(e)}")
                errors.append({"row": index, "error": str(e)})
                counts[ImportRowAction.ERROR] += 1
                db.add(
                    ImportRow(
                        import_id=batch.id,
                        row_number=index,
                        raw_data=row,
                        action=ImportRowAction.ERROR,
                        error_message=str(e),
                    )
                )
                db.commit()

        batch.status = ImportStatus.COMPLETED

    except Exception as e:
        db.rollback()
        logger.error(f"Import {batch.id} aborted: {str(e)}")
        errors.append({"row": None, "error": str(e)})
        batch.status = ImportStatus.FAILED

    batch.new_customers = counts[ImportRowAction.CREATED]
    batch.matched_customers = counts[ImportRowAction.MATCHED]
    batch.skipped_rows = counts[ImportRowAction.SKIPPED]
    batch.error_rows = counts[ImportRowAction.ERROR]
    batch.processed_rows = batch.new_customers + batch.matched_customers
    batch.errors = errors
    batch.completed_at = datetime.utcnow()
    db.commit()

    logger.info(
        f"Import {batch.id} ({source}) {batch.status.value}: {len(rows)} rows, "
        f"{batch.new_customers} created, {batch.matched_customers} matched, "
        f"{batch.skipped_rows} skipped, {batch.error_rows} errors"
    )

    return {
        "import_id": batch.id,
        "total_rows": len(rows),
        "created": batch.new_customers,
        "matched": batch.matched_customers,
        "skipped": batch.skipped_rows,
        "error_count": batch.error_rows,
    }


def import_csv(
    db: Session,
    course_id: UUID,
    source: str,
    content: Union[bytes, str],
    filename: Optional[str] = None,
) -> Dict[str, Any]:
    """Validate the source, parse the file, then merge"""
    source = _validate_source(source)
    rows = parse_csv(content)
    file_size = len(content) if content is not None else None
    return import_rows(db, course_id, source, rows, filename=filename, file_size=file_size)


def list_imports(db: Session, course_id: UUID) -> List[ImportBatch]:
    return (
        db.query(ImportBatch).filter(ImportBatch.course_id == course_id).order_by(ImportBatch.created_at.desc()).all()
    )


def get_import(db: Session, course_id: UUID, import_id: UUID) -> ImportBatch:
    batch = db.query(ImportBatch).filter(ImportBatch.id == import_id, ImportBatch.course_id == course_id).first()
    if not batch:
        raise NotFoundError("Import", import_id)
    return batch
