"""Upload records: creation and the filtered, paginated listing.

Visibility is applied inside the SQL statement, before the user filters
and before counting, so a carrier's ``total_count`` and pages only ever
cover their own records.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import PurePosixPath
from urllib.parse import urlparse

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from canhotos.core.exceptions import NotFound, ValidationError
from canhotos.models.upload import Upload
from canhotos.models.user import User
from canhotos.schemas.upload import UploadQuery
from canhotos.services.access import AccessPolicy
from canhotos.services.sessions import SessionClaim

logger = logging.getLogger(__name__)

MAX_INVOICE_REF_LENGTH = 255
MAX_LOCATOR_LENGTH = 1000


@dataclass(frozen=True)
class UploadListing:
    upload: Upload
    owner_name: str


@dataclass(frozen=True)
class UploadPage:
    records: list[UploadListing]
    total_count: int
    page: int
    page_size: int


def parse_delivery_date(value: date | str | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError.for_field("data_entrega", "Delivery date must use the YYYY-MM-DD format") from exc


def is_valid_locator(locator: str) -> bool:
    if not locator or len(locator) > MAX_LOCATOR_LENGTH or any(ch.isspace() for ch in locator):
        return False
    parsed = urlparse(locator)
    if parsed.scheme:
        return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
    return bool(parsed.path) and ".." not in PurePosixPath(parsed.path).parts


def create_upload(
    db: Session,
    claim: SessionClaim,
    invoice_ref: str | None,
    delivery_date: date | str | None,
    artifact_locator: str | None,
    policy: AccessPolicy,
    original_filename: str | None = None,
) -> Upload:
    errors = []
    invoice_ref = (invoice_ref or "").strip()
    if not invoice_ref:
        errors.append({"field": "nf", "msg": "Invoice number (nf) is required"})
    elif len(invoice_ref) > MAX_INVOICE_REF_LENGTH:
        errors.append({"field": "nf", "msg": f"Invoice number (nf) must be at most {MAX_INVOICE_REF_LENGTH} characters"})
    try:
        parsed_date = parse_delivery_date(delivery_date)
    except ValidationError as exc:
        errors.extend(exc.errors)
        parsed_date = None
    artifact_locator = (artifact_locator or "").strip()
    if not is_valid_locator(artifact_locator):
        errors.append({"field": "arquivo", "msg": "A file or a valid file URL is required"})
    if errors:
        raise ValidationError(errors)

    upload = Upload(
        owner_id=policy.owner_for_new_upload(claim),
        invoice_ref=invoice_ref,
        delivery_date=parsed_date,
        artifact_locator=artifact_locator,
        original_filename=original_filename,
    )
    db.add(upload)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise NotFound("Owner account not found") from exc
    db.refresh(upload)
    logger.info("upload_created", extra={"upload_id": upload.id, "owner_id": upload.owner_id})
    return upload


def list_uploads(
    db: Session,
    claim: SessionClaim,
    query: UploadQuery,
    policy: AccessPolicy,
    max_page_size: int | None = None,
) -> UploadPage:
    if query.page < 1 or query.page_size < 1:
        raise ValidationError.for_field("page", "Page and limit must be positive integers")
    page_size = min(query.page_size, max_page_size) if max_page_size else query.page_size

    conditions = []
    owner_id = policy.visible_owner(claim, query.owner_id)
    if owner_id is not None:
        conditions.append(Upload.owner_id == owner_id)
    invoice_term = (query.invoice_ref or "").strip()
    if invoice_term:
        conditions.append(Upload.invoice_ref.icontains(invoice_term, autoescape=True))
    if query.delivery_date is not None:
        conditions.append(Upload.delivery_date == query.delivery_date)

    total_count = db.scalar(
        select(func.count(Upload.id)).select_from(Upload).join(User, Upload.owner_id == User.id).where(*conditions)
    ) or 0

    rows = db.execute(
        select(Upload, User.name)
        .join(User, Upload.owner_id == User.id)
        .where(*conditions)
        .order_by(Upload.submitted_at.desc(), Upload.id.desc())
        .offset((query.page - 1) * page_size)
        .limit(page_size)
    ).all()

    return UploadPage(
        records=[UploadListing(upload=upload, owner_name=owner_name) for upload, owner_name in rows],
        total_count=total_count,
        page=query.page,
        page_size=page_size,
    )
