from datetime import date

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from canhotos.core.config import get_settings
from canhotos.core.exceptions import CanhotoError, ValidationError
from canhotos.db.session import get_db
from canhotos.routers.deps import get_access_policy, get_current_claim
from canhotos.schemas.upload import UploadCreateResponse, UploadPageRead, UploadQuery, UploadRead
from canhotos.services import uploads as upload_service
from canhotos.services.access import AccessPolicy
from canhotos.services.sessions import SessionClaim
from canhotos.services.storage import delete_file_if_exists, save_upload_file

router = APIRouter(tags=["uploads"])


@router.post("/upload", response_model=UploadCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_upload(
    nf: str = Form(default=""),
    data_entrega: str | None = Form(default=None),
    image_url: str | None = Form(default=None, alias="imageUrl"),
    arquivo: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    claim: SessionClaim = Depends(get_current_claim),
    policy: AccessPolicy = Depends(get_access_policy),
) -> UploadCreateResponse:
    if arquivo is not None and arquivo.filename:
        if not nf.strip():
            await arquivo.close()
            raise ValidationError.for_field("nf", "Invoice number (nf) is required")
        locator = await save_upload_file(arquivo)
        original_filename = arquivo.filename
    else:
        locator = image_url
        original_filename = None

    try:
        upload = upload_service.create_upload(
            db,
            claim,
            invoice_ref=nf,
            delivery_date=data_entrega,
            artifact_locator=locator,
            policy=policy,
            original_filename=original_filename,
        )
    except CanhotoError:
        if original_filename is not None:
            delete_file_if_exists(locator)
        raise
    return UploadCreateResponse(id=upload.id, artifact_locator=upload.artifact_locator)


@router.get("/uploads", response_model=UploadPageRead)
def list_uploads(
    nf: str | None = Query(default=None),
    data_entrega: date | None = Query(default=None),
    usuario_id: int | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    claim: SessionClaim = Depends(get_current_claim),
    policy: AccessPolicy = Depends(get_access_policy),
) -> UploadPageRead:
    settings = get_settings()
    query = UploadQuery(
        invoice_ref=nf,
        delivery_date=data_entrega,
        owner_id=usuario_id,
        page=page,
        page_size=limit or settings.default_page_size,
    )
    result = upload_service.list_uploads(db, claim, query, policy, max_page_size=settings.max_page_size)
    return UploadPageRead(
        uploads=[
            UploadRead(
                id=item.upload.id,
                invoice_ref=item.upload.invoice_ref,
                delivery_date=item.upload.delivery_date,
                artifact_locator=item.upload.artifact_locator,
                original_filename=item.upload.original_filename,
                submitted_at=item.upload.submitted_at,
                owner_id=item.upload.owner_id,
                owner_name=item.owner_name,
            )
            for item in result.records
        ],
        total_items=result.total_count,
        page=result.page,
        limit=result.page_size,
    )
