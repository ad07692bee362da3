from datetime import date, datetime

from pydantic import BaseModel, Field, PositiveInt


class UploadQuery(BaseModel):
    """Filters and paging for one ``GET /uploads`` call, validated once."""

    invoice_ref: str | None = None
    delivery_date: date | None = None
    owner_id: int | None = None
    page: PositiveInt = 1
    page_size: PositiveInt = 30


class UploadCreateResponse(BaseModel):
    model_config = {"populate_by_name": True}

    msg: str = "Upload created"
    id: int
    artifact_locator: str = Field(alias="arquivo")


class UploadRead(BaseModel):
    model_config = {"populate_by_name": True}

    id: int
    invoice_ref: str = Field(alias="nf")
    delivery_date: date | None = Field(alias="data_entrega")
    artifact_locator: str = Field(alias="arquivo")
    original_filename: str | None = Field(default=None, alias="nome_original")
    submitted_at: datetime = Field(alias="data_envio")
    owner_id: int = Field(alias="usuario_id")
    owner_name: str = Field(alias="usuario_nome")


class UploadPageRead(BaseModel):
    model_config = {"populate_by_name": True}

    uploads: list[UploadRead]
    total_items: int = Field(alias="totalItems")
    page: int
    limit: int
