from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

SERVER_FORMATS = ("pdf", "docx")


class PageTextSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=1)
    text: str


class ExtractionMeta(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    file_type: str
    page_count: int = Field(ge=0)
    processing_time_ms: int = Field(ge=0)


class ExtractionResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    pages: list[PageTextSchema]
    meta: ExtractionMeta

    @model_validator(mode="after")
    def check_page_count(self) -> "ExtractionResponse":
        if self.meta.page_count != len(self.pages):
            raise ValueError(
                f"pageCount {self.meta.page_count} does not match {len(self.pages)} pages"
            )
        return self


class DownloadRequest(BaseModel):
    # Both fields are checked by the handler so bad values map to 400, not 422
    text: str | None = None
    format: str | None = None


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
