import logging
import re
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse
from sqlmodel import Session, select

from ..dependencies import get_db, get_image_generator, get_resolver
from ..models import BibleImageRecord
from ..schemas import BibleImageRecordRead, CreateRecordResponse, ResolveRequest, ResolveResponse
from ..utils.image_generator import BibleImageGenerator
from ..utils.resolver import BulkMode, ReferenceInputError, ReferenceResolver, decode_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])

UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")


def safe_filename(name: str) -> str:
    return UNSAFE_FILENAME_CHARS.sub("_", name) + ".png"


def parse_bulk_mode(value: Optional[str]) -> BulkMode:
    try:
        return BulkMode((value or BulkMode.TEXT.value).strip().lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"passagesMode must be one of: {', '.join(mode.value for mode in BulkMode)}",
        )


def serialize_record(record: BibleImageRecord) -> BibleImageRecordRead:
    return BibleImageRecordRead.model_validate(record)


def get_record_or_404(session: Session, record_id: str) -> BibleImageRecord:
    record = session.get(BibleImageRecord, record_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found")
    return record


@router.post("", response_model=CreateRecordResponse)
def create_record(
    name: str = Form(...),
    output_path: str = Form(..., alias="outputPath"),
    text_references: Optional[str] = Form(None, alias="textReferences"),
    passages_mode: Optional[str] = Form(None, alias="passagesMode"),
    passages_file: Optional[UploadFile] = File(None, alias="passagesFile"),
    session: Session = Depends(get_db),
    resolver: ReferenceResolver = Depends(get_resolver),
    generator: BibleImageGenerator = Depends(get_image_generator),
) -> CreateRecordResponse:
    if not name.strip():
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="name must not be blank")
    if not output_path.strip():
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="outputPath must not be blank")
    bulk_mode = parse_bulk_mode(passages_mode)

    bulk_text: Optional[str] = None
    if passages_file is not None:
        data = passages_file.file.read()
        if data:
            try:
                bulk_text = decode_upload(data)
            except ReferenceInputError as exc:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    references = resolver.resolve(bulk_text, text_references, bulk_mode=bulk_mode)
    output_image = Path(output_path) / safe_filename(name)
    generated = generator.generate(output_image, references)

    record = BibleImageRecord(
        name=name,
        output_path=output_path,
        image_path=str(output_image.resolve()),
        references=references,
        highlights=[region.model_dump() for region in generated.highlights],
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info("Saved record %s with %s references", record.id, len(references))

    return CreateRecordResponse(id=record.id, message="Saved image and passage map.")


@router.post("/resolve", response_model=ResolveResponse)
def resolve_references(
    payload: ResolveRequest,
    resolver: ReferenceResolver = Depends(get_resolver),
) -> ResolveResponse:
    bulk_mode = parse_bulk_mode(payload.passages_mode)
    return ResolveResponse(references=resolver.resolve(payload.passages, payload.text, bulk_mode=bulk_mode))


@router.get("", response_model=List[BibleImageRecordRead])
def list_records(session: Session = Depends(get_db)) -> List[BibleImageRecordRead]:
    records = session.exec(select(BibleImageRecord).order_by(BibleImageRecord.created_at.desc())).all()
    return [serialize_record(record) for record in records]


@router.get("/{record_id}", response_model=BibleImageRecordRead)
def read_record(record_id: str, session: Session = Depends(get_db)) -> BibleImageRecordRead:
    return serialize_record(get_record_or_404(session, record_id))


@router.get("/{record_id}/image")
def read_record_image(record_id: str, session: Session = Depends(get_db)) -> FileResponse:
    record = get_record_or_404(session, record_id)
    image_path = Path(record.image_path)
    if not image_path.exists():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return FileResponse(image_path, media_type="image/png", headers={"Cache-Control": "no-cache"})
