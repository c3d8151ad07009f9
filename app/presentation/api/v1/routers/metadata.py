import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.application.models import MetadataKind
from app.application.use_cases.generate_metadata import GenerateMetadataUseCase
from app.core.exceptions import ImageMetadataError
from app.presentation.api.v1.dependencies.metadata import get_generate_metadata_use_case
from app.presentation.api.v1.schemas.metadata import (
    ErrorResponse,
    FieldResultResponse,
    MetadataResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metadata"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Empty image payload"},
    500: {"model": ErrorResponse, "description": "Acquisition, model or parsing failure"},
}

LANG_QUERY = Query(None, description="Two-letter output language code; unknown codes fall back to English")


async def _generate(
    kind: MetadataKind,
    request: Request,
    lang: Optional[str],
    use_case: GenerateMetadataUseCase,
) -> JSONResponse:
    body = await request.body()
    try:
        result = await use_case.execute(
            kind,
            content_type=request.headers.get("content-type"),
            body=body,
            language=lang,
            query=request.query_params,
        )
        return JSONResponse(content=result)
    except ImageMetadataError:
        raise
    except Exception as e:  # noqa: BLE001
        logger.exception("Error in /%s", kind.value)
        return JSONResponse(status_code=500, content={"error": str(e) or type(e).__name__})


@router.post(
    "/optimize",
    responses={200: {"model": MetadataResponse}, **ERROR_RESPONSES},
)
async def optimize(
    request: Request,
    lang: Optional[str] = LANG_QUERY,
    use_case: GenerateMetadataUseCase = Depends(get_generate_metadata_use_case),
):
    """Generate the full SEO metadata package for an image."""
    return await _generate(MetadataKind.METADATA, request, lang, use_case)


@router.post("/alt-text", responses={200: {"model": FieldResultResponse}, **ERROR_RESPONSES})
async def alt_text(
    request: Request,
    lang: Optional[str] = LANG_QUERY,
    use_case: GenerateMetadataUseCase = Depends(get_generate_metadata_use_case),
):
    return await _generate(MetadataKind.ALT_TEXT, request, lang, use_case)


@router.post("/caption", responses={200: {"model": FieldResultResponse}, **ERROR_RESPONSES})
async def caption(
    request: Request,
    lang: Optional[str] = LANG_QUERY,
    use_case: GenerateMetadataUseCase = Depends(get_generate_metadata_use_case),
):
    return await _generate(MetadataKind.CAPTION, request, lang, use_case)


@router.post("/description", responses={200: {"model": FieldResultResponse}, **ERROR_RESPONSES})
async def description(
    request: Request,
    lang: Optional[str] = LANG_QUERY,
    use_case: GenerateMetadataUseCase = Depends(get_generate_metadata_use_case),
):
    return await _generate(MetadataKind.DESCRIPTION, request, lang, use_case)


@router.post("/focus-keyword", responses={200: {"model": FieldResultResponse}, **ERROR_RESPONSES})
async def focus_keyword(
    request: Request,
    lang: Optional[str] = LANG_QUERY,
    use_case: GenerateMetadataUseCase = Depends(get_generate_metadata_use_case),
):
    return await _generate(MetadataKind.FOCUS_KEYWORD, request, lang, use_case)


@router.post("/title", responses={200: {"model": FieldResultResponse}, **ERROR_RESPONSES})
async def title(
    request: Request,
    lang: Optional[str] = LANG_QUERY,
    use_case: GenerateMetadataUseCase = Depends(get_generate_metadata_use_case),
):
    return await _generate(MetadataKind.TITLE, request, lang, use_case)


@router.post("/filename", responses={200: {"model": FieldResultResponse}, **ERROR_RESPONSES})
async def filename(
    request: Request,
    lang: Optional[str] = LANG_QUERY,
    use_case: GenerateMetadataUseCase = Depends(get_generate_metadata_use_case),
):
    """Generate a slugged, extension-suffixed filename for an image."""
    return await _generate(MetadataKind.FILENAME, request, lang, use_case)
