from __future__ import annotations

import logging

from fastapi import APIRouter, Header, HTTPException, status

from similar_files.config import settings
from similar_files.errors import CorruptIndexError, IndexNotFoundError, InvalidQueryError
from similar_files.indexing.pipeline import IndexService
from similar_files.models.schemas import ReindexRequest, ReindexResponse, SimilarRequest, SimilarResponse
from similar_files.search.pipeline import Query, SimilarityService

router = APIRouter()
logger = logging.getLogger(__name__)


def _check_admin_token(x_admin_token: str | None) -> None:
    if not settings.admin_token:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Admin token is not configured",
        )
    if x_admin_token != settings.admin_token.get_secret_value():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.post("/admin/reindex", response_model=ReindexResponse, summary="Rebuild workspace index")
def admin_reindex(
    reindex_request: ReindexRequest,
    x_admin_token: str | None = Header(default=None, alias="X-Admin-Token"),
) -> ReindexResponse:
    _check_admin_token(x_admin_token)

    logger.info("Admin reindex requested", extra={"root": reindex_request.root})
    summary = IndexService().run(reindex_request.root, index_dir=reindex_request.index_dir)
    response = ReindexResponse(
        status="completed",
        indexed_documents=summary.doc_count,
        skipped=summary.skipped,
        elapsed_sec=round(summary.elapsed_sec, 2),
    )
    logger.info(
        "Admin reindex completed",
        extra={"indexed_documents": response.indexed_documents, "elapsed_sec": response.elapsed_sec},
    )
    return response


@router.post(
    "/api/v1/similar",
    response_model=SimilarResponse,
    response_model_by_alias=True,
    summary="Find indexed files similar to a file or text",
)
def similar(request: SimilarRequest) -> SimilarResponse:
    if request.text and request.text.strip():
        query = Query.from_text(request.text)
    elif request.path and request.path.strip():
        query = Query.from_file(request.path)
    else:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Either path or text is required")

    service = SimilarityService(index_dir=request.index_dir)
    try:
        return service.find_similar(query, top=request.top, threshold=request.threshold)
    except InvalidQueryError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except IndexNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except CorruptIndexError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


__all__ = ["router"]
