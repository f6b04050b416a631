import logging

from fastapi import APIRouter, HTTPException, status

from cost_parser.api.deps import CustomerRegistryDep
from cost_parser.core.config import settings
from cost_parser.schemas.cost import CostParseRequest, CostParseResult
from cost_parser.services.pipelines.cost import CostExtractionPipeline

router = APIRouter(prefix="/cost-items", tags=["cost-items"])

logger = logging.getLogger(__name__)


@router.post(
    "/parse",
    summary="Parse vendor cost document text",
    response_model=CostParseResult,
)
def parse_cost_items(
    request: CostParseRequest,
    registry: CustomerRegistryDep,
) -> CostParseResult:
    """Extract cost records from page texts and match them to known customers."""

    if not request.pages:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one page of text is required.",
        )

    customers = request.customers if request.customers is not None else registry
    pipeline = CostExtractionPipeline(customers=customers)
    try:
        return pipeline.run(request.pages, style=request.style or settings.default_style)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except Exception as exc:
        logger.exception("Cost extraction failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Cost extraction failed.",
        ) from exc
