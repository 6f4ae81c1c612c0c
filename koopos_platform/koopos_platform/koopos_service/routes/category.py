from fastapi import APIRouter, Depends

from ..dependencies import get_category_service, get_current_user
from ..schemas import CategoryRequest, RestResponse
from ..services.category_service import CategoryService

router = APIRouter(prefix="/category", tags=["category"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=RestResponse, response_model_exclude_none=True)
def create_category(
    request: CategoryRequest,
    service: CategoryService = Depends(get_category_service),
):
    return service.create_category(request)
