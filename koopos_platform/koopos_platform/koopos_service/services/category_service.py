from datetime import datetime
import logging

from sqlalchemy.exc import IntegrityError

from ..envelope import success
from ..errors import ServiceError, category_already_exists
from ..models import Category
from ..repositories import CategoryRepository
from ..schemas import CategoryRequest, RestResponse

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, categories: CategoryRepository):
        self.categories = categories

    def create_category(self, request: CategoryRequest) -> RestResponse:
        if self.categories.exists_by_name(request.name):
            logger.warning("Category with name: %s already exists", request.name)
            raise ServiceError.conflict(category_already_exists(request.name))

        try:
            self.categories.add(Category(
                name=request.name,
                description=request.description,
                created_date=datetime.utcnow(),
            ))
            self.categories.commit()
        except IntegrityError as exc:
            self.categories.rollback()
            raise ServiceError.conflict(category_already_exists(request.name)) from exc

        logger.info("Category with name: %s created successfully", request.name)
        return success()
