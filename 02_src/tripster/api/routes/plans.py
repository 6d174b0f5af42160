"""Travel plan submission routes."""

from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...app import IApplication
from ...logging_config import get_logger
from ...models import TravelPlanRequest

logger = get_logger(__name__)


class TravelPlanForm(BaseModel):
    """Request model for the trip-planner form (camelCase on the wire)."""

    model_config = ConfigDict(
        populate_by_name=True, coerce_numbers_to_str=True, str_strip_whitespace=True
    )

    user_id: str = Field(alias="userId", min_length=1)
    start_location: str = Field(alias="startLocation", min_length=1)
    destination: str = Field(min_length=1)
    budget: str = Field(min_length=1)
    preference: str = Field(min_length=1)
    travel_with: str = Field(alias="travelWith", min_length=1)
    transport: str = Field(min_length=1)
    travel_date_start: str = Field(alias="travelDateStart", min_length=1)
    travel_date_end: str = Field(alias="travelDateEnd", min_length=1)

    def to_request(self) -> TravelPlanRequest:
        return TravelPlanRequest(**self.model_dump())


def create_plans_router(app: IApplication) -> APIRouter:
    """Create plan submission router."""
    router = APIRouter(tags=["plans"])

    async def push_plan(request: TravelPlanRequest) -> None:
        try:
            await app.handler.submit_plan(request)
        except Exception as e:
            logger.error(f"Error processing travel plan for {request.user_id}: {e}", exc_info=True)

    @router.post("/submit-travel-plan")
    async def submit_travel_plan(request: Request, background_tasks: BackgroundTasks):
        """Accept a preference form; the plan is pushed to the user when ready."""
        try:
            form = TravelPlanForm.model_validate(await request.json())
        except (ValidationError, ValueError) as e:
            logger.error(f"Missing required fields in travel plan request: {e}")
            return PlainTextResponse("Missing required fields", status_code=400)

        background_tasks.add_task(push_plan, form.to_request())
        logger.info(f"Travel plan scheduled for {form.user_id}")
        return PlainTextResponse("Processed successfully")

    return router
