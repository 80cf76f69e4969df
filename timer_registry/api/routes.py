"""Timer resource endpoints."""
from fastapi import APIRouter, Depends, Request

from ..controller import TimerController
from ..models import Timer

router = APIRouter()


def get_controller(request: Request) -> TimerController:
    return request.app.state.controller


@router.post(
    "/timers",
    response_model=Timer,
    response_model_by_alias=True,
    status_code=201,
)
async def create_timer(
    request: Request,
    controller: TimerController = Depends(get_controller),
):
    """Create a timer; the body is decoded by the controller so decode errors map to 400."""
    return await controller.create(await request.body())


@router.get("/timers", response_model=list[Timer], response_model_by_alias=True)
async def list_timers(controller: TimerController = Depends(get_controller)):
    return await controller.list_timers()


@router.put("/timers/{timer_id}", response_model=Timer, response_model_by_alias=True)
async def replace_timer(
    timer_id: str,
    request: Request,
    controller: TimerController = Depends(get_controller),
):
    return await controller.replace(timer_id, await request.body())


@router.get("/health")
async def health():
    return {"status": "ok"}
