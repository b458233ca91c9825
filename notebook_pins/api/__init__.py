from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from notebook_pins.api.endpoints import get_endpoints_router
from notebook_pins.api.views import get_views_router
from notebook_pins.config import settings
from notebook_pins.events import WorkspaceEvents
from notebook_pins.panel.controller import PanelController
from notebook_pins.services.pins_service import PinsService


def create_app(
    *,
    service: PinsService,
    controller: PanelController,
    events: WorkspaceEvents,
) -> FastAPI:
    """Create FastAPI app."""

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await service.init()
        await controller.startup()
        yield
        events.debounced_refresh.cancel()
        await controller.notes_adapter.aclose()

    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        router=get_endpoints_router(service=service, controller=controller, events=events)
    )
    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
    app.include_router(router=get_views_router(controller=controller))

    return app
