"""Mini README: FastAPI-powered expense form for Moneyflow.

Structure:
    * create_application - application factory wiring routes and templates.
    * Screen state - one controller per application, activated on creation.

The browser page mirrors the single mobile screen: the add-expense form,
the category picker with its sentinel option, the list of expenses and the
running total. The category management screen is a second page reached
from the sentinel in the modal flow. JSON endpoints expose the same data
for scripting and tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..categories import OpenManagementFlow, SelectionState
from ..configuration import CategoryFlow, MoneyflowSettings, get_settings
from ..controller import ExpenseFormController, build_controller
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


def create_application(
    settings: Optional[MoneyflowSettings] = None,
    controller: Optional[ExpenseFormController] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and the screen controller."""

    settings = settings or get_settings()
    app = FastAPI(title="Moneyflow Expense Tracker", version="0.3.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    controller = controller or build_controller(settings)
    screen_state: Dict[str, object] = {"revision": 0, "last_event": ""}

    @controller.on_change
    def _track_change(event: str) -> None:
        screen_state["revision"] = int(screen_state["revision"]) + 1
        screen_state["last_event"] = event

    controller.activate()
    app.state.controller = controller

    def _back_to_form() -> RedirectResponse:
        return RedirectResponse("/", status_code=303)

    def _after_choice(outcome: object) -> RedirectResponse:
        if isinstance(outcome, OpenManagementFlow) and controller.flow is CategoryFlow.MODAL:
            return RedirectResponse("/categories", status_code=303)
        return _back_to_form()

    @app.get("/", response_class=HTMLResponse)
    async def expense_screen(request: Request) -> HTMLResponse:
        """Render the form, the expense list and the total."""

        view = controller.view_model()
        LOGGER.debug("Rendering expense screen with %s rows", len(view["rows"]))
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "view": view,
                "adding_new": controller.selection.state is SelectionState.ADDING_NEW,
            },
        )

    @app.post("/expenses")
    async def add_expense(
        amount: str = Form(""),
        description: str = Form(""),
        category: Optional[str] = Form(None),
    ) -> RedirectResponse:
        """Apply the submitted fields and append the expense when valid."""

        controller.update_fields(amount=amount, description=description)
        if category is not None and category != controller.form.category:
            outcome = controller.choose_category(category)
            if isinstance(outcome, OpenManagementFlow):
                return _after_choice(outcome)
        record = controller.submit()
        if record is None:
            LOGGER.info("Expense submission blocked: %s", controller.form.as_dict())
        return _back_to_form()

    @app.post("/category")
    async def choose_category(name: str = Form("")) -> RedirectResponse:
        """Select a category or open the flow behind the sentinel."""

        return _after_choice(controller.choose_category(name))

    @app.post("/categories/new")
    async def confirm_new_category(name: str = Form("")) -> RedirectResponse:
        controller.confirm_new_category(name)
        return _back_to_form()

    @app.post("/categories/new/cancel")
    async def cancel_new_category() -> RedirectResponse:
        controller.cancel_category_flow()
        return _back_to_form()

    @app.get("/categories", response_class=HTMLResponse)
    async def manage_categories(request: Request) -> HTMLResponse:
        """Render the management screen with add, rename and delete forms."""

        return templates.TemplateResponse(
            request,
            "categories.html",
            {"categories": list(enumerate(controller.registry.names()))},
        )

    @app.post("/categories/add")
    async def add_category(name: str = Form("")) -> RedirectResponse:
        controller.add_category(name)
        return RedirectResponse("/categories", status_code=303)

    @app.post("/categories/{index}/rename")
    async def rename_category(index: int, new_name: str = Form("")) -> RedirectResponse:
        try:
            controller.rename_category(index, new_name)
        except IndexError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return RedirectResponse("/categories", status_code=303)

    @app.post("/categories/delete")
    async def delete_categories(indices: List[int] = Form([])) -> RedirectResponse:
        try:
            controller.delete_categories(indices)
        except IndexError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return RedirectResponse("/categories", status_code=303)

    @app.post("/categories/done")
    async def finish_managing() -> RedirectResponse:
        controller.finish_managing()
        return _back_to_form()

    @app.get("/api/expenses")
    async def list_expenses() -> JSONResponse:
        """Return the persisted rows and the formatted total."""

        return JSONResponse(controller.ledger.export_snapshot())

    @app.get("/api/state")
    async def screen_state_snapshot() -> JSONResponse:
        view = controller.view_model()
        view["revision"] = screen_state["revision"]
        view["last_event"] = screen_state["last_event"]
        return JSONResponse(view)

    return app
