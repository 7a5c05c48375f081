"""Mini README: Tests for the FastAPI expense form.

Uses ``TestClient`` against an application built with a temporary data
directory, checking the HTML screens, the submit gate, the category
flows and the JSON endpoints.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from moneyflow.configuration import CategoryFlow, MoneyflowSettings
from moneyflow.interface import create_application


@pytest.fixture()
def settings(tmp_path) -> MoneyflowSettings:
    return MoneyflowSettings(data_directory=tmp_path)


@pytest.fixture()
def client(settings) -> TestClient:
    return TestClient(create_application(settings=settings))


def test_screen_renders_defaults(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "Add Expense" in response.text
    assert "Manage Categories" in response.text
    assert "$0.00" in response.text


def test_posting_valid_expense_lists_it(client) -> None:
    response = client.post(
        "/expenses",
        data={"amount": "50.75", "description": "Lunch", "category": "Food"},
    )

    assert response.status_code == 200
    assert "Lunch" in response.text
    assert "$50.75" in response.text
    assert client.get("/api/expenses").json()["total"] == "$50.75"


def test_blocked_expense_keeps_typed_values(client) -> None:
    client.post("/expenses", data={"amount": "abc", "description": "Lunch", "category": "Food"})

    state = client.get("/api/state").json()
    assert state["rows"] == []
    assert state["form"]["amount"] == "abc"
    assert state["form"]["amount_invalid"] is True
    assert state["form"]["can_submit"] is False


def test_sentinel_opens_management_screen(client) -> None:
    response = client.post("/category", data={"name": "Manage Categories"}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/categories"
    assert client.get("/api/state").json()["form"]["category"] == ""


def test_manage_categories_add_rename_delete(client) -> None:
    client.post("/categories/add", data={"name": "Travel"})
    client.post("/categories/0/rename", data={"new_name": "Meals"})
    page = client.post("/categories/delete", data={"indices": ["1", "2"]})

    assert page.status_code == 200
    assert client.get("/api/state").json()["categories"] == ["Meals", "Shopping", "Other", "Travel"]
    assert client.post("/categories/42/rename", data={"new_name": "X"}).status_code == 404


def test_expenses_survive_restart_but_categories_reset(settings) -> None:
    first = TestClient(create_application(settings=settings))
    first.post("/categories/add", data={"name": "Travel"})
    first.post("/expenses", data={"amount": "200.00", "description": "Flight", "category": "Travel"})

    second = TestClient(create_application(settings=settings))
    state = second.get("/api/state").json()

    assert [row["amount"] for row in state["rows"]] == ["$200.00"]
    assert "Travel" not in state["categories"]


def test_inline_flow_adds_category_in_form(tmp_path) -> None:
    settings = MoneyflowSettings(data_directory=tmp_path, category_flow=CategoryFlow.INLINE)
    client = TestClient(create_application(settings=settings))

    page = client.post("/category", data={"name": "Add New Category"})
    assert "New Category Name" in page.text

    client.post("/categories/new", data={"name": "Travel"})
    client.post("/expenses", data={"amount": "200", "description": "Flight", "category": "Travel"})

    rows = client.get("/api/expenses").json()["records"]
    assert [(row["description"], row["category"]) for row in rows] == [("Flight", "Travel")]
