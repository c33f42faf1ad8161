import pytest
from httpx import AsyncClient

from quizzical.repositories import CategoryRepository


def question_body(text: str = "What is the chemical symbol for gold?", category: str = "Science", correct=(False, True, False)):
    return {
        "text": text,
        "category": category,
        "choices": [{"title": f"{text} / {i}", "correct": flag} for i, flag in enumerate(correct)],
    }


@pytest.mark.asyncio
class TestQuestionRoutes:
    """
    Tests covering POST /questions and GET /questions.

    Fixtures used:
      - client: httpx AsyncClient over the ASGI app, sharing the test db_session.
      - category_repository: used to arrange and inspect category state directly.
    """

    async def test_create_question_returns_ids(self, client: AsyncClient):
        resp = await client.post("/questions", json=question_body())

        assert resp.status_code == 201
        body = resp.json()
        assert isinstance(body["id"], int)
        assert [c["correct"] for c in body["choices"]] == [False, True, False]
        assert all(isinstance(c["id"], int) for c in body["choices"])

    async def test_create_question_creates_category(self, client: AsyncClient, category_repository: CategoryRepository):
        await client.post("/questions", json=question_body(category="Astronomy"))

        assert [c.title for c in await category_repository.list_categories()] == ["Astronomy"]

    async def test_create_question_does_not_reactivate_category(self, client: AsyncClient,
                                                               category_repository: CategoryRepository):
        """
        Behavior:
          - Deactivate "Art", then post a question into it.
          - Expect 201 and "Art" still absent from the active listing.
        """
        await category_repository.upsert_category_and_set_active("Art", False)

        resp = await client.post("/questions", json=question_body(category="Art"))

        assert resp.status_code == 201
        assert await category_repository.list_categories() == []

    async def test_two_correct_choices_rejected(self, client: AsyncClient):
        resp = await client.post("/questions", json=question_body(correct=(True, True)))

        assert resp.status_code == 400
        assert resp.json() == {
            "code": "validation",
            "title": "Validation error",
            "detail": "Only one correct choice allowed",
            "source": {"pointer": "/choices"},
        }

    async def test_rejected_question_is_not_stored(self, client: AsyncClient):
        await client.post("/questions", json=question_body(correct=(True, True)))

        resp = await client.get("/questions", params={"category": "Science"})

        assert resp.json()["data"] == []

    async def test_malformed_body_is_request_invalid(self, client: AsyncClient):
        body = question_body()
        del body["text"]

        resp = await client.post("/questions", json=body)

        assert resp.status_code == 400
        payload = resp.json()
        assert payload["code"] == "request.invalid"
        assert payload["source"] == {"pointer": "/text"}

    async def test_list_questions_pages(self, client: AsyncClient):
        for number in range(1, 13):
            await client.post("/questions", json=question_body(text=f"Q{number}"))

        resp = await client.get("/questions", params={"category": "Science", "page": 2, "size": 5})

        assert resp.status_code == 200
        body = resp.json()
        assert [q["text"] for q in body["data"]] == ["Q6", "Q7", "Q8", "Q9", "Q10"]
        assert body["page"] == 2
        assert body["size"] == 5
        assert body["page_count"] == 3
        assert body["last"] is False
        assert all(len(q["choices"]) == 3 for q in body["data"])

    async def test_bad_paging_values_fall_back_to_defaults(self, client: AsyncClient):
        for number in range(1, 13):
            await client.post("/questions", json=question_body(text=f"Q{number}"))

        resp = await client.get("/questions", params={"category": "Science", "page": "abc", "size": "-4"})

        body = resp.json()
        assert body["page"] == 1
        assert body["size"] == 10
        assert body["page_count"] == 2
        assert body["last"] is False

    async def test_page_zero_is_kept_and_reads_first_page(self, client: AsyncClient):
        """
        Behavior:
          - 12 questions; request page=0 with size=5.
          - Expect page 0 echoed back with the first five questions.
        """
        for number in range(1, 13):
            await client.post("/questions", json=question_body(text=f"Q{number}"))

        resp = await client.get("/questions", params={"category": "Science", "page": 0, "size": 5})

        body = resp.json()
        assert body["page"] == 0
        assert [q["text"] for q in body["data"]] == ["Q1", "Q2", "Q3", "Q4", "Q5"]
        assert body["page_count"] == 3
        assert body["last"] is False

    async def test_size_zero_is_kept(self, client: AsyncClient):
        """
        Behavior:
          - 12 questions; request size=0.
          - Expect no data, and page_count computed with a limit of 1.
        """
        for number in range(1, 13):
            await client.post("/questions", json=question_body(text=f"Q{number}"))

        resp = await client.get("/questions", params={"category": "Science", "page": 1, "size": 0})

        body = resp.json()
        assert resp.status_code == 200
        assert body["data"] == []
        assert body["size"] == 0
        assert body["page_count"] == 12
        assert body["last"] is False

    async def test_empty_category(self, client: AsyncClient):
        resp = await client.get("/questions", params={"category": "Nothing"})

        assert resp.status_code == 200
        assert resp.json() == {"data": [], "page": 1, "size": 0, "page_count": 0, "last": True}

    async def test_missing_category_parameter(self, client: AsyncClient):
        resp = await client.get("/questions")

        assert resp.status_code == 400
        assert resp.json()["source"] == {"parameter": "category"}


@pytest.mark.asyncio
class TestCategoryRoutes:
    """
    Tests covering /categories.
    """

    async def test_create_then_exists(self, client: AsyncClient):
        first = await client.post("/categories", json={"title": "History"})
        second = await client.post("/categories", json={"title": "History"})

        assert first.status_code == 201
        assert first.json() == {"title": "History", "status": "created"}
        assert second.status_code == 200
        assert second.json() == {"title": "History", "status": "exists"}

    async def test_create_with_flag_overwrites(self, client: AsyncClient):
        await client.post("/categories", json={"title": "History"})
        await client.post("/categories", json={"title": "History", "active": False})

        resp = await client.get("/categories")

        assert resp.json() == {"categories": []}

    async def test_list_active_categories(self, client: AsyncClient):
        await client.post("/categories", json={"title": "History"})
        await client.post("/categories", json={"title": "Art", "active": False})

        resp = await client.get("/categories")

        assert resp.status_code == 200
        assert resp.json() == {"categories": [{"title": "History", "active": True}]}

    async def test_set_active(self, client: AsyncClient):
        await client.post("/categories", json={"title": "History"})

        resp = await client.put("/categories/History/active", params={"active": "false"})

        assert resp.status_code == 200
        assert resp.json() == {"active": False}

    async def test_set_active_unknown_category(self, client: AsyncClient):
        resp = await client.put("/categories/Nope/active", params={"active": "true"})

        assert resp.status_code == 404
        assert resp.json()["code"] == "not_found"

    async def test_set_active_requires_flag(self, client: AsyncClient):
        resp = await client.put("/categories/History/active")

        assert resp.status_code == 400
        assert resp.json()["source"] == {"parameter": "active"}

    async def test_set_active_rejects_non_boolean(self, client: AsyncClient):
        resp = await client.put("/categories/History/active", params={"active": "maybe"})

        assert resp.status_code == 400
        assert resp.json()["code"] == "request.invalid"
        assert resp.json()["source"] == {"parameter": "active"}


@pytest.mark.asyncio
class TestTransport:

    async def test_request_id_header_on_every_response(self, client: AsyncClient):
        ok = await client.get("/categories")
        missing = await client.put("/categories/Nope/active", params={"active": "true"})

        assert ok.headers.get("X-Request-ID")
        assert missing.headers.get("X-Request-ID")
        assert ok.headers["X-Request-ID"] != missing.headers["X-Request-ID"]

    async def test_cross_origin_requests_are_allowed(self, client: AsyncClient):
        resp = await client.get("/categories", headers={"Origin": "http://example.com"})

        assert resp.headers.get("access-control-allow-origin") == "*"
