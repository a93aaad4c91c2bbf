"""Tests for paper metadata routes and display titles."""
import uuid
from datetime import date

import pytest

from services.papers import format_paper_title, subject_abbreviation

from tests.fakes import USER_ID

NEW_PAPER = {
    "title": "  DSDV End Sem  ",
    "description": "",
    "class_level": "ece",
    "board": "university-vtu",
    "subject": "dsdv",
    "year": 2024,
    "exam_type": "sem_paper",
    "semester": 3,
    "file_url": "https://project.supabase.co/storage/v1/object/public/question-papers/u/1_a.pdf",
    "file_name": "dsdv.pdf",
}


def paper_row(**overrides) -> dict:
    row = {
        "id": str(uuid.uuid4()),
        "user_id": USER_ID,
        "title": "Physics Board 2023",
        "class_level": "12",
        "board": "cbse",
        "subject": "physics",
        "year": 2023,
        "exam_type": "board_exam",
        "file_url": "https://example.test/p.pdf",
        "file_name": "p.pdf",
        "status": "approved",
    }
    row.update(overrides)
    return row


class TestFormatPaperTitle:
    @pytest.mark.parametrize("subject,semester,year,expected", [
        ("dsdv", 3, 2025, "DSDV 3rd Sem 2025"),
        ("mathematics_1", 1, 2024, "MATH-1 1st Sem 2024"),
        ("nas", 2, 2023, "NAS 2nd Sem 2023"),
        ("coa", 4, 2023, "COA 4th Sem 2023"),
        ("physics", None, 2022, "PHY 2022"),
        ("robotics", None, 2022, "ROBOTICS 2022"),
    ])
    def test_titles(self, subject, semester, year, expected) -> None:
        assert format_paper_title(subject, semester, year) == expected

    def test_unknown_subject_is_upper_cased(self) -> None:
        assert subject_abbreviation("oops using java") == "OOPS USING JAVA"


class TestCreatePaper:
    def test_creates_row_for_caller(self, client, supabase) -> None:
        response = client.post("/api/papers", json=NEW_PAPER)

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "DSDV End Sem"
        assert body["description"] is None
        assert body["user_id"] == USER_ID
        assert body["status"] == "approved"
        assert body["semester"] == 3
        assert body["internal_number"] is None
        assert body["formatted_title"] == "DSDV 3rd Sem 2024"
        assert len(supabase.tables["question_papers"]) == 1

    def test_semester_required_for_sem_paper(self, client) -> None:
        response = client.post("/api/papers", json={**NEW_PAPER, "semester": None})
        assert response.status_code == 400
        assert response.json() == {"error": "Please select a semester for this exam type"}

    def test_internal_number_required_for_internals(self, client) -> None:
        response = client.post("/api/papers", json={**NEW_PAPER, "exam_type": "internals"})
        assert response.status_code == 400
        assert response.json() == {"error": "Please select the internal number (1, 2, or 3)"}

    def test_semester_dropped_for_other_exam_types(self, client, supabase) -> None:
        response = client.post("/api/papers", json={**NEW_PAPER, "exam_type": "board_exam", "internal_number": 2})
        assert response.status_code == 201
        stored = supabase.tables["question_papers"][0]
        assert stored["semester"] is None
        assert stored["internal_number"] is None

    @pytest.mark.parametrize("overrides", [
        {"title": "   "},
        {"title": "x" * 201},
        {"year": 1999},
        {"year": date.today().year + 2},
        {"semester": 9},
        {"file_url": ""},
    ])
    def test_invalid_fields(self, client, supabase, overrides) -> None:
        response = client.post("/api/papers", json={**NEW_PAPER, **overrides})
        assert response.status_code == 400
        assert "error" in response.json()
        assert supabase.tables.get("question_papers", []) == []


class TestBrowse:
    def test_filters_and_status(self, client, supabase) -> None:
        supabase.tables["question_papers"] = [
            paper_row(title="Physics 2023"),
            paper_row(title="Physics 2022", year=2022),
            paper_row(title="Chemistry 2023", subject="chemistry"),
            paper_row(title="Pending physics", status="pending"),
        ]
        response = client.get("/api/papers", params={"subject": "physics", "year": 2023})

        assert response.status_code == 200
        body = response.json()
        assert [p["title"] for p in body] == ["Physics 2023"]
        assert body[0]["formatted_title"] == "PHY 2023"

    def test_search_is_escaped_and_truncated(self, client, supabase) -> None:
        client.get("/api/papers", params={"q": "100%_done" + "x" * 200})
        ops = supabase.queries[-1].ops
        ilike = [op for op in ops if op[0] == "ilike"]
        assert ilike[0][1] == "title"
        pattern = ilike[0][2]
        assert pattern.startswith("%100\\%\\_done")
        assert len(pattern) == len("%%") + 100 + 2

    def test_limit_bounds(self, client) -> None:
        assert client.get("/api/papers", params={"limit": 0}).status_code == 400
        assert client.get("/api/papers", params={"limit": 101}).status_code == 400

    def test_get_by_id(self, client, supabase) -> None:
        row = paper_row()
        supabase.tables["question_papers"] = [row, paper_row(id=str(uuid.uuid4()), status="pending")]

        assert client.get(f"/api/papers/{row['id']}").json()["id"] == row["id"]
        pending_id = supabase.tables["question_papers"][1]["id"]
        assert client.get(f"/api/papers/{pending_id}").status_code == 404
        missing = client.get(f"/api/papers/{uuid.uuid4()}")
        assert missing.status_code == 404
        assert missing.json() == {"error": "Paper not found"}

    def test_my_papers_include_pending(self, client, supabase) -> None:
        supabase.tables["question_papers"] = [
            paper_row(status="pending"),
            paper_row(user_id=str(uuid.uuid4())),
        ]
        body = client.get("/api/papers/mine").json()
        assert len(body) == 1
        assert body[0]["status"] == "pending"
