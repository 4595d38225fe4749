"""
Test Suite for the CLI and HTTP Service
=======================================
Integration tests for the command-line and Flask entry points.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from question_parser.cli import cli
from question_parser.engine import parse_question
from question_parser.server import create_app


TRUE_FALSE_TEXT = "A lei é clara.\n\nComentários: Correto. Art. 5."
MULTIPLE_CHOICE_TEXT = "Pergunta X\na) Op1\nb) Op2\nComentários: Gabarito: B"
BATCH_TEXT = f"{TRUE_FALSE_TEXT}\n\n\n{MULTIPLE_CHOICE_TEXT}\n\n\nPergunta\na) Um\nb) Dois"


# ═══════════════════════════════════════════════════════════════════════════════
# CLI TESTS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    """Test the click command group."""

    def test_parse_json_from_stdin(self, runner):
        result = runner.invoke(cli, ["parse", "--json-output", "-"], input=MULTIPLE_CHOICE_TEXT)

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["kind"] == "multiple_choice"
        assert data["correct_index"] == 1
        assert [alt["text"] for alt in data["alternatives"]] == ["Op1", "Op2"]

    def test_parse_file(self, runner, tmp_path):
        source = tmp_path / "questao.txt"
        source.write_text(TRUE_FALSE_TEXT, encoding="utf-8")

        result = runner.invoke(cli, ["parse", "--json-output", str(source)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["kind"] == "true_false"
        assert data["true_false_answer"] == "true"

    def test_parse_table_output(self, runner):
        result = runner.invoke(cli, ["parse", "-"], input=MULTIPLE_CHOICE_TEXT)

        assert result.exit_code == 0
        assert "Parsed Question" in result.output
        assert "Op2" in result.output

    def test_parse_flags_review(self, runner):
        result = runner.invoke(cli, ["parse", "-"], input="Pergunta\na) Um\nb) Dois")

        assert result.exit_code == 0
        assert "unresolved_answer" in result.output

    def test_parse_empty_input(self, runner):
        result = runner.invoke(cli, ["parse", "-"], input="  \n\n")

        assert result.exit_code == 1
        assert "Input text is empty" in result.output

    def test_parse_empty_input_json(self, runner):
        result = runner.invoke(cli, ["parse", "--json-output", "-"], input="")

        assert result.exit_code == 1
        assert json.loads(result.output) == {"error": "Input text is empty"}

    def test_batch_json(self, runner):
        result = runner.invoke(cli, ["batch", "--json-output", "-j", "2", "-"], input=BATCH_TEXT)

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["items"]) == 3
        assert data["validation"]["storable"] == 2
        assert data["validation"]["questions_missing_answer"] == [2]

    def test_batch_summary(self, runner):
        result = runner.invoke(cli, ["batch", "-"], input=BATCH_TEXT)

        assert result.exit_code == 0
        assert "Batch Import Summary" in result.output
        assert "Validation Report" in result.output

    def test_batch_no_questions(self, runner):
        result = runner.invoke(cli, ["batch", "-"], input="\n\n\n")

        assert result.exit_code == 0
        assert "No questions found" in result.output

    def test_validate_question_json(self, runner, tmp_path):
        path = tmp_path / "questao.json"
        question = parse_question(MULTIPLE_CHOICE_TEXT)
        path.write_text(json.dumps(question.model_dump(mode="json")), encoding="utf-8")

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 0
        assert "ready to save" in result.output

    def test_validate_batch_json(self, runner, tmp_path):
        batch = runner.invoke(cli, ["batch", "--json-output", "-"], input=BATCH_TEXT)
        path = tmp_path / "lote.json"
        path.write_text(batch.output, encoding="utf-8")

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 0
        assert "Mark one alternative as correct" in result.output

    def test_format(self, runner):
        result = runner.invoke(cli, ["format"])

        assert result.exit_code == 0
        assert "Gabarito: D" in result.output
        assert "Comentários:" in result.output


# ═══════════════════════════════════════════════════════════════════════════════
# HTTP SERVICE TESTS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def client():
    app = create_app({"TESTING": True, "LOG_LEVEL": "ERROR"})
    return app.test_client()


class TestServer:
    """Test the Flask endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_info(self, client):
        data = client.get("/api/info").get_json()
        assert data["question_kinds"] == ["true_false", "multiple_choice"]

    def test_format(self, client):
        data = client.get("/api/format").get_json()
        assert "Gabarito" in data["guide"]

    def test_parse_json_body(self, client):
        response = client.post("/api/parse", json={"text": MULTIPLE_CHOICE_TEXT})

        assert response.status_code == 200
        data = response.get_json()
        assert data["kind"] == "multiple_choice"
        assert data["alternatives"][1] == {"text": "Op2", "is_correct": True}
        assert data["review_flags"] == []

    def test_parse_plain_text_body(self, client):
        response = client.post(
            "/api/parse",
            data=TRUE_FALSE_TEXT.encode("utf-8"),
            content_type="text/plain; charset=utf-8",
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["statement"] == "A lei é clara."
        assert data["true_false_answer"] == "true"

    def test_parse_empty_text(self, client):
        response = client.post("/api/parse", json={"text": "\n\n\n"})

        assert response.status_code == 422
        assert response.get_json()["error"] == "Input text is empty"

    def test_parse_missing_text(self, client):
        response = client.post("/api/parse", json={"texto": "x"})
        assert response.status_code == 400

    def test_batch(self, client):
        response = client.post("/api/batch", json={"text": BATCH_TEXT})

        assert response.status_code == 200
        data = response.get_json()
        assert [item["status"] for item in data["items"]] == ["parsed"] * 3
        assert data["validation"]["total_questions"] == 3

    def test_batch_empty(self, client):
        response = client.post("/api/batch", json={"text": "   "})
        assert response.status_code == 422

    def test_validate_storable(self, client):
        question = parse_question(MULTIPLE_CHOICE_TEXT)
        response = client.post(
            "/api/validate",
            json={"question": question.model_dump(mode="json")},
        )

        assert response.status_code == 200
        assert response.get_json() == {"storable": True, "issues": []}

    def test_validate_manual_correction(self, client):
        question = parse_question("Afirmação solta.").model_dump(mode="json")
        assert client.post(
            "/api/validate", json={"question": question}
        ).get_json()["storable"] is False

        question["true_false_answer"] = "false"
        assert client.post(
            "/api/validate", json={"question": question}
        ).get_json()["storable"] is True

    def test_validate_invalid_question(self, client):
        response = client.post(
            "/api/validate",
            json={"question": {"statement": "x", "kind": "essay"}},
        )

        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid question"

    def test_validate_missing_question(self, client):
        response = client.post("/api/validate", json={})
        assert response.status_code == 400
