import json
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from admin_console.domain.exceptions import NotFoundError
from admin_console.domain.query import ListQuery
from admin_console.domain.surveys.models import SurveyForm
from admin_console.domain.surveys.repo import SurveysRepository
from admin_console.domain.surveys.schemas import SurveyCreateRequest, SurveyUpdateRequest

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

FORM = {
    "title": "Feedback",
    "fields": [
        {"id": "q1", "type": "text", "label": "Name", "required": True},
        {"id": "q2", "type": "select", "label": "Team", "options": ["A", "B"]},
    ],
}


def _survey_row(**overrides):
    row = {
        "uuid": uuid4(),
        "name": "Retro",
        "form": json.dumps(FORM),
        "set_point": None,
        "status": "active",
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


def test_form_accepts_well_formed_definition():
    form = SurveyForm.model_validate(FORM)
    assert [field.id for field in form.fields] == ["q1", "q2"]
    assert form.fields[1].required is False


def test_form_rejects_duplicate_field_ids():
    with pytest.raises(PydanticValidationError) as excinfo:
        SurveyForm.model_validate({"fields": [{"id": "a", "type": "text", "label": "A"}] * 2})
    assert "Duplicate form field id 'a'" in str(excinfo.value)


def test_form_choice_fields_need_options():
    with pytest.raises(PydanticValidationError) as excinfo:
        SurveyForm.model_validate({"fields": [{"id": "a", "type": "radio", "label": "Pick"}]})
    assert "needs at least one option" in str(excinfo.value)


def test_form_rejects_unknown_field_type():
    with pytest.raises(PydanticValidationError):
        SurveyForm.model_validate({"fields": [{"id": "a", "type": "slider", "label": "A"}]})


def test_create_request_requires_form_object():
    with pytest.raises(PydanticValidationError) as excinfo:
        SurveyCreateRequest.model_validate({"name": "Retro", "form": "not-json"})
    assert "Form must be a valid JSON object" in str(excinfo.value)


def test_update_request_changes_carry_complete_form():
    payload = SurveyUpdateRequest.model_validate({"form": FORM})
    changes = payload.changes()
    assert set(changes) == {"form"}
    assert changes["form"]["fields"][0]["required"] is True
    assert changes["form"]["fields"][0]["options"] is None


@pytest.mark.asyncio
async def test_list_surveys_search_and_status(stub_pool, stub_conn):
    stub_conn.queue("fetch", [_survey_row(events="[]")])
    stub_conn.queue("fetchval", 1)

    page = await SurveysRepository(stub_pool).list_surveys(
        ListQuery(search="retro", filters={"status": "inactive"})
    )

    assert "WHERE (s.name ILIKE $1 OR s.set_point ILIKE $1) AND s.status = $2" in stub_conn.queries("fetch")[0]
    assert page.items[0].form["title"] == "Feedback"
    assert page.items[0].events == []


@pytest.mark.asyncio
async def test_create_survey_serialises_form_as_jsonb(stub_pool, stub_conn):
    stub_conn.queue("fetchrow", _survey_row())

    survey = await SurveysRepository(stub_pool).create_survey(name="Retro", form=FORM)

    assert "$2::jsonb" in stub_conn.queries("fetchrow")[0]
    assert json.loads(stub_conn.args_for("fetchrow")[0][1]) == FORM
    assert survey.form == FORM


@pytest.mark.asyncio
async def test_update_survey_casts_form(stub_pool, stub_conn):
    stub_conn.queue("fetchrow", _survey_row())
    await SurveysRepository(stub_pool).update_survey(uuid4(), {"form": FORM, "status": "completed"})
    assert "SET form = $1::jsonb, status = $2, updated_at = NOW()" in stub_conn.queries("fetchrow")[0]


@pytest.mark.asyncio
async def test_get_survey_missing(stub_pool, stub_conn):
    with pytest.raises(NotFoundError) as excinfo:
        await SurveysRepository(stub_pool).get_survey(uuid4())
    assert excinfo.value.detail == "Survey not found"
