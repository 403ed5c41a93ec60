import pytest

import tools
from errors import MissingParameterError


def test_call_tool_unknown_name_is_error_payload():
    result = tools.call_tool("bogus", {})

    assert result["isError"] is True
    assert result["content"][0]["text"] == "Error: Tool not found: bogus"


def test_call_tool_reports_bad_task_item_per_field():
    result = tools.call_tool("create_tareas_cronograma", {"id_cronograma": 3, "tareas": [{"hora": 3}]})

    assert result["isError"] is True
    assert result["content"][0]["text"] == "Error: tareas.0.descripcion: Field required"


def test_parse_arguments_bad_hour_names_the_field():
    with pytest.raises(MissingParameterError) as excinfo:
        tools.parse_arguments("create_tareas_cronograma", {
            "id_cronograma": 3,
            "tareas": [{"descripcion": "ok"}, {"descripcion": "bad", "hora": "x"}],
        })

    message = str(excinfo.value)
    assert message.startswith("tareas.1.hora: ")
    assert "Required parameters" not in message


def test_parse_arguments_missing_top_level_uses_required_message():
    with pytest.raises(MissingParameterError, match=r"^Required parameters: id_cronograma \(number\), tareas \(array\)$"):
        tools.parse_arguments("create_tareas_cronograma", {"tareas": []})

    with pytest.raises(MissingParameterError, match="^Required parameter: fecha$"):
        tools.parse_arguments("create_cronograma", {"fecha": "not a date"})


def test_parse_arguments_bad_optional_field_is_not_reported_as_missing():
    with pytest.raises(MissingParameterError, match="^titulo: "):
        tools.parse_arguments("create_cronograma", {"fecha": "2025-03-05", "titulo": ["x"]})


def test_projects_context_lists_each_project():
    context = tools.projects_context([
        {"id": 1, "name": "Thesis", "descripcion": "Writing"},
        {"id": 2, "name": "Garden", "descripcion": None},
    ])

    assert context == (
        "Available projects:\n"
        "- ID: 1, Name: Thesis, Description: Writing\n"
        "- ID: 2, Name: Garden, Description: N/A"
    )
