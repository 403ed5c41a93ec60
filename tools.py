"""Tool catalog exposed through the MCP endpoint and the helpers that run the tools."""
import json
import logging

from pydantic import ValidationError

import cronogramas
from errors import CronogramasError, MissingParameterError, ToolNotFoundError
from schemas import (CreateCronogramaArgs, CreateTareasArgs, NoArguments,
                     TareasCronogramaArgs)

logger = logging.getLogger(__name__)

NO_ARGUMENTS_SCHEMA = {
    "type": "object",
    "properties": {},
    "required": [],
    "additionalProperties": False,
}

TOOLS = [
    {
        "name": "get_cronogramas",
        "description": "Returns the most recent schedules (cronogramas) in the database",
        "inputSchema": NO_ARGUMENTS_SCHEMA,
    },
    {
        "name": "get_projects",
        "description": "Returns every active project in the database",
        "inputSchema": NO_ARGUMENTS_SCHEMA,
    },
    {
        "name": "get_tareas_cronograma",
        "description": "Returns every task of a specific schedule, ordered by their order field",
        "inputSchema": {
            "type": "object",
            "properties": {
                "id_cronograma": {
                    "type": "integer",
                    "description": "Schedule ID",
                },
            },
            "required": ["id_cronograma"],
            "additionalProperties": False,
        },
    },
    {
        "name": "create_cronograma",
        "description": (
            "Creates a new schedule. The title can be given explicitly, otherwise it is "
            "generated from the date as 'Activities DD Month YYYY'"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "id_usuario": {
                    "type": "integer",
                    "description": "ID of the user owning the schedule (optional, defaults to 1)",
                },
                "fecha": {
                    "type": "string",
                    "description": "Date of the schedule in ISO format (YYYY-MM-DD HH:mm:ss)",
                },
                "titulo": {
                    "type": "string",
                    "description": "Title of the schedule (optional). Generated when missing",
                },
            },
            "required": ["fecha"],
            "additionalProperties": False,
        },
    },
    {
        "name": "create_tareas_cronograma",
        "description": (
            "Creates one or more tasks in a schedule. The order is assigned automatically, "
            "the hour uses military time (0-23) and the meridian is deprecated"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "id_cronograma": {
                    "type": "integer",
                    "description": "ID of the schedule receiving the tasks",
                },
                "tareas": {
                    "type": "array",
                    "description": "Tasks to create",
                    "items": {
                        "type": "object",
                        "properties": {
                            "descripcion": {
                                "type": "string",
                                "description": "Task description",
                            },
                            "hora": {
                                "type": "integer",
                                "description": "Military hour (0-23), defaults to 0",
                            },
                            "minuto": {
                                "type": "integer",
                                "description": "Minute (0-59), defaults to 0",
                            },
                            "meridiano": {
                                "type": "string",
                                "description": "AM or PM, defaults to AM (deprecated)",
                            },
                            "project_id": {
                                "type": "integer",
                                "description": "Project ID (optional, defaults to NULL)",
                            },
                        },
                        "required": ["descripcion"],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["id_cronograma", "tareas"],
            "additionalProperties": False,
        },
    },
]

PROJECTS_INSTRUCTIONS = """IMPORTANT - Project context:
When the user creates tasks, infer the project_id as follows:
1. If the user explicitly mentions a project, use its ID
2. If the user does NOT mention a project, use NULL (no project)
3. Always check that the project_id exists in the list of available projects"""


def projects_context(projects):
    if not projects:
        return "No projects available in the database."
    lines = [
        f"- ID: {p['id']}, Name: {p['name']}, Description: {p.get('descripcion') or 'N/A'}"
        for p in projects
    ]
    return "Available projects:\n" + "\n".join(lines)


def projects_instructions(context):
    return f"{PROJECTS_INSTRUCTIONS}\n\n{context}"


def _run_get_cronogramas(args):
    return cronogramas.get_cronogramas()


def _run_get_projects(args):
    return cronogramas.get_projects()


def _run_get_tareas_cronograma(args):
    return cronogramas.get_tareas_cronograma(args.id_cronograma)


def _run_create_cronograma(args):
    return cronogramas.create_cronograma(args)


def _run_create_tareas_cronograma(args):
    return cronogramas.create_tareas_cronograma(args.id_cronograma, args.tareas)


# name -> (argument model, runner)
HANDLERS = {
    "get_cronogramas": (NoArguments, _run_get_cronogramas),
    "get_projects": (NoArguments, _run_get_projects),
    "get_tareas_cronograma": (TareasCronogramaArgs, _run_get_tareas_cronograma),
    "create_cronograma": (CreateCronogramaArgs, _run_create_cronograma),
    "create_tareas_cronograma": (CreateTareasArgs, _run_create_tareas_cronograma),
}


def has_tool(name):
    return name in HANDLERS


def parse_arguments(name, arguments):
    """Validate raw tool arguments into the tool's argument model."""
    if name not in HANDLERS:
        raise ToolNotFoundError(name)
    model, _ = HANDLERS[name]
    if not isinstance(arguments, dict):
        arguments = {}
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        logger.debug(f"Invalid arguments for {name}: {e}")
        errors = e.errors()
        if model.required_message and all(_is_required_field(model, err["loc"]) for err in errors):
            raise MissingParameterError(model.required_message) from e
        raise MissingParameterError("; ".join(_describe(err) for err in errors)) from e


def _is_required_field(model, loc):
    """True for an error on a top-level required argument (missing or wrong type)."""
    if len(loc) != 1:
        return False
    field = model.model_fields.get(loc[0])
    return field is not None and field.is_required()


def _describe(error):
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}"


def execute_tool(name, arguments):
    args = parse_arguments(name, arguments)
    _, runner = HANDLERS[name]
    return runner(args)


def text_result(result):
    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(result, indent=2, ensure_ascii=False, default=str),
            }
        ]
    }


def error_result(error):
    return {
        "content": [
            {
                "type": "text",
                "text": f"Error: {error}",
            }
        ],
        "isError": True,
    }


def call_tool(name, arguments):
    """Run a tool and always return a result payload; failures become isError payloads."""
    try:
        return text_result(execute_tool(name, arguments))
    except CronogramasError as e:
        return error_result(e)
