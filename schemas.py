from datetime import datetime
from typing import ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, PositiveInt, field_validator


def parse_fecha(value):
    """Accept 'YYYY-MM-DD', 'YYYY-MM-DD HH:MM:SS' or full ISO-8601 strings.

    Timezone offsets are dropped so the wall-clock date is what gets stored
    and used for the default title.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).strip())
    return parsed.replace(tzinfo=None)


class NewCronograma(BaseModel):
    """Input for a new schedule.

    - id_usuario: owner of the schedule, defaults to 1
    - fecha: date of the schedule, required
    - titulo: optional, an empty or missing title is derived from fecha
    """
    model_config = ConfigDict(extra='ignore')

    id_usuario: int = 1
    fecha: datetime
    titulo: Optional[str] = None

    @field_validator('id_usuario', mode='before')
    @classmethod
    def _default_usuario(cls, value):
        return 1 if value is None else value

    @field_validator('fecha', mode='before')
    @classmethod
    def _parse_fecha(cls, value):
        if value is None or value == '':
            raise ValueError('fecha is required')
        return parse_fecha(value)


class NewTarea(BaseModel):
    """Input for one task of a schedule.

    - descripcion: text of the task, required
    - hora: military hour (0-23), defaults to 0
    - minuto: minute (0-59), defaults to 0
    - meridiano: deprecated, defaults to 'AM' and has no effect
    - project_id: optional project, a falsy id is stored as NULL
    """
    model_config = ConfigDict(extra='ignore')

    descripcion: str
    hora: int = 0
    minuto: int = 0
    meridiano: str = 'AM'
    project_id: Optional[int] = None

    @field_validator('hora', 'minuto', 'meridiano', mode='before')
    @classmethod
    def _none_means_default(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator('project_id')
    @classmethod
    def _falsy_project(cls, value):
        return value or None


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra='ignore')

    required_message: ClassVar[str] = ''


class NoArguments(ToolArguments):
    pass


class TareasCronogramaArgs(ToolArguments):
    required_message: ClassVar[str] = 'Required parameter: id_cronograma'

    id_cronograma: PositiveInt


class CreateCronogramaArgs(NewCronograma):
    required_message: ClassVar[str] = 'Required parameter: fecha'


class CreateTareasArgs(ToolArguments):
    required_message: ClassVar[str] = 'Required parameters: id_cronograma (number), tareas (array)'

    id_cronograma: PositiveInt
    tareas: List[NewTarea]
