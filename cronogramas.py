"""Data access for schedules (cronogramas), their tasks and projects.

Every operation runs inside store_session(), which hands out the
Flask-SQLAlchemy session and returns its pooled connection on every exit
path. Database failures are re-raised as StoreError with an
operation-specific prefix.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from errors import MissingParameterError, StoreError
from models import Cronograma, Project, TareaCronograma, db

logger = logging.getLogger(__name__)

MAX_CRONOGRAMAS = 15

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)


@contextmanager
def store_session(action):
    session = db.session
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.debug(f"Store failure while {action}: {e}")
        raise StoreError(f"error {action}: {e}") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def default_titulo(fecha):
    """Title used when a schedule is created without one, e.g. 'Activities 5 March 2025'."""
    return f"Activities {fecha.day} {MONTH_NAMES[fecha.month - 1]} {fecha.year}"


def get_cronogramas():
    with store_session('retrieving schedules') as session:
        rows = session.scalars(
            select(Cronograma).order_by(Cronograma.fecha.desc()).limit(MAX_CRONOGRAMAS)
        ).all()
        return [row.to_dict() for row in rows]


def get_projects():
    with store_session('retrieving projects') as session:
        rows = session.scalars(
            select(Project).where(Project.status == 1).order_by(Project.created_at.desc())
        ).all()
        return [row.to_dict() for row in rows]


def get_tareas_cronograma(id_cronograma):
    if not id_cronograma:
        raise MissingParameterError('Required parameter: id_cronograma')

    with store_session('retrieving schedule tasks') as session:
        rows = session.scalars(
            select(TareaCronograma)
            .where(TareaCronograma.id_cronograma_FK == id_cronograma)
            .order_by(TareaCronograma.order.asc())
        ).all()
        return [row.to_dict() for row in rows]


def create_cronograma(new_cronograma):
    """Insert a schedule from a NewCronograma and return the stored record."""
    titulo = new_cronograma.titulo or default_titulo(new_cronograma.fecha)

    with store_session('creating schedule') as session:
        cronograma = Cronograma(
            id_usuario_FK=new_cronograma.id_usuario,
            titulo=titulo,
            fecha=new_cronograma.fecha,
        )
        session.add(cronograma)
        session.flush()
        created = cronograma.to_dict()

    logger.info(f"Created cronograma {created['id_cronograma_PK']}: {titulo}")
    return created


def create_tareas_cronograma(id_cronograma, tareas):
    """Insert the NewTarea items in input order.

    Orders continue from the current maximum of the schedule (1 for an
    empty schedule) and increase by one per task. All inserts share one
    transaction.
    """
    if not id_cronograma:
        raise MissingParameterError('Required parameters: id_cronograma (number), tareas (array)')

    created = []
    with store_session('creating tasks') as session:
        max_order = session.scalar(
            select(func.max(TareaCronograma.order))
            .where(TareaCronograma.id_cronograma_FK == id_cronograma)
        )
        next_order = (max_order or 0) + 1

        for tarea in tareas:
            row = TareaCronograma(
                id_cronograma_FK=id_cronograma,
                descripcion=tarea.descripcion,
                hora=tarea.hora,
                minuto=tarea.minuto,
                meridiano=tarea.meridiano,
                estado=0,
                project_id=tarea.project_id,
                order=next_order,
            )
            session.add(row)
            session.flush()
            created.append(row.to_dict())
            next_order += 1

    logger.info(f"Created {len(created)} tareas in cronograma {id_cronograma}")
    return created
