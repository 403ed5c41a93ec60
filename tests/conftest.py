from datetime import datetime

import pytest

from app import create_app
from config import TestConfig
from models import Cronograma, Project, TareaCronograma, db


@pytest.fixture()
def app(tmp_path):
    app = create_app(TestConfig, LOGS_DIR=str(tmp_path / "logs"))
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def cronograma(app):
    row = Cronograma(id_usuario_FK=1, titulo="Existing", fecha=datetime(2025, 3, 1))
    db.session.add(row)
    db.session.commit()
    return row.id_cronograma_PK


@pytest.fixture()
def projects(app):
    rows = [
        Project(name="Thesis", descripcion="Writing", status=1, created_at=datetime(2025, 1, 1)),
        Project(name="Garden", descripcion=None, status=1, created_at=datetime(2025, 2, 1)),
        Project(name="Archived", descripcion="Old", status=0, created_at=datetime(2025, 3, 1)),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return [row.id for row in rows]


@pytest.fixture()
def add_tarea(app):
    def _add(id_cronograma, order, descripcion="existing"):
        db.session.add(TareaCronograma(
            id_cronograma_FK=id_cronograma,
            descripcion=descripcion,
            hora=8,
            minuto=0,
            order=order,
        ))
        db.session.commit()
    return _add
